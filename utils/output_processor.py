"""
Output processing utilities
Projects rows back onto their original records and builds download reports
"""

import datetime
from typing import Dict, Iterable, List, Optional

import pandas as pd

from core.models import Dataset, Row, error_label, INVALID


class OutputProcessor:
    """
    Rebuilds the full table for export, with only the email column rewritten,
    plus the changes / rejected reports shown next to it
    """

    def project(self, dataset: Dataset) -> List[Dict[str, str]]:
        """
        One record per row, in row order. Keys follow dataset.columns; the email
        column carries the row's current email, every other value passes through.
        """
        records = []
        for row in dataset.rows:
            record = {col: row.original_row.get(col, "") for col in dataset.columns}
            record[dataset.email_column] = row.email
            records.append(record)
        return records

    def changes_report(self, dataset: Dataset) -> pd.DataFrame:
        """Rows whose email no longer matches what was ingested"""
        changes = [{
            'row_id': row.id,
            'name': row.name,
            'original_email': row.original_email,
            'new_email': row.email,
        } for row in dataset.rows if row.email != row.original_email]
        return pd.DataFrame(changes, columns=['row_id', 'name', 'original_email', 'new_email'])

    def rejected_report(self, dataset: Dataset) -> pd.DataFrame:
        """Rows still invalid, with the reason"""
        rejected = [{
            'row_id': row.id,
            'name': row.name,
            'email': row.email,
            'error_type': row.error_kind,
            'reason': error_label(row.error_kind),
        } for row in dataset.rows if row.status == INVALID]
        return pd.DataFrame(rejected, columns=['row_id', 'name', 'email', 'error_type', 'reason'])

    def rows_dataframe(self, rows: Iterable[Row]) -> pd.DataFrame:
        """Operator table view: one line per row with its classification"""
        view = [{
            'id': row.id,
            'name': row.name,
            'email': row.email,
            'status': row.status,
            'issue': error_label(row.error_kind),
            'suggestion': row.suggestion or "",
        } for row in rows]
        return pd.DataFrame(view, columns=['id', 'name', 'email', 'status', 'issue', 'suggestion'])

    @staticmethod
    def export_filename(today: Optional[datetime.date] = None, extension: str = "csv") -> str:
        today = today or datetime.date.today()
        return f"validated_emails_{today.isoformat()}.{extension}"


def filter_rows(rows: Iterable[Row], term: str) -> List[Row]:
    """
    Case-insensitive search over name, current email, original email and status
    """
    rows = list(rows)
    term = (term or "").strip().lower()
    if not term:
        return rows

    return [
        row for row in rows
        if term in row.name.lower()
        or term in row.email.lower()
        or (row.original_email and term in row.original_email.lower())
        or (row.status and term in row.status.lower())
    ]
