"""
Header detection utilities
Picks the name and email columns from a list of headers
"""

from typing import Optional, Sequence, Tuple

from core.errors import IngestError


class EmailColumnDetector:
    def __init__(self, email_keyword: str = "email", name_keyword: str = "name"):
        # Case-insensitive substring matches on the header text
        self.email_keyword = email_keyword.lower()
        self.name_keyword = name_keyword.lower()

    def detect_email_column(self, columns: Sequence[str]) -> Optional[str]:
        """First header containing "email", or None"""
        for col in columns:
            if self.email_keyword in str(col).strip().lower():
                return col
        return None

    def detect_name_column(self, columns: Sequence[str], exclude: Optional[str] = None) -> Optional[str]:
        """First header containing "name", skipping the column already used for email"""
        for col in columns:
            if col == exclude:
                continue
            if self.name_keyword in str(col).strip().lower():
                return col
        return None

    def detect_columns(self, columns: Sequence[str]) -> Tuple[str, str]:
        """
        Returns (name_column, email_column).
        Falls back to the second column for email and the first for name.
        Raises IngestError if fewer than two columns are available.
        """
        columns = list(columns)
        if len(columns) < 2:
            raise IngestError()

        email_col = self.detect_email_column(columns)
        if email_col is None:
            email_col = columns[1]

        name_col = self.detect_name_column(columns, exclude=email_col)
        if name_col is None:
            name_col = columns[0]

        return name_col, email_col
