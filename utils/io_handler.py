"""
File I/O utilities for CSV, TSV and Excel files
Reads tables as plain strings and writes exported records back out
"""

import io
import logging
from typing import Dict, List, Tuple

import pandas as pd

logger = logging.getLogger(__name__)

Records = List[Dict[str, str]]


class FileHandler:
    SUPPORTED_EXTENSIONS = ('csv', 'tsv', 'xlsx', 'xls')

    def __init__(self, encoding: str = 'utf-8'):
        self.encoding = encoding

    def load_file(self, uploaded_file) -> Tuple[List[str], Records]:
        """
        Load an uploaded file (anything with .name and .getvalue()) and return
        (columns, records). Every cell comes back as a string, blank lines are skipped.
        """
        file_extension = uploaded_file.name.lower().split('.')[-1]

        if file_extension == 'csv':
            df = self._load_delimited(uploaded_file, ',', 'CSV')
        elif file_extension == 'tsv':
            df = self._load_delimited(uploaded_file, '\t', 'TSV')
        elif file_extension in ['xlsx', 'xls']:
            df = self._load_excel(uploaded_file)
        else:
            raise ValueError(f"Unsupported file format: {file_extension}")

        columns, records = self._to_records(df)
        logger.info(f"Loaded {uploaded_file.name}: {len(records)} rows, {len(columns)} columns")
        return columns, records

    def _read_bytes(self, uploaded_file) -> bytes:
        uploaded_file.seek(0)
        return uploaded_file.getvalue()

    def _load_delimited(self, uploaded_file, sep: str, label: str) -> pd.DataFrame:
        try:
            file_content = self._read_bytes(uploaded_file)
            if isinstance(file_content, bytes):
                file_content = file_content.decode(self.encoding)

            return pd.read_csv(
                io.StringIO(file_content),
                sep=sep,
                dtype=str,  # keep everything as text
                keep_default_na=False,  # don't turn "NA" / "" into NaN
                skip_blank_lines=True,
            )
        except Exception as e:
            raise ValueError(f"Error reading {label} file: {str(e)}") from e

    def _load_excel(self, uploaded_file) -> pd.DataFrame:
        """First sheet only; the engine works on one table at a time"""
        try:
            excel_buffer = io.BytesIO(self._read_bytes(uploaded_file))
            df = pd.read_excel(excel_buffer, sheet_name=0, dtype=str,
                               keep_default_na=False, engine='openpyxl')
            return df.dropna(how='all').fillna("")
        except Exception as e:
            raise ValueError(f"Error reading Excel file: {str(e)}") from e

    @staticmethod
    def _to_records(df: pd.DataFrame) -> Tuple[List[str], Records]:
        df.columns = [str(col) for col in df.columns]
        columns = list(df.columns)
        records = [
            {col: "" if value is None else str(value) for col, value in zip(columns, values)}
            for values in df.itertuples(index=False, name=None)
        ]
        return columns, records

    def save_to_csv(self, records: Records, columns: List[str]) -> str:
        """Serialize records to CSV text, keeping the given column order"""
        return pd.DataFrame(records, columns=columns).to_csv(index=False)

    def save_to_excel(self, records: Records, columns: List[str], sheet_name: str = 'validated') -> bytes:
        output = io.BytesIO()
        with pd.ExcelWriter(output, engine='openpyxl') as writer:
            pd.DataFrame(records, columns=columns).to_excel(writer, sheet_name=sheet_name, index=False)
        return output.getvalue()
