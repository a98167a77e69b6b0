"""
Engine error types
Classification never raises; only ingestion, busy datasets and unknown rows do
"""


class IngestError(ValueError):
    """Raised when the supplied columns cannot yield a name/email pair"""

    kind = "missing_name_or_email_column"

    def __init__(self, message: str = "CSV must contain at least two columns for name and email"):
        super().__init__(message)


class BusyError(RuntimeError):
    """Raised when a dataset is touched while a validation run on it is incomplete"""


class UnknownRowError(KeyError):
    def __init__(self, row_id: int):
        super().__init__(row_id)
        self.row_id = row_id

    def __str__(self) -> str:
        return f"No row with id {self.row_id}"
