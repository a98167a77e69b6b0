"""
Data model for the email hygiene engine
Rows carry the working email, its classification and the raw record it came from
"""

import copy
from dataclasses import dataclass, field
from typing import Dict, List, Optional


# Row statuses. PENDING only exists inside a validation run.
PENDING = "pending"
VALID = "valid"
FIXABLE = "fixable"
INVALID = "invalid"

TERMINAL_STATUSES = (VALID, FIXABLE, INVALID)

# Error kinds, in pipeline order
EMPTY = "empty"
MISSING_AT = "missing_at"
INVALID_FORMAT = "invalid_format"
CONTAINS_SPACES = "contains_spaces"
MULTIPLE_AT = "multiple_at"
CONTAINS_WWW = "contains_www"
DOMAIN_TYPO = "domain_typo"
INVALID_TLD = "invalid_tld"
TLD_TYPO = "tld_typo"
DOMAIN_SIMILARITY = "domain_similarity"

ERROR_LABELS: Dict[str, str] = {
    EMPTY: "Empty email",
    MISSING_AT: "Missing @ symbol",
    INVALID_FORMAT: "Invalid email format",
    CONTAINS_SPACES: "Contains spaces",
    MULTIPLE_AT: "Multiple @ symbols",
    CONTAINS_WWW: "Contains www.",
    DOMAIN_TYPO: "Domain typo",
    INVALID_TLD: "Invalid/missing domain extension",
    TLD_TYPO: "Domain extension typo",
    DOMAIN_SIMILARITY: "Looks like a popular domain",
}


def error_label(error_kind: Optional[str]) -> str:
    if not error_kind:
        return ""
    return ERROR_LABELS.get(error_kind, "Unknown error")


def normalize_email(value: Optional[str]) -> str:
    """Working form of an email: trimmed and lower-cased"""
    if value is None:
        return ""
    return str(value).strip().lower()


@dataclass(frozen=True)
class Classification:
    """Outcome of running one email through the defect pipeline"""
    status: str
    error_kind: Optional[str] = None
    suggestion: Optional[str] = None


@dataclass
class Row:
    """
    Single name/email record with its classification and raw source data
    """
    id: int
    name: str
    email: str
    original_email: str
    original_row: Dict[str, str]
    source_row: Dict[str, str] = field(repr=False, default_factory=dict)
    status: str = PENDING
    error_kind: Optional[str] = None
    suggestion: Optional[str] = None

    def apply_classification(self, result: Classification):
        self.status = result.status
        self.error_kind = result.error_kind
        self.suggestion = result.suggestion

    def clear_classification(self):
        self.status = PENDING
        self.error_kind = None
        self.suggestion = None

    def restore(self):
        """Back to the ingestion-time email and raw record, unclassified"""
        self.email = self.original_email
        self.original_row = copy.deepcopy(self.source_row)
        self.clear_classification()

    def is_fixable(self) -> bool:
        return self.status == FIXABLE and bool(self.suggestion)


@dataclass
class Stats:
    total: int = 0
    valid: int = 0
    fixable: int = 0
    invalid: int = 0
    error_counts: Dict[str, int] = field(default_factory=dict)


@dataclass
class Dataset:
    """
    One loaded table. Owns its rows; nothing is shared between datasets.
    """
    columns: List[str]
    email_column: str
    name_column: str
    rows: List[Row] = field(default_factory=list)
    stats: Stats = field(default_factory=Stats)
    validating: bool = False

    def __post_init__(self):
        self._index: Dict[int, Row] = {row.id: row for row in self.rows}

    def get_row(self, row_id: int) -> Optional[Row]:
        row = self._index.get(row_id)
        if row is None:
            # rows may have been appended after construction
            self._index = {r.id: r for r in self.rows}
            row = self._index.get(row_id)
        return row

    def fixable_rows(self) -> List[Row]:
        return [row for row in self.rows if row.is_fixable()]
