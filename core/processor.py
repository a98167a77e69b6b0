"""
Operator actions on a validated dataset
Each action leaves rows and stats consistent; stats are recomputed, never patched
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .email_hygiene_engine import classify_manual_edit
from .errors import BusyError, UnknownRowError
from .models import Dataset, Row, Stats, normalize_email, VALID
from .scheduler import BatchValidationScheduler, ProgressCallback
from .stats import compute_stats

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Edit:
    row_id: int
    text: str


@dataclass(frozen=True)
class AcceptSuggestion:
    row_id: int


@dataclass(frozen=True)
class AcceptAll:
    pass


@dataclass(frozen=True)
class Reset:
    pass


Mutation = Union[Edit, AcceptSuggestion, AcceptAll, Reset]


class MutationEngine:
    """
    Applies manual edits, suggestion acceptance and full resets to a dataset
    """

    def __init__(self, scheduler: Optional[BatchValidationScheduler] = None):
        self.scheduler = scheduler or BatchValidationScheduler()

    def apply(self, dataset: Dataset, mutation: Mutation,
              progress_callback: Optional[ProgressCallback] = None) -> Tuple[Dataset, Stats]:
        if isinstance(mutation, Edit):
            self.edit(dataset, mutation.row_id, mutation.text)
        elif isinstance(mutation, AcceptSuggestion):
            self.accept_suggestion(dataset, mutation.row_id)
        elif isinstance(mutation, AcceptAll):
            self.accept_all(dataset)
        elif isinstance(mutation, Reset):
            self.reset(dataset, progress_callback)
        else:
            raise TypeError(f"Unsupported mutation: {mutation!r}")
        return dataset, dataset.stats

    def edit(self, dataset: Dataset, row_id: int, text: str) -> Row:
        """
        Replace a row's email with operator text and re-check it with the short
        list of checks (empty / missing "@" / bad shape).
        """
        self._ensure_idle(dataset)
        row = self._get_row(dataset, row_id)

        email = normalize_email(text)
        row.email = email
        row.apply_classification(classify_manual_edit(email))
        row.original_row[dataset.email_column] = email

        dataset.stats = compute_stats(dataset.rows)
        logger.info(f"Row {row_id} edited, now {row.status}")
        return row

    def accept_suggestion(self, dataset: Dataset, row_id: int) -> bool:
        """
        Take the suggested fix for one row. Returns False (and changes nothing)
        when the row has no suggestion.
        """
        self._ensure_idle(dataset)
        row = self._get_row(dataset, row_id)

        if not row.is_fixable():
            logger.warning(f"Row {row_id} has no suggestion to accept (status: {row.status})")
            return False

        self._take_suggestion(dataset, row)
        dataset.stats = compute_stats(dataset.rows)
        logger.info(f"Accepted suggestion for row {row_id}")
        return True

    def accept_all(self, dataset: Dataset) -> int:
        """Take every pending suggestion, then recompute stats once"""
        self._ensure_idle(dataset)

        fixed = 0
        for row in dataset.fixable_rows():
            self._take_suggestion(dataset, row)
            fixed += 1

        dataset.stats = compute_stats(dataset.rows)
        logger.info(f"Applied {fixed} suggested fixes")
        return fixed

    def reset(self, dataset: Dataset, progress_callback: Optional[ProgressCallback] = None) -> Stats:
        """Restore every row to its ingestion state and validate from scratch"""
        self._ensure_idle(dataset)

        for row in dataset.rows:
            row.restore()

        logger.info(f"Reset {len(dataset.rows)} rows to original data")
        return self.scheduler.run(dataset, progress_callback)

    @staticmethod
    def _take_suggestion(dataset: Dataset, row: Row):
        row.email = row.suggestion
        row.status = VALID
        row.error_kind = None
        row.suggestion = None
        row.original_row[dataset.email_column] = row.email

    @staticmethod
    def _get_row(dataset: Dataset, row_id: int) -> Row:
        row = dataset.get_row(row_id)
        if row is None:
            raise UnknownRowError(row_id)
        return row

    @staticmethod
    def _ensure_idle(dataset: Dataset):
        if dataset.validating:
            raise BusyError("Cannot change rows while a validation run is in progress")
