"""
Batch validation scheduler
Classifies a dataset in fixed-size chunks, handing control back after every chunk
"""

import logging
from typing import Callable, Dict, Iterator, Optional

from .email_hygiene_engine import classify_row
from .errors import BusyError
from .models import Classification, Dataset
from .stats import compute_stats

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 100

ProgressCallback = Callable[[str, int, Dict[str, int]], None]


class BatchValidationScheduler:
    """
    Drives the row classifier over a whole dataset.

    ``iter_run`` is the step abstraction: each ``next()`` classifies one chunk and
    yields the integer percentage done. ``run`` simply drains it.
    A dataset may only have one run in flight; a second one gets BusyError.
    The dataset stays busy until the iterator is exhausted or closed.
    """

    def __init__(self, classifier: Callable[..., Classification] = classify_row,
                 chunk_size: int = DEFAULT_CHUNK_SIZE):
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.classifier = classifier
        self.chunk_size = chunk_size

    def iter_run(self, dataset: Dataset) -> Iterator[int]:
        if dataset.validating:
            raise BusyError("A validation run is already in progress for this dataset")
        return self._steps(dataset)

    def _steps(self, dataset: Dataset) -> Iterator[int]:
        dataset.validating = True
        try:
            rows = dataset.rows
            total = len(rows)
            logger.info(f"Validating {total} rows in chunks of {self.chunk_size}")

            for row in rows:
                row.clear_classification()

            if total == 0:
                dataset.stats = compute_stats(rows)
                yield 100
                return

            processed = 0
            for start in range(0, total, self.chunk_size):
                end = min(start + self.chunk_size, total)
                for row in rows[start:end]:
                    row.apply_classification(self.classifier(row.name, row.email))
                processed += end - start
                progress = processed * 100 // total
                logger.debug(f"Chunk {start}-{end} done ({progress}%)")

                if processed == total:
                    # stats must be in place before the final progress value is seen
                    dataset.stats = compute_stats(rows)
                yield progress

            logger.info(
                f"Validation complete: {dataset.stats.valid} valid, "
                f"{dataset.stats.fixable} fixable, {dataset.stats.invalid} invalid"
            )
        finally:
            dataset.validating = False

    def run(self, dataset: Dataset, progress_callback: Optional[ProgressCallback] = None):
        """
        Classify every row and return the final Stats.
        progress_callback(status, progress, counters) is invoked after each chunk.
        """
        total = len(dataset.rows)
        steps = 0
        for progress in self.iter_run(dataset):
            steps += 1
            if progress_callback:
                processed = min(steps * self.chunk_size, total)
                counters = {'processed': processed, 'total': total}
                progress_callback(f"Validating emails: {progress}%", progress, counters)
        return dataset.stats

