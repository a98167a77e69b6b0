"""
Dataset statistics
Always rebuilt from the rows, never patched incrementally
"""

from collections import Counter
from typing import Iterable

from .models import Row, Stats, VALID, FIXABLE, INVALID


def compute_stats(rows: Iterable[Row]) -> Stats:
    """Count rows by status and non-valid rows by error kind"""
    statuses = Counter()
    error_counts = Counter()
    total = 0

    for row in rows:
        total += 1
        statuses[row.status] += 1
        if row.status != VALID and row.error_kind:
            error_counts[row.error_kind] += 1

    return Stats(
        total=total,
        valid=statuses[VALID],
        fixable=statuses[FIXABLE],
        invalid=statuses[INVALID],
        error_counts=dict(error_counts),
    )
