from __future__ import annotations

from core.models import (
    Classification, Dataset, Row, Stats, error_label, normalize_email,
    FIXABLE, INVALID, PENDING, VALID,
)
from core.stats import compute_stats


def make_row(row_id: int, status: str, error_kind=None, suggestion=None) -> Row:
    return Row(id=row_id, name="", email="", original_email="", original_row={},
               status=status, error_kind=error_kind, suggestion=suggestion)


def test_normalize_email():
    assert normalize_email("  Ann@Example.COM\t") == "ann@example.com"
    assert normalize_email(None) == ""


def test_error_label():
    assert error_label("missing_at") == "Missing @ symbol"
    assert error_label("something_else") == "Unknown error"
    assert error_label(None) == ""


def test_compute_stats_rebuilds_from_rows():
    rows = [
        make_row(0, VALID),
        make_row(1, FIXABLE, "domain_typo", "a@gmail.com"),
        make_row(2, FIXABLE, "domain_typo", "b@gmail.com"),
        make_row(3, INVALID, "empty"),
        make_row(4, PENDING),
    ]
    assert compute_stats(rows) == Stats(
        total=5, valid=1, fixable=2, invalid=1, error_counts={"domain_typo": 2, "empty": 1},
    )


def test_compute_stats_empty():
    assert compute_stats([]) == Stats()


def test_row_restore():
    row = Row(id=0, name="Ann", email="ann@gmail.com", original_email="ann@gmail.con",
              original_row={"email": "ann@gmail.com"}, source_row={"email": "Ann@gmail.con"})
    row.apply_classification(Classification(VALID))

    row.restore()

    assert row.email == "ann@gmail.con"
    assert row.original_row == {"email": "Ann@gmail.con"}
    assert row.original_row is not row.source_row
    assert (row.status, row.error_kind, row.suggestion) == (PENDING, None, None)


def test_dataset_lookup():
    dataset = Dataset(columns=["n", "e"], email_column="e", name_column="n", rows=[make_row(3, VALID)])
    assert dataset.get_row(3).id == 3
    assert dataset.get_row(4) is None

    dataset.rows.append(make_row(4, FIXABLE, "tld_typo", "x@y.com"))
    assert dataset.get_row(4).id == 4
    assert [r.id for r in dataset.fixable_rows()] == [4]
