from __future__ import annotations

import io

import pandas as pd
import pytest

from utils.io_handler import FileHandler


def test_load_csv_keeps_strings(make_upload):
    upload = make_upload("people.csv", b"name,email,zip\nAnn,ann@x.com,00123\nBob,NA,\n")
    columns, records = FileHandler().load_file(upload)

    assert columns == ["name", "email", "zip"]
    assert records == [
        {"name": "Ann", "email": "ann@x.com", "zip": "00123"},
        {"name": "Bob", "email": "NA", "zip": ""},
    ]


def test_load_tsv(make_upload):
    columns, records = FileHandler().load_file(make_upload("people.tsv", b"name\temail\nAnn\tann@x.com\n"))
    assert columns == ["name", "email"]
    assert records[0]["email"] == "ann@x.com"


def test_load_excel(make_upload):
    buffer = io.BytesIO()
    pd.DataFrame({"name": ["Ann"], "email": ["ann@x.com"]}).to_excel(buffer, index=False, engine="openpyxl")
    columns, records = FileHandler().load_file(make_upload("people.xlsx", buffer.getvalue()))

    assert columns == ["name", "email"]
    assert records == [{"name": "Ann", "email": "ann@x.com"}]


def test_unsupported_extension(make_upload):
    with pytest.raises(ValueError, match="Unsupported file format: pdf"):
        FileHandler().load_file(make_upload("people.pdf", b""))


def test_bad_csv_is_reported(make_upload):
    with pytest.raises(ValueError, match="Error reading CSV file"):
        FileHandler().load_file(make_upload("people.csv", b"\xff\xfe\x00bad"))


def test_save_to_csv_keeps_column_order():
    records = [{"email": "a@b.com", "name": "Ann"}]
    assert FileHandler().save_to_csv(records, ["name", "email"]) == "name,email\nAnn,a@b.com\n"


def test_save_to_excel_round_trip():
    data = FileHandler().save_to_excel([{"name": "Ann", "email": "a@b.com"}], ["name", "email"])
    df = pd.read_excel(io.BytesIO(data), engine="openpyxl")
    assert df.to_dict(orient="records") == [{"name": "Ann", "email": "a@b.com"}]
