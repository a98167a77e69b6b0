# Shared pytest fixtures
from __future__ import annotations

import io

import pytest

from core.pipeline import EmailValidationPipeline


@pytest.fixture()
def pipeline() -> EmailValidationPipeline:
    return EmailValidationPipeline({})


@pytest.fixture()
def columns() -> list[str]:
    return ["Full Name", "Email Address", "phone"]


@pytest.fixture()
def records() -> list[dict[str, str]]:
    return [
        {"Full Name": " Ann Lee ", "Email Address": " Ann@Example.com ", "phone": "555-0100"},
        {"Full Name": "Bob Ray", "Email Address": "bob@gmail.con", "phone": "555-0101"},
        {"Full Name": "Cy Doe", "Email Address": "", "phone": "555-0102"},
        {"Full Name": "Di Fox", "Email Address": "di fox@yahoo.com", "phone": "+1 (555) 0103"},
        {"Full Name": "Ed Kim", "Email Address": "ed.kim", "phone": ""},
    ]


@pytest.fixture()
def dataset(pipeline, columns, records):
    return pipeline.ingest(columns, records)


@pytest.fixture()
def classified(pipeline, dataset):
    pipeline.classify(dataset)
    return dataset


@pytest.fixture()
def make_upload():
    """Stand-in for a Streamlit UploadedFile: bytes buffer with a name"""
    def _make(name: str, content: bytes) -> io.BytesIO:
        buffer = io.BytesIO(content)
        buffer.name = name
        return buffer
    return _make
