"""
tests/conftest.py

Shared fixtures: an in-memory onboarding store, a temporary file storage
root and small builders for marketing-data files.
"""

from __future__ import annotations

import io
from datetime import datetime

import pytest
from openpyxl import Workbook

from app.repositories.memory_store import InMemoryOnboardingStore
from db.repositories.storage import LocalFileStorage

HEADER = ("date", "channel", "campaign", "spend")


def csv_bytes(*lines: str) -> bytes:
    return ("\n".join(lines) + "\n").encode("utf-8")


def xlsx_bytes(rows: list[list[object]], *, extra_sheet: list[list[object]] | None = None) -> bytes:
    """Build a workbook whose first sheet holds ``rows`` (header first)."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Data"
    for row in rows:
        sheet.append(row)
    if extra_sheet is not None:
        other = workbook.create_sheet("Other")
        for row in extra_sheet:
            other.append(row)
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


VALID_CSV = csv_bytes(
    "date,channel,campaign,spend",
    "2024-01-01,Google Ads,Brand,100",
    '2024-01-02,Facebook,Retargeting,"$1,250.50"',
    "2024-01-03,Google Ads,Generic,75",
)

VALID_XLSX_ROWS: list[list[object]] = [
    list(HEADER),
    [datetime(2024, 1, 1), "Google Ads", "Brand", 100],
    [datetime(2024, 1, 2), "TikTok", "Launch", 250.5],
]


@pytest.fixture()
def store() -> InMemoryOnboardingStore:
    return InMemoryOnboardingStore()


@pytest.fixture()
def file_storage(tmp_path) -> LocalFileStorage:
    return LocalFileStorage(tmp_path / "uploads")
