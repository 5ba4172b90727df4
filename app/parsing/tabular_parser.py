"""
Tabular parsing layer for uploaded marketing-data files.

Two backends: delimited text (csv module) and spreadsheet binaries
(pandas + openpyxl/xlrd). Undecodable content never raises here; it yields
an empty table and the validator reports the missing columns.
"""

from __future__ import annotations

import csv
import io
import logging
from datetime import date, datetime, time
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from app.domain.data_analysis import CellValue, ParsedTable, Row

logger = logging.getLogger(__name__)

FORMAT_DELIMITED = "delimited"
FORMAT_SPREADSHEET = "spreadsheet"

_EXTENSION_FORMATS: dict[str, str] = {
    ".csv": FORMAT_DELIMITED,
    ".xlsx": FORMAT_SPREADSHEET,
    ".xls": FORMAT_SPREADSHEET,
}
_CANDIDATE_DELIMITERS = ",;\t|"


def detect_format(*, file_name: str | None, media_type: str | None) -> str | None:
    """
    Pick a backend from the file extension, falling back to the media type.
    """

    extension = Path(file_name or "").suffix.lower()
    if extension in _EXTENSION_FORMATS:
        return _EXTENSION_FORMATS[extension]

    normalized = (media_type or "").strip().lower()
    if "csv" in normalized:
        return FORMAT_DELIMITED
    if "spreadsheet" in normalized or "excel" in normalized:
        return FORMAT_SPREADSHEET
    return None


class TabularParser:
    """
    Converts uploaded bytes into rows keyed by header name.
    """

    def parse(
        self,
        *,
        content: bytes,
        file_name: str | None = None,
        media_type: str | None = None,
    ) -> ParsedTable:
        file_format = detect_format(file_name=file_name, media_type=media_type)
        if file_format == FORMAT_DELIMITED:
            return self.parse_delimited(content)
        if file_format == FORMAT_SPREADSHEET:
            return self.parse_spreadsheet(content)

        logger.warning(
            "No tabular backend for file=%r media_type=%r; treating as empty",
            file_name,
            media_type,
        )
        return ParsedTable()

    def parse_delimited(self, content: bytes) -> ParsedTable:
        """
        Parse delimited text using the first row as the header.
        """

        try:
            text = content.decode("utf-8-sig")
            reader = csv.DictReader(io.StringIO(text, newline=""), delimiter=self._sniff_delimiter(text))
            headers = reader.fieldnames or []
            rows: list[Row] = [
                {key: value for key, value in raw_row.items() if key is not None}
                for raw_row in reader
            ]
        except UnicodeDecodeError:
            logger.warning("Delimited file is not UTF-8 encoded; treating as empty")
            return ParsedTable()
        except csv.Error as exc:
            logger.warning("Delimited file could not be parsed: %s", exc)
            return ParsedTable()

        return ParsedTable(rows=rows, columns=list(dict.fromkeys(headers)))

    def parse_spreadsheet(self, content: bytes) -> ParsedTable:
        """
        Parse the first sheet of an xlsx/xls workbook using its first row as header.
        """

        try:
            frame = pd.read_excel(io.BytesIO(content), sheet_name=0, dtype=object)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Spreadsheet could not be decoded: %s", exc)
            return ParsedTable()

        frame = frame.dropna(how="all")
        headers = [str(column) for column in frame.columns]
        rows: list[Row] = [
            {header: _normalize_cell(value) for header, value in zip(headers, values)}
            for values in frame.itertuples(index=False, name=None)
        ]
        columns = list(rows[0].keys()) if rows else []
        return ParsedTable(rows=rows, columns=columns)

    @staticmethod
    def _sniff_delimiter(text: str) -> str:
        header_line = text.split("\n", 1)[0]
        try:
            return csv.Sniffer().sniff(header_line, delimiters=_CANDIDATE_DELIMITERS).delimiter
        except csv.Error:
            return ","


def _normalize_cell(value: Any) -> CellValue:
    if value is None or value is pd.NaT:
        return None
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and np.isnan(value):
        return None
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.isoformat()
    if isinstance(value, (date, time)):
        return value.isoformat()
    if isinstance(value, (str, int, float)):
        return value
    return str(value)
