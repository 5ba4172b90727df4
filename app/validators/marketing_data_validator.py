"""
app/validators/marketing_data_validator.py

Required-column and row-level checks for uploaded marketing data.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from app.domain.data_analysis import Row, RowValidationError

REQUIRED_COLUMNS: tuple[str, ...] = ("date", "channel", "campaign", "spend")

# Offset from a 0-based data row to the 1-based sheet row below the header.
ROW_DISPLAY_OFFSET = 2

CHANNEL_DISALLOWED_CHARS = re.compile(r"[^A-Za-z0-9 _-]")

# Plain ASCII decimal or exponent notation; no digit separators.
SPEND_NUMBER_PATTERN = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?", re.ASCII)

MISSING_DATE_MESSAGE = "Missing date value"
MISSING_SPEND_MESSAGE = "Missing spend value"
INVALID_SPEND_MESSAGE = "Invalid spend format (must be numeric)"
CHANNEL_CHARACTERS_MESSAGE = "Channel name contains special characters"


def missing_column_message(column: str) -> str:
    return f'Required column "{column}" is missing from the data file'


@dataclass(frozen=True)
class ResolvedColumns:
    """
    Actual column names in one row that carry each semantic field.
    """

    date: str | None = None
    channel: str | None = None
    campaign: str | None = None
    spend: str | None = None


@dataclass(frozen=True)
class ValidationOutcome:
    errors: list[RowValidationError] = field(default_factory=list)
    rows_checked: bool = False


def column_satisfies(column: str, requirement: str) -> bool:
    """
    Return True when ``column`` matches ``requirement`` case-insensitively.

    Only the underscore-to-space variant of the requirement is also tried.
    """

    lowered = column.lower()
    return lowered == requirement or lowered == requirement.replace("_", " ")


def find_missing_columns(
    columns: Iterable[str],
    required: Sequence[str] = REQUIRED_COLUMNS,
) -> list[str]:
    """
    Return required columns with no matching actual column, in required order.
    """

    actual = list(columns)
    return [
        requirement
        for requirement in required
        if not any(column_satisfies(column, requirement) for column in actual)
    ]


def _first_key(row: Row, predicate) -> str | None:
    for key in row:
        if predicate(key.lower()):
            return key
    return None


def resolve_columns(row: Row) -> ResolvedColumns:
    """
    Resolve semantic fields against one row's keys; first match in key order wins.
    """

    return ResolvedColumns(
        date=_first_key(row, lambda key: key == "date"),
        channel=_first_key(row, lambda key: key == "channel"),
        campaign=_first_key(row, lambda key: key == "campaign"),
        spend=_first_key(row, lambda key: key == "spend" or "cost" in key),
    )


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and value.strip() == ""


def is_numeric_spend(value: Any) -> bool:
    """
    Return True when ``value`` is a finite number once `$` and `,` are removed.
    """

    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return math.isfinite(value)

    cleaned = str(value).replace("$", "").replace(",", "").strip()
    if not SPEND_NUMBER_PATTERN.fullmatch(cleaned):
        return False
    try:
        return math.isfinite(float(cleaned))
    except ValueError:
        return False


class MarketingDataValidator:
    """
    Validates parsed rows against the required marketing-data schema.
    """

    def __init__(self, required_columns: Sequence[str] = REQUIRED_COLUMNS) -> None:
        self._required_columns = tuple(required_columns)

    def validate(self, *, rows: Sequence[Row], columns: Sequence[str]) -> ValidationOutcome:
        """
        Check required columns, then every row when none are missing.

        Missing columns short-circuit: one file-level error per missing column
        is returned and no row is inspected.
        """

        missing = find_missing_columns(columns, self._required_columns)
        if missing:
            return ValidationOutcome(
                errors=[
                    RowValidationError(
                        row_index=0,
                        column=column,
                        message=missing_column_message(column),
                    )
                    for column in missing
                ],
                rows_checked=False,
            )

        errors: list[RowValidationError] = []
        for index, row in enumerate(rows):
            errors.extend(self.validate_row(row=row, row_index=index + ROW_DISPLAY_OFFSET))
        return ValidationOutcome(errors=errors, rows_checked=True)

    def validate_row(self, *, row: Row, row_index: int) -> list[RowValidationError]:
        """
        Validate one row in fixed order: date, spend, channel.
        """

        resolved = resolve_columns(row)
        errors: list[RowValidationError] = []

        # Whitespace-only cells count as missing for both date and spend,
        # stricter than an empty-string check.
        if resolved.date is not None and is_blank(row.get(resolved.date)):
            errors.append(
                RowValidationError(
                    row_index=row_index,
                    column=resolved.date,
                    message=MISSING_DATE_MESSAGE,
                )
            )

        if resolved.spend is not None:
            spend = row.get(resolved.spend)
            if is_blank(spend):
                errors.append(
                    RowValidationError(
                        row_index=row_index,
                        column=resolved.spend,
                        message=MISSING_SPEND_MESSAGE,
                    )
                )
            elif not is_numeric_spend(spend):
                errors.append(
                    RowValidationError(
                        row_index=row_index,
                        column=resolved.spend,
                        message=INVALID_SPEND_MESSAGE,
                    )
                )

        channel = row.get(resolved.channel) if resolved.channel is not None else None
        if isinstance(channel, str) and CHANNEL_DISALLOWED_CHARS.search(channel):
            errors.append(
                RowValidationError(
                    row_index=row_index,
                    column=resolved.channel,
                    message=CHANNEL_CHARACTERS_MESSAGE,
                )
            )

        return errors
