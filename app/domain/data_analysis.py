"""
app/domain/data_analysis.py

Domain models used by the uploaded-data analysis flow.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

# Cell values are text, numbers, or empty (None).
CellValue = Union[str, int, float, None]
Row = dict[str, CellValue]


class AnalysisStatus:
    """Data-stage states of one onboarding session."""

    ANALYZING = "analyzing"
    SUCCESS = "success"
    ERROR = "error"

    ALL = (ANALYZING, SUCCESS, ERROR)


@dataclass(frozen=True)
class ParsedTable:
    """
    Rows decoded from an uploaded file plus the column names in file order.
    """

    rows: list[Row] = field(default_factory=list)
    columns: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.rows and not self.columns


@dataclass(frozen=True)
class RowValidationError:
    """
    One validation problem.

    row_index is the 1-based spreadsheet row (header is row 1, so the first
    data row is 2); 0 marks a file-level problem such as a missing column.
    """

    row_index: int
    column: str
    message: str


@dataclass(frozen=True)
class AnalysisSummary:
    time_period: str
    data_points: int
    channels: int


@dataclass(frozen=True)
class AnalysisResult:
    """
    Outcome of one analysis run. Built fresh per run and never stored as a
    whole; only ``status`` is folded into the onboarding record.
    """

    status: str
    summary: AnalysisSummary
    preview: list[Row]
    columns: list[str]
    errors: list[RowValidationError] | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "status": self.status,
            "summary": {
                "time_period": self.summary.time_period,
                "data_points": self.summary.data_points,
                "channels": self.summary.channels,
            },
            "preview": [dict(row) for row in self.preview],
            "columns": list(self.columns),
        }
        if self.errors is not None:
            payload["errors"] = [
                {"row_index": e.row_index, "column": e.column, "message": e.message}
                for e in self.errors
            ]
        return payload
