"""
app/services/result_summarizer.py

Builds the compact analysis report returned to the wizard.
"""

from __future__ import annotations

from collections.abc import Sequence

from app.domain.data_analysis import (
    AnalysisResult,
    AnalysisStatus,
    AnalysisSummary,
    Row,
    RowValidationError,
)
from app.validators.marketing_data_validator import is_blank, resolve_columns

PREVIEW_ROW_LIMIT = 5

# Date-range detection is not implemented; every summary reports this label.
TIME_PERIOD_PLACEHOLDER = "Sample period"


def count_distinct_channels(rows: Sequence[Row]) -> int:
    """
    Count distinct non-empty channel values, resolving the channel column per row.
    """

    channels: set[object] = set()
    for row in rows:
        column = resolve_columns(row).channel
        if column is None:
            continue
        value = row.get(column)
        if not is_blank(value):
            channels.add(value)
    return len(channels)


class ResultSummarizer:
    """
    Folds parsed rows and validation errors into an AnalysisResult.
    """

    def summarize(
        self,
        *,
        rows: Sequence[Row],
        columns: Sequence[str],
        errors: Sequence[RowValidationError],
    ) -> AnalysisResult:
        status = AnalysisStatus.ERROR if errors else AnalysisStatus.SUCCESS
        return AnalysisResult(
            status=status,
            errors=list(errors) if errors else None,
            summary=AnalysisSummary(
                time_period=TIME_PERIOD_PLACEHOLDER,
                data_points=len(rows),
                channels=count_distinct_channels(rows),
            ),
            preview=[dict(row) for row in rows[:PREVIEW_ROW_LIMIT]],
            columns=list(columns),
        )
