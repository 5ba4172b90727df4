"""
tests/test_result_summarizer.py

Pytest unit tests for ResultSummarizer.

Coverage
--------
- success/error status derived from the error list
- errors omitted (None) on success
- preview capped at five rows regardless of status
- distinct non-empty channel count
- static time period label
"""

from __future__ import annotations

import pytest

from app.domain.data_analysis import AnalysisStatus, RowValidationError
from app.services.result_summarizer import (
    PREVIEW_ROW_LIMIT,
    TIME_PERIOD_PLACEHOLDER,
    ResultSummarizer,
    count_distinct_channels,
)

COLUMNS = ["date", "channel", "campaign", "spend"]


def _rows(count: int, channels: tuple[str, ...] = ("Google Ads", "Facebook")) -> list[dict]:
    return [
        {
            "date": f"2024-01-{index + 1:02d}",
            "channel": channels[index % len(channels)],
            "campaign": "Brand",
            "spend": str(10 * (index + 1)),
        }
        for index in range(count)
    ]


@pytest.fixture()
def summarizer() -> ResultSummarizer:
    return ResultSummarizer()


class TestStatus:
    def test_success_when_no_errors(self, summarizer: ResultSummarizer) -> None:
        result = summarizer.summarize(rows=_rows(3), columns=COLUMNS, errors=[])
        assert result.status == AnalysisStatus.SUCCESS
        assert result.errors is None
        assert "errors" not in result.to_dict()

    def test_error_when_any_error(self, summarizer: ResultSummarizer) -> None:
        error = RowValidationError(row_index=3, column="spend", message="Invalid spend format (must be numeric)")
        result = summarizer.summarize(rows=_rows(3), columns=COLUMNS, errors=[error])
        assert result.status == AnalysisStatus.ERROR
        assert result.errors == [error]
        assert result.to_dict()["errors"] == [
            {"row_index": 3, "column": "spend", "message": "Invalid spend format (must be numeric)"}
        ]


class TestSummary:
    def test_counts_rows_and_channels(self, summarizer: ResultSummarizer) -> None:
        result = summarizer.summarize(rows=_rows(12), columns=COLUMNS, errors=[])
        assert result.summary.data_points == 12
        assert result.summary.channels == 2
        assert result.summary.time_period == TIME_PERIOD_PLACEHOLDER == "Sample period"

    def test_columns_pass_through_unchanged(self, summarizer: ResultSummarizer) -> None:
        result = summarizer.summarize(rows=[], columns=COLUMNS, errors=[])
        assert result.columns == COLUMNS
        assert result.summary.data_points == 0
        assert result.preview == []

    @pytest.mark.parametrize("count, expected", [(0, 0), (3, 3), (5, 5), (12, PREVIEW_ROW_LIMIT)])
    def test_preview_is_capped(self, summarizer: ResultSummarizer, count: int, expected: int) -> None:
        rows = _rows(count)
        result = summarizer.summarize(rows=rows, columns=COLUMNS, errors=[])
        assert len(result.preview) == expected
        assert result.preview == rows[:expected]

    def test_preview_is_present_on_error(self, summarizer: ResultSummarizer) -> None:
        error = RowValidationError(row_index=0, column="spend", message="missing")
        result = summarizer.summarize(rows=_rows(8), columns=COLUMNS[:3], errors=[error])
        assert len(result.preview) == 5


class TestChannelCount:
    def test_blank_channels_are_not_counted(self) -> None:
        rows = [
            {"channel": "TV"},
            {"channel": ""},
            {"channel": None},
            {"channel": "  "},
            {"channel": "TV"},
            {"channel": "Radio"},
        ]
        assert count_distinct_channels(rows) == 2

    def test_channel_column_resolved_case_insensitively(self) -> None:
        assert count_distinct_channels([{"Channel": "TV"}, {"CHANNEL": "Radio"}]) == 2

    def test_rows_without_channel_are_ignored(self) -> None:
        assert count_distinct_channels([{"date": "2024-01-01"}]) == 0
