"""
app/schemas/analysis.py

Response schemas for the data analysis endpoint.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, SerializerFunctionWrapHandler, model_serializer

from app.domain.data_analysis import AnalysisResult


class ValidationErrorResponse(BaseModel):
    """
    One data problem. row_index 0 marks a file-level (missing column) error.
    """

    row_index: int = Field(..., ge=0)
    column: str
    message: str


class AnalysisSummaryResponse(BaseModel):
    time_period: str
    data_points: int = Field(..., ge=0)
    channels: int = Field(..., ge=0)


class AnalysisResponse(BaseModel):
    """
    Analysis outcome. ``errors`` is omitted entirely on success.
    """

    status: Literal["analyzing", "success", "error"]
    errors: list[ValidationErrorResponse] | None = None
    summary: AnalysisSummaryResponse
    preview: list[dict[str, Any]] = Field(default_factory=list, max_length=5)
    columns: list[str] = Field(default_factory=list)

    @model_serializer(mode="wrap")
    def _drop_absent_errors(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        if data.get("errors") is None:
            data.pop("errors", None)
        return data

    @classmethod
    def from_domain(cls, result: AnalysisResult) -> "AnalysisResponse":
        return cls.model_validate(result.to_dict())
