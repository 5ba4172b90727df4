"""
app/schemas/uploads.py

Response schemas for file upload endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class UploadedFileResponse(BaseModel):
    id: int
    filename: str
    size: int = Field(..., ge=0)


class UploadResponse(BaseModel):
    success: bool = True
    data: UploadedFileResponse
