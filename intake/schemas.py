"""Pydantic schemas shared across the intake workflow."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ApplicationForm(BaseModel):
    """The four text fields of a validated submission."""

    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    position: str = Field(..., min_length=1)


class ResumeAttachment(BaseModel):
    """Résumé upload held in memory for the lifetime of one request."""

    model_config = ConfigDict(frozen=True)

    filename: str
    content: bytes
    content_type: str | None = None


class SubmissionAccepted(BaseModel):
    message: str


class ErrorBody(BaseModel):
    error: str
