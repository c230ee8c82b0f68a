"""
Generation Request Model

This module defines the immutable request that starts the minutes pipeline.
It is accepted as the JSON body of POST /minutes/generate and built from the
decoded file for POST /minutes/upload.
"""

from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class GenerationRequest(BaseModel):
    """
    Input for one generation run.

    Attributes:
        transcript_text: Raw transcript (required, must not be empty or whitespace-only)
        meeting_title: Optional title; the default placeholder is used when absent
        meeting_date: Optional ISO-8601 date (YYYY-MM-DD); today is used when absent
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    transcript_text: str = Field(
        ...,
        alias="transcriptText",
        description="Raw meeting transcript"
    )
    meeting_title: Optional[str] = Field(
        default=None,
        alias="meetingTitle",
        description="Meeting title supplied by the caller"
    )
    meeting_date: Optional[str] = Field(
        default=None,
        alias="meetingDate",
        description="Meeting date supplied by the caller (YYYY-MM-DD)"
    )

    @field_validator('transcript_text')
    @classmethod
    def transcript_must_not_be_empty(cls, v: str) -> str:
        """Validate that the transcript is not empty or whitespace-only."""
        if not v or not v.strip():
            raise ValueError("transcriptText cannot be empty or contain only whitespace")
        return v

    @field_validator('meeting_title', 'meeting_date')
    @classmethod
    def blank_means_absent(cls, v: Optional[str]) -> Optional[str]:
        """Treat blank metadata as not supplied."""
        if v is not None and not v.strip():
            return None
        return v

    @field_validator('meeting_date')
    @classmethod
    def meeting_date_must_be_iso(cls, v: Optional[str]) -> Optional[str]:
        """Validate that a supplied date is a calendar date in YYYY-MM-DD form."""
        if v is None:
            return v
        try:
            parsed = date.fromisoformat(v)
        except ValueError:
            parsed = None
        if parsed is None or parsed.isoformat() != v:
            raise ValueError("meetingDate must be an ISO-8601 date (YYYY-MM-DD)")
        return v
