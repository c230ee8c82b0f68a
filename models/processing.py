"""Processing stage enumeration and status snapshot.

Stage lifecycle:
    idle -> uploading -> extracting -> generating -> editing
Any active stage falls back to idle on failure.
"""
import enum
from typing import Optional

from pydantic import BaseModel, Field


class ProcessingStage(str, enum.Enum):
    """Stages of the minutes pipeline."""
    idle = "idle"
    uploading = "uploading"
    extracting = "extracting"
    generating = "generating"
    editing = "editing"


class ProcessingStatus(BaseModel):
    """Point-in-time view of the ProcessingController."""
    stage: ProcessingStage = Field(
        description="Current pipeline stage"
    )
    current_step: Optional[str] = Field(
        default=None,
        description="Label of the active step: upload, extraction or generation"
    )
    progress: int = Field(
        ge=0,
        le=100,
        description="Completion percentage"
    )
    is_processing: bool = Field(
        description="True while a generation request is in flight"
    )
    failure_reason: Optional[str] = Field(
        default=None,
        description="Human-readable reason of the last failed run"
    )
    has_document: bool = Field(
        description="True once a minutes document is available for editing"
    )
