"""Data models for the meeting minutes service."""
from .minutes import ActionItem, MinutesDocument, DEFAULT_MEETING_TITLE
from .generation_request import GenerationRequest
from .processing import ProcessingStage, ProcessingStatus
from .api_models import (
    AppendItemRequest,
    UpdateItemRequest,
    CollectionItemResponse,
    UpdateFieldsRequest,
    RecipientRequest,
    RecipientListResponse,
    SendMinutesRequest,
    SendMinutesResponse,
    ApiKeyRequest,
    ApiKeyStatusResponse,
)

__all__ = [
    # Minutes document
    "ActionItem",
    "MinutesDocument",
    "DEFAULT_MEETING_TITLE",
    # Pipeline
    "GenerationRequest",
    "ProcessingStage",
    "ProcessingStatus",
    # API bodies
    "AppendItemRequest",
    "UpdateItemRequest",
    "CollectionItemResponse",
    "UpdateFieldsRequest",
    "RecipientRequest",
    "RecipientListResponse",
    "SendMinutesRequest",
    "SendMinutesResponse",
    "ApiKeyRequest",
    "ApiKeyStatusResponse",
]
