"""Request/response bodies for the editing, distribution and settings endpoints."""
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .minutes import ActionItem


class AppendItemRequest(BaseModel):
    """Body for appending to a collection. Omit value to append a blank element."""
    value: Optional[str] = Field(
        default=None,
        description="Initial value for string collections; ignored for action items"
    )


class UpdateItemRequest(BaseModel):
    """Body for replacing an element or one field of an action item."""
    value: str = Field(
        description="New value"
    )
    field: Optional[str] = Field(
        default=None,
        description="Action item field to update: task, owner or deadline"
    )


class CollectionItemResponse(BaseModel):
    """An element of a collection after an append or update."""
    index: int
    item: Union[ActionItem, str]


class UpdateFieldsRequest(BaseModel):
    """Scalar fields of the document. Only the supplied fields are replaced."""
    model_config = ConfigDict(populate_by_name=True)

    meeting_title: Optional[str] = Field(default=None, alias="meetingTitle")
    meeting_date: Optional[str] = Field(default=None, alias="meetingDate")
    summary: Optional[str] = None


class RecipientRequest(BaseModel):
    email: str = Field(
        min_length=1,
        description="Recipient address, validated by the caller"
    )


class RecipientListResponse(BaseModel):
    recipients: List[str]


class SendMinutesRequest(BaseModel):
    """Recipients for distribution. When omitted the stored recipient list is used."""
    recipients: Optional[List[str]] = Field(
        default=None,
        description="Recipient email addresses"
    )


class SendMinutesResponse(BaseModel):
    accepted: int = Field(
        description="Number of recipients handed off for delivery"
    )


class ApiKeyRequest(BaseModel):
    api_key: str = Field(
        description="OpenAI API key, must start with 'sk-'"
    )


class ApiKeyStatusResponse(BaseModel):
    configured: bool
    masked_key: Optional[str] = None
