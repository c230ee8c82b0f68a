"""Pydantic models for the structured meeting minutes document.

Field names are snake_case in Python; the JSON representation (both the
model response and the API) uses the camelCase names via aliases.
"""
from typing import List

from pydantic import BaseModel, ConfigDict, Field, model_validator


DEFAULT_MEETING_TITLE = "Meeting Minutes"


class ActionItem(BaseModel):
    """A task assigned during the meeting."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(
        description="Identifier, unique within the document"
    )
    task: str = Field(
        description="Task description"
    )
    owner: str = Field(
        description="Person responsible for the task"
    )
    deadline: str = Field(
        description="Deadline as YYYY-MM-DD"
    )


class MinutesDocument(BaseModel):
    """Structured meeting minutes.

    Every section is always present. Sequences keep insertion order, and
    action item ids are unique within the document.
    """
    model_config = ConfigDict(populate_by_name=True)

    meeting_title: str = Field(
        alias="meetingTitle",
        description="Title of the meeting"
    )
    meeting_date: str = Field(
        alias="meetingDate",
        description="Meeting date as YYYY-MM-DD"
    )
    attendees: List[str] = Field(
        description="Attendees in speaking order, optionally annotated with a role"
    )
    agenda: List[str] = Field(
        description="Agenda topics in discussion order"
    )
    summary: str = Field(
        description="Free-text summary of the discussion"
    )
    decisions: List[str] = Field(
        description="Decisions in chronological order"
    )
    action_items: List[ActionItem] = Field(
        alias="actionItems",
        description="Action items with owners and deadlines"
    )

    @model_validator(mode="after")
    def action_item_ids_must_be_unique(self) -> "MinutesDocument":
        """Reject documents containing the same action item id twice."""
        seen = set()
        for item in self.action_items:
            if item.id in seen:
                raise ValueError(f"duplicate action item id: {item.id}")
            seen.add(item.id)
        return self

    def to_json_dict(self) -> dict:
        """Serialize with the camelCase field names."""
        return self.model_dump(by_alias=True)
