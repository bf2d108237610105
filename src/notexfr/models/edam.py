"""Evernote entities as fetched through the EDAM API and saved as JSON.

Field aliases follow the keys of the saved JSON files, e.g. ``NotebookID``.
"""

import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from notexfr.models.entity import (
    ZERO_TIME,
    Entity,
    ensure_timezone_aware,
    format_link_time,
)


class Attributes(BaseModel):
    """Extra Note metadata, modeled after Evernote NoteAttributes."""

    content_class: str = Field(default="", alias="ContentClass")
    source_application: str = Field(default="", alias="SourceApplication")
    source: str = Field(default="", alias="Source")
    source_url: str = Field(default="", alias="SourceURL")

    model_config = {"populate_by_name": True, "extra": "ignore"}


class _EdamEntity(Entity):
    id: str = Field(default="", alias="ID")

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
        "validate_assignment": True,
    }


class Notebook(_EdamEntity):
    """A unique container for a set of notes.

    There is no equivalent to a Notebook in StandardNotes; the closest
    thing is a Tag.
    """

    name: str = Field(default="", alias="Name")
    stack: str = Field(default="", alias="Stack")
    created_at: datetime.datetime = Field(default=ZERO_TIME, alias="CreatedAt")
    updated_at: datetime.datetime = Field(default=ZERO_TIME, alias="UpdatedAt")

    @field_validator("created_at", "updated_at")
    @classmethod
    def _aware(cls, v: datetime.datetime) -> datetime.datetime:
        return ensure_timezone_aware(v)

    @field_validator("stack", mode="before")
    @classmethod
    def _stack_default(cls, v):
        return v or ""

    def link_values(self) -> List[str]:
        return [self.name]


def new_notebook(name: str) -> Notebook:
    """Construct a placeholder Notebook with zero timestamps and no ID."""
    return Notebook(name=name)


class NoteRecord(_EdamEntity):
    """Fields shared by notes from the API and from export files.

    Serialized with aliases this is the JSON shape of a saved note.
    """

    title: str = Field(default="", alias="Title")
    notebook_id: str = Field(default="", alias="NotebookID")
    tag_ids: List[str] = Field(default_factory=list, alias="TagIDs")
    tags: List[str] = Field(default_factory=list, alias="Tags")
    content: str = Field(default="", alias="Content")
    created_at: datetime.datetime = Field(default=ZERO_TIME, alias="CreatedAt")
    updated_at: datetime.datetime = Field(default=ZERO_TIME, alias="UpdatedAt")
    attributes: Optional[Attributes] = Field(default=None, alias="Attributes")

    @field_validator("tag_ids", "tags", mode="before")
    @classmethod
    def _null_list(cls, v):
        # saved files may encode an empty list as null
        return [] if v is None else v

    @field_validator("created_at", "updated_at")
    @classmethod
    def _aware(cls, v: datetime.datetime) -> datetime.datetime:
        return ensure_timezone_aware(v)

    def link_values(self) -> List[str]:
        return [
            format_link_time(self.created_at),
            self.title,
            format_link_time(self.updated_at),
        ]

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class Note(NoteRecord):
    """A single note in the user's account, fetched through the API."""


class Tag(_EdamEntity):
    """A label to apply to a note."""

    name: str = Field(default="", alias="Name")
    parent_id: str = Field(default="", alias="ParentID")

    @field_validator("parent_id", mode="before")
    @classmethod
    def _parent_default(cls, v):
        return v or ""

    def link_values(self) -> List[str]:
        return [self.name]
