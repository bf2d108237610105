"""StandardNotes items, the target format of every conversion.

The item schema is loosely based on
https://docs.standardnotes.org/specification/sync/#items. An item is a
tagged union over Note and Tag keyed by ``content_type``; each variant is
parsed and serialized explicitly through :func:`parse_item` and
:meth:`Item.to_dict`.
"""

import datetime
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from notexfr.exceptions import ErrorCode, ParseError
from notexfr.models.entity import (
    ServiceID,
    ensure_timezone_aware,
    format_link_time,
    truncate_to_second,
    utc_now,
)


class ContentType(str, Enum):
    """Kinds of StandardNotes items handled here."""

    NOTE = "Note"
    TAG = "Tag"

    @classmethod
    def parse(cls, value: Any) -> "ContentType":
        """Parse a content type, accepting the lowercase spelling too.

        Raises:
            ParseError: If the value names no known content type.
        """
        try:
            return _CONTENT_TYPE_SPELLINGS[value]
        except (KeyError, TypeError):
            raise ParseError(
                "content_type invalid",
                value=value,
                code=ErrorCode.CONTENT_TYPE_INVALID,
            ) from None


_CONTENT_TYPE_SPELLINGS = {
    "Note": ContentType.NOTE,
    "note": ContentType.NOTE,
    "Tag": ContentType.TAG,
    "tag": ContentType.TAG,
}


class Reference(BaseModel):
    """Associates an item with another item."""

    uuid: str
    content_type: ContentType

    model_config = {"frozen": True}

    def to_dict(self) -> Dict[str, str]:
        return {"uuid": self.uuid, "content_type": self.content_type.value}


class AppData(BaseModel):
    """Extra metadata on an item that should survive between services.

    Unknown keys found in an input file are kept as they are.
    """

    # When the note was last changed in the client
    client_updated_at: Optional[datetime.datetime] = None
    # The kind of data in the origin service. StandardNotes has no Notebook
    # type; the closest thing is a Tag.
    original_content_type: Optional[str] = None
    # The ID of a parent resource in the origin service
    parent_id: Optional[str] = None

    model_config = {"extra": "allow"}

    @field_validator("original_content_type", "parent_id", mode="before")
    @classmethod
    def _empty_is_none(cls, v):
        return v or None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class ItemContent(BaseModel):
    """The ``content`` object of an item."""

    title: str = ""
    references: List[Reference] = Field(default_factory=list)
    # Only relevant for notes
    text: str = ""
    app_data: Dict[str, AppData] = Field(default_factory=dict, alias="appData")

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @field_validator("references", "app_data", mode="before")
    @classmethod
    def _null_empty(cls, v, info):
        if v is None:
            return [] if info.field_name == "references" else {}
        return v

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "title": self.title,
            "references": [ref.to_dict() for ref in self.references],
        }
        if self.text:
            out["text"] = self.text
        if self.app_data:
            out["appData"] = {key: val.to_dict() for key, val in self.app_data.items()}
        return out


class Item(BaseModel):
    """Metadata common to every StandardNotes item."""

    created_at: datetime.datetime
    updated_at: datetime.datetime
    content_type: ContentType
    uuid: str = ""
    content: ItemContent = Field(default_factory=ItemContent)

    model_config = {"extra": "ignore"}

    @field_validator("created_at", "updated_at")
    @classmethod
    def _aware(cls, v: datetime.datetime) -> datetime.datetime:
        return ensure_timezone_aware(v)

    @property
    def title(self) -> str:
        return self.content.title

    @property
    def references(self) -> List[Reference]:
        return self.content.references

    def get_id(self) -> str:
        return self.uuid

    def set_id(self, value: str) -> None:
        self.uuid = value

    def truncate_times(self) -> None:
        """Drop sub-second precision from the item timestamps."""
        self.created_at = truncate_to_second(self.created_at)
        self.updated_at = truncate_to_second(self.updated_at)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "created_at": format_link_time(self.created_at),
            "updated_at": format_link_time(self.updated_at),
            "content_type": self.content_type.value,
            "uuid": self.uuid,
            "content": self.content.to_dict(),
        }


class Note(Item):
    """An item with a content type of Note."""

    content_type: Literal[ContentType.NOTE] = ContentType.NOTE

    def link_values(self) -> List[str]:
        return [
            format_link_time(self.created_at),
            self.content.title,
            format_link_time(self.updated_at),
        ]

    def append_tags(self, *ids: str) -> int:
        """Add tag references unless the note already has them.

        Returns:
            The length of the reference list afterwards.
        """
        current = {
            ref.uuid
            for ref in self.content.references
            if ref.content_type is ContentType.TAG
        }
        for tag_id in ids:
            if tag_id in current:
                continue
            self.content.references.append(
                Reference(uuid=tag_id, content_type=ContentType.TAG)
            )
            current.add(tag_id)
        return len(self.content.references)


class Tag(Item):
    """An item with a content type of Tag."""

    content_type: Literal[ContentType.TAG] = ContentType.TAG

    def link_values(self) -> List[str]:
        return [self.content.title]


SNItem = Union[Note, Tag]

_ITEM_TYPES = {
    ContentType.NOTE: Note,
    ContentType.TAG: Tag,
}


def parse_item(data: Dict[str, Any]) -> SNItem:
    """Parse one item of a StandardNotes file into its variant.

    Timestamps are truncated to whole seconds.

    Raises:
        ParseError: If the content type is unknown or fields are invalid.
    """
    if not isinstance(data, dict):
        raise ParseError("item must be an object", value=data)
    content_type = ContentType.parse(data.get("content_type"))
    try:
        item = _ITEM_TYPES[content_type].model_validate(
            {**data, "content_type": content_type}
        )
    except ValidationError as e:
        raise ParseError(
            f"invalid {content_type.value} item: {e.error_count()} validation error(s)",
            value=data.get("uuid"),
        ) from e
    item.truncate_times()
    return item


def new_tag(
    title: str,
    created_at: Optional[datetime.datetime] = None,
    updated_at: Optional[datetime.datetime] = None,
    uuid: str = "",
) -> Tag:
    """Construct a basic Tag with no references."""
    now = utc_now()
    return Tag(
        created_at=created_at if created_at is not None else now,
        updated_at=updated_at if updated_at is not None else now,
        uuid=uuid,
        content=ItemContent(title=title),
    )


@dataclass
class CrossReference:
    """A StandardNotes item matched to a resource in Evernote.

    The Evernote side only needs an ID, not the entire resource.

    Attributes:
        item: The StandardNotes item.
        evernote_id: ID of the matched Evernote resource.
    """

    item: SNItem
    evernote_id: ServiceID

    def get_id(self) -> str:
        return self.item.get_id()

    def set_id(self, value: str) -> None:
        self.item.set_id(value)

    def link_values(self) -> List[str]:
        return self.item.link_values()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "item": self.item.to_dict(),
            "evernote_id": self.evernote_id.get_id(),
        }
