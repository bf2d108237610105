"""Builders for the entities used across tests."""

import datetime
from datetime import timezone

from notexfr.models import edam, enex
from notexfr.models.sn import ContentType, ItemContent, Note, Reference, Tag


def utc(*args) -> datetime.datetime:
    """Shorthand for a UTC datetime."""
    return datetime.datetime(*args, tzinfo=timezone.utc)


def make_edam_note(
    note_id: str,
    title: str,
    created: datetime.datetime,
    updated: datetime.datetime,
    notebook_id: str = "nb-1",
    tag_ids=(),
    content: str = "<en-note><div>body</div></en-note>",
) -> edam.Note:
    return edam.Note(
        id=note_id,
        title=title,
        notebook_id=notebook_id,
        tag_ids=list(tag_ids),
        content=content,
        created_at=created,
        updated_at=updated,
    )


def make_enex_note(
    title: str,
    tags=(),
    content: str = "<en-note><div>body</div></en-note>",
) -> enex.Note:
    return enex.Note(
        title=title,
        tags=list(tags),
        content=content,
        created_at=utc(2020, 1, 1),
        updated_at=utc(2020, 1, 2),
    )


def make_sn_note(
    uuid: str,
    title: str,
    created: datetime.datetime,
    updated: datetime.datetime,
    tag_ids=(),
) -> Note:
    return Note(
        uuid=uuid,
        created_at=created,
        updated_at=updated,
        content=ItemContent(
            title=title,
            references=[
                Reference(uuid=tag_id, content_type=ContentType.TAG) for tag_id in tag_ids
            ],
        ),
    )


def make_sn_tag(uuid: str, title: str) -> Tag:
    return Tag(
        uuid=uuid,
        created_at=utc(2020, 1, 1),
        updated_at=utc(2020, 1, 1),
        content=ItemContent(title=title),
    )
