"""Convert Evernote data into StandardNotes items.

These replicate the conversion tools at https://dashboard.standardnotes.org/tools
while keeping the note-to-tag and note-to-notebook references in both
directions.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from collections import defaultdict
from typing import Dict, List, Sequence

from notexfr.config import EVERNOTE_APP_DATA_KEY, SN_APP_DATA_KEY
from notexfr.exceptions import EntityKindError
from notexfr.models import edam, enex
from notexfr.models.entity import utc_now
from notexfr.models.sn import (
    AppData,
    ContentType,
    ItemContent,
    Note,
    Reference,
    SNItem,
    Tag,
)
from notexfr.services.content import extract_note_text

logger = logging.getLogger(__name__)


def _note_references(note_ids: Sequence[str]) -> List[Reference]:
    return [Reference(uuid=note_id, content_type=ContentType.NOTE) for note_id in note_ids]


class SNConverter(ABC):
    """Base type for converting data from an outside service."""

    def generate_uuid(self) -> str:
        return str(uuid.uuid4())

    @abstractmethod
    def convert(self, resources: Sequence) -> List[SNItem]:
        ...


class EdamToSN(SNConverter):
    """Converts notes, tags and notebooks fetched through the EDAM API.

    Notes are processed first so that tags and notebooks can reference
    them. Notebooks become tags; a note references its tags in source order
    followed by its notebook.
    """

    def convert(self, resources: Sequence) -> List[SNItem]:
        """Convert a mixed list of Evernote notes, tags and notebooks.

        Returns:
            All notes, then all tags, then all notebooks, each group in
            input order.

        Raises:
            EntityKindError: If a resource is not a Note, Tag or Notebook.
            ContentExtractionError: If a note body lacks its envelope.
        """
        notes: List[SNItem] = []
        note_ids_by_tag_id: Dict[str, List[str]] = defaultdict(list)
        note_ids_by_notebook_id: Dict[str, List[str]] = defaultdict(list)

        for resource in resources:
            if not isinstance(resource, edam.Note):
                continue
            references = []
            for tag_id in resource.tag_ids:
                references.append(Reference(uuid=tag_id, content_type=ContentType.TAG))
                note_ids_by_tag_id[tag_id].append(resource.id)
            # the notebook turns into a tag, so reference it as one
            references.append(
                Reference(uuid=resource.notebook_id, content_type=ContentType.TAG)
            )
            note_ids_by_notebook_id[resource.notebook_id].append(resource.id)

            notes.append(
                Note(
                    created_at=resource.created_at,
                    updated_at=resource.updated_at,
                    uuid=resource.id,
                    content=ItemContent(
                        title=resource.title,
                        references=references,
                        text=extract_note_text(resource.content),
                        app_data={
                            SN_APP_DATA_KEY: AppData(
                                client_updated_at=resource.updated_at
                            )
                        },
                    ),
                )
            )

        tags: List[SNItem] = []
        notebooks: List[SNItem] = []
        for resource in resources:
            if isinstance(resource, edam.Note):
                continue
            if isinstance(resource, edam.Tag):
                now = utc_now()
                tags.append(
                    Tag(
                        created_at=now,
                        updated_at=now,
                        uuid=resource.id,
                        content=ItemContent(
                            title=resource.name,
                            references=_note_references(
                                note_ids_by_tag_id.get(resource.id, [])
                            ),
                            app_data={
                                EVERNOTE_APP_DATA_KEY: AppData(
                                    parent_id=resource.parent_id
                                )
                            },
                        ),
                    )
                )
            elif isinstance(resource, edam.Notebook):
                notebooks.append(
                    Tag(
                        created_at=resource.created_at,
                        updated_at=resource.updated_at,
                        uuid=resource.id,
                        content=ItemContent(
                            title=resource.name,
                            references=_note_references(
                                note_ids_by_notebook_id.get(resource.id, [])
                            ),
                            app_data={
                                EVERNOTE_APP_DATA_KEY: AppData(
                                    original_content_type="Notebook"
                                )
                            },
                        ),
                    )
                )
            else:
                raise EntityKindError(resource, expected="Note, Tag or Notebook")

        logger.debug(
            f"Converted {len(notes)} notes, {len(tags)} tags, {len(notebooks)} notebooks"
        )
        return notes + tags + notebooks


class EnexToSN(SNConverter):
    """Converts notes from an ENEX export file.

    Export files name tags inline on each note and carry no IDs, so every
    note and tag gets a fresh UUID. Tags are appended after all notes in
    the order their names were first seen.
    """

    def convert(self, resources: Sequence) -> List[SNItem]:
        """Convert ENEX notes and the tags they name.

        Raises:
            EntityKindError: If a resource is not an ENEX Note.
            ContentExtractionError: If a note body lacks its envelope.
        """
        out: List[SNItem] = []
        tags_by_name: Dict[str, Tag] = {}
        # first-seen order, independent of any later sorting of names
        list_of_tags: List[Tag] = []

        for resource in resources:
            if not isinstance(resource, enex.Note):
                raise EntityKindError(resource, expected="ENEX Note")

            note_id = self.generate_uuid()
            references = []
            seen = set()
            for tag_name in resource.tags:
                if tag_name in seen:
                    continue
                seen.add(tag_name)
                tag = tags_by_name.get(tag_name)
                if tag is None:
                    now = utc_now()
                    tag = Tag(
                        created_at=now,
                        updated_at=now,
                        uuid=self.generate_uuid(),
                        content=ItemContent(title=tag_name),
                    )
                    tags_by_name[tag_name] = tag
                    list_of_tags.append(tag)
                references.append(Reference(uuid=tag.uuid, content_type=ContentType.TAG))
                tag.content.references.append(
                    Reference(uuid=note_id, content_type=ContentType.NOTE)
                )

            out.append(
                Note(
                    created_at=resource.created_at,
                    updated_at=resource.updated_at,
                    uuid=note_id,
                    content=ItemContent(
                        title=resource.title,
                        references=references,
                        text=extract_note_text(resource.content),
                        app_data={
                            SN_APP_DATA_KEY: AppData(
                                client_updated_at=resource.updated_at
                            )
                        },
                    ),
                )
            )

        logger.debug(f"Converted {len(out)} notes, {len(list_of_tags)} tags")
        out.extend(list_of_tags)
        return out
