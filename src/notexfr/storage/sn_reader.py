"""Read StandardNotes import/export files."""

import logging
from typing import List, Tuple

from notexfr.exceptions import ParseError
from notexfr.models.sn import Note, Tag, parse_item
from notexfr.storage.files import PathLike, read_json

logger = logging.getLogger(__name__)


def read_conversion_file(path: PathLike) -> Tuple[List[Note], List[Tag]]:
    """Read a StandardNotes file and group its items by content type.

    The input is the output of a conversion performed at
    https://dashboard.standardnotes.org/tools: an object whose ``items``
    field is a flat array of notes and tags.

    Raises:
        ParseError: If the file is malformed or an item has an unknown
            content type.
    """
    data = read_json(path)
    if not isinstance(data, dict):
        raise ParseError("expected a JSON object with an items field", path=str(path))

    notes: List[Note] = []
    tags: List[Tag] = []
    for i, raw in enumerate(data.get("items") or []):
        try:
            item = parse_item(raw)
        except ParseError as e:
            e.details.setdefault("path", str(path))
            e.details["index"] = i
            raise
        if isinstance(item, Note):
            notes.append(item)
        else:
            tags.append(item)
    logger.debug(f"Read {len(notes)} notes and {len(tags)} tags from {path}")
    return notes, tags
