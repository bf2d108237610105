"""Read Evernote export (ENEX) files.

ENEX is a specialized XML format; see
https://evernote.com/blog/how-evernotes-xml-export-format-works/.
"""

import datetime
import logging
from datetime import timezone
from typing import List, Optional

from lxml import etree

from notexfr.exceptions import ErrorCode, ParseError, StorageError
from notexfr.models.edam import Attributes
from notexfr.models.entity import ZERO_TIME
from notexfr.models.enex import Note
from notexfr.storage.files import PathLike

logger = logging.getLogger(__name__)

ENEX_TIME_FORMAT = "%Y%m%dT%H%M%SZ"


def _parse_time(value: Optional[str], path: PathLike) -> datetime.datetime:
    if not value:
        return ZERO_TIME
    try:
        return datetime.datetime.strptime(value.strip(), ENEX_TIME_FORMAT).replace(
            tzinfo=timezone.utc
        )
    except ValueError as e:
        raise ParseError(
            "invalid timestamp",
            path=str(path),
            value=value,
            code=ErrorCode.TIMESTAMP_INVALID,
        ) from e


def _text(element, tag: str) -> str:
    found = element.find(tag)
    if found is None or found.text is None:
        return ""
    return found.text


def read_enex(path: PathLike) -> List[Note]:
    """Read and parse the notes of an enex file.

    Raises:
        StorageError: If the file cannot be read.
        ParseError: If the file is not well-formed XML or a timestamp is invalid.
    """
    parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)
    try:
        tree = etree.parse(str(path), parser)
    except etree.XMLSyntaxError as e:
        raise ParseError(f"invalid ENEX file: {e}", path=str(path)) from e
    except OSError as e:
        raise StorageError(
            "could not read file", operation="read", path=str(path), original_error=e
        ) from e

    root = tree.getroot()
    if root.tag != "en-export":
        raise ParseError(
            f"expected root element en-export; got {root.tag}", path=str(path)
        )

    notes = []
    for element in root.iterfind("note"):
        attrs = element.find("note-attributes")
        notes.append(
            Note(
                title=_text(element, "title"),
                tags=[tag.text for tag in element.iterfind("tag") if tag.text],
                content=_text(element, "content"),
                created_at=_parse_time(_text(element, "created"), path),
                updated_at=_parse_time(_text(element, "updated"), path),
                attributes=Attributes(
                    source=_text(attrs, "source") if attrs is not None else "",
                    source_url=_text(attrs, "source-url") if attrs is not None else "",
                ),
            )
        )
    logger.debug(f"Read {len(notes)} notes from {path}")
    return notes
