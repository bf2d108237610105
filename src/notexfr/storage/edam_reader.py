"""Read Evernote resources saved as JSON arrays, one file per kind."""

import logging
from typing import List, Type, TypeVar

from pydantic import BaseModel, ValidationError

from notexfr.exceptions import ParseError
from notexfr.models.edam import Note, Notebook, Tag
from notexfr.storage.files import PathLike, read_json

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def _read_list(path: PathLike, model: Type[M]) -> List[M]:
    data = read_json(path)
    if data is None:
        return []
    if not isinstance(data, list):
        raise ParseError(
            f"expected a JSON array of {model.__name__} objects", path=str(path)
        )
    out: List[M] = []
    for i, raw in enumerate(data):
        try:
            out.append(model.model_validate(raw))
        except ValidationError as e:
            raise ParseError(
                f"invalid {model.__name__} at index {i}: {e.error_count()} validation error(s)",
                path=str(path),
                value=raw.get("ID") if isinstance(raw, dict) else raw,
            ) from e
    logger.debug(f"Read {len(out)} {model.__name__} records from {path}")
    return out


def read_notebooks(path: PathLike) -> List[Notebook]:
    """Read and parse notebooks saved in a local JSON file."""
    return _read_list(path, Notebook)


def read_notes(path: PathLike) -> List[Note]:
    """Read and parse notes saved in a local JSON file."""
    return _read_list(path, Note)


def read_tags(path: PathLike) -> List[Tag]:
    """Read and parse tags saved in a local JSON file."""
    return _read_list(path, Tag)
