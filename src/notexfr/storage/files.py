"""Reading and writing local JSON files."""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional, Sequence, Union

from notexfr.exceptions import ErrorCode, ParseError, StorageError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def read_json(path: PathLike) -> Any:
    """Load a JSON document from a file.

    Raises:
        StorageError: If the file cannot be read.
        ParseError: If the file is not valid JSON.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ParseError(
            f"invalid JSON at line {e.lineno}, column {e.colno}", path=str(path)
        ) from e
    except OSError as e:
        raise StorageError(
            "could not read file",
            operation="read",
            path=str(path),
            original_error=e,
        ) from e


def _to_serializable(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, dict):
        return {key: _to_serializable(val) for key, val in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_serializable(val) for val in value]
    return value


def write_resources(
    resources: Union[Sequence[Any], dict],
    filename: Optional[PathLike] = None,
    indent: Optional[int] = None,
    verbose: bool = False,
    name: str = "resources",
) -> None:
    """Serialize resources to JSON and write them to a local file.

    If filename is empty, the JSON is printed to standard output instead.

    Raises:
        StorageError: If the file cannot be written.
    """
    data = json.dumps(_to_serializable(resources), indent=indent, ensure_ascii=False)
    if not filename:
        sys.stdout.write(data + "\n")
        return
    try:
        Path(filename).write_text(data + "\n", encoding="utf-8")
    except OSError as e:
        raise StorageError(
            "could not write file",
            operation="write",
            path=str(filename),
            code=ErrorCode.STORAGE_WRITE_FAILED,
            original_error=e,
        ) from e
    if verbose:
        logger.info(f"wrote {name} to {str(filename)!r}")
