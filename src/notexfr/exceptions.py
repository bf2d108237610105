"""Custom exceptions for notexfr.

Provides a structured exception hierarchy with error codes and
machine-readable error information. Every failure aborts the whole
operation; nothing in the library retries.
"""
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Error codes for machine-readable error identification."""

    # Parse errors (1xxx)
    PARSE_FAILED = 1001
    CONTENT_TYPE_INVALID = 1002
    TIMESTAMP_INVALID = 1003

    # Invariant errors (2xxx)
    LINK_VALUES_EMPTY = 2001
    LINK_VALUES_LENGTH = 2002
    ENTITY_KIND_UNEXPECTED = 2003
    COLLECTION_VISIT_FAILED = 2004

    # Content errors (3xxx)
    CONTENT_NODE_MISSING = 3001
    CONTENT_PARSE_FAILED = 3002

    # Storage errors (4xxx)
    STORAGE_READ_FAILED = 4001
    STORAGE_WRITE_FAILED = 4002

    # Configuration errors (6xxx)
    CONFIG_MISSING = 6002


class NotexfrError(Exception):
    """Base exception for all notexfr errors.

    Attributes:
        message: Human-readable error message
        code: Machine-readable error code
        details: Additional context about the error
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.PARSE_FAILED,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dictionary for serialization."""
        return {
            "error": self.__class__.__name__,
            "code": self.code.value,
            "code_name": self.code.name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"[{self.code.name}] {self.message} ({detail_str})"
        return f"[{self.code.name}] {self.message}"


class ParseError(NotexfrError):
    """Raised when an input file or record cannot be decoded."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        value: Optional[Any] = None,
        code: ErrorCode = ErrorCode.PARSE_FAILED,
    ):
        details = {}
        if path:
            details["path"] = path
        if value is not None:
            details["value"] = str(value)[:100]

        super().__init__(message, code=code, details=details)
        self.path = path
        self.value = value


class LinkValuesError(NotexfrError):
    """Raised when an entity exposes the wrong number of link values.

    This is a data-contract violation, never a silent skip.
    """

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        entity_id: Optional[str] = None,
        expected: Optional[int] = None,
        actual: Optional[int] = None,
        code: ErrorCode = ErrorCode.LINK_VALUES_LENGTH,
    ):
        details: Dict[str, Any] = {}
        if service:
            details["service"] = service
        if entity_id is not None:
            details["entity_id"] = entity_id
        if expected is not None:
            details["expected"] = expected
        if actual is not None:
            details["actual"] = actual

        super().__init__(message, code=code, details=details)
        self.service = service
        self.entity_id = entity_id
        self.expected = expected
        self.actual = actual


class EntityKindError(NotexfrError):
    """Raised when a converter receives an entity kind it cannot handle."""

    def __init__(self, got: Any, expected: Optional[str] = None):
        details = {"got": type(got).__name__}
        if expected:
            details["expected"] = expected
        super().__init__(
            "unexpected entity kind",
            code=ErrorCode.ENTITY_KIND_UNEXPECTED,
            details=details,
        )
        self.got = got
        self.expected = expected


class ContentExtractionError(NotexfrError):
    """Raised when a note body is missing part of its markup envelope."""

    def __init__(
        self,
        node_path: str,
        code: ErrorCode = ErrorCode.CONTENT_NODE_MISSING,
        original_error: Optional[Exception] = None,
    ):
        if code is ErrorCode.CONTENT_NODE_MISSING:
            message = f"could not find node: {node_path}"
        else:
            message = f"could not parse content at: {node_path}"
        details = {"node": node_path}
        if original_error:
            details["original_error"] = str(original_error)[:200]
        super().__init__(message, code=code, details=details)
        self.node_path = node_path
        self.original_error = original_error


class StorageError(NotexfrError):
    """Raised for file read/write errors."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        path: Optional[str] = None,
        code: ErrorCode = ErrorCode.STORAGE_READ_FAILED,
        original_error: Optional[Exception] = None,
    ):
        details = {}
        if operation:
            details["operation"] = operation
        if path:
            details["path"] = path
        if original_error:
            details["original_error"] = str(original_error)[:200]

        super().__init__(message, code=code, details=details)
        self.operation = operation
        self.path = path
        self.original_error = original_error
