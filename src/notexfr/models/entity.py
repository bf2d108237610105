"""Core entity contracts shared by every service.

Entities from different services are re-associated through their link
values: strings derived from stable, human-meaningful attributes, ordered
from most to least distinguishing. When the IDs have changed between
services but some non-ID value has not, the link values approximate the
identity of a record. This is not a perfect solution; it is meant to
match most records in the common case.
"""

import datetime
from abc import abstractmethod
from datetime import timezone
from typing import List, Protocol, runtime_checkable

from pydantic import BaseModel, Field

# Zero timestamp (year 1) for synthesized records that have no timestamps
ZERO_TIME = datetime.datetime(1, 1, 1, tzinfo=timezone.utc)


def ensure_timezone_aware(dt_value: datetime.datetime) -> datetime.datetime:
    """Treat naive datetimes as UTC."""
    if dt_value.tzinfo is None:
        return dt_value.replace(tzinfo=timezone.utc)
    return dt_value


def utc_now() -> datetime.datetime:
    """Get current UTC time truncated to whole seconds."""
    return datetime.datetime.now(timezone.utc).replace(microsecond=0)


def truncate_to_second(dt_value: datetime.datetime) -> datetime.datetime:
    """Drop sub-second precision."""
    return dt_value.replace(microsecond=0)


def format_link_time(dt_value: datetime.datetime) -> str:
    """Format a timestamp as an RFC 3339 link value with second precision.

    UTC is rendered with a ``Z`` suffix so values produced by different
    services compare equal as plain strings.
    """
    dt_value = ensure_timezone_aware(dt_value)
    formatted = dt_value.isoformat(timespec="seconds")
    if dt_value.utcoffset() == datetime.timedelta(0):
        return formatted[: -len("+00:00")] + "Z"
    return formatted


@runtime_checkable
class Resource(Protocol):
    """Anything that carries a service-local ID."""

    def get_id(self) -> str: ...

    def set_id(self, value: str) -> None: ...


@runtime_checkable
class LinkID(Resource, Protocol):
    """A resource that can be matched against resources of another service."""

    def link_values(self) -> List[str]: ...


class ServiceID(BaseModel):
    """Identifies data as it's known in one service."""

    value: str = ""

    def get_id(self) -> str:
        return self.value

    def set_id(self, value: str) -> None:
        self.value = value


class Entity(BaseModel):
    """Base for parsed records: an ID plus link values.

    Subclasses define ``link_values``; its length is fixed per kind.
    """

    id: str = Field(default="", description="Service-local ID of the record")

    def get_id(self) -> str:
        return self.id

    def set_id(self, value: str) -> None:
        self.id = value

    @abstractmethod
    def link_values(self) -> List[str]:
        ...
