"""Ordered, ID-indexed collections of resources from one service."""

from typing import Callable, Dict, Generic, Iterable, Iterator, List, Optional, TypeVar

from notexfr.exceptions import ErrorCode, NotexfrError
from notexfr.models.entity import LinkID

T = TypeVar("T", bound=LinkID)


class KeyedCollection(Generic[T]):
    """Resources indexed by ID, all originating from the same service.

    The keys preserve insertion order so you can iterate through items for
    easier comparison to the original inputs, while lookups stay constant
    time. A later item with an ID already seen replaces the earlier one in
    the index; both positions in the key order then resolve to the later item.
    """

    def __init__(self, items: Iterable[T] = ()):
        self._items: Dict[str, T] = {}
        self._keys: List[str] = []
        for item in items:
            item_id = item.get_id()
            self._items[item_id] = item
            self._keys.append(item_id)

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[T]:
        for key in self._keys:
            yield self._items[key]

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def get(self, key: str) -> Optional[T]:
        return self._items.get(key)

    @property
    def keys(self) -> List[str]:
        return list(self._keys)

    def to_list(self) -> List[T]:
        return list(self)

    def each(self, visit: Callable[[T], None]) -> None:
        """Visit items in collection order, stopping at the first error.

        Raises:
            NotexfrError: The handler's error with ``index`` and ``key`` added
                to its details. Other exceptions are wrapped.
        """
        for i, key in enumerate(self._keys):
            try:
                visit(self._items[key])
            except NotexfrError as e:
                e.details.setdefault("index", i)
                e.details.setdefault("key", key)
                raise
            except Exception as e:
                raise NotexfrError(
                    f"visit failed: {e}",
                    code=ErrorCode.COLLECTION_VISIT_FAILED,
                    details={"index": i, "key": key},
                ) from e
