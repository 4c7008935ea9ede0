"""Fixed-capacity, oldest-evicting sequence shared by the ledger and the logger."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class BoundedLog(Generic[T]):
    """Ordered sequence with a fixed capacity.

    The ledger keeps newest entries at the head and uses ``prepend``; the
    logger keeps append order and uses ``append``. Either way the oldest
    entries are the ones evicted once capacity is exceeded.
    """

    def __init__(self, capacity: int, items: Iterable[T] = ()) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        self._items: list[T] = list(items)

    @property
    def capacity(self) -> int:
        return self._capacity

    def resize(self, capacity: int) -> None:
        """Change capacity. Excess entries are dropped on the next insert."""
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity

    def prepend(self, item: T) -> list[T]:
        """Insert at the head, evicting from the tail. Returns evicted items."""
        items = [item, *self._items]
        self._items = items[: self._capacity]
        return items[self._capacity :]

    def append(self, item: T) -> list[T]:
        """Insert at the tail, evicting from the head. Returns evicted items."""
        self._items.append(item)
        overflow = len(self._items) - self._capacity
        if overflow <= 0:
            return []
        evicted = self._items[:overflow]
        self._items = self._items[overflow:]
        return evicted

    def replace(self, items: Iterable[T]) -> None:
        """Swap the whole content for ``items``, as given."""
        self._items = list(items)

    def update_where(self, predicate: Callable[[T], bool], transform: Callable[[T], T]) -> int:
        """Replace every item matching ``predicate`` with ``transform(item)``."""
        changed = 0
        for index, item in enumerate(self._items):
            if predicate(item):
                self._items[index] = transform(item)
                changed += 1
        return changed

    def remove_where(self, predicate: Callable[[T], bool]) -> list[T]:
        """Drop every item matching ``predicate``. Returns the removed items."""
        kept: list[T] = []
        removed: list[T] = []
        for item in self._items:
            (removed if predicate(item) else kept).append(item)
        self._items = kept
        return removed

    def find(self, predicate: Callable[[T], bool]) -> T | None:
        return next((item for item in self._items if predicate(item)), None)

    def tail(self, count: int) -> list[T]:
        """Return the last ``count`` items."""
        if count <= 0:
            return []
        return self._items[-count:]

    def clear(self) -> None:
        self._items = []

    def snapshot(self) -> list[T]:
        """Return a shallow copy of the items in order."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def __getitem__(self, index: int) -> T:
        return self._items[index]

    def __repr__(self) -> str:
        return f"BoundedLog(capacity={self._capacity}, size={len(self._items)})"
