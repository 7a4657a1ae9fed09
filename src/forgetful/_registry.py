"""Registry: the shared set of currently-observed items.

One Registry is owned jointly by an Observer and every Observation it has
issued. It is never copied; all of them read and mutate the same set.

The lock is a no-op unless the Observer was built with synchronized=True.
"""

from __future__ import annotations

import threading
from contextlib import nullcontext
from typing import Generic, Hashable, TypeVar

T = TypeVar("T", bound=Hashable)


class Registry(Generic[T]):
    __slots__ = ("_items", "_lock")

    def __init__(self, synchronized: bool = False) -> None:
        self._items: set[T] = set()
        self._lock = threading.RLock() if synchronized else nullcontext()

    @property
    def synchronized(self) -> bool:
        return not isinstance(self._lock, nullcontext)

    @property
    def lock(self):
        """Re-entrant, so callers may hold it across add()/discard()."""
        return self._lock

    def add(self, item: T) -> bool:
        """Insert item unless present. Returns False if it was already there."""
        with self._lock:
            if item in self._items:
                return False
            self._items.add(item)
            return True

    def discard(self, item: T) -> None:
        with self._lock:
            self._items.discard(item)

    def snapshot(self) -> frozenset[T]:
        with self._lock:
            return frozenset(self._items)

    def __contains__(self, item: object) -> bool:
        with self._lock:
            return item in self._items

    def __repr__(self) -> str:
        return repr(set(self.snapshot()))
