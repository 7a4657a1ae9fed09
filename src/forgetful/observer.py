"""Observer and Observation: scoped "have I seen this?" bookkeeping.

An Observer remembers items only while somebody holds the Observation that
notice() returned for them. Releasing the Observation (explicitly, by leaving
a ``with`` block, or when it is garbage collected) forgets the item again.

Usage:
    observer = Observer()
    with observer.notice("foo") as observation:
        # While the observation is alive, notice() refuses "foo".
        assert observer.notice("foo") is None
    # Released on block exit.
    assert observer.notice("foo") is not None
"""

from __future__ import annotations

import logging
from typing import Generic, Hashable, TypeVar

from forgetful._registry import Registry

logger = logging.getLogger("forgetful.observer")

T = TypeVar("T", bound=Hashable)

# Passed by Observer.notice(); anything else is refused by Observation.__init__.
_ISSUED = object()


class Observation(Generic[T]):
    """Proof that an item is registered with an Observer.

    Created only by Observer.notice(); constructing one directly raises
    TypeError. Release removes the item from the shared registry exactly once,
    however many times (or from however many threads) it is requested.
    """

    __slots__ = ("_item", "_registry", "_released")

    def __init__(self, registry: Registry[T], item: T, _issuer: object = None) -> None:
        if _issuer is not _ISSUED:
            raise TypeError("Observation is created by Observer.notice()")
        self._item = item
        self._registry = registry
        self._released = False

    @property
    def item(self) -> T:
        return self._item

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        """Forget the item. Further calls do nothing."""
        with self._registry.lock:
            if self._released:
                return
            self._released = True
            self._registry.discard(self._item)

    def __enter__(self) -> Observation[T]:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def __del__(self) -> None:
        # __init__ may not have run if construction failed.
        if getattr(self, "_released", True):
            return
        logger.debug("Observation of %r released by garbage collection", self._item)
        self.release()

    def __repr__(self) -> str:
        return repr(self._item)


class Observer(Generic[T]):
    """Records observations of items and reports whether one is already held.

    Useful for algorithms that must not visit an item twice on the same path,
    e.g. recursive descent over a graph that may loop back on itself.

    Not thread-safe by default. Pass synchronized=True to guard the registry
    with a lock so notice() and release are atomic relative to each other.
    """

    __slots__ = ("_registry",)

    def __init__(self, *, synchronized: bool = False) -> None:
        self._registry: Registry[T] = Registry(synchronized)

    @property
    def synchronized(self) -> bool:
        return self._registry.synchronized

    def notice(self, item: T) -> Observation[T] | None:
        """Register item and return its Observation.

        Returns None if an Observation for an equal item is still alive.
        """
        if not self._registry.add(item):
            return None
        return Observation(self._registry, item, _ISSUED)

    def observed(self) -> frozenset[T]:
        """Snapshot of the items currently registered."""
        return self._registry.snapshot()

    def __contains__(self, item: object) -> bool:
        return item in self._registry

    def __repr__(self) -> str:
        return f"Observer({self._registry!r})"
