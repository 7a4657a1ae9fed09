"""Scoped helpers: notice an item for the span of a block or a call.

visiting() is the ``with`` form: it turns a refused notice() into a
CycleDetected error and always releases the Observation on the way out.

cycle_guard is the decorator form for recursive functions. The Observer for
a call chain lives in a context variable: the outermost call creates it and
nested calls reuse it, so separate call chains (threads, asyncio tasks, or
simply successive top-level calls) never see each other's items.
"""

from __future__ import annotations

import contextvars
import functools
import logging
from contextlib import contextmanager
from typing import Callable, Hashable, Iterator, ParamSpec, TypeVar, overload

from forgetful.errors import CycleDetected
from forgetful.observer import Observation, Observer

logger = logging.getLogger("forgetful.guard")

P = ParamSpec("P")
R = TypeVar("R")
T = TypeVar("T", bound=Hashable)


@contextmanager
def visiting(observer: Observer[T], item: T) -> Iterator[Observation[T]]:
    """Hold item in observer for the duration of the block.

    Raises CycleDetected if item is already held.

    Usage:
        def find_leaf(graph, node, seen):
            with visiting(seen, node):
                nxt = graph.get(node)
                return node if nxt is None else find_leaf(graph, nxt, seen)
    """
    observation = observer.notice(item)
    if observation is None:
        logger.debug("Rejected %r: already being visited", item)
        raise CycleDetected(item)
    try:
        yield observation
    finally:
        observation.release()


def _first_argument(*args, **kwargs):
    if not args:
        raise TypeError(
            "cycle_guard needs key= for calls without a positional argument"
        )
    return args[0]


@overload
def cycle_guard(fn: Callable[P, R]) -> Callable[P, R]: ...


@overload
def cycle_guard(
    fn: None = None, *, key: Callable[..., Hashable] | None = None
) -> Callable[[Callable[P, R]], Callable[P, R]]: ...


def cycle_guard(fn=None, *, key=None):
    """Decorator: raise CycleDetected when fn re-enters an item on its own call path.

    The item for a call is key(*args, **kwargs), by default the first
    positional argument. Use key for methods, where args[0] is self.

    Usage:
        @cycle_guard
        def depth(node):
            return 1 + max((depth(child) for child in node.children), default=0)

        @cycle_guard(key=lambda self, node: node.name)
        def resolve(self, node): ...
    """
    key_fn = key if key is not None else _first_argument

    def decorate(func: Callable[P, R]) -> Callable[P, R]:
        current: contextvars.ContextVar[Observer | None] = contextvars.ContextVar(
            f"cycle_guard:{func.__qualname__}", default=None
        )

        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            observer = current.get()
            token = None
            if observer is None:
                observer = Observer()
                token = current.set(observer)
            try:
                with visiting(observer, key_fn(*args, **kwargs)):
                    return func(*args, **kwargs)
            finally:
                if token is not None:
                    current.reset(token)

        return wrapper

    if fn is not None:
        return decorate(fn)
    return decorate
