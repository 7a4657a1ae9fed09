"""Errors raised by the scoped helpers in forgetful.guard."""

from __future__ import annotations


class CycleDetected(Exception):
    """An item was entered again while an enclosing scope still held it."""

    def __init__(self, item: object) -> None:
        super().__init__(f"cycle detected: {item!r}")
        self.item = item
