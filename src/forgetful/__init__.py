"""forgetful: scoped membership tracking for cycle detection."""

from importlib.metadata import version as _version

__version__ = _version("forgetful")

from forgetful.observer import Observer, Observation
from forgetful.errors import CycleDetected
from forgetful.guard import visiting, cycle_guard

__all__ = [
    "Observer",
    "Observation",
    "CycleDetected",
    "visiting",
    "cycle_guard",
]
