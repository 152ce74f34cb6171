"""Event system: bus and event types for the run lifecycle."""

from mqstrip.events.bus import EventBus
from mqstrip.events.types import (
    FileClassified,
    FileFailed,
    FileWritten,
    PhaseCompleted,
    PhaseFailed,
    PhaseStarted,
    RunCompleted,
    RunStarted,
)

__all__ = [
    "EventBus",
    "FileClassified",
    "FileFailed",
    "FileWritten",
    "PhaseCompleted",
    "PhaseFailed",
    "PhaseStarted",
    "RunCompleted",
    "RunStarted",
]
