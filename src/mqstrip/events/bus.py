"""Event bus carrying run, phase and per-file progress to listeners."""

import threading
from typing import Any, Callable


class EventBus:
    """Delivers Stripper progress events to console and test listeners.

    Per-file events such as ``FileClassified`` and ``FileWritten`` are
    emitted from pool worker threads, so dispatch holds a reentrant lock and
    one event reaches every listener before the next one starts. Listeners
    registered with :meth:`on_all` see each event before type-specific ones.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._listeners: dict[type, list[Callable]] = {}
        self._global_listeners: list[Callable] = []

    def subscribe(self, event_type: type, callback: Callable) -> None:
        """Register a callback for a specific event type."""
        with self._lock:
            self._listeners.setdefault(event_type, []).append(callback)

    def on_all(self, callback: Callable) -> None:
        """Register a callback that receives every event."""
        with self._lock:
            self._global_listeners.append(callback)

    def emit(self, event: Any) -> None:
        """Dispatch an event to all matching listeners."""
        with self._lock:
            for cb in self._global_listeners:
                cb(event)
            for cb in self._listeners.get(type(event), []):
                cb(event)
