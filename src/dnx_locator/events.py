"""Diagnostic event sinks.

The locator reports problems (a runtime that cannot be found) as events
instead of exceptions. Anything with an ``emit(kind, payload)`` method can
receive them.
"""

from __future__ import annotations

from typing import Any, List, Protocol, Tuple


class EventTypes:
    ERROR = "error"


class EventEmitter(Protocol):
    def emit(self, kind: str, payload: Any) -> None:
        ...


class NullEventEmitter:
    """Discards every event."""

    def emit(self, kind: str, payload: Any) -> None:
        pass


class CollectingEventEmitter:
    """Keeps emitted events in memory, in emission order."""

    def __init__(self) -> None:
        self.events: List[Tuple[str, Any]] = []

    def emit(self, kind: str, payload: Any) -> None:
        self.events.append((kind, payload))

    def of_kind(self, kind: str) -> List[Any]:
        """Return payloads of every event of the given kind."""
        return [payload for event_kind, payload in self.events if event_kind == kind]
