"""Bounded, thread-safe feed of game events for API clients."""

from __future__ import annotations

import threading
from collections import Counter, deque
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SimEvent:
    """Something noteworthy that happened on a tick.

    ``category`` is one of: bomb, explosion, enemy, door, save, load, outcome.
    """

    tick: int
    category: str
    message: str


class EventLog:
    """Keeps the most recent ``maxlen`` events; older ones fall off the front.

    The GameLoop thread appends one batch per tick while request handlers
    read copies, so every access goes through one lock.
    """

    __slots__ = ("_events", "_lock")

    def __init__(self, maxlen: int = 1000) -> None:
        self._events: deque[SimEvent] = deque(maxlen=maxlen)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def append(self, event: SimEvent) -> None:
        with self._lock:
            self._events.append(event)

    def append_many(self, events: list[SimEvent]) -> None:
        with self._lock:
            self._events.extend(events)

    def since_tick(self, tick: int, category: str | None = None) -> list[SimEvent]:
        """Events from *tick* onwards, optionally limited to one category."""
        with self._lock:
            return [
                e for e in self._events
                if e.tick >= tick and (category is None or e.category == category)
            ]

    def latest(self, count: int = 50) -> list[SimEvent]:
        with self._lock:
            items = list(self._events)
        return items[-count:]

    def counts(self) -> dict[str, int]:
        """Number of retained events per category."""
        with self._lock:
            return dict(Counter(e.category for e in self._events))

    def clear(self) -> None:
        with self._lock:
            self._events.clear()
