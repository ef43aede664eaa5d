"""Thread-safe command inbox feeding the GameLoop."""

from __future__ import annotations

import queue

from bomberman.core.enums import Command


class CommandQueue:
    """MPSC (multiple-producer, single-consumer) queue of player commands.

    Input sources push commands; the GameLoop takes at most one per tick.
    """

    __slots__ = ("_queue",)

    def __init__(self) -> None:
        self._queue: queue.Queue[Command] = queue.Queue()

    def push(self, command: Command) -> None:
        """Thread-safe enqueue."""
        self._queue.put_nowait(command)

    def extend(self, commands: list[Command]) -> None:
        for command in commands:
            self._queue.put_nowait(command)

    def poll(self) -> Command | None:
        """Return the next command, or None if nothing is pending."""
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None

    def clear(self) -> None:
        while self.poll() is not None:
            pass

    @property
    def empty(self) -> bool:
        return self._queue.empty()
