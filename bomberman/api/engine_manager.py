"""EngineManager — singleton wrapper that runs the GameLoop on a background thread.

The API reads from an atomically-swapped immutable Snapshot and only talks
to the world through the thread-safe CommandQueue; the GameLoop mutates
WorldState exclusively on its own thread (Single-Writer preserved).
"""

from __future__ import annotations

import logging
import threading
import time
from pathlib import Path
from typing import TYPE_CHECKING

from bomberman.core.enums import Command, Outcome
from bomberman.core.snapshot import Snapshot
from bomberman.engine.command_queue import CommandQueue
from bomberman.engine.game_loop import GameLoop
from bomberman.systems.generator import WorldGenerator
from bomberman.utils.event_log import EventLog, SimEvent

if TYPE_CHECKING:
    from bomberman.config import GameConfig

logger = logging.getLogger(__name__)


class EngineManager:
    """Manages the game lifecycle on a background thread.

    Provides thread-safe access to:
      - latest snapshot (atomic reference swap)
      - event log (lock-guarded buffer)
      - player commands (command queue, one consumed per tick)
      - control commands (start / pause / resume / step / reset / load)
    """

    def __init__(self, config: GameConfig) -> None:
        self._config = config
        self.config = config
        self._tick_rate: float = config.tick_interval

        self._commands = CommandQueue()
        self._loop: GameLoop | None = None

        # Thread-safe shared state
        self._snapshot_lock = threading.Lock()
        self._loop_lock = threading.Lock()
        self._latest_snapshot: Snapshot | None = None
        self._event_log = EventLog()

        # Control
        self._thread: threading.Thread | None = None
        self._running = threading.Event()
        self._paused = threading.Event()
        self._step_requested = threading.Event()
        self._stop_requested = threading.Event()

        self._build()

    # -- public properties --

    @property
    def running(self) -> bool:
        return self._running.is_set()

    @property
    def paused(self) -> bool:
        return self._paused.is_set()

    @property
    def tick_rate(self) -> float:
        return self._tick_rate

    @tick_rate.setter
    def tick_rate(self, value: float) -> None:
        self._tick_rate = max(0.01, min(value, 2.0))

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def outcome(self) -> Outcome | None:
        return self._loop.outcome if self._loop else None

    # -- snapshot access --

    def get_snapshot(self) -> Snapshot | None:
        with self._snapshot_lock:
            return self._latest_snapshot

    # -- commands --

    def push_command(self, command: Command) -> None:
        self._commands.push(command)

    def save(self, path: str | Path | None = None) -> bool:
        assert self._loop is not None
        with self._loop_lock:
            ok = self._loop.save(path)
            self._publish_snapshot_and_events()
        return ok

    def load(self, path: str | Path | None = None) -> bool:
        """Swap in a saved world. The current world survives a failed load."""
        assert self._loop is not None
        with self._loop_lock:
            ok = self._loop.load(path)
            if ok:
                self._commands.clear()
            self._publish_snapshot_and_events()
        return ok

    # -- lifecycle --

    def start(self) -> None:
        if self._running.is_set():
            return
        self._stop_requested.clear()
        self._paused.clear()
        self._running.set()
        self._thread = threading.Thread(target=self._run_loop, name="engine-loop", daemon=True)
        self._thread.start()
        logger.info("EngineManager started (tick_rate=%.3fs)", self._tick_rate)

    def pause(self) -> None:
        self._paused.set()
        logger.info("EngineManager paused at tick %d", self._current_tick())

    def resume(self) -> None:
        self._paused.clear()
        logger.info("EngineManager resumed at tick %d", self._current_tick())

    def step(self) -> None:
        """Execute exactly one tick (must be paused)."""
        if not self._paused.is_set():
            self.pause()
        self._step_requested.set()

    def stop(self) -> None:
        self._stop_requested.set()
        self._paused.clear()
        self._running.clear()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)
        logger.info("EngineManager stopped.")

    def reset(self) -> None:
        """Stop, regenerate, and leave the manager ready to start."""
        self.stop()
        self._event_log.clear()
        self._commands.clear()
        self._build()
        logger.info("EngineManager reset.")

    def tick(self) -> None:
        """Run one tick on the calling thread (used when no engine thread runs)."""
        assert self._loop is not None
        with self._loop_lock:
            self._loop.tick_once()
            self._publish_snapshot_and_events()

    # -- internals --

    def _build(self) -> None:
        """Generate a fresh world and the loop that drives it."""
        world = WorldGenerator(self._config).initialize(self._config.seed)
        self._loop = GameLoop(config=self._config, world=world, commands=self._commands)
        snap = self._loop.create_snapshot()
        with self._snapshot_lock:
            self._latest_snapshot = snap

    def _run_loop(self) -> None:
        """Background thread main loop."""
        logger.info("Engine thread started.")
        assert self._loop is not None

        while not self._stop_requested.is_set():
            # Handle pause
            if self._paused.is_set() and not self._step_requested.is_set():
                time.sleep(0.01)
                continue

            single_step = self._step_requested.is_set()
            if single_step:
                self._step_requested.clear()

            with self._loop_lock:
                result = self._loop.tick_once()
                self._publish_snapshot_and_events()

            if result.terminal:
                logger.info("Game ended at tick %d (%s).", result.tick,
                            result.outcome.name if result.outcome else "quit")
                break

            # Rate limiting
            if not single_step:
                time.sleep(self._tick_rate)

        self._running.clear()
        logger.info("Engine thread exited.")

    def _publish_snapshot_and_events(self) -> None:
        """Swap snapshot + push events from the last tick."""
        assert self._loop is not None
        snap = self._loop.create_snapshot()
        with self._snapshot_lock:
            self._latest_snapshot = snap

        events: list[SimEvent] = self._loop.tick_events
        if events:
            self._event_log.append_many(events)
            self._loop.tick_events.clear()

    def _current_tick(self) -> int:
        if self._loop:
            return self._loop.world.tick
        return 0
