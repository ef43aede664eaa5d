"""GameLoop — the fixed-cadence tick orchestrator.

Tick cycle:
  1. Input — take at most one command and apply it
  2. Collisions — enemy contact, then traps
  3. Enemies — advance every enemy's motion pattern
  4. Explosions — detonate every due bomb
  5. Win check — player standing on the revealed door
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Callable

from bomberman.core.enums import Command, Outcome
from bomberman.core.models import COMMAND_OFFSETS, Vector2
from bomberman.core.snapshot import Snapshot
from bomberman.engine.command_queue import CommandQueue
from bomberman.engine.explosion import ExplosionEngine, ExplosionReport
from bomberman.systems.enemy_motion import EnemyMotion
from bomberman.systems.movement import MovementValidator
from bomberman.systems.persistence import PersistenceCodec
from bomberman.systems.rng import DeterministicRNG
from bomberman.utils.event_log import SimEvent

if TYPE_CHECKING:
    from bomberman.config import GameConfig
    from bomberman.core.world_state import WorldState
    from bomberman.utils.replay import ReplayRecorder

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TickResult:
    """Everything the host needs to know about one tick."""

    tick: int
    command: Command | None = None
    outcome: Outcome | None = None
    saved: bool | None = None
    quit: bool = False

    @property
    def terminal(self) -> bool:
        return self.outcome is not None or self.quit


class GameLoop:
    """The heartbeat of a game.

    Single-threaded mutation of WorldState. Terminal outcomes are returned
    to the caller; the loop never shuts the process down itself.
    """

    __slots__ = (
        "_config",
        "_world",
        "_commands",
        "_clock",
        "_sleep",
        "_codec",
        "_recorder",
        "_validator",
        "_motion",
        "_explosions",
        "_outcome",
        "_tick_events",
        "_last_report",
    )

    def __init__(
        self,
        config: GameConfig,
        world: WorldState,
        commands: CommandQueue | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        recorder: ReplayRecorder | None = None,
    ) -> None:
        self._config = config
        self._commands = commands or CommandQueue()
        self._clock = clock
        self._sleep = sleep
        self._codec = PersistenceCodec(config)
        self._recorder = recorder
        self._explosions = ExplosionEngine(config.blast_range)
        self._tick_events: list[SimEvent] = []
        self._last_report = ExplosionReport()
        self._install(world)

    # -- properties --

    @property
    def world(self) -> WorldState:
        return self._world

    @property
    def commands(self) -> CommandQueue:
        return self._commands

    @property
    def outcome(self) -> Outcome | None:
        return self._outcome

    @property
    def tick_events(self) -> list[SimEvent]:
        """Events emitted during the most recent tick."""
        return self._tick_events

    @property
    def last_explosions(self) -> ExplosionReport:
        return self._last_report

    def now_ms(self) -> float:
        return self._clock() * 1000.0

    def create_snapshot(self) -> Snapshot:
        return Snapshot.from_world(self._world, self.now_ms(), self._outcome)

    # -- running --

    def tick_once(self) -> TickResult:
        """Execute a single tick and report what happened."""
        self._tick_events = []
        self._last_report = ExplosionReport()
        tick = self._world.tick

        if self._outcome is not None:
            return TickResult(tick=tick, outcome=self._outcome)

        command = self._commands.poll()
        saved: bool | None = None
        if command is not None:
            match command:
                case Command.MOVE_UP | Command.MOVE_DOWN | Command.MOVE_LEFT | Command.MOVE_RIGHT:
                    self._move_player(COMMAND_OFFSETS[command])
                case Command.PLANT_BOMB:
                    self._plant_bomb()
                case Command.SAVE:
                    saved = self.save()
                case Command.QUIT:
                    logger.info("Tick %d: quit requested.", tick)
                    if self._recorder:
                        self._recorder.record_tick(tick, command, self._world)
                    return TickResult(tick=tick, command=command, quit=True)

        outcome = self._update()
        if outcome is not None:
            self._outcome = outcome
            self._emit("outcome", outcome.message)
            logger.info("Tick %d: %s", tick, outcome.message)

        if self._recorder:
            self._recorder.record_tick(tick, command, self._world, outcome)

        self._world.tick += 1
        return TickResult(tick=tick, command=command, outcome=outcome, saved=saved)

    def run(self) -> Outcome | None:
        """Tick at the configured cadence until the game ends, the player quits
        or ``max_ticks`` is reached. Returns the terminal outcome, if any."""
        cfg = self._config
        logger.info("=== Game started (seed=%d) ===", self._world.seed)
        try:
            while not cfg.max_ticks or self._world.tick < cfg.max_ticks:
                result = self.tick_once()
                if result.terminal:
                    break
                self._sleep(cfg.tick_interval)
        finally:
            if self._recorder:
                self._recorder.flush()
        logger.info("=== Game finished at tick %d ===", self._world.tick)
        return self._outcome

    # -- persistence --

    def save(self, path: str | Path | None = None) -> bool:
        path = path or self._config.save_file
        ok = self._codec.save(self._world, path)
        self._emit("save", f"Game saved to {path}" if ok else f"Unable to save game to {path}")
        return ok

    def load(self, path: str | Path | None = None) -> bool:
        """Replace the world with one read from *path*.

        The new world is staged completely before the swap; on failure the
        current world is left exactly as it was.
        """
        path = path or self._config.save_file
        staged = self._codec.load(path, now_ms=self.now_ms(), seed=self._config.seed)
        if staged is None:
            return False
        self._install(staged)
        self._emit("load", f"Game loaded from {path}")
        return True

    # -- internals --

    def _install(self, world: WorldState) -> None:
        self._world = world
        self._validator = MovementValidator(world.grid)
        self._motion = EnemyMotion(DeterministicRNG(world.seed), self._config.enemy_move_interval)
        self._outcome = None

    def _emit(self, category: str, message: str) -> None:
        self._tick_events.append(SimEvent(tick=self._world.tick, category=category, message=message))

    def _move_player(self, offset: Vector2) -> None:
        player = self._world.player
        target = player.pos + offset
        if self._validator.is_valid_move(target):
            player.pos = target
        else:
            logger.debug("Player move to %s rejected", target)

    def _plant_bomb(self) -> None:
        bomb = self._world.registry.plant_bomb(self._world.player.pos, self.now_ms())
        if bomb is not None:
            self._emit("bomb", f"Bomb planted at {bomb.pos}")

    def _update(self) -> Outcome | None:
        world = self._world
        player = world.player

        if world.registry.enemies_at(player.pos):
            return Outcome.CAUGHT_BY_ENEMY

        if world.grid.is_trap(player.pos):
            return Outcome.STEPPED_ON_TRAP

        self._motion.step_all(world.enemies, self._validator, world.tick)

        report = self._explosions.detonate_due(world, self.now_ms())
        self._last_report = report
        if report.detonated:
            self._emit("explosion", f"{len(report.detonated)} bomb(s) detonated")
        if report.enemies_eliminated:
            self._emit("enemy", f"{report.enemies_eliminated} enemy(ies) eliminated")
        if report.door_revealed:
            self._emit("door", f"Exit door revealed at {world.door.pos}")
        if report.outcome is not None:
            return report.outcome

        if world.door.visible and player.pos == world.door.pos:
            return Outcome.LEVEL_WON
        return None
