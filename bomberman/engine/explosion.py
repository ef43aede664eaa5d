"""ExplosionEngine — bomb fuses and directional blast propagation.

Bomb lifecycle: PLANTED -> EXPLODING -> REMOVED.

A bomb turns EXPLODING on the first tick where its fuse has elapsed. The
blast hits the bomb's own cell, then runs outward along each cardinal axis
up to ``blast_range`` cells:

- an indestructible block stops that arm with no effect;
- a destructible block is destroyed and stops that arm (a carrier block
  reveals the exit door for good);
- on any other cell every enemy is eliminated, and a player standing there
  ends the game at once, cutting short the rest of the tick's explosions.

The bomb is always removed afterwards and its capacity handed back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from bomberman.core.enums import Cell, Direction, Outcome
from bomberman.core.models import DIRECTION_OFFSETS, Bomb, Vector2
from bomberman.core.world_state import WorldState

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ExplosionReport:
    """What the explosions of one tick did to the world."""

    detonated: list[Bomb] = field(default_factory=list)
    destroyed: list[Vector2] = field(default_factory=list)
    enemies_eliminated: int = 0
    door_revealed: bool = False
    outcome: Outcome | None = None


class ExplosionEngine:
    """Detonates due bombs against a world."""

    __slots__ = ("_blast_range",)

    def __init__(self, blast_range: int = 3) -> None:
        self._blast_range = blast_range

    def blast_cells(self, world: WorldState, bomb: Bomb) -> list[Vector2]:
        """Cells a detonation of *bomb* would hit right now, without mutating anything.

        Destructible blocks that would be destroyed are included; cells
        behind them and indestructible blocks are not.
        """
        cells: list[Vector2] = []
        for direction in (None, *Direction):
            for pos in self._arm(bomb.pos, direction):
                cell = world.grid.get(pos)
                if cell == Cell.INDESTRUCTIBLE:
                    break
                cells.append(pos)
                if cell in (Cell.DESTRUCTIBLE, Cell.CARRIER):
                    break
        return cells

    def detonate_due(self, world: WorldState, now_ms: float) -> ExplosionReport:
        """Detonate every bomb whose fuse has elapsed at *now_ms*."""
        report = ExplosionReport()
        bombs = world.registry.bombs
        i = 0
        while i < len(bombs):
            bomb = bombs[i]
            if not bomb.is_due(now_ms):
                i += 1
                continue
            outcome = self._detonate(world, bomb, report)
            # Swap-with-last: slot i now holds an unchecked bomb.
            world.registry.remove_bomb(i)
            report.detonated.append(bomb)
            logger.debug("Bomb at %s detonated after %.0fms", bomb.pos, bomb.elapsed(now_ms))
            if outcome is not None:
                report.outcome = outcome
                break
        return report

    # -- internals --

    def _arm(self, origin: Vector2, direction: Direction | None) -> list[Vector2]:
        if direction is None:
            return [origin]
        step = DIRECTION_OFFSETS[direction]
        return [origin + step.scaled(i) for i in range(1, self._blast_range + 1)]

    def _detonate(self, world: WorldState, bomb: Bomb, report: ExplosionReport) -> Outcome | None:
        arms: list[Direction | None] = [None, *Direction]
        for direction in arms:
            for pos in self._arm(bomb.pos, direction):
                keep_going, outcome = self._hit(world, pos, report)
                if outcome is not None:
                    return outcome
                if not keep_going:
                    break
        return None

    def _hit(self, world: WorldState, pos: Vector2, report: ExplosionReport) -> tuple[bool, Outcome | None]:
        """Apply the blast to one cell. Returns (arm continues, terminal outcome)."""
        grid = world.grid
        reg = world.registry
        match grid.get(pos):
            case Cell.INDESTRUCTIBLE:
                return False, None
            case Cell.DESTRUCTIBLE | Cell.CARRIER as cell:
                grid.set(pos, Cell.EMPTY)
                report.destroyed.append(pos)
                if cell == Cell.CARRIER and not reg.door.visible:
                    reg.door.reveal()
                    report.door_revealed = True
                    logger.info("Exit door revealed at %s", pos)
                return False, None
            case Cell.EMPTY | Cell.TRAP | Cell.EXIT_DOOR:
                eliminated = reg.eliminate_enemies_at(pos)
                if eliminated:
                    report.enemies_eliminated += eliminated
                    logger.debug("%d enemy(ies) eliminated at %s", eliminated, pos)
                if reg.player.pos == pos:
                    return False, Outcome.BLOWN_UP_BY_BOMB
                return True, None
        raise ValueError(f"Unhandled cell at {pos}: {grid.get(pos)!r}")
