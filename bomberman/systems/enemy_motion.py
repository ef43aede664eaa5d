"""Enemy motion patterns.

Each enemy carries a counter bumped once per tick. Only on the tick where the
counter (before the bump) equals the move interval does the enemy try to
step; the counter then resets. With the default interval of 10 that is one
attempt every 11 ticks.
"""

from __future__ import annotations

import logging

from bomberman.core.enums import Domain, MovePattern
from bomberman.core.models import Enemy, Vector2
from bomberman.systems.movement import MovementValidator
from bomberman.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)


def pattern_offset(pattern: MovePattern, roll: int) -> Vector2:
    """Map a uniform roll in {0,1,2,3} to a step for *pattern*.

    Horizontal: {0,1} -> +x, {2,3} -> -x.
    Vertical:   {0,1} -> -y, {2,3} -> +y.
    Both applies the two mappings at once, giving a diagonal step.
    """
    dx = 1 if roll < 2 else -1
    dy = -1 if roll < 2 else 1
    match pattern:
        case MovePattern.HORIZONTAL:
            return Vector2(dx, 0)
        case MovePattern.VERTICAL:
            return Vector2(0, dy)
        case MovePattern.BOTH:
            return Vector2(dx, dy)
    raise ValueError(f"Unknown movement pattern: {pattern!r}")


class EnemyMotion:
    """Advances enemy counters and applies validated pattern steps."""

    __slots__ = ("_rng", "_interval")

    def __init__(self, rng: DeterministicRNG, interval: int = 10) -> None:
        self._rng = rng
        self._interval = interval

    def step(self, enemy: Enemy, validator: MovementValidator, tick: int) -> bool:
        """Advance *enemy* by one tick. Returns True if it changed cell."""
        due = enemy.counter == self._interval
        enemy.counter += 1
        if not due:
            return False
        enemy.counter = 0

        roll = self._rng.next_int(Domain.ENEMY_MOVE, enemy.id, tick, 0, 3)
        old_pos = enemy.pos
        enemy.pos = old_pos + pattern_offset(enemy.pattern, roll)
        if not validator.is_valid_move(enemy.pos):
            enemy.pos = old_pos
            logger.debug("Enemy %d blocked at %s", enemy.id, old_pos)
            return False
        return True

    def step_all(self, enemies: list[Enemy], validator: MovementValidator, tick: int) -> int:
        return sum(1 for enemy in enemies if self.step(enemy, validator, tick))
