"""EntityRegistry — owns the player, enemies, bombs and the exit door."""

from __future__ import annotations

import logging

from bomberman.core.enums import MovePattern
from bomberman.core.models import Bomb, Enemy, ExitDoor, Player, Vector2

logger = logging.getLogger(__name__)


class EntityRegistry:
    """Lifecycle owner for every entity in a world.

    Enemies and bombs live in plain lists and are removed by swapping the
    last element into the freed slot, so callers must not rely on ordering.
    Bomb ownership is not tracked per bomb: there is only one player, and
    every removal hands one unit of capacity back to it.
    """

    __slots__ = ("player", "door", "enemies", "bombs", "num_bombs", "fuse_ms", "bombs_planted", "_next_enemy_id")

    def __init__(
        self,
        player: Player,
        door: ExitDoor,
        num_bombs: int = 3,
        fuse_ms: int = 3000,
    ) -> None:
        self.player = player
        self.door = door
        self.enemies: list[Enemy] = []
        self.bombs: list[Bomb] = []
        self.num_bombs = num_bombs
        self.fuse_ms = fuse_ms
        self.bombs_planted: int = 0
        self._next_enemy_id: int = 1

    # -- enemies --

    def spawn_enemy(self, pos: Vector2, pattern: MovePattern) -> Enemy:
        enemy = Enemy(id=self._next_enemy_id, pos=pos, pattern=MovePattern(pattern))
        self._next_enemy_id += 1
        self.enemies.append(enemy)
        return enemy

    def remove_enemy(self, index: int) -> Enemy:
        """Remove the enemy at *index* by swapping the last one into its slot."""
        removed = self.enemies[index]
        last = self.enemies.pop()
        if index < len(self.enemies):
            self.enemies[index] = last
        return removed

    def enemies_at(self, pos: Vector2) -> list[Enemy]:
        return [e for e in self.enemies if e.pos == pos]

    def eliminate_enemies_at(self, pos: Vector2) -> int:
        """Remove every enemy standing on *pos*. Returns how many were removed."""
        removed = 0
        i = 0
        while i < len(self.enemies):
            if self.enemies[i].pos == pos:
                self.remove_enemy(i)
                removed += 1
            else:
                i += 1
        return removed

    # -- bombs --

    @property
    def active_bombs(self) -> int:
        return len(self.bombs)

    def plant_bomb(self, pos: Vector2, now_ms: float) -> Bomb | None:
        """Plant a bomb at *pos*. Returns None when capacity or slots are exhausted."""
        if not self.player.can_plant or len(self.bombs) >= self.num_bombs:
            logger.debug("Plant rejected at %s (capacity=%d, active=%d)",
                         pos, self.player.capacity, len(self.bombs))
            return None
        bomb = Bomb(pos=pos, planted_at=now_ms, fuse_ms=self.fuse_ms)
        self.bombs.append(bomb)
        self.player.capacity -= 1
        self.bombs_planted += 1
        return bomb

    def remove_bomb(self, index: int) -> Bomb:
        """Remove the bomb at *index* and hand one unit of capacity back."""
        removed = self.bombs[index]
        last = self.bombs.pop()
        if index < len(self.bombs):
            self.bombs[index] = last
        self.player.capacity += 1
        return removed

    def restore_bomb(self, pos: Vector2, now_ms: float) -> Bomb:
        """Re-arm a bomb read from a save file; the fuse restarts from *now_ms*."""
        if len(self.bombs) >= self.num_bombs:
            raise ValueError(f"Cannot hold more than {self.num_bombs} bombs")
        bomb = Bomb(pos=pos, planted_at=now_ms, fuse_ms=self.fuse_ms)
        self.bombs.append(bomb)
        self.player.capacity = self.num_bombs - len(self.bombs)
        return bomb

    # -- invariants --

    def check_invariants(self) -> None:
        """Raise AssertionError if the capacity bookkeeping has drifted."""
        assert 0 <= self.player.capacity <= self.num_bombs, self.player.capacity
        assert len(self.bombs) <= self.num_bombs, len(self.bombs)
        assert self.player.capacity + len(self.bombs) == self.num_bombs
