"""Immutable view of the world state for renderers and the API thread."""

from __future__ import annotations

from dataclasses import dataclass

from bomberman.core.enums import Cell, MovePattern, Outcome
from bomberman.core.models import Vector2
from bomberman.core.world_state import WorldState

# Symbols shared by the text renderer and the save file
CELL_SYMBOLS: dict[Cell, str] = {
    Cell.EMPTY: " ",
    Cell.DESTRUCTIBLE: "#",
    Cell.CARRIER: "#",
    Cell.INDESTRUCTIBLE: "X",
    Cell.TRAP: "T",
    Cell.EXIT_DOOR: "D",
}

PLAYER_SYMBOL = "P"
ENEMY_SYMBOL = "E"
BOMB_SYMBOL = "B"


@dataclass(frozen=True, slots=True)
class EnemyView:
    id: int
    pos: Vector2
    pattern: MovePattern


@dataclass(frozen=True, slots=True)
class BombView:
    pos: Vector2
    remaining_ms: float


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Read-only picture of one tick, safe to share across threads.

    ``cells`` holds the terrain with the exit-door marker overlaid once the
    door is visible, so a renderer never needs to consult the registry.
    """

    tick: int
    seed: int
    width: int
    height: int
    cells: tuple[tuple[Cell, ...], ...]
    player: Vector2
    capacity: int
    enemies: tuple[EnemyView, ...]
    bombs: tuple[BombView, ...]
    door: Vector2
    door_visible: bool
    bombs_planted: int
    outcome: Outcome | None = None

    @classmethod
    def from_world(cls, world: WorldState, now_ms: float = 0.0, outcome: Outcome | None = None) -> Snapshot:
        reg = world.registry
        rows = [list(row) for row in world.grid.rows()]
        if reg.door.visible:
            rows[reg.door.pos.y][reg.door.pos.x] = Cell.EXIT_DOOR
        return cls(
            tick=world.tick,
            seed=world.seed,
            width=world.grid.width,
            height=world.grid.height,
            cells=tuple(tuple(row) for row in rows),
            player=reg.player.pos,
            capacity=reg.player.capacity,
            enemies=tuple(EnemyView(e.id, e.pos, e.pattern) for e in reg.enemies),
            bombs=tuple(
                BombView(b.pos, max(0.0, b.fuse_ms - b.elapsed(now_ms))) for b in reg.bombs
            ),
            door=reg.door.pos,
            door_visible=reg.door.visible,
            bombs_planted=reg.bombs_planted,
            outcome=outcome,
        )

    def cell_at(self, pos: Vector2) -> Cell:
        return self.cells[pos.y][pos.x]

    def terrain_rows(self) -> list[str]:
        """Grid rows as symbol strings, without moving entities."""
        return ["".join(CELL_SYMBOLS[c] for c in row) for row in self.cells]

    def render_rows(self) -> list[str]:
        """Full text picture.

        Layers, bottom to top: terrain, player, enemies, bombs, then the
        revealed door, so an enemy standing on the player shows as ``E``.
        """
        canvas = [list(row) for row in self.terrain_rows()]
        canvas[self.player.y][self.player.x] = PLAYER_SYMBOL
        for enemy in self.enemies:
            canvas[enemy.pos.y][enemy.pos.x] = ENEMY_SYMBOL
        for bomb in self.bombs:
            canvas[bomb.pos.y][bomb.pos.x] = BOMB_SYMBOL
        if self.door_visible:
            canvas[self.door.y][self.door.x] = CELL_SYMBOLS[Cell.EXIT_DOOR]
        return ["".join(row) for row in canvas]

    def status_line(self) -> str:
        return f"Bombs planted: {self.bombs_planted}"
