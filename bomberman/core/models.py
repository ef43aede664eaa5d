"""Core data models: Vector2, Player, Enemy, Bomb, ExitDoor."""

from __future__ import annotations

from dataclasses import dataclass

from bomberman.core.enums import Command, Direction, MovePattern


@dataclass(frozen=True, slots=True)
class Vector2:
    """Immutable 2D integer coordinate."""

    x: int = 0
    y: int = 0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def scaled(self, factor: int) -> Vector2:
        return Vector2(self.x * factor, self.y * factor)

    def __repr__(self) -> str:
        return f"({self.x}, {self.y})"


# Direction offsets mapped to Direction enum values
DIRECTION_OFFSETS: dict[int, Vector2] = {
    Direction.NORTH: Vector2(0, -1),
    Direction.EAST: Vector2(1, 0),
    Direction.SOUTH: Vector2(0, 1),
    Direction.WEST: Vector2(-1, 0),
}

COMMAND_OFFSETS: dict[Command, Vector2] = {
    Command.MOVE_UP: DIRECTION_OFFSETS[Direction.NORTH],
    Command.MOVE_RIGHT: DIRECTION_OFFSETS[Direction.EAST],
    Command.MOVE_DOWN: DIRECTION_OFFSETS[Direction.SOUTH],
    Command.MOVE_LEFT: DIRECTION_OFFSETS[Direction.WEST],
}


@dataclass(slots=True)
class Player:
    """The single player-controlled entity."""

    pos: Vector2
    capacity: int = 3

    @property
    def can_plant(self) -> bool:
        return self.capacity > 0


@dataclass(slots=True)
class Enemy:
    """A roaming enemy following a fixed movement pattern."""

    id: int
    pos: Vector2
    pattern: MovePattern
    counter: int = 0


@dataclass(frozen=True, slots=True)
class Bomb:
    """A planted bomb. Timestamps are milliseconds on the loop clock."""

    pos: Vector2
    planted_at: float
    fuse_ms: int = 3000

    def elapsed(self, now_ms: float) -> float:
        return now_ms - self.planted_at

    def is_due(self, now_ms: float) -> bool:
        return self.elapsed(now_ms) >= self.fuse_ms


@dataclass(slots=True)
class ExitDoor:
    """The level exit, hidden under a carrier block until blasted open."""

    pos: Vector2
    visible: bool = False

    def reveal(self) -> None:
        self.visible = True
