"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import IntEnum, unique


@unique
class Cell(IntEnum):
    """Occupant state of a single grid cell."""

    EMPTY = 0
    DESTRUCTIBLE = 1
    CARRIER = 2         # Destructible block hiding the exit door
    INDESTRUCTIBLE = 3
    TRAP = 4
    EXIT_DOOR = 5       # Marker for the revealed door; never stored in the live grid


@unique
class Command(IntEnum):
    """External commands accepted by the game loop, at most one per tick."""

    MOVE_UP = 0
    MOVE_DOWN = 1
    MOVE_LEFT = 2
    MOVE_RIGHT = 3
    PLANT_BOMB = 4
    SAVE = 5
    QUIT = 6


@unique
class MovePattern(IntEnum):
    """Enemy movement patterns."""

    HORIZONTAL = 0
    VERTICAL = 1
    BOTH = 2


@unique
class Outcome(IntEnum):
    """Terminal results of a game."""

    CAUGHT_BY_ENEMY = 0
    STEPPED_ON_TRAP = 1
    BLOWN_UP_BY_BOMB = 2
    LEVEL_WON = 3

    @property
    def won(self) -> bool:
        return self is Outcome.LEVEL_WON

    @property
    def message(self) -> str:
        return _OUTCOME_MESSAGES[self]


_OUTCOME_MESSAGES = {
    Outcome.CAUGHT_BY_ENEMY: "GAME OVER! Player was caught by an enemy!",
    Outcome.STEPPED_ON_TRAP: "GAME OVER! Player stepped on a trap!",
    Outcome.BLOWN_UP_BY_BOMB: "GAME OVER! Player was blown up by a bomb!",
    Outcome.LEVEL_WON: "YOU WIN!",
}


@unique
class Direction(IntEnum):
    """Cardinal directions."""

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    MAP_GEN = 0
    TRAP = 1
    ENEMY_SPAWN = 2
    EXIT_DOOR = 3
    ENEMY_MOVE = 4
