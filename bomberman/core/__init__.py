"""Core data models and world representation."""

from bomberman.core.enums import Cell, Command, Direction, Domain, MovePattern, Outcome
from bomberman.core.models import Bomb, Enemy, ExitDoor, Player, Vector2
from bomberman.core.grid import Grid
from bomberman.core.registry import EntityRegistry
from bomberman.core.world_state import WorldState
from bomberman.core.snapshot import Snapshot

__all__ = [
    "Bomb",
    "Cell",
    "Command",
    "Direction",
    "Domain",
    "Enemy",
    "EntityRegistry",
    "ExitDoor",
    "Grid",
    "MovePattern",
    "Outcome",
    "Player",
    "Snapshot",
    "Vector2",
    "WorldState",
]
