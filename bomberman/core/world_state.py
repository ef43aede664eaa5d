"""Mutable authoritative world state — only mutated by the GameLoop."""

from __future__ import annotations

from bomberman.core.grid import Grid
from bomberman.core.models import Bomb, Enemy, ExitDoor, Player
from bomberman.core.registry import EntityRegistry


class WorldState:
    """The single source of truth for one game."""

    __slots__ = ("tick", "seed", "grid", "registry")

    def __init__(self, seed: int, grid: Grid, registry: EntityRegistry) -> None:
        self.tick: int = 0
        self.seed: int = seed
        self.grid: Grid = grid
        self.registry: EntityRegistry = registry

    @property
    def player(self) -> Player:
        return self.registry.player

    @property
    def door(self) -> ExitDoor:
        return self.registry.door

    @property
    def enemies(self) -> list[Enemy]:
        return self.registry.enemies

    @property
    def bombs(self) -> list[Bomb]:
        return self.registry.bombs
