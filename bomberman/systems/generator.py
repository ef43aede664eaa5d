"""World generator — procedural board, traps, enemies and the hidden door."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from bomberman.core.enums import Cell, Domain, MovePattern
from bomberman.core.grid import Grid
from bomberman.core.models import ExitDoor, Player, Vector2
from bomberman.core.registry import EntityRegistry
from bomberman.core.world_state import WorldState
from bomberman.systems.rng import DeterministicRNG

if TYPE_CHECKING:
    from bomberman.config import GameConfig

logger = logging.getLogger(__name__)


class GenerationError(RuntimeError):
    """Raised when a placement finds no free interior cell."""


class WorldGenerator:
    """Builds a fresh world from a seed.

    Interior blocks come from two per-cell modulus draws: a draw in
    ``[0, width)`` landing on 0 makes an indestructible block, otherwise a
    draw in ``[0, height)`` landing on 0 makes a destructible one. This
    yields roughly 1/width and 1/height densities rather than a tuned
    probability, matching the classic board.
    """

    __slots__ = ("_config",)

    def __init__(self, config: GameConfig) -> None:
        self._config = config

    @property
    def spawn(self) -> Vector2:
        return Vector2(self._config.spawn_x, self._config.spawn_y)

    def in_spawn_zone(self, pos: Vector2) -> bool:
        cfg = self._config
        return (
            cfg.spawn_x <= pos.x < cfg.spawn_x + cfg.spawn_clear_size
            and cfg.spawn_y <= pos.y < cfg.spawn_y + cfg.spawn_clear_size
        )

    def initialize(self, seed: int | None = None) -> WorldState:
        cfg = self._config
        seed = cfg.seed if seed is None else seed
        rng = DeterministicRNG(seed)

        grid = Grid(cfg.width, cfg.height)
        self._place_blocks(grid, rng)
        self._clear_spawn(grid)

        # Door position is fixed last; start it at spawn and move it below.
        registry = EntityRegistry(
            Player(pos=self.spawn, capacity=cfg.num_bombs),
            ExitDoor(pos=self.spawn),
            num_bombs=cfg.num_bombs,
            fuse_ms=cfg.fuse_ms,
        )
        world = WorldState(seed=seed, grid=grid, registry=registry)

        count = cfg.placement_count
        for i in range(count):
            pos = self._find_free_cell(world, rng, Domain.TRAP, i)
            grid.set(pos, Cell.TRAP)

        for i in range(count):
            pos = self._find_free_cell(world, rng, Domain.ENEMY_SPAWN, i)
            registry.spawn_enemy(pos, MovePattern(i % len(MovePattern)))

        door_pos = self._find_free_cell(world, rng, Domain.EXIT_DOOR, 0)
        registry.door = ExitDoor(pos=door_pos)
        grid.set(door_pos, Cell.CARRIER)

        logger.info(
            "Generated %dx%d world (seed=%d): %d traps, %d enemies, door hidden at %s",
            cfg.width, cfg.height, seed, grid.count(Cell.TRAP), len(registry.enemies), door_pos,
        )
        return world

    # -- internals --

    def _place_blocks(self, grid: Grid, rng: DeterministicRNG) -> None:
        w, h = grid.width, grid.height
        for y in range(h):
            for x in range(w):
                if x in (0, w - 1) or y in (0, h - 1):
                    grid.set_xy(x, y, Cell.INDESTRUCTIBLE)
                    continue
                key = y * w + x
                if rng.next_int(Domain.MAP_GEN, key, 0, 0, w - 1) == 0:
                    grid.set_xy(x, y, Cell.INDESTRUCTIBLE)
                elif rng.next_int(Domain.MAP_GEN, key, 1, 0, h - 1) == 0:
                    grid.set_xy(x, y, Cell.DESTRUCTIBLE)

    def _clear_spawn(self, grid: Grid) -> None:
        cfg = self._config
        for y in range(cfg.spawn_y, cfg.spawn_y + cfg.spawn_clear_size):
            for x in range(cfg.spawn_x, cfg.spawn_x + cfg.spawn_clear_size):
                if grid.is_interior(Vector2(x, y)):
                    grid.set_xy(x, y, Cell.EMPTY)

    def _is_free(self, world: WorldState, pos: Vector2) -> bool:
        return (
            world.grid.is_interior(pos)
            and world.grid.get(pos) == Cell.EMPTY
            and not self.in_spawn_zone(pos)
            and not world.registry.enemies_at(pos)
        )

    def _find_free_cell(self, world: WorldState, rng: DeterministicRNG, domain: Domain, key: int) -> Vector2:
        """Rejection-sample a free interior cell, bounded by the attempt budget.

        When the budget runs out every free cell is enumerated and one is
        picked deterministically; if there is none, GenerationError is raised.
        """
        w, h = world.grid.width, world.grid.height
        attempts = self._config.placement_attempts
        for attempt in range(attempts):
            x = rng.next_int(domain, key, attempt * 2, 1, w - 2)
            y = rng.next_int(domain, key, attempt * 2 + 1, 1, h - 2)
            pos = Vector2(x, y)
            if self._is_free(world, pos):
                return pos

        candidates = [pos for pos in world.grid.positions() if self._is_free(world, pos)]
        if not candidates:
            raise GenerationError(f"No free cell left for {domain.name} placement #{key}")
        logger.debug("%s placement #%d fell back to enumeration (%d free)", domain.name, key, len(candidates))
        return candidates[rng.next_int(domain, key, attempts * 2, 0, len(candidates) - 1)]
