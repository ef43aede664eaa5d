"""PersistenceCodec — plain-text save files.

Layout, one record per line::

    <player x> <player y>
    <bombs planted>
    <enemy count>
    <x> <y> <pattern>        (one line per enemy)
    <bomb count>
    <x> <y>                  (one line per bomb)
    <door x> <door y> <visible 0|1>
    <height rows of width grid symbols>

Bomb fuse age is not stored; a reloaded bomb restarts its full countdown.
A hidden door's carrier block is derived from the door record and written
as a plain ``#``; a visible door is written as ``D`` at its own position.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Iterator

from bomberman.core.enums import Cell, MovePattern
from bomberman.core.grid import Grid
from bomberman.core.models import ExitDoor, Player, Vector2
from bomberman.core.registry import EntityRegistry
from bomberman.core.snapshot import CELL_SYMBOLS
from bomberman.core.world_state import WorldState

if TYPE_CHECKING:
    from bomberman.config import GameConfig

logger = logging.getLogger(__name__)

_SYMBOL_CELLS: dict[str, Cell] = {
    " ": Cell.EMPTY,
    "#": Cell.DESTRUCTIBLE,
    "X": Cell.INDESTRUCTIBLE,
    "T": Cell.TRAP,
    "D": Cell.EXIT_DOOR,
}


class SaveFormatError(ValueError):
    """Raised when save-file text is truncated or malformed."""


class PersistenceCodec:
    """Encodes a WorldState to text and stages a new one from text."""

    __slots__ = ("_config",)

    def __init__(self, config: GameConfig) -> None:
        self._config = config

    # -- encoding --

    def encode(self, world: WorldState) -> str:
        reg = world.registry
        lines: list[str] = [
            f"{reg.player.pos.x} {reg.player.pos.y}",
            str(reg.bombs_planted),
            str(len(reg.enemies)),
        ]
        lines.extend(f"{e.pos.x} {e.pos.y} {int(e.pattern)}" for e in reg.enemies)
        lines.append(str(len(reg.bombs)))
        lines.extend(f"{b.pos.x} {b.pos.y}" for b in reg.bombs)
        door = reg.door
        lines.append(f"{door.pos.x} {door.pos.y} {int(door.visible)}")

        for y, row in enumerate(world.grid.rows()):
            symbols = [CELL_SYMBOLS[cell] for cell in row]
            if door.visible and door.pos.y == y and row[door.pos.x] == Cell.EMPTY:
                symbols[door.pos.x] = CELL_SYMBOLS[Cell.EXIT_DOOR]
            lines.append("".join(symbols))
        return "\n".join(lines) + "\n"

    # -- decoding --

    def decode(self, text: str, now_ms: float = 0.0, seed: int | None = None) -> WorldState:
        """Stage a complete world from *text*. Raises SaveFormatError on bad input."""
        cfg = self._config
        lines = iter(text.splitlines())

        px, py = _ints(lines, 2, "player position")
        player_pos = self._interior(Vector2(px, py), "player")
        (bombs_planted,) = _ints(lines, 1, "bombs planted")
        if bombs_planted < 0:
            raise SaveFormatError(f"Negative bombs-planted counter: {bombs_planted}")

        (enemy_count,) = _ints(lines, 1, "enemy count")
        if enemy_count < 0:
            raise SaveFormatError(f"Negative enemy count: {enemy_count}")
        enemy_records: list[tuple[Vector2, MovePattern]] = []
        for i in range(enemy_count):
            ex, ey, pattern = _ints(lines, 3, f"enemy #{i}")
            try:
                move_pattern = MovePattern(pattern)
            except ValueError as exc:
                raise SaveFormatError(f"Unknown movement pattern {pattern} for enemy #{i}") from exc
            enemy_records.append((self._interior(Vector2(ex, ey), f"enemy #{i}"), move_pattern))

        (bomb_count,) = _ints(lines, 1, "bomb count")
        if not 0 <= bomb_count <= cfg.num_bombs:
            raise SaveFormatError(f"Bomb count {bomb_count} outside 0..{cfg.num_bombs}")
        bomb_positions = [
            self._interior(Vector2(*_ints(lines, 2, f"bomb #{i}")), f"bomb #{i}")
            for i in range(bomb_count)
        ]

        dx, dy, visible = _ints(lines, 3, "exit door")
        if visible not in (0, 1):
            raise SaveFormatError(f"Door visibility must be 0 or 1, got {visible}")
        door = ExitDoor(pos=self._interior(Vector2(dx, dy), "exit door"), visible=bool(visible))

        registry = EntityRegistry(
            Player(pos=player_pos, capacity=cfg.num_bombs),
            door,
            num_bombs=cfg.num_bombs,
            fuse_ms=cfg.fuse_ms,
        )
        registry.bombs_planted = bombs_planted
        for pos, pattern in enemy_records:
            registry.spawn_enemy(pos, pattern)
        for pos in bomb_positions:
            registry.restore_bomb(pos, now_ms)

        grid = self._decode_grid(lines, door)
        return WorldState(seed=cfg.seed if seed is None else seed, grid=grid, registry=registry)

    def _decode_grid(self, lines: Iterator[str], door: ExitDoor) -> Grid:
        cfg = self._config
        grid = Grid(cfg.width, cfg.height)
        for y in range(cfg.height):
            row = next(lines, None)
            if row is None:
                raise SaveFormatError(f"Grid truncated at row {y} of {cfg.height}")
            if len(row) != cfg.width:
                raise SaveFormatError(f"Grid row {y} has {len(row)} cells, expected {cfg.width}")
            for x in range(cfg.width):
                symbol = row[x]
                cell = _SYMBOL_CELLS.get(symbol)
                if cell is None:
                    raise SaveFormatError(f"Unknown grid symbol {symbol!r} at ({x}, {y})")
                pos = Vector2(x, y)
                if cell == Cell.EXIT_DOOR:
                    # The marker refers to the door already decoded above.
                    if pos != door.pos:
                        raise SaveFormatError(f"Door marker at {pos} but door record says {door.pos}")
                    cell = Cell.EMPTY
                if grid.is_border(pos) and cell != Cell.INDESTRUCTIBLE:
                    raise SaveFormatError(f"Border cell {pos} is not indestructible")
                grid.set(pos, cell)

        if door.visible:
            if grid.get(door.pos) != Cell.EMPTY:
                raise SaveFormatError(f"Visible door at {door.pos} is covered by {grid.get(door.pos).name}")
        else:
            grid.set(door.pos, Cell.CARRIER)
        return grid

    def _interior(self, pos: Vector2, what: str) -> Vector2:
        cfg = self._config
        if not (0 < pos.x < cfg.width - 1 and 0 < pos.y < cfg.height - 1):
            raise SaveFormatError(f"{what} position {pos} is outside the playable area")
        return pos

    # -- file I/O --

    def save(self, world: WorldState, path: str | Path) -> bool:
        """Write *world* to *path*. Returns False (world untouched) on I/O failure."""
        path = Path(path)
        try:
            path.write_text(self.encode(world), encoding="utf-8")
        except OSError as exc:
            logger.warning("Unable to save game to %s: %s", path, exc)
            return False
        logger.info("Game saved to %s", path)
        return True

    def load(self, path: str | Path, now_ms: float = 0.0, seed: int | None = None) -> WorldState | None:
        """Stage a world from *path*. Returns None if the file is missing or malformed."""
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.warning("No saved game at %s: %s", path, exc)
            return None
        try:
            world = self.decode(text, now_ms=now_ms, seed=seed)
        except SaveFormatError as exc:
            logger.warning("Corrupt save file %s: %s", path, exc)
            return None
        logger.info("Game loaded from %s (%d enemies, %d bombs)", path, len(world.enemies), len(world.bombs))
        return world


def _ints(lines: Iterator[str], count: int, what: str) -> list[int]:
    line = next(lines, None)
    if line is None:
        raise SaveFormatError(f"Unexpected end of file reading {what}")
    parts = line.split()
    if len(parts) != count:
        raise SaveFormatError(f"Expected {count} values for {what}, got {line!r}")
    try:
        return [int(p) for p in parts]
    except ValueError as exc:
        raise SaveFormatError(f"Non-integer value in {what}: {line!r}") from exc
