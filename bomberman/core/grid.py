"""Grid / map system."""

from __future__ import annotations

from typing import Iterator

from bomberman.core.enums import Cell
from bomberman.core.models import Vector2


class Grid:
    """2D cell grid backed by a flat list for cache-friendly access."""

    __slots__ = ("width", "height", "_cells")

    def __init__(self, width: int, height: int, default: Cell = Cell.EMPTY) -> None:
        self.width = width
        self.height = height
        self._cells: list[Cell] = [default] * (width * height)

    # -- access --

    def _idx(self, x: int, y: int) -> int:
        return y * self.width + x

    def in_bounds(self, pos: Vector2) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def is_border(self, pos: Vector2) -> bool:
        return pos.x in (0, self.width - 1) or pos.y in (0, self.height - 1)

    def is_interior(self, pos: Vector2) -> bool:
        return 0 < pos.x < self.width - 1 and 0 < pos.y < self.height - 1

    def get(self, pos: Vector2) -> Cell:
        if not self.in_bounds(pos):
            return Cell.INDESTRUCTIBLE
        return self._cells[self._idx(pos.x, pos.y)]

    def set(self, pos: Vector2, cell: Cell) -> None:
        if self.in_bounds(pos):
            self._cells[self._idx(pos.x, pos.y)] = cell

    def is_destructible(self, pos: Vector2) -> bool:
        return self.get(pos) in (Cell.DESTRUCTIBLE, Cell.CARRIER)

    def is_trap(self, pos: Vector2) -> bool:
        return self.get(pos) == Cell.TRAP

    # -- fast raw-coordinate access (no Vector2 alloc, for hot loops) --

    def get_xy(self, x: int, y: int) -> Cell:
        if 0 <= x < self.width and 0 <= y < self.height:
            return self._cells[y * self.width + x]
        return Cell.INDESTRUCTIBLE

    def set_xy(self, x: int, y: int, cell: Cell) -> None:
        if 0 <= x < self.width and 0 <= y < self.height:
            self._cells[y * self.width + x] = cell

    # -- iteration --

    def rows(self) -> Iterator[list[Cell]]:
        """Yield each row top to bottom as a fresh list."""
        for y in range(self.height):
            start = y * self.width
            yield self._cells[start:start + self.width]

    def positions(self) -> Iterator[Vector2]:
        for y in range(self.height):
            for x in range(self.width):
                yield Vector2(x, y)

    def count(self, cell: Cell) -> int:
        return self._cells.count(cell)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (self.width, self.height, self._cells) == (other.width, other.height, other._cells)
