"""MovementValidator — decides whether a cell may be entered.

Traps are enterable by everyone. The consequence of the player standing on
one is handled by the GameLoop after the move is applied.
"""

from __future__ import annotations

from bomberman.core.enums import Cell
from bomberman.core.grid import Grid
from bomberman.core.models import Vector2

_ENTERABLE = frozenset({Cell.EMPTY, Cell.TRAP})


class MovementValidator:
    """Stateless predicate over the grid."""

    __slots__ = ("_grid",)

    def __init__(self, grid: Grid) -> None:
        self._grid = grid

    def is_valid_move(self, pos: Vector2) -> bool:
        # Bounds first: the grid is never read outside the interior.
        if not self._grid.is_interior(pos):
            return False
        return self._grid.get(pos) in _ENTERABLE


def is_valid_move(grid: Grid, pos: Vector2) -> bool:
    return MovementValidator(grid).is_valid_move(pos)
