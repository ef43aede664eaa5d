"""Tests for the MovementValidator predicate."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from bomberman.core.enums import Cell
from bomberman.core.grid import Grid
from bomberman.core.models import Vector2
from bomberman.systems.movement import MovementValidator, is_valid_move


def _grid(w: int = 10, h: int = 8) -> Grid:
    return Grid(w, h)


class TestBorders:
    def test_every_border_coordinate_is_invalid(self):
        g = _grid()
        v = MovementValidator(g)
        for pos in g.positions():
            if g.is_border(pos):
                assert not v.is_valid_move(pos), pos

    def test_outside_grid_is_invalid_without_error(self):
        v = MovementValidator(_grid())
        for pos in (Vector2(-1, 3), Vector2(3, -1), Vector2(10, 3), Vector2(3, 8), Vector2(50, 50)):
            assert not v.is_valid_move(pos)


class TestCells:
    def test_empty_interior_is_valid(self):
        assert is_valid_move(_grid(), Vector2(4, 4))

    def test_trap_does_not_block(self):
        g = _grid()
        g.set(Vector2(4, 4), Cell.TRAP)
        assert is_valid_move(g, Vector2(4, 4))

    def test_blocks_are_invalid(self):
        g = _grid()
        for x, cell in enumerate((Cell.DESTRUCTIBLE, Cell.CARRIER, Cell.INDESTRUCTIBLE), start=2):
            g.set(Vector2(x, 3), cell)
            assert not is_valid_move(g, Vector2(x, 3)), cell

    def test_validator_sees_grid_updates(self):
        g = _grid()
        v = MovementValidator(g)
        g.set(Vector2(2, 2), Cell.DESTRUCTIBLE)
        assert not v.is_valid_move(Vector2(2, 2))
        g.set(Vector2(2, 2), Cell.EMPTY)
        assert v.is_valid_move(Vector2(2, 2))
