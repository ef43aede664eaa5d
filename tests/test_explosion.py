"""Tests for bomb fuses and blast propagation."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from bomberman.config import GameConfig
from bomberman.core.enums import Cell, Command, MovePattern, Outcome
from bomberman.core.models import ExitDoor, Vector2
from bomberman.engine.explosion import ExplosionEngine
from bomberman.systems.generator import WorldGenerator
from tests.helpers.arena import Arena, open_world


def _world_with_bomb(bomb_at=(5, 5), now_ms=0.0):
    world = open_world()
    world.player.pos = Vector2(1, 1)
    world.registry.plant_bomb(Vector2(*bomb_at), now_ms)
    return world


class TestFuse:
    def test_not_detonated_before_fuse(self):
        world = _world_with_bomb()
        report = ExplosionEngine().detonate_due(world, 2999.0)
        assert report.detonated == []
        assert len(world.bombs) == 1

    def test_detonates_at_fuse(self):
        world = _world_with_bomb()
        report = ExplosionEngine().detonate_due(world, 3000.0)
        assert len(report.detonated) == 1
        assert world.bombs == []
        assert world.player.capacity == 3
        world.registry.check_invariants()

    def test_only_due_bombs_detonate(self):
        world = open_world()
        world.registry.plant_bomb(Vector2(5, 5), 0.0)
        world.registry.plant_bomb(Vector2(10, 5), 2000.0)
        report = ExplosionEngine().detonate_due(world, 3500.0)
        assert [b.pos for b in report.detonated] == [Vector2(5, 5)]
        assert [b.pos for b in world.bombs] == [Vector2(10, 5)]
        assert world.player.capacity == 2


class TestBlastArms:
    def test_indestructible_halts_arm(self):
        world = _world_with_bomb()
        world.grid.set(Vector2(6, 5), Cell.INDESTRUCTIBLE)
        world.grid.set(Vector2(7, 5), Cell.DESTRUCTIBLE)
        enemy = world.registry.spawn_enemy(Vector2(8, 5), MovePattern.HORIZONTAL)
        ExplosionEngine().detonate_due(world, 3000.0)
        assert world.grid.get(Vector2(6, 5)) == Cell.INDESTRUCTIBLE
        assert world.grid.get(Vector2(7, 5)) == Cell.DESTRUCTIBLE
        assert enemy in world.enemies

    def test_only_nearest_destructible_destroyed(self):
        world = _world_with_bomb()
        world.grid.set(Vector2(7, 5), Cell.DESTRUCTIBLE)
        world.grid.set(Vector2(8, 5), Cell.DESTRUCTIBLE)
        report = ExplosionEngine().detonate_due(world, 3000.0)
        assert world.grid.get(Vector2(7, 5)) == Cell.EMPTY
        assert world.grid.get(Vector2(8, 5)) == Cell.DESTRUCTIBLE
        assert report.destroyed == [Vector2(7, 5)]

    def test_enemy_behind_destroyed_block_survives(self):
        world = _world_with_bomb()
        world.grid.set(Vector2(5, 4), Cell.DESTRUCTIBLE)
        enemy = world.registry.spawn_enemy(Vector2(5, 3), MovePattern.VERTICAL)
        ExplosionEngine().detonate_due(world, 3000.0)
        assert world.grid.get(Vector2(5, 4)) == Cell.EMPTY
        assert enemy in world.enemies

    def test_range_is_three_cells(self):
        world = _world_with_bomb()
        near = world.registry.spawn_enemy(Vector2(8, 5), MovePattern.HORIZONTAL)
        far = world.registry.spawn_enemy(Vector2(9, 5), MovePattern.HORIZONTAL)
        report = ExplosionEngine().detonate_due(world, 3000.0)
        assert near not in world.enemies
        assert far in world.enemies
        assert report.enemies_eliminated == 1

    def test_bomb_cell_is_hit(self):
        world = _world_with_bomb()
        world.registry.spawn_enemy(Vector2(5, 5), MovePattern.BOTH)
        ExplosionEngine().detonate_due(world, 3000.0)
        assert world.enemies == []

    def test_all_enemies_on_a_cell_eliminated(self):
        world = _world_with_bomb()
        for _ in range(3):
            world.registry.spawn_enemy(Vector2(5, 7), MovePattern.VERTICAL)
        report = ExplosionEngine().detonate_due(world, 3000.0)
        assert world.enemies == []
        assert report.enemies_eliminated == 3

    def test_traps_are_not_destroyed(self):
        world = _world_with_bomb()
        world.grid.set(Vector2(4, 5), Cell.TRAP)
        enemy = world.registry.spawn_enemy(Vector2(3, 5), MovePattern.HORIZONTAL)
        ExplosionEngine().detonate_due(world, 3000.0)
        assert world.grid.get(Vector2(4, 5)) == Cell.TRAP
        assert enemy not in world.enemies

    def test_blast_cells_preview_does_not_mutate(self):
        world = _world_with_bomb()
        world.grid.set(Vector2(6, 5), Cell.INDESTRUCTIBLE)
        world.grid.set(Vector2(5, 6), Cell.DESTRUCTIBLE)
        engine = ExplosionEngine()
        cells = engine.blast_cells(world, world.bombs[0])
        assert cells[0] == Vector2(5, 5)
        assert Vector2(6, 5) not in cells
        assert Vector2(5, 6) in cells
        assert Vector2(5, 7) not in cells
        assert Vector2(2, 5) in cells
        assert Vector2(1, 5) not in cells
        assert world.grid.get(Vector2(5, 6)) == Cell.DESTRUCTIBLE
        assert len(world.bombs) == 1


class TestExitDoorReveal:
    def test_carrier_destroyed_reveals_door(self):
        world = open_world(door=(7, 5))
        world.registry.plant_bomb(Vector2(6, 5), 0.0)
        report = ExplosionEngine().detonate_due(world, 3000.0)
        assert report.door_revealed
        assert world.door.visible
        assert world.grid.get(Vector2(7, 5)) == Cell.EMPTY

    def test_revealed_door_stays_visible(self):
        world = open_world(door=(7, 5))
        world.registry.plant_bomb(Vector2(6, 5), 0.0)
        engine = ExplosionEngine()
        engine.detonate_due(world, 3000.0)
        world.registry.plant_bomb(Vector2(6, 5), 4000.0)
        report = engine.detonate_due(world, 7000.0)
        assert not report.door_revealed
        assert world.door.visible


class TestPlayerCaught:
    def test_player_in_blast_loses(self):
        world = _world_with_bomb()
        world.player.pos = Vector2(5, 7)
        report = ExplosionEngine().detonate_due(world, 3000.0)
        assert report.outcome == Outcome.BLOWN_UP_BY_BOMB

    def test_player_hit_stops_remaining_explosions(self):
        world = open_world()
        world.player.pos = Vector2(5, 6)
        world.registry.plant_bomb(Vector2(5, 5), 0.0)
        world.registry.plant_bomb(Vector2(12, 5), 0.0)
        world.grid.set(Vector2(13, 5), Cell.DESTRUCTIBLE)
        report = ExplosionEngine().detonate_due(world, 3000.0)
        assert report.outcome == Outcome.BLOWN_UP_BY_BOMB
        assert len(report.detonated) == 1
        assert world.grid.get(Vector2(13, 5)) == Cell.DESTRUCTIBLE
        assert [b.pos for b in world.bombs] == [Vector2(12, 5)]
        world.registry.check_invariants()

    def test_player_behind_block_is_safe(self):
        world = _world_with_bomb()
        world.grid.set(Vector2(6, 5), Cell.DESTRUCTIBLE)
        world.player.pos = Vector2(7, 5)
        report = ExplosionEngine().detonate_due(world, 3000.0)
        assert report.outcome is None


class TestThroughGameLoop:
    def test_fuse_measured_on_loop_clock(self):
        arena = Arena()
        arena.player_at((5, 5))
        arena.run(Command.PLANT_BOMB, step_ms=0.0)
        arena.player_at((10, 8))
        arena.clock.now = 102.5
        arena.run(step_ms=0.0)
        assert len(arena.loop.world.bombs) == 1
        arena.clock.now = 103.0
        arena.run(step_ms=0.0)
        assert arena.loop.world.bombs == []
        assert arena.loop.last_explosions.detonated
        assert arena.loop.outcome is None

    def test_generated_board_scenario(self):
        cfg = GameConfig(seed=42, enemy_move_interval=1_000_000)
        world = WorldGenerator(cfg).initialize(42)
        grid = world.grid
        world.enemies.clear()
        for x in range(1, 10):
            grid.set(Vector2(x, 5), Cell.EMPTY)
        for y in range(1, 10):
            grid.set(Vector2(5, y), Cell.EMPTY)
        grid.set(Vector2(4, 4), Cell.EMPTY)
        grid.set(Vector2(6, 5), Cell.INDESTRUCTIBLE)
        grid.set(Vector2(7, 5), Cell.DESTRUCTIBLE)
        world.player.pos = Vector2(5, 5)
        world.registry.plant_bomb(Vector2(5, 5), 0.0)
        world.player.pos = Vector2(4, 4)

        report = ExplosionEngine(cfg.blast_range).detonate_due(world, 3000.0)
        assert report.outcome is None
        assert grid.get(Vector2(6, 5)) == Cell.INDESTRUCTIBLE
        assert grid.get(Vector2(7, 5)) == Cell.DESTRUCTIBLE

    def test_generated_board_door_reveal(self):
        cfg = GameConfig(seed=42)
        world = WorldGenerator(cfg).initialize(42)
        grid = world.grid
        world.enemies.clear()
        grid.set(world.door.pos, Cell.EMPTY)
        world.registry.door = ExitDoor(pos=Vector2(7, 5))
        grid.set(Vector2(7, 5), Cell.CARRIER)
        grid.set(Vector2(6, 5), Cell.EMPTY)
        world.player.pos = Vector2(1, 1)
        world.registry.plant_bomb(Vector2(6, 5), 0.0)

        report = ExplosionEngine(cfg.blast_range).detonate_due(world, 3000.0)
        assert report.door_revealed
        assert world.door.visible
        assert grid.get(Vector2(7, 5)) == Cell.EMPTY
