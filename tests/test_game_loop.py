"""End-to-end tests for the GameLoop tick cycle."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from bomberman.config import GameConfig
from bomberman.core.enums import Cell, Command, Outcome
from bomberman.core.models import Vector2
from bomberman.engine.game_loop import GameLoop
from bomberman.systems.generator import WorldGenerator
from tests.helpers.arena import Arena, FakeClock


class TestPlayerMovement:
    def test_moves_into_empty_cell(self):
        arena = Arena()
        arena.run(Command.MOVE_RIGHT, Command.MOVE_DOWN)
        assert arena.loop.world.player.pos == Vector2(2, 2)

    def test_wall_blocks_movement(self):
        arena = Arena()
        arena.run(Command.MOVE_UP, Command.MOVE_LEFT)
        assert arena.loop.world.player.pos == Vector2(1, 1)

    def test_hidden_door_blocks_movement(self):
        arena = Arena(door=(2, 1))
        arena.run(Command.MOVE_RIGHT)
        assert arena.loop.world.player.pos == Vector2(1, 1)

    def test_one_command_per_tick(self):
        arena = Arena()
        arena.loop.commands.extend([Command.MOVE_RIGHT, Command.MOVE_RIGHT])
        arena.run(None)
        assert arena.loop.world.player.pos == Vector2(2, 1)
        arena.run(None)
        assert arena.loop.world.player.pos == Vector2(3, 1)


class TestLossConditions:
    def test_stepping_on_trap(self):
        arena = Arena()
        arena.place((2, 1), Cell.TRAP)
        result = arena.run(Command.MOVE_RIGHT)
        assert result.outcome == Outcome.STEPPED_ON_TRAP
        assert result.terminal

    def test_enemy_contact(self):
        arena = Arena()
        arena.add_enemy((2, 1))
        result = arena.run(Command.MOVE_RIGHT)
        assert result.outcome == Outcome.CAUGHT_BY_ENEMY

    def test_enemy_checked_before_trap(self):
        arena = Arena()
        arena.place((2, 1), Cell.TRAP)
        arena.add_enemy((2, 1))
        result = arena.run(Command.MOVE_RIGHT)
        assert result.outcome == Outcome.CAUGHT_BY_ENEMY

    def test_own_bomb(self):
        arena = Arena()
        arena.run(Command.PLANT_BOMB, step_ms=0.0)
        result = arena.advance_ms(3000)
        assert result.outcome == Outcome.BLOWN_UP_BY_BOMB

    def test_loss_before_explosion_in_same_tick(self):
        arena = Arena()
        arena.player_at((5, 5))
        arena.run(Command.PLANT_BOMB, step_ms=0.0)
        arena.place((5, 6), Cell.TRAP)
        arena.clock.advance_ms(3000)
        result = arena.run(Command.MOVE_DOWN)
        assert result.outcome == Outcome.STEPPED_ON_TRAP
        # The due bomb was never processed on the losing tick.
        assert len(arena.loop.world.bombs) == 1

    def test_game_over_is_sticky(self):
        arena = Arena()
        arena.place((2, 1), Cell.TRAP)
        arena.run(Command.MOVE_RIGHT)
        tick = arena.loop.world.tick
        result = arena.run(Command.MOVE_DOWN)
        assert result.outcome == Outcome.STEPPED_ON_TRAP
        assert arena.loop.world.player.pos == Vector2(2, 1)
        assert arena.loop.world.tick == tick


class TestWinning:
    def test_blast_door_open_and_walk_in(self):
        arena = Arena(door=(4, 1))
        arena.run(Command.MOVE_RIGHT, Command.MOVE_RIGHT)
        arena.run(Command.PLANT_BOMB, step_ms=0.0)
        arena.run(Command.MOVE_LEFT, Command.MOVE_DOWN, Command.MOVE_DOWN, Command.MOVE_DOWN, Command.MOVE_DOWN)
        arena.advance_ms(3000)
        assert arena.loop.world.door.visible
        assert arena.cell((4, 1)) == Cell.EMPTY
        result = arena.run(Command.MOVE_UP, Command.MOVE_UP, Command.MOVE_UP, Command.MOVE_UP,
                           Command.MOVE_RIGHT, Command.MOVE_RIGHT)
        assert result.outcome == Outcome.LEVEL_WON
        assert result.outcome.won
        assert arena.loop.create_snapshot().outcome == Outcome.LEVEL_WON


class TestBombs:
    def test_capacity_limits_planting(self):
        arena = Arena()
        arena.run(Command.PLANT_BOMB, Command.MOVE_RIGHT, Command.PLANT_BOMB, Command.MOVE_RIGHT,
                  Command.PLANT_BOMB, Command.MOVE_RIGHT, Command.PLANT_BOMB)
        reg = arena.registry
        assert reg.active_bombs == 3
        assert reg.player.capacity == 0
        assert reg.bombs_planted == 3
        reg.check_invariants()

    def test_capacity_returns_after_detonation(self):
        arena = Arena()
        arena.player_at((5, 5))
        arena.run(Command.PLANT_BOMB)
        arena.player_at((9, 9))
        arena.advance_ms(3000)
        assert arena.registry.player.capacity == 3
        assert arena.registry.bombs_planted == 1

    def test_snapshot_reports_remaining_fuse(self):
        arena = Arena()
        arena.run(Command.PLANT_BOMB, step_ms=0.0)
        arena.clock.advance_ms(1000)
        snap = arena.loop.create_snapshot()
        assert snap.bombs[0].remaining_ms == 2000.0
        assert snap.capacity == 2
        assert snap.status_line() == "Bombs planted: 1"


class TestQuitAndSave:
    def test_quit_stops_without_update(self):
        arena = Arena()
        arena.place((1, 2), Cell.TRAP)
        arena.player_at((1, 2))
        tick = arena.loop.world.tick
        result = arena.run(Command.QUIT)
        assert result.quit
        assert result.terminal
        assert result.outcome is None
        assert arena.loop.world.tick == tick

    def test_save_command_result(self, tmp_path):
        arena = Arena(save_file=str(tmp_path / "s.txt"))
        result = arena.run(Command.SAVE)
        assert result.saved is True
        assert not result.terminal


class TestRun:
    def test_run_stops_at_max_ticks(self):
        cfg = GameConfig(seed=3, max_ticks=25)
        world = WorldGenerator(cfg).initialize(3)
        world.enemies.clear()
        loop = GameLoop(cfg, world, clock=FakeClock(), sleep=lambda _s: None)
        assert loop.run() is None
        assert loop.world.tick == 25

    def test_run_returns_outcome(self):
        arena = Arena()
        arena.place((2, 1), Cell.TRAP)
        arena.loop.commands.push(Command.MOVE_RIGHT)
        assert arena.loop.run() == Outcome.STEPPED_ON_TRAP

    def test_sleeps_between_ticks(self):
        cfg = GameConfig(seed=3, max_ticks=4)
        world = WorldGenerator(cfg).initialize(3)
        world.enemies.clear()
        naps = []
        loop = GameLoop(cfg, world, clock=FakeClock(), sleep=naps.append)
        loop.run()
        assert naps == [cfg.tick_interval] * 4


class TestLongRun:
    def test_invariants_hold_over_many_ticks(self):
        cfg = GameConfig(seed=11)
        world = WorldGenerator(cfg).initialize(11)
        clock = FakeClock()
        loop = GameLoop(cfg, world, clock=clock, sleep=lambda _s: None)
        script = [Command.MOVE_RIGHT, Command.PLANT_BOMB, Command.MOVE_DOWN, None,
                  Command.MOVE_LEFT, Command.MOVE_UP, Command.PLANT_BOMB, None]
        counts = [len(world.enemies)]
        for i in range(600):
            command = script[i % len(script)]
            if command is not None:
                loop.commands.push(command)
            result = loop.tick_once()
            clock.advance_ms(50)
            loop.world.registry.check_invariants()
            counts.append(len(loop.world.enemies))
            assert loop.world.grid.count(Cell.CARRIER) + int(loop.world.door.visible) == 1
            if result.terminal:
                break
        assert all(a >= b for a, b in zip(counts, counts[1:]))

    def test_events_emitted(self):
        arena = Arena(door=(3, 1))
        arena.run(Command.MOVE_RIGHT)
        arena.run(Command.PLANT_BOMB, step_ms=0.0)
        assert any(e.category == "bomb" for e in arena.loop.tick_events)
        arena.player_at((8, 8))
        arena.advance_ms(3000)
        categories = {e.category for e in arena.loop.tick_events}
        assert {"explosion", "door"} <= categories
