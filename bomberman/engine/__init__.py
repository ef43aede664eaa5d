"""Engine layer: game loop, command queue, explosions."""

from bomberman.engine.command_queue import CommandQueue
from bomberman.engine.explosion import ExplosionEngine, ExplosionReport
from bomberman.engine.game_loop import GameLoop, TickResult

__all__ = ["CommandQueue", "ExplosionEngine", "ExplosionReport", "GameLoop", "TickResult"]
