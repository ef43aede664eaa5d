"""Game configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GameConfig:
    """Immutable configuration for a game session."""

    # World
    seed: int = 42
    width: int = 60
    height: int = 30
    spawn_x: int = 1
    spawn_y: int = 1
    spawn_clear_size: int = 3              # Side of the square cleared at spawn
    placement_attempts: int = 1000         # Rejection-sampling budget per placement

    # Bombs
    num_bombs: int = 3
    fuse_ms: int = 3000
    blast_range: int = 3

    # Enemies
    enemy_move_interval: int = 10          # Counter value that triggers a move attempt

    # Timing
    tick_interval: float = 0.05            # Seconds between ticks
    max_ticks: int = 0                     # 0 = unbounded

    # Persistence
    save_file: str = "game_save.txt"

    # Logging
    log_level: str = "INFO"
    replay_file: str = ""

    @property
    def placement_count(self) -> int:
        """Number of traps, and of enemies, placed at generation."""
        return (self.height + self.width) // 10
