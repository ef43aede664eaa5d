"""Engine systems: RNG, world generation, movement, persistence."""

from bomberman.systems.rng import DeterministicRNG
from bomberman.systems.generator import GenerationError, WorldGenerator
from bomberman.systems.movement import MovementValidator
from bomberman.systems.enemy_motion import EnemyMotion
from bomberman.systems.persistence import PersistenceCodec, SaveFormatError

__all__ = [
    "DeterministicRNG",
    "EnemyMotion",
    "GenerationError",
    "MovementValidator",
    "PersistenceCodec",
    "SaveFormatError",
    "WorldGenerator",
]
