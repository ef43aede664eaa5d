"""Seeded dice for map generation and enemy moves, hashed with xxhash.

A roll is a pure function of (world seed, domain, key, step): the same seed
rebuilds the same board, and an enemy's roll on a given tick does not depend
on how many other rolls happened before it.
"""

from __future__ import annotations

import struct

import xxhash

from bomberman.core.enums import Domain

# seed, domain, key, step
_PACK = struct.Struct("<qiqq")


class DeterministicRNG:
    """Stateless roll source shared by the generator and enemy motion."""

    __slots__ = ("_seed",)

    def __init__(self, seed: int) -> None:
        self._seed = seed

    def next_int(self, domain: Domain, key: int, step: int, low: int, high: int) -> int:
        """Roll an integer in [low, high] inclusive.

        Generation keys block draws by cell index and placements by their
        ordinal; enemy motion keys by enemy id with the tick as step.
        """
        digest = xxhash.xxh64_intdigest(_PACK.pack(self._seed, domain, key, step))
        return low + digest % (high - low + 1)
