"""
🎲 Deterministic randomness for city generation.

``SeededRNG`` is the single sequential stream every generator draws from;
the order of draws is part of the output, so generators must consume it in a
fixed order. ``CoherentNoise`` is seeded separately (from a derived seed) and
never touches the stream.
"""

from __future__ import annotations

import random
from typing import Sequence, TypeVar

import noise

from blockcity.constants import NOISE_SEED_SALT
from blockcity.utils.hash import derive_seed

T = TypeVar("T")

# ============================================================================
# RNG
# ============================================================================
class SeededRNG:
    def __init__(self, seed: int):
        self._seed = seed
        self._rng = random.Random(self._seed)

    @property
    def seed(self) -> int:
        return self._seed

    def next_float(self) -> float:
        """Uniform float in [0, 1)."""
        return self._rng.random()

    def index(self, n: int) -> int:
        """Uniform integer in [0, n)."""
        return self._rng.randrange(n)

    def chance(self, probability: float) -> bool:
        """True with the given probability."""
        return self._rng.random() < probability

    def choice(self, seq: Sequence[T]) -> T:
        """Select a random element from a non-empty sequence."""
        return seq[self.index(len(seq))]


# ============================================================================
# NOISE
# ============================================================================
class CoherentNoise:
    """
    Smooth 2D / 3D Perlin noise remapped to [0, 1].

    The ``noise`` package selects its permutation table through ``base``,
    which must stay inside [0, 255].
    """

    def __init__(self, seed: int):
        self.seed = seed
        self.base = seed % 256

    @classmethod
    def for_city(cls, city_seed: int) -> "CoherentNoise":
        return cls(derive_seed(city_seed, NOISE_SEED_SALT))

    @staticmethod
    def _remap(n: float) -> float:
        return min(1.0, max(0.0, n * 0.5 + 0.5))

    def sample2(self, x: float, y: float) -> float:
        return self._remap(noise.pnoise2(x, y, base=self.base))

    def sample3(self, x: float, y: float, z: float) -> float:
        return self._remap(noise.pnoise3(x, y, z, base=self.base))
