"""Noise-driven zoning: block offset -> density class."""

from __future__ import annotations

from typing import Sequence, Tuple

from blockcity.constants import NOISE_SCALE, ZONE_THRESHOLDS
from blockcity.core.rng import CoherentNoise
from blockcity.protocol import DensityClass, Point3

# Ordered from the lowest to the highest density band.
_BANDS = (DensityClass.RURAL, DensityClass.LOW, DensityClass.MEDIUM)


def classify_density(density: float, thresholds: Sequence[float] = ZONE_THRESHOLDS) -> DensityClass:
    """Map a density in [0, 1] to its class; each threshold is the lower bound of the next band."""
    for band, upper in zip(_BANDS, thresholds):
        if density < upper:
            return band
    return DensityClass.HIGH


class ZoneClassifier:
    def __init__(
        self,
        noise_source: CoherentNoise,
        scale: float = NOISE_SCALE,
        thresholds: Tuple[float, float, float] = ZONE_THRESHOLDS,
    ):
        self.noise = noise_source
        self.scale = scale
        self.thresholds = tuple(thresholds)

    def density(self, offset: Point3) -> float:
        return self.noise.sample2(offset[0] * self.scale, offset[2] * self.scale)

    def classify(self, offset: Point3) -> DensityClass:
        return classify_density(self.density(offset), self.thresholds)
