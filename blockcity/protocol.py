# blockcity/protocol.py
# -----------------------------------------------------------------------------
#  blockcity – data model shared by the generator, the traffic simulator and
#  whatever host displays the result.
# -----------------------------------------------------------------------------
"""Data model for generated cities.

Everything the generator produces is a plain dataclass so a host can consume
it without importing any of the generation code:

* **PlacementRequest** – "put this asset at this transform", fire-and-forget.
* **RoadSegment** – an immutable directed lane, addressed by its index in the
  road network.
* **Car** – mutable traffic state bound to a segment *id* (never the segment
  object itself).
* **CityLayout** – the full result of one generation run, with msgpack
  helpers for persistence and a SHA-256 digest for reproducibility checks.
"""
from __future__ import annotations

import hashlib
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

import msgpack
import numpy as np

Point3 = Tuple[float, float, float]


class ConfigurationError(ValueError):
    """Structural problem detected before (or while) generating a city."""


# --------------------------------------------------------------------------- #
# 1.  Enumerations                                                            #
# --------------------------------------------------------------------------- #


class DensityClass(str, Enum):
    RURAL = "rural"
    LOW = "low_density"
    MEDIUM = "medium_density"
    HIGH = "high_density"


class AssetCategory(str, Enum):
    CROSSROAD = "crossroad"
    ROAD_STRAIGHT = "road_straight"
    CAR = "car"
    LOW_DENSITY = "low_density"
    MEDIUM_DENSITY = "medium_density"
    HIGH_DENSITY = "high_density"
    TREE_SMALL = "tree_small"
    TREE = "tree"
    FENCE = "fence"
    PATH_STONES = "path_stones"
    GROUND = "ground"


# --------------------------------------------------------------------------- #
# 2.  Placement                                                               #
# --------------------------------------------------------------------------- #


@dataclass(slots=True, frozen=True)
class Transform:
    translation: Point3
    rotation_deg: float = 0.0           # yaw about the vertical (Y) axis
    scale: Point3 = (1.0, 1.0, 1.0)


@dataclass(slots=True, frozen=True)
class AssetRef:
    category: AssetCategory
    variant: int = 0                    # mesh / prefab index inside the pool
    material: int = 0                   # material / texture index inside the pool


@dataclass(slots=True, frozen=True)
class PlacementRequest:
    asset: AssetRef
    transform: Transform
    block: Tuple[int, int]

    def as_tuple(self) -> tuple:
        """Flat, msgpack-friendly representation."""
        t = self.transform
        return (
            self.asset.category.value,
            self.asset.variant,
            self.asset.material,
            list(t.translation),
            t.rotation_deg,
            list(t.scale),
            list(self.block),
        )

    @staticmethod
    def from_tuple(row) -> "PlacementRequest":
        category, variant, material, translation, rotation, scale, block = row
        return PlacementRequest(
            asset=AssetRef(AssetCategory(category), variant, material),
            transform=Transform(tuple(translation), rotation, tuple(scale)),
            block=tuple(block),
        )


# --------------------------------------------------------------------------- #
# 3.  Roads & traffic                                                         #
# --------------------------------------------------------------------------- #


@dataclass(slots=True, frozen=True)
class RoadSegment:
    start: Point3
    end: Point3
    direction: Point3 = field(init=False)
    length: float = field(init=False)

    def __post_init__(self):
        delta = np.asarray(self.end, dtype=float) - np.asarray(self.start, dtype=float)
        length = float(np.linalg.norm(delta))
        if length <= 0.0:
            raise ConfigurationError(
                f"Degenerate road segment: start == end == {self.start}"
            )
        direction = delta / length
        object.__setattr__(self, "length", length)
        object.__setattr__(self, "direction", tuple(float(c) for c in direction))

    def point_at(self, distance: float) -> np.ndarray:
        """Position ``distance`` units along the segment from ``start``."""
        progress = distance / self.length
        return (
            np.asarray(self.start, dtype=float)
            + np.asarray(self.direction, dtype=float) * self.length * progress
        )


@dataclass(slots=True)
class Car:
    segment_id: int
    speed: float
    distance_traveled: float
    position: np.ndarray
    handle: Optional[int] = None        # sink handle of the car's placement


# --------------------------------------------------------------------------- #
# 4.  Statistics                                                              #
# --------------------------------------------------------------------------- #


def format_large_number(value: int) -> str:
    """``1234567`` -> ``"1,234,567"``."""
    return f"{int(value):,}"


@dataclass(slots=True)
class SceneStats:
    cars_spawned: int = 0
    low_density_buildings: int = 0
    medium_density_buildings: int = 0
    skyscrapers: int = 0
    road_segments: int = 0
    trees: int = 0

    @property
    def total_spawned(self) -> int:
        return (
            self.cars_spawned
            + self.low_density_buildings
            + self.medium_density_buildings
            + self.skyscrapers
            + self.road_segments
            + self.trees
        )

    def summary(self) -> str:
        return "\n".join(
            [
                f"Cars: {format_large_number(self.cars_spawned)}",
                f"Low Density: {format_large_number(self.low_density_buildings)}",
                f"Medium Density: {format_large_number(self.medium_density_buildings)}",
                f"Skyscrapers: {format_large_number(self.skyscrapers)}",
                f"Road Segments: {format_large_number(self.road_segments)}",
                f"Trees: {format_large_number(self.trees)}",
                f"Total spawned mesh: {format_large_number(self.total_spawned)}",
            ]
        )


# --------------------------------------------------------------------------- #
# 5.  Generation result                                                       #
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class CityLayout:
    seed: int
    grid_radius: int
    placements: List[PlacementRequest]
    road_segments: List[RoadSegment]
    cars: List[Car]
    stats: SceneStats
    zones: Dict[Tuple[int, int], DensityClass]

    def digest(self) -> str:
        """SHA-256 over the ordered placement sequence."""
        packed = msgpack.packb(
            [p.as_tuple() for p in self.placements], use_bin_type=True
        )
        return hashlib.sha256(packed).hexdigest()

    def pack(self) -> bytes:
        return msgpack.packb(
            {
                "seed": self.seed,
                "grid_radius": self.grid_radius,
                "placements": [p.as_tuple() for p in self.placements],
                "road_segments": [(list(s.start), list(s.end)) for s in self.road_segments],
                "cars": [
                    (c.segment_id, c.speed, c.distance_traveled, c.position.tolist(), c.handle)
                    for c in self.cars
                ],
                "stats": asdict(self.stats),
                "zones": [(bx, bz, zone.value) for (bx, bz), zone in self.zones.items()],
            },
            use_bin_type=True,
        )

    @staticmethod
    def unpack(blob: bytes) -> "CityLayout":
        obj = msgpack.unpackb(blob, raw=False)
        return CityLayout(
            seed=obj["seed"],
            grid_radius=obj["grid_radius"],
            placements=[PlacementRequest.from_tuple(row) for row in obj["placements"]],
            road_segments=[RoadSegment(tuple(s), tuple(e)) for s, e in obj["road_segments"]],
            cars=[
                Car(seg, speed, dist, np.asarray(pos, dtype=float), handle)
                for seg, speed, dist, pos, handle in obj["cars"]
            ],
            stats=SceneStats(**obj["stats"]),
            zones={(bx, bz): DensityClass(zone) for bx, bz, zone in obj["zones"]},
        )
