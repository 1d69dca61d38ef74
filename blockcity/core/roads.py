"""
🛣️ Roads, lanes and initial traffic for one block.

Each block owns one crossroad at its origin, one straight road along X and
one along Z. Every straight road carries two opposite lanes, registered as
``RoadSegment`` entries in the city's ``RoadNetwork``; cars refer to lanes by
their integer id.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

from blockcity.constants import (
    CAR_DENSITY,
    CAR_SCALE,
    CAR_SLOT_PITCH,
    CAR_SLOT_START,
    CAR_SPEED,
    LANE_OFFSET,
    ROAD_X_OFFSET,
    ROAD_X_SCALE,
    ROAD_Z_OFFSET,
    ROAD_Z_SCALE,
    X_LANE_END,
    X_LANE_SLOTS,
    X_LANE_STAGGER,
    X_LANE_START,
    Z_LANE_END,
    Z_LANE_SLOTS,
    Z_LANE_STAGGER,
    Z_LANE_START,
)
from blockcity.core.assets import AssetCatalog
from blockcity.core.rng import SeededRNG
from blockcity.core.sink import PlacementSink
from blockcity.protocol import (
    AssetCategory,
    AssetRef,
    Car,
    Point3,
    RoadSegment,
    SceneStats,
    Transform,
)

# Car yaw per lane, matching the car meshes' forward axis.
X_FORWARD_YAW = 3 * -90.0
X_REVERSE_YAW = -90.0
Z_FORWARD_YAW = 0.0
Z_REVERSE_YAW = 180.0


def local_point(offset: Point3, x: float, y: float, z: float) -> Point3:
    return (offset[0] + x, offset[1] + y, offset[2] + z)


class RoadNetwork:
    """Append-only arena of lanes; a lane's id is its index."""

    def __init__(self, segments: Optional[List[RoadSegment]] = None):
        self.segments: List[RoadSegment] = list(segments) if segments else []

    def __len__(self) -> int:
        return len(self.segments)

    def add(self, start: Point3, end: Point3) -> int:
        self.segments.append(RoadSegment(start, end))
        return len(self.segments) - 1

    def get(self, segment_id: int) -> Optional[RoadSegment]:
        """Lane for ``segment_id`` or ``None`` when the id is unknown."""
        if 0 <= segment_id < len(self.segments):
            return self.segments[segment_id]
        return None


def _spawn_car(
    sink: PlacementSink,
    catalog: AssetCatalog,
    rng: SeededRNG,
    block: Tuple[int, int],
    translation: Point3,
    yaw: float,
    segment_id: int,
    distance: float,
    speed: float,
) -> Car:
    variant = rng.index(len(catalog[AssetCategory.CAR].meshes))
    handle = sink.place(
        AssetRef(AssetCategory.CAR, variant),
        Transform(translation, yaw, (CAR_SCALE, CAR_SCALE, CAR_SCALE)),
        block,
    )
    return Car(
        segment_id=segment_id,
        speed=speed,
        distance_traveled=distance,
        position=np.asarray(translation, dtype=float),
        handle=handle,
    )


def spawn_roads_and_cars(
    sink: PlacementSink,
    stats: SceneStats,
    rng: SeededRNG,
    offset: Point3,
    block: Tuple[int, int],
    network: RoadNetwork,
    catalog: AssetCatalog,
    car_density: float = CAR_DENSITY,
    car_speed: float = CAR_SPEED,
) -> List[Car]:
    """
    Place the block's road pieces, register its four lanes and populate them.

    Draw order per slot ``i``: forward lane spawn draw (+ car variant draw when
    it spawns), then reverse lane spawn draw (+ car variant draw). X lanes are
    filled before Z lanes.

    Returns
    -------
    list[Car]
        Cars spawned in this block, in spawn order.
    """
    sink.place(AssetRef(AssetCategory.CROSSROAD), Transform(offset), block)
    stats.road_segments += 1

    # X road
    sink.place(
        AssetRef(AssetCategory.ROAD_STRAIGHT),
        Transform(local_point(offset, *ROAD_X_OFFSET), 0.0, (ROAD_X_SCALE, 1.0, 1.0)),
        block,
    )
    stats.road_segments += 1
    x_lane = network.add(
        local_point(offset, X_LANE_START, 0.0, LANE_OFFSET),
        local_point(offset, X_LANE_END, 0.0, LANE_OFFSET),
    )
    x_lane_reverse = network.add(
        local_point(offset, X_LANE_END, 0.0, -LANE_OFFSET),
        local_point(offset, X_LANE_START, 0.0, -LANE_OFFSET),
    )

    # Z road
    sink.place(
        AssetRef(AssetCategory.ROAD_STRAIGHT),
        Transform(local_point(offset, *ROAD_Z_OFFSET), 90.0, (ROAD_Z_SCALE, 1.0, 1.0)),
        block,
    )
    stats.road_segments += 1
    z_lane = network.add(
        local_point(offset, -LANE_OFFSET, 0.0, Z_LANE_START),
        local_point(offset, -LANE_OFFSET, 0.0, Z_LANE_END),
    )
    z_lane_reverse = network.add(
        local_point(offset, LANE_OFFSET, 0.0, Z_LANE_END),
        local_point(offset, LANE_OFFSET, 0.0, Z_LANE_START),
    )

    cars: List[Car] = []
    lanes = (
        (X_LANE_SLOTS, X_LANE_STAGGER, (
            (x_lane, X_FORWARD_YAW, lambda s: (s, 0.0, LANE_OFFSET)),
            (x_lane_reverse, X_REVERSE_YAW, lambda s: (s, 0.0, -LANE_OFFSET)),
        )),
        (Z_LANE_SLOTS, Z_LANE_STAGGER, (
            (z_lane, Z_FORWARD_YAW, lambda s: (-LANE_OFFSET, 0.0, s)),
            (z_lane_reverse, Z_REVERSE_YAW, lambda s: (LANE_OFFSET, 0.0, s)),
        )),
    )
    for slots, stagger, directions in lanes:
        for i in range(slots):
            slot = CAR_SLOT_START + i * CAR_SLOT_PITCH
            for segment_id, yaw, slot_position in directions:
                if rng.next_float() > car_density:
                    cars.append(
                        _spawn_car(
                            sink, catalog, rng, block,
                            local_point(offset, *slot_position(slot)),
                            yaw, segment_id, i * stagger, car_speed,
                        )
                    )
                    stats.cars_spawned += 1
    return cars
