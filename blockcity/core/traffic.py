"""
🚗 Per-tick car motion along fixed lanes.

A car has a single state: travelling along its bound lane. Each tick its
distance grows by ``speed * dt``; once it passes the end of the lane it is
reset to the start (``0.0``), not wrapped by the overshoot. A car with a
negative speed that backs past the start is reset the same way. The
position is recomputed from the distance every tick, so it never drifts.
"""

from __future__ import annotations

from typing import List, Optional

import numpy as np

from blockcity.core.roads import RoadNetwork
from blockcity.protocol import Car, CityLayout, RoadSegment


def advance_car(car: Car, segment: Optional[RoadSegment], dt: float) -> bool:
    """
    Move *car* along *segment* by one tick of *dt* seconds.

    Returns ``False`` (and leaves the car untouched) when the segment could
    not be resolved. Raises ``ValueError`` for a negative *dt*.
    """
    if dt < 0:
        raise ValueError(f"dt must not be negative, got {dt}")
    if segment is None:
        return False

    car.distance_traveled += car.speed * dt
    if not 0.0 <= car.distance_traveled <= segment.length:
        car.distance_traveled = 0.0

    car.position = segment.point_at(car.distance_traveled)
    return True


class TrafficSimulator:
    def __init__(self, network: RoadNetwork, cars: List[Car], enabled: bool = True):
        self.network = network
        self.cars = cars
        self.enabled = enabled
        self.elapsed = 0.0

    @classmethod
    def from_layout(cls, layout: CityLayout, enabled: bool = True) -> "TrafficSimulator":
        return cls(RoadNetwork(layout.road_segments), layout.cars, enabled=enabled)

    def step(self, dt: float) -> int:
        """Advance every car by *dt*; returns how many cars were moved."""
        if dt < 0:
            raise ValueError(f"dt must not be negative, got {dt}")
        if not self.enabled:
            return 0
        moved = 0
        for car in self.cars:
            if advance_car(car, self.network.get(car.segment_id), dt):
                moved += 1
        self.elapsed += dt
        return moved

    def run(self, ticks: int, dt: float) -> None:
        for _ in range(ticks):
            self.step(dt)

    def positions(self) -> np.ndarray:
        """``(n_cars, 3)`` array of current car positions."""
        if not self.cars:
            return np.zeros((0, 3), dtype=float)
        return np.stack([car.position for car in self.cars])
