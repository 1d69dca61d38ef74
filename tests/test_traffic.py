"""Car motion along lanes."""

import numpy as np
import pytest

from blockcity.core.city_generator import generate_city
from blockcity.core.roads import RoadNetwork
from blockcity.core.traffic import TrafficSimulator, advance_car
from blockcity.protocol import Car, RoadSegment


def _lane(length=4.9):
    return RoadSegment((0.0, 0.0, 0.0), (length, 0.0, 0.0))


def _car(segment_id=0, speed=2.0, distance=0.0):
    return Car(segment_id, speed, distance, np.zeros(3))


def test_advance_moves_along_direction():
    seg = RoadSegment((1.0, 0.0, 3.0), (1.0, 0.0, 0.5))
    car = _car(distance=1.0)
    assert advance_car(car, seg, 0.1)
    assert car.distance_traveled == pytest.approx(1.2)
    np.testing.assert_allclose(car.position, [1.0, 0.0, 1.8])


def test_overflow_resets_to_zero():
    seg = _lane(4.9)
    car = _car(speed=2.0, distance=4.85)
    advance_car(car, seg, 0.1)
    assert car.distance_traveled == 0.0
    np.testing.assert_allclose(car.position, seg.start)


def test_exact_end_is_not_reset():
    seg = _lane(4.0)
    car = _car(speed=1.0, distance=3.5)
    advance_car(car, seg, 0.5)
    assert car.distance_traveled == 4.0
    np.testing.assert_allclose(car.position, seg.end)


def test_missing_segment_is_skipped():
    car = _car(segment_id=5, distance=1.0)
    car.position = np.array([9.0, 9.0, 9.0])
    sim = TrafficSimulator(RoadNetwork([_lane()]), [car])
    assert sim.step(0.1) == 0
    assert car.distance_traveled == 1.0
    np.testing.assert_allclose(car.position, [9.0, 9.0, 9.0])


def test_disabled_simulator_moves_nothing():
    car = _car(distance=1.0)
    sim = TrafficSimulator(RoadNetwork([_lane()]), [car], enabled=False)
    assert sim.step(0.1) == 0
    assert car.distance_traveled == 1.0
    assert sim.elapsed == 0.0


def test_position_is_derived_not_integrated():
    seg = _lane(4.9)
    car = _car(speed=1.3, distance=0.0)
    sim = TrafficSimulator(RoadNetwork([seg]), [car])
    for _ in range(37):
        sim.step(1 / 60)
    np.testing.assert_allclose(car.position, seg.point_at(car.distance_traveled))
    assert sim.elapsed == pytest.approx(37 / 60)


def test_distance_invariant_over_generated_city():
    layout = generate_city(seed=42, grid_radius=1)
    sim = TrafficSimulator.from_layout(layout)
    for _ in range(400):
        sim.step(1 / 30)
        for car in layout.cars:
            seg = layout.road_segments[car.segment_id]
            # A car can sit exactly on the lane end (the last Z slot starts at
            # 2.5 == length); it is reset on the following tick.
            assert 0.0 <= car.distance_traveled <= seg.length
    assert sim.positions().shape == (len(layout.cars), 3)


def test_positions_empty():
    sim = TrafficSimulator(RoadNetwork(), [])
    assert sim.positions().shape == (0, 3)


def test_negative_dt_is_rejected():
    car = _car(distance=0.05)
    with pytest.raises(ValueError):
        advance_car(car, _lane(4.9), -0.1)
    assert car.distance_traveled == 0.05

    sim = TrafficSimulator(RoadNetwork([_lane()]), [car])
    with pytest.raises(ValueError):
        sim.step(-0.1)
    assert car.distance_traveled == 0.05
    assert sim.elapsed == 0.0


def test_negative_speed_never_leaves_distance_below_zero():
    seg = _lane(4.9)
    car = _car(speed=-2.0, distance=0.05)
    advance_car(car, seg, 0.1)
    assert car.distance_traveled == 0.0
    np.testing.assert_allclose(car.position, seg.start)


def test_starting_on_lane_end_resets_next_tick():
    layout = generate_city(seed=42, grid_radius=1)
    on_end = [
        car for car in layout.cars
        if car.distance_traveled == layout.road_segments[car.segment_id].length
    ]
    sim = TrafficSimulator.from_layout(layout)
    sim.step(1 / 60)
    for car in on_end:
        assert car.distance_traveled == 0.0
