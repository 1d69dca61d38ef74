"""Whole-city orchestration: scenario counts, determinism, stats and fatal errors."""

from collections import Counter

import pytest

from blockcity.config import CityConfig
from blockcity.core.assets import AssetCatalog, AssetPool
from blockcity.core.city_generator import (
    block_coordinates,
    block_offset,
    generate_block,
    generate_city,
)
from blockcity.core.rng import CoherentNoise, SeededRNG
from blockcity.core.roads import RoadNetwork
from blockcity.core.sink import RecordingSink
from blockcity.core.zoning import ZoneClassifier
from blockcity.protocol import (
    AssetCategory,
    CityLayout,
    ConfigurationError,
    DensityClass,
    SceneStats,
)
from blockcity.utils.hash import block_seed

BUILDINGS_PER_ZONE = {
    DensityClass.RURAL: 0,
    DensityClass.LOW: 4,
    DensityClass.MEDIUM: 10,
    DensityClass.HIGH: 6,
}


class _HostSink:
    def __init__(self):
        self.calls = []

    def place(self, asset, transform, block):
        self.calls.append((asset, transform, block))
        return 1000 + len(self.calls)


@pytest.fixture(scope="module")
def city() -> CityLayout:
    return generate_city(seed=42, grid_radius=1)


# ──────────────────────────── Scenario ───────────────────────────────────────
def test_seed_42_radius_1_scenario(city):
    counts = Counter(p.asset.category for p in city.placements)
    assert counts[AssetCategory.CROSSROAD] == 9
    assert counts[AssetCategory.ROAD_STRAIGHT] == 18
    assert counts[AssetCategory.GROUND] == 9
    assert len(city.road_segments) == 36
    assert len(city.zones) == 9
    assert list(city.zones) == block_coordinates(1)


def test_block_offsets():
    assert block_offset(0, 0) == (0.0, 0.0, 0.0)
    assert block_offset(2, -1) == (11.0, 0.0, -4.0)


def test_every_block_gets_roads_and_ground(city):
    per_block = Counter((p.block, p.asset.category) for p in city.placements)
    for block in block_coordinates(1):
        assert per_block[(block, AssetCategory.CROSSROAD)] == 1
        assert per_block[(block, AssetCategory.ROAD_STRAIGHT)] == 2
        assert per_block[(block, AssetCategory.GROUND)] == 1


def test_block_content_matches_zone(city):
    building_categories = {
        AssetCategory.LOW_DENSITY,
        AssetCategory.MEDIUM_DENSITY,
        AssetCategory.HIGH_DENSITY,
    }
    for block, zone in city.zones.items():
        buildings = [
            p for p in city.placements
            if p.block == block and p.asset.category in building_categories
        ]
        assert len(buildings) == BUILDINGS_PER_ZONE[zone]


# ──────────────────────────── Determinism ────────────────────────────────────
def test_two_runs_are_identical(city):
    again = generate_city(seed=42, grid_radius=1)
    assert again.placements == city.placements
    assert again.zones == city.zones
    assert again.digest() == city.digest()
    assert [c.distance_traveled for c in again.cars] == [c.distance_traveled for c in city.cars]


def test_different_seed_changes_layout(city):
    assert generate_city(seed=43, grid_radius=1).digest() != city.digest()


def test_config_overrides_positional_arguments():
    layout = generate_city(seed=1, grid_radius=5, config=CityConfig(seed=42, grid_radius=1))
    assert layout.seed == 42
    assert len(layout.zones) == 9


# ──────────────────────────── Stats ──────────────────────────────────────────
def test_stats_match_emitted_placements(city):
    counts = Counter(p.asset.category for p in city.placements)
    stats = city.stats
    assert stats.cars_spawned == counts[AssetCategory.CAR] == len(city.cars)
    assert stats.low_density_buildings == counts[AssetCategory.LOW_DENSITY]
    assert stats.medium_density_buildings == counts[AssetCategory.MEDIUM_DENSITY]
    assert stats.skyscrapers == counts[AssetCategory.HIGH_DENSITY]
    assert stats.road_segments == counts[AssetCategory.CROSSROAD] + counts[AssetCategory.ROAD_STRAIGHT]
    assert stats.trees == counts[AssetCategory.TREE_SMALL] + counts[AssetCategory.TREE]

    uncounted = {AssetCategory.FENCE, AssetCategory.PATH_STONES, AssetCategory.GROUND}
    assert stats.total_spawned == sum(n for cat, n in counts.items() if cat not in uncounted)


def test_stats_summary_formats_thousands():
    stats = SceneStats(cars_spawned=12345, trees=1000000)
    summary = stats.summary()
    assert "Cars: 12,345" in summary
    assert "Trees: 1,000,000" in summary
    assert "Total spawned mesh: 1,012,345" in summary


# ──────────────────────────── Fatal configuration errors ─────────────────────
def test_empty_pool_aborts_before_any_placement():
    catalog = AssetCatalog.default()
    catalog.pools[AssetCategory.CAR] = AssetPool(meshes=[])
    host = _HostSink()
    with pytest.raises(ConfigurationError):
        generate_city(seed=42, grid_radius=1, catalog=catalog, sink=host)
    assert host.calls == []


@pytest.mark.parametrize("radius", [0, -3, 10_000])
def test_invalid_grid_radius(radius):
    host = _HostSink()
    with pytest.raises(ConfigurationError):
        generate_city(seed=42, grid_radius=radius, sink=host)
    assert host.calls == []


# ──────────────────────────── Host sink ──────────────────────────────────────
def test_host_sink_receives_everything_in_order(city):
    host = _HostSink()
    layout = generate_city(seed=42, grid_radius=1, sink=host)
    assert [(a, t, b) for a, t, b in host.calls] == [
        (p.asset, p.transform, p.block) for p in layout.placements
    ]
    for car in layout.cars:
        assert car.handle > 1000
        asset, _, _ = host.calls[car.handle - 1001]
        assert asset.category is AssetCategory.CAR


# ──────────────────────────── Per-block streams ──────────────────────────────
def test_per_block_streams_are_order_independent():
    config = CityConfig(seed=42, grid_radius=2, per_block_rng=True)
    full = generate_city(config=config)
    assert generate_city(config=config).digest() == full.digest()

    classifier = ZoneClassifier(CoherentNoise.for_city(42))
    for bx, bz in [(2, 2), (-1, 0), (0, -2)]:
        sink = RecordingSink()
        zone, _ = generate_block(
            config, classifier, SeededRNG(block_seed(42, bx, bz)), sink,
            SceneStats(), RoadNetwork(), AssetCatalog.default(), bx, bz,
        )
        assert zone is full.zones[(bx, bz)]
        assert sink.placements == [p for p in full.placements if p.block == (bx, bz)]


def test_per_block_streams_keep_zoning(city):
    layout = generate_city(config=CityConfig(seed=42, grid_radius=1, per_block_rng=True))
    assert layout.zones == city.zones


# ──────────────────────────── Persistence ────────────────────────────────────
def test_pack_unpack_preserves_layout(city):
    restored = CityLayout.unpack(city.pack())
    assert restored.digest() == city.digest()
    assert restored.zones == city.zones
    assert restored.stats == city.stats
    assert len(restored.road_segments) == len(city.road_segments)
    assert [c.segment_id for c in restored.cars] == [c.segment_id for c in city.cars]
