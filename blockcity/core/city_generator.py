"""
🏙️ City Generator
Orchestrates one generation run over a square grid of blocks.

For every block coordinate (``bx`` outer, ``bz`` inner, both ascending from
``-radius`` to ``radius``) the generator computes the block's world offset,
classifies its zone from noise, lays the roads and traffic, then runs the
content generator for the zone. All state is passed explicitly; nothing is
kept between runs.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from blockcity.config import CityConfig
from blockcity.constants import BLOCK_DEPTH, BLOCK_WIDTH, DEFAULT_GRID_RADIUS, DEFAULT_SEED
from blockcity.core.assets import AssetCatalog
from blockcity.core.blocks import BLOCK_GENERATORS
from blockcity.core.rng import CoherentNoise, SeededRNG
from blockcity.core.roads import RoadNetwork, spawn_roads_and_cars
from blockcity.core.sink import ForwardingSink, PlacementSink, RecordingSink
from blockcity.core.zoning import ZoneClassifier
from blockcity.protocol import (
    Car,
    CityLayout,
    ConfigurationError,
    DensityClass,
    Point3,
    SceneStats,
)
from blockcity.utils.hash import block_seed

logger = logging.getLogger(__name__)


def block_offset(bx: int, bz: int) -> Point3:
    return (bx * BLOCK_WIDTH, 0.0, bz * BLOCK_DEPTH)


def block_coordinates(grid_radius: int) -> List[Tuple[int, int]]:
    span = range(-grid_radius, grid_radius + 1)
    return [(bx, bz) for bx in span for bz in span]


def generate_block(
    config: CityConfig,
    classifier: ZoneClassifier,
    rng: SeededRNG,
    sink: PlacementSink,
    stats: SceneStats,
    network: RoadNetwork,
    catalog: AssetCatalog,
    bx: int,
    bz: int,
) -> Tuple[DensityClass, List[Car]]:
    """Generate roads, traffic and content for block ``(bx, bz)``."""
    offset = block_offset(bx, bz)
    zone = classifier.classify(offset)
    block = (bx, bz)

    cars = spawn_roads_and_cars(
        sink, stats, rng, offset, block, network, catalog,
        car_density=config.car_density,
        car_speed=config.car_speed,
    )
    BLOCK_GENERATORS[zone](sink, stats, rng, offset, block, catalog)

    logger.debug(f"Block ({bx}, {bz}) -> {zone.value}, {len(cars)} cars")
    return zone, cars


def generate_city(
    seed: int = DEFAULT_SEED,
    grid_radius: int = DEFAULT_GRID_RADIUS,
    config: Optional[CityConfig] = None,
    catalog: Optional[AssetCatalog] = None,
    sink: Optional[PlacementSink] = None,
) -> CityLayout:
    """
    Generate a whole city.

    Parameters
    ----------
    seed, grid_radius
        Used when no *config* is given.
    config
        Full configuration; takes precedence over *seed* / *grid_radius*.
    catalog
        Asset pools; defaults to ``AssetCatalog.default()``.
    sink
        Optional host sink. Every request is still recorded in the returned
        layout; car handles come from the host sink.

    Raises
    ------
    ConfigurationError
        Invalid configuration or empty asset pool (raised before the first
        placement), or a degenerate road segment.
    """
    if config is None:
        config = CityConfig(seed=seed, grid_radius=grid_radius)
    if catalog is None:
        catalog = AssetCatalog.default()

    try:
        config.validate()
        catalog.validate()
    except ConfigurationError as e:
        logger.error(f"City generation aborted: {e}")
        raise

    recorder = ForwardingSink(sink) if sink is not None else RecordingSink()
    stats = SceneStats()
    network = RoadNetwork()
    classifier = ZoneClassifier(
        CoherentNoise.for_city(config.seed),
        scale=config.noise_scale,
        thresholds=config.zone_thresholds,
    )
    shared_rng = SeededRNG(config.seed)

    cars: List[Car] = []
    zones = {}
    for bx, bz in block_coordinates(config.grid_radius):
        rng = SeededRNG(block_seed(config.seed, bx, bz)) if config.per_block_rng else shared_rng
        zone, block_cars = generate_block(
            config, classifier, rng, recorder, stats, network, catalog, bx, bz
        )
        zones[(bx, bz)] = zone
        cars.extend(block_cars)

    logger.info(
        f"Generated city seed={config.seed} radius={config.grid_radius} "
        f"blocks={len(zones)} placements={len(recorder)} "
        f"lanes={len(network)} cars={stats.cars_spawned}"
    )
    return CityLayout(
        seed=config.seed,
        grid_radius=config.grid_radius,
        placements=recorder.placements,
        road_segments=network.segments,
        cars=cars,
        stats=stats,
        zones=zones,
    )
