"""
🏘️ Block content generators, one per density class.

Every generator has the same signature and emits, in order: the ground tile,
then its buildings and props. Buildings are drawn with ``random_building``
(mesh and material drawn independently), so the number of RNG draws a block
consumes depends only on its density class.
"""

from __future__ import annotations

from typing import Callable, Dict, Tuple

from blockcity.constants import (
    BLOCK_DEPTH,
    BLOCK_WIDTH,
    GROUND_GRASS,
    GROUND_PAVED,
    HIGH_BUILDING_FRONT_Z,
    HIGH_BUILDING_PITCH,
    HIGH_BUILDING_REAR_Z,
    HIGH_BUILDING_SLOTS,
    HIGH_BUILDING_START,
    LOW_BUILDING_FRONT_Z,
    LOW_BUILDING_PITCH,
    LOW_BUILDING_REAR_Z,
    LOW_BUILDING_SLOTS,
    LOW_FENCE_PITCH,
    LOW_FENCE_X,
    LOW_FENCES,
    LOW_ROW_START,
    LOW_TREE_PITCH,
    LOW_TREE_ROWS_X,
    LOW_TREES_PER_ROW,
    MEDIUM_BUILDING_FRONT_Z,
    MEDIUM_BUILDING_PITCH,
    MEDIUM_BUILDING_REAR_Z,
    MEDIUM_BUILDING_SLOTS,
    MEDIUM_PATH_HEIGHT,
    MEDIUM_PATH_PITCH,
    MEDIUM_PATH_SCALE,
    MEDIUM_PATH_START,
    MEDIUM_PATH_STONES,
    MEDIUM_PATH_Z,
    MEDIUM_TREE_PAIR_PITCH,
    MEDIUM_TREE_PAIRS,
    MEDIUM_TREE_Z,
)
from blockcity.core.assets import AssetCatalog, random_building
from blockcity.core.roads import local_point
from blockcity.core.rng import SeededRNG
from blockcity.core.sink import PlacementSink
from blockcity.protocol import (
    AssetCategory,
    AssetRef,
    DensityClass,
    Point3,
    SceneStats,
    Transform,
)

BlockGenerator = Callable[
    [PlacementSink, SceneStats, SeededRNG, Point3, Tuple[int, int], AssetCatalog], None
]


def spawn_ground(sink: PlacementSink, offset: Point3, block, material: int) -> None:
    sink.place(
        AssetRef(AssetCategory.GROUND, 0, material),
        Transform(
            local_point(offset, BLOCK_WIDTH / 2, 0.0, BLOCK_DEPTH / 2),
            0.0,
            (BLOCK_WIDTH, 1.0, BLOCK_DEPTH),
        ),
        block,
    )


# ---------------------------------------------------------------------------
# Rural
# ---------------------------------------------------------------------------
def spawn_rural(sink, stats, rng, offset, block, catalog) -> None:
    spawn_ground(sink, offset, block, GROUND_GRASS)


# ---------------------------------------------------------------------------
# Low density: tree-lined strip, fence line, two mirrored pairs of houses
# ---------------------------------------------------------------------------
def spawn_low_density(sink, stats, rng, offset, block, catalog) -> None:
    spawn_ground(sink, offset, block, GROUND_GRASS)

    for z in range(LOW_TREES_PER_ROW):
        tree_z = LOW_ROW_START + z * LOW_TREE_PITCH
        for row_x in LOW_TREE_ROWS_X:
            sink.place(
                AssetRef(AssetCategory.TREE_SMALL),
                Transform(local_point(offset, row_x, 0.0, tree_z)),
                block,
            )
            stats.trees += 1

    for i in range(LOW_FENCES):
        sink.place(
            AssetRef(AssetCategory.FENCE),
            Transform(local_point(offset, LOW_FENCE_X, 0.0, LOW_ROW_START + i * LOW_FENCE_PITCH), 90.0),
            block,
        )

    pool = catalog[AssetCategory.LOW_DENSITY]
    for x in range(1, LOW_BUILDING_SLOTS + 1):
        building_x = x * LOW_BUILDING_PITCH
        sink.place(
            random_building(AssetCategory.LOW_DENSITY, pool, rng),
            Transform(local_point(offset, building_x, 0.0, LOW_BUILDING_FRONT_Z)),
            block,
        )
        stats.low_density_buildings += 1
        sink.place(
            random_building(AssetCategory.LOW_DENSITY, pool, rng),
            Transform(local_point(offset, building_x, 0.0, LOW_BUILDING_REAR_Z), 180.0),
            block,
        )
        stats.low_density_buildings += 1


# ---------------------------------------------------------------------------
# Medium density: five building slots along an alley with one tree species
# ---------------------------------------------------------------------------
def spawn_medium_density(sink, stats, rng, offset, block, catalog) -> None:
    spawn_ground(sink, offset, block, GROUND_PAVED)

    # Use the same tree for the entire alley
    tree = rng.index(len(catalog[AssetCategory.TREE].meshes))
    pool = catalog[AssetCategory.MEDIUM_DENSITY]

    for x in range(1, MEDIUM_BUILDING_SLOTS + 1):
        slot_x = x * MEDIUM_BUILDING_PITCH
        sink.place(
            random_building(AssetCategory.MEDIUM_DENSITY, pool, rng),
            Transform(local_point(offset, slot_x, 0.0, MEDIUM_BUILDING_FRONT_Z)),
            block,
        )
        stats.medium_density_buildings += 1

        # The last slot only gets one pair so the alley doesn't overhang the road
        pairs = 1 if x == MEDIUM_BUILDING_SLOTS else MEDIUM_TREE_PAIRS
        for pair in range(pairs):
            tree_x = slot_x + pair * MEDIUM_TREE_PAIR_PITCH
            for tree_z in MEDIUM_TREE_Z:
                sink.place(
                    AssetRef(AssetCategory.TREE, tree),
                    Transform(local_point(offset, tree_x, 0.0, tree_z)),
                    block,
                )
                stats.trees += 1

        sink.place(
            random_building(AssetCategory.MEDIUM_DENSITY, pool, rng),
            Transform(local_point(offset, slot_x, 0.0, MEDIUM_BUILDING_REAR_Z), 180.0),
            block,
        )
        stats.medium_density_buildings += 1

    for x in range(MEDIUM_PATH_STONES):
        sink.place(
            AssetRef(AssetCategory.PATH_STONES),
            Transform(
                local_point(offset, MEDIUM_PATH_START + x * MEDIUM_PATH_PITCH, MEDIUM_PATH_HEIGHT, MEDIUM_PATH_Z),
                90.0,
                MEDIUM_PATH_SCALE,
            ),
            block,
        )


# ---------------------------------------------------------------------------
# High density: three skyscraper slots, front and back
# ---------------------------------------------------------------------------
def spawn_high_density(sink, stats, rng, offset, block, catalog) -> None:
    spawn_ground(sink, offset, block, GROUND_PAVED)

    pool = catalog[AssetCategory.HIGH_DENSITY]
    for x in range(HIGH_BUILDING_SLOTS):
        slot_x = HIGH_BUILDING_START + x * HIGH_BUILDING_PITCH
        sink.place(
            random_building(AssetCategory.HIGH_DENSITY, pool, rng),
            Transform(local_point(offset, slot_x, 0.0, HIGH_BUILDING_FRONT_Z)),
            block,
        )
        stats.skyscrapers += 1
        sink.place(
            random_building(AssetCategory.HIGH_DENSITY, pool, rng),
            Transform(local_point(offset, slot_x, 0.0, HIGH_BUILDING_REAR_Z), 180.0),
            block,
        )
        stats.skyscrapers += 1


BLOCK_GENERATORS: Dict[DensityClass, BlockGenerator] = {
    DensityClass.RURAL: spawn_rural,
    DensityClass.LOW: spawn_low_density,
    DensityClass.MEDIUM: spawn_medium_density,
    DensityClass.HIGH: spawn_high_density,
}
