"""
Asset catalog: logical categories -> ordered variant lists.

The generator only ever emits *indices* into these pools; resolving them to
meshes, prefabs or textures is the host's job.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Tuple

from blockcity.protocol import AssetCategory, AssetRef, ConfigurationError

# ---------------------------------------------------------------------------
# Default asset set
# ---------------------------------------------------------------------------
CAR_MODELS = [
    "hatchback-sports", "suv", "suv-luxury", "sedan",
    "sedan-sports", "truck", "truck-flat", "van",
]

ASSET_MAP: Dict[str, Dict[str, List[str]]] = {
    "crossroad": {"meshes": ["roads/road-crossroad-path.glb"]},
    "road_straight": {"meshes": ["roads/road-straight.glb"]},
    "car": {"meshes": [f"cars/{c}.glb" for c in CAR_MODELS]},
    "low_density": {
        "meshes": [
            f"low_density/building-type-{c}.glb"
            for c in ["b", "c", "d", "e", "f", "g", "h", "i", "k", "l", "o", "u"]
        ],
        "materials": [
            f"low_density/Textures/{v}.png"
            for v in ["colormap", "variation-a", "variation-b", "variation-c"]
        ],
    },
    "medium_density": {
        "meshes": [
            f"kenney_city_commercial/building-{c}.glb"
            for c in ["a", "b", "c", "d", "f", "g", "h"]
        ],
        "materials": [
            f"kenney_city_commercial/Textures/{v}.png"
            for v in ["colormap", "variation-a", "variation-b"]
        ],
    },
    "high_density": {
        "meshes": [
            f"high_density/building-skyscraper-{c}.glb" for c in "abcde"
        ] + ["high_density/building-m.glb", "high_density/building-l.glb"],
        "materials": [
            f"high_density/Textures/{v}.png"
            for v in ["colormap", "variation-a", "variation-b"]
        ],
    },
    "tree_small": {"meshes": ["nature/tree-small.glb"]},
    "tree": {"meshes": ["nature/tree-large.glb", "nature/tree-pine.glb"]},
    "fence": {"meshes": ["props/fence.glb"]},
    "path_stones": {"meshes": ["props/path-stones-long.glb"]},
    "ground": {"meshes": ["ground/tile.glb"], "materials": ["grass", "paved"]},
}


@dataclass
class AssetPool:
    meshes: List[str]
    materials: List[str] = field(default_factory=lambda: ["default"])

    @property
    def combinations(self) -> int:
        return len(self.meshes) * len(self.materials)


def random_building(category: AssetCategory, pool: AssetPool, rng) -> AssetRef:
    """Mesh and material are drawn independently, mesh first."""
    mesh = rng.index(len(pool.meshes))
    material = rng.index(len(pool.materials))
    return AssetRef(category, mesh, material)


class AssetCatalog:
    def __init__(self, pools: Mapping[AssetCategory, AssetPool]):
        self.pools: Dict[AssetCategory, AssetPool] = dict(pools)

    def __getitem__(self, category: AssetCategory) -> AssetPool:
        return self.pools[category]

    def validate(self) -> None:
        """Every category must resolve to a non-empty pool."""
        for category in AssetCategory:
            pool = self.pools.get(category)
            if pool is None:
                raise ConfigurationError(f"Asset category '{category.value}' is missing")
            if not pool.meshes:
                raise ConfigurationError(f"Asset category '{category.value}' has no variants")
            if not pool.materials:
                raise ConfigurationError(f"Asset category '{category.value}' has no materials")

    def resolve(self, ref: AssetRef) -> Tuple[str, str]:
        pool = self.pools[ref.category]
        return pool.meshes[ref.variant], pool.materials[ref.material]

    @classmethod
    def from_dict(cls, data: Mapping[str, Mapping[str, List[str]]]) -> "AssetCatalog":
        pools = {}
        for name, entry in data.items():
            try:
                category = AssetCategory(name)
            except ValueError:
                raise ConfigurationError(f"Unknown asset category '{name}'") from None
            pool = AssetPool(meshes=list(entry.get("meshes", [])))
            if "materials" in entry:
                pool.materials = list(entry["materials"])
            pools[category] = pool
        return cls(pools)

    @classmethod
    def from_json(cls, path: Path) -> "AssetCatalog":
        return cls.from_dict(json.loads(Path(path).read_text(encoding="utf-8")))

    @classmethod
    def default(cls) -> "AssetCatalog":
        return cls.from_dict(ASSET_MAP)
