import json

import pytest

from blockcity.core.assets import AssetCatalog
from blockcity.protocol import AssetCategory, AssetRef, ConfigurationError


def test_default_catalog_is_complete(catalog):
    catalog.validate()
    assert len(catalog[AssetCategory.CAR].meshes) == 8
    assert catalog[AssetCategory.LOW_DENSITY].combinations == 12 * 4
    assert catalog[AssetCategory.MEDIUM_DENSITY].combinations == 7 * 3
    assert catalog[AssetCategory.HIGH_DENSITY].combinations == 7 * 3
    assert len(catalog[AssetCategory.TREE].meshes) == 2
    assert catalog[AssetCategory.GROUND].materials == ["grass", "paved"]


def test_resolve(catalog):
    mesh, material = catalog.resolve(AssetRef(AssetCategory.HIGH_DENSITY, 5, 2))
    assert mesh == "high_density/building-m.glb"
    assert material == "high_density/Textures/variation-b.png"


def test_missing_category_is_fatal(catalog):
    del catalog.pools[AssetCategory.FENCE]
    with pytest.raises(ConfigurationError, match="fence"):
        catalog.validate()


def test_empty_materials_are_fatal(catalog):
    catalog[AssetCategory.LOW_DENSITY].materials = []
    with pytest.raises(ConfigurationError):
        catalog.validate()


def test_unknown_category():
    with pytest.raises(ConfigurationError):
        AssetCatalog.from_dict({"spaceship": {"meshes": ["x.glb"]}})


def test_from_json(tmp_path):
    data = {cat.value: {"meshes": [f"{cat.value}.glb"]} for cat in AssetCategory}
    data["ground"]["materials"] = ["grass", "paved"]
    path = tmp_path / "assets.json"
    path.write_text(json.dumps(data), encoding="utf-8")

    catalog = AssetCatalog.from_json(path)
    catalog.validate()
    assert catalog[AssetCategory.CAR].meshes == ["car.glb"]
    assert catalog[AssetCategory.CAR].materials == ["default"]
