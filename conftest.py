"""Pytest configuration: local package imports and shared generator fixtures."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest


def _ensure_repo_on_syspath() -> None:
    repo_root = Path(__file__).resolve().parent
    repo_str = str(repo_root)
    if repo_str not in sys.path:
        sys.path.insert(0, repo_str)


_ensure_repo_on_syspath()

from blockcity.core.assets import AssetCatalog  # noqa: E402
from blockcity.core.sink import RecordingSink  # noqa: E402
from blockcity.protocol import SceneStats  # noqa: E402


@pytest.fixture
def catalog() -> AssetCatalog:
    return AssetCatalog.default()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def stats() -> SceneStats:
    return SceneStats()
