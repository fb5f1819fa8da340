"""Shared test fixtures."""

from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from pubgraph.services.graph_builder import PackageGraphBuilder
from pubgraph.settings import get_settings

from tests.builders import make_package_tree


@pytest.fixture(autouse=True)
def _clear_settings_cache(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate tests from ``PUBGRAPH_*`` variables and cached settings."""

    for name in (
        "PUBGRAPH_SDK_PATH",
        "PUBGRAPH_PACKAGE_DIR",
        "PUBGRAPH_LOG_LEVEL",
        "PUBGRAPH_MANIFEST_FILENAME",
        "PUBGRAPH_LOCATION_INDEX_FILENAME",
        "PUBGRAPH_LOCKFILE_FILENAME",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sdk_path(tmp_path: Path) -> Path:
    path = tmp_path / "sdk"
    path.mkdir()
    return path


@pytest.fixture
def builder(sdk_path: Path) -> PackageGraphBuilder:
    return PackageGraphBuilder(sdk_path)


@pytest.fixture
def app_tree(tmp_path: Path) -> Path:
    """Root ``app`` depending on a single hosted ``libA`` with no dependencies."""

    return make_package_tree(
        tmp_path,
        "app",
        {"libA": {"source": "hosted"}},
        root_dependencies=["libA"],
    )
