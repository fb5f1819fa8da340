"""Tests for the package graph domain model."""

from __future__ import annotations

from pathlib import Path

import pytest

from pubgraph.domain.errors import InvalidRoot
from pubgraph.domain.package_graph import (
    SDK_PACKAGE_NAME,
    DependencyType,
    PackageGraph,
    PackageNode,
)


def test_node_paths_are_canonical_and_absolute(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)

    node = PackageNode("a", "pkgs/./x/../a", DependencyType.FILESYSTEM_PATH)

    assert node.path == tmp_path / "pkgs" / "a"
    assert node.path.is_absolute()


def test_locally_mutable_dependency_types() -> None:
    assert DependencyType.VERSION_CONTROL.is_locally_mutable
    assert DependencyType.FILESYSTEM_PATH.is_locally_mutable
    assert not DependencyType.REGISTRY_HOSTED.is_locally_mutable
    assert not DependencyType.TOOLCHAIN_BUNDLED.is_locally_mutable


def test_lookup_by_name() -> None:
    dependency = PackageNode("http", "/pkgs/http", DependencyType.REGISTRY_HOSTED)
    root = PackageNode("app", "/src/app", DependencyType.FILESYSTEM_PATH, is_root=True)
    root.dependencies.append(dependency)

    graph = PackageGraph(root, {"app": root, "http": dependency}, sdk_path="/opt/sdk")

    assert graph.get("http") is dependency
    assert graph.get("missing") is None
    assert "http" in graph
    assert "missing" not in graph
    with pytest.raises(KeyError):
        graph["missing"]


def test_table_is_read_only() -> None:
    root = PackageNode("app", "/src/app", DependencyType.FILESYSTEM_PATH, is_root=True)
    graph = PackageGraph(root, {"app": root})

    with pytest.raises(TypeError):
        graph.all_packages["intruder"] = root  # type: ignore[index]


def test_existing_sdk_entry_is_kept() -> None:
    sdk = PackageNode(SDK_PACKAGE_NAME, "/custom/sdk", DependencyType.TOOLCHAIN_BUNDLED)
    root = PackageNode("app", "/src/app", DependencyType.FILESYSTEM_PATH, is_root=True)

    graph = PackageGraph(root, {"app": root, SDK_PACKAGE_NAME: sdk}, sdk_path="/opt/sdk")

    assert graph.sdk is sdk
    assert graph.sdk.path == Path("/custom/sdk")


def test_root_must_be_flagged() -> None:
    root = PackageNode("app", "/src/app", DependencyType.FILESYSTEM_PATH)

    with pytest.raises(InvalidRoot):
        PackageGraph(root, {"app": root})


def test_dump_lists_each_package() -> None:
    dependency = PackageNode("http", "/pkgs/http", DependencyType.REGISTRY_HOSTED)
    root = PackageNode("app", "/src/app", DependencyType.FILESYSTEM_PATH, is_root=True)
    root.dependencies.append(dependency)

    dump = str(PackageGraph(root, {"app": root, "http": dependency}, sdk_path="/opt/sdk"))

    assert dump == (
        "  app:\n"
        "    type: filesystem_path\n"
        "    path: /src/app\n"
        "    dependencies: [http]\n"
        "  http:\n"
        "    type: registry_hosted\n"
        "    path: /pkgs/http\n"
        "    dependencies: []\n"
        "  $sdk:\n"
        "    type: toolchain_bundled\n"
        "    path: /opt/sdk\n"
        "    dependencies: []\n"
    )
