"""Build validated package graphs from on-disk metadata or caller-built nodes."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, Mapping

import networkx as nx

from ..domain.errors import DanglingDependency, DependencyCycle, MissingDependencyType
from ..domain.package_graph import DependencyType, PackageGraph, PackageNode
from .metadata_reader import MetadataReader

logger = logging.getLogger(__name__)


class PackageGraphBuilder:
    """Assemble :class:`PackageGraph` instances.

    ``sdk_path`` is the toolchain installation backing the synthetic
    ``$sdk`` node. It is passed in rather than discovered so that builds
    stay a pure function of their inputs.
    """

    def __init__(
        self,
        sdk_path: str | os.PathLike[str] | None,
        reader: MetadataReader | None = None,
    ) -> None:
        self._sdk_path = sdk_path
        self._reader = reader or MetadataReader()

    def build_from_path(self, root_directory: str | os.PathLike[str]) -> PackageGraph:
        """Create the graph for the package whose top level directory is ``root_directory``."""

        root_directory = Path(root_directory)
        root_name, root_dependencies = self._reader.read_root_manifest(root_directory)

        locations = self._reader.read_package_locations(root_directory)
        locations.pop(root_name, None)

        dependency_types = self._reader.read_dependency_types(root_directory)

        root = PackageNode(
            root_name, root_directory, DependencyType.FILESYSTEM_PATH, is_root=True
        )
        nodes: dict[str, PackageNode] = {root_name: root}
        for package_name, location in locations.items():
            dependency_type = dependency_types.get(package_name)
            if dependency_type is None:
                raise MissingDependencyType(package_name)
            nodes[package_name] = PackageNode(package_name, location, dependency_type)

        _wire_dependencies(root, root_dependencies, nodes)
        for package_name in locations:
            node = nodes[package_name]
            names = self._reader.read_manifest_dependencies(node.path, package_name)
            _wire_dependencies(node, names, nodes)

        graph = PackageGraph(root, nodes, sdk_path=self._sdk_path)
        logger.info(
            "Built package graph for %s with %d packages", root_name, len(graph)
        )
        return graph

    def build_for_current_directory(self) -> PackageGraph:
        """Create the graph for the package in the working directory."""

        return self.build_from_path(Path.cwd())

    def build_from_root(
        self, root: PackageNode, *, allow_cycles: bool = True
    ) -> PackageGraph:
        """Create a graph from a root whose dependency edges are already attached.

        Every node reachable from ``root`` is visited once, keyed by name; the
        first node discovered under a name wins. A genuine cycle raises
        :class:`DependencyCycle` unless ``allow_cycles`` is set.
        """

        packages: dict[str, PackageNode] = {root.name: root}
        trail: list[str] = [root.name]
        on_trail: set[str] = {root.name}
        stack: list[Iterator[PackageNode]] = [iter(root.dependencies)]

        while stack:
            dependency = next(stack[-1], None)
            if dependency is None:
                stack.pop()
                on_trail.discard(trail.pop())
                continue
            if dependency.name in on_trail:
                if not allow_cycles:
                    start = trail.index(dependency.name)
                    raise DependencyCycle(trail[start:] + [dependency.name])
                continue
            if dependency.name in packages:
                continue
            packages[dependency.name] = dependency
            trail.append(dependency.name)
            on_trail.add(dependency.name)
            stack.append(iter(dependency.dependencies))

        return PackageGraph(root, packages, sdk_path=self._sdk_path)


def _wire_dependencies(
    node: PackageNode, names: Iterable[str], nodes: Mapping[str, PackageNode]
) -> None:
    for name in names:
        dependency = nodes.get(name)
        if dependency is None:
            raise DanglingDependency(node.name, name, node.path)
        node.dependencies.append(dependency)


def to_networkx(graph: PackageGraph) -> nx.DiGraph:
    """Export ``graph`` as a NetworkX graph with edges from dependent to dependency."""

    exported = nx.DiGraph()
    for node in graph:
        exported.add_node(
            node.name,
            dependency_type=node.dependency_type,
            path=node.path,
            is_root=node.is_root,
        )
    for node in graph:
        for dependency in node.dependencies:
            exported.add_edge(node.name, dependency.name)
    return exported


def find_cycles(graph: PackageGraph) -> list[list[str]]:
    """Return the elementary dependency cycles of ``graph``."""

    return [list(cycle) for cycle in nx.simple_cycles(to_networkx(graph))]


__all__ = ["PackageGraphBuilder", "find_cycles", "to_networkx"]
