"""Build dependency graphs of locally installed packages."""

from .domain import (
    SDK_PACKAGE_NAME,
    DependencyType,
    PackageGraph,
    PackageGraphError,
    PackageNode,
)
from .services import MetadataReader, PackageGraphBuilder, find_cycles, to_networkx

__all__ = [
    "DependencyType",
    "MetadataReader",
    "PackageGraph",
    "PackageGraphBuilder",
    "PackageGraphError",
    "PackageNode",
    "SDK_PACKAGE_NAME",
    "find_cycles",
    "to_networkx",
]
