"""Domain model for package dependency graphs."""

from .errors import (
    DanglingDependency,
    DependencyCycle,
    DuplicateRoot,
    InvalidManifest,
    InvalidRoot,
    MalformedLocationIndex,
    MissingDependencyType,
    MissingLocationIndex,
    MissingLockfile,
    MissingManifest,
    PackageGraphError,
    UnknownSourceTag,
)
from .package_graph import (
    SDK_PACKAGE_NAME,
    DependencyType,
    PackageGraph,
    PackageNode,
    canonicalize,
)

__all__ = [
    "DanglingDependency",
    "DependencyCycle",
    "DependencyType",
    "DuplicateRoot",
    "InvalidManifest",
    "InvalidRoot",
    "MalformedLocationIndex",
    "MissingDependencyType",
    "MissingLocationIndex",
    "MissingLockfile",
    "MissingManifest",
    "PackageGraph",
    "PackageGraphError",
    "PackageNode",
    "SDK_PACKAGE_NAME",
    "UnknownSourceTag",
    "canonicalize",
]
