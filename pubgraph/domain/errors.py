"""Failures raised while building a package graph."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class PackageGraphError(RuntimeError):
    """Base class for every failure that aborts a graph build."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        package: str | None = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.package = package


class MissingManifest(PackageGraphError):
    """Raised when a package has no manifest at its expected location."""

    def __init__(self, path: Path, package: str | None = None) -> None:
        super().__init__(
            f"Unable to generate package graph, no `{path}` found.",
            path=path,
            package=package,
        )


class InvalidManifest(PackageGraphError):
    """Raised when a manifest is not a mapping or lacks a package name."""


class MissingLocationIndex(PackageGraphError):
    """Raised when the root package has no location index."""

    def __init__(self, path: Path) -> None:
        super().__init__(
            f"Unable to generate package graph, no `{path.name}` found at {path}. "
            "Run the package install step from the root directory of your package.",
            path=path,
        )


class MalformedLocationIndex(PackageGraphError):
    """Raised when a location index line cannot be interpreted."""

    def __init__(self, path: Path, line_number: int, line: str, reason: str) -> None:
        super().__init__(
            f"{path}:{line_number}: {reason}: {line!r}",
            path=path,
        )
        self.line_number = line_number
        self.line = line


class MissingLockfile(PackageGraphError):
    """Raised when the root package has no lock file."""

    def __init__(self, path: Path) -> None:
        super().__init__(
            f"Unable to generate package graph, no `{path.name}` found at {path}. "
            "Run the package install step from the root directory of your package.",
            path=path,
        )


class UnknownSourceTag(PackageGraphError):
    """Raised when a lock file entry declares an unsupported source."""

    def __init__(self, package: str, source: object, path: Path | None = None) -> None:
        super().__init__(
            f"Unable to determine dependency type of {package!r}: {source!r}",
            path=path,
            package=package,
        )
        self.source = source


class MissingDependencyType(PackageGraphError):
    """Raised when a located package has no lock file entry."""

    def __init__(self, package: str) -> None:
        super().__init__(
            f"Package {package!r} has a location but no lock file entry.",
            package=package,
        )


class DanglingDependency(PackageGraphError):
    """Raised when a manifest names a dependency that was never located."""

    def __init__(self, package: str, dependency: str, path: Path | None = None) -> None:
        super().__init__(
            f"Package {package!r} depends on {dependency!r}, which is not in the package graph.",
            path=path,
            package=package,
        )
        self.dependency = dependency


class InvalidRoot(PackageGraphError):
    """Raised when the designated root node is not marked as root."""

    def __init__(self, package: str) -> None:
        super().__init__(
            f"Root node {package!r} must indicate `is_root`.", package=package
        )


class DuplicateRoot(PackageGraphError):
    """Raised when a node other than the root is marked as root."""

    def __init__(self, package: str) -> None:
        super().__init__(
            f"No nodes other than the root may indicate `is_root`, found {package!r}.",
            package=package,
        )


class DependencyCycle(PackageGraphError):
    """Raised when a traversal that forbids cycles finds one."""

    def __init__(self, cycle: Sequence[str]) -> None:
        super().__init__(
            "Dependency cycle detected: " + " -> ".join(cycle),
            package=cycle[0] if cycle else None,
        )
        self.cycle = list(cycle)


__all__ = [
    "DanglingDependency",
    "DependencyCycle",
    "DuplicateRoot",
    "InvalidManifest",
    "InvalidRoot",
    "MalformedLocationIndex",
    "MissingDependencyType",
    "MissingLocationIndex",
    "MissingLockfile",
    "MissingManifest",
    "PackageGraphError",
    "UnknownSourceTag",
]
