"""Package dependency graph: nodes, their source types and the graph aggregate."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Iterator, Mapping

from .errors import DuplicateRoot, InvalidRoot

SDK_PACKAGE_NAME = "$sdk"


class DependencyType(str, Enum):
    """How a package's source is obtained, which dictates how it is watched."""

    VERSION_CONTROL = "git"
    FILESYSTEM_PATH = "path"
    REGISTRY_HOSTED = "hosted"
    TOOLCHAIN_BUNDLED = "sdk"

    @property
    def is_locally_mutable(self) -> bool:
        """Whether sources of this type may change on the local disk."""

        return self in (DependencyType.VERSION_CONTROL, DependencyType.FILESYSTEM_PATH)


def canonicalize(path: str | os.PathLike[str]) -> Path:
    """Return ``path`` as an absolute path without ``.`` or ``..`` segments."""

    return Path(os.path.normpath(os.path.abspath(os.fspath(path))))


@dataclass(eq=False, slots=True)
class PackageNode:
    """A node in a :class:`PackageGraph`.

    ``dependencies`` holds references to nodes owned by the graph table, in
    the order they were declared in the package manifest.
    """

    name: str
    path: Path | None
    dependency_type: DependencyType
    is_root: bool = False
    dependencies: list[PackageNode] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.path is not None:
            self.path = canonicalize(self.path)

    @property
    def dependency_names(self) -> list[str]:
        return [dependency.name for dependency in self.dependencies]

    def __str__(self) -> str:
        return (
            f"  {self.name}:\n"
            f"    type: {self.dependency_type.name.lower()}\n"
            f"    path: {self.path}\n"
            f"    dependencies: [{', '.join(self.dependency_names)}]"
        )


class PackageGraph:
    """A graph of the package dependencies for an application.

    The table always holds the toolchain package under ``$sdk``. Once
    constructed, the table is read-only for consumers.
    """

    def __init__(
        self,
        root: PackageNode,
        packages: Mapping[str, PackageNode],
        *,
        sdk_path: str | os.PathLike[str] | None = None,
    ) -> None:
        table = dict(packages)
        if SDK_PACKAGE_NAME not in table:
            table[SDK_PACKAGE_NAME] = PackageNode(
                SDK_PACKAGE_NAME,
                Path(sdk_path) if sdk_path is not None else None,
                DependencyType.TOOLCHAIN_BUNDLED,
            )

        if not root.is_root:
            raise InvalidRoot(root.name)
        for node in table.values():
            if node is not root and node.is_root:
                raise DuplicateRoot(node.name)

        self.root = root
        self.all_packages: Mapping[str, PackageNode] = MappingProxyType(table)

    @property
    def sdk(self) -> PackageNode:
        return self.all_packages[SDK_PACKAGE_NAME]

    def get(self, package_name: str) -> PackageNode | None:
        """Return the node named ``package_name`` or ``None`` when absent."""

        return self.all_packages.get(package_name)

    def __getitem__(self, package_name: str) -> PackageNode:
        return self.all_packages[package_name]

    def __contains__(self, package_name: object) -> bool:
        return package_name in self.all_packages

    def __iter__(self) -> Iterator[PackageNode]:
        return iter(self.all_packages.values())

    def __len__(self) -> int:
        return len(self.all_packages)

    def __str__(self) -> str:
        return "".join(f"{package}\n" for package in self.all_packages.values())


__all__ = [
    "DependencyType",
    "PackageGraph",
    "PackageNode",
    "SDK_PACKAGE_NAME",
    "canonicalize",
]
