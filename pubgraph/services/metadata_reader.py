"""Read package manifests, the location index and the lock file from disk."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping
from urllib.parse import urlsplit
from urllib.request import url2pathname

import yaml

from ..domain.errors import (
    InvalidManifest,
    MalformedLocationIndex,
    MissingLocationIndex,
    MissingLockfile,
    MissingManifest,
    UnknownSourceTag,
)
from ..domain.package_graph import DependencyType, canonicalize

logger = logging.getLogger(__name__)

DEPENDENCY_SECTIONS = ("dependencies", "dev_dependencies", "dependency_overrides")
LIB_SUFFIX = "lib/"

_SOURCE_TAGS: Mapping[str, DependencyType] = {
    "git": DependencyType.VERSION_CONTROL,
    "hosted": DependencyType.REGISTRY_HOSTED,
    "path": DependencyType.FILESYSTEM_PATH,
    "sdk": DependencyType.TOOLCHAIN_BUNDLED,
}


@dataclass(frozen=True)
class MetadataReader:
    """Translate on-disk package metadata into plain lookup tables."""

    manifest_filename: str = "pubspec.yaml"
    location_index_filename: str = ".packages"
    lockfile_filename: str = "pubspec.lock"

    def read_root_manifest(self, root_path: Path) -> tuple[str, tuple[str, ...]]:
        """Return the root package name and its dependency names."""

        manifest_path = Path(root_path) / self.manifest_filename
        manifest = self._load_manifest(Path(root_path))
        name = manifest.get("name")
        if not isinstance(name, str) or not name:
            raise InvalidManifest(
                f"Manifest at {manifest_path} does not declare a package name.",
                path=manifest_path,
            )
        return name, dependencies_from_manifest(manifest, manifest_path, name)

    def read_manifest_dependencies(
        self, package_path: Path, package_name: str | None = None
    ) -> tuple[str, ...]:
        """Return the dependency names declared by the package at ``package_path``."""

        manifest = self._load_manifest(Path(package_path), package_name)
        return dependencies_from_manifest(
            manifest, Path(package_path) / self.manifest_filename, package_name
        )

    def read_package_locations(self, root_path: Path) -> dict[str, Path]:
        """Parse the location index into a map of package name to source directory."""

        root_path = Path(root_path)
        index_path = root_path / self.location_index_filename
        if not index_path.is_file():
            raise MissingLocationIndex(index_path)

        with index_path.open("r", encoding="utf-8") as stream:
            lines = stream.read().splitlines()

        locations: dict[str, Path] = {}
        # The first line is a generated header.
        for line_number, line in enumerate(lines[1:], start=2):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            name, separator, value = line.partition(":")
            if not separator or not name:
                raise MalformedLocationIndex(
                    index_path, line_number, line, "expected `<name>:<location>`"
                )
            if not value.endswith(LIB_SUFFIX):
                raise MalformedLocationIndex(
                    index_path, line_number, line, f"location must end with `{LIB_SUFFIX}`"
                )
            locations[name] = _resolve_location(
                root_path, value[: -len(LIB_SUFFIX)], index_path, line_number, line
            )

        logger.debug("Read %d package locations from %s", len(locations), index_path)
        return locations

    def read_dependency_types(self, root_path: Path) -> dict[str, DependencyType]:
        """Parse the lock file into a map of package name to dependency type."""

        lockfile_path = Path(root_path) / self.lockfile_filename
        if not lockfile_path.is_file():
            raise MissingLockfile(lockfile_path)

        document = _load_yaml_mapping(lockfile_path)
        packages = document.get("packages") or {}
        if not isinstance(packages, Mapping):
            raise InvalidManifest(
                f"Expected a `packages` mapping in {lockfile_path}", path=lockfile_path
            )

        dependency_types: dict[str, DependencyType] = {}
        for package_name, entry in packages.items():
            source = entry.get("source") if isinstance(entry, Mapping) else None
            dependency_types[str(package_name)] = dependency_type_from_source(
                str(package_name), source, lockfile_path
            )

        logger.debug("Read %d dependency types from %s", len(dependency_types), lockfile_path)
        return dependency_types

    def _load_manifest(
        self, package_path: Path, package_name: str | None = None
    ) -> Mapping[str, Any]:
        manifest_path = package_path / self.manifest_filename
        if not manifest_path.is_file():
            raise MissingManifest(manifest_path, package_name)
        return _load_yaml_mapping(manifest_path, package_name)


def dependency_type_from_source(
    package_name: str, source: object, path: Path | None = None
) -> DependencyType:
    """Map a lock file ``source`` tag onto a :class:`DependencyType`."""

    if isinstance(source, str) and source in _SOURCE_TAGS:
        return _SOURCE_TAGS[source]
    raise UnknownSourceTag(package_name, source, path)


def dependencies_from_manifest(
    manifest: Mapping[str, Any],
    manifest_path: Path | None = None,
    package_name: str | None = None,
) -> tuple[str, ...]:
    """Union the regular, dev and override dependency names of a manifest.

    Dev dependencies and overrides are included for every package, not only
    the root, so that their sources are watched too. Names keep their
    declaration order and the first occurrence wins.
    """

    names: dict[str, None] = {}
    for section in DEPENDENCY_SECTIONS:
        for name in _string_keys(manifest.get(section), section, manifest_path, package_name):
            names.setdefault(name, None)
    return tuple(names)


def _string_keys(
    section: object,
    section_name: str,
    manifest_path: Path | None,
    package_name: str | None,
) -> Iterable[str]:
    if section is None:
        return ()
    if not isinstance(section, Mapping):
        raise InvalidManifest(
            f"Expected a mapping for `{section_name}` in {manifest_path}",
            path=manifest_path,
            package=package_name,
        )
    return [str(key) for key in section.keys()]


def _load_yaml_mapping(path: Path, package_name: str | None = None) -> Mapping[str, Any]:
    """Parse the YAML document at ``path``; an empty document is an empty mapping."""

    try:
        with path.open("r", encoding="utf-8") as stream:
            document = yaml.safe_load(stream)
    except yaml.YAMLError as exc:
        raise InvalidManifest(
            f"Unable to parse {path}: {exc}", path=path, package=package_name
        ) from exc

    if document is None:
        return {}
    if not isinstance(document, Mapping):
        raise InvalidManifest(
            f"Expected a mapping at the top level of {path}", path=path, package=package_name
        )
    return document


def _resolve_location(
    root_path: Path, location: str, index_path: Path, line_number: int, line: str
) -> Path:
    """Turn a location index URI or path into a canonical absolute path."""

    if location.endswith("/"):
        location = location[:-1]

    parts = urlsplit(location)
    # Single letter schemes are Windows drive letters, not URIs.
    if len(parts.scheme) > 1:
        if parts.scheme != "file":
            raise MalformedLocationIndex(
                index_path, line_number, line, f"unsupported URI scheme `{parts.scheme}`"
            )
        if parts.netloc not in ("", "localhost"):
            raise MalformedLocationIndex(
                index_path, line_number, line, f"unsupported remote host `{parts.netloc}`"
            )
        location = url2pathname(parts.path)
    elif not parts.scheme:
        # Relative and absolute references are percent-encoded like URIs.
        location = url2pathname(parts.path)

    return canonicalize(root_path / location)


__all__ = [
    "DEPENDENCY_SECTIONS",
    "MetadataReader",
    "dependencies_from_manifest",
    "dependency_type_from_source",
]
