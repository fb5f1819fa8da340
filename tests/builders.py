"""Builder helpers to lay out installed package trees on disk."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, Mapping

import yaml

LOCATION_INDEX_HEADER = "# Generated by pub on 2024-01-01 00:00:00.000000."


def _section(names: Iterable[str] | None) -> Dict[str, Any] | None:
    if names is None:
        return None
    return {name: "any" for name in names}


def write_manifest(
    package_dir: Path,
    name: str | None = None,
    *,
    dependencies: Iterable[str] | None = None,
    dev_dependencies: Iterable[str] | None = None,
    dependency_overrides: Iterable[str] | None = None,
) -> Path:
    """Write a ``pubspec.yaml`` declaring the given dependency names."""

    package_dir.mkdir(parents=True, exist_ok=True)
    document: Dict[str, Any] = {}
    if name is not None:
        document["name"] = name
    for key, names in (
        ("dependencies", dependencies),
        ("dev_dependencies", dev_dependencies),
        ("dependency_overrides", dependency_overrides),
    ):
        section = _section(names)
        if section is not None:
            document[key] = section
    manifest = package_dir / "pubspec.yaml"
    manifest.write_text(yaml.safe_dump(document, sort_keys=False), encoding="utf-8")
    return manifest


def write_location_index(root_dir: Path, locations: Mapping[str, str]) -> Path:
    """Write a ``.packages`` file; values are written verbatim after ``name:``."""

    lines = [LOCATION_INDEX_HEADER]
    lines.extend(f"{name}:{value}" for name, value in locations.items())
    index = root_dir / ".packages"
    index.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return index


def write_lockfile(root_dir: Path, sources: Mapping[str, str]) -> Path:
    """Write a ``pubspec.lock`` mapping each package to a ``source`` tag."""

    document = {
        "packages": {
            name: {"dependency": "direct main", "source": source, "version": "1.0.0"}
            for name, source in sources.items()
        },
        "sdks": {"dart": ">=3.0.0 <4.0.0"},
    }
    lockfile = root_dir / "pubspec.lock"
    lockfile.write_text(yaml.safe_dump(document, sort_keys=False), encoding="utf-8")
    return lockfile


def make_package_tree(
    workspace: Path,
    root_name: str,
    packages: Mapping[str, Mapping[str, Any]],
    *,
    root_dependencies: Iterable[str] = (),
    root_dev_dependencies: Iterable[str] | None = None,
) -> Path:
    """Lay out a root package plus installed packages under ``workspace``.

    ``packages`` maps each package name to ``source`` (lock file tag) and
    optional ``dependencies``, ``dev_dependencies`` and
    ``dependency_overrides`` name lists.
    """

    root_dir = workspace / root_name
    write_manifest(
        root_dir,
        root_name,
        dependencies=root_dependencies,
        dev_dependencies=root_dev_dependencies,
    )

    locations: Dict[str, str] = {root_name: "lib/"}
    sources: Dict[str, str] = {}
    for name, spec in packages.items():
        package_dir = workspace / "pub-cache" / name
        write_manifest(
            package_dir,
            name,
            dependencies=spec.get("dependencies", ()),
            dev_dependencies=spec.get("dev_dependencies"),
            dependency_overrides=spec.get("dependency_overrides"),
        )
        locations[name] = package_dir.as_uri() + "/lib/"
        sources[name] = spec.get("source", "hosted")

    write_location_index(root_dir, locations)
    write_lockfile(root_dir, sources)
    return root_dir
