"""Wire settings into the reader and builder."""

from __future__ import annotations

from .services.graph_builder import PackageGraphBuilder
from .services.metadata_reader import MetadataReader
from .settings import Settings, get_settings


def provide_metadata_reader(settings: Settings | None = None) -> MetadataReader:
    settings = settings or get_settings()
    return MetadataReader(
        manifest_filename=settings.manifest_filename,
        location_index_filename=settings.location_index_filename,
        lockfile_filename=settings.lockfile_filename,
    )


def provide_graph_builder(settings: Settings | None = None) -> PackageGraphBuilder:
    settings = settings or get_settings()
    return PackageGraphBuilder(
        settings.sdk_path, reader=provide_metadata_reader(settings)
    )


__all__ = ["provide_graph_builder", "provide_metadata_reader"]
