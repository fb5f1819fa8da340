"""Services that read package metadata and assemble graphs."""

from .graph_builder import PackageGraphBuilder, find_cycles, to_networkx
from .metadata_reader import MetadataReader

__all__ = ["MetadataReader", "PackageGraphBuilder", "find_cycles", "to_networkx"]
