"""Asset graph engine.

This package exports the asset contract and the resolver:
- Asset, WritableAsset, File, Parents, AssetState: The asset contract
- FileFetcher, DirectoryFileFetcher: Access to persisted asset files
- AssetStore: One resolution pass over the dependency graph
- dependency_graph: Name-level edges of a graph, without resolving it
"""

from __future__ import annotations

from clusterforge_core.asset.base import (
    Asset,
    AssetState,
    File,
    Parents,
    WritableAsset,
)
from clusterforge_core.asset.fetcher import DirectoryFileFetcher, FileFetcher
from clusterforge_core.asset.store import AssetStore, dependency_graph

__all__: list[str] = [
    "Asset",
    "WritableAsset",
    "File",
    "Parents",
    "AssetState",
    "FileFetcher",
    "DirectoryFileFetcher",
    "AssetStore",
    "dependency_graph",
]
