"""Asset graph resolution for clusterforge.

The AssetStore walks an asset's dependency graph depth first and materializes
every asset at most once per resolution pass:

1. Writable assets are first offered the chance to load themselves from the
   asset directory.
2. If nothing was persisted, every declared dependency is fetched (recursively,
   memoized by asset class) and the asset generates from the resolved set.
3. Any failure marks the asset FAILED, is wrapped with the asset name and
   stage, and aborts the pass. No partially initialized asset is ever handed
   to a dependent.

Each store owns its memoization arena; there is no process-wide cache, so a
new pass always starts from a fresh store.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import NoReturn

import structlog

from clusterforge_core.asset.base import Asset, AssetState, Parents, WritableAsset
from clusterforge_core.asset.fetcher import DirectoryFileFetcher, FileFetcher
from clusterforge_core.errors import AssetResolutionError, DependencyCycleError

logger = structlog.get_logger(__name__)


class AssetStore:
    """Resolves assets and their dependencies for one resolution pass.

    Attributes:
        fetcher: Access to previously persisted asset files.

    Example:
        >>> store = AssetStore(Path("cluster"))
        >>> networking = store.fetch(Networking())
        >>> [f.filename for f in networking.files()]
        ['manifests/cluster-network-01-crd.yml', 'manifests/cluster-network-02-config.yml']
    """

    def __init__(
        self,
        directory: Path | str | None = None,
        fetcher: FileFetcher | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            directory: Asset directory to load persisted files from.
                Defaults to the current directory.
            fetcher: Explicit fetcher. Takes precedence over ``directory``.
        """
        if fetcher is None:
            fetcher = DirectoryFileFetcher(Path(directory) if directory is not None else Path("."))
        self.fetcher = fetcher
        self._assets: dict[type[Asset], Asset] = {}
        self._states: dict[type[Asset], AssetState] = {}
        self._errors: dict[type[Asset], AssetResolutionError] = {}
        self._stack: list[type[Asset]] = []

    @property
    def resolved(self) -> Mapping[type[Asset], Asset]:
        """Read-only view of every materialized asset in this pass."""
        return MappingProxyType(
            {
                key: asset
                for key, asset in self._assets.items()
                if self._states[key] is AssetState.MATERIALIZED
            }
        )

    def state(self, asset_cls: type[Asset]) -> AssetState:
        """Return the resolution state of an asset class in this pass."""
        return self._states.get(asset_cls.memo_key(), AssetState.UNRESOLVED)

    def fetch(self, asset: Asset) -> Asset:
        """Resolve an asset, returning the single materialized instance for its class.

        The first instance requested for a class becomes the resolved one;
        later requests for the same class return it unchanged.

        Args:
            asset: Asset to resolve.

        Returns:
            The materialized asset.

        Raises:
            AssetResolutionError: If the asset or any dependency failed.
            DependencyCycleError: If the asset is already being resolved
                further up the current path.
        """
        key = asset.memo_key()
        state = self._states.get(key, AssetState.UNRESOLVED)

        if state is AssetState.MATERIALIZED:
            return self._assets[key]
        if state is AssetState.FAILED:
            raise self._errors[key]
        if key in self._stack:
            names = [self._assets[k].name() for k in self._stack[self._stack.index(key) :]]
            raise DependencyCycleError([*names, asset.name()])

        self._assets[key] = asset
        self._stack.append(key)
        try:
            self._resolve(key, asset)
        finally:
            self._stack.pop()
        return asset

    def fetch_all(self, assets: Iterable[Asset]) -> list[Asset]:
        """Resolve several assets in order within the same pass."""
        return [self.fetch(asset) for asset in assets]

    def _resolve(self, key: type[Asset], asset: Asset) -> None:
        log = logger.bind(asset=asset.name())

        if isinstance(asset, WritableAsset):
            self._states[key] = AssetState.LOADING
            try:
                found = asset.load(self.fetcher)
            except Exception as e:
                self._fail(key, asset, "load", e)
            if found:
                self._states[key] = AssetState.MATERIALIZED
                log.info("asset_loaded")
                return

        self._states[key] = AssetState.DEPENDENCIES_RESOLVING
        resolved: dict[type[Asset], Asset] = {}
        for dependency in asset.dependencies():
            try:
                resolved[dependency.memo_key()] = self.fetch(dependency)
            except Exception as e:
                self._fail(key, asset, "dependency", e)

        self._states[key] = AssetState.GENERATING
        log.debug("asset_generating", dependencies=[a.name() for a in resolved.values()])
        try:
            asset.generate(Parents(resolved))
        except Exception as e:
            self._fail(key, asset, "generate", e)

        self._states[key] = AssetState.MATERIALIZED
        log.info("asset_generated")

    def _fail(self, key: type[Asset], asset: Asset, stage: str, cause: Exception) -> NoReturn:
        self._states[key] = AssetState.FAILED
        err = AssetResolutionError(asset.name(), stage, cause)
        self._errors[key] = err
        logger.warning("asset_failed", asset=asset.name(), stage=stage, error=str(cause))
        raise err from cause


def dependency_graph(targets: Iterable[Asset]) -> list[tuple[str, str]]:
    """Return the name-level dependency edges reachable from the targets.

    Nothing is loaded or generated; only ``dependencies()`` is consulted.
    Edges are listed depth first in declaration order, each at most once.

    Args:
        targets: Root assets.

    Returns:
        (dependent, dependency) name pairs.
    """
    edges: list[tuple[str, str]] = []
    seen_edges: set[tuple[type[Asset], type[Asset]]] = set()
    visited: set[type[Asset]] = set()

    def walk(asset: Asset) -> None:
        key = asset.memo_key()
        if key in visited:
            return
        visited.add(key)
        for dependency in asset.dependencies():
            edge = (key, dependency.memo_key())
            if edge not in seen_edges:
                seen_edges.add(edge)
                edges.append((asset.name(), dependency.name()))
            walk(dependency)

    for target in targets:
        walk(target)
    return edges
