"""Asset contract for the clusterforge dependency graph.

An asset is a named, stateful unit of the graph. It declares the assets it
depends on, generates its own content once those are resolved, and, when it
is writable, exposes output files and may be reconstituted from a previously
persisted file instead of being regenerated.

This module defines:
- File: A (path, bytes) output pair
- AssetState: Per-asset resolution state machine
- Asset: Base contract every participant implements
- WritableAsset: Asset that produces files and can be loaded from disk
- Parents: Read-only view of an asset's resolved dependencies
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from enum import Enum
from typing import TYPE_CHECKING, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from clusterforge_core.errors import PreconditionError

if TYPE_CHECKING:
    from clusterforge_core.asset.fetcher import FileFetcher

A = TypeVar("A", bound="Asset")


class File(BaseModel):
    """A file produced by an asset.

    Attributes:
        filename: Relative POSIX path of the file inside the asset directory.
        data: File content.

    Example:
        >>> File(filename="install-config.yaml", data=b"apiVersion: v1beta4\\n")
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    filename: str = Field(
        ...,
        min_length=1,
        description="Relative path of the file inside the asset directory",
    )
    data: bytes = Field(
        default=b"",
        description="File content",
    )


class AssetState(str, Enum):
    """Resolution state of an asset within one resolution pass.

    UNRESOLVED -> LOADING -> MATERIALIZED when a persisted copy is found,
    otherwise LOADING -> DEPENDENCIES_RESOLVING -> GENERATING -> MATERIALIZED.
    Any failure moves the asset to FAILED. MATERIALIZED and FAILED are terminal.
    """

    UNRESOLVED = "unresolved"
    LOADING = "loading"
    DEPENDENCIES_RESOLVING = "dependencies-resolving"
    GENERATING = "generating"
    MATERIALIZED = "materialized"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (AssetState.MATERIALIZED, AssetState.FAILED)


class Asset(ABC):
    """Base contract for every node in the asset graph.

    Subclasses declare their dependencies as fresh instances; the store maps
    each one to the single resolved instance of that class for the pass, so
    an asset is identified by its concrete class.

    Example:
        >>> class ClusterName(Asset):
        ...     def name(self) -> str:
        ...         return "Cluster Name"
        ...     def dependencies(self) -> list[Asset]:
        ...         return []
        ...     def generate(self, parents: Parents) -> None:
        ...         self.cluster_name = "demo"
    """

    @abstractmethod
    def name(self) -> str:
        """Return the human-friendly name of the asset."""

    @abstractmethod
    def dependencies(self) -> list[Asset]:
        """Return the assets that must be resolved before this one generates."""

    @abstractmethod
    def generate(self, parents: Parents) -> None:
        """Generate the asset's content from its resolved dependencies.

        Args:
            parents: Resolved dependencies declared by ``dependencies()``.
        """

    @classmethod
    def memo_key(cls) -> type[Asset]:
        """Return the memoization key of the asset within a resolution pass."""
        return cls

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name()!r}>"


class WritableAsset(Asset):
    """Asset that produces output files and can be loaded from disk."""

    @abstractmethod
    def files(self) -> list[File]:
        """Return the files generated by the asset.

        The list is empty until the asset has been materialized.
        """

    @abstractmethod
    def load(self, fetcher: FileFetcher) -> bool:
        """Reconstitute the asset from its persisted files.

        Args:
            fetcher: Access to the persisted asset directory.

        Returns:
            True if the persisted state was found and loaded, False if it is
            absent and the asset must be generated instead.
        """


class Parents(Mapping[type[Asset], Asset]):
    """Read-only view of the resolved dependencies of one asset.

    Example:
        >>> install_config, crds = parents.get_many(InstallConfig, NetworkCRDs)
        >>> install_config.config.networking.network_type
        'OpenShiftSDN'
    """

    def __init__(self, resolved: Mapping[type[Asset], Asset]) -> None:
        self._resolved = dict(resolved)

    def __getitem__(self, key: type[Asset]) -> Asset:
        return self._resolved[key]

    def __iter__(self) -> Iterator[type[Asset]]:
        return iter(self._resolved)

    def __len__(self) -> int:
        return len(self._resolved)

    def get(self, asset_cls: type[A]) -> A:  # type: ignore[override]
        """Return the resolved instance of a declared dependency.

        Args:
            asset_cls: Class of the dependency.

        Returns:
            The resolved dependency.

        Raises:
            PreconditionError: If the class was not declared as a dependency.
        """
        try:
            asset = self._resolved[asset_cls.memo_key()]
        except KeyError:
            raise PreconditionError(
                f"{asset_cls.__name__} requested before initialization: "
                "it was not declared as a dependency"
            ) from None
        return asset  # type: ignore[return-value]

    def get_many(self, *asset_classes: type[Asset]) -> tuple[Asset, ...]:
        """Return several resolved dependencies at once, in argument order."""
        return tuple(self.get(cls) for cls in asset_classes)
