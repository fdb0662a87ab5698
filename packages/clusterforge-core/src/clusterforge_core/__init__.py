"""clusterforge-core: Asset graph and install config compilation for clusterforge.

This package provides:
- AssetStore: Resolve an asset and its dependencies in one pass
- InstallConfig: Load or generate, upgrade, default and validate install-config.yaml
- Networking, ClusterK8sIO, Manifests: Cluster manifests compiled from the install config
- Error types shared by every layer
"""

from __future__ import annotations

__version__ = "0.1.0"

# Asset graph engine
from clusterforge_core.asset import (
    Asset,
    AssetState,
    AssetStore,
    DirectoryFileFetcher,
    File,
    FileFetcher,
    Parents,
    WritableAsset,
    dependency_graph,
)

# Error types
from clusterforge_core.errors import (
    AssetResolutionError,
    ConfigurationError,
    DefaultingError,
    DependencyCycleError,
    FieldViolation,
    ForgeError,
    InstallConfigValidationError,
    MissingInputError,
    PreconditionError,
    SerializationError,
    UpgradeError,
    ValidationError,
)

# Install config
from clusterforge_core.installconfig import InstallConfig

# Manifests
from clusterforge_core.manifests import ClusterK8sIO, Manifests, Networking

# Logging
from clusterforge_core.observability import configure_logging

# Templates
from clusterforge_core.templates import NetworkCRDs

__all__ = [
    "__version__",
    # Engine
    "Asset",
    "WritableAsset",
    "File",
    "Parents",
    "AssetState",
    "FileFetcher",
    "DirectoryFileFetcher",
    "AssetStore",
    "dependency_graph",
    # Assets
    "InstallConfig",
    "NetworkCRDs",
    "Networking",
    "ClusterK8sIO",
    "Manifests",
    # Errors
    "ForgeError",
    "ConfigurationError",
    "SerializationError",
    "UpgradeError",
    "DefaultingError",
    "FieldViolation",
    "ValidationError",
    "InstallConfigValidationError",
    "PreconditionError",
    "MissingInputError",
    "AssetResolutionError",
    "DependencyCycleError",
    # Logging
    "configure_logging",
]
