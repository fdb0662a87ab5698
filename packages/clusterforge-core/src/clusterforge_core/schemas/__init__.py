"""Record schemas for clusterforge.

This package exports the pydantic models for every structured document
clusterforge reads or writes:
- InstallConfig and its sections (install-config.yaml)
- Platform blocks (aws, libvirt, none, openstack)
- Network (cluster network configuration manifest)
"""

from __future__ import annotations

from clusterforge_core.schemas.install_config import (
    INSTALL_CONFIG_VERSION,
    SUPPORTED_INSTALL_CONFIG_VERSIONS,
    ClusterNetworkEntry,
    DeprecatedClusterNetworkEntry,
    InstallConfig,
    MachinePool,
    Networking,
)
from clusterforge_core.schemas.meta import ObjectMeta
from clusterforge_core.schemas.network_config import (
    NETWORK_API_VERSION,
    NETWORK_OBJECT_NAME,
    ClusterNetworkRanges,
    Network,
    NetworkClusterEntry,
    NetworkSpec,
)
from clusterforge_core.schemas.platform import (
    AWSPlatform,
    LibvirtNetwork,
    LibvirtPlatform,
    NonePlatform,
    OpenStackPlatform,
    Platform,
    PlatformType,
)

__all__: list[str] = [
    # Install config
    "INSTALL_CONFIG_VERSION",
    "SUPPORTED_INSTALL_CONFIG_VERSIONS",
    "InstallConfig",
    "Networking",
    "ClusterNetworkEntry",
    "DeprecatedClusterNetworkEntry",
    "MachinePool",
    "ObjectMeta",
    # Platforms
    "Platform",
    "PlatformType",
    "AWSPlatform",
    "LibvirtPlatform",
    "LibvirtNetwork",
    "NonePlatform",
    "OpenStackPlatform",
    # Network manifest
    "NETWORK_API_VERSION",
    "NETWORK_OBJECT_NAME",
    "Network",
    "NetworkSpec",
    "NetworkClusterEntry",
    "ClusterNetworkRanges",
]
