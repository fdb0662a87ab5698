"""Install config record models for clusterforge.

This module defines the install-config.yaml schema:
- InstallConfig: Root, schema-versioned record
- Networking: Machine, cluster and service networks (plus deprecated shapes)
- MachinePool: Control plane and compute pools
- Platform: Exactly one cloud/virtualization platform block

Keys are camelCase in YAML (``apiVersion``, ``baseDomain``...) and snake_case
in Python; both spellings are accepted on input.

Schema Version History:
    v1beta3: networking.type, networking.serviceCIDR and
        networking.clusterNetworks[].hostSubnetLength
    v1beta4: networking.networkType, networking.serviceNetwork and
        networking.clusterNetwork[].hostPrefix (current)
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from clusterforge_core.schemas.meta import ObjectMeta
from clusterforge_core.schemas.platform import Platform

# Current install config schema version
INSTALL_CONFIG_VERSION = "v1beta4"

# Older schema versions that can still be upconverted
SUPPORTED_INSTALL_CONFIG_VERSIONS = frozenset({"v1beta3", INSTALL_CONFIG_VERSION})

_RECORD_CONFIG = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class ClusterNetworkEntry(BaseModel):
    """A pod network range and the per-node subnet size carved out of it.

    Attributes:
        cidr: Pod network range (e.g., "10.128.0.0/14").
        host_prefix: Prefix length of the subnet assigned to each node.
    """

    model_config = _RECORD_CONFIG

    cidr: str = Field(..., description="Pod network CIDR")
    host_prefix: int = Field(
        ...,
        alias="hostPrefix",
        description="Prefix length of the subnet allocated to each node",
    )


class DeprecatedClusterNetworkEntry(BaseModel):
    """v1beta3 cluster network entry, sized by host bits instead of prefix."""

    model_config = _RECORD_CONFIG

    cidr: str = Field(..., description="Pod network CIDR")
    host_subnet_length: int = Field(
        ...,
        alias="hostSubnetLength",
        description="Number of host bits in each node subnet",
    )


class Networking(BaseModel):
    """Cluster networking configuration.

    The ``deprecated_*`` fields are only accepted so older documents can be
    read; the upgrade step moves their values to the current fields and
    clears them, so they never appear in a serialized current-version record.

    Attributes:
        network_type: Cluster network plugin (e.g., "OpenShiftSDN").
        machine_cidr: Range the cluster machines are addressed from.
        cluster_network: Pod network ranges, in priority order.
        service_network: Service network ranges.
    """

    model_config = _RECORD_CONFIG

    network_type: str | None = Field(
        default=None,
        alias="networkType",
        description="Cluster network plugin",
    )
    machine_cidr: str | None = Field(
        default=None,
        alias="machineCIDR",
        description="Machine network CIDR",
    )
    cluster_network: list[ClusterNetworkEntry] = Field(
        default_factory=list,
        alias="clusterNetwork",
        description="Pod network ranges",
    )
    service_network: list[str] = Field(
        default_factory=list,
        alias="serviceNetwork",
        description="Service network CIDRs",
    )

    # v1beta3 fields
    deprecated_type: str | None = Field(
        default=None,
        alias="type",
        description="Deprecated: use networkType",
    )
    deprecated_service_cidr: str | None = Field(
        default=None,
        alias="serviceCIDR",
        description="Deprecated: use serviceNetwork",
    )
    deprecated_cluster_networks: list[DeprecatedClusterNetworkEntry] | None = Field(
        default=None,
        alias="clusterNetworks",
        description="Deprecated: use clusterNetwork",
    )


class MachinePool(BaseModel):
    """A named group of identically configured machines."""

    model_config = _RECORD_CONFIG

    name: str = Field(..., description="Pool name")
    replicas: int | None = Field(default=None, description="Number of machines in the pool")


class InstallConfig(BaseModel):
    """Root configuration record for install-config.yaml.

    Attributes:
        api_version: Schema version tag. Always present.
        metadata: Object metadata; ``metadata.name`` is the cluster name.
        ssh_key: Public SSH key authorized on every machine (optional).
        base_domain: DNS domain the cluster name is joined to.
        pull_secret: JSON credentials for pulling release images.
        networking: Networking configuration.
        control_plane: Control plane machine pool.
        compute: Compute machine pools.
        platform: Target platform configuration.

    Example:
        >>> config = InstallConfig(
        ...     api_version=INSTALL_CONFIG_VERSION,
        ...     metadata=ObjectMeta(name="demo"),
        ...     base_domain="example.com",
        ...     pull_secret='{"auths": {}}',
        ...     platform=Platform(none=NonePlatform()),
        ... )
    """

    model_config = _RECORD_CONFIG

    api_version: str = Field(
        ...,
        alias="apiVersion",
        description="Install config schema version",
    )
    metadata: ObjectMeta = Field(
        default_factory=ObjectMeta,
        description="Object metadata (name is the cluster name)",
    )
    ssh_key: str | None = Field(
        default=None,
        alias="sshKey",
        description="Public SSH key",
    )
    base_domain: str = Field(
        default="",
        alias="baseDomain",
        description="Base DNS domain of the cluster",
    )
    pull_secret: str = Field(
        default="",
        alias="pullSecret",
        description="Image pull secret (JSON)",
    )
    networking: Networking | None = Field(
        default=None,
        description="Cluster networking configuration",
    )
    control_plane: MachinePool | None = Field(
        default=None,
        alias="controlPlane",
        description="Control plane machine pool",
    )
    compute: list[MachinePool] | None = Field(
        default=None,
        description="Compute machine pools",
    )
    platform: Platform = Field(
        default_factory=Platform,
        description="Target platform configuration",
    )

    @property
    def cluster_name(self) -> str:
        """Return the cluster name."""
        return self.metadata.name

    @property
    def cluster_domain(self) -> str:
        """Return the fully qualified cluster domain (name.baseDomain)."""
        return f"{self.metadata.name}.{self.base_domain}"
