"""Upconversion of older install config documents to the current schema.

``convert_install_config`` is pure and idempotent: it never mutates its input
and converting an already current record returns an equal record.

Migrations (v1beta3 -> v1beta4):
- networking.type -> networking.networkType
- networking.serviceCIDR -> networking.serviceNetwork[0]
- networking.clusterNetworks[].hostSubnetLength -> networking.clusterNetwork[].hostPrefix

A deprecated value is only copied when the current field is still empty;
the deprecated field is cleared either way.
"""

from __future__ import annotations

import ipaddress

import structlog

from clusterforge_core.errors import UpgradeError
from clusterforge_core.schemas.install_config import (
    INSTALL_CONFIG_VERSION,
    SUPPORTED_INSTALL_CONFIG_VERSIONS,
    ClusterNetworkEntry,
    DeprecatedClusterNetworkEntry,
    InstallConfig,
    Networking,
)

logger = structlog.get_logger(__name__)


def convert_install_config(config: InstallConfig) -> InstallConfig:
    """Convert a possibly older install config to the current version.

    Args:
        config: Deserialized install config of any supported version.

    Returns:
        A current-version record with deprecated fields relocated.

    Raises:
        UpgradeError: If the schema version is not supported or a
            deprecated value cannot be migrated.
    """
    if config.api_version not in SUPPORTED_INSTALL_CONFIG_VERSIONS:
        supported = ", ".join(sorted(SUPPORTED_INSTALL_CONFIG_VERSIONS))
        raise UpgradeError(
            f"cannot upconvert from version {config.api_version!r} "
            f"(supported: {supported})",
            api_version=config.api_version,
        )

    update: dict[str, object] = {}
    if config.networking is not None:
        networking, migrated = _convert_networking(config.networking)
        if migrated:
            update["networking"] = networking
            logger.debug("install_config_fields_migrated", fields=migrated)
    if config.api_version != INSTALL_CONFIG_VERSION:
        update["api_version"] = INSTALL_CONFIG_VERSION

    if not update:
        return config
    return config.model_copy(update=update)


def _convert_networking(networking: Networking) -> tuple[Networking, list[str]]:
    update: dict[str, object] = {}
    migrated: list[str] = []

    if networking.deprecated_type is not None:
        if not networking.network_type:
            update["network_type"] = networking.deprecated_type
        update["deprecated_type"] = None
        migrated.append("networking.type")

    if networking.deprecated_service_cidr is not None:
        if not networking.service_network:
            update["service_network"] = [networking.deprecated_service_cidr]
        update["deprecated_service_cidr"] = None
        migrated.append("networking.serviceCIDR")

    if networking.deprecated_cluster_networks is not None:
        if not networking.cluster_network:
            update["cluster_network"] = [
                _convert_cluster_network(entry)
                for entry in networking.deprecated_cluster_networks
            ]
        update["deprecated_cluster_networks"] = None
        migrated.append("networking.clusterNetworks")

    if not update:
        return networking, migrated
    return networking.model_copy(update=update), migrated


def _convert_cluster_network(entry: DeprecatedClusterNetworkEntry) -> ClusterNetworkEntry:
    """Turn a host-bits sized entry into a prefix sized one."""
    try:
        max_prefix = ipaddress.ip_network(entry.cidr, strict=False).max_prefixlen
    except ValueError as e:
        raise UpgradeError(
            f"cannot upconvert cluster network {entry.cidr!r}: invalid CIDR"
        ) from e

    if not 0 <= entry.host_subnet_length <= max_prefix:
        raise UpgradeError(
            f"cannot upconvert cluster network {entry.cidr!r}: "
            f"hostSubnetLength {entry.host_subnet_length} out of range 0-{max_prefix}"
        )
    return ClusterNetworkEntry(cidr=entry.cidr, host_prefix=max_prefix - entry.host_subnet_length)
