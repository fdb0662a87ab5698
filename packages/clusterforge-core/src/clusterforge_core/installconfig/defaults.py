"""Default values for install config records.

``set_install_config_defaults`` returns a new record with every unset field
filled in. Fields the user set are never touched, so applying defaults to an
already defaulted record changes nothing.
"""

from __future__ import annotations

from clusterforge_core.schemas.install_config import (
    ClusterNetworkEntry,
    InstallConfig,
    MachinePool,
    Networking,
)
from clusterforge_core.schemas.platform import (
    AWSPlatform,
    LibvirtNetwork,
    LibvirtPlatform,
    Platform,
)

DEFAULT_MACHINE_CIDR = "10.0.0.0/16"
DEFAULT_NETWORK_TYPE = "OpenShiftSDN"
DEFAULT_SERVICE_NETWORK = "172.30.0.0/16"
DEFAULT_CLUSTER_NETWORK_CIDR = "10.128.0.0/14"
DEFAULT_HOST_PREFIX = 23

CONTROL_PLANE_POOL_NAME = "master"
COMPUTE_POOL_NAME = "worker"
DEFAULT_REPLICAS = 3

DEFAULT_AWS_REGION = "us-east-1"
DEFAULT_LIBVIRT_URI = "qemu+tcp://192.168.122.1/system"
DEFAULT_LIBVIRT_INTERFACE = "tt0"


def set_install_config_defaults(config: InstallConfig) -> InstallConfig:
    """Fill in defaults for every unset install config field.

    Args:
        config: Current-version install config.

    Returns:
        The defaulted record (the same object if nothing was missing).
    """
    update: dict[str, object] = {}

    networking = _networking_defaults(config.networking or Networking())
    if networking != config.networking:
        update["networking"] = networking

    if config.control_plane is None:
        update["control_plane"] = MachinePool(name=CONTROL_PLANE_POOL_NAME, replicas=DEFAULT_REPLICAS)
    elif config.control_plane.replicas is None:
        update["control_plane"] = config.control_plane.model_copy(update={"replicas": DEFAULT_REPLICAS})

    if config.compute is None:
        update["compute"] = [MachinePool(name=COMPUTE_POOL_NAME, replicas=DEFAULT_REPLICAS)]
    elif any(pool.replicas is None for pool in config.compute):
        update["compute"] = [
            pool if pool.replicas is not None else pool.model_copy(update={"replicas": DEFAULT_REPLICAS})
            for pool in config.compute
        ]

    platform = _platform_defaults(config.platform)
    if platform != config.platform:
        update["platform"] = platform

    if not update:
        return config
    return config.model_copy(update=update)


def _networking_defaults(networking: Networking) -> Networking:
    update: dict[str, object] = {}
    if not networking.machine_cidr:
        update["machine_cidr"] = DEFAULT_MACHINE_CIDR
    if not networking.network_type:
        update["network_type"] = DEFAULT_NETWORK_TYPE
    if not networking.service_network:
        update["service_network"] = [DEFAULT_SERVICE_NETWORK]
    if not networking.cluster_network:
        update["cluster_network"] = [
            ClusterNetworkEntry(cidr=DEFAULT_CLUSTER_NETWORK_CIDR, host_prefix=DEFAULT_HOST_PREFIX)
        ]
    if not update:
        return networking
    return networking.model_copy(update=update)


def _platform_defaults(platform: Platform) -> Platform:
    update: dict[str, object] = {}

    if platform.aws is not None:
        aws = _aws_defaults(platform.aws)
        if aws is not platform.aws:
            update["aws"] = aws

    if platform.libvirt is not None:
        libvirt = _libvirt_defaults(platform.libvirt)
        if libvirt is not platform.libvirt:
            update["libvirt"] = libvirt

    if not update:
        return platform
    return platform.model_copy(update=update)


def _aws_defaults(aws: AWSPlatform) -> AWSPlatform:
    if aws.region:
        return aws
    return aws.model_copy(update={"region": DEFAULT_AWS_REGION})


def _libvirt_defaults(libvirt: LibvirtPlatform) -> LibvirtPlatform:
    update: dict[str, object] = {}
    if not libvirt.uri:
        update["uri"] = DEFAULT_LIBVIRT_URI
    if libvirt.network is None:
        update["network"] = LibvirtNetwork(interface=DEFAULT_LIBVIRT_INTERFACE)
    elif not libvirt.network.interface:
        update["network"] = libvirt.network.model_copy(update={"interface": DEFAULT_LIBVIRT_INTERFACE})
    if not update:
        return libvirt
    return libvirt.model_copy(update=update)
