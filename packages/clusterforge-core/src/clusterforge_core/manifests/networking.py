"""Networking asset: the cluster-network-*.yml manifests.

The CRDs are created by the installer rather than the cluster version
operator because the installer also creates the matching configuration
instance. Two files are written:

- manifests/cluster-network-01-crd.yml: every network CRD template, each
  preceded by a YAML document separator
- manifests/cluster-network-02-config.yml: the Network configuration object
  derived from the install config networking section
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from clusterforge_core.asset.base import Asset, File, Parents, WritableAsset
from clusterforge_core.errors import MissingInputError, PreconditionError, SerializationError
from clusterforge_core.installconfig.asset import InstallConfig
from clusterforge_core.schemas.network_config import (
    ClusterNetworkRanges,
    Network,
    NetworkClusterEntry,
    NetworkSpec,
)
from clusterforge_core.serialization import dump_yaml
from clusterforge_core.templates.network_crds import NetworkCRDs

if TYPE_CHECKING:
    from clusterforge_core.asset.fetcher import FileFetcher

logger = structlog.get_logger(__name__)

MANIFEST_DIR = "manifests"

NETWORK_CRD_FILENAME = f"{MANIFEST_DIR}/cluster-network-01-crd.yml"
NETWORK_CONFIG_FILENAME = f"{MANIFEST_DIR}/cluster-network-02-config.yml"

DOCUMENT_SEPARATOR = b"\n---\n"


class Networking(WritableAsset):
    """Generates the cluster network CRD and configuration manifests.

    Attributes:
        config: The generated Network object, or None before generation.
        file_list: The two manifest files, empty before generation.
    """

    def __init__(self) -> None:
        self.config: Network | None = None
        self.file_list: list[File] = []

    def name(self) -> str:
        return "Network Config"

    def dependencies(self) -> list[Asset]:
        return [
            InstallConfig(),
            NetworkCRDs(),
        ]

    def generate(self, parents: Parents) -> None:
        """Build the Network object and combine the CRD templates.

        Raises:
            MissingInputError: If the install config has no cluster networks.
            PreconditionError: If the install config was not materialized.
        """
        install_config = parents.get(InstallConfig)
        crds = parents.get(NetworkCRDs)

        if install_config.config is None:
            raise PreconditionError("Install config used before initialization")
        net_config = install_config.config.networking
        if net_config is None or not net_config.cluster_network:
            raise MissingInputError(
                "cluster networks must be specified",
                input_name="networking.clusterNetwork",
            )

        config = Network(
            spec=NetworkSpec(
                cluster_network=[
                    NetworkClusterEntry(cidr=entry.cidr, host_prefix=entry.host_prefix)
                    for entry in net_config.cluster_network
                ],
                service_network=list(net_config.service_network),
                network_type=net_config.network_type or "",
            ),
        )

        try:
            config_data = dump_yaml(config)
        except SerializationError as e:
            raise SerializationError(
                f"failed to create {self.name()} manifests from InstallConfig: {e}"
            ) from e

        crd_contents = b"".join(DOCUMENT_SEPARATOR + crd.data for crd in crds.files())

        self.config = config
        self.file_list = [
            File(filename=NETWORK_CRD_FILENAME, data=crd_contents),
            File(filename=NETWORK_CONFIG_FILENAME, data=config_data),
        ]
        logger.debug(
            "network_config_generated",
            cluster_networks=len(config.spec.cluster_network),
            network_type=config.spec.network_type,
        )

    def files(self) -> list[File]:
        return list(self.file_list)

    def cluster_network_ranges(self) -> ClusterNetworkRanges:
        """Return the pod and service CIDRs of the generated Network object.

        Used by manifests that need the cluster network ranges without being
        networking aware themselves.

        Raises:
            PreconditionError: If called before ``generate``.
        """
        if self.config is None:
            raise PreconditionError("ClusterNetworkRanges called before initialization")

        return ClusterNetworkRanges(
            pods=[entry.cidr for entry in self.config.spec.cluster_network],
            services=list(self.config.spec.service_network),
        )

    def load(self, fetcher: FileFetcher) -> bool:
        """Always False: these manifests are only ever generated."""
        return False
