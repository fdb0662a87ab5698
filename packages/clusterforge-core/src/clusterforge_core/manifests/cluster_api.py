"""ClusterK8sIO asset: the cluster.k8s.io Cluster object.

The Cluster object captures generalized cluster state for the machine API.
It needs the pod and service ranges but should not have to understand the
networking section, so it takes them from Networking.cluster_network_ranges().
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from clusterforge_core.asset.base import Asset, File, Parents, WritableAsset
from clusterforge_core.errors import PreconditionError
from clusterforge_core.installconfig.asset import InstallConfig
from clusterforge_core.manifests.networking import Networking
from clusterforge_core.serialization import dump_yaml

if TYPE_CHECKING:
    from clusterforge_core.asset.fetcher import FileFetcher

OPENSHIFT_DIR = "openshift"

CLUSTER_API_FILENAME = f"{OPENSHIFT_DIR}/99_openshift-cluster-api_cluster.yaml"
CLUSTER_API_VERSION = "cluster.k8s.io/v1alpha1"
CLUSTER_API_NAMESPACE = "openshift-cluster-api"


class ClusterK8sIO(WritableAsset):
    """Generates the cluster.k8s.io Cluster manifest.

    Attributes:
        cluster: The generated Cluster document, or None before generation.
        file: The serialized manifest, or None before generation.
    """

    def __init__(self) -> None:
        self.cluster: dict[str, Any] | None = None
        self.file: File | None = None

    def name(self) -> str:
        return "ClusterK8sIO"

    def dependencies(self) -> list[Asset]:
        return [
            InstallConfig(),
            Networking(),
        ]

    def generate(self, parents: Parents) -> None:
        install_config = parents.get(InstallConfig)
        networking = parents.get(Networking)

        if install_config.config is None:
            raise PreconditionError("Install config used before initialization")
        ranges = networking.cluster_network_ranges()

        cluster: dict[str, Any] = {
            "apiVersion": CLUSTER_API_VERSION,
            "kind": "Cluster",
            "metadata": {
                "name": install_config.config.metadata.name,
                "namespace": CLUSTER_API_NAMESPACE,
            },
            "spec": {
                "clusterNetwork": {
                    "services": {"cidrBlocks": ranges.services},
                    "pods": {"cidrBlocks": ranges.pods},
                    "serviceDomain": "unused",
                },
            },
        }
        data = dump_yaml(cluster)

        self.cluster = cluster
        self.file = File(filename=CLUSTER_API_FILENAME, data=data)

    def files(self) -> list[File]:
        if self.file is not None:
            return [self.file]
        return []

    def load(self, fetcher: FileFetcher) -> bool:
        return False
