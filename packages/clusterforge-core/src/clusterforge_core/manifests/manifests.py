"""Manifests asset: every manifest the installer hands to the cluster.

Writes the cluster-config ConfigMap, which embeds the install config so that
in-cluster operators can read it, and collects the files of the other
manifest assets.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from clusterforge_core.asset.base import Asset, File, Parents, WritableAsset
from clusterforge_core.errors import PreconditionError
from clusterforge_core.installconfig.asset import InstallConfig
from clusterforge_core.manifests.cluster_api import ClusterK8sIO
from clusterforge_core.manifests.networking import MANIFEST_DIR, Networking
from clusterforge_core.serialization import dump_yaml

if TYPE_CHECKING:
    from clusterforge_core.asset.fetcher import FileFetcher

CLUSTER_CONFIG_FILENAME = f"{MANIFEST_DIR}/cluster-config.yaml"
CLUSTER_CONFIG_NAME = "cluster-config-v1"
CLUSTER_CONFIG_NAMESPACE = "kube-system"


class Manifests(WritableAsset):
    """Generates the cluster manifests.

    Attributes:
        file_list: The cluster-config ConfigMap followed by the files of
            Networking and ClusterK8sIO.
    """

    def __init__(self) -> None:
        self.file_list: list[File] = []

    def name(self) -> str:
        return "Common Manifests"

    def dependencies(self) -> list[Asset]:
        return [
            InstallConfig(),
            Networking(),
            ClusterK8sIO(),
        ]

    def generate(self, parents: Parents) -> None:
        install_config = parents.get(InstallConfig)
        networking = parents.get(Networking)
        cluster_k8s_io = parents.get(ClusterK8sIO)

        if install_config.file is None:
            raise PreconditionError("Install config used before initialization")

        config_map: dict[str, Any] = {
            "apiVersion": "v1",
            "kind": "ConfigMap",
            "metadata": {
                "name": CLUSTER_CONFIG_NAME,
                "namespace": CLUSTER_CONFIG_NAMESPACE,
            },
            "data": {
                "install-config": install_config.file.data.decode("utf-8"),
            },
        }

        self.file_list = [
            File(filename=CLUSTER_CONFIG_FILENAME, data=dump_yaml(config_map)),
            *networking.files(),
            *cluster_k8s_io.files(),
        ]

    def files(self) -> list[File]:
        return list(self.file_list)

    def load(self, fetcher: FileFetcher) -> bool:
        return False
