"""Cluster manifest assets.

This package exports:
- Networking: cluster-network CRD and Network config manifests
- ClusterK8sIO: cluster.k8s.io Cluster object for the machine API
- Manifests: Aggregate of every manifest, plus the cluster-config ConfigMap
"""

from __future__ import annotations

from clusterforge_core.manifests.cluster_api import CLUSTER_API_FILENAME, ClusterK8sIO
from clusterforge_core.manifests.manifests import CLUSTER_CONFIG_FILENAME, Manifests
from clusterforge_core.manifests.networking import (
    NETWORK_CONFIG_FILENAME,
    NETWORK_CRD_FILENAME,
    Networking,
)

__all__: list[str] = [
    # Network config
    "Networking",
    "NETWORK_CRD_FILENAME",
    "NETWORK_CONFIG_FILENAME",
    # Cluster API
    "ClusterK8sIO",
    "CLUSTER_API_FILENAME",
    # Aggregate
    "Manifests",
    "CLUSTER_CONFIG_FILENAME",
]
