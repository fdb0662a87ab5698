"""Cluster network configuration document models.

The Network document is the high-level ``config.openshift.io/v1`` resource
describing pod and service networks. It is derived from the install config
networking section and written next to its CRD by the Networking manifest.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from clusterforge_core.schemas.meta import ObjectMeta

NETWORK_API_VERSION = "config.openshift.io/v1"

# The Network config object is a cluster singleton
NETWORK_OBJECT_NAME = "cluster"

_RECORD_CONFIG = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class NetworkClusterEntry(BaseModel):
    """A pod network range in the Network document."""

    model_config = _RECORD_CONFIG

    cidr: str = Field(..., description="Pod network CIDR")
    host_prefix: int = Field(..., alias="hostPrefix", ge=0, le=128)


class NetworkSpec(BaseModel):
    """Desired cluster network state.

    Attributes:
        cluster_network: Pod network ranges, in input order. At least one.
        service_network: Service network CIDRs.
        network_type: Network plugin name.
    """

    model_config = _RECORD_CONFIG

    cluster_network: list[NetworkClusterEntry] = Field(
        ...,
        alias="clusterNetwork",
        min_length=1,
        description="Pod network ranges",
    )
    service_network: list[str] = Field(
        default_factory=list,
        alias="serviceNetwork",
        description="Service network CIDRs",
    )
    network_type: str = Field(default="", alias="networkType", description="Network plugin")


class Network(BaseModel):
    """The cluster-scoped Network configuration resource."""

    model_config = _RECORD_CONFIG

    api_version: str = Field(default=NETWORK_API_VERSION, alias="apiVersion")
    kind: Literal["Network"] = "Network"
    metadata: ObjectMeta = Field(default_factory=lambda: ObjectMeta(name=NETWORK_OBJECT_NAME))
    spec: NetworkSpec


class ClusterNetworkRanges(BaseModel):
    """Pod and service CIDR lists derived from a generated Network document.

    Attributes:
        pods: Pod network CIDRs, in cluster network order.
        services: Service network CIDRs.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    pods: list[str] = Field(default_factory=list)
    services: list[str] = Field(default_factory=list)
