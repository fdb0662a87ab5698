"""Platform configuration models for clusterforge.

An install config targets exactly one platform. Each platform block holds
only what the installer needs to address that platform; credentials are
never part of the record.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

_RECORD_CONFIG = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class PlatformType(str, Enum):
    """Supported installation platforms."""

    aws = "aws"
    libvirt = "libvirt"
    none = "none"
    openstack = "openstack"


class AWSPlatform(BaseModel):
    """Amazon Web Services platform settings.

    Attributes:
        region: AWS region the cluster is created in.
        user_tags: Extra tags applied to every created resource.
    """

    model_config = _RECORD_CONFIG

    region: str = Field(default="", description="AWS region")
    user_tags: dict[str, str] = Field(
        default_factory=dict,
        alias="userTags",
        description="Additional tags for created resources",
    )


class LibvirtNetwork(BaseModel):
    """Libvirt network settings."""

    model_config = _RECORD_CONFIG

    interface: str = Field(default="", alias="if", description="Bridge interface name")
    ip_range: str | None = Field(default=None, alias="ipRange", description="Machine IP range")


class LibvirtPlatform(BaseModel):
    """Libvirt platform settings.

    Attributes:
        uri: Libvirt connection URI.
        network: Network the machines are attached to.
    """

    model_config = _RECORD_CONFIG

    uri: str = Field(default="", alias="URI", description="Libvirt connection URI")
    network: LibvirtNetwork | None = Field(default=None, description="Libvirt network")


class NonePlatform(BaseModel):
    """Bare installation with no platform integration."""

    model_config = _RECORD_CONFIG


class OpenStackPlatform(BaseModel):
    """OpenStack platform settings."""

    model_config = _RECORD_CONFIG

    region: str = Field(default="", description="OpenStack region")
    cloud: str = Field(default="", description="Cloud name in clouds.yaml")
    external_network: str = Field(
        default="",
        alias="externalNetwork",
        description="External network name",
    )
    compute_flavor: str | None = Field(
        default=None,
        alias="computeFlavor",
        description="Flavor used for compute machines",
    )


class Platform(BaseModel):
    """Target platform. Exactly one block must be set."""

    model_config = _RECORD_CONFIG

    aws: AWSPlatform | None = None
    libvirt: LibvirtPlatform | None = None
    none: NonePlatform | None = None
    openstack: OpenStackPlatform | None = None

    def active(self) -> list[PlatformType]:
        """Return the platform types with a non-empty block, in declaration order."""
        return [
            platform_type
            for platform_type in PlatformType
            if getattr(self, platform_type.value) is not None
        ]

    @property
    def name(self) -> str:
        """Return the single active platform name, or "" when not exactly one is set."""
        active = self.active()
        return active[0].value if len(active) == 1 else ""
