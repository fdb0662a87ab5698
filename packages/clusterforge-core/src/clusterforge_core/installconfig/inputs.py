"""User input assets feeding the install config.

Each input is a small asset with no dependencies whose ``generate`` reads its
value from the environment:

- CLUSTERFORGE_SSH_KEY / CLUSTERFORGE_SSH_KEY_FILE (optional)
- CLUSTERFORGE_BASE_DOMAIN
- CLUSTERFORGE_CLUSTER_NAME
- CLUSTERFORGE_PULL_SECRET / CLUSTERFORGE_PULL_SECRET_FILE
- CLUSTERFORGE_PLATFORM plus platform specific variables

Inputs are only checked for presence here; format rules live in
``installconfig.validation`` so every problem is reported together.
"""

from __future__ import annotations

import os
from pathlib import Path

from clusterforge_core.asset.base import Asset, Parents
from clusterforge_core.errors import MissingInputError
from clusterforge_core.schemas.platform import (
    AWSPlatform,
    LibvirtPlatform,
    NonePlatform,
    OpenStackPlatform,
    Platform,
    PlatformType,
)

ENV_PREFIX = "CLUSTERFORGE_"

SSH_KEY_ENV_VAR = f"{ENV_PREFIX}SSH_KEY"
SSH_KEY_FILE_ENV_VAR = f"{ENV_PREFIX}SSH_KEY_FILE"
BASE_DOMAIN_ENV_VAR = f"{ENV_PREFIX}BASE_DOMAIN"
CLUSTER_NAME_ENV_VAR = f"{ENV_PREFIX}CLUSTER_NAME"
PULL_SECRET_ENV_VAR = f"{ENV_PREFIX}PULL_SECRET"
PULL_SECRET_FILE_ENV_VAR = f"{ENV_PREFIX}PULL_SECRET_FILE"
PLATFORM_ENV_VAR = f"{ENV_PREFIX}PLATFORM"
AWS_REGION_ENV_VAR = f"{ENV_PREFIX}AWS_REGION"
LIBVIRT_URI_ENV_VAR = f"{ENV_PREFIX}LIBVIRT_URI"
OPENSTACK_REGION_ENV_VAR = f"{ENV_PREFIX}OPENSTACK_REGION"
OPENSTACK_CLOUD_ENV_VAR = f"{ENV_PREFIX}OPENSTACK_CLOUD"
OPENSTACK_EXTERNAL_NETWORK_ENV_VAR = f"{ENV_PREFIX}OPENSTACK_EXTERNAL_NETWORK"


def _read_input(env_var: str, file_env_var: str | None = None) -> str:
    """Read an input from a variable, or from the file a second variable points to."""
    value = os.environ.get(env_var, "").strip()
    if value or file_env_var is None:
        return value

    file_path = os.environ.get(file_env_var, "").strip()
    if not file_path:
        return ""
    path = Path(file_path).expanduser()
    if not path.is_file():
        raise MissingInputError(
            f"File named by {file_env_var} not found: {path}",
            input_name=file_env_var,
        )
    return path.read_text().strip()


def _require_input(label: str, env_var: str, file_env_var: str | None = None) -> str:
    value = _read_input(env_var, file_env_var)
    if not value:
        hint = f"{env_var} or {file_env_var}" if file_env_var else env_var
        raise MissingInputError(f"{label} is required: set {hint}", input_name=env_var)
    return value


class SSHPublicKey(Asset):
    """Public SSH key authorized on cluster machines. Optional."""

    def __init__(self) -> None:
        self.public_key = ""

    def name(self) -> str:
        return "SSH Key"

    def dependencies(self) -> list[Asset]:
        return []

    def generate(self, parents: Parents) -> None:
        self.public_key = _read_input(SSH_KEY_ENV_VAR, SSH_KEY_FILE_ENV_VAR)


class BaseDomain(Asset):
    """Base DNS domain the cluster name is joined to."""

    def __init__(self) -> None:
        self.base_domain = ""

    def name(self) -> str:
        return "Base Domain"

    def dependencies(self) -> list[Asset]:
        return []

    def generate(self, parents: Parents) -> None:
        self.base_domain = _require_input("Base domain", BASE_DOMAIN_ENV_VAR)


class ClusterName(Asset):
    """Name of the cluster."""

    def __init__(self) -> None:
        self.cluster_name = ""

    def name(self) -> str:
        return "Cluster Name"

    def dependencies(self) -> list[Asset]:
        return []

    def generate(self, parents: Parents) -> None:
        self.cluster_name = _require_input("Cluster name", CLUSTER_NAME_ENV_VAR)


class PullSecret(Asset):
    """Credentials for pulling release images, as a JSON document."""

    def __init__(self) -> None:
        self.pull_secret = ""

    def name(self) -> str:
        return "Pull Secret"

    def dependencies(self) -> list[Asset]:
        return []

    def generate(self, parents: Parents) -> None:
        self.pull_secret = _require_input("Pull secret", PULL_SECRET_ENV_VAR, PULL_SECRET_FILE_ENV_VAR)


class PlatformSelection(Asset):
    """The platform the cluster is installed on, with its settings.

    Exactly one platform block is populated. Values left unset are filled in
    later by the install config defaults.
    """

    def __init__(self) -> None:
        self.platform = Platform()

    def name(self) -> str:
        return "Platform"

    def dependencies(self) -> list[Asset]:
        return []

    def generate(self, parents: Parents) -> None:
        raw = _require_input("Platform", PLATFORM_ENV_VAR).lower()
        try:
            platform_type = PlatformType(raw)
        except ValueError:
            choices = ", ".join(p.value for p in PlatformType)
            raise MissingInputError(
                f"Unknown platform {raw!r}. Choose one of: {choices}",
                input_name=PLATFORM_ENV_VAR,
            ) from None

        if platform_type is PlatformType.aws:
            self.platform = Platform(aws=AWSPlatform(region=_read_input(AWS_REGION_ENV_VAR)))
        elif platform_type is PlatformType.libvirt:
            self.platform = Platform(libvirt=LibvirtPlatform(uri=_read_input(LIBVIRT_URI_ENV_VAR)))
        elif platform_type is PlatformType.openstack:
            self.platform = Platform(
                openstack=OpenStackPlatform(
                    region=_require_input("OpenStack region", OPENSTACK_REGION_ENV_VAR),
                    cloud=_require_input("OpenStack cloud", OPENSTACK_CLOUD_ENV_VAR),
                    external_network=_require_input(
                        "OpenStack external network", OPENSTACK_EXTERNAL_NETWORK_ENV_VAR
                    ),
                )
            )
        else:
            self.platform = Platform(none=NonePlatform())
