"""Install config asset and policy.

This package exports:
- InstallConfig: Asset materializing install-config.yaml
- Input assets: SSHPublicKey, BaseDomain, ClusterName, PullSecret, PlatformSelection
- Policy: convert_install_config, set_install_config_defaults, validate_install_config
"""

from __future__ import annotations

from clusterforge_core.installconfig.asset import INSTALL_CONFIG_FILENAME, InstallConfig
from clusterforge_core.installconfig.conversion import convert_install_config
from clusterforge_core.installconfig.defaults import set_install_config_defaults
from clusterforge_core.installconfig.inputs import (
    BaseDomain,
    ClusterName,
    PlatformSelection,
    PullSecret,
    SSHPublicKey,
)
from clusterforge_core.installconfig.validation import validate_install_config

__all__: list[str] = [
    "INSTALL_CONFIG_FILENAME",
    "InstallConfig",
    "SSHPublicKey",
    "BaseDomain",
    "ClusterName",
    "PullSecret",
    "PlatformSelection",
    "convert_install_config",
    "set_install_config_defaults",
    "validate_install_config",
]
