"""Unit tests for install config defaults."""

from __future__ import annotations

from typing import Any

from clusterforge_core.installconfig import set_install_config_defaults
from clusterforge_core.installconfig.defaults import (
    DEFAULT_AWS_REGION,
    DEFAULT_CLUSTER_NETWORK_CIDR,
    DEFAULT_HOST_PREFIX,
    DEFAULT_LIBVIRT_INTERFACE,
    DEFAULT_LIBVIRT_URI,
    DEFAULT_MACHINE_CIDR,
    DEFAULT_NETWORK_TYPE,
    DEFAULT_REPLICAS,
    DEFAULT_SERVICE_NETWORK,
)
from clusterforge_core.schemas import InstallConfig


class TestSetInstallConfigDefaults:
    """Tests for set_install_config_defaults."""

    def test_fills_networking(self, sample_install_config: dict[str, Any]) -> None:
        config = set_install_config_defaults(InstallConfig.model_validate(sample_install_config))

        networking = config.networking
        assert networking is not None
        assert networking.machine_cidr == DEFAULT_MACHINE_CIDR
        assert networking.network_type == DEFAULT_NETWORK_TYPE
        assert networking.service_network == [DEFAULT_SERVICE_NETWORK]
        assert [(e.cidr, e.host_prefix) for e in networking.cluster_network] == [
            (DEFAULT_CLUSTER_NETWORK_CIDR, DEFAULT_HOST_PREFIX)
        ]

    def test_fills_machine_pools(self, sample_install_config: dict[str, Any]) -> None:
        config = set_install_config_defaults(InstallConfig.model_validate(sample_install_config))

        assert config.control_plane is not None
        assert config.control_plane.name == "master"
        assert config.control_plane.replicas == DEFAULT_REPLICAS
        assert config.compute is not None
        assert [(p.name, p.replicas) for p in config.compute] == [("worker", DEFAULT_REPLICAS)]

    def test_user_values_are_kept(self, sample_install_config: dict[str, Any]) -> None:
        sample_install_config["networking"] = {
            "networkType": "OVNKubernetes",
            "machineCIDR": "192.168.0.0/16",
        }
        sample_install_config["compute"] = [{"name": "worker", "replicas": 0}]

        config = set_install_config_defaults(InstallConfig.model_validate(sample_install_config))

        assert config.networking is not None
        assert config.networking.network_type == "OVNKubernetes"
        assert config.networking.machine_cidr == "192.168.0.0/16"
        assert config.compute is not None
        assert config.compute[0].replicas == 0

    def test_missing_replicas_defaulted(self, sample_install_config: dict[str, Any]) -> None:
        sample_install_config["controlPlane"] = {"name": "master"}
        sample_install_config["compute"] = [{"name": "worker"}]

        config = set_install_config_defaults(InstallConfig.model_validate(sample_install_config))

        assert config.control_plane is not None
        assert config.control_plane.replicas == DEFAULT_REPLICAS
        assert config.compute is not None
        assert config.compute[0].replicas == DEFAULT_REPLICAS

    def test_aws_region_defaulted(self, sample_install_config: dict[str, Any]) -> None:
        sample_install_config["platform"] = {"aws": {}}
        config = set_install_config_defaults(InstallConfig.model_validate(sample_install_config))
        assert config.platform.aws is not None
        assert config.platform.aws.region == DEFAULT_AWS_REGION

    def test_libvirt_defaults(self, sample_install_config: dict[str, Any]) -> None:
        sample_install_config["platform"] = {"libvirt": {}}
        config = set_install_config_defaults(InstallConfig.model_validate(sample_install_config))

        libvirt = config.platform.libvirt
        assert libvirt is not None
        assert libvirt.uri == DEFAULT_LIBVIRT_URI
        assert libvirt.network is not None
        assert libvirt.network.interface == DEFAULT_LIBVIRT_INTERFACE

    def test_idempotent(self, sample_install_config: dict[str, Any]) -> None:
        """Defaulting an already defaulted record returns it unchanged."""
        once = set_install_config_defaults(InstallConfig.model_validate(sample_install_config))
        assert set_install_config_defaults(once) is once

    def test_does_not_mutate_input(self, sample_install_config: dict[str, Any]) -> None:
        config = InstallConfig.model_validate(sample_install_config)
        set_install_config_defaults(config)
        assert config.networking is None
        assert config.control_plane is None
