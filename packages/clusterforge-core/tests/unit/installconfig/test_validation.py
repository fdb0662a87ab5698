"""Unit tests for install config validation rules."""

from __future__ import annotations

from typing import Any

import pytest

from clusterforge_core.errors import FieldViolation
from clusterforge_core.installconfig import set_install_config_defaults, validate_install_config
from clusterforge_core.schemas import InstallConfig


def _violations(document: dict[str, Any]) -> list[FieldViolation]:
    config = set_install_config_defaults(InstallConfig.model_validate(document))
    return validate_install_config(config)


def _paths(violations: list[FieldViolation]) -> list[str]:
    return [v.field_path for v in violations]


class TestValidInstallConfig:
    """Tests for configs that pass every rule."""

    def test_defaulted_sample_is_valid(self, sample_install_config: dict[str, Any]) -> None:
        assert _violations(sample_install_config) == []

    def test_ssh_key_accepted(self, sample_install_config: dict[str, Any]) -> None:
        sample_install_config["sshKey"] = "ssh-rsa AAAAB3NzaC1yc2EAAAADAQABAAABAQC7 user@host"
        assert _violations(sample_install_config) == []

    def test_ipv6_networks(self, sample_install_config: dict[str, Any]) -> None:
        sample_install_config["networking"] = {
            "machineCIDR": "fd00::/48",
            "serviceNetwork": ["fd02::/112"],
            "clusterNetwork": [{"cidr": "fd01::/48", "hostPrefix": 64}],
        }
        assert _violations(sample_install_config) == []


class TestIdentityRules:
    """Tests for names, domains and credentials."""

    def test_unnormalized_version(self, sample_install_config: dict[str, Any]) -> None:
        """Validation expects records already upgraded to the current version."""
        sample_install_config["apiVersion"] = "v1beta3"
        assert _paths(_violations(sample_install_config)) == ["apiVersion"]

    @pytest.mark.parametrize("name", ["", "Demo", "-demo", "demo_cluster", "a" * 64])
    def test_invalid_cluster_name(self, sample_install_config: dict[str, Any], name: str) -> None:
        sample_install_config["metadata"] = {"name": name}
        assert _paths(_violations(sample_install_config)) == ["metadata.name"]

    @pytest.mark.parametrize("domain", ["", "Example.com", "example..com", "example.com."])
    def test_invalid_base_domain(self, sample_install_config: dict[str, Any], domain: str) -> None:
        sample_install_config["baseDomain"] = domain
        assert _paths(_violations(sample_install_config)) == ["baseDomain"]

    def test_invalid_ssh_key(self, sample_install_config: dict[str, Any]) -> None:
        sample_install_config["sshKey"] = "not a key"
        assert _violations(sample_install_config) == [
            FieldViolation("sshKey", "must be a valid SSH public key")
        ]

    @pytest.mark.parametrize(
        ("secret", "message"),
        [
            ("", "is required"),
            ("{not json", "must be valid JSON"),
            ('{"registry": {}}', "must contain an 'auths' object"),
            ("[]", "must contain an 'auths' object"),
        ],
    )
    def test_invalid_pull_secret(
        self, sample_install_config: dict[str, Any], secret: str, message: str
    ) -> None:
        sample_install_config["pullSecret"] = secret
        assert _violations(sample_install_config) == [FieldViolation("pullSecret", message)]


class TestNetworkingRules:
    """Tests for networking rules."""

    def test_invalid_machine_cidr(self, sample_install_config: dict[str, Any]) -> None:
        sample_install_config["networking"] = {"machineCIDR": "10.0.0.0/33"}
        assert _paths(_violations(sample_install_config)) == ["networking.machineCIDR"]

    def test_only_one_service_network(self, sample_install_config: dict[str, Any]) -> None:
        sample_install_config["networking"] = {
            "serviceNetwork": ["172.30.0.0/16", "172.31.0.0/16"],
        }
        assert _violations(sample_install_config) == [
            FieldViolation("networking.serviceNetwork", "only one service network is supported")
        ]

    def test_host_prefix_out_of_range(self, sample_install_config: dict[str, Any]) -> None:
        sample_install_config["networking"] = {
            "clusterNetwork": [{"cidr": "10.128.0.0/14", "hostPrefix": 12}],
        }
        assert _paths(_violations(sample_install_config)) == ["networking.clusterNetwork[0].hostPrefix"]

    def test_overlapping_networks(self, sample_install_config: dict[str, Any]) -> None:
        """The default machine network overlaps a cluster network at 10.0.0.0/16."""
        sample_install_config["networking"] = {
            "clusterNetwork": [{"cidr": "10.0.0.0/16", "hostPrefix": 24}],
        }
        violations = _violations(sample_install_config)

        assert _paths(violations) == ["networking.clusterNetwork[0].cidr"]
        assert "overlaps with networking.machineCIDR" in violations[0].message

    def test_deprecated_fields_rejected(self, sample_install_config: dict[str, Any]) -> None:
        """Deprecated fields must have been upconverted before validation."""
        sample_install_config["networking"] = {"type": "OpenShiftSDN"}
        assert _violations(sample_install_config) == [
            FieldViolation("networking.type", "deprecated field must be upconverted")
        ]


class TestMachinePoolRules:
    """Tests for control plane and compute pools."""

    def test_control_plane_name(self, sample_install_config: dict[str, Any]) -> None:
        sample_install_config["controlPlane"] = {"name": "controller", "replicas": 3}
        assert _paths(_violations(sample_install_config)) == ["controlPlane.name"]

    def test_control_plane_needs_replicas(self, sample_install_config: dict[str, Any]) -> None:
        sample_install_config["controlPlane"] = {"name": "master", "replicas": 0}
        assert _paths(_violations(sample_install_config)) == ["controlPlane.replicas"]

    def test_compute_rules(self, sample_install_config: dict[str, Any]) -> None:
        sample_install_config["compute"] = [
            {"name": "worker", "replicas": 2},
            {"name": "worker", "replicas": -1},
        ]
        assert _paths(_violations(sample_install_config)) == [
            "compute[1].name",
            "compute[1].replicas",
        ]


class TestPlatformRules:
    """Tests for platform selection."""

    def test_no_platform(self, sample_install_config: dict[str, Any]) -> None:
        sample_install_config["platform"] = {}
        violations = _violations(sample_install_config)
        assert _paths(violations) == ["platform"]
        assert violations[0].message.startswith("must specify one of:")

    def test_two_platforms(self, sample_install_config: dict[str, Any]) -> None:
        sample_install_config["platform"] = {"none": {}, "aws": {"region": "us-east-1"}}
        assert _paths(_violations(sample_install_config)) == ["platform"]

    def test_openstack_requires_fields(self, sample_install_config: dict[str, Any]) -> None:
        sample_install_config["platform"] = {"openstack": {"region": "RegionOne"}}
        assert _paths(_violations(sample_install_config)) == [
            "platform.openstack.cloud",
            "platform.openstack.externalNetwork",
        ]


class TestAggregation:
    """Tests for multi-violation reporting."""

    def test_every_violation_is_reported(self, sample_install_config: dict[str, Any]) -> None:
        sample_install_config["baseDomain"] = ""
        sample_install_config["pullSecret"] = ""
        sample_install_config["metadata"] = {"name": "Bad_Name"}

        assert _paths(_violations(sample_install_config)) == [
            "metadata.name",
            "baseDomain",
            "pullSecret",
        ]
