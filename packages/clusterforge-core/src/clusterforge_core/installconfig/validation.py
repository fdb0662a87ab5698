"""Validation rules for install config records.

``validate_install_config`` checks every rule and returns every violation
instead of stopping at the first one; callers raise
InstallConfigValidationError with the whole list.

Rules run on defaulted records. Shape and type errors are caught earlier,
when the YAML document is deserialized.
"""

from __future__ import annotations

import ipaddress
import json
import re
from collections.abc import Iterable
from itertools import combinations

from clusterforge_core.errors import FieldViolation
from clusterforge_core.installconfig.defaults import COMPUTE_POOL_NAME, CONTROL_PLANE_POOL_NAME
from clusterforge_core.schemas.install_config import (
    INSTALL_CONFIG_VERSION,
    InstallConfig,
    MachinePool,
    Networking,
)
from clusterforge_core.schemas.platform import Platform, PlatformType

IPNetwork = ipaddress.IPv4Network | ipaddress.IPv6Network

DNS1123_LABEL_PATTERN = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$")
DNS1123_LABEL_MAX_LENGTH = 63
DNS1123_SUBDOMAIN_MAX_LENGTH = 253

SSH_KEY_PATTERN = re.compile(
    r"^(ssh-(rsa|dss|ed25519)|ecdsa-sha2-nistp(256|384|521)|sk-ssh-ed25519@openssh\.com)"
    r" [A-Za-z0-9+/]+={0,3}( \S.*)?$"
)


def validate_install_config(config: InstallConfig) -> list[FieldViolation]:
    """Check an install config against every validation rule.

    Args:
        config: Defaulted install config.

    Returns:
        All violations, in rule order. Empty when the config is valid.

    Example:
        >>> violations = validate_install_config(config)
        >>> [str(v) for v in violations]
        ['baseDomain: must be a valid DNS subdomain']
    """
    violations: list[FieldViolation] = []

    if config.api_version != INSTALL_CONFIG_VERSION:
        violations.append(
            FieldViolation(
                "apiVersion",
                f"install config version must be {INSTALL_CONFIG_VERSION!r}, "
                f"got {config.api_version!r}",
            )
        )

    violations.extend(_validate_dns_label("metadata.name", config.metadata.name))
    violations.extend(_validate_dns_subdomain("baseDomain", config.base_domain))

    if config.ssh_key and not SSH_KEY_PATTERN.match(config.ssh_key.strip()):
        violations.append(FieldViolation("sshKey", "must be a valid SSH public key"))

    violations.extend(_validate_pull_secret(config.pull_secret))

    if config.networking is None:
        violations.append(FieldViolation("networking", "networking is required"))
    else:
        violations.extend(_validate_networking(config.networking))

    violations.extend(_validate_control_plane(config.control_plane))
    violations.extend(_validate_compute(config.compute or []))
    violations.extend(_validate_platform(config.platform))

    return violations


def _validate_dns_label(path: str, value: str) -> list[FieldViolation]:
    if not value:
        return [FieldViolation(path, "is required")]
    if len(value) > DNS1123_LABEL_MAX_LENGTH or not DNS1123_LABEL_PATTERN.match(value):
        return [
            FieldViolation(
                path,
                "must be a lowercase RFC 1123 label of at most "
                f"{DNS1123_LABEL_MAX_LENGTH} characters",
            )
        ]
    return []


def _validate_dns_subdomain(path: str, value: str) -> list[FieldViolation]:
    if not value:
        return [FieldViolation(path, "is required")]
    labels = value.split(".")
    if len(value) > DNS1123_SUBDOMAIN_MAX_LENGTH or not all(
        DNS1123_LABEL_PATTERN.match(label) and len(label) <= DNS1123_LABEL_MAX_LENGTH
        for label in labels
    ):
        return [FieldViolation(path, "must be a valid DNS subdomain")]
    return []


def _validate_pull_secret(pull_secret: str) -> list[FieldViolation]:
    if not pull_secret:
        return [FieldViolation("pullSecret", "is required")]
    try:
        parsed = json.loads(pull_secret)
    except json.JSONDecodeError:
        return [FieldViolation("pullSecret", "must be valid JSON")]
    if not isinstance(parsed, dict) or not isinstance(parsed.get("auths"), dict):
        return [FieldViolation("pullSecret", "must contain an 'auths' object")]
    return []


def _parse_cidr(path: str, value: str | None, violations: list[FieldViolation]) -> IPNetwork | None:
    if not value:
        violations.append(FieldViolation(path, "is required"))
        return None
    try:
        return ipaddress.ip_network(value)
    except ValueError as e:
        violations.append(FieldViolation(path, f"invalid CIDR {value!r}: {e}"))
        return None


def _validate_networking(networking: Networking) -> list[FieldViolation]:
    violations: list[FieldViolation] = []
    named: list[tuple[str, IPNetwork]] = []

    if not networking.network_type:
        violations.append(FieldViolation("networking.networkType", "network type is required"))

    machine = _parse_cidr("networking.machineCIDR", networking.machine_cidr, violations)
    if machine is not None:
        named.append(("networking.machineCIDR", machine))

    if not networking.service_network:
        violations.append(FieldViolation("networking.serviceNetwork", "a service network is required"))
    elif len(networking.service_network) > 1:
        violations.append(
            FieldViolation("networking.serviceNetwork", "only one service network is supported")
        )
    for i, cidr in enumerate(networking.service_network):
        path = f"networking.serviceNetwork[{i}]"
        service = _parse_cidr(path, cidr, violations)
        if service is not None:
            named.append((path, service))

    for i, entry in enumerate(networking.cluster_network):
        path = f"networking.clusterNetwork[{i}]"
        cluster = _parse_cidr(f"{path}.cidr", entry.cidr, violations)
        if cluster is None:
            continue
        named.append((f"{path}.cidr", cluster))
        if not cluster.prefixlen <= entry.host_prefix <= cluster.max_prefixlen:
            violations.append(
                FieldViolation(
                    f"{path}.hostPrefix",
                    f"must be between {cluster.prefixlen} and {cluster.max_prefixlen} "
                    f"for {entry.cidr}, got {entry.host_prefix}",
                )
            )

    violations.extend(_overlaps(named))

    for path, value in (
        ("networking.type", networking.deprecated_type),
        ("networking.serviceCIDR", networking.deprecated_service_cidr),
        ("networking.clusterNetworks", networking.deprecated_cluster_networks),
    ):
        if value is not None:
            violations.append(FieldViolation(path, "deprecated field must be upconverted"))

    return violations


def _overlaps(named: Iterable[tuple[str, IPNetwork]]) -> list[FieldViolation]:
    violations: list[FieldViolation] = []
    for (path_a, net_a), (path_b, net_b) in combinations(named, 2):
        if net_a.version == net_b.version and net_a.overlaps(net_b):
            violations.append(FieldViolation(path_b, f"{net_b} overlaps with {path_a} ({net_a})"))
    return violations


def _validate_control_plane(pool: MachinePool | None) -> list[FieldViolation]:
    if pool is None:
        return [FieldViolation("controlPlane", "control plane pool is required")]
    violations: list[FieldViolation] = []
    if pool.name != CONTROL_PLANE_POOL_NAME:
        violations.append(
            FieldViolation("controlPlane.name", f"must be {CONTROL_PLANE_POOL_NAME!r}")
        )
    if pool.replicas is None or pool.replicas < 1:
        violations.append(FieldViolation("controlPlane.replicas", "must be at least 1"))
    return violations


def _validate_compute(pools: list[MachinePool]) -> list[FieldViolation]:
    violations: list[FieldViolation] = []
    seen: set[str] = set()
    for i, pool in enumerate(pools):
        path = f"compute[{i}]"
        if pool.name in seen:
            violations.append(FieldViolation(f"{path}.name", f"duplicate pool name {pool.name!r}"))
        seen.add(pool.name)
        if pool.name != COMPUTE_POOL_NAME:
            violations.append(FieldViolation(f"{path}.name", f"must be {COMPUTE_POOL_NAME!r}"))
        if pool.replicas is not None and pool.replicas < 0:
            violations.append(FieldViolation(f"{path}.replicas", "must not be negative"))
    return violations


def _validate_platform(platform: Platform) -> list[FieldViolation]:
    active = platform.active()
    if not active:
        choices = ", ".join(p.value for p in PlatformType)
        return [FieldViolation("platform", f"must specify one of: {choices}")]
    if len(active) > 1:
        names = ", ".join(p.value for p in active)
        return [FieldViolation("platform", f"must specify only one platform, got: {names}")]

    violations: list[FieldViolation] = []
    if platform.aws is not None and not platform.aws.region:
        violations.append(FieldViolation("platform.aws.region", "region is required"))
    if platform.libvirt is not None:
        if not platform.libvirt.uri:
            violations.append(FieldViolation("platform.libvirt.URI", "URI is required"))
        if platform.libvirt.network is None or not platform.libvirt.network.interface:
            violations.append(FieldViolation("platform.libvirt.network.if", "interface is required"))
    if platform.openstack is not None:
        for path, value in (
            ("platform.openstack.region", platform.openstack.region),
            ("platform.openstack.cloud", platform.openstack.cloud),
            ("platform.openstack.externalNetwork", platform.openstack.external_network),
        ):
            if not value:
                violations.append(FieldViolation(path, "is required"))
    return violations
