"""Shared pytest fixtures for clusterforge-core tests.

This module provides common fixtures used across unit and integration tests.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from fnmatch import fnmatch
from pathlib import Path
from typing import Any

import pytest
import structlog
import yaml

from clusterforge_core.asset.base import File
from clusterforge_core.asset.fetcher import FileFetcher
from clusterforge_core.installconfig import inputs

PULL_SECRET = '{"auths": {"quay.io": {"auth": "Zm9vOmJhcg=="}}}'
SSH_KEY = "ssh-ed25519 AAAAC3NzaC1lZDI1NTE5AAAAIGm8SmMBPTbLiAUEqzVEPrjy+jf1kn2rYf8eW0Ro7Pqu dev@example"


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture.

    This fixture ensures structlog outputs to stdout so that capsys
    can capture the output in tests.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,  # Important for test isolation
    )


@pytest.fixture(autouse=True)
def clean_input_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove every CLUSTERFORGE_* input variable inherited from the shell."""
    for name in (
        inputs.SSH_KEY_ENV_VAR,
        inputs.SSH_KEY_FILE_ENV_VAR,
        inputs.BASE_DOMAIN_ENV_VAR,
        inputs.CLUSTER_NAME_ENV_VAR,
        inputs.PULL_SECRET_ENV_VAR,
        inputs.PULL_SECRET_FILE_ENV_VAR,
        inputs.PLATFORM_ENV_VAR,
        inputs.AWS_REGION_ENV_VAR,
        inputs.LIBVIRT_URI_ENV_VAR,
        inputs.OPENSTACK_REGION_ENV_VAR,
        inputs.OPENSTACK_CLOUD_ENV_VAR,
        inputs.OPENSTACK_EXTERNAL_NETWORK_ENV_VAR,
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def input_env(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set a complete set of install inputs in the environment.

    Returns:
        The variables that were set.
    """
    env = {
        inputs.SSH_KEY_ENV_VAR: SSH_KEY,
        inputs.BASE_DOMAIN_ENV_VAR: "example.com",
        inputs.CLUSTER_NAME_ENV_VAR: "demo",
        inputs.PULL_SECRET_ENV_VAR: PULL_SECRET,
        inputs.PLATFORM_ENV_VAR: "aws",
        inputs.AWS_REGION_ENV_VAR: "eu-west-1",
    }
    for name, value in env.items():
        monkeypatch.setenv(name, value)
    return env


@pytest.fixture
def sample_install_config() -> dict[str, Any]:
    """Return a minimal valid current-version install config document.

    Returns:
        Dictionary representing install-config.yaml.
    """
    return {
        "apiVersion": "v1beta4",
        "metadata": {"name": "demo"},
        "baseDomain": "example.com",
        "pullSecret": PULL_SECRET,
        "platform": {"none": {}},
    }


@pytest.fixture
def legacy_install_config() -> dict[str, Any]:
    """Return a v1beta3 document that uses every deprecated networking field."""
    return {
        "apiVersion": "v1beta3",
        "metadata": {"name": "legacy"},
        "baseDomain": "example.com",
        "pullSecret": PULL_SECRET,
        "networking": {
            "machineCIDR": "192.168.0.0/16",
            "type": "OpenShiftSDN",
            "serviceCIDR": "172.30.0.0/16",
            "clusterNetworks": [{"cidr": "10.128.0.0/14", "hostSubnetLength": 9}],
        },
        "platform": {"none": {}},
    }


@pytest.fixture
def write_install_config(tmp_path: Path) -> Callable[[dict[str, Any] | str], Path]:
    """Factory fixture writing install-config.yaml into tmp_path.

    Accepts a document (dumped as YAML) or raw text.
    """

    def _write(content: dict[str, Any] | str) -> Path:
        path = tmp_path / "install-config.yaml"
        text = content if isinstance(content, str) else yaml.safe_dump(content, sort_keys=False)
        path.write_text(text)
        return path

    return _write


class MemoryFileFetcher(FileFetcher):
    """FileFetcher over an in-memory mapping of name to content."""

    def __init__(self, files: dict[str, bytes] | None = None) -> None:
        self.files = dict(files or {})
        self.requests: list[str] = []

    def fetch_by_name(self, name: str) -> File:
        self.requests.append(name)
        if name not in self.files:
            raise FileNotFoundError(name)
        return File(filename=name, data=self.files[name])

    def fetch_by_pattern(self, pattern: str) -> list[File]:
        return [
            File(filename=name, data=data)
            for name, data in sorted(self.files.items())
            if fnmatch(name, pattern)
        ]


@pytest.fixture
def memory_fetcher() -> Callable[..., MemoryFileFetcher]:
    """Factory fixture for in-memory file fetchers."""

    def _create(files: dict[str, bytes] | None = None) -> MemoryFileFetcher:
        return MemoryFileFetcher(files)

    return _create
