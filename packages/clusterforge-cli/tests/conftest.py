"""Shared test fixtures for clusterforge-cli tests.

Provides CliRunner fixtures and asset directory helpers
for testing CLI commands.
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import structlog
import yaml
from click.testing import CliRunner

INSTALL_CONFIG_FILENAME = "install-config.yaml"
PULL_SECRET = '{"auths": {"quay.io": {"auth": "Zm9vOmJhcg=="}}}'

INPUT_ENV_VARS = (
    "CLUSTERFORGE_SSH_KEY",
    "CLUSTERFORGE_SSH_KEY_FILE",
    "CLUSTERFORGE_BASE_DOMAIN",
    "CLUSTERFORGE_CLUSTER_NAME",
    "CLUSTERFORGE_PULL_SECRET",
    "CLUSTERFORGE_PULL_SECRET_FILE",
    "CLUSTERFORGE_PLATFORM",
    "CLUSTERFORGE_AWS_REGION",
    "CLUSTERFORGE_LIBVIRT_URI",
    "CLUSTERFORGE_OPENSTACK_REGION",
    "CLUSTERFORGE_OPENSTACK_CLOUD",
    "CLUSTERFORGE_OPENSTACK_EXTERNAL_NETWORK",
    "CLUSTERFORGE_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Send structlog output to stdout; commands may reconfigure it per invocation."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,  # Important for test isolation
    )


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove CLUSTERFORGE_* variables inherited from the shell."""
    for name in INPUT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner.

    Returns:
        CliRunner instance for testing CLI commands.
    """
    return CliRunner()


@pytest.fixture
def isolated_runner(cli_runner: CliRunner) -> Generator[CliRunner, None, None]:
    """Create a Click test runner with an isolated filesystem.

    Yields:
        CliRunner instance with isolated filesystem.
    """
    with cli_runner.isolated_filesystem():
        yield cli_runner


@pytest.fixture
def input_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set every input needed to generate an install config."""
    monkeypatch.setenv("CLUSTERFORGE_BASE_DOMAIN", "example.com")
    monkeypatch.setenv("CLUSTERFORGE_CLUSTER_NAME", "demo")
    monkeypatch.setenv("CLUSTERFORGE_PULL_SECRET", PULL_SECRET)
    monkeypatch.setenv("CLUSTERFORGE_PLATFORM", "none")


@pytest.fixture
def valid_install_config() -> dict[str, Any]:
    """Return a minimal valid install config document."""
    return {
        "apiVersion": "v1beta4",
        "metadata": {"name": "demo"},
        "baseDomain": "example.com",
        "pullSecret": PULL_SECRET,
        "platform": {"none": {}},
    }


@pytest.fixture
def create_install_config(tmp_path: Path) -> Callable[[dict[str, Any] | str], Path]:
    """Factory fixture to write install-config.yaml into tmp_path.

    Returns:
        Function that writes a document (or raw text) and returns the directory.
    """

    def _create(content: dict[str, Any] | str) -> Path:
        text = content if isinstance(content, str) else yaml.safe_dump(content, sort_keys=False)
        (tmp_path / INSTALL_CONFIG_FILENAME).write_text(text)
        return tmp_path

    return _create
