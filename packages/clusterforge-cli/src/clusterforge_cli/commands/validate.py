"""clusterforge validate command - Validate install-config.yaml."""

from __future__ import annotations

from pathlib import Path

import click

from clusterforge_cli.errors import EXIT_SYSTEM_ERROR, CLIError, handle_forge_error
from clusterforge_cli.output import error, success


@click.command()
@click.option(
    "-d",
    "--dir",
    "directory",
    type=click.Path(file_okay=False),
    default=".",
    help="Asset directory containing install-config.yaml [default: .]",
)
def validate(directory: str) -> None:
    """Validate install-config.yaml.

    Loads the file exactly as `create` would: it is upgraded to the current
    schema version, defaulted and checked against every validation rule.
    All violations are reported, not only the first one.

    Examples:

        clusterforge validate

        clusterforge validate --dir ./cluster
    """
    # Import here to avoid heavy imports at CLI startup
    from clusterforge_core.asset import DirectoryFileFetcher
    from clusterforge_core.errors import ForgeError
    from clusterforge_core.installconfig import INSTALL_CONFIG_FILENAME, InstallConfig

    path = Path(directory) / INSTALL_CONFIG_FILENAME
    asset = InstallConfig()
    try:
        found = asset.load(DirectoryFileFetcher(directory))
    except (ForgeError, OSError) as e:
        handle_forge_error(e)

    if not found:
        error(f"File not found: {path}")
        error("\nRun 'clusterforge create install-config' to create one, or use --dir.")
        raise SystemExit(EXIT_SYSTEM_ERROR)

    if asset.config is None:
        raise CLIError(f"no install config was loaded from {path}", exit_code=EXIT_SYSTEM_ERROR)
    success(f"Install config valid (apiVersion {asset.config.api_version})")
