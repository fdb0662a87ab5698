"""clusterforge create command - Resolve targets and write their files."""

from __future__ import annotations

from pathlib import Path

import click

from clusterforge_cli.errors import handle_forge_error, handle_permission_error
from clusterforge_cli.output import info, print_file_list, success, warning

DIR_OPTION_HELP = "Asset directory [default: .]"


@click.group()
def create() -> None:
    """Create installation assets.

    Every requested asset is resolved before anything is written, so a
    failure never leaves a partially updated asset directory.

    **Commands:**

    - `clusterforge create install-config` - Write install-config.yaml
    - `clusterforge create manifests` - Write the cluster manifests
    """
    pass


def _create_target(target: str, directory: str) -> list[Path]:
    """Resolve a named target in the asset directory, then persist it."""
    # Import here to avoid heavy imports at CLI startup
    from clusterforge_core.asset import AssetStore, WritableAsset
    from clusterforge_core.asset.targets import target_assets, write_files
    from clusterforge_core.errors import ForgeError
    from clusterforge_core.templates import NetworkCRDs

    root = Path(directory)
    store = AssetStore(root)
    try:
        assets = store.fetch_all(target_assets(target))
    except ForgeError as e:
        handle_forge_error(e)

    crds = store.resolved.get(NetworkCRDs)
    if isinstance(crds, NetworkCRDs) and crds.ignored_overrides:
        warning(
            "Incomplete network CRD override ignored, using packaged templates: "
            + ", ".join(crds.ignored_overrides)
        )

    written: list[Path] = []
    for asset in assets:
        if not isinstance(asset, WritableAsset):
            continue
        try:
            written.extend(write_files(asset, root))
        except PermissionError:
            handle_permission_error(str(root), "write to")
    return written


def _report(target: str, directory: str, written: list[Path]) -> None:
    success(f"Created {target} in {directory}")
    root = Path(directory)
    print_file_list([p.relative_to(root).as_posix() for p in written])


@create.command("install-config")
@click.option(
    "-d",
    "--dir",
    "directory",
    type=click.Path(file_okay=False),
    default=".",
    help=DIR_OPTION_HELP,
)
def create_install_config(directory: str) -> None:
    """Write install-config.yaml.

    Loads an existing install-config.yaml (upgrading it to the current
    schema) or generates one from the `CLUSTERFORGE_*` environment variables.

    Examples:

        clusterforge create install-config

        clusterforge create install-config --dir ./cluster
    """
    info("Resolving install config...")
    written = _create_target("install-config", directory)
    _report("install config", directory, written)


@create.command("manifests")
@click.option(
    "-d",
    "--dir",
    "directory",
    type=click.Path(file_okay=False),
    default=".",
    help=DIR_OPTION_HELP,
)
def create_manifests(directory: str) -> None:
    """Write the cluster manifests.

    Compiles the network configuration, the cluster API object and the
    cluster-config ConfigMap from the install config.

    Examples:

        clusterforge create manifests

        clusterforge create manifests --dir ./cluster
    """
    info("Resolving manifests...")
    written = _create_target("manifests", directory)
    _report("manifests", directory, written)
