"""Target asset lists and the persist path.

A target is an asset the user asks for by name on the command line. Its
dependencies are resolved as needed; only the targets' own files are written
back to the asset directory.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from clusterforge_core.asset.base import Asset, WritableAsset
from clusterforge_core.installconfig.asset import InstallConfig
from clusterforge_core.manifests.manifests import Manifests

logger = structlog.get_logger(__name__)

INSTALL_CONFIG_TARGETS: list[type[WritableAsset]] = [InstallConfig]
MANIFEST_TARGETS: list[type[WritableAsset]] = [Manifests]

TARGETS: dict[str, list[type[WritableAsset]]] = {
    "install-config": INSTALL_CONFIG_TARGETS,
    "manifests": MANIFEST_TARGETS,
}


def target_assets(target: str) -> list[Asset]:
    """Return fresh instances of the assets behind a named target.

    Raises:
        KeyError: If the target name is unknown.
    """
    return [asset_cls() for asset_cls in TARGETS[target]]


def write_files(asset: WritableAsset, directory: Path | str) -> list[Path]:
    """Write an asset's files under the asset directory.

    Parent directories are created as needed and existing files are
    overwritten.

    Args:
        asset: A materialized writable asset.
        directory: Root of the asset directory.

    Returns:
        Paths of the written files, in ``files()`` order.

    Raises:
        OSError: If a directory or file cannot be written.
    """
    root = Path(directory)
    written: list[Path] = []
    for file in asset.files():
        path = root / file.filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(file.data)
        written.append(path)
        logger.debug("asset_file_written", asset=asset.name(), path=str(path), size=len(file.data))
    return written
