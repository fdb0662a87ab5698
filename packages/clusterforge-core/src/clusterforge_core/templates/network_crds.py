"""NetworkCRDs asset: CustomResourceDefinitions for the network config objects.

The installer creates the Network configuration instance itself, so the CRDs
for it must exist before the cluster version operator runs. The documents
ship with clusterforge; users can override them by placing their own copies
under ``templates/`` in the asset directory.
"""

from __future__ import annotations

import logging
from importlib import resources
from typing import TYPE_CHECKING

from clusterforge_core.asset.base import Asset, File, Parents, WritableAsset

if TYPE_CHECKING:
    from clusterforge_core.asset.fetcher import FileFetcher

logger = logging.getLogger(__name__)

# Directory inside the asset directory holding user-overridable templates
TEMPLATE_DIR = "templates"

NETWORK_CRD_FILENAMES = (
    "cluster-network-crd.yaml",
    "cluster-networkconfig-crd.yaml",
)


def get_template(filename: str) -> bytes:
    """Return the packaged content of a template file.

    Raises:
        FileNotFoundError: If no such template ships with clusterforge.
    """
    return resources.files("clusterforge_core.templates").joinpath("data", filename).read_bytes()


class NetworkCRDs(WritableAsset):
    """Template bundle with the network CustomResourceDefinitions.

    Attributes:
        file_list: Template files, in NETWORK_CRD_FILENAMES order.
        ignored_overrides: User templates found during load that were not
            used because the override was incomplete.
    """

    def __init__(self) -> None:
        self.file_list: list[File] = []
        self.ignored_overrides: list[str] = []

    def name(self) -> str:
        return "Network CRDs"

    def dependencies(self) -> list[Asset]:
        return []

    def generate(self, parents: Parents) -> None:
        self.file_list = [
            File(filename=f"{TEMPLATE_DIR}/{filename}", data=get_template(filename))
            for filename in NETWORK_CRD_FILENAMES
        ]

    def files(self) -> list[File]:
        return list(self.file_list)

    def load(self, fetcher: FileFetcher) -> bool:
        """Load user-provided templates. All of them must be present.

        A partial override is treated as absent; the files that were found
        are recorded in ``ignored_overrides``.
        """
        file_list: list[File] = []
        missing: list[str] = []
        for filename in NETWORK_CRD_FILENAMES:
            path = f"{TEMPLATE_DIR}/{filename}"
            try:
                file_list.append(fetcher.fetch_by_name(path))
            except FileNotFoundError:
                missing.append(path)
        if missing:
            if file_list:
                self.ignored_overrides = [f.filename for f in file_list]
                logger.warning(
                    "Ignoring partial network CRD override, missing: %s", ", ".join(missing)
                )
            return False
        logger.info("Using network CRD templates from %s/", TEMPLATE_DIR)
        self.file_list = file_list
        return True
