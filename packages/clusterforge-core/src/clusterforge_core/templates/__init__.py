"""Template assets.

Packaged template documents live in ``data/``; assets here expose them as
files so manifests can embed them.
"""

from __future__ import annotations

from clusterforge_core.templates.network_crds import (
    NETWORK_CRD_FILENAMES,
    TEMPLATE_DIR,
    NetworkCRDs,
    get_template,
)

__all__: list[str] = [
    "NetworkCRDs",
    "NETWORK_CRD_FILENAMES",
    "TEMPLATE_DIR",
    "get_template",
]
