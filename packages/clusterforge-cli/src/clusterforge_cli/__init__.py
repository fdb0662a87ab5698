"""clusterforge-cli: Command-line interface for clusterforge.

This package provides the `clusterforge` command for creating install
configs and cluster manifests from an asset directory.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
