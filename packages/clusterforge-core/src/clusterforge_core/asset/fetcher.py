"""File-fetch capability over the persisted asset directory.

Assets never touch the filesystem directly when loading; they ask a
FileFetcher. A missing file is reported as ``FileNotFoundError`` so that
callers can tell "not persisted yet" apart from every other I/O failure,
which propagates unchanged.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from clusterforge_core.asset.base import File

logger = logging.getLogger(__name__)


class FileFetcher(ABC):
    """Read access to previously persisted asset files."""

    @abstractmethod
    def fetch_by_name(self, name: str) -> File:
        """Return the file stored under a relative name.

        Raises:
            FileNotFoundError: If no such file has been persisted.
            OSError: For any other failure reading the file.
        """

    @abstractmethod
    def fetch_by_pattern(self, pattern: str) -> list[File]:
        """Return every file matching a glob pattern, sorted by name."""


class DirectoryFileFetcher(FileFetcher):
    """FileFetcher rooted at an asset directory on disk.

    Attributes:
        directory: Root of the persisted asset state.

    Example:
        >>> fetcher = DirectoryFileFetcher(Path("cluster"))
        >>> fetcher.fetch_by_name("install-config.yaml").filename
        'install-config.yaml'
    """

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)

    def fetch_by_name(self, name: str) -> File:
        path = self.directory / name
        if path.is_dir():
            raise IsADirectoryError(f"Expected a file but found a directory: {path}")
        # read_bytes raises FileNotFoundError for absent files
        data = path.read_bytes()
        logger.debug("Fetched %s (%d bytes)", path, len(data))
        return File(filename=name, data=data)

    def fetch_by_pattern(self, pattern: str) -> list[File]:
        matches = sorted(p for p in self.directory.glob(pattern) if p.is_file())
        return [
            File(filename=p.relative_to(self.directory).as_posix(), data=p.read_bytes())
            for p in matches
        ]
