"""Folder listing for the reference and foreign collections."""

import logging
from pathlib import Path
from typing import Protocol

from .errors import DirectoryReadError

logger = logging.getLogger(__name__)


class DirectoryLister(Protocol):
    """Protocol for anything that can list the filenames inside a folder."""

    def __call__(self, path: str) -> list[str]:
        """Return filenames in ``path`` or raise DirectoryReadError."""
        ...


class DirectorySelector(Protocol):
    """Protocol for interactive folder pickers."""

    def __call__(self) -> str | None:
        """Return the chosen folder, or None if the user cancelled."""
        ...


class ProgressCallback(Protocol):
    """Protocol for progress callback functions."""

    def __call__(self, current: int, total: int | None = None, message: str = "") -> None:
        """Called to report progress during listing."""
        ...


class MediaFolderLister:
    """Lists the files directly inside a folder."""

    def __init__(self, progress_callback: ProgressCallback | None = None):
        """
        Initialize the lister.

        Args:
            progress_callback: Progress callback used when the lister is called directly
        """
        self.progress_callback = progress_callback

    def __call__(self, path: str) -> list[str]:
        return self.list_directory(path, self.progress_callback)

    def list_directory(
        self, path: str | Path, progress_callback: ProgressCallback | None = None
    ) -> list[str]:
        """
        List the regular files directly inside a folder.

        Args:
            path: Folder to list
            progress_callback: Optional callback for progress updates

        Returns:
            Filenames sorted by name

        Raises:
            DirectoryReadError: If the folder is missing, not a folder, or unreadable
        """
        directory = Path(path)

        if not directory.exists():
            logger.error(f"Directory does not exist: {directory}")
            raise DirectoryReadError(str(path), "directory does not exist")

        if not directory.is_dir():
            logger.error(f"Path is not a directory: {directory}")
            raise DirectoryReadError(str(path), "path is not a directory")

        names = []
        try:
            for entry in directory.iterdir():
                if entry.is_file():
                    names.append(entry.name)
                    if progress_callback:
                        progress_callback(len(names), None, f"Discovered {len(names)} files...")
        except OSError as e:
            logger.error(f"Error listing directory {directory}: {e}")
            raise DirectoryReadError(str(path), str(e)) from e

        names.sort()
        logger.info(f"Listed {len(names)} files in {directory}")
        return names

