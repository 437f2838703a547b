"""
Local filesystem storage backend.

This is the default backend: plain buffered files, with os.fsync() after
the flush for durability.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import BinaryIO

from ..errors import ArchiveIOError
from .base import ArchiveStorage

logger = logging.getLogger(__name__)


class LocalStorage(ArchiveStorage):
    """ArchiveStorage backed by the local filesystem.

    Example:
        >>> storage = LocalStorage()
        >>> with storage.open_for_write(Path("out.bin")) as fh:
        ...     fh.write(b"data")
        ...     storage.persist(fh, Path("out.bin"))
    """

    def open_for_write(self, path: Path) -> BinaryIO:
        try:
            return open(path, "wb")
        except OSError as e:
            raise ArchiveIOError(
                f"Cannot open {path} for writing: {e}", path=str(path), operation="open"
            ) from e

    def open_for_read(self, path: Path) -> BinaryIO:
        try:
            return open(path, "rb")
        except OSError as e:
            raise ArchiveIOError(
                f"Cannot open {path} for reading: {e}", path=str(path), operation="open"
            ) from e

    def size_of(self, path: Path) -> int:
        try:
            return os.stat(path).st_size
        except OSError as e:
            raise ArchiveIOError(
                f"Cannot stat {path}: {e}", path=str(path), operation="stat"
            ) from e

    def persist(self, handle: BinaryIO, path: Path, sync: bool = True) -> None:
        try:
            handle.flush()
        except OSError as e:
            raise ArchiveIOError(
                f"Flush failed for {path}: {e}", path=str(path), operation="flush"
            ) from e

        if not sync:
            logger.debug("Skipping fsync", extra={"path": str(path)})
            return

        try:
            os.fsync(handle.fileno())
        except OSError as e:
            raise ArchiveIOError(
                f"Sync failed for {path}: {e}", path=str(path), operation="sync"
            ) from e
