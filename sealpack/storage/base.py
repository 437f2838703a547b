"""
Base class for archive storage backends.

The archiver never touches the filesystem directly. Every open, size
lookup and durability sync goes through an ArchiveStorage so that the
write and verify passes can be pointed at alternative backends, for
example a fault-injecting one in tests.

Invariants:
    - open_for_write() creates or truncates the target
    - open_for_read() always returns a fresh handle positioned at offset 0
    - persist() returns only after the bytes are on stable storage
    - OSError never escapes a backend, it is raised as ArchiveIOError

How to change safely:
    - New backends must implement every abstract method
    - Keep persist() synchronous, the verifier relies on it having completed
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO


class ArchiveStorage(ABC):
    """Abstract storage used by the writer and the verifier."""

    @abstractmethod
    def open_for_write(self, path: Path) -> BinaryIO:
        """Open path for binary writing, creating or truncating it.

        Raises:
            ArchiveIOError: If the file cannot be opened
        """
        ...

    @abstractmethod
    def open_for_read(self, path: Path) -> BinaryIO:
        """Open path for binary reading.

        Raises:
            ArchiveIOError: If the file cannot be opened
        """
        ...

    @abstractmethod
    def size_of(self, path: Path) -> int:
        """Current size of path in bytes.

        Raises:
            ArchiveIOError: If the file cannot be inspected
        """
        ...

    @abstractmethod
    def persist(self, handle: BinaryIO, path: Path, sync: bool = True) -> None:
        """Flush buffered data and, if sync is set, force it to stable storage.

        Args:
            handle: Handle returned by open_for_write()
            path: Path the handle was opened for (used in errors)
            sync: Whether to issue an fsync after the flush

        Raises:
            ArchiveIOError: If the flush or sync fails
        """
        ...
