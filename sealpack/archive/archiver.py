"""
Archiver: write-then-verify orchestration.

The Archiver owns an ArchiveRequest and runs the full pipeline on write():

    IDLE -> HEADER_BUILT -> WRITING -> FLUSHED -> VERIFYING -> VERIFIED
                                                          \\-> INTEGRITY_FAILED

An I/O or header encoding failure at any step moves the archiver to FAILED.
An empty request stays in IDLE: no file is created and no error is raised.

Invariants:
    - Header sizes are taken when write() starts, before any byte is written
    - The memory digest and disk digest come from independent passes
    - Every error aborts write(), nothing is retried or cleaned up
    - Calling write() again re-runs the whole pipeline and overwrites

How to change safely:
    - Do not merge the verify pass into the write pass
    - Keep state transitions strictly sequential
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..config import ArchiverSettings
from ..errors import IntegrityError, SealPackError
from ..storage import ArchiveStorage, LocalStorage
from .header import ArchiveHeader
from .request import ArchiveRequest
from .verifier import PostWriteVerifier
from .writer import StreamingWriter

logger = logging.getLogger(__name__)


class ArchiveState(Enum):
    """Pipeline state of the last write() call."""

    IDLE = "idle"
    HEADER_BUILT = "header_built"
    WRITING = "writing"
    FLUSHED = "flushed"
    VERIFYING = "verifying"
    VERIFIED = "verified"
    INTEGRITY_FAILED = "integrity_failed"
    FAILED = "failed"


@dataclass(frozen=True)
class WriteResult:
    """Summary of a verified archive.

    Attributes:
        destination: Archive path
        file_count: Number of sources archived
        header_length: Header size in bytes
        archive_length: Total archive size in bytes
        digest_algorithm: Algorithm used for both passes
        digest: Hex digest of the archive
        duration_ms: Wall time of the write and verify passes
    """

    destination: Path
    file_count: int
    header_length: int
    archive_length: int
    digest_algorithm: str
    digest: str
    duration_ms: int


class Archiver:
    """Concatenates sources into a verified archive.

    Attributes:
        settings: Block size, digest algorithm and sync behavior
        storage: Storage backend shared by writer and verifier

    Example:
        >>> archiver = Archiver("out.bin")
        >>> archiver.add("a.bin")
        >>> archiver.add("b.bin")
        >>> result = archiver.write()
        >>> print(result.digest)
    """

    def __init__(
        self,
        destination: str | os.PathLike[str] | None,
        settings: ArchiverSettings | None = None,
        storage: ArchiveStorage | None = None,
    ) -> None:
        """Initialize the archiver.

        Args:
            destination: Archive path; its parent must exist and be writable
            settings: Optional settings (loaded from env if not provided)
            storage: Optional storage backend (local filesystem by default)

        Raises:
            ConfigurationError: If the destination is invalid
        """
        self.settings = settings or ArchiverSettings()
        self.storage = storage or LocalStorage()
        self._request = ArchiveRequest.create(destination)
        self._state = ArchiveState.IDLE

        self._writer = StreamingWriter(
            self.storage,
            block_size=self.settings.block_size,
            digest_algorithm=self.settings.digest_algorithm,
            sync=self.settings.fsync,
        )
        self._verifier = PostWriteVerifier(
            self.storage,
            block_size=self.settings.block_size,
            digest_algorithm=self.settings.digest_algorithm,
        )

    @property
    def destination(self) -> Path:
        return self._request.destination

    @property
    def sources(self) -> tuple[Path, ...]:
        return tuple(self._request.sources)

    @property
    def state(self) -> ArchiveState:
        return self._state

    def add(self, path: str | os.PathLike[str] | None) -> None:
        """Register a source file.

        Raises:
            ConfigurationError: If path is missing, not a regular file or unreadable
        """
        self._request.add(path)

    def write(self) -> WriteResult | None:
        """Write the archive and verify it against storage.

        Returns:
            WriteResult for a verified archive, None if there were no sources

        Raises:
            ArchiveIOError: On any I/O failure (including SourceChangedError)
            HeaderEncodingError: If a source size cannot be encoded as uint64
            IntegrityError: If the disk digest differs from the memory digest
        """
        self._state = ArchiveState.IDLE
        if self._request.is_empty:
            logger.debug("No sources registered, nothing to write")
            return None

        start_time = time.time()
        destination = self._request.destination
        sources = list(self._request.sources)

        try:
            header = ArchiveHeader(
                sizes=tuple(self.storage.size_of(source) for source in sources)
            )
            self._transition(ArchiveState.HEADER_BUILT)

            self._transition(ArchiveState.WRITING)
            memory_digest = self._writer.write(destination, header, sources)
            self._transition(ArchiveState.FLUSHED)

            self._transition(ArchiveState.VERIFYING)
            self._verifier.verify(destination, memory_digest)
        except IntegrityError:
            self._transition(ArchiveState.INTEGRITY_FAILED)
            raise
        except SealPackError as e:
            self._transition(ArchiveState.FAILED)
            logger.error(
                f"Archive write failed: {e}",
                extra={
                    "code": e.code,
                    "path": e.details.get("path"),
                    "operation": e.details.get("operation"),
                },
            )
            raise

        self._transition(ArchiveState.VERIFIED)

        result = WriteResult(
            destination=destination,
            file_count=header.file_count,
            header_length=header.length,
            archive_length=header.archive_length,
            digest_algorithm=self.settings.digest_algorithm,
            digest=memory_digest.hex(),
            duration_ms=int((time.time() - start_time) * 1000),
        )

        logger.info(
            "Archive written and verified",
            extra={
                "destination": str(destination),
                "file_count": result.file_count,
                "archive_length": result.archive_length,
                "digest": f"{result.digest_algorithm}:{result.digest}",
            },
        )
        return result

    def _transition(self, state: ArchiveState) -> None:
        logger.debug(
            "Archiver state change",
            extra={"from_state": self._state.value, "to_state": state.value},
        )
        self._state = state
