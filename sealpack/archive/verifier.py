"""
Post-write verifier for SealPack archives.

After the writer returns, the finished archive is re-opened through the
storage backend and hashed again from scratch. The resulting "disk digest"
must equal the writer's "memory digest" byte for byte. A mismatch means
what reached storage is not what was written, and is fatal.

Invariants:
    - The disk digest uses a new hash object, never the writer's
    - The archive is read from offset 0 to EOF on a fresh handle
    - A failed check leaves the archive on disk untouched
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import DEFAULT_BLOCK_SIZE
from ..errors import ArchiveIOError, IntegrityError
from ..storage import ArchiveStorage
from .digest import digests_match, iter_chunks, new_digest

logger = logging.getLogger(__name__)


class PostWriteVerifier:
    """Recomputes an archive's digest from storage and compares it.

    Attributes:
        storage: Storage backend used to re-open the archive
        block_size: Read granularity
        digest_algorithm: hashlib algorithm name, same as the writer's
    """

    def __init__(
        self,
        storage: ArchiveStorage,
        block_size: int = DEFAULT_BLOCK_SIZE,
        digest_algorithm: str = "sha256",
    ) -> None:
        self.storage = storage
        self.block_size = block_size
        self.digest_algorithm = digest_algorithm

    def digest_file(self, path: Path) -> bytes:
        """Hash the full contents of path.

        Raises:
            ArchiveIOError: If the file cannot be opened or read
        """
        digest = new_digest(self.digest_algorithm)
        with self.storage.open_for_read(path) as fh:
            try:
                for chunk in iter_chunks(fh, self.block_size):
                    digest.update(chunk)
            except OSError as e:
                raise ArchiveIOError(
                    f"Read failed for {path}: {e}", path=str(path), operation="read"
                ) from e
        return digest.digest()

    def verify(self, path: Path, memory_digest: bytes) -> bytes:
        """Check the archive on disk against the memory digest.

        Args:
            path: Archive path
            memory_digest: Digest returned by the writer

        Returns:
            The disk digest (equal to memory_digest)

        Raises:
            IntegrityError: If the digests differ
            ArchiveIOError: If the archive cannot be re-read
        """
        disk_digest = self.digest_file(path)

        if not digests_match(memory_digest, disk_digest):
            logger.error(
                "Integrity check failed",
                extra={
                    "path": str(path),
                    "memory_digest": memory_digest.hex(),
                    "disk_digest": disk_digest.hex(),
                },
            )
            raise IntegrityError(str(path), memory_digest.hex(), disk_digest.hex())

        logger.debug("Integrity check passed", extra={"path": str(path)})
        return disk_digest
