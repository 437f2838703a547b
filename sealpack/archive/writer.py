"""
Streaming writer for SealPack archives.

The writer performs the single write pass:
1. Open the destination (create or truncate)
2. Write the header and fold it into the running digest
3. Stream every source in order, block by block, updating the digest
   with each block before writing it
4. Flush and fsync the destination

The digest returned is the "memory digest": it covers exactly the bytes
handed to the destination, in the order they were written.

Invariants:
    - Header bytes are written and hashed before any source byte
    - Each source is opened, fully streamed and closed before the next
    - Bytes streamed per source must equal the size in the header
    - The destination is durable before write() returns

How to change safely:
    - Never hash a block that is not written, or write one that is not hashed
    - Keep the per-source size check, it is what keeps header and payload
      consistent when a source changes under us
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, BinaryIO, Sequence

from ..config import DEFAULT_BLOCK_SIZE
from ..errors import ArchiveIOError, SourceChangedError
from ..storage import ArchiveStorage
from .digest import iter_chunks, new_digest
from .header import ArchiveHeader

logger = logging.getLogger(__name__)


class StreamingWriter:
    """Writes header plus sources to a destination while hashing them.

    Attributes:
        storage: Storage backend for all opens and syncs
        block_size: Read granularity for sources
        digest_algorithm: hashlib algorithm name
        sync: Whether to fsync the destination after the final flush

    Example:
        >>> writer = StreamingWriter(LocalStorage())
        >>> header = ArchiveHeader(sizes=(3, 1))
        >>> memory_digest = writer.write(Path("out.bin"), header, [a, b])
    """

    def __init__(
        self,
        storage: ArchiveStorage,
        block_size: int = DEFAULT_BLOCK_SIZE,
        digest_algorithm: str = "sha256",
        sync: bool = True,
    ) -> None:
        self.storage = storage
        self.block_size = block_size
        self.digest_algorithm = digest_algorithm
        self.sync = sync

    def write(
        self,
        destination: Path,
        header: ArchiveHeader,
        sources: Sequence[Path],
    ) -> bytes:
        """Write the archive in one pass and return the memory digest.

        Args:
            destination: Archive path (created or truncated)
            header: Header built from the sources' current sizes
            sources: Source paths, same order as header.sizes

        Returns:
            Digest of every byte written, header included

        Raises:
            ArchiveIOError: On any open/read/write/flush/sync failure
            SourceChangedError: If a source's length differs from its header entry
        """
        if len(sources) != header.file_count:
            raise ValueError(
                f"Header describes {header.file_count} files, got {len(sources)} sources"
            )

        digest = new_digest(self.digest_algorithm)
        header_bytes = header.to_bytes()

        try:
            with self.storage.open_for_write(destination) as out:
                digest.update(header_bytes)
                self._write_block(out, header_bytes, destination)

                for source, expected_size in zip(sources, header.sizes):
                    copied = self._copy_source(out, source, destination, digest)
                    if copied != expected_size:
                        raise SourceChangedError(str(source), expected_size, copied)
                    logger.debug(
                        "Source copied",
                        extra={"source": str(source), "size_bytes": copied},
                    )

                self.storage.persist(out, destination, sync=self.sync)
        except OSError as e:
            # Only closing the destination can still raise a raw OSError here
            raise ArchiveIOError(
                f"Failed to close {destination}: {e}",
                path=str(destination),
                operation="close",
            ) from e

        return digest.digest()

    def _copy_source(
        self,
        out: BinaryIO,
        source: Path,
        destination: Path,
        digest: Any,
    ) -> int:
        """Stream one source into out, hashing each block first."""
        copied = 0
        try:
            with self.storage.open_for_read(source) as src:
                for chunk in iter_chunks(src, self.block_size):
                    digest.update(chunk)
                    self._write_block(out, chunk, destination)
                    copied += len(chunk)
        except OSError as e:
            # Covers closing the source too
            raise ArchiveIOError(
                f"Read failed for {source}: {e}", path=str(source), operation="read"
            ) from e
        return copied

    @staticmethod
    def _write_block(out: BinaryIO, data: bytes, destination: Path) -> None:
        try:
            out.write(data)
        except OSError as e:
            raise ArchiveIOError(
                f"Write failed for {destination}: {e}",
                path=str(destination),
                operation="write",
            ) from e
