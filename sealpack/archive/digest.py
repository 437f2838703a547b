"""
Digest helpers shared by the writer and the verifier.

Both passes must use the same algorithm but never the same hash object:
the memory digest and the disk digest are computed independently.
"""

from __future__ import annotations

import hashlib
import hmac
from typing import Any, BinaryIO, Iterator


def new_digest(algorithm: str) -> Any:
    """Create a fresh hashlib object for algorithm."""
    return hashlib.new(algorithm)


def iter_chunks(handle: BinaryIO, block_size: int) -> Iterator[bytes]:
    """Yield successive reads of at most block_size bytes until EOF."""
    while True:
        chunk = handle.read(block_size)
        if not chunk:
            return
        yield chunk


def digests_match(memory_digest: bytes, disk_digest: bytes) -> bool:
    """Exact comparison: equal length and equal bytes."""
    if memory_digest is None or disk_digest is None:
        raise ValueError("Digest is null")
    return hmac.compare_digest(memory_digest, disk_digest)
