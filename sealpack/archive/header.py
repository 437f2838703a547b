"""
Archive header encoding.

Header layout (all integers big-endian uint64):
    offset 0:             file_count
    offset 8:             file_count x file_size, in source order
    offset 8+8*count:     payload (concatenated source bytes)

The header records only counts and sizes. There are no file names,
timestamps, permissions or checksums in the format.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Sequence

from ..errors import HeaderEncodingError

UINT64_SIZE = 8
UINT64_MAX = 0xFFFF_FFFF_FFFF_FFFF


def header_length(file_count: int) -> int:
    """Size in bytes of the header for file_count sources."""
    return UINT64_SIZE + UINT64_SIZE * file_count


def _check_uint64(value: int, what: str) -> None:
    if value < 0 or value > UINT64_MAX:
        raise HeaderEncodingError(f"{what} out of uint64 range: {value}", value=value)


def encode_header(sizes: Sequence[int]) -> bytes:
    """Encode the count of sizes followed by each size.

    Args:
        sizes: Byte length of every source, in archive order

    Returns:
        Exactly header_length(len(sizes)) bytes

    Raises:
        HeaderEncodingError: If a size is negative or exceeds uint64
    """
    _check_uint64(len(sizes), "file count")
    for size in sizes:
        _check_uint64(size, "file size")

    return struct.pack(f">{1 + len(sizes)}Q", len(sizes), *sizes)


@dataclass(frozen=True)
class ArchiveHeader:
    """Sizes recorded in an archive header.

    Attributes:
        sizes: Byte length of every source, in archive order
    """

    sizes: tuple[int, ...]

    def __post_init__(self) -> None:
        _check_uint64(len(self.sizes), "file count")
        for size in self.sizes:
            _check_uint64(size, "file size")

    @property
    def file_count(self) -> int:
        return len(self.sizes)

    @property
    def length(self) -> int:
        return header_length(self.file_count)

    @property
    def payload_length(self) -> int:
        return sum(self.sizes)

    @property
    def archive_length(self) -> int:
        return self.length + self.payload_length

    def to_bytes(self) -> bytes:
        return encode_header(self.sizes)
