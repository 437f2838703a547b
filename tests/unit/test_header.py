"""
Unit tests for archive header encoding.

Tests cover:
- Byte layout (big-endian uint64 count then sizes)
- Header length
- Range checking
"""

import struct

import pytest

from sealpack.archive.header import (
    UINT64_MAX,
    ArchiveHeader,
    encode_header,
    header_length,
)
from sealpack.errors import HeaderEncodingError


class TestEncodeHeader:
    """Tests for encode_header."""

    def test_two_files_layout(self):
        """Count followed by each size, big-endian."""
        data = encode_header([3, 1])

        assert data == bytes.fromhex(
            "0000000000000002"
            "0000000000000003"
            "0000000000000001"
        )

    def test_length_matches_formula(self):
        """Header is 8 + 8 * N bytes."""
        for count in (0, 1, 5, 100):
            assert len(encode_header([7] * count)) == header_length(count)
            assert header_length(count) == 8 + 8 * count

    def test_sizes_kept_in_order(self):
        """Sizes appear in source order."""
        sizes = [10, 0, 2**40, 5]
        data = encode_header(sizes)

        count, *decoded = struct.unpack(">5Q", data)
        assert count == 4
        assert decoded == sizes

    def test_zero_sized_file(self):
        """Empty sources are recorded with size 0."""
        assert encode_header([0]) == bytes.fromhex("0000000000000001" "0000000000000000")

    def test_max_uint64_accepted(self):
        """Largest uint64 value encodes."""
        data = encode_header([UINT64_MAX])
        assert data[8:] == b"\xff" * 8

    def test_negative_size_rejected(self):
        """Negative sizes cannot be encoded."""
        with pytest.raises(HeaderEncodingError) as exc_info:
            encode_header([1, -1])

        assert exc_info.value.code == "HEADER_ERROR"
        assert exc_info.value.value == -1

    def test_oversized_value_rejected(self):
        """Sizes beyond uint64 cannot be encoded."""
        with pytest.raises(HeaderEncodingError):
            encode_header([UINT64_MAX + 1])


class TestArchiveHeader:
    """Tests for ArchiveHeader."""

    def test_lengths(self):
        """Derived lengths follow the archive layout."""
        header = ArchiveHeader(sizes=(3, 1))

        assert header.file_count == 2
        assert header.length == 24
        assert header.payload_length == 4
        assert header.archive_length == 28

    def test_to_bytes_matches_encoder(self):
        """to_bytes delegates to encode_header."""
        header = ArchiveHeader(sizes=(100, 200, 300))
        assert header.to_bytes() == encode_header([100, 200, 300])

    def test_immutable(self):
        """Header is frozen once built."""
        header = ArchiveHeader(sizes=(1,))
        with pytest.raises(AttributeError):
            header.sizes = (2,)

    def test_invalid_size_rejected_at_construction(self):
        """A header that cannot be encoded is never built."""
        with pytest.raises(HeaderEncodingError) as exc_info:
            ArchiveHeader(sizes=(3, -1))

        assert exc_info.value.value == -1
