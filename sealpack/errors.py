"""
Error types for SealPack.

This module defines all exception types raised while building an archive:
- SealPackError: Base exception
- ConfigurationError: Invalid destination or source registration
- ArchiveIOError: Open/read/write/flush/sync failure
- SourceChangedError: Source size changed between header build and copy
- HeaderEncodingError: Header values outside the uint64 range
- IntegrityError: Memory digest and disk digest disagree

Invariants:
    - All errors inherit from SealPackError
    - Errors include context for debugging
    - Every error aborts the write call, none are recovered internally
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class SealPackError(Exception):
    """Base exception for all SealPack errors.

    Attributes:
        message: Error message
        code: Error code for programmatic handling
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or "SEALPACK_ERROR"
        self.details = details or {}


class ConfigurationError(SealPackError):
    """Invalid archive request.

    Raised when:
    - Destination path is missing
    - Destination parent directory is missing or not writable
    - Source path is missing, not a regular file, or not readable
    """

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(
            message,
            code="CONFIGURATION_ERROR",
            details={"path": path},
        )
        self.path = path


class ArchiveIOError(SealPackError):
    """I/O failure while writing or re-reading an archive.

    Raised when:
    - A source or the destination cannot be opened
    - A read, write, flush or sync fails
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        operation: Optional[str] = None,
        code: str = "IO_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        merged = {"path": path, "operation": operation}
        merged.update(details or {})
        super().__init__(message, code=code, details=merged)
        self.path = path
        self.operation = operation


class SourceChangedError(ArchiveIOError):
    """Source produced a different number of bytes than its header entry.

    The header is built from the sizes observed when the write starts.
    A source truncated or extended after that point would leave the header
    disagreeing with the payload, so the write is aborted instead.
    """

    def __init__(self, path: str, expected_size: int, actual_size: int) -> None:
        super().__init__(
            f"Source changed during write: {path} "
            f"(expected {expected_size} bytes, read {actual_size})",
            path=path,
            operation="read",
            code="SOURCE_CHANGED",
            details={"expected_size": expected_size, "actual_size": actual_size},
        )
        self.expected_size = expected_size
        self.actual_size = actual_size


class HeaderEncodingError(SealPackError):
    """Header value cannot be encoded as an unsigned 64-bit integer."""

    def __init__(self, message: str, value: Optional[int] = None) -> None:
        super().__init__(message, code="HEADER_ERROR", details={"value": value})
        self.value = value


class IntegrityError(SealPackError):
    """Digest of the archive on disk differs from the digest computed in memory.

    The destination file is left in place for inspection.

    Attributes:
        path: Destination archive path
        memory_digest: Hex digest of the bytes handed to the writer
        disk_digest: Hex digest of the bytes read back from storage
    """

    def __init__(self, path: str, memory_digest: str, disk_digest: str) -> None:
        super().__init__(
            f"Integrity check failed for {path}",
            code="INTEGRITY_ERROR",
            details={
                "path": path,
                "memory_digest": memory_digest,
                "disk_digest": disk_digest,
            },
        )
        self.path = path
        self.memory_digest = memory_digest
        self.disk_digest = disk_digest
