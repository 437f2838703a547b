"""
SealPack - verified single-file archives.

This package concatenates a set of files into one archive prefixed with a
fixed-layout header (file count + file sizes), then proves that what reached
storage is what was written:

    ┌──────────┐     ┌─────────────────┐     ┌──────────────────┐
    │  Header  │────▶│ Streaming write │────▶│ Post-write verify│
    │ encoder  │     │   + SHA-256     │     │  (re-read + hash)│
    └──────────┘     └────────┬────────┘     └────────┬─────────┘
                              │ memory digest          │ disk digest
                              └──────────┬─────────────┘
                                         ▼
                                  equal or IntegrityError

Invariants:
    - The memory digest and the disk digest are computed independently
    - The archive format carries no names, timestamps or checksums
    - Every failure aborts the write, nothing is retried

How to change safely:
    - Format changes break every existing archive consumer
    - Keep the two digest passes separate
"""

from ._version import __version__
from .archive import Archiver, ArchiveState, WriteResult
from .config import ArchiverSettings
from .errors import (
    ArchiveIOError,
    ConfigurationError,
    HeaderEncodingError,
    IntegrityError,
    SealPackError,
    SourceChangedError,
)

__all__ = [
    "__version__",
    "Archiver",
    "ArchiveState",
    "WriteResult",
    "ArchiverSettings",
    "SealPackError",
    "ConfigurationError",
    "ArchiveIOError",
    "SourceChangedError",
    "HeaderEncodingError",
    "IntegrityError",
]
