"""
Storage backends for SealPack.

This module provides the pluggable storage interface used by the writer
and the verifier:
- LocalStorage: local filesystem with os.fsync (default)

Invariants:
    - Backends surface every I/O failure as ArchiveIOError
    - persist() is a synchronous durability barrier
"""

from .base import ArchiveStorage
from .local import LocalStorage

__all__ = ["ArchiveStorage", "LocalStorage"]
