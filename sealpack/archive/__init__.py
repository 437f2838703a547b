"""
Archive module for SealPack.

This module builds single-file archives and verifies them:
- header: fixed-layout count + sizes preamble
- writer: single streaming pass that writes and hashes
- verifier: independent re-read and digest comparison
- archiver: orchestration of the three steps

Invariants:
    - Archives are header followed by raw source bytes, nothing else
    - Every archive is verified against storage before write() succeeds
    - The digest is checked at write time only and never stored
"""

from .archiver import Archiver, ArchiveState, WriteResult
from .header import ArchiveHeader, encode_header, header_length
from .request import ArchiveRequest
from .verifier import PostWriteVerifier
from .writer import StreamingWriter

__all__ = [
    "Archiver",
    "ArchiveState",
    "WriteResult",
    "ArchiveHeader",
    "encode_header",
    "header_length",
    "ArchiveRequest",
    "PostWriteVerifier",
    "StreamingWriter",
]
