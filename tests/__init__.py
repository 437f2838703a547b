"""
SealPack Test Suite.

This package contains:
- unit/: Unit tests (header, settings, validation, writer, verifier)
- integration/: Full write-then-verify runs against the local filesystem
"""
