"""
Configuration for SealPack.

Uses pydantic-settings for environment variable loading. Every setting can
be overridden with a SEALPACK_ prefixed variable, e.g. SEALPACK_BLOCK_SIZE.

Invariants:
    - All settings have defaults that reproduce the reference behavior
      (16 KiB blocks, SHA-256, fsync after write)
    - The digest algorithm always produces a 256-bit value

How to change safely:
    - Add new settings with defaults that keep existing archives identical
    - Never change the default digest algorithm without a migration note
"""

from __future__ import annotations

import hashlib

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

DEFAULT_BLOCK_SIZE = 16_384
DIGEST_SIZE_BYTES = 32


class ArchiverSettings(BaseSettings):
    """Archiver configuration loaded from environment."""

    block_size: int = Field(
        default=DEFAULT_BLOCK_SIZE,
        description="Chunk size in bytes for streaming reads",
    )
    digest_algorithm: str = Field(
        default="sha256",
        description="hashlib algorithm used for both digest passes",
    )
    fsync: bool = Field(
        default=True,
        description="Force the destination to stable storage before verifying",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="text", description="Log format (text, json)")

    model_config = {"env_prefix": "SEALPACK_"}

    @field_validator("block_size")
    @classmethod
    def _check_block_size(cls, value: int) -> int:
        if value <= 0:
            raise ValueError(f"block_size must be positive, got {value}")
        return value

    @field_validator("digest_algorithm")
    @classmethod
    def _check_digest_algorithm(cls, value: str) -> str:
        name = value.lower()
        try:
            digest_size = hashlib.new(name).digest_size
        except ValueError:
            raise ValueError(f"Unknown digest algorithm '{value}'")
        if digest_size != DIGEST_SIZE_BYTES:
            raise ValueError(
                f"Digest algorithm '{value}' produces {digest_size * 8}-bit digests, "
                f"expected {DIGEST_SIZE_BYTES * 8}"
            )
        return name

    @field_validator("log_format")
    @classmethod
    def _check_log_format(cls, value: str) -> str:
        if value not in ("text", "json"):
            raise ValueError(f"log_format must be 'text' or 'json', got '{value}'")
        return value
