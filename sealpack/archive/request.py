"""
Archive request: the validated destination and ordered sources.

Validation happens at registration time so that configuration problems
surface before any byte is written. The write pipeline only ever sees
paths that passed these checks.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from ..errors import ConfigurationError

logger = logging.getLogger(__name__)


def validate_destination(path: str | os.PathLike[str] | None) -> Path:
    """Check that the destination can be created in an existing, writable directory.

    Raises:
        ConfigurationError: If path is None or its parent is unusable
    """
    if path is None:
        raise ConfigurationError("Path is null")

    target = Path(path)
    parent = target.parent
    if not parent.exists():
        raise ConfigurationError(
            f"Parent directory does not exist: {parent}", path=str(parent)
        )
    if not os.access(parent, os.W_OK):
        raise ConfigurationError(
            f"Cannot write to parent directory: {parent}", path=str(parent)
        )
    return target


def validate_source(path: str | os.PathLike[str] | None) -> Path:
    """Check that a source exists, is a regular file and is readable.

    Raises:
        ConfigurationError: If any of the checks fails
    """
    if path is None:
        raise ConfigurationError("Path is null")

    source = Path(path)
    if not source.exists():
        raise ConfigurationError(f"File does not exist: {source}", path=str(source))
    if not source.is_file():
        raise ConfigurationError(f"Path does not describe a file: {source}", path=str(source))
    if not os.access(source, os.R_OK):
        raise ConfigurationError(f"File is not readable: {source}", path=str(source))
    return source


@dataclass
class ArchiveRequest:
    """Destination plus ordered sources for one archive.

    Sources are appended, never removed. The same path may be added more
    than once; it is then archived more than once.

    Attributes:
        destination: Validated destination path
        sources: Validated source paths, in archive order
    """

    destination: Path
    sources: list[Path] = field(default_factory=list)

    @classmethod
    def create(cls, destination: str | os.PathLike[str] | None) -> ArchiveRequest:
        """Build an empty request for a validated destination."""
        return cls(destination=validate_destination(destination))

    def add(self, path: str | os.PathLike[str] | None) -> Path:
        """Validate and append a source.

        Returns:
            The validated source path
        """
        source = validate_source(path)
        self.sources.append(source)
        logger.debug(
            "Source registered",
            extra={"source": str(source), "position": len(self.sources) - 1},
        )
        return source

    @property
    def is_empty(self) -> bool:
        return not self.sources
