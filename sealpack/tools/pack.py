"""
Pack CLI tool for SealPack.

This tool builds a verified archive from a list of files.

Usage:
    sealpack-pack OUTPUT FILE [FILE ...] [options]

Exit codes:
    0: Archive written and verified
    1: I/O error while writing or re-reading
    2: Invalid destination or source
    3: Integrity check failed (archive left on disk)
"""

from __future__ import annotations

import argparse
import sys

from pydantic import ValidationError

from ..archive import Archiver
from ..config import ArchiverSettings
from ..errors import ArchiveIOError, ConfigurationError, IntegrityError
from ..logging_config import setup_logging

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_CONFIGURATION_ERROR = 2
EXIT_INTEGRITY_ERROR = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Concatenate files into a single archive and verify it on disk"
    )
    parser.add_argument("output", help="Archive file to create or overwrite")
    parser.add_argument("files", nargs="+", help="Files to include, in order")
    parser.add_argument("--block-size", type=int, help="Read block size in bytes")
    parser.add_argument("--digest", help="256-bit hashlib algorithm (default sha256)")
    parser.add_argument("--no-fsync", action="store_true", help="Skip fsync before verifying")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the pack tool."""
    args = build_parser().parse_args(argv)

    overrides: dict[str, object] = {}
    if args.block_size is not None:
        overrides["block_size"] = args.block_size
    if args.digest is not None:
        overrides["digest_algorithm"] = args.digest
    if args.no_fsync:
        overrides["fsync"] = False

    try:
        settings = ArchiverSettings(**overrides)
    except ValidationError as e:
        print(f"Invalid settings: {e}", file=sys.stderr)
        sys.exit(EXIT_CONFIGURATION_ERROR)

    setup_logging(settings, verbose=args.verbose)

    try:
        archiver = Archiver(args.output, settings=settings)
        for path in args.files:
            archiver.add(path)
        result = archiver.write()
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        sys.exit(EXIT_CONFIGURATION_ERROR)
    except IntegrityError as e:
        print(f"Integrity check failed: {e.path}", file=sys.stderr)
        print(f"  Memory digest: {e.memory_digest}", file=sys.stderr)
        print(f"  Disk digest:   {e.disk_digest}", file=sys.stderr)
        sys.exit(EXIT_INTEGRITY_ERROR)
    except ArchiveIOError as e:
        print(f"Archive write failed: {e.message}", file=sys.stderr)
        sys.exit(EXIT_IO_ERROR)

    # nargs="+" guarantees at least one source
    assert result is not None

    print("Archive written and verified")
    print(f"  Output: {result.destination}")
    print(f"  Files: {result.file_count}")
    print(f"  Size: {result.archive_length} bytes ({result.header_length} header)")
    print(f"  Digest: {result.digest_algorithm}:{result.digest}")
    print(f"  Duration: {result.duration_ms}ms")
    sys.exit(EXIT_OK)


if __name__ == "__main__":
    main()
