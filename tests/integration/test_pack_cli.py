"""
Integration tests for the sealpack-pack command-line tool.

Tests cover:
- Successful archive creation and summary output
- Exit codes for configuration, I/O and integrity errors
- Settings overrides from flags
"""

import hashlib
import logging

import pytest

from sealpack.archive import Archiver
from sealpack.storage import LocalStorage
from sealpack.tools.pack import (
    EXIT_CONFIGURATION_ERROR,
    EXIT_INTEGRITY_ERROR,
    EXIT_IO_ERROR,
    EXIT_OK,
    build_parser,
    main,
)


class CorruptingStorage(LocalStorage):
    """Flips the first byte of the archive after it has been synced."""

    def persist(self, handle, path, sync=True):
        super().persist(handle, path, sync=sync)
        with open(path, "r+b") as fh:
            first = fh.read(1)
            fh.seek(0)
            fh.write(bytes([first[0] ^ 0xFF]))


@pytest.fixture(autouse=True)
def restore_root_logger():
    """main() installs its own handler on the root logger."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


class TestPackCli:
    """Tests for the pack tool entry point."""

    @pytest.fixture
    def sources(self, tmp_path):
        a = tmp_path / "a.bin"
        a.write_bytes(b"\x01\x02\x03")
        b = tmp_path / "b.bin"
        b.write_bytes(b"\xff")
        return [a, b]

    def test_parser_requires_files(self):
        """At least one input file is required."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["out.bin"])

    def test_pack_success(self, tmp_path, sources, capsys):
        """Archive is written and a summary is printed."""
        output = tmp_path / "out.bin"

        with pytest.raises(SystemExit) as exc_info:
            main([str(output)] + [str(p) for p in sources])

        assert exc_info.value.code == EXIT_OK
        data = output.read_bytes()
        assert len(data) == 28
        assert data[24:] == b"\x01\x02\x03\xff"

        out = capsys.readouterr().out
        assert "Archive written and verified" in out
        assert "Files: 2" in out
        assert f"sha256:{hashlib.sha256(data).hexdigest()}" in out

    def test_pack_with_flags(self, tmp_path, sources, capsys):
        """Block size, digest and fsync flags are applied."""
        output = tmp_path / "out.bin"

        with pytest.raises(SystemExit) as exc_info:
            main(
                [str(output), str(sources[0]), "--block-size", "1", "--digest", "sha3_256", "--no-fsync"]
            )

        assert exc_info.value.code == EXIT_OK
        data = output.read_bytes()
        assert f"sha3_256:{hashlib.sha3_256(data).hexdigest()}" in capsys.readouterr().out

    def test_missing_source(self, tmp_path, sources, capsys):
        """Unknown input file is a configuration error."""
        output = tmp_path / "out.bin"

        with pytest.raises(SystemExit) as exc_info:
            main([str(output), str(sources[0]), str(tmp_path / "missing.bin")])

        assert exc_info.value.code == EXIT_CONFIGURATION_ERROR
        assert "File does not exist" in capsys.readouterr().err
        assert not output.exists()

    def test_missing_output_directory(self, tmp_path, sources, capsys):
        """Output in a missing directory is a configuration error."""
        with pytest.raises(SystemExit) as exc_info:
            main([str(tmp_path / "nope" / "out.bin"), str(sources[0])])

        assert exc_info.value.code == EXIT_CONFIGURATION_ERROR
        assert "Parent directory does not exist" in capsys.readouterr().err

    def test_invalid_digest(self, tmp_path, sources, capsys):
        """Non-256-bit digests are rejected."""
        with pytest.raises(SystemExit) as exc_info:
            main([str(tmp_path / "out.bin"), str(sources[0]), "--digest", "md5"])

        assert exc_info.value.code == EXIT_CONFIGURATION_ERROR
        assert "Invalid settings" in capsys.readouterr().err

    def test_unwritable_output_is_io_error(self, tmp_path, sources, capsys):
        """An output path that cannot be opened as a file exits with the I/O code."""
        with pytest.raises(SystemExit) as exc_info:
            main([str(tmp_path), str(sources[0])])

        assert exc_info.value.code == EXIT_IO_ERROR
        assert "Archive write failed" in capsys.readouterr().err

    def test_integrity_failure(self, tmp_path, sources, capsys, monkeypatch):
        """A corrupted archive exits with the integrity code and prints both digests."""
        monkeypatch.setattr(
            "sealpack.tools.pack.Archiver",
            lambda destination, settings=None: Archiver(
                destination, settings=settings, storage=CorruptingStorage()
            ),
        )
        output = tmp_path / "out.bin"

        with pytest.raises(SystemExit) as exc_info:
            main([str(output)] + [str(p) for p in sources])

        assert exc_info.value.code == EXIT_INTEGRITY_ERROR
        err = capsys.readouterr().err
        assert f"Integrity check failed: {output}" in err
        assert "Memory digest:" in err
        assert f"Disk digest:   {hashlib.sha256(output.read_bytes()).hexdigest()}" in err
