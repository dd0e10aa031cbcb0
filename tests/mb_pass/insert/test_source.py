"""Tests for standard input detection and draining."""

import io
from pathlib import Path

import pytest

from mb_pass.insert.source import StdinError, StdinSource, detect_piped_stdin, read_stdin


class _BrokenStream(io.RawIOBase):
    """Yields one chunk, then fails."""

    def __init__(self) -> None:
        self._sent = False

    def read(self, size: int = -1) -> bytes:
        if not self._sent:
            self._sent = True
            return b"abcde"
        raise OSError("pipe broke")


class TestDetectPipedStdin:
    """detect_piped_stdin."""

    def test_regular_file_is_piped(self, tmp_path: Path):
        """A redirected file counts as piped data."""
        path = tmp_path / "in.txt"
        path.write_bytes(b"data")
        with path.open("rb") as f:
            assert detect_piped_stdin(f) is True

    def test_character_device_is_not_piped(self):
        """A character device (like a terminal) is not piped."""
        with Path("/dev/null").open("rb") as f:
            assert detect_piped_stdin(f) is False

    def test_unqueryable_handle(self):
        """A handle without a file descriptor is a fatal error."""
        with pytest.raises(StdinError, match="failed to stat stdin"):
            detect_piped_stdin(io.BytesIO(b"x"))


class TestReadStdin:
    """read_stdin."""

    def test_reads_everything(self):
        """All bytes are returned."""
        data = b"x" * 200_000
        assert read_stdin(io.BytesIO(data)) == data

    def test_failure_reports_bytes_so_far(self):
        """A mid-stream failure mentions how much was read."""
        with pytest.raises(StdinError, match="failed to copy after 5 bytes"):
            read_stdin(_BrokenStream())


class TestCapture:
    """StdinSource.capture."""

    def test_piped(self, tmp_path: Path):
        """Piped content is drained into the source."""
        path = tmp_path / "in.txt"
        path.write_bytes(b"pw\n")
        with path.open("rb") as f:
            assert StdinSource.capture(f) == StdinSource(piped=True, content=b"pw\n")

    def test_terminal(self):
        """A character device yields no content."""
        with Path("/dev/null").open("rb") as f:
            assert StdinSource.capture(f) == StdinSource(piped=False)
