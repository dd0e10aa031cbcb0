"""Detect and drain data piped into standard input."""

import os
import stat
import sys
from dataclasses import dataclass
from typing import BinaryIO

_CHUNK_SIZE = 65536


class StdinError(Exception):
    """Raised when standard input cannot be inspected or fully read."""


def detect_piped_stdin(stream: BinaryIO) -> bool:
    """Return True unless ``stream`` is a character device (a terminal, or /dev/null).

    Raises:
        StdinError: The handle cannot be queried.

    """
    try:
        mode = os.fstat(stream.fileno()).st_mode
    except (OSError, ValueError) as e:
        raise StdinError(f"failed to stat stdin: {e}") from e
    return not stat.S_ISCHR(mode)


def read_stdin(stream: BinaryIO) -> bytes:
    """Read ``stream`` to EOF.

    Raises:
        StdinError: The read failed part way, with the byte count reached.

    """
    buf = bytearray()
    try:
        while chunk := stream.read(_CHUNK_SIZE):
            buf.extend(chunk)
    except OSError as e:
        raise StdinError(f"failed to copy after {len(buf)} bytes: {e}") from e
    return bytes(buf)


@dataclass(frozen=True)
class StdinSource:
    """Classified standard input: piped content, or an attached terminal."""

    piped: bool
    content: bytes = b""

    @staticmethod
    def capture(stream: BinaryIO | None = None) -> "StdinSource":
        """Inspect standard input once and drain it if data is piped in.

        Raises:
            StdinError: Inspection or draining failed.

        """
        if stream is None:
            stream = sys.stdin.buffer
        if not detect_piped_stdin(stream):
            return StdinSource(piped=False)
        return StdinSource(piped=True, content=read_stdin(stream))
