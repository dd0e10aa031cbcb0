"""Failure outcomes of an insert and their process exit codes."""

EXIT_CODES: dict[str, int] = {
    "unknown": 1,
    "usage": 9,
    "store_read": 11,
    "store_write": 12,
    "io": 18,
    "parse": 19,
    "field_set": 20,
}

ABORTED_EXIT_CODE = 3


class InsertError(Exception):
    """Fatal insert failure carrying one of the ``EXIT_CODES`` kinds."""

    def __init__(self, code: str, message: str) -> None:
        """Initialize with an error kind and a message naming the entry.

        Args:
            code: Error kind, a key of ``EXIT_CODES``.
            message: Human-readable description with the entry name (and key) interpolated.

        """
        super().__init__(message)
        self.code = code

    @property
    def exit_code(self) -> int:
        """Process exit code for this error kind."""
        return EXIT_CODES.get(self.code, EXIT_CODES["unknown"])


class InsertAborted(Exception):  # noqa: N818
    """The user declined to overwrite an entry; nothing was written."""

    exit_code = ABORTED_EXIT_CODE
