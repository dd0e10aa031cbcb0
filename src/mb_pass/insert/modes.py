"""Input mode selection for insert."""

from enum import StrEnum


class InputMode(StrEnum):
    """Where the content of an inserted entry comes from."""

    SINGLE_FIELD = "single-field"
    FULL_DOCUMENT = "full-document-from-stdin"
    MULTILINE_EDITOR = "multiline-editor"
    PROMPTED_PASSWORD = "prompted-password"

    @property
    def guards_overwrite(self) -> bool:
        """Whether an existing entry must be confirmed before this mode replaces it."""
        return self in (InputMode.MULTILINE_EDITOR, InputMode.PROMPTED_PASSWORD)


# Rows are checked in order; None matches either value. The last row is the fallthrough.
#     has_key  piped  multiline and interactive
DECISION_TABLE: tuple[tuple[bool | None, bool | None, bool | None, InputMode], ...] = (
    (True, None, None, InputMode.SINGLE_FIELD),
    (False, True, None, InputMode.FULL_DOCUMENT),
    (False, False, True, InputMode.MULTILINE_EDITOR),
    (False, False, False, InputMode.PROMPTED_PASSWORD),
)


def select_mode(*, has_key: bool, piped: bool, multiline: bool, interactive: bool) -> InputMode:
    """Pick the input mode for one insert invocation.

    Multiline is ignored without an interactive terminal.
    """
    row = (has_key, piped, multiline and interactive)
    for *pattern, mode in DECISION_TABLE:
        if all(p is None or p == v for p, v in zip(pattern, row, strict=True)):
            return mode
    raise AssertionError(f"no input mode for {row}")  # pragma: no cover
