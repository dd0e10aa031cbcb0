"""Confirmation policy: ask the user, or always allow."""

from collections.abc import Callable
from typing import Protocol


class Confirmation(Protocol):
    """Capability consulted before a gated write."""

    def ask(self, message: str) -> bool:
        """Return True if the action may go ahead."""
        ...


class AskConfirmation:
    """Delegate each question to an interactive yes/no prompt."""

    def __init__(self, ask_fn: Callable[[str], bool]) -> None:
        """Initialize with the prompt used to ask the user.

        Args:
            ask_fn: Blocking yes/no prompt returning the answer.

        """
        self._ask_fn = ask_fn

    def ask(self, message: str) -> bool:
        """Ask the user."""
        return self._ask_fn(message)


class AlwaysConfirm:
    """No-op policy used for forced operations."""

    def ask(self, message: str) -> bool:  # noqa: ARG002
        """Allow without asking."""
        return True
