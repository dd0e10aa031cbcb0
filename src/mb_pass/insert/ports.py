"""Collaborator interfaces the insert flow depends on."""

from collections.abc import Callable
from typing import Protocol

from mb_pass.confirm import Confirmation
from mb_pass.secret import Secret


class EntryStore(Protocol):
    """Encrypted store as seen by insert."""

    def exists(self, name: str) -> bool: ...

    def get(self, name: str) -> Secret: ...

    def set(self, name: str, secret: Secret, message: str) -> None: ...

    def set_confirm(self, name: str, secret: Secret, message: str, confirm: Confirmation) -> None: ...


class Prompter(Protocol):
    """Interactive terminal prompts."""

    def ask_string(self, prompt: str, default: str = "") -> str: ...

    def ask_password(self, name: str, prompt_fn: Callable[[str], str] | None = None) -> str: ...

    def ask_confirmation(self, message: str) -> bool: ...


class Editor(Protocol):
    """External editor for multi-line content."""

    def edit(self, initial: bytes) -> bytes: ...


# Fire-and-forget password strength report
Auditor = Callable[[str], None]
