"""Terminal-backed prompt and editor collaborators."""

import sys
from collections.abc import Callable

import click
import typer


class PromptError(Exception):
    """Raised when the user aborts a prompt or the terminal cannot be read."""


class EditorError(Exception):
    """Raised when the external editor cannot be started."""


def is_interactive() -> bool:
    """Check whether a user is attached to standard input."""
    return sys.stdin.isatty()


class TerminalPrompter:
    """Prompts rendered with Typer."""

    def ask_string(self, prompt: str, default: str = "") -> str:
        """Ask for a plain, echoed string."""
        try:
            value: str = typer.prompt(prompt, default=default or None)
        except typer.Abort as e:
            raise PromptError(f"input aborted at '{prompt}'") from e
        return value

    def ask_password(self, name: str, prompt_fn: Callable[[str], str] | None = None) -> str:
        """Ask for a new password for ``name``.

        Masked input asks twice and repeats until both entries match.
        A ``prompt_fn`` replaces that with a single call, e.g. a visible prompt.
        """
        prompt = f"Enter password for {name}"
        if prompt_fn is not None:
            return prompt_fn(prompt)
        try:
            value: str = typer.prompt(prompt, hide_input=True, confirmation_prompt=f"Retype password for {name}")
        except typer.Abort as e:
            raise PromptError(f"password entry for '{name}' aborted") from e
        return value

    def ask_confirmation(self, message: str) -> bool:
        """Ask a yes/no question; an aborted prompt counts as no."""
        try:
            return typer.confirm(message, default=False)
        except typer.Abort:
            return False


class TerminalEditor:
    """Launch an external editor on a temporary file."""

    def __init__(self, editor: str | None = None) -> None:
        """Initialize the editor launcher.

        Args:
            editor: Command to run; None lets click pick $VISUAL, $EDITOR or a platform default.

        """
        self._editor = editor

    def edit(self, initial: bytes) -> bytes:
        """Open the editor on ``initial`` and return what was saved."""
        try:
            result = typer.edit(initial.decode(), editor=self._editor, extension=".yml", require_save=False)
        except typer.Abort as e:
            raise EditorError("editing aborted") from e
        except click.ClickException as e:
            raise EditorError(str(e)) from e
        return (result or "").encode()
