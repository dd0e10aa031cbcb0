"""Structured output for CLI and JSON modes."""

# ruff: noqa: T201 — this module is the output layer; print() is its sole mechanism for producing CLI output.

import json
import sys
from typing import NoReturn

import typer

from mb_pass.secret import Secret
from mb_pass.store import HistoryRecord


class Output:
    """Handles all CLI output in JSON or human-readable format."""

    def __init__(self, *, json_mode: bool) -> None:
        """Initialize output handler.

        Args:
            json_mode: If True, output JSON envelopes; otherwise human-readable text.

        """
        self._json_mode = json_mode

    def _success(self, data: dict[str, object], message: str) -> None:
        """Print a success result in JSON or human-readable format."""
        if self._json_mode:
            print(json.dumps({"ok": True, "data": data}))
        else:
            print(message)

    def print_error_and_exit(self, code: str, message: str, exit_code: int = 1) -> NoReturn:
        """Print an error in JSON or human-readable format and exit.

        Raises:
            typer.Exit: Always, with ``exit_code``.

        """
        if self._json_mode:
            print(json.dumps({"ok": False, "error": code, "message": message}))
        else:
            print(f"Error: {message}", file=sys.stderr)
        raise typer.Exit(code=exit_code)

    def print_aborted_and_exit(self, message: str, exit_code: int) -> NoReturn:
        """Print a user-declined outcome; not an error, but not a success either.

        Raises:
            typer.Exit: Always, with ``exit_code``.

        """
        if self._json_mode:
            print(json.dumps({"ok": False, "error": "aborted", "message": message}))
        else:
            print(f"Aborted: {message}", file=sys.stderr)
        raise typer.Exit(code=exit_code)

    def print_warnings(self, warnings: list[str]) -> None:
        """Print non-fatal warnings to stderr (both modes, stdout stays clean for JSON)."""
        for warning in warnings:
            print(f"Warning: {warning}", file=sys.stderr)

    # --- Setup ---

    def print_init_done(self, path: str) -> None:
        """Print store creation confirmation."""
        self._success({"path": path}, f"Store created at {path}.")

    def print_password_changed(self) -> None:
        """Print password change confirmation."""
        self._success({}, "Master password changed.")

    # --- Entries ---

    def print_inserted(self, name: str, key: str | None, mode: str) -> None:
        """Print insert confirmation."""
        target = f"'{name}' field '{key}'" if key else f"'{name}'"
        self._success({"name": name, "key": key, "mode": mode}, f"Stored {target}.")

    def print_secret(self, name: str, secret: Secret) -> None:
        """Print a whole secret document."""
        if self._json_mode:
            print(json.dumps({"ok": True, "data": {"name": name, "password": secret.password, "fields": secret.fields, "body": secret.body}}, default=str))
        else:
            print(secret.serialize().decode(), end="")

    def print_value(self, name: str, key: str, value: object) -> None:
        """Print a single field of a secret."""
        if self._json_mode:
            print(json.dumps({"ok": True, "data": {"name": name, "key": key, "value": value}}, default=str))
        else:
            print(value)

    def print_list(self, names: list[str]) -> None:
        """Print entry names."""
        if self._json_mode:
            print(json.dumps({"ok": True, "data": {"names": names}}))
        else:
            for name in names:
                print(name)

    def print_deleted(self, name: str) -> None:
        """Print entry deletion confirmation."""
        self._success({"name": name}, f"Entry '{name}' deleted.")

    def print_history(self, records: list[HistoryRecord]) -> None:
        """Print the change log."""
        if self._json_mode:
            data = [{"name": r.name, "message": r.message, "timestamp": r.timestamp} for r in records]
            print(json.dumps({"ok": True, "data": {"history": data}}))
        else:
            for r in records:
                print(f"{r.timestamp}  {r.name}  {r.message}")
