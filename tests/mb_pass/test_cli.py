"""Tests for CLI wiring and exit codes."""

import json
from pathlib import Path
from typing import Any

import pytest
import typer
from typer.testing import CliRunner

import mb_pass.commands.insert as insert_command
from mb_pass.cli import app
from mb_pass.crypto import MIN_N
from mb_pass.insert import StdinSource
from mb_pass.secret import Secret
from mb_pass.store import Store

runner = CliRunner()

PASSWORD = "test-password"
STRONG = "Tr0ub4dor&3-horse-Staple"


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Data directory holding an initialized store with one entry."""
    store = Store(tmp_path / "store.json", scrypt_n=MIN_N)
    store.init(PASSWORD)
    store.unlock(PASSWORD)
    store.set("mail", Secret.from_password("old-pw"), "add mail")
    return tmp_path


@pytest.fixture
def terminal(monkeypatch: pytest.MonkeyPatch) -> None:
    """Nothing piped in and a user at the terminal."""
    monkeypatch.setattr(StdinSource, "capture", staticmethod(lambda: StdinSource(piped=False)))
    monkeypatch.setattr(insert_command, "is_interactive", lambda: True)


def read_entry(data_dir: Path, name: str) -> Secret:
    store = Store(data_dir / "store.json")
    store.unlock(PASSWORD)
    return store.get(name)


class TestInsertUsage:
    """insert without a name."""

    def test_missing_name(self, tmp_path: Path):
        """Prints the usage and exits with the usage code."""
        result = runner.invoke(app, ["--data-dir", str(tmp_path), "insert"])
        assert result.exit_code == 9
        assert "Usage: mb-pass insert name" in result.output
        assert not (tmp_path / "store.json").exists()

    def test_missing_name_json(self, tmp_path: Path):
        """JSON mode reports the error kind."""
        result = runner.invoke(app, ["--json", "--data-dir", str(tmp_path), "insert", "--force"])
        assert result.exit_code == 9
        assert json.loads(result.stdout) == {"ok": False, "error": "usage", "message": "Usage: mb-pass insert name"}


class TestUninitialized:
    """Commands on a missing store."""

    def test_list(self, tmp_path: Path):
        """Listing before init reports not_initialized."""
        result = runner.invoke(app, ["--json", "--data-dir", str(tmp_path), "list"])
        assert result.exit_code == 1
        assert json.loads(result.stdout)["error"] == "not_initialized"


@pytest.mark.usefixtures("terminal")
class TestInsertInteractive:
    """insert with a user at the terminal."""

    def test_field(self, data_dir: Path):
        """A field value is prompted, then the store is unlocked and written."""
        result = runner.invoke(app, ["--data-dir", str(data_dir), "insert", "web", "user"], input=f"alice\n{PASSWORD}\n")
        assert result.exit_code == 0, result.output
        assert "Stored 'web' field 'user'." in result.output
        assert read_entry(data_dir, "web") == Secret(fields={"user": "alice"})

    def test_field_json(self, data_dir: Path):
        """JSON mode reports name, key and mode."""
        result = runner.invoke(app, ["--json", "--data-dir", str(data_dir), "insert", "web", "user"], input=f"alice\n{PASSWORD}\n")
        assert result.exit_code == 0, result.output
        last_line = result.stdout.strip().splitlines()[-1]
        assert json.loads(last_line) == {"ok": True, "data": {"name": "web", "key": "user", "mode": "single-field"}}

    def test_declined_overwrite(self, data_dir: Path):
        """Answering no to the overwrite question exits with the aborted code."""
        result = runner.invoke(app, ["--data-dir", str(data_dir), "insert", "mail"], input=f"{PASSWORD}\nn\n")
        assert result.exit_code == 3
        assert "not overwriting your current secret" in result.output
        assert read_entry(data_dir, "mail") == Secret(password="old-pw")

    def test_recipient_confirmation_asked(self, data_dir: Path):
        """A new password is sealed only after the recipient question."""
        result = runner.invoke(app, ["--data-dir", str(data_dir), "insert", "web"], input=f"{PASSWORD}\n{STRONG}\n{STRONG}\ny\n")
        assert result.exit_code == 0, result.output
        assert "Seal 'web' for the key holder of" in result.output
        assert read_entry(data_dir, "web") == Secret(password=STRONG)

    def test_recipient_confirmation_declined(self, data_dir: Path):
        """Declining the recipient question is a store write error."""
        result = runner.invoke(app, ["--data-dir", str(data_dir), "insert", "web"], input=f"{PASSWORD}\n{STRONG}\n{STRONG}\nn\n")
        assert result.exit_code == 12

    def test_no_confirm_config(self, data_dir: Path):
        """no_confirm in config.toml skips the recipient question."""
        (data_dir / "config.toml").write_text("no_confirm = true\n")
        result = runner.invoke(app, ["--data-dir", str(data_dir), "insert", "web"], input=f"{PASSWORD}\n{STRONG}\n{STRONG}\n")
        assert result.exit_code == 0, result.output
        assert "Seal" not in result.output
        assert read_entry(data_dir, "web") == Secret(password=STRONG)

    def test_weak_password_warning(self, data_dir: Path):
        """A weak password is stored with warnings."""
        (data_dir / "config.toml").write_text("no_confirm = true\n")
        result = runner.invoke(app, ["--data-dir", str(data_dir), "insert", "web"], input=f"{PASSWORD}\nabc\nabc\n")
        assert result.exit_code == 0, result.output
        assert "Warning: password is shorter than 12 characters" in result.output
        assert read_entry(data_dir, "web") == Secret(password="abc")


class TestInsertPiped:
    """insert with a document piped in."""

    @pytest.fixture(autouse=True)
    def piped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        content = b"pw\nrotate quarterly\n"
        monkeypatch.setattr(StdinSource, "capture", staticmethod(lambda: StdinSource(piped=True, content=content)))
        monkeypatch.setattr(insert_command, "is_interactive", lambda: False)

    def test_document_with_notes(self, data_dir: Path):
        """The piped document is stored as is, with no recipient question."""
        result = runner.invoke(app, ["--data-dir", str(data_dir), "insert", "web"], input=f"{PASSWORD}\n")
        assert result.exit_code == 0, result.output
        assert "Seal" not in result.output
        assert read_entry(data_dir, "web") == Secret(password="pw", body="rotate quarterly\n")

    def test_master_password_aborted(self, data_dir: Path, monkeypatch: pytest.MonkeyPatch):
        """Giving up at the master password prompt exits with the IO code."""

        def prompt(*_args: Any, **_kwargs: Any) -> str:
            raise typer.Abort

        monkeypatch.setattr(typer, "prompt", prompt)
        result = runner.invoke(app, ["--json", "--data-dir", str(data_dir), "insert", "web"])
        assert result.exit_code == 18
        assert json.loads(result.stdout)["error"] == "io"
