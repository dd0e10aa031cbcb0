"""Data access layer for the encrypted password store."""

import base64
import json
import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from cryptography.exceptions import InvalidTag

from mb_pass.confirm import Confirmation
from mb_pass.crypto import DEFAULT_N, P, R, Sealed, derive_key, new_salt, seal, unseal
from mb_pass.secret import ParseError, Secret

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreFile:
    """Decoded envelope of the encrypted store file."""

    salt: bytes
    n: int
    sealed: Sealed


@dataclass(frozen=True)
class HistoryRecord:
    """One logged write to the store."""

    name: str
    message: str
    timestamp: str


class StoreError(Exception):
    """Application-level error raised by Store operations."""

    def __init__(self, code: str, message: str) -> None:
        """Initialize with a machine-readable code and a human-readable message.

        Args:
            code: Machine-readable error code (e.g. "wrong_password").
            message: Human-readable error description.

        """
        super().__init__(message)
        self.code = code


class Store:
    """Password store backed by a single encrypted JSON file."""

    def __init__(self, store_path: Path, *, scrypt_n: int = DEFAULT_N, password_prompt: Callable[[], str] | None = None) -> None:
        """Initialize the store.

        Args:
            store_path: Path to the encrypted store file.
            scrypt_n: scrypt cost for newly written keys (init and change_password).
            password_prompt: Called once to unlock when a locked store is first accessed; may raise StoreError to give up.

        """
        self._store_path = store_path
        self._scrypt_n = scrypt_n
        self._password_prompt = password_prompt
        # _key, _salt and _n are kept so every write can re-seal without the password.
        self._key: bytes | None = None
        self._salt: bytes | None = None
        self._n: int | None = None
        self._payload: dict[str, Any] | None = None

    @property
    def path(self) -> Path:
        """Location of the store file."""
        return self._store_path

    @property
    def store_exists(self) -> bool:
        """Check if the encrypted store file exists."""
        return self._store_path.exists()

    # --- Password operations ---

    def init(self, password: str) -> None:
        """Create a new empty store.

        Raises:
            StoreError: Already exists (code: ``already_initialized``) or empty password (code: ``empty_password``).

        """
        if self.store_exists:
            raise StoreError("already_initialized", "Store already exists.")
        if not password:
            raise StoreError("empty_password", "Password cannot be empty.")
        self._store_path.parent.mkdir(parents=True, exist_ok=True, mode=0o700)
        self._store_path.parent.chmod(0o700)
        salt = new_salt()
        key = derive_key(password, salt, self._scrypt_n)
        plaintext = json.dumps({"entries": {}, "history": []}).encode()
        self._write_file(StoreFile(salt=salt, n=self._scrypt_n, sealed=seal(plaintext, key)))
        logger.info("Created store at %s", self._store_path)

    def change_password(self, old_password: str, new_password: str) -> None:
        """Re-seal the store under a new password.

        Raises:
            StoreError: Not initialized, wrong old password, or empty new password.

        """
        self._require_file()
        if not new_password:
            raise StoreError("empty_password", "New password cannot be empty.")
        store_file = self._read_file()
        _, plaintext = self._open(store_file, old_password)
        salt = new_salt()
        key = derive_key(new_password, salt, self._scrypt_n)
        self._write_file(StoreFile(salt=salt, n=self._scrypt_n, sealed=seal(plaintext, key)))
        self.lock()
        logger.info("Changed master password")

    # --- Lock / unlock ---

    def unlock(self, password: str) -> None:
        """Derive the key and hold decrypted entries in memory.

        Raises:
            StoreError: Not initialized, wrong password, or corrupted payload.

        """
        self._require_file()
        store_file = self._read_file()
        key, plaintext = self._open(store_file, password)
        try:
            payload = json.loads(plaintext)
        except json.JSONDecodeError:
            raise StoreError("corrupted", "Decrypted store is not valid JSON, store may be corrupted.") from None
        if not isinstance(payload, dict) or not isinstance(payload.get("entries"), dict):
            raise StoreError("corrupted", "Decrypted store has no entries table, store may be corrupted.")
        payload.setdefault("history", [])
        self._key = key
        self._salt = store_file.salt
        self._n = store_file.n
        self._payload = payload

    def lock(self) -> None:
        """Wipe key and entries from memory."""
        self._key = None
        self._salt = None
        self._n = None
        self._payload = None

    @property
    def is_unlocked(self) -> bool:
        """Check if the store is currently unlocked."""
        return self._key is not None and self._payload is not None

    # --- Entries (unlock on demand) ---

    def exists(self, name: str) -> bool:
        """Check whether an entry exists."""
        return name in self._entries()

    def get(self, name: str) -> Secret:
        """Load and parse an entry.

        Raises:
            StoreError: Entry missing (code: ``not_found``) or unreadable (code: ``corrupted``).

        """
        content = self._entries().get(name)
        if content is None:
            raise StoreError("not_found", f"Entry '{name}' not found.")
        try:
            return Secret.parse(content.encode())
        except ParseError as e:
            raise StoreError("corrupted", f"Entry '{name}' is unreadable: {e}") from e

    def set(self, name: str, secret: Secret, message: str) -> None:
        """Write an entry without asking for confirmation.

        Raises:
            StoreError: Empty name (code: ``empty_name``) or locked store.

        """
        if not name:
            raise StoreError("empty_name", "Entry name cannot be empty.")
        entries = self._entries()
        entries[name] = secret.serialize().decode()
        self._record(name, message)
        self._persist()
        logger.info("Wrote '%s': %s", name, message)

    def set_confirm(self, name: str, secret: Secret, message: str, confirm: Confirmation) -> None:
        """Write an entry after the confirmation policy approves the key holder.

        Raises:
            StoreError: Refused (code: ``not_confirmed``), plus everything ``set`` raises.

        """
        if not confirm.ask(f"Seal '{name}' for the key holder of {self._store_path}?"):
            raise StoreError("not_confirmed", "Recipient confirmation declined, nothing written.")
        self.set(name, secret, message)

    def list_names(self, prefix: str | None = None) -> list[str]:
        """List entry names, optionally limited to a prefix."""
        names = sorted(self._entries())
        if prefix:
            names = [n for n in names if n.startswith(prefix)]
        return names

    def delete(self, name: str, message: str = "Removed entry") -> bool:
        """Delete an entry and persist. Return True if it existed."""
        entries = self._entries()
        if name not in entries:
            return False
        del entries[name]
        self._record(name, message)
        self._persist()
        logger.info("Deleted '%s'", name)
        return True

    def history(self, name: str | None = None) -> list[HistoryRecord]:
        """Return logged writes, oldest first, optionally for one entry."""
        records = [HistoryRecord(**r) for r in self._unlocked_payload()["history"]]
        if name:
            records = [r for r in records if r.name == name]
        return records

    # --- Private helpers ---

    def _require_file(self) -> None:
        """Raise if the store file does not exist.

        Raises:
            StoreError: Not initialized (code: ``not_initialized``).

        """
        if not self.store_exists:
            raise StoreError("not_initialized", "Store is not initialized. Run 'mb-pass init' first.")

    def _entries(self) -> dict[str, str]:
        entries: dict[str, str] = self._unlocked_payload()["entries"]
        return entries

    def _unlocked_payload(self) -> dict[str, Any]:
        """Return the decrypted payload, unlocking via the password prompt if needed.

        Raises:
            StoreError: Locked with no way to unlock (code: ``locked``).

        """
        if not self.is_unlocked and self._password_prompt is not None:
            self._require_file()
            self.unlock(self._password_prompt())
        if self._payload is None:
            raise StoreError("locked", "Store is locked. Unlock it first.")
        return self._payload

    def _record(self, name: str, message: str) -> None:
        timestamp = datetime.now(UTC).isoformat(timespec="seconds")
        self._unlocked_payload()["history"].append({"name": name, "message": message, "timestamp": timestamp})

    def _open(self, store_file: StoreFile, password: str) -> tuple[bytes, bytes]:
        """Derive the key for a store file and decrypt it, returning both."""
        key = derive_key(password, store_file.salt, store_file.n)
        try:
            return key, unseal(store_file.sealed, key)
        except InvalidTag:
            raise StoreError("wrong_password", "Wrong password.") from None

    def _persist(self) -> None:
        """Re-seal and write the payload to disk.

        Raises:
            StoreError: Store is locked (code: ``locked``).

        """
        if self._key is None or self._salt is None or self._n is None or self._payload is None:
            raise StoreError("locked", "Store is locked. Unlock it first.")
        plaintext = json.dumps(self._payload).encode()
        self._write_file(StoreFile(salt=self._salt, n=self._n, sealed=seal(plaintext, self._key)))

    # --- File I/O ---

    def _read_file(self) -> StoreFile:
        """Read the encrypted store file and decode its envelope."""
        try:
            envelope = json.loads(self._store_path.read_text())
            return StoreFile(
                salt=base64.b64decode(envelope["kdf"]["salt"]),
                n=int(envelope["kdf"].get("n", DEFAULT_N)),
                sealed=Sealed(
                    nonce=base64.b64decode(envelope["encryption"]["nonce"]),
                    ciphertext=base64.b64decode(envelope["encryption"]["ciphertext"]),
                ),
            )
        except (ValueError, KeyError, TypeError) as e:
            raise StoreError("corrupted", f"Store file is malformed: {e}") from e

    def _write_file(self, store_file: StoreFile) -> None:
        """Write the encrypted store atomically with owner-only permissions."""
        envelope = {
            "kdf": {
                "algorithm": "scrypt",
                "salt": base64.b64encode(store_file.salt).decode(),
                "n": store_file.n,
                "r": R,
                "p": P,
            },
            "encryption": {
                "algorithm": "aes-256-gcm",
                "nonce": base64.b64encode(store_file.sealed.nonce).decode(),
                "ciphertext": base64.b64encode(store_file.sealed.ciphertext).decode(),
            },
        }
        tmp_path = self._store_path.with_suffix(".tmp")
        data = (json.dumps(envelope, indent=2) + "\n").encode()
        fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        try:
            os.write(fd, data)
        finally:
            os.close(fd)
        tmp_path.replace(self._store_path)
