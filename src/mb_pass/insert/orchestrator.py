"""Insert flow: pick the input mode, acquire content, write it to the store."""

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass

from mb_pass.confirm import AlwaysConfirm, Confirmation
from mb_pass.insert.errors import InsertAborted, InsertError
from mb_pass.insert.guard import OverwriteGuard
from mb_pass.insert.modes import InputMode, select_mode
from mb_pass.insert.ports import Auditor, Editor, EntryStore, Prompter
from mb_pass.insert.source import StdinError, StdinSource
from mb_pass.secret import FieldSetError, ParseError, Secret
from mb_pass.store import StoreError
from mb_pass.terminal import EditorError, PromptError

logger = logging.getLogger(__name__)

MSG_FIELD = "Inserted YAML value from STDIN"
MSG_DOCUMENT = "Read secret from STDIN"
MSG_PASSWORD = "Inserted user supplied password"


def _store_failure(kind: str, message: str, error: StoreError) -> InsertError:
    """Map a store failure to an insert error; an aborted unlock prompt is an IO failure."""
    if error.code == "prompt_aborted":
        return InsertError("io", message)
    return InsertError(kind, message)


@dataclass(frozen=True)
class InsertResult:
    """Outcome of a successful insert."""

    name: str
    key: str | None
    mode: InputMode
    message: str


class Inserter:
    """Creates or updates one entry per call.

    All terminal, editor and audit side effects go through the injected
    collaborators, so the flow runs without a real terminal in tests.
    """

    def __init__(
        self,
        store: EntryStore,
        prompter: Prompter,
        editor: Editor,
        auditor: Auditor,
        *,
        stdin: Callable[[], StdinSource],
        interactive: bool,
        confirm: Confirmation,
        program: str = "mb-pass",
    ) -> None:
        """Initialize with collaborators.

        Args:
            store: Store receiving the entry.
            prompter: Terminal prompts.
            editor: External editor for multi-line input.
            auditor: Receives a newly prompted password for strength reporting.
            stdin: Inspects standard input; called once per insert.
            interactive: Whether a user is attached to the terminal.
            confirm: Recipient confirmation policy used unless the insert is forced.
            program: Program name for the usage message.

        """
        self._store = store
        self._prompter = prompter
        self._editor = editor
        self._auditor = auditor
        self._stdin = stdin
        self._interactive = interactive
        self._confirm = confirm
        self._program = program
        self._guard = OverwriteGuard(store, prompter)

    def insert(self, name: str | None, key: str | None = None, *, echo: bool = False, multiline: bool = False, force: bool = False) -> InsertResult:
        """Insert or update the entry ``name``, or just its field ``key``.

        Raises:
            InsertError: Any fatal failure, with the kind in ``code``.
            InsertAborted: The user declined to overwrite an existing entry.

        """
        if not name:
            raise InsertError("usage", f"Usage: {self._program} insert name")

        try:
            source = self._stdin()
        except StdinError as e:
            raise InsertError("io", str(e)) from e

        mode = select_mode(has_key=bool(key), piped=source.piped, multiline=multiline, interactive=self._interactive)
        logger.debug("Insert '%s' using %s", name, mode)
        confirm: Confirmation = AlwaysConfirm() if force else self._confirm

        if mode is InputMode.SINGLE_FIELD and key is not None:
            return self._insert_field(name, key, source)
        if mode is InputMode.FULL_DOCUMENT:
            return self._insert_document(name, source.content, confirm)

        if mode.guards_overwrite:
            try:
                proceed = self._guard.should_proceed(name, forced=force)
            except StoreError as e:
                raise _store_failure("store_read", f"failed to check '{name}': {e}", e) from e
            if not proceed:
                raise InsertAborted("not overwriting your current secret")

        if mode is InputMode.MULTILINE_EDITOR:
            return self._insert_from_editor(name, confirm)
        return self._insert_password(name, confirm, echo=echo)

    def _insert_field(self, name: str, key: str, source: StdinSource) -> InsertResult:
        context = f"failed to set key '{key}' of '{name}'"
        if source.piped:
            try:
                value = source.content.decode()
            except UnicodeDecodeError as e:
                raise InsertError("field_set", f"{context}: value is not valid UTF-8") from e
            value = value.removesuffix("\n").removesuffix("\r")
        else:
            try:
                value = self._prompter.ask_string(f"{name}:{key}")
            except PromptError as e:
                raise InsertError("io", f"failed to ask for user input: {e}") from e

        try:
            base = self._store.get(name) if self._store.exists(name) else Secret()
        except StoreError as e:
            raise _store_failure("store_read", f"{context}: {e}", e) from e
        try:
            secret = base.patch_field(key, value)
        except FieldSetError as e:
            raise InsertError("field_set", f"{context}: {e}") from e
        try:
            self._store.set(name, secret, MSG_FIELD)
        except StoreError as e:
            raise _store_failure("store_write", f"{context}: {e}", e) from e
        return InsertResult(name=name, key=key, mode=InputMode.SINGLE_FIELD, message=MSG_FIELD)

    def _insert_document(self, name: str, content: bytes, confirm: Confirmation) -> InsertResult:
        try:
            secret = Secret.parse(content)
        except ParseError as e:
            raise InsertError("parse", f"failed to set '{name}': {e}") from e
        try:
            self._store.set_confirm(name, secret, MSG_DOCUMENT, confirm)
        except StoreError as e:
            raise _store_failure("store_write", f"failed to set '{name}': {e}", e) from e
        return InsertResult(name=name, key=None, mode=InputMode.FULL_DOCUMENT, message=MSG_DOCUMENT)

    def _insert_from_editor(self, name: str, confirm: Confirmation) -> InsertResult:
        try:
            content = self._editor.edit(b"")
        except EditorError as e:
            raise InsertError("unknown", f"failed to start editor: {e}") from e
        try:
            secret = Secret.parse(content)
        except ParseError as e:
            raise InsertError("parse", f"failed to parse secret '{name}': {e}") from e
        # $EDITOR only labels the history entry; the editor itself is chosen by the collaborator
        message = f"{MSG_PASSWORD} with {os.environ.get('EDITOR', '')}"
        try:
            self._store.set_confirm(name, secret, message, confirm)
        except StoreError as e:
            raise _store_failure("store_write", f"failed to store secret '{name}': {e}", e) from e
        return InsertResult(name=name, key=None, mode=InputMode.MULTILINE_EDITOR, message=message)

    def _insert_password(self, name: str, confirm: Confirmation, *, echo: bool) -> InsertResult:
        prompt_fn = self._prompter.ask_string if echo else None
        try:
            password = self._prompter.ask_password(name, prompt_fn)
        except PromptError as e:
            raise InsertError("io", f"failed to ask for password: {e}") from e

        try:
            secret = Secret.from_password(password)
        except ParseError as e:
            raise InsertError("parse", f"failed to set '{name}': {e}") from e
        self._auditor(secret.password)
        try:
            self._store.set_confirm(name, secret, MSG_PASSWORD, confirm)
        except StoreError as e:
            raise _store_failure("store_write", f"failed to write secret '{name}': {e}", e) from e
        return InsertResult(name=name, key=None, mode=InputMode.PROMPTED_PASSWORD, message=MSG_PASSWORD)
