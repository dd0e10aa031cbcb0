"""Secret value: a primary line (the password) plus YAML fields or free-form notes.

Document layout::

    s3cr3t
    ---
    user: alice
    url: https://example.com

The first line is the password. When the next line is ``---`` the rest must
be a YAML mapping; any other text after the password is kept verbatim as
notes.
"""

from dataclasses import dataclass, field
from typing import Any

import yaml

# Field names addressing the document structure rather than a YAML key
RESERVED_FIELDS = frozenset({"password"})

_SEPARATOR = "---"


class ParseError(ValueError):
    """Raised when bytes do not form a valid secret document."""


class FieldSetError(ValueError):
    """Raised when a field cannot be set on a secret."""


@dataclass(frozen=True)
class Secret:
    """Immutable secret value; use the constructors below rather than mutating.

    A secret carries either YAML ``fields`` or a free-form ``body``, never both.
    """

    password: str = ""
    fields: dict[str, Any] = field(default_factory=dict)
    body: str = ""

    @staticmethod
    def from_password(password: str) -> "Secret":
        """Build a secret with the given primary line and nothing else.

        A trailing line ending is dropped.

        Raises:
            ParseError: The password spans more than one line.

        """
        password = password.removesuffix("\n").removesuffix("\r")
        if "\n" in password or "\r" in password:
            raise ParseError("password must be a single line")
        return Secret(password=password)

    @staticmethod
    def parse(data: bytes) -> "Secret":
        """Parse a full secret document.

        Raises:
            ParseError: Invalid UTF-8, invalid YAML, or a ``---`` section that is not a mapping with string keys.

        """
        try:
            text = data.decode()
        except UnicodeDecodeError as e:
            raise ParseError(f"secret is not valid UTF-8: {e}") from e

        password, _, body = text.partition("\n")
        password = password.removesuffix("\r")
        first, _, rest = body.partition("\n")
        if first.rstrip("\r") != _SEPARATOR:
            return Secret(password=password, body=body)

        try:
            loaded = yaml.safe_load(rest)
        except yaml.YAMLError as e:
            raise ParseError(f"invalid YAML body: {e}") from e
        if loaded is None:
            return Secret(password=password)
        if not isinstance(loaded, dict):
            raise ParseError(f"secret body must be a YAML mapping, got {type(loaded).__name__}")
        bad_keys = [k for k in loaded if not isinstance(k, str)]
        if bad_keys:
            raise ParseError(f"secret field names must be strings, got {bad_keys[0]!r}")
        return Secret(password=password, fields=dict(loaded))

    def serialize(self) -> bytes:
        """Render the secret as a document that ``parse`` reads back unchanged."""
        text = self.password + "\n"
        if self.fields:
            text += _SEPARATOR + "\n" + yaml.safe_dump(self.fields, sort_keys=False, allow_unicode=True)
        else:
            text += self.body
        return text.encode()

    def patch_field(self, key: str, value: str) -> "Secret":
        """Return a copy with one field set, leaving the rest untouched.

        Raises:
            FieldSetError: Empty key, a reserved field name, or a secret holding free-form notes.

        """
        if not key:
            raise FieldSetError("field name cannot be empty")
        if key in RESERVED_FIELDS:
            raise FieldSetError(f"'{key}' is reserved and cannot be set as a field")
        if self.body.strip():
            raise FieldSetError("secret has free-form notes, not YAML fields")
        return Secret(password=self.password, fields={**self.fields, key: value})

    def value(self, key: str) -> Any:
        """Return a field value, or the primary line for ``password``.

        Raises:
            KeyError: Field not present.

        """
        if key == "password":
            return self.password
        return self.fields[key]
