"""Password strength heuristics, reported as warnings only."""

import string

from mb_pass.output import Output

MIN_LENGTH = 12
MIN_CHAR_CLASSES = 3
MIN_SEQUENCE = 4

COMMON_PASSWORDS = frozenset(
    {
        "123456",
        "12345678",
        "123456789",
        "1234567890",
        "abc123",
        "admin",
        "dragon",
        "football",
        "iloveyou",
        "letmein",
        "monkey",
        "password",
        "password1",
        "qwerty",
        "qwertyuiop",
        "secret",
        "sunshine",
        "welcome",
    }
)

_SEQUENCES = (string.ascii_lowercase, string.digits, "qwertyuiopasdfghjklzxcvbnm")


def _char_classes(password: str) -> int:
    groups = (string.ascii_lowercase, string.ascii_uppercase, string.digits)
    count = sum(any(c in group for c in password) for group in groups)
    if any(not c.isalnum() for c in password):
        count += 1
    return count


def _is_sequence(password: str) -> bool:
    lowered = password.lower()
    if len(lowered) < MIN_SEQUENCE:
        return False
    return any(lowered in seq or lowered in seq[::-1] for seq in _SEQUENCES)


def check_password(password: str) -> list[str]:
    """Return warnings about a weak password; an empty list means no findings."""
    if not password:
        return ["password is empty"]
    warnings: list[str] = []
    if password.lower() in COMMON_PASSWORDS:
        warnings.append("password is a commonly used password")
    if len(set(password)) == 1:
        warnings.append("password repeats a single character")
    elif _is_sequence(password):
        warnings.append("password is a simple keyboard or alphabet sequence")
    if len(password) < MIN_LENGTH:
        warnings.append(f"password is shorter than {MIN_LENGTH} characters")
    if _char_classes(password) < MIN_CHAR_CLASSES:
        warnings.append("password mixes fewer than three kinds of characters")
    return warnings


def report_password_strength(password: str, out: Output) -> None:
    """Print strength warnings for ``password`` to stderr; never blocks the caller."""
    out.print_warnings(check_password(password))
