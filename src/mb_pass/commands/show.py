"""Print an entry or one of its fields."""

import typer

from mb_pass.app_context import use_context
from mb_pass.store import StoreError


def show(
    ctx: typer.Context,
    name: str,
    key: str | None = typer.Argument(default=None, help="Print only this field ('password' for the first line)"),
) -> None:
    """Print a secret to stdout."""
    app = use_context(ctx)
    try:
        secret = app.store.get(name)
    except StoreError as e:
        app.out.print_error_and_exit(e.code, str(e))
    if key is None:
        app.out.print_secret(name, secret)
        return
    try:
        value = secret.value(key)
    except KeyError:
        app.out.print_error_and_exit("key_not_found", f"Entry '{name}' has no field '{key}'.")
    app.out.print_value(name, key, value)
