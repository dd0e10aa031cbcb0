"""Delete an entry."""

import typer

from mb_pass.app_context import use_context
from mb_pass.store import StoreError


def delete(ctx: typer.Context, name: str) -> None:
    """Delete an entry."""
    app = use_context(ctx)
    try:
        existed = app.store.delete(name)
    except StoreError as e:
        app.out.print_error_and_exit(e.code, str(e))
    if not existed:
        app.out.print_error_and_exit("not_found", f"Entry '{name}' not found.")
    app.out.print_deleted(name)
