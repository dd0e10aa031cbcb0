"""Show the change log."""

import typer

from mb_pass.app_context import use_context
from mb_pass.store import StoreError


def history(ctx: typer.Context, name: str | None = typer.Argument(default=None, help="Only changes to this entry")) -> None:
    """Show recorded changes, oldest first."""
    app = use_context(ctx)
    try:
        records = app.store.history(name)
    except StoreError as e:
        app.out.print_error_and_exit(e.code, str(e))
    app.out.print_history(records)
