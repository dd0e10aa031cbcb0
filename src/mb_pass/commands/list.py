"""List entry names."""

import typer

from mb_pass.app_context import use_context
from mb_pass.store import StoreError


def list_(ctx: typer.Context, prefix: str | None = typer.Argument(default=None, help="Only names starting with this prefix")) -> None:
    """List entry names, optionally under a prefix."""
    app = use_context(ctx)
    try:
        names = app.store.list_names(prefix)
    except StoreError as e:
        app.out.print_error_and_exit(e.code, str(e))
    app.out.print_list(names)
