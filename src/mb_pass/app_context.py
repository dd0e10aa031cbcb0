"""Application context shared across CLI commands."""

from dataclasses import dataclass

import typer

from mb_pass.config import Config
from mb_pass.output import Output
from mb_pass.store import Store, StoreError


@dataclass(frozen=True, slots=True)
class AppContext:
    """Shared application state passed through Typer context."""

    out: Output
    store: Store
    cfg: Config


def use_context(ctx: typer.Context) -> AppContext:
    """Extract application context from Typer context."""
    result: AppContext = ctx.obj
    return result


def ask_master_password() -> str:
    """Prompt for the master password (hidden input).

    Raises:
        StoreError: The prompt was aborted (code: ``prompt_aborted``).

    """
    try:
        password: str = typer.prompt("Enter master password", hide_input=True)
    except typer.Abort as e:
        raise StoreError("prompt_aborted", "Master password entry aborted, store stays locked.") from e
    return password

