"""Insert a new entry or update one field of an existing entry."""

from typing import Annotated

import typer

from mb_pass.app_context import use_context
from mb_pass.audit import report_password_strength
from mb_pass.confirm import AlwaysConfirm, AskConfirmation, Confirmation
from mb_pass.insert import InsertAborted, InsertError, Inserter, StdinSource
from mb_pass.terminal import TerminalEditor, TerminalPrompter, is_interactive


def insert(
    ctx: typer.Context,
    name: Annotated[str | None, typer.Argument(help="Entry name")] = None,
    key: Annotated[str | None, typer.Argument(help="Update only this YAML field")] = None,
    *,
    echo: Annotated[bool, typer.Option("--echo", "-e", help="Show the password while typing.")] = False,
    multiline: Annotated[bool, typer.Option("--multiline", "-m", help="Write the whole entry in $EDITOR.")] = False,
    force: Annotated[bool, typer.Option("--force", "-f", help="Overwrite without asking.")] = False,
) -> None:
    """Insert a new secret, from stdin, a prompt, or an editor."""
    app = use_context(ctx)
    prompter = TerminalPrompter()
    interactive = is_interactive()
    # Recipient confirmation needs a user at the terminal
    ask = interactive and not app.cfg.no_confirm
    confirm: Confirmation = AskConfirmation(prompter.ask_confirmation) if ask else AlwaysConfirm()
    inserter = Inserter(
        app.store,
        prompter,
        TerminalEditor(app.cfg.editor),
        lambda password: report_password_strength(password, app.out),
        stdin=StdinSource.capture,
        interactive=interactive,
        confirm=confirm,
    )
    try:
        result = inserter.insert(name, key, echo=echo, multiline=multiline, force=force)
    except InsertAborted as e:
        app.out.print_aborted_and_exit(str(e), e.exit_code)
    except InsertError as e:
        app.out.print_error_and_exit(e.code, str(e), e.exit_code)
    app.out.print_inserted(result.name, result.key, result.mode)
