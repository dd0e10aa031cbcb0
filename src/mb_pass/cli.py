"""CLI entry point for mb-pass."""

import logging
from pathlib import Path
from typing import Annotated

import typer
from mm_clikit import TyperPlus

from mb_pass.app_context import AppContext, ask_master_password
from mb_pass.commands.change_password import change_password
from mb_pass.commands.delete import delete
from mb_pass.commands.history import history
from mb_pass.commands.init import init
from mb_pass.commands.insert import insert
from mb_pass.commands.list import list_
from mb_pass.commands.show import show
from mb_pass.config import Config
from mb_pass.log import setup_logging
from mb_pass.output import Output
from mb_pass.store import Store

app = TyperPlus(package_name="mb-pass")


@app.callback()
def callback(
    ctx: typer.Context,
    *,
    json_output: Annotated[bool, typer.Option("--json", help="Output results as JSON.")] = False,
    data_dir: Annotated[Path | None, typer.Option("--data-dir", help="Data directory path.")] = None,
) -> None:
    """Encrypted password store for the terminal."""
    cfg = Config.build(data_dir)
    cfg.data_dir.mkdir(parents=True, exist_ok=True)
    setup_logging(cfg.log_path, logging.DEBUG if cfg.debug else logging.INFO)
    store = Store(cfg.store_path, scrypt_n=cfg.scrypt_n, password_prompt=ask_master_password)
    ctx.obj = AppContext(out=Output(json_mode=json_output), store=store, cfg=cfg)


# Setup
app.command()(init)
app.command("change-password")(change_password)

# Entries
app.command()(insert)
app.command()(show)
app.command("list", aliases=["ls"])(list_)
app.command()(delete)
app.command()(history)
