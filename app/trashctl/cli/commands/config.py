"""Config commands for inspecting and creating the configuration file.

Provides `trashctl config show` to print the effective roots and resolved
locations, and `trashctl config init` to write a config file.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from trashctl.core.config import TrashConfig, load_config, save_config
from trashctl.core.errors import ConfigError
from trashctl.core.paths import derive_roots, get_config_path
from trashctl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Inspect and create the trashctl configuration.",
    invoke_without_command=True,
    no_args_is_help=True,
)


def _config_path(ctx: typer.Context) -> Path | None:
    if isinstance(ctx.obj, dict):
        return ctx.obj.get("config_path")
    return None


def _describe(path: Path) -> str:
    return str(path) if path.exists() else f"{path} (not created yet)"


def _load(ctx: typer.Context) -> TrashConfig:
    try:
        return load_config(_config_path(ctx))
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective configuration and the locations derived from it."""
    config = _load(ctx)
    roots = derive_roots(config)

    table = Table(
        title="trashctl Configuration",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Setting", style="info")
    table.add_column("Value", overflow="fold")

    table.add_row("config file", str(_config_path(ctx) or get_config_path(config.home_root)))
    table.add_row("home_root", str(config.home_root))
    table.add_row("temp_root", str(config.temp_root))
    table.add_row("history log", _describe(roots.history_path))
    table.add_row("holding area", _describe(roots.holding_root))

    console.print(table)


@app.command()
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write the effective configuration to a config file."""
    config = _load(ctx)
    target = _config_path(ctx) or get_config_path(config.home_root)

    if target.exists() and not force:
        print_info(f"Config already exists: {target} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        saved = save_config(config, target)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Wrote config to {saved}")
