"""History command for viewing trashed batches.

This module provides the `trashctl history` command for listing the
batches that `trashctl undo` can still restore.
"""

import json
from typing import Annotated

import typer

from trashctl.cli.display import create_history_table
from trashctl.cli.types import get_engine
from trashctl.utils.formatting import console, print_info

app = typer.Typer(
    name="history",
    help="View trashed batches.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def history(
    ctx: typer.Context,
    limit: Annotated[
        int,
        typer.Option(
            "--limit",
            "-n",
            min=1,
            help="Maximum number of batches to show.",
        ),
    ] = 20,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """Show trashed batches, newest first.

    Each batch is one `trashctl put` call. `trashctl undo` restores the
    batch at the top of this list.

    Examples:
        trashctl history            # Show the last 20 batches
        trashctl history -n 5       # Show the last 5 batches
        trashctl history --json     # JSON output for scripting
    """
    if ctx.invoked_subcommand is not None:
        return

    engine = get_engine(ctx)
    batches = engine.history()

    if not batches:
        if json_output:
            typer.echo("[]")
        else:
            print_info("Trash history is empty.")
        return

    numbered = list(enumerate(batches, start=1))
    numbered.reverse()
    numbered = numbered[:limit]

    if json_output:
        output = [batch.to_dict() for _, batch in numbered]
        typer.echo(json.dumps(output, indent=2))
        return

    console.print(create_history_table(numbered))
    if len(numbered) < len(batches):
        console.print(f"[muted](showing {len(numbered)} of {len(batches)} batches)[/muted]")
