"""Put command for moving entries into the trash.

This module provides the `trashctl put` command, which relocates files
and directories into the holding area and records them for undo.
"""

from typing import Annotated

import typer

from trashctl.cli.display import create_moves_table, print_failures, print_unrecorded
from trashctl.cli.types import expand_patterns, get_engine
from trashctl.utils.formatting import console, print_error, print_info, print_success


def put(
    ctx: typer.Context,
    patterns: Annotated[
        list[str],
        typer.Argument(
            help="Files or directories to trash. Glob patterns are expanded.",
            show_default=False,
        ),
    ],
    explain: Annotated[
        bool,
        typer.Option(
            "--explain",
            "-e",
            help="Show what would be moved without moving anything.",
        ),
    ] = False,
) -> None:
    """Move files or directories into the trash.

    Everything moved by one call is recorded as a single batch that
    `trashctl undo` restores in one step.

    Examples:
        trashctl put notes.txt build/     # Trash a file and a directory
        trashctl put '*.log'              # Trash every match of a pattern
        trashctl put -e '*.tmp'           # Preview only
    """
    verbose = bool(ctx.obj.get("verbose")) if isinstance(ctx.obj, dict) else False

    engine = get_engine(ctx)
    report = engine.trash(expand_patterns(patterns), explain=explain, verbose=verbose)

    if report.explain:
        if report.plan:
            console.print(create_moves_table(list(report.plan), "Planned Moves (Explain)"))
        print_failures(list(report.failures))
        print_info("Explain mode: no changes made.")
        if report.failures:
            raise typer.Exit(code=1)
        return

    if report.items and verbose:
        trashed = {item.trashed_path for item in report.items}
        moved = [move for move in report.plan if move.destination in trashed]
        console.print(create_moves_table(moved, "Moved"))

    print_failures(list(report.failures))

    if report.persist_error is not None:
        print_unrecorded(list(report.items), report.persist_error, str(engine.holding_root))
        raise typer.Exit(code=1)

    if report.items:
        print_success(f"Trashed {len(report.items)} item(s).")
    else:
        print_error("Nothing was trashed.")

    if report.failures:
        raise typer.Exit(code=1)
