"""Undo command for restoring the last trashed batch.

This module provides the `trashctl undo` command for moving the entries of
the most recent batch back to where they came from.
"""

from typing import Annotated

import typer

from trashctl.cli.display import create_moves_table, format_timestamp, print_failures
from trashctl.cli.types import get_engine
from trashctl.models.report import PlannedMove, UndoReport, UndoStatus
from trashctl.utils.formatting import (
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    name="undo",
    help="Restore the last trashed batch.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def undo(
    ctx: typer.Context,
    explain: Annotated[
        bool,
        typer.Option(
            "--explain",
            "-e",
            help="Show what would be restored without restoring anything.",
        ),
    ] = False,
) -> None:
    """Restore the last trashed batch.

    Entries are restored in reverse order. Entries that cannot be restored
    stay in the trash and are undone by the next `trashctl undo`.

    Examples:
        trashctl undo              # Restore the last batch
        trashctl undo --explain    # Preview only
    """
    if ctx.invoked_subcommand is not None:
        return

    engine = get_engine(ctx)
    report = engine.undo(explain=explain)

    if report.status == UndoStatus.NOTHING_TO_UNDO:
        print_info("Nothing to undo.")
        return

    if report.batch is not None:
        _show_batch_header(report)

    if report.status == UndoStatus.PLANNED:
        console.print(create_moves_table(list(report.plan), "Planned Restores (Explain)"))
        print_info("Explain mode: no changes made.")
        return

    if report.restored:
        restored = {item.original_path for item in report.restored}
        moves = [move for move in report.plan if move.destination in restored]
        console.print(create_moves_table(moves, "Restored"))

    print_failures(list(report.failures))

    if report.persist_error is not None:
        print_error(f"History could not be updated: {report.persist_error}")
        if report.pending is not None:
            console.print(
                create_moves_table(_pending_moves(report), "Still in Trash (not recorded)")
            )
        raise typer.Exit(code=1)

    if report.status == UndoStatus.COMPLETE:
        print_success(f"Restored {len(report.restored)} item(s).")
        return

    pending = len(report.pending.items) if report.pending else 0
    print_warning(f"{pending} item(s) could not be restored and remain in the trash.")
    raise typer.Exit(code=1)


def _show_batch_header(report: UndoReport) -> None:
    """Print which batch is being undone."""
    assert report.batch is not None
    console.print(
        f"\n[bold]Undo batch {report.batch.id}[/bold] "
        f"[muted]({format_timestamp(report.batch.timestamp)}, "
        f"{len(report.batch.items)} item(s))[/muted]"
    )


def _pending_moves(report: UndoReport) -> list[PlannedMove]:
    assert report.pending is not None
    return [
        PlannedMove(item.trashed_path, item.original_path, item.is_directory)
        for item in report.pending.items
    ]

