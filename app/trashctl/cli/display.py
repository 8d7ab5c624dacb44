"""Shared Rich display functions for engine reports.

Provides table builders and summary printers used by the put, undo, and
history commands.
"""

from datetime import datetime

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from trashctl.models.history import TrashBatch, TrashItem
from trashctl.models.report import ItemFailure, PlannedMove
from trashctl.utils.formatting import err_console


def create_moves_table(moves: list[PlannedMove], title: str) -> Table:
    """Create a Rich table listing relocations.

    Args:
        moves: Relocations to display, in execution order.
        title: Table title.

    Returns:
        Rich Table with From, To, and Type columns.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("From", style="source", overflow="fold")
    table.add_column("To", style="destination", overflow="fold")
    table.add_column("Type", width=5, style="muted")

    for move in moves:
        table.add_row(
            escape(move.source),
            escape(move.destination),
            "dir" if move.is_directory else "file",
        )

    return table


def print_failures(failures: list[ItemFailure]) -> None:
    """Print per-item failures to stderr.

    Args:
        failures: Failures to list. Nothing is printed when empty.
    """
    if not failures:
        return

    err_console.print(f"\n[error]Failed ({len(failures)}):[/error]")
    for failure in failures:
        err_console.print(f"  - {escape(failure.path)} [muted]({failure.kind.value})[/muted]")
        err_console.print(f"    {failure.message}", markup=False)


def print_unrecorded(items: list[TrashItem], error: str, holding_root: str) -> None:
    """Print a prominent notice about moves that are missing from history.

    The entries are safe in the holding area but ``undo`` will not find
    them, so every location is listed for manual recovery.

    Args:
        items: Entries that were moved but not recorded.
        error: Persistence error message.
        holding_root: Holding area directory.
    """
    lines = [
        "History could not be written. These entries were moved but are NOT",
        "recorded, so undo cannot restore them. Move them back by hand:",
        "",
    ]
    lines.extend(f"  {item.trashed_path} -> {item.original_path}" for item in items)
    lines.extend(["", f"Holding area: {holding_root}", f"Cause: {error}"])

    err_console.print(
        Panel(
            Text("\n".join(lines)),
            title="[error]Unrecorded moves[/error]",
            border_style="error",
            expand=False,
        )
    )


def create_history_table(batches: list[tuple[int, TrashBatch]]) -> Table:
    """Create a Rich table of history batches.

    Args:
        batches: (position, batch) pairs to display, in the order given.
            Position 1 is the oldest recorded batch.

    Returns:
        Rich Table with one row per batch.
    """
    table = Table(
        title="Trash History",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("#", justify="right", style="muted")
    table.add_column("ID", style="muted")
    table.add_column("Timestamp", style="info")
    table.add_column("Items", justify="right")
    table.add_column("Paths", overflow="fold")

    for index, batch in batches:
        count = len(batch.items)
        names = ", ".join(item.original_path for item in batch.items[:3])
        if count > 3:
            names += f" (+{count - 3} more)"

        table.add_row(
            str(index),
            batch.id,
            format_timestamp(batch.timestamp),
            str(count),
            escape(names),
        )

    return table


def format_timestamp(iso_timestamp: str) -> str:
    """Format ISO timestamp for display.

    Args:
        iso_timestamp: ISO format timestamp string.

    Returns:
        Formatted timestamp string (YYYY-MM-DD HH:MM:SS), or the input
        unchanged if it cannot be parsed.
    """
    try:
        dt = datetime.fromisoformat(iso_timestamp.replace("Z", "+00:00"))
    except ValueError:
        return iso_timestamp
    return dt.strftime("%Y-%m-%d %H:%M:%S")
