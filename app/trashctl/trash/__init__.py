"""Trash and restore engine.

This package moves filesystem entries into the holding area, names them
without collisions, records batches, and reverses them on undo.
"""

from trashctl.trash.engine import TrashEngine
from trashctl.trash.history import HistoryStore
from trashctl.trash.mover import MoveMode, relocate
from trashctl.trash.namer import unique_name

__all__ = [
    "HistoryStore",
    "MoveMode",
    "TrashEngine",
    "relocate",
    "unique_name",
]
