"""Data models for trashctl.

This module exports the records written to history and the reports
returned by the engine.
"""

from trashctl.models.history import TrashBatch, TrashItem, create_trash_batch
from trashctl.models.report import (
    ItemFailure,
    PlannedMove,
    TrashReport,
    UndoReport,
    UndoStatus,
)

__all__ = [
    "ItemFailure",
    "PlannedMove",
    "TrashBatch",
    "TrashItem",
    "TrashReport",
    "UndoReport",
    "UndoStatus",
    "create_trash_batch",
]
