"""Result types returned by the trash engine.

Reports are plain data. The engine never renders them; the CLI decides
how to present successes, per-item failures, and persistence problems.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from trashctl.core.errors import ErrorKind
from trashctl.models.history import TrashBatch, TrashItem


@dataclass(frozen=True, slots=True)
class PlannedMove:
    """One relocation computed by the engine.

    Attributes:
        source: Path the entry is moved from.
        destination: Path the entry is moved to.
        is_directory: Whether the entry is a directory.
    """

    source: str
    destination: str
    is_directory: bool = False


@dataclass(frozen=True, slots=True)
class ItemFailure:
    """A single path that could not be trashed or restored.

    Attributes:
        path: Path as supplied by the caller (or the original path on undo).
        kind: Failure category.
        message: Human-readable error description.
    """

    path: str
    kind: ErrorKind
    message: str


@dataclass(frozen=True, slots=True)
class TrashReport:
    """Outcome of a trash invocation.

    Attributes:
        items: Entries that were moved (empty in explain mode).
        failures: Paths that failed validation or could not be moved.
        plan: Every computed relocation, whether executed or not.
        batch: The recorded batch, None if nothing was recorded.
        explain: Whether this was an explain (dry) run.
        persist_error: Set when entries moved but the history log could not
            be written. Those entries are listed in ``items``.
    """

    items: tuple[TrashItem, ...] = ()
    failures: tuple[ItemFailure, ...] = ()
    plan: tuple[PlannedMove, ...] = ()
    batch: TrashBatch | None = None
    explain: bool = False
    persist_error: str | None = None

    @property
    def recorded(self) -> bool:
        """Whether a batch was written to history."""
        return self.batch is not None and self.persist_error is None

    @property
    def success(self) -> bool:
        """True when every supplied path was handled without error."""
        return not self.failures and self.persist_error is None


class UndoStatus(str, Enum):
    """Overall outcome of an undo invocation.

    Attributes:
        NOTHING_TO_UNDO: History log was empty.
        COMPLETE: Every item of the last batch was restored.
        PARTIAL: Some items were restored; the rest stay recorded.
        FAILED: No item was restored.
        PLANNED: Explain run; restores were computed but not executed.
    """

    NOTHING_TO_UNDO = "nothing_to_undo"
    COMPLETE = "complete"
    PARTIAL = "partial"
    FAILED = "failed"
    PLANNED = "planned"


@dataclass(frozen=True, slots=True)
class UndoReport:
    """Outcome of an undo invocation.

    Attributes:
        status: Overall outcome.
        restored: Items moved back to their original location.
        failures: Items that could not be restored.
        plan: Every computed restore, in execution order.
        batch: The batch that was undone, None if the log was empty.
        pending: Batch re-recorded with the items still in the holding area.
        explain: Whether this was an explain (dry) run.
        persist_error: Set when the history log could not be updated.
    """

    status: UndoStatus
    restored: tuple[TrashItem, ...] = ()
    failures: tuple[ItemFailure, ...] = ()
    plan: tuple[PlannedMove, ...] = ()
    batch: TrashBatch | None = None
    pending: TrashBatch | None = None
    explain: bool = False
    persist_error: str | None = None

    @property
    def success(self) -> bool:
        """True when nothing failed (an empty log counts as success)."""
        return (
            self.status
            in (UndoStatus.COMPLETE, UndoStatus.NOTHING_TO_UNDO, UndoStatus.PLANNED)
            and self.persist_error is None
        )
