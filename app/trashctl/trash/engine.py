"""Trash and undo orchestration.

TrashEngine validates paths, names their holding-area destinations, moves
them, and records each invocation as one batch. Undo reverses the most
recent batch and re-records whatever could not be restored.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable
from pathlib import Path

from trashctl.core.config import TrashConfig
from trashctl.core.errors import ErrorKind, MoveError, PersistError, SetupError
from trashctl.core.paths import ResolvedRoots, resolve_roots
from trashctl.models.history import TrashBatch, TrashItem, create_trash_batch
from trashctl.models.report import (
    ItemFailure,
    PlannedMove,
    TrashReport,
    UndoReport,
    UndoStatus,
)
from trashctl.trash.history import HistoryStore
from trashctl.trash.mover import MoveMode, relocate
from trashctl.trash.namer import unique_name

logger = logging.getLogger(__name__)

Mover = Callable[[Path, Path, MoveMode], None]


class TrashEngine:
    """Runs trash and undo requests against one holding area.

    Relocation is sequential in argument order. The history log is written
    once per request, after every item has been attempted.

    Attributes:
        roots: Resolved holding area and history locations.
    """

    def __init__(
        self,
        roots: ResolvedRoots,
        store: HistoryStore | None = None,
        mover: Mover = relocate,
    ) -> None:
        """Initialize the engine and load the history log.

        If the holding area had to be created from scratch while the log still
        lists batches, those batches point at content that no longer exists
        (typically the temp directory was wiped on reboot) and the log is reset.

        Args:
            roots: Locations produced by resolve_roots().
            store: History store to use. Default: one on roots.history_path.
            mover: Relocation function. Default: trashctl.trash.mover.relocate.

        Raises:
            SetupError: If the history log cannot be read or reset.
        """
        self.roots = roots
        self._store = store if store is not None else HistoryStore(roots.history_path)
        self._mover = mover

        try:
            batches = self._store.load()
            if roots.holding_root_created and batches:
                logger.warning(
                    "Holding area %s was recreated; discarding %d stale history batch(es)",
                    roots.holding_root,
                    len(batches),
                )
                self._store.clear()
        except PersistError as e:
            raise SetupError(str(e)) from e

    @classmethod
    def from_config(cls, config: TrashConfig) -> TrashEngine:
        """Create an engine for the roots derived from ``config``.

        Raises:
            SetupError: If the roots cannot be created or the log cannot be read.
        """
        return cls(resolve_roots(config))

    @property
    def holding_root(self) -> Path:
        """Directory trashed entries are moved into."""
        return self.roots.holding_root

    def history(self) -> list[TrashBatch]:
        """Return every recorded batch, oldest first."""
        return self._store.list()

    def trash(
        self,
        paths: Iterable[str | Path],
        explain: bool = False,
        verbose: bool = False,
    ) -> TrashReport:
        """Move ``paths`` into the holding area and record them as one batch.

        Invalid paths and failed moves are reported per item and never stop
        the remaining paths. In explain mode destinations are computed exactly
        as for a real run, but nothing is moved or recorded.

        Args:
            paths: Already-expanded paths, in the order they should be recorded.
            explain: Compute the plan only.
            verbose: Log each move at INFO instead of DEBUG.

        Returns:
            TrashReport with moved items, failures, and the computed plan.
        """
        log_move = logger.info if verbose else logger.debug

        items: list[TrashItem] = []
        failures: list[ItemFailure] = []
        plan: list[PlannedMove] = []
        seen: set[Path] = set()
        taken: set[str] = set()

        for raw in paths:
            source, error = self._validate(raw, seen)
            if source is None:
                failures.append(ItemFailure(str(raw), ErrorKind.VALIDATION, error))
                logger.warning("Skipping %s: %s", raw, error)
                continue
            seen.add(source)

            try:
                name = unique_name(self.holding_root, source.name, taken)
            except ValueError as e:
                failures.append(ItemFailure(str(raw), ErrorKind.MOVE, str(e)))
                continue
            taken.add(name)

            destination = self.holding_root / name
            is_directory = source.is_dir() and not source.is_symlink()
            plan.append(PlannedMove(str(source), str(destination), is_directory))
            log_move("Moving %s to %s", source, destination)

            if explain:
                continue

            try:
                self._mover(source, destination, MoveMode.TRASH)
            except (MoveError, OSError) as e:
                failures.append(ItemFailure(str(raw), _failure_kind(e), str(e)))
                logger.warning("Failed to trash %s: %s", source, e)
                continue

            items.append(TrashItem(str(source), str(destination), is_directory))

        if explain or not items:
            return TrashReport(failures=tuple(failures), plan=tuple(plan), explain=explain)

        batch = create_trash_batch(items)
        try:
            self._store.append(batch)
        except PersistError as e:
            logger.error(
                "%d item(s) moved into %s but history could not be written: %s",
                len(items),
                self.holding_root,
                e,
            )
            return TrashReport(
                items=tuple(items),
                failures=tuple(failures),
                plan=tuple(plan),
                batch=batch,
                persist_error=str(e),
            )

        return TrashReport(
            items=tuple(items),
            failures=tuple(failures),
            plan=tuple(plan),
            batch=batch,
        )

    def undo(self, explain: bool = False) -> UndoReport:
        """Restore the most recent batch.

        Items are restored in reverse trashing order. Items that cannot be
        restored are recorded again as a batch of their own so a later undo
        can retry them.

        Args:
            explain: Compute the restores only; the log is left untouched.

        Returns:
            UndoReport describing what was restored and what is still pending.
        """
        if explain:
            batch = self._store.peek_last()
        else:
            try:
                batch = self._store.pop_last()
            except PersistError as e:
                logger.error("Cannot update history, nothing restored: %s", e)
                return UndoReport(status=UndoStatus.FAILED, persist_error=str(e))

        if batch is None:
            logger.debug("History is empty, nothing to undo")
            return UndoReport(status=UndoStatus.NOTHING_TO_UNDO, explain=explain)

        restored: list[TrashItem] = []
        pending: list[TrashItem] = []
        failures: list[ItemFailure] = []
        plan: list[PlannedMove] = []

        for item in reversed(batch.items):
            plan.append(PlannedMove(item.trashed_path, item.original_path, item.is_directory))
            logger.info("Restoring %s to %s", item.trashed_path, item.original_path)

            if explain:
                continue

            try:
                self._restore(item)
            except (MoveError, OSError) as e:
                pending.append(item)
                failures.append(ItemFailure(item.original_path, _failure_kind(e), str(e)))
                logger.warning("Failed to restore %s: %s", item.original_path, e)
                continue

            restored.append(item)

        if explain:
            return UndoReport(
                status=UndoStatus.PLANNED,
                plan=tuple(plan),
                batch=batch,
                explain=True,
            )

        if not pending:
            return UndoReport(
                status=UndoStatus.COMPLETE,
                restored=tuple(restored),
                plan=tuple(plan),
                batch=batch,
            )

        remaining = batch.with_items(list(reversed(pending)))
        persist_error: str | None = None
        try:
            self._store.append(remaining)
        except PersistError as e:
            persist_error = str(e)
            logger.error(
                "%d item(s) remain in %s but could not be re-recorded: %s",
                len(pending),
                self.holding_root,
                e,
            )

        return UndoReport(
            status=UndoStatus.PARTIAL if restored else UndoStatus.FAILED,
            restored=tuple(restored),
            failures=tuple(failures),
            plan=tuple(plan),
            batch=batch,
            pending=remaining,
            persist_error=persist_error,
        )

    def _restore(self, item: TrashItem) -> None:
        """Move one item back to its original path.

        Raises:
            MoveError: If the trashed entry is gone or changed type, or the
                move fails.
        """
        trashed = Path(item.trashed_path)
        original = Path(item.original_path)

        if os.path.lexists(trashed):
            is_directory = trashed.is_dir() and not trashed.is_symlink()
            if is_directory != item.is_directory:
                expected = "directory" if item.is_directory else "non-directory"
                raise MoveError(
                    f"Trashed entry {trashed} is no longer a {expected}",
                    item.trashed_path,
                    item.original_path,
                )

        self._mover(trashed, original, MoveMode.RESTORE)

    def _validate(self, raw: str | Path, seen: set[Path]) -> tuple[Path | None, str]:
        """Check that ``raw`` can be trashed.

        Returns:
            (absolute path, "") when valid, otherwise (None, reason). The
            absolute path keeps a trailing symlink unresolved so the link
            itself is trashed, not its target.
        """
        text = str(raw)
        if not text:
            return None, "Empty path"

        path = Path(os.path.abspath(text))
        if not path.name:
            return None, "Refusing to trash the filesystem root"
        if not os.path.lexists(path):
            return None, "No such file or directory"

        source = path.parent.resolve() / path.name
        if source in seen:
            return None, "Path listed more than once"

        holding_root = self.roots.holding_root
        history_path = self.roots.history_path
        if source == holding_root or holding_root in source.parents:
            return None, f"Path is inside the holding area {holding_root}"
        if source in holding_root.parents:
            return None, f"Path contains the holding area {holding_root}"
        if source == history_path or source in history_path.parents:
            return None, f"Path contains the history log {history_path}"

        if not os.access(source.parent, os.W_OK | os.X_OK):
            return None, f"Permission denied: cannot remove entries from {source.parent}"

        return source, ""


def _failure_kind(error: MoveError | OSError) -> ErrorKind:
    return error.kind if isinstance(error, MoveError) else ErrorKind.MOVE
