"""Durable history log of trash batches.

This module provides the HistoryStore class for persisting trash batches
in a JSONL file, one batch per line, oldest first.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from tempfile import NamedTemporaryFile

from trashctl.core.errors import PersistError
from trashctl.models.history import TrashBatch

logger = logging.getLogger(__name__)


class HistoryStore:
    """Owns the history log and every write to it.

    The log is read once on first access and kept in memory. Every mutation
    rewrites the whole log to a temporary file next to it and renames that
    file over the canonical path, so a reader only ever sees a complete log.
    The in-memory copy is updated only after the rename succeeded.

    Attributes:
        history_path: Path of the JSONL log file.
    """

    def __init__(self, history_path: Path) -> None:
        """Initialize HistoryStore.

        Args:
            history_path: Path of the JSONL log. Its parent must exist.
        """
        self._history_path = history_path
        self._batches: list[TrashBatch] | None = None

    @property
    def history_path(self) -> Path:
        """Path to the history log file."""
        return self._history_path

    def load(self) -> list[TrashBatch]:
        """Read the persisted log from disk.

        A missing file is the first-run state and yields an empty log.
        Lines that cannot be parsed are skipped with a warning.

        Returns:
            Batches in recorded order (oldest first).

        Raises:
            PersistError: If the file exists but cannot be read.
        """
        if not self._history_path.exists():
            self._batches = []
            return []

        batches: list[TrashBatch] = []
        skipped = 0

        try:
            with self._history_path.open(encoding="utf-8") as f:
                for line_num, line in enumerate(f, start=1):
                    line = line.strip()
                    if not line:
                        continue

                    try:
                        batches.append(TrashBatch.from_json_line(line))
                    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
                        logger.warning(
                            "Skipping corrupt history line %d: %s",
                            line_num,
                            str(e),
                        )
                        skipped += 1
        except (OSError, UnicodeDecodeError) as e:
            raise PersistError(f"Cannot read history log {self._history_path}: {e}") from e

        if skipped:
            logger.error(
                "%d unreadable line(s) in %s will be dropped the next time the log is written",
                skipped,
                self._history_path,
            )

        self._batches = batches
        return list(batches)

    def list(self) -> list[TrashBatch]:
        """Return all batches, oldest first, without modifying the log."""
        return list(self._current())

    def peek_last(self) -> TrashBatch | None:
        """Return the most recent batch without removing it."""
        batches = self._current()
        return batches[-1] if batches else None

    def append(self, batch: TrashBatch) -> None:
        """Durably add a batch to the end of the log.

        Raises:
            PersistError: If the log cannot be written.
        """
        self._write([*self._current(), batch])
        logger.debug("Recorded batch %s (%d items)", batch.id, len(batch.items))

    def pop_last(self) -> TrashBatch | None:
        """Durably remove the most recent batch and return it.

        Returns:
            The removed batch, or None if the log is empty.

        Raises:
            PersistError: If the log cannot be written. The batch stays recorded.
        """
        batches = self._current()
        if not batches:
            return None

        last = batches[-1]
        self._write(batches[:-1])
        logger.debug("Removed batch %s from history", last.id)
        return last

    def clear(self) -> None:
        """Durably reset the log to empty.

        Raises:
            PersistError: If the log cannot be written.
        """
        self._write([])

    def _current(self) -> list[TrashBatch]:
        if self._batches is None:
            self.load()
        assert self._batches is not None
        return self._batches

    def _write(self, batches: list[TrashBatch]) -> None:
        """Atomically replace the log with ``batches``.

        Raises:
            PersistError: If the temporary file cannot be written or promoted.
        """
        tmp_path: Path | None = None
        try:
            with NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=self._history_path.parent,
                prefix=f".{self._history_path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_path = Path(f.name)
                for batch in batches:
                    f.write(batch.to_json_line() + "\n")
                f.flush()
                os.fsync(f.fileno())
            # os.replace() is atomic on POSIX
            os.replace(str(tmp_path), str(self._history_path))
        except OSError as e:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            raise PersistError(f"Cannot write history log {self._history_path}: {e}") from e

        self._batches = list(batches)
