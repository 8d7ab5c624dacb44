"""History records for trash batches.

This module defines the immutable records written to the history log:
one TrashItem per relocated entry, one TrashBatch per trash invocation.
"""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any


@dataclass(frozen=True, slots=True)
class TrashItem:
    """Single filesystem entry moved into the holding area.

    Attributes:
        original_path: Absolute path the entry had before it was trashed.
        trashed_path: Absolute path inside the holding area.
        is_directory: Whether the entry was a directory (not a symlink to one).
    """

    original_path: str
    trashed_path: str
    is_directory: bool = False

    def __post_init__(self) -> None:
        """Validate item data after initialization."""
        if not self.original_path or not self.trashed_path:
            msg = "Trash item paths cannot be empty"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage."""
        return {
            "original_path": self.original_path,
            "trashed_path": self.trashed_path,
            "is_directory": self.is_directory,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TrashItem:
        """Deserialize from dictionary.

        Raises:
            KeyError: If required fields are missing.
            ValueError: If a path is empty or the flag is not a boolean.
        """
        is_directory = data.get("is_directory", False)
        if not isinstance(is_directory, bool):
            msg = f"is_directory must be a boolean, got {is_directory!r}"
            raise ValueError(msg)
        return cls(
            original_path=data["original_path"],
            trashed_path=data["trashed_path"],
            is_directory=is_directory,
        )


@dataclass(frozen=True, slots=True)
class TrashBatch:
    """Record of one trash invocation.

    Immutable data structure listing every entry that was actually moved,
    in the order the paths were supplied.

    Attributes:
        id: Sortable identifier derived from the creation time.
        timestamp: When the batch was created (ISO 8601 with timezone).
        items: Entries moved by this invocation.
    """

    id: str
    timestamp: str
    items: tuple[TrashItem, ...]

    def __post_init__(self) -> None:
        """Validate batch data after initialization."""
        if not self.id:
            msg = "Batch ID cannot be empty"
            raise ValueError(msg)
        if not self.timestamp:
            msg = "Timestamp cannot be empty"
            raise ValueError(msg)
        if not self.items:
            msg = "Batch must have at least one item"
            raise ValueError(msg)

    def with_items(self, items: list[TrashItem]) -> TrashBatch:
        """Return a copy of this batch holding only ``items``.

        Used to re-record the entries an undo could not restore.
        """
        return TrashBatch(id=self.id, timestamp=self.timestamp, items=tuple(items))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage."""
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "items": [item.to_dict() for item in self.items],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TrashBatch:
        """Deserialize from dictionary.

        Raises:
            KeyError: If required fields are missing.
            ValueError: If item data is invalid.
        """
        items = tuple(TrashItem.from_dict(item) for item in data["items"])
        return cls(
            id=data["id"],
            timestamp=data["timestamp"],
            items=items,
        )

    def to_json_line(self) -> str:
        """Serialize to JSON line for JSONL storage (no trailing newline)."""
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_json_line(cls, line: str) -> TrashBatch:
        """Deserialize from JSON line.

        Raises:
            json.JSONDecodeError: If line is not valid JSON.
            KeyError: If required fields are missing.
            ValueError: If data is invalid.
        """
        data = json.loads(line.strip())
        if not isinstance(data, dict):
            msg = "History line is not a JSON object"
            raise ValueError(msg)
        return cls.from_dict(data)


def create_trash_batch(items: list[TrashItem]) -> TrashBatch:
    """Factory function to create a new TrashBatch.

    The ID is the UTC creation time down to microseconds plus a short random
    tag, so IDs sort in creation order.

    Args:
        items: Entries moved by this invocation, in argument order.

    Returns:
        New TrashBatch with auto-generated ID and timestamp.

    Raises:
        ValueError: If items list is empty.
    """
    if not items:
        msg = "Cannot create trash batch with no items"
        raise ValueError(msg)

    now = datetime.now(UTC)
    return TrashBatch(
        id=f"{now:%Y%m%dT%H%M%S%f}-{uuid.uuid4().hex[:4]}",
        timestamp=now.isoformat(),
        items=tuple(items),
    )
