"""Unit tests for history records.

Tests for TrashItem, TrashBatch, and the create_trash_batch factory.
"""

import json
from datetime import datetime

import pytest
from trashctl.models.history import TrashBatch, TrashItem, create_trash_batch


@pytest.fixture
def item() -> TrashItem:
    """A single trashed file."""
    return TrashItem(
        original_path="/home/user/notes.txt",
        trashed_path="/tmp/trashctl/notes.txt",
    )


@pytest.fixture
def dir_item() -> TrashItem:
    """A single trashed directory."""
    return TrashItem(
        original_path="/home/user/build",
        trashed_path="/tmp/trashctl/build",
        is_directory=True,
    )


class TestTrashItem:
    """Tests for TrashItem."""

    def test_defaults_to_non_directory(self, item: TrashItem) -> None:
        """is_directory defaults to False."""
        assert item.is_directory is False

    def test_is_frozen(self, item: TrashItem) -> None:
        """TrashItem is immutable."""
        with pytest.raises(AttributeError):
            item.trashed_path = "/elsewhere"  # type: ignore[misc]

    @pytest.mark.parametrize(
        ("original", "trashed"),
        [("", "/tmp/trashctl/a"), ("/home/user/a", "")],
    )
    def test_empty_paths_rejected(self, original: str, trashed: str) -> None:
        """Both paths are required."""
        with pytest.raises(ValueError, match="cannot be empty"):
            TrashItem(original_path=original, trashed_path=trashed)

    def test_to_dict(self, dir_item: TrashItem) -> None:
        """to_dict includes every field."""
        assert dir_item.to_dict() == {
            "original_path": "/home/user/build",
            "trashed_path": "/tmp/trashctl/build",
            "is_directory": True,
        }

    def test_from_dict_missing_flag(self) -> None:
        """A missing directory flag reads as False."""
        result = TrashItem.from_dict({"original_path": "/a", "trashed_path": "/t/a"})
        assert result.is_directory is False

    def test_from_dict_rejects_non_bool_flag(self) -> None:
        """A non-boolean directory flag is rejected."""
        with pytest.raises(ValueError, match="boolean"):
            TrashItem.from_dict({"original_path": "/a", "trashed_path": "/t/a", "is_directory": 1})

    def test_from_dict_missing_path(self) -> None:
        """Missing paths raise KeyError."""
        with pytest.raises(KeyError):
            TrashItem.from_dict({"original_path": "/a"})


class TestTrashBatch:
    """Tests for TrashBatch."""

    def test_requires_items(self) -> None:
        """A batch without items is rejected."""
        with pytest.raises(ValueError, match="at least one item"):
            TrashBatch(id="b1", timestamp="2026-01-01T00:00:00+00:00", items=())

    def test_requires_id(self, item: TrashItem) -> None:
        """A batch without an id is rejected."""
        with pytest.raises(ValueError, match="ID"):
            TrashBatch(id="", timestamp="2026-01-01T00:00:00+00:00", items=(item,))

    def test_json_line_is_single_line(self, item: TrashItem, dir_item: TrashItem) -> None:
        """to_json_line produces compact JSON without newlines."""
        batch = TrashBatch(id="b1", timestamp="2026-01-01T00:00:00+00:00", items=(item, dir_item))

        line = batch.to_json_line()

        assert "\n" not in line
        assert json.loads(line)["items"][1]["is_directory"] is True

    def test_json_line_roundtrip(self, item: TrashItem, dir_item: TrashItem) -> None:
        """from_json_line restores an equal batch, item order included."""
        batch = TrashBatch(id="b1", timestamp="2026-01-01T00:00:00+00:00", items=(item, dir_item))

        assert TrashBatch.from_json_line(batch.to_json_line() + "\n") == batch

    def test_from_json_line_rejects_non_object(self) -> None:
        """A JSON value that is not an object is rejected."""
        with pytest.raises(ValueError):
            TrashBatch.from_json_line("[1, 2]")

    def test_with_items_keeps_identity(self, item: TrashItem, dir_item: TrashItem) -> None:
        """with_items keeps id and timestamp and replaces the items."""
        batch = TrashBatch(id="b1", timestamp="2026-01-01T00:00:00+00:00", items=(item, dir_item))

        partial = batch.with_items([dir_item])

        assert partial.id == "b1"
        assert partial.timestamp == batch.timestamp
        assert partial.items == (dir_item,)


class TestCreateTrashBatch:
    """Tests for create_trash_batch."""

    def test_generates_id_and_timestamp(self, item: TrashItem) -> None:
        """The factory fills in id and a timezone-aware timestamp."""
        batch = create_trash_batch([item])

        assert batch.id
        assert datetime.fromisoformat(batch.timestamp).tzinfo is not None
        assert batch.items == (item,)

    def test_ids_sort_in_creation_order(self, item: TrashItem) -> None:
        """Later batches get ids that sort after earlier ones."""
        first = create_trash_batch([item])
        second = create_trash_batch([item])

        assert first.id != second.id
        assert first.id[:22] <= second.id[:22]

    def test_rejects_empty(self) -> None:
        """An empty item list is rejected."""
        with pytest.raises(ValueError, match="no items"):
            create_trash_batch([])
