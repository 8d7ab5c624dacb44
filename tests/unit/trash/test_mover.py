"""Unit tests for relocate.

Tests same-device renames, the cross-device copy fallback, restore-mode
parent recreation, and refusal to overwrite.
"""

import errno
import os
import shutil
from pathlib import Path
from unittest.mock import patch

import pytest
from trashctl.core.errors import MoveError, RestoreTargetUnavailableError
from trashctl.trash import mover
from trashctl.trash.mover import MoveMode, relocate

_real_copy2 = shutil.copy2
_real_remove = mover._remove
_real_is_dir = Path.is_dir


def _cross_device(src: object, dst: object) -> None:
    raise OSError(errno.EXDEV, "Invalid cross-device link")


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """A small directory tree with a nested file and a symlink."""
    root = tmp_path / "project"
    (root / "src").mkdir(parents=True)
    (root / "README").write_text("hello")
    (root / "src" / "main.py").write_text("print('hi')\n")
    (root / "link").symlink_to("README")
    return root


class TestRename:
    """Tests for same-filesystem relocation."""

    def test_moves_file(self, tmp_path: Path) -> None:
        """A file is moved to the destination."""
        source = tmp_path / "a.txt"
        source.write_text("content")
        destination = tmp_path / "held" / "a.txt"
        destination.parent.mkdir()

        relocate(source, destination, MoveMode.TRASH)

        assert not source.exists()
        assert destination.read_text() == "content"

    def test_moves_directory(self, tree: Path, tmp_path: Path) -> None:
        """A directory is moved with its contents."""
        destination = tmp_path / "held"

        relocate(tree, destination, MoveMode.TRASH)

        assert not tree.exists()
        assert (destination / "src" / "main.py").read_text() == "print('hi')\n"

    def test_moves_symlink_not_target(self, tmp_path: Path) -> None:
        """A symlink is moved as a link; its target stays in place."""
        target = tmp_path / "target.txt"
        target.write_text("data")
        link = tmp_path / "link"
        link.symlink_to(target)
        destination = tmp_path / "moved-link"

        relocate(link, destination, MoveMode.TRASH)

        assert destination.is_symlink()
        assert target.read_text() == "data"

    def test_missing_source(self, tmp_path: Path) -> None:
        """A missing source raises MoveError."""
        with pytest.raises(MoveError, match="does not exist") as exc_info:
            relocate(tmp_path / "nope", tmp_path / "dest", MoveMode.TRASH)

        assert exc_info.value.errno == errno.ENOENT

    def test_refuses_to_overwrite(self, tmp_path: Path) -> None:
        """An existing destination is never replaced."""
        source = tmp_path / "a.txt"
        source.write_text("new")
        destination = tmp_path / "b.txt"
        destination.write_text("old")

        with pytest.raises(MoveError, match="already exists"):
            relocate(source, destination, MoveMode.RESTORE)

        assert source.read_text() == "new"
        assert destination.read_text() == "old"

    def test_rename_failure(self, tmp_path: Path) -> None:
        """Non cross-device rename errors raise MoveError without fallback."""
        source = tmp_path / "a.txt"
        source.write_text("content")

        with (
            patch("trashctl.trash.mover.os.rename", side_effect=PermissionError(13, "denied")),
            pytest.raises(MoveError) as exc_info,
        ):
            relocate(source, tmp_path / "b.txt", MoveMode.TRASH)

        assert exc_info.value.errno == 13
        assert source.exists()
        assert not (tmp_path / "b.txt").exists()

    def test_trash_mode_does_not_create_parent(self, tmp_path: Path) -> None:
        """TRASH mode fails instead of creating a missing destination parent."""
        source = tmp_path / "a.txt"
        source.write_text("content")

        with pytest.raises(MoveError):
            relocate(source, tmp_path / "missing" / "a.txt", MoveMode.TRASH)

        assert source.exists()


class TestRestoreMode:
    """Tests for RESTORE-specific behavior."""

    def test_recreates_missing_parents(self, tmp_path: Path) -> None:
        """The original parent chain is recreated before restoring."""
        source = tmp_path / "held.txt"
        source.write_text("content")
        destination = tmp_path / "gone" / "deeper" / "file.txt"

        relocate(source, destination, MoveMode.RESTORE)

        assert destination.read_text() == "content"

    def test_parent_cannot_be_recreated(self, tmp_path: Path) -> None:
        """A file blocking the parent path raises RestoreTargetUnavailableError."""
        source = tmp_path / "held.txt"
        source.write_text("content")
        (tmp_path / "blocker").write_text("I am a file")
        destination = tmp_path / "blocker" / "file.txt"

        with pytest.raises(RestoreTargetUnavailableError):
            relocate(source, destination, MoveMode.RESTORE)

        assert source.exists()

    def test_restore_error_is_a_move_error(self) -> None:
        """RestoreTargetUnavailableError is handled wherever MoveError is."""
        assert issubclass(RestoreTargetUnavailableError, MoveError)


class TestCrossDeviceFallback:
    """Tests for the copy-then-delete fallback."""

    def test_copies_file(self, tmp_path: Path) -> None:
        """A file is copied, then the source removed."""
        source = tmp_path / "a.txt"
        source.write_text("content")
        os.chmod(source, 0o640)
        destination = tmp_path / "b.txt"

        with patch("trashctl.trash.mover.os.rename", side_effect=_cross_device):
            relocate(source, destination, MoveMode.TRASH)

        assert not source.exists()
        assert destination.read_text() == "content"
        assert destination.stat().st_mode & 0o777 == 0o640

    def test_copies_directory_tree(self, tree: Path, tmp_path: Path) -> None:
        """A directory tree is copied with symlinks preserved."""
        destination = tmp_path / "held"

        with patch("trashctl.trash.mover.os.rename", side_effect=_cross_device):
            relocate(tree, destination, MoveMode.TRASH)

        assert not tree.exists()
        assert (destination / "src" / "main.py").read_text() == "print('hi')\n"
        assert (destination / "link").is_symlink()
        assert os.readlink(destination / "link") == "README"

    def test_copies_symlink(self, tmp_path: Path) -> None:
        """A symlink is recreated, not dereferenced."""
        link = tmp_path / "link"
        link.symlink_to("/nonexistent/target")
        destination = tmp_path / "moved"

        with patch("trashctl.trash.mover.os.rename", side_effect=_cross_device):
            relocate(link, destination, MoveMode.TRASH)

        assert not os.path.lexists(link)
        assert os.readlink(destination) == "/nonexistent/target"

    def test_copy_failure_keeps_source(self, tree: Path, tmp_path: Path) -> None:
        """A failing copy leaves the source intact and removes the partial copy."""
        destination = tmp_path / "held"

        def failing_copy(src: str, dst: str, **kwargs: object) -> None:
            if src.endswith("main.py"):
                raise OSError(errno.ENOSPC, "No space left on device")
            _real_copy2(src, dst, **kwargs)

        with (
            patch("trashctl.trash.mover.os.rename", side_effect=_cross_device),
            patch("trashctl.trash.mover.shutil.copy2", side_effect=failing_copy),
            pytest.raises(MoveError),
        ):
            relocate(tree, destination, MoveMode.TRASH)

        assert (tree / "src" / "main.py").exists()
        assert not destination.exists()

    def test_incomplete_copy_keeps_source(self, tmp_path: Path) -> None:
        """A size mismatch after copying aborts the move."""
        source = tmp_path / "a.txt"
        source.write_text("content")
        destination = tmp_path / "b.txt"

        def short_copy(src: object, dst: object, **kwargs: object) -> None:
            Path(str(dst)).write_text("cont")

        with (
            patch("trashctl.trash.mover.os.rename", side_effect=_cross_device),
            patch("trashctl.trash.mover.shutil.copy2", side_effect=short_copy),
            pytest.raises(MoveError, match="incomplete"),
        ):
            relocate(source, destination, MoveMode.TRASH)

        assert source.read_text() == "content"
        assert not destination.exists()

    def test_restore_across_devices(self, tmp_path: Path) -> None:
        """RESTORE mode uses the same fallback and recreates the parent."""
        source = tmp_path / "held.txt"
        source.write_text("content")
        destination = tmp_path / "gone" / "file.txt"

        with patch("trashctl.trash.mover.os.rename", side_effect=_cross_device):
            relocate(source, destination, MoveMode.RESTORE)

        assert destination.read_text() == "content"
        assert not source.exists()


class TestSourceRemovalFailure:
    """Tests for a source that cannot be removed after a verified copy."""

    def test_intact_source_keeps_single_copy(self, tree: Path, tmp_path: Path) -> None:
        """If nothing was removed, the copy is discarded and the source stays."""
        destination = tmp_path / "held"

        def failing_remove(path: Path) -> None:
            if path == tree:
                raise PermissionError(errno.EACCES, "Permission denied")
            _real_remove(path)

        with (
            patch("trashctl.trash.mover.os.rename", side_effect=_cross_device),
            patch("trashctl.trash.mover._remove", side_effect=failing_remove),
            pytest.raises(MoveError, match="left in place"),
        ):
            relocate(tree, destination, MoveMode.TRASH)

        assert (tree / "src" / "main.py").exists()
        assert not destination.exists()

    def test_partly_removed_source_keeps_copy(self, tree: Path, tmp_path: Path) -> None:
        """If the source is already damaged, the complete copy is kept."""
        destination = tmp_path / "held"

        def partial_remove(path: Path) -> None:
            if path == tree:
                (tree / "README").unlink()
                raise PermissionError(errno.EACCES, "Permission denied")
            _real_remove(path)

        with (
            patch("trashctl.trash.mover.os.rename", side_effect=_cross_device),
            patch("trashctl.trash.mover._remove", side_effect=partial_remove),
            pytest.raises(MoveError, match="complete copy is kept"),
        ):
            relocate(tree, destination, MoveMode.TRASH)

        assert (destination / "README").read_text() == "hello"
        assert (destination / "src" / "main.py").exists()


def test_unreadable_parent_is_restore_target_unavailable(tmp_path: Path) -> None:
    """An error while checking the parent is reported, not raised raw."""
    source = tmp_path / "held.txt"
    source.write_text("content")
    locked = tmp_path / "locked"

    def is_dir(self: Path, *args: object, **kwargs: object) -> bool:
        if self == locked:
            raise PermissionError(errno.EACCES, "Permission denied", str(self))
        return _real_is_dir(self, *args, **kwargs)

    with (
        patch.object(Path, "is_dir", new=is_dir),
        pytest.raises(RestoreTargetUnavailableError, match="Permission denied"),
    ):
        relocate(source, locked / "file.txt", MoveMode.RESTORE)

    assert source.exists()
