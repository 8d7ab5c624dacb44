"""Single-entry relocation in both directions.

Moves one file, directory, or symlink with an atomic rename, falling back
to copy-then-delete when the source and destination live on different
filesystems. The same function serves trashing and restoring.
"""

import contextlib
import errno
import os
import shutil
from enum import Enum
from pathlib import Path

from trashctl.core.errors import MoveError, RestoreTargetUnavailableError


class MoveMode(str, Enum):
    """Direction of a relocation.

    Attributes:
        TRASH: Original location -> holding area.
        RESTORE: Holding area -> original location. Recreates a missing
            parent directory first.
    """

    TRASH = "trash"
    RESTORE = "restore"


def _tree_stats(path: Path) -> tuple[int, int]:
    """Count entries and total regular-file bytes below (and including) path.

    Symlinks are counted but never followed.
    """
    if path.is_symlink() or not path.is_dir():
        size = 0 if path.is_symlink() else path.stat().st_size
        return 1, size

    entries = 1
    size = 0
    for root, dirs, files in os.walk(path):
        entries += len(dirs) + len(files)
        for name in files:
            file_path = Path(root) / name
            if not file_path.is_symlink():
                size += file_path.stat().st_size
    return entries, size


def _remove(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def _copy(source: Path, destination: Path) -> None:
    if source.is_symlink():
        os.symlink(os.readlink(source), destination)
    elif source.is_dir():
        shutil.copytree(source, destination, symlinks=True, copy_function=shutil.copy2)
    else:
        shutil.copy2(source, destination, follow_symlinks=False)


def _copy_then_delete(source: Path, destination: Path) -> None:
    """Copy ``source`` to ``destination``, verify, then remove the source.

    The source is left untouched unless the copy is complete.

    Raises:
        MoveError: If copying, verifying, or removing the source fails.
    """
    try:
        _copy(source, destination)
        expected = _tree_stats(source)
        actual = _tree_stats(destination)
    except OSError as e:
        _discard_partial_copy(destination)
        raise MoveError(
            f"Copy of {source} to {destination} failed: {e}",
            str(source),
            str(destination),
            e.errno,
        ) from e

    if expected != actual:
        _discard_partial_copy(destination)
        raise MoveError(
            f"Copy of {source} is incomplete "
            f"({actual[0]}/{expected[0]} entries, {actual[1]}/{expected[1]} bytes)",
            str(source),
            str(destination),
        )

    try:
        _remove(source)
    except OSError as e:
        if _is_intact(source, expected):
            _discard_partial_copy(destination)
            message = f"Cannot remove {source} after copying it; left in place: {e}"
        else:
            message = (
                f"{source} was only partly removed after copying; "
                f"the complete copy is kept at {destination}: {e}"
            )
        raise MoveError(message, str(source), str(destination), e.errno) from e


def _is_intact(source: Path, expected: tuple[int, int]) -> bool:
    try:
        return os.path.lexists(source) and _tree_stats(source) == expected
    except OSError:
        return False


def _discard_partial_copy(destination: Path) -> None:
    if not os.path.lexists(destination):
        return
    # The source is intact; a leftover partial copy is only clutter.
    with contextlib.suppress(OSError):
        _remove(destination)


def _ensure_parent(destination: Path, source: Path) -> None:
    parent = destination.parent
    try:
        if not parent.is_dir():
            parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise RestoreTargetUnavailableError(
            f"Cannot recreate parent directory {parent}: {e}",
            str(source),
            str(destination),
            e.errno,
        ) from e


def relocate(source: Path, destination: Path, mode: MoveMode) -> None:
    """Move ``source`` to ``destination``.

    Never overwrites an existing destination. In RESTORE mode a missing
    parent directory of the destination is recreated first.

    Args:
        source: Existing file, directory, or symlink.
        destination: Target path; must not exist.
        mode: Direction of the move.

    Raises:
        RestoreTargetUnavailableError: If the destination's parent cannot be
            recreated (RESTORE mode only).
        MoveError: If the source is missing, the destination exists, or
            both rename and copy fallback fail.
    """
    if not os.path.lexists(source):
        raise MoveError(
            f"Source does not exist: {source}", str(source), str(destination), errno.ENOENT
        )

    if mode == MoveMode.RESTORE:
        _ensure_parent(destination, source)

    if os.path.lexists(destination):
        raise MoveError(
            f"Destination already exists: {destination}",
            str(source),
            str(destination),
            errno.EEXIST,
        )

    try:
        os.rename(source, destination)
        return
    except OSError as e:
        if e.errno != errno.EXDEV:
            raise MoveError(
                f"Cannot move {source} to {destination}: {e.strerror or e}",
                str(source),
                str(destination),
                e.errno,
            ) from e

    _copy_then_delete(source, destination)
