"""Collision-free naming inside the holding area.

When a name is already taken, a counter suffix is appended to the full
name (``notes.txt`` -> ``notes.txt.1`` -> ``notes.txt.2`` ...). The check
is made against the directory listing at call time only; another process
can still claim the name before it is used. The mover refuses to
overwrite, so a lost race fails the move instead of losing data.
"""

import os
from collections.abc import Collection
from pathlib import Path

# Fallbacks when pathconf is unavailable (non-POSIX or unsupported filesystem)
DEFAULT_NAME_MAX = 255
DEFAULT_PATH_MAX = 4096


def _pathconf(directory: Path, name: str, default: int) -> int:
    try:
        value = os.pathconf(directory, name)
    except (AttributeError, OSError, ValueError):
        return default
    return value if value > 0 else default


def _fits(directory: Path, name: str, name_max: int, path_max: int) -> bool:
    if len(os.fsencode(name)) > name_max:
        return False
    return len(os.fsencode(str(directory / name))) < path_max


def _truncate(base: str, suffix: str, directory: Path, name_max: int, path_max: int) -> str:
    """Shorten ``base`` character-wise until ``base + suffix`` fits."""
    while base and not _fits(directory, base + suffix, name_max, path_max):
        base = base[:-1]
    if not base:
        msg = f"Cannot fit a name with suffix {suffix!r} into {directory}"
        raise ValueError(msg)
    return base + suffix


def _is_free(directory: Path, name: str, taken: Collection[str]) -> bool:
    return name not in taken and not os.path.lexists(directory / name)


def unique_name(directory: Path, candidate: str, taken: Collection[str] = ()) -> str:
    """Produce a name that does not exist in ``directory``.

    Args:
        directory: Directory the name must be unique in.
        candidate: Preferred name; returned unchanged when free.
        taken: Names to treat as occupied even though they are not on disk
            yet (e.g. destinations already planned in the same batch).

    Returns:
        A free name not exceeding the filesystem's name or path length limits.

    Raises:
        ValueError: If the candidate is empty or contains a path separator,
            or if no name can fit within the directory's path length limit.
    """
    if not candidate or candidate in (".", "..") or os.sep in candidate:
        msg = f"Invalid entry name: {candidate!r}"
        raise ValueError(msg)

    name_max = _pathconf(directory, "PC_NAME_MAX", DEFAULT_NAME_MAX)
    path_max = _pathconf(directory, "PC_PATH_MAX", DEFAULT_PATH_MAX)

    name = candidate
    if not _fits(directory, name, name_max, path_max):
        name = _truncate(candidate, "", directory, name_max, path_max)
    if _is_free(directory, name, taken):
        return name

    counter = 1
    while True:
        name = _truncate(candidate, f".{counter}", directory, name_max, path_max)
        if _is_free(directory, name, taken):
            return name
        counter += 1
