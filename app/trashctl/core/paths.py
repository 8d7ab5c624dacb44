"""Root placement for the holding area and the history log.

Every OS-specific path literal lives in this module. The rest of the
package receives already-resolved absolute paths.

Layout (relative to the injected roots):
- History log: <home>/.local/state/trashctl/history.jsonl
- Holding area: <temp>/trashctl/
- Config file: <home>/.config/trashctl/config.toml
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from trashctl.core.errors import SetupError

if TYPE_CHECKING:
    from trashctl.core.config import TrashConfig

# Application identifier for directory naming
APP_NAME = "trashctl"

HISTORY_FILENAME = "history.jsonl"
CONFIG_FILENAME = "config.toml"
THEME_FILENAME = "theme.toml"


@dataclass(frozen=True, slots=True)
class ResolvedRoots:
    """Locations derived from a TrashConfig.

    Attributes:
        history_path: Absolute path of the history log file.
        holding_root: Absolute path of the holding area directory.
        holding_root_created: True if the holding area did not exist before
            resolution (e.g. the temp directory was wiped on reboot).
    """

    history_path: Path
    holding_root: Path
    holding_root_created: bool = False


def _get_xdg_dir(env_var: str, home: Path, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        home: Home directory to fall back to.
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return home / default_subdir / APP_NAME


def get_config_dir(home: Path | None = None) -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/trashctl/ (or XDG_CONFIG_HOME/trashctl/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", home or Path.home(), ".config")


def get_config_path(home: Path | None = None) -> Path:
    """Get the config file path.

    Returns:
        Path to ~/.config/trashctl/config.toml.
    """
    return get_config_dir(home) / CONFIG_FILENAME


def get_theme_path(home: Path | None = None) -> Path:
    """Get the user theme file path.

    Returns:
        Path to ~/.config/trashctl/theme.toml.
    """
    return get_config_dir(home) / THEME_FILENAME


def get_state_dir(home: Path) -> Path:
    """Get the state directory holding the history log.

    Returns:
        Path to <home>/.local/state/trashctl/ (or XDG_STATE_HOME/trashctl/).
    """
    return _get_xdg_dir("XDG_STATE_HOME", home, ".local/state")


def get_history_path(home: Path) -> Path:
    """Get the history log path.

    Returns:
        Path to <home>/.local/state/trashctl/history.jsonl.
    """
    return get_state_dir(home) / HISTORY_FILENAME


def get_holding_root(temp: Path) -> Path:
    """Get the holding area path.

    Returns:
        Path to <temp>/trashctl/.
    """
    return temp / APP_NAME


def _ensure_dir(path: Path, name: str) -> Path:
    """Create directory if it doesn't exist and check it is writable.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created/existing directory path.

    Raises:
        SetupError: If the directory cannot be created or written to.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise SetupError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise SetupError(msg) from e

    if not path.is_dir():
        raise SetupError(f"{name.capitalize()} location {path} is not a directory")
    if not os.access(path, os.W_OK | os.X_OK):
        raise SetupError(f"{name.capitalize()} directory {path} is not writable")
    return path


def derive_roots(config: TrashConfig) -> ResolvedRoots:
    """Compute the history and holding locations without touching the disk.

    Used for reporting. Creating the holding area here would hide a wiped
    temp directory from the next engine's stale-history check.

    Args:
        config: Injected home and temp roots.

    Returns:
        ResolvedRoots with absolute paths; ``holding_root_created`` is False.
    """
    return ResolvedRoots(
        history_path=get_history_path(config.home_root.absolute()),
        holding_root=get_holding_root(config.temp_root.absolute()),
    )


def resolve_roots(config: TrashConfig) -> ResolvedRoots:
    """Resolve and create the history location and the holding area.

    This is the only function that creates root directories.

    Args:
        config: Injected home and temp roots.

    Returns:
        ResolvedRoots with absolute paths.

    Raises:
        SetupError: If either location cannot be created or written to.
    """
    derived = derive_roots(config)
    history_path = derived.history_path
    holding_root = derived.holding_root

    state_dir = _ensure_dir(history_path.parent, "state").resolve()
    history_path = state_dir / HISTORY_FILENAME
    if history_path.exists() and not history_path.is_file():
        raise SetupError(f"History location {history_path} is not a file")

    holding_root_created = not holding_root.exists()
    _ensure_dir(holding_root, "holding area")

    return ResolvedRoots(
        history_path=history_path,
        holding_root=holding_root.resolve(),
        holding_root_created=holding_root_created,
    )
