"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest
from trashctl.core.config import TrashConfig, save_config
from trashctl.core.paths import ResolvedRoots, resolve_roots
from trashctl.trash.engine import TrashEngine


@pytest.fixture(autouse=True)
def isolate_xdg(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep XDG overrides from the developer's shell out of the tests."""
    for var in ("XDG_CONFIG_HOME", "XDG_STATE_HOME"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def config(tmp_path: Path) -> TrashConfig:
    """Configuration rooted in a temporary home and temp directory."""
    home = tmp_path / "home"
    temp = tmp_path / "tmp"
    home.mkdir()
    temp.mkdir()
    return TrashConfig(home_root=home, temp_root=temp)


@pytest.fixture
def roots(config: TrashConfig) -> ResolvedRoots:
    """Resolved (and created) holding area and history locations."""
    return resolve_roots(config)


@pytest.fixture
def engine(roots: ResolvedRoots) -> TrashEngine:
    """Engine on the temporary roots."""
    return TrashEngine(roots)


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    """Directory holding files to be trashed."""
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def config_file(tmp_path: Path, config: TrashConfig) -> Path:
    """Config file pointing at the temporary roots."""
    return save_config(config, tmp_path / "config.toml")
