"""Configuration model and TOML I/O.

The engine never looks up the home or temp directory on its own. Both
roots are injected through ``TrashConfig``, which is built from the
process defaults and optionally overridden by ~/.config/trashctl/config.toml.
"""

import os
import tempfile
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from trashctl.core.errors import ConfigError
from trashctl.core.paths import get_config_path


class TrashConfig(BaseModel):
    """Roots that the path resolver derives all locations from.

    Attributes:
        home_root: Home directory; the history log lives beneath it.
        temp_root: Temporary directory; the holding area lives beneath it.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    home_root: Annotated[
        Path,
        Field(description="Home directory used for the history log"),
    ]
    temp_root: Annotated[
        Path,
        Field(description="Temporary directory used for the holding area"),
    ]


def default_config() -> TrashConfig:
    """Build a configuration from the current process environment."""
    return TrashConfig(
        home_root=Path.home(),
        temp_root=Path(tempfile.gettempdir()),
    )


def load_config(path: Path | None = None) -> TrashConfig:
    """Load configuration, applying file overrides on top of the defaults.

    A missing config file is not an error; the process defaults are used.

    Args:
        path: Config file to read. If None, uses the default config path.

    Returns:
        Validated TrashConfig.

    Raises:
        ConfigError: If the file cannot be read, parsed, or validated.
    """
    defaults = default_config()
    config_path = path or get_config_path(defaults.home_root)

    if not config_path.exists():
        return defaults

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e

    merged = {**defaults.model_dump(), **data}
    try:
        config = TrashConfig.model_validate(merged)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e

    return config.model_copy(
        update={
            "home_root": config.home_root.expanduser(),
            "temp_root": config.temp_root.expanduser(),
        }
    )


def save_config(config: TrashConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written to a temporary file in the same directory and then
    moved into place with os.replace().

    Args:
        config: The configuration to save.
        path: Destination. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path(config.home_root)

    data = {
        "home_root": str(config.home_root),
        "temp_root": str(config.temp_root),
    }

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path
