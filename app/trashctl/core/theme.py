"""Theme management for trashctl CLI.

Colors default to the values on ``ThemeColors``. A ``[colors]`` table in
~/.config/trashctl/theme.toml overrides any of them.
"""

import functools
import logging
import re
import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator
from rich.theme import Theme

from trashctl.core.paths import get_theme_path

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})")


class ThemeColors(BaseModel):
    """Colors used by trashctl output, as #RGB or #RRGGBB hex codes."""

    model_config = ConfigDict(extra="forbid")

    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"
    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"
    source: str = "#faf870"
    destination: str = "#c1ff62"

    @field_validator("*", mode="before")
    @classmethod
    def validate_hex_color(cls, value: object) -> str:
        if not isinstance(value, str) or not _HEX_COLOR.fullmatch(value.strip()):
            msg = f"expected a #RGB or #RRGGBB color, got {value!r}"
            raise ValueError(msg)
        return value.strip()


def load_theme(path: Path | None = None) -> ThemeColors:
    """Load theme colors, falling back to the defaults on any problem.

    Args:
        path: Theme file to read. If None, uses ~/.config/trashctl/theme.toml.
    """
    theme_path = path or get_theme_path()
    if not theme_path.exists():
        return ThemeColors()

    try:
        with open(theme_path, "rb") as f:
            colors = tomllib.load(f).get("colors", {})
        return ThemeColors.model_validate(colors)
    except (OSError, tomllib.TOMLDecodeError, ValueError) as e:
        logger.warning("Ignoring theme file %s: %s", theme_path, e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme whose style names the CLI markup refers to."""
    if colors is None:
        colors = load_theme()

    return Theme(
        {
            "muted": colors.muted,
            "border": colors.border,
            "bold_header": f"bold {colors.header}",
            "success": colors.success,
            "warning": colors.warning,
            "error": f"bold {colors.error}",
            "info": colors.info,
            "source": colors.source,
            "destination": colors.destination,
        }
    )


@functools.cache
def get_theme() -> Theme:
    """Rich theme for the shared consoles, loaded once per process."""
    return get_rich_theme()
