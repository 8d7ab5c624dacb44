"""Shared helpers for CLI commands.

This module provides the engine construction and argument expansion used
by several command modules.
"""

import glob
import os
from pathlib import Path

import typer

from trashctl.core.config import load_config
from trashctl.core.errors import ConfigError, SetupError
from trashctl.trash.engine import TrashEngine
from trashctl.utils.formatting import print_error


def get_engine(ctx: typer.Context | None = None) -> TrashEngine:
    """Build a TrashEngine from the effective configuration.

    Args:
        ctx: Typer context; ``ctx.obj["config_path"]`` overrides the default
            config file location when present.

    Returns:
        Ready-to-use TrashEngine.

    Raises:
        typer.Exit: If the configuration or the roots are unusable.
    """
    config_path: Path | None = None
    if ctx is not None and isinstance(ctx.obj, dict):
        config_path = ctx.obj.get("config_path")

    try:
        config = load_config(config_path)
        return TrashEngine.from_config(config)
    except (ConfigError, SetupError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def expand_patterns(patterns: list[str]) -> list[str]:
    """Expand glob patterns into paths, preserving argument order.

    An argument naming an existing entry is taken literally. A pattern that
    matches nothing is passed through unchanged so the engine reports it.
    Duplicates produced by overlapping patterns are dropped.

    Args:
        patterns: Raw command-line arguments.

    Returns:
        Ordered list of paths.
    """
    expanded: list[str] = []
    seen: set[str] = set()

    for pattern in patterns:
        candidate = os.path.expanduser(pattern)
        if os.path.lexists(candidate):
            matches = [candidate]
        else:
            matches = sorted(glob.glob(candidate)) or [candidate]

        for match in matches:
            if match not in seen:
                seen.add(match)
                expanded.append(match)

    return expanded
