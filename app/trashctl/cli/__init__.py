"""CLI package for trashctl.

This package contains the Typer application and all subcommands.
"""

from trashctl.cli.main import app

__all__ = ["app"]
