"""CLI commands for trashctl.

This package contains all subcommand implementations.
"""

from trashctl.cli.commands import config, history, put, undo

__all__ = ["config", "history", "put", "undo"]
