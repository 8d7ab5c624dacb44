"""trashctl - reversible trash for the command line.

Moves files and directories into a managed holding area instead of
deleting them, and records every batch so it can be undone.
"""

__version__ = "0.3.0"
