"""Error taxonomy for trash and restore operations.

Whole-call failures are raised as exceptions. Per-item failures are
reported as data (see ``trashctl.models.report.ItemFailure``) tagged with
an ``ErrorKind``.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Category of a per-item failure.

    Attributes:
        VALIDATION: Source path missing, inaccessible, or not trashable.
        MOVE: Rename and copy fallback both failed.
        RESTORE_TARGET_UNAVAILABLE: Original parent could not be recreated.
    """

    VALIDATION = "validation"
    MOVE = "move"
    RESTORE_TARGET_UNAVAILABLE = "restore_target_unavailable"


class TrashError(Exception):
    """Base exception for trashctl errors."""


class SetupError(TrashError):
    """Raised when the holding area or history location is unusable."""


class ConfigError(TrashError):
    """Raised when the configuration file cannot be read or is invalid."""


class PersistError(TrashError):
    """Raised when the history log cannot be durably written or read."""


class MoveError(TrashError):
    """Raised when a single relocation fails.

    Attributes:
        source: Path that was being moved.
        destination: Path it was being moved to.
        errno: OS error number of the underlying failure, if any.
    """

    kind = ErrorKind.MOVE

    def __init__(
        self,
        message: str,
        source: str,
        destination: str,
        errno: int | None = None,
    ) -> None:
        super().__init__(message)
        self.source = source
        self.destination = destination
        self.errno = errno


class RestoreTargetUnavailableError(MoveError):
    """Raised when the original parent directory cannot be recreated."""

    kind = ErrorKind.RESTORE_TARGET_UNAVAILABLE
