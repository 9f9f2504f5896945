"""Exception types raised by tmi-cli."""

from __future__ import annotations


class TmiError(Exception):
    """Base class for every error the CLI reports as ``Error: ...``."""


class UsageError(TmiError):
    """Raised for a missing argument, an unknown command or unusable parameters."""


class TargetExistsError(TmiError):
    """Raised before any mutation when the target directory already exists."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f'Directory "{path}" already exists!')


class CommandError(TmiError):
    """Raised when an external command exits non-zero or times out."""

    def __init__(
        self,
        message: str,
        command: str = "",
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)


class ScaffoldError(TmiError):
    """Raised when a project-bootstrap step fails.

    The target directory has already been removed when this propagates.
    """

    def __init__(self, step: str, message: str) -> None:
        self.step = step
        super().__init__(f"{step}: {message}")
