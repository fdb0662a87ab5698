"""CLI error handling for clusterforge-cli.

This module wraps clusterforge-core exceptions and turns them into
user-friendly messages with appropriate exit codes.
"""

from __future__ import annotations

from typing import NoReturn

import click
from clusterforge_core.errors import (
    AssetResolutionError,
    ForgeError,
    ValidationError,
)

from clusterforge_cli.output import error

# Exit codes following sysexits.h convention
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1  # User error (validation, missing input, invalid YAML)
EXIT_SYSTEM_ERROR = 2  # System error (permissions, write failure)


class CLIError(click.ClickException):
    """CLI-specific exception with exit code support.

    Attributes:
        message: User-facing error message.
        exit_code: Exit code for the CLI (default: 1).
    """

    def __init__(self, message: str, exit_code: int = EXIT_USER_ERROR) -> None:
        super().__init__(message)
        self.exit_code = exit_code

    def show(self, file: object = None) -> None:
        """Display the error message using Rich formatting.

        Args:
            file: Output file (unused, for Click compatibility).
        """
        error(self.format_message())


def exit_code_for(err: BaseException) -> int:
    """Pick the exit code for a failure.

    Resolution errors are classified by their root cause: operating system
    failures are system errors, everything else is a user error.
    """
    if isinstance(err, AssetResolutionError):
        err = err.root_cause
    if isinstance(err, OSError):
        return EXIT_SYSTEM_ERROR
    return EXIT_USER_ERROR


def format_forge_error(err: ForgeError | OSError) -> str:
    """Format a clusterforge error into a user-friendly message.

    Validation failures list every violation on its own line.

    Example:
        >>> format_forge_error(err)
        'invalid install config:\\n  - baseDomain: must be a DNS subdomain'
    """
    cause = err.root_cause if isinstance(err, AssetResolutionError) else err
    if not isinstance(cause, ValidationError) or len(cause.violations) < 2:
        return str(err)

    lines = [str(err).split(": [", 1)[0] + ":"]
    lines.extend(f"  - {violation}" for violation in cause.violations)
    return "\n".join(lines)


def handle_forge_error(err: ForgeError | OSError) -> NoReturn:
    """Raise a CLIError for a clusterforge or file system error.

    Raises:
        CLIError: Always raises with formatted message and exit code.
    """
    raise CLIError(format_forge_error(err), exit_code=exit_code_for(err)) from err


def handle_permission_error(path: str, operation: str = "access") -> NoReturn:
    """Handle permission errors.

    Raises:
        CLIError: Always raises with formatted error message.
    """
    raise CLIError(
        f"Permission denied: Cannot {operation} {path}",
        exit_code=EXIT_SYSTEM_ERROR,
    )
