"""
Error handling for the easify command line.

Library errors (:class:`EasifyError`) already know how to format themselves;
this module adds CLI-specific errors for bad arguments and input files, plus
the top-level handler that prints and exits.
"""

import os
import sys
import traceback
from typing import Any, Dict, Optional

from easify.errors import EasifyError

# Maximum length for traceback output in CLI
_CLI_TRACE_LIMIT = 4000

EXIT_FAILURE = 1
EXIT_USAGE = 2


class CLIError(Exception):
    """
    Base exception for all CLI operations.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code
        hint: Optional suggestion for resolving the error
        context: Additional metadata about the error
    """

    def __init__(
        self,
        message: str,
        *,
        code: str,
        hint: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.hint = hint
        self.context = context or {}

    def __str__(self) -> str:
        return self.message


class CLIValidationError(CLIError):
    """Invalid command arguments, or an input document that fails validation."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('code', 'CLI_VALIDATION_ERROR')
        super().__init__(message, **kwargs)


class CLIFileError(CLIError):
    """An input file could not be read."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('code', 'CLI_FILE_ERROR')
        super().__init__(message, **kwargs)


def cli_verbose_enabled(flag: bool = False) -> bool:
    return flag or os.getenv("EASIFY_VERBOSE", "").lower() in {"1", "true", "yes"}


def format_traceback_excerpt() -> str:
    excerpt = traceback.format_exc()
    if len(excerpt) <= _CLI_TRACE_LIMIT:
        return excerpt
    return "..." + excerpt[-_CLI_TRACE_LIMIT:]


def format_cli_error(
    exc: BaseException,
    *,
    verbose: bool = False,
    include_traceback: bool = False
) -> str:
    """
    Format an exception for CLI display.

    >>> print(format_cli_error(CLIValidationError("Bad length", hint="Use an integer")))
    Error [CLI_VALIDATION_ERROR]: Bad length
    Hint: Use an integer
    """
    lines = []

    if isinstance(exc, EasifyError):
        lines.append(f"Error: {exc.format()}")
    elif isinstance(exc, CLIError):
        lines.append(f"Error [{exc.code}]: {exc.message}")
        if exc.hint:
            lines.append(f"Hint: {exc.hint}")
        if verbose and exc.context:
            lines.append("\nContext:")
            for key, value in exc.context.items():
                lines.append(f"  {key}: {value}")
    else:
        lines.append(f"Error: {exc.__class__.__name__}: {exc}")

    if include_traceback:
        lines.append("\nTraceback:")
        lines.append(format_traceback_excerpt())

    return "\n".join(lines)


def exit_code_for(exc: BaseException) -> int:
    if isinstance(exc, CLIError):
        return EXIT_USAGE
    return EXIT_FAILURE


def handle_cli_exception(exc: BaseException, *, verbose: bool = False) -> None:
    """
    Print ``exc`` to stderr and exit.

    Usage and input errors exit with status 2, everything else with 1.
    """
    verbose_effective = cli_verbose_enabled(verbose)
    print(
        format_cli_error(exc, verbose=verbose_effective, include_traceback=verbose_effective),
        file=sys.stderr,
    )
    sys.exit(exit_code_for(exc))
