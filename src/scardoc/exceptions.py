"""Exception hierarchy for scardoc.

All exceptions inherit from :class:`ScardocError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`scardoc.exit_codes`.
The top-level error handler in :func:`scardoc.app.main` catches
``ScardocError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    ScardocError (exit 1)
    +-- InvalidUsageError            (exit 2)
    +-- SourceReadError              (exit 3)
    +-- ParseError                   (exit 4)
    |   +-- FunctionDeclarationError
    |   +-- ArgumentGrammarError
    |   +-- ArgumentDirectiveError
    |   +-- DumpFormatError
    +-- DocumentLoadError            (exit 5)
    +-- ConfigError                  (exit 1)
"""

from __future__ import annotations

from typing import Optional

from scardoc.exit_codes import (
    EXIT_DOCUMENT_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_PARSE_ERROR,
    EXIT_SOURCE_UNREADABLE,
)


class ScardocError(Exception):
    """Base exception for all scardoc errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`scardoc.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(ScardocError):
    """Raised for invalid CLI arguments or missing required parameters."""

    exit_code = EXIT_INVALID_USAGE


class SourceReadError(ScardocError):
    """Raised when a source unit or dump file cannot be opened or decoded."""

    exit_code = EXIT_SOURCE_UNREADABLE


class ParseError(ScardocError):
    """Base class for annotation and dump parsing failures."""

    exit_code = EXIT_PARSE_ERROR


class FunctionDeclarationError(ParseError):
    """Raised when a declaration line has no extractable function name."""


class ArgumentGrammarError(ParseError):
    """Raised when an ``@args`` directive does not follow the argument grammar."""


class ArgumentDirectiveError(ParseError):
    """Raised when the ``@args`` directive of a documented function is malformed.

    Args:
        message: Human-readable error description.
        function_name: Name of the function whose doc block failed.
        fatal: When ``True`` the whole source unit is aborted instead of
            only the one function.
    """

    def __init__(
        self,
        message: str,
        function_name: Optional[str] = None,
        fatal: bool = False,
    ):
        super().__init__(message)
        self.function_name = function_name
        self.fatal = fatal


class DumpFormatError(ParseError):
    """Raised when a dump file is structurally invalid (content before any section marker)."""


class DocumentLoadError(ScardocError):
    """Raised when a canonical document cannot be read, parsed, or validated."""

    exit_code = EXIT_DOCUMENT_ERROR


class ConfigError(ScardocError):
    """Raised for configuration problems (invalid JSON, bad values in config files)."""

    exit_code = EXIT_GENERIC_FAILURE
