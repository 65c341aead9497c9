"""Terminal output for scardoc.

Documents and tables go to **stdout** so they can be piped into other
tools. Everything else (status lines, warnings, errors, hints, the
library's log records) goes to **stderr**.

Formatting depends on where stdout points: an interactive terminal gets
Rich rendering, a pipe or file gets plain text. ``--json`` and ``--plain``
force a format; ``NO_COLOR``, ``TERM=dumb`` and ``--no-color`` turn colour
off.

The CLI builds one :class:`OutputManager` in
:func:`~scardoc.app.main_callback` and installs it with :func:`set_output`.
Commands call the module-level helpers (:func:`info`, :func:`warning` ...)
instead of passing the manager around, and :class:`OutputLogHandler`
forwards records from the ``scardoc.*`` loggers to the same stream.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.table import Table


class OutputFormat(str, Enum):
    """How stdout data is rendered. ``AUTO`` picks ``RICH`` or ``PLAIN``."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Route document data to stdout and diagnostics to stderr.

    Args:
        format: Rendering for stdout data. ``AUTO`` becomes ``RICH`` on a
            colour-capable terminal and ``PLAIN`` anywhere else.
        no_color: Print diagnostics without Rich styling.
        quiet: Drop info, success, hint and progress lines.
        verbose: Show debug lines.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose

        if format == OutputFormat.AUTO:
            rich_ok = _is_tty() and not self._no_color
            format = OutputFormat.RICH if rich_ok else OutputFormat.PLAIN
        self._format = format

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=format == OutputFormat.RICH,
        )
        self._stderr = Console(
            file=sys.stderr,
            no_color=self._no_color,
            stderr=True,
            soft_wrap=True,
        )

    @property
    def format(self) -> OutputFormat:
        return self._format

    # -- stdout ----------------------------------------------------------

    def format_document(self, data: Any) -> None:
        """Print a wire document (or any JSON value) to stdout.

        Plain and JSON modes both emit indented JSON; Rich mode highlights it.
        """
        text = json.dumps(data, indent=2, ensure_ascii=False, default=str)
        if self._format == OutputFormat.RICH:
            self._stdout.print_json(text)
        else:
            self.print_data(text)

    def print_data(self, text: str) -> None:
        print(text, file=sys.stdout, flush=True)

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Print rows as a Rich table, a JSON array of objects, or TSV.

        The title is only shown in Rich mode.
        """
        if self._format == OutputFormat.JSON:
            self.print_data(
                json.dumps([dict(zip(headers, row)) for row in rows], indent=2, ensure_ascii=False)
            )
            return
        if self._format == OutputFormat.PLAIN:
            for row in [headers, *rows]:
                self.print_data("\t".join(row))
            return

        table = Table(title=title, header_style="bold cyan")
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*row)
        self._stdout.print(table)

    # -- stderr ----------------------------------------------------------

    def _emit(self, message: str, prefix: str = "", style: Optional[str] = None) -> None:
        text = prefix + message
        if self._no_color:
            print(text, file=sys.stderr, flush=True)
        else:
            self._stderr.print(text, style=style, markup=False, highlight=False)

    def info(self, message: str) -> None:
        if not self._quiet:
            self._emit(message)

    def success(self, message: str) -> None:
        if not self._quiet:
            self._emit(message, style="green")

    def warning(self, message: str) -> None:
        """Shown even in quiet mode."""
        self._emit(message, "Warning: ", "yellow")

    def error(self, message: str) -> None:
        """Shown even in quiet mode."""
        self._emit(message, "Error: ", "bold red")

    def suggest(self, message: str) -> None:
        """A follow-up command the user may want to run next."""
        if not self._quiet:
            self._emit(message, "→ ", "dim")

    def debug(self, message: str) -> None:
        if self._verbose:
            self._emit(message, "[debug] ", "dim")

    def progress(self, message: str) -> None:
        """Status line for interactive sessions; silent when stdout is piped."""
        if not self._quiet and _is_tty():
            self._emit(message, style="dim")


class OutputLogHandler(logging.Handler):
    """Send ``scardoc.*`` log records to the global :class:`OutputManager`.

    Records at ERROR and above become errors, WARNING becomes a warning,
    INFO an info line and anything lower a debug line, so quiet and verbose
    mode apply to the library's logging as well.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            output = get_output()
            if record.levelno >= logging.ERROR:
                output.error(message)
            elif record.levelno >= logging.WARNING:
                output.warning(message)
            elif record.levelno >= logging.INFO:
                output.info(message)
            else:
                output.debug(message)
        except Exception:
            self.handleError(record)


def install_log_handler(verbose: bool = False) -> OutputLogHandler:
    """Attach a fresh :class:`OutputLogHandler` to the ``scardoc`` logger.

    A handler left by an earlier call is removed first. The logger level is
    ``DEBUG`` when *verbose* is set and ``INFO`` otherwise; records do not
    propagate to the root logger.
    """
    logger = logging.getLogger("scardoc")
    for existing in list(logger.handlers):
        if isinstance(existing, OutputLogHandler):
            logger.removeHandler(existing)
    handler = OutputLogHandler()
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
    return handler


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set to anything or ``TERM`` is ``dumb``."""
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


# -- global manager ------------------------------------------------------

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed manager, creating a default one on first use."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager (used between tests)."""
    global _output
    _output = None


def format_document(data: Any) -> None:
    get_output().format_document(data)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def warning(message: str) -> None:
    get_output().warning(message)


def error(message: str) -> None:
    get_output().error(message)


def suggest(message: str) -> None:
    get_output().suggest(message)


def debug(message: str) -> None:
    get_output().debug(message)


def progress(message: str) -> None:
    get_output().progress(message)
