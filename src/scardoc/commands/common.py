"""Helpers shared by the document-producing commands."""

from __future__ import annotations

from typing import NoReturn

import typer

from scardoc.exceptions import ScardocError
from scardoc.models import CanonicalDocument
from scardoc.output import error, format_document, success


def fail(exc: ScardocError) -> NoReturn:
    """Report *exc* on stderr and exit with its exit code."""
    error(str(exc))
    raise typer.Exit(code=exc.exit_code)


def emit_document(
    document: CanonicalDocument,
    out: str,
    to_stdout: bool,
    indent: int = 2,
) -> None:
    """Write *document* to *out*, or print it when *to_stdout* is set.

    Raises:
        typer.Exit: With the error's exit code if the file cannot be
            written.
    """
    if to_stdout:
        format_document(document.to_wire())
        return

    from scardoc.parser.loader import save_document

    try:
        path = save_document(document, out, indent=indent)
    except OSError as exc:
        error(f"Failed to write {out}: {exc}")
        raise typer.Exit(code=1) from None
    success(
        f"Saved {document.function_count()} functions, {len(document.enums)} enums, "
        f"{len(document.globals)} globals to {path}"
    )
