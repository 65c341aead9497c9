"""Merge command -- reconcile several canonical documents into one.

Documents are merged in the order given. By default adjacent pairs are
merged and only the last pair's result is kept, which is how earlier
releases behaved; ``--cumulative`` carries the running result forward so
every document contributes.
"""

from __future__ import annotations

from typing import Optional

import typer

from scardoc.commands.common import emit_document, fail
from scardoc.exceptions import InvalidUsageError, ScardocError
from scardoc.output import info, warning


def merge_command(
    documents: list[str] = typer.Argument(
        ..., help="Documents to merge: file paths, URLs, or '-' for stdin."
    ),
    out: Optional[str] = typer.Option(
        None, "--out", help="Output file (defaults to the configured output path)."
    ),
    cumulative: bool = typer.Option(
        False,
        "--cumulative",
        help="Carry each merge result forward instead of merging adjacent pairs.",
    ),
    to_stdout: bool = typer.Option(
        False, "--stdout", help="Print the document instead of writing a file."
    ),
) -> None:
    """Merge canonical documents, later documents taking precedence.

    Example::

        scardoc merge scardoc.json dump.json --out merged.json
        scardoc merge a.json b.yaml https://example.com/c.json --cumulative
    """
    from scardoc.config import resolve_config
    from scardoc.merger import fold_documents
    from scardoc.parser import load_document

    try:
        if len(documents) < 2:
            raise InvalidUsageError("merge needs at least two documents")
        if documents.count("-") > 1:
            raise InvalidUsageError("stdin ('-') can only be used once")

        config = resolve_config(cli_output=out)
        loaded = []
        for source in documents:
            info(f"Loading {source}")
            loaded.append(load_document(source))
    except ScardocError as exc:
        fail(exc)

    cumulative = cumulative or config.merge.cumulative
    if not cumulative and len(loaded) > 2:
        warning(
            "Without --cumulative only the last two documents determine the result"
        )
    merged = fold_documents(loaded, cumulative=cumulative)
    emit_document(merged, config.output.path, to_stdout, indent=config.output.indent)
