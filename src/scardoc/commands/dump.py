"""Dump command -- import the engine's ``[ScarDoc:...]`` dump file."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from scardoc.commands.common import emit_document, fail
from scardoc.exceptions import ScardocError
from scardoc.output import info, suggest


def dump_command(
    dump_file: Path = typer.Argument(..., help="Dump file written by the game engine."),
    out: Optional[str] = typer.Option(
        None, "--out", help="Output file (defaults to the configured output path)."
    ),
    dedupe_enums: bool = typer.Option(
        False,
        "--dedupe-enums",
        help="Record the first value of each enum once instead of twice.",
    ),
    to_stdout: bool = typer.Option(
        False, "--stdout", help="Print the document instead of writing a file."
    ),
) -> None:
    """Convert a dump file into a canonical document.

    Example::

        scardoc dump scardump.txt --out dump.json
        scardoc dump scardump.txt --dedupe-enums --stdout
    """
    from scardoc.config import resolve_config
    from scardoc.parser import read_dump

    try:
        config = resolve_config(cli_output=out)
        info(f"Reading dump file: {dump_file}")
        document = read_dump(
            dump_file,
            dedupe_enums=dedupe_enums or config.dump.dedupe_first_enum_value,
        )
    except ScardocError as exc:
        fail(exc)

    emit_document(document, config.output.path, to_stdout, indent=config.output.indent)
    if not to_stdout:
        suggest(f"Inspect it: scardoc inspect categories {config.output.path}")
