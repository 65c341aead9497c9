"""Generate commands -- build documents from annotated script sources.

Implements the ``scardoc generate`` top-level command, which walks a source
directory, parses every ``--?`` doc block, and writes the categorised
canonical document, and ``scardoc parse``, which shows the functions found in
a single file without writing anything.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from scardoc.commands.common import emit_document, fail
from scardoc.exceptions import ScardocError
from scardoc.output import debug, get_output, info, progress, suggest, warning


def generate_command(
    directory: Path = typer.Argument(..., help="Directory containing script sources."),
    out: Optional[str] = typer.Option(
        None, "--out", help="Output file (defaults to the configured output path)."
    ),
    marker: Optional[str] = typer.Option(
        None, "--marker", help="Doc comment prefix (default '--? ')."
    ),
    strict: Optional[bool] = typer.Option(
        None,
        "--strict/--no-strict",
        help="Abort a file on its first malformed @args directive.",
    ),
    extensions: Optional[list[str]] = typer.Option(
        None, "--ext", help="Source file suffix; repeat for several."
    ),
    to_stdout: bool = typer.Option(
        False, "--stdout", help="Print the document instead of writing a file."
    ),
) -> None:
    """Generate a canonical document from a source directory.

    Every readable source file is parsed; files that cannot be read, or that
    hit a fatal ``@args`` error in strict mode, are reported and skipped.

    Example::

        scardoc generate ./scar
        scardoc generate ./scar --out docs/scardoc.json --strict
        scardoc generate ./mods --ext .scar --ext .lua --stdout
    """
    from scardoc.config import resolve_config
    from scardoc.generator import generate_from_directory

    try:
        config = resolve_config(cli_marker=marker, cli_strict=strict, cli_output=out)
        if extensions:
            config.discovery.extensions = list(extensions)
        info(f"Generating scardoc for directory: {directory}")
        result = generate_from_directory(directory, config)
    except ScardocError as exc:
        fail(exc)

    progress(f"Parsed {len(result.units)} source files")
    if result.failures:
        warning(f"Skipped {len(result.failures)} source files")
    debug(f"{len(result.diagnostics)} doc blocks discarded")

    emit_document(
        result.document,
        config.output.path,
        to_stdout,
        indent=config.output.indent,
    )
    if not to_stdout:
        suggest(f"Merge with the engine dump: scardoc merge {config.output.path} DUMP.json")


def parse_command(
    source: Path = typer.Argument(..., help="A single script source file."),
    marker: Optional[str] = typer.Option(
        None, "--marker", help="Doc comment prefix (default '--? ')."
    ),
    strict: Optional[bool] = typer.Option(
        None, "--strict/--no-strict", help="Fail on a malformed @args directive."
    ),
) -> None:
    """List the documented functions of one source file.

    Example::

        scardoc parse scar/util.scar
        scardoc --json parse scar/util.scar
    """
    from scardoc.config import resolve_config
    from scardoc.parser import parse_source_unit, read_source_unit

    try:
        config = resolve_config(cli_marker=marker, cli_strict=strict)
        identifier, lines = read_source_unit(source)
        unit = parse_source_unit(
            identifier,
            lines,
            marker=config.parser.marker,
            strict=config.parser.strict,
        )
    except ScardocError as exc:
        fail(exc)

    rows = [
        [
            fn.name,
            ", ".join(f"{p.type} {p.name}" + ("" if p.required else "?") for p in fn.parameters),
            fn.return_type or "-",
            fn.short_description or "",
        ]
        for fn in unit.functions
    ]
    get_output().print_table(
        ["Function", "Arguments", "Returns", "Summary"],
        rows,
        title=f"{identifier} ({len(rows)} functions)",
    )
    if unit.diagnostics:
        info(f"{len(unit.diagnostics)} doc blocks discarded")
