"""Inspect commands -- examine a canonical document.

Provides the ``scardoc inspect`` sub-command group with read-only commands
for viewing the contents of a generated document: categories, functions,
enums, and globals. All sub-commands load the document (file, URL, or
``-`` for stdin) and present the data in table or structured output format.
"""

from __future__ import annotations

from typing import Optional

import typer

from scardoc.commands.common import fail
from scardoc.exceptions import ScardocError
from scardoc.models import CanonicalDocument
from scardoc.output import get_output, info


inspect_app = typer.Typer(no_args_is_help=True)


def _load(source: str) -> CanonicalDocument:
    """Load *source* or exit with the document error code."""
    from scardoc.parser import load_document

    try:
        return load_document(source)
    except ScardocError as exc:
        fail(exc)


@inspect_app.command("categories")
def inspect_categories(
    document: str = typer.Argument(..., help="Document path, URL, or '-'."),
) -> None:
    """List categories and how many functions each holds.

    Example::

        scardoc inspect categories scardoc.json
    """
    doc = _load(document)
    rows = [[c.name, str(len(c.functions))] for c in doc.categories]
    get_output().print_table(
        ["Category", "Functions"], rows, title=f"Categories ({len(rows)})"
    )


@inspect_app.command("functions")
def inspect_functions(
    document: str = typer.Argument(..., help="Document path, URL, or '-'."),
    category: Optional[str] = typer.Option(
        None, "--category", "-c", help="Only list functions of this category."
    ),
) -> None:
    """List functions with their category, source, and summary.

    Example::

        scardoc inspect functions scardoc.json --category Util
    """
    doc = _load(document)
    rows: list[list[str]] = []
    for cat in doc.categories:
        if category is not None and cat.name != category:
            continue
        for fn in cat.functions:
            rows.append([
                cat.name,
                fn.name,
                str(len(fn.parameters)),
                fn.source_origin or "-",
                fn.short_description or "",
            ])

    if not rows:
        info("No functions matched.")
        return

    get_output().print_table(
        ["Category", "Function", "Args", "Source", "Summary"],
        rows,
        title=f"Functions ({len(rows)})",
    )


@inspect_app.command("enums")
def inspect_enums(
    document: str = typer.Argument(..., help="Document path, URL, or '-'."),
) -> None:
    """List enums with up to five of their values.

    Example::

        scardoc inspect enums dump.json
    """
    doc = _load(document)
    if not doc.enums:
        info("No enums defined in this document.")
        return

    rows: list[list[str]] = []
    for enum_def in sorted(doc.enums, key=lambda e: e.name):
        names = [
            f"{v.name}={v.value}" if v.value is not None else v.name
            for v in enum_def.values
        ]
        shown = ", ".join(names[:5])
        if len(names) > 5:
            shown += "..."
        rows.append([enum_def.name, str(len(names)), shown])

    get_output().print_table(
        ["Enum", "Values", "Members"], rows, title=f"Enums ({len(rows)})"
    )


@inspect_app.command("globals")
def inspect_globals(
    document: str = typer.Argument(..., help="Document path, URL, or '-'."),
) -> None:
    """List globals with their value and type.

    Example::

        scardoc inspect globals dump.json
    """
    doc = _load(document)
    if not doc.globals:
        info("No globals defined in this document.")
        return

    rows = [
        [g.name, g.value or "-", g.type or "-", g.description or ""]
        for g in sorted(doc.globals, key=lambda g: g.name)
    ]
    get_output().print_table(
        ["Global", "Value", "Type", "Description"], rows, title=f"Globals ({len(rows)})"
    )
