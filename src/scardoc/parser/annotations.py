"""Annotation block parser for SCAR source units.

A documented function looks like this::

    --? @shortdesc Converts a 2D top down position to a 3D ScarPosition.
    --? @extdesc
    --? If y-height is nil, y-height = ground height.
    --? @result Position
    --? @args Real xpos, Real zpos[, Real ypos]
    function Util_ScarPos(xpos, zpos, ypos)

A doc block attaches only to the declaration that *immediately* follows it.
Any other line in between, a blank line included, discards the block.

Directives are recognised by prefix, first match wins:

* ``@shortdesc <text>`` -- one-line summary; ends continuation mode.
* ``@extdesc [<text>]`` -- starts continuation mode; later untagged lines
  are appended to the extended description.
* ``@result <text>`` -- return type; ends continuation mode.
* ``@args <text>`` -- parameters, see :mod:`scardoc.parser.arguments`;
  ends continuation mode.

Public entry points are :func:`parse_function` for one doc block and
:func:`parse_source_unit` for a whole file's lines.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from scardoc.exceptions import (
    ArgumentDirectiveError,
    ArgumentGrammarError,
    FunctionDeclarationError,
)
from scardoc.models import FunctionDoc, Parameter
from scardoc.parser.arguments import parse_arguments

logger = logging.getLogger(__name__)

DEFAULT_MARKER = "--? "
"""Prefix of a documentation comment line."""

DECLARATION_KEYWORD = "function"

_SHORTDESC = "@shortdesc"
_EXTDESC = "@extdesc"
_RESULT = "@result"
_ARGS = "@args"


@dataclass
class SourceUnitResult:
    """Functions and diagnostics produced from one source unit.

    Attributes:
        identifier: The source unit identifier (usually its path).
        functions: Documented functions in declaration order.
        diagnostics: Warnings for doc blocks that were discarded.
    """

    identifier: str
    functions: list[FunctionDoc] = field(default_factory=list)
    diagnostics: list[str] = field(default_factory=list)


def extract_function_name(declaration: str) -> Optional[str]:
    """Return the name between the first space and the first ``(``.

    ``None`` when either delimiter is missing, the space comes after the
    parenthesis (anonymous functions), or the name is blank.
    """
    space = declaration.find(" ")
    paren = declaration.find("(")
    if space == -1 or paren == -1 or space + 1 >= paren:
        return None
    name = declaration[space + 1 : paren].strip()
    return name or None


def parse_function(
    declaration: str,
    doc_lines: Iterable[str],
    source_origin: Optional[str] = None,
) -> FunctionDoc:
    """Build a :class:`FunctionDoc` from a declaration and its doc block.

    Args:
        declaration: The raw ``function ...`` line.
        doc_lines: Doc block content with the marker already removed.
        source_origin: Identifier of the source unit, stored on the record.

    Returns:
        The documented function.

    Raises:
        FunctionDeclarationError: If no name can be extracted.
        ArgumentDirectiveError: If an ``@args`` directive is malformed.
    """
    name = extract_function_name(declaration)
    if name is None:
        raise FunctionDeclarationError(
            f"expected function name in declaration '{declaration.strip()}'"
        )

    short_description: Optional[str] = None
    return_type: Optional[str] = None
    extended: list[str] = []
    parameters: list[Parameter] = []

    in_extended = False
    for line in doc_lines:
        if line.startswith(_SHORTDESC):
            short_description = line[len(_SHORTDESC) :].strip()
            in_extended = False
        elif line.startswith(_EXTDESC):
            content = line[len(_EXTDESC) :].strip()
            if content:
                extended.append(content)
            in_extended = True
        elif line.startswith(_RESULT):
            return_type = line[len(_RESULT) :].strip()
            in_extended = False
        elif line.startswith(_ARGS):
            content = line[len(_ARGS) :].strip()
            try:
                parameters.extend(parse_arguments(content))
            except ArgumentGrammarError as exc:
                raise ArgumentDirectiveError(
                    f"failed to parse arguments directive '{content}' of {name}: {exc}",
                    function_name=name,
                ) from exc
            in_extended = False
        elif in_extended:
            extended.append(line)

    return FunctionDoc(
        name=name,
        short_description=short_description,
        extended_description=extended,
        return_type=return_type,
        parameters=parameters,
        source_origin=source_origin,
    )


def parse_source_unit(
    identifier: str,
    lines: Iterable[str],
    marker: str = DEFAULT_MARKER,
    strict: bool = False,
) -> SourceUnitResult:
    """Parse every documented function in one source unit.

    Args:
        identifier: Source unit identifier, copied to ``source_origin``.
        lines: Raw lines of the unit (trailing newlines are ignored).
        marker: Prefix of documentation comment lines.
        strict: Treat malformed ``@args`` directives as fatal for the unit.

    Returns:
        A :class:`SourceUnitResult` with the parsed functions and a
        diagnostic for each discarded doc block.

    Raises:
        ArgumentDirectiveError: In strict mode, with ``fatal=True``, when
            any ``@args`` directive is malformed.
    """
    result = SourceUnitResult(identifier=identifier)
    pending: list[str] = []

    for raw in lines:
        line = raw.rstrip("\r\n")
        if line.startswith(marker):
            pending.append(line[len(marker) :].strip())
            continue

        if not line.strip().startswith(DECLARATION_KEYWORD):
            pending.clear()
            continue

        if not pending:
            continue

        try:
            result.functions.append(parse_function(line.strip(), pending, identifier))
        except FunctionDeclarationError as exc:
            _record(result, exc)
        except ArgumentDirectiveError as exc:
            if strict:
                exc.fatal = True
                raise
            _record(result, exc)
        finally:
            pending.clear()

    return result


def _record(result: SourceUnitResult, exc: Exception) -> None:
    message = f"{result.identifier}: {exc}"
    logger.warning("Discarding doc block: %s", message)
    result.diagnostics.append(message)
