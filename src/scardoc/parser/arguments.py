"""Argument-list grammar for ``@args`` directives.

An ``@args`` directive lists a function's parameters as ``Type name`` pairs
separated by commas. Optional parameters follow the first ``[``::

    Real xpos, Real zpos[, Real ypos]
    String race[, String race2, ...]
    SyncWeaponID weapon, [PlayerID player]
    LuaTable

Entries without a name get a generated one (``arg1``, ``arg2`` ...), counted
across both sections, and a bare ``...`` becomes a variadic ``Any`` entry.
Empty entries (``Real x, ``) are skipped but still advance the counter.

The single public entry point is :func:`parse_arguments`.
"""

from __future__ import annotations

from scardoc.exceptions import ArgumentGrammarError
from scardoc.models import Parameter

VARIADIC_TOKEN = "..."
VARIADIC_TYPE = "Any"


def parse_arguments(text: str) -> list[Parameter]:
    """Parse the text of an ``@args`` directive into ordered parameters.

    Args:
        text: Directive content after the ``@args`` tag.

    Returns:
        Mandatory parameters first, then optional ones, in declaration order.

    Raises:
        ArgumentGrammarError: If *text* is blank, so there is nothing to
            split into sections.

    Example::

        >>> [p.name for p in parse_arguments("Real xpos, Real zpos[, Real ypos]")]
        ['xpos', 'zpos', 'ypos']
    """
    if not text.strip():
        raise ArgumentGrammarError("empty arguments directive")

    mandatory, optional = _split_sections(text)

    counter = 0
    parameters: list[Parameter] = []
    for section, required in ((mandatory, True), (optional, False)):
        for entry in _split_entries(section):
            counter += 1
            if entry:
                parameters.append(_parse_entry(entry, counter, required))
    return parameters


def _split_sections(text: str) -> tuple[str, str]:
    """Split directive text into its mandatory and optional sections."""
    idx = text.find("[")
    if idx == -1:
        return text, ""

    mandatory = text[:idx].rstrip()
    if mandatory.endswith(","):
        mandatory = mandatory[:-1]

    optional = text[idx + 1 :].rstrip("]")
    if optional.startswith(","):
        optional = optional[1:]
    return mandatory, optional


def _split_entries(section: str) -> list[str]:
    """Split a section on commas; a blank section has no entries."""
    if not section.strip():
        return []
    return [entry.strip() for entry in section.split(",")]


def _parse_entry(entry: str, index: int, required: bool) -> Parameter:
    """Turn one ``Type name`` entry into a :class:`Parameter`."""
    type_name, sep, name = entry.partition(" ")
    if sep:
        return Parameter(name=name, type=type_name, required=required)
    if entry == VARIADIC_TOKEN:
        return Parameter(name=VARIADIC_TOKEN, type=VARIADIC_TYPE, required=required)
    return Parameter(name=f"arg{index}", type=entry, required=required)
