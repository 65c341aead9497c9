"""Import the engine's flat ScarDoc dump format.

The dump is a plain text file split into sections by marker lines
(case-insensitive)::

    [ScarDoc:Functions]
    Util_ScarPos
    Player_GetName
    [ScarDoc:Globals]
    World_Size=1024
    [ScarDoc:Unknowns]
    RT_Light[Ranged]=RangeType(1)

* **Functions** -- one bare function name per line.
* **Globals** -- ``name=value``; the value is kept verbatim, further ``=``
  included. Lines without ``=`` are skipped.
* **Unknowns** -- encoded enum members ``VALUE[...]=EnumName(3)``; the
  bracket group is ignored and lines that do not match are skipped.

Unknown entries are grouped into :class:`~scardoc.models.EnumDef` records by
enum name. The engine's exporter has always repeated the first member of
each enum; :func:`group_enum_entries` reproduces that unless
``dedupe_first`` is set.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, NamedTuple, Optional

from scardoc.categorizer import categorize
from scardoc.exceptions import DumpFormatError, SourceReadError
from scardoc.models import CanonicalDocument, EnumDef, EnumValue, FunctionDoc, GlobalDef

logger = logging.getLogger(__name__)

SECTION_FUNCTIONS = "[scardoc:functions]"
SECTION_GLOBALS = "[scardoc:globals]"
SECTION_UNKNOWNS = "[scardoc:unknowns]"

_SECTIONS = (SECTION_FUNCTIONS, SECTION_GLOBALS, SECTION_UNKNOWNS)

_UNKNOWN_RE = re.compile(r"(\w+)(\[.*?\])?=(\w+)\((\d+)\)")


class DumpEntry(NamedTuple):
    """A decoded ``Unknowns`` line."""

    value_name: str
    enum_name: str
    number: str


def parse_global(line: str) -> Optional[GlobalDef]:
    """Split ``name=value`` at the first ``=``; ``None`` without one."""
    name, sep, value = line.partition("=")
    if not sep:
        return None
    return GlobalDef(name=name, value=value)


def parse_unknown(line: str) -> Optional[DumpEntry]:
    """Decode an ``Unknowns`` line, or ``None`` if it does not match."""
    match = _UNKNOWN_RE.search(line)
    if match is None:
        return None
    return DumpEntry(match.group(1), match.group(3), match.group(4))


def group_enum_entries(
    entries: Iterable[DumpEntry],
    dedupe_first: bool = False,
) -> list[EnumDef]:
    """Group decoded entries into enums, in first-seen enum order.

    Args:
        entries: Decoded ``Unknowns`` lines.
        dedupe_first: Record the first member of each enum once instead of
            twice.

    Returns:
        One :class:`EnumDef` per distinct enum name.
    """
    buckets: dict[str, list[EnumValue]] = {}
    for entry in entries:
        member = EnumValue(name=entry.value_name, value=entry.number)
        if entry.enum_name not in buckets:
            buckets[entry.enum_name] = [] if dedupe_first else [member]
        buckets[entry.enum_name].append(member)

    return [EnumDef(name=name, values=values) for name, values in buckets.items()]


def parse_dump(lines: Iterable[str], dedupe_enums: bool = False) -> CanonicalDocument:
    """Parse dump lines into a :class:`~scardoc.models.CanonicalDocument`.

    Args:
        lines: Raw dump lines.
        dedupe_enums: Passed to :func:`group_enum_entries` as
            ``dedupe_first``.

    Returns:
        A document whose categories come from the function names, enums
        from the ``Unknowns`` section, and globals from the ``Globals``
        section.

    Raises:
        DumpFormatError: If a non-blank line appears before any section
            marker.
    """
    section: Optional[str] = None
    functions: dict[str, FunctionDoc] = {}
    globals_: dict[str, GlobalDef] = {}
    unknowns: list[DumpEntry] = []

    for lineno, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        stripped = line.strip()
        if not stripped:
            continue

        marker = stripped.lower()
        if marker in _SECTIONS:
            section = marker
            continue

        if section is None:
            raise DumpFormatError(
                f"line {lineno}: content before any [ScarDoc:...] section marker"
            )
        if section == SECTION_FUNCTIONS:
            functions.setdefault(stripped, FunctionDoc(name=stripped))
        elif section == SECTION_GLOBALS:
            global_def = parse_global(line)
            if global_def is not None:
                globals_[global_def.name] = global_def
        else:
            entry = parse_unknown(line)
            if entry is not None:
                unknowns.append(entry)

    logger.debug(
        "Dump contained %d functions, %d globals, %d enum values",
        len(functions),
        len(globals_),
        len(unknowns),
    )
    return CanonicalDocument(
        categories=categorize(functions.values()),
        enums=group_enum_entries(unknowns, dedupe_first=dedupe_enums),
        globals=list(globals_.values()),
    )


def read_dump(path: str | Path, dedupe_enums: bool = False) -> CanonicalDocument:
    """Read and parse a dump file.

    Raises:
        SourceReadError: If the file is missing or cannot be read.
        DumpFormatError: If the content is structurally invalid.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise SourceReadError(f"Dump file not found: {path}")
    try:
        text = file_path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise SourceReadError(f"Failed to read dump file {path}: {exc}") from exc
    return parse_dump(text.splitlines(), dedupe_enums=dedupe_enums)
