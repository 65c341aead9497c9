"""Turn source units into a canonical document.

:func:`generate_document` runs the annotation parser over each
``(identifier, lines)`` pair, collects the functions into one flat set, and
categorises it. A unit that fails as a whole (unreadable, or a fatal
``@args`` error in strict mode) is recorded in
:attr:`GenerationResult.failures` and does not stop its siblings.

:func:`generate_from_directory` adds discovery and file reading on top.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from scardoc.categorizer import categorize
from scardoc.exceptions import ArgumentDirectiveError, SourceReadError
from scardoc.models import CanonicalDocument, FunctionDoc, ScardocConfig
from scardoc.parser.annotations import DEFAULT_MARKER, SourceUnitResult, parse_source_unit
from scardoc.parser.discovery import discover_source_files
from scardoc.parser.loader import read_source_unit

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Outcome of a generation run.

    Attributes:
        document: The categorised document (functions only).
        units: Per-unit parse results, in processing order.
        failures: Unit identifier -> error message for aborted units.
    """

    document: CanonicalDocument
    units: list[SourceUnitResult] = field(default_factory=list)
    failures: dict[str, str] = field(default_factory=dict)

    @property
    def diagnostics(self) -> list[str]:
        return [message for unit in self.units for message in unit.diagnostics]


def generate_document(
    units: Iterable[tuple[str, Iterable[str]]],
    marker: str = DEFAULT_MARKER,
    strict: bool = False,
) -> GenerationResult:
    """Parse every source unit and categorise the documented functions.

    Args:
        units: ``(identifier, lines)`` pairs in processing order.
        marker: Prefix of documentation comment lines.
        strict: Abort a unit on its first malformed ``@args`` directive.

    Returns:
        A :class:`GenerationResult`. When two units document the same
        function name, the first one wins and a warning is logged.
    """
    functions: dict[str, FunctionDoc] = {}
    results: list[SourceUnitResult] = []
    failures: dict[str, str] = {}

    for identifier, lines in units:
        try:
            unit = parse_source_unit(identifier, lines, marker=marker, strict=strict)
        except ArgumentDirectiveError as exc:
            logger.warning("Aborting %s: %s", identifier, exc)
            failures[identifier] = str(exc)
            continue

        results.append(unit)
        if unit.functions:
            logger.info("Read %d documented functions from %s", len(unit.functions), identifier)
        for function in unit.functions:
            first = functions.get(function.name)
            if first is not None:
                logger.warning(
                    "Duplicate function %s in %s (already documented in %s)",
                    function.name,
                    identifier,
                    first.source_origin,
                )
                continue
            functions[function.name] = function

    document = CanonicalDocument(categories=categorize(functions.values()))
    return GenerationResult(document=document, units=results, failures=failures)


def _read_units(paths: Iterable[Path], failures: dict[str, str]) -> Iterable[tuple[str, list[str]]]:
    for path in paths:
        try:
            yield read_source_unit(path)
        except SourceReadError as exc:
            logger.warning("Failed reading %s: %s", path, exc)
            failures[str(path)] = str(exc)


def generate_from_directory(
    root: str | Path,
    config: ScardocConfig | None = None,
) -> GenerationResult:
    """Discover, read, and parse every source unit below *root*.

    Args:
        root: Directory to scan.
        config: Effective configuration; defaults are used when omitted.

    Returns:
        A :class:`GenerationResult` including unreadable files in
        ``failures``.

    Raises:
        SourceReadError: If *root* is not a directory.
    """
    config = config or ScardocConfig()
    paths = discover_source_files(
        root,
        extensions=config.discovery.extensions,
        exclude=config.discovery.exclude,
        respect_gitignore=config.discovery.respect_gitignore,
    )
    logger.debug("Found %d source files below %s", len(paths), root)

    read_failures: dict[str, str] = {}
    result = generate_document(
        _read_units(paths, read_failures),
        marker=config.parser.marker,
        strict=config.parser.strict,
    )
    result.failures.update(read_failures)
    return result
