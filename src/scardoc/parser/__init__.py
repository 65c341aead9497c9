"""Parsers -- turn raw script sources and dump files into canonical records.

This sub-package is responsible for the first half of the scardoc pipeline:
turning raw text into :mod:`scardoc.models` records that the categorizer
and merger consume.

Typical usage::

    from scardoc.parser import parse_source_unit, read_source_unit

    identifier, lines = read_source_unit("scar/util.scar")
    result = parse_source_unit(identifier, lines)
    for function in result.functions:
        print(function.name)

Sub-modules:

* :mod:`~scardoc.parser.arguments` -- ``@args`` argument-list grammar.
* :mod:`~scardoc.parser.annotations` -- ``--?`` doc-block parser and
  directive interpreter.
* :mod:`~scardoc.parser.dump` -- ``[ScarDoc:...]`` dump importer.
* :mod:`~scardoc.parser.loader` -- canonical document and source unit I/O.
* :mod:`~scardoc.parser.discovery` -- source file discovery.
"""

from scardoc.parser.annotations import SourceUnitResult, parse_function, parse_source_unit
from scardoc.parser.arguments import parse_arguments
from scardoc.parser.discovery import discover_source_files
from scardoc.parser.dump import parse_dump, read_dump
from scardoc.parser.loader import load_document, read_source_unit, save_document

__all__ = [
    "SourceUnitResult",
    "discover_source_files",
    "load_document",
    "parse_arguments",
    "parse_dump",
    "parse_function",
    "parse_source_unit",
    "read_dump",
    "read_source_unit",
    "save_document",
]
