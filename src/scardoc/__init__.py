"""scardoc -- Extract, import, and reconcile SCAR API documentation.

This package reads ``--?`` annotation blocks from SCAR script sources, turns
them into a canonical documentation document grouped by category, imports
the engine's flat dump format into the same model, and merges several
canonical documents into one.

Typical workflow::

    scardoc generate ./scar --out scardoc.json   # annotated sources
    scardoc dump scardump.txt --out dump.json     # engine dump
    scardoc merge scardoc.json dump.json          # reconcile both

Modules:
    app: Typer application factory and CLI entry point.
    models: Pydantic models for the canonical document and configuration.
    categorizer: Name-derived grouping of functions into categories.
    merger: Field-level reconciliation of canonical documents.
    generator: Source-unit orchestration into a canonical document.
    config: XDG-aware configuration with precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.3.0"
