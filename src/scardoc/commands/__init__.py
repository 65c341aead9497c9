"""Built-in CLI sub-commands for scardoc.

This package groups all Typer sub-command modules that form the CLI's
top-level command tree:

* :mod:`~scardoc.commands.generate` -- build a document from annotated
  sources (``generate``) or show one file's functions (``parse``).
* :mod:`~scardoc.commands.dump` -- import an engine dump file.
* :mod:`~scardoc.commands.merge` -- reconcile several documents.
* :mod:`~scardoc.commands.inspect` -- examine categories, functions,
  enums, and globals of a document.
* :mod:`~scardoc.commands.config` -- show the effective configuration.

Each module either exports a :class:`typer.Typer` sub-application (for
multi-command groups like ``inspect`` and ``config``) or a plain callback
function registered directly on the root app (for single commands like
``generate``).
"""
