"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~scardoc.exceptions.ScardocError` subclass.
Build scripts can inspect the exit code to tell a missing source tree from a
broken dump file without parsing stderr.

Example::

    $ scardoc dump broken.txt
    $ echo $?
    4   # EXIT_PARSE_ERROR -- content appeared before any section marker
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_SOURCE_UNREADABLE = 3
"""A source unit, dump file, or directory could not be read."""

EXIT_PARSE_ERROR = 4
"""Annotation or dump content could not be parsed."""

EXIT_DOCUMENT_ERROR = 5
"""A canonical document could not be loaded or validated."""
