"""Config commands -- view the effective configuration.

Provides the ``scardoc config`` sub-command group. ``show`` prints the
configuration after layering the global file, the project-local
``.scardoc.json``, and ``SCARDOC_*`` environment variables.
"""

from __future__ import annotations

import typer

from scardoc.commands.common import fail
from scardoc.exceptions import ScardocError
from scardoc.output import format_document, info


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show() -> None:
    """Show the effective configuration.

    Example::

        scardoc config show
        SCARDOC_STRICT=1 scardoc config show
    """
    from scardoc.config import get_config_dir, resolve_config

    try:
        config = resolve_config()
    except ScardocError as exc:
        fail(exc)
    info(f"Config directory: {get_config_dir()}")
    format_document(config.model_dump(mode="json"))


@config_app.command("path")
def config_path() -> None:
    """Print the path of the global configuration file."""
    from scardoc.config import get_config_dir

    typer.echo(str(get_config_dir() / "config.json"))
