"""Shared test fixtures for scardoc.

Provides reusable fixtures for loading source and dump fixtures, building
small canonical documents, creating isolated config environments, managing
output state, and running CLI commands. These fixtures are automatically
discovered by pytest and available to all test modules without explicit
imports.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

import pytest

from scardoc.models import (
    CanonicalDocument,
    EnumDef,
    EnumValue,
    FunctionDoc,
    GlobalDef,
    Parameter,
)
from scardoc.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager and log routing after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale
    ("I/O operation on closed file"). Resetting forces a fresh manager
    to be created on next use. The CLI also attaches a log handler to the
    ``scardoc`` logger, which is detached here so caplog sees records again.
    """
    yield
    reset_output()
    logger = logging.getLogger("scardoc")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


# ---------------------------------------------------------------------------
# Source and dump fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def scar_tree(tmp_path: Path) -> Path:
    """Copy of the annotated source tree, safe to modify."""
    target = tmp_path / "scar"
    shutil.copytree(FIXTURES_DIR / "scar", target)
    return target


@pytest.fixture
def dump_file(tmp_path: Path) -> Path:
    """Copy of the sample engine dump."""
    target = tmp_path / "scardump.txt"
    shutil.copyfile(FIXTURES_DIR / "scardump.txt", target)
    return target


# ---------------------------------------------------------------------------
# Document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def generated_doc() -> CanonicalDocument:
    """A document as produced from annotated sources."""
    from scardoc.categorizer import categorize

    functions = [
        FunctionDoc(
            name="Util_ScarPos",
            short_description="Converts position",
            return_type="Position",
            parameters=[
                Parameter(name="xpos", type="Real"),
                Parameter(name="zpos", type="Real"),
                Parameter(name="ypos", type="Real", required=False),
            ],
            source_origin="scar/util.scar",
        ),
        FunctionDoc(
            name="Player_GetDisplayName",
            short_description="Returns the display name of a player",
            return_type="String",
            parameters=[Parameter(name="player", type="PlayerID")],
            source_origin="scar/gameplay/player.scar",
        ),
    ]
    return CanonicalDocument(categories=categorize(functions))


@pytest.fixture
def dump_doc() -> CanonicalDocument:
    """A document as produced from an engine dump."""
    from scardoc.categorizer import categorize

    functions = [FunctionDoc(name="Util_ScarPos"), FunctionDoc(name="World_GetHeightAt")]
    return CanonicalDocument(
        categories=categorize(functions),
        enums=[
            EnumDef(
                name="RangeType",
                values=[EnumValue(name="RT_Light", value="1"), EnumValue(name="RT_Heavy", value="2")],
            )
        ],
        globals=[GlobalDef(name="World_Size", value="1024")],
    )


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_CONFIG_HOME, XDG_CACHE_HOME, and XDG_DATA_HOME to
    subdirectories of tmp_path so that tests never touch real user
    config. Clears all SCARDOC_* environment variables and changes
    the working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

    for var in ["SCARDOC_MARKER", "SCARDOC_STRICT", "SCARDOC_OUTPUT"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
