"""Tests for the output formatting system.

Covers:
- OutputFormat resolution (auto -> rich/plain based on TTY)
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet and verbose modes
- format_document and print_table in all three modes
- Routing library log records through OutputLogHandler
- Global instance management
"""

from __future__ import annotations

import json
import logging

import pytest

from scardoc.output import (
    OutputFormat,
    OutputLogHandler,
    OutputManager,
    _should_disable_color,
    get_output,
    install_log_handler,
    reset_output,
    set_output,
)
from scardoc import output as output_module


# ------------------------------------------------------------------ #
# Fixtures
# ------------------------------------------------------------------ #


@pytest.fixture()
def non_tty(monkeypatch):
    """Patch stdout.isatty() to return False."""
    monkeypatch.setattr("scardoc.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    """Patch stdout.isatty() to return True."""
    monkeypatch.setattr("scardoc.output._is_tty", lambda: True)


# ------------------------------------------------------------------ #
# OutputFormat resolution
# ------------------------------------------------------------------ #


class TestOutputFormatResolution:
    """Test that AUTO format resolves correctly based on environment."""

    def test_auto_resolves_to_plain_when_not_tty(self, non_tty):
        mgr = OutputManager(format=OutputFormat.AUTO)
        assert mgr.format == OutputFormat.PLAIN

    def test_auto_resolves_to_rich_when_tty(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        mgr = OutputManager(format=OutputFormat.AUTO)
        assert mgr.format == OutputFormat.RICH

    def test_auto_resolves_to_plain_when_tty_but_no_color(self, tty):
        mgr = OutputManager(format=OutputFormat.AUTO, no_color=True)
        assert mgr.format == OutputFormat.PLAIN

    def test_explicit_json_stays_json(self, non_tty):
        mgr = OutputManager(format=OutputFormat.JSON)
        assert mgr.format == OutputFormat.JSON


class TestColorDisabling:
    def test_no_color_env_disables_color(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb_disables_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_normal_term_keeps_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


# ------------------------------------------------------------------ #
# stdout / stderr discipline
# ------------------------------------------------------------------ #


class TestStdoutStderrDiscipline:
    def test_print_data_goes_to_stdout(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.print_data("hello data")
        captured = capfd.readouterr()
        assert "hello data" in captured.out
        assert captured.err == ""

    def test_info_goes_to_stderr(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.info("some info")
        captured = capfd.readouterr()
        assert "some info" in captured.err
        assert captured.out == ""

    def test_warning_and_error_prefixes(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.warning("careful")
        mgr.error("broken")
        captured = capfd.readouterr()
        assert "Warning: careful" in captured.err
        assert "Error: broken" in captured.err

    def test_messages_are_not_markup(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN)
        mgr.info("RT_Light[Ranged]=RangeType(1)")
        captured = capfd.readouterr()
        assert "RT_Light[Ranged]=RangeType(1)" in captured.err


class TestQuietAndVerbose:
    def test_quiet_suppresses_info_and_success(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        mgr.info("info")
        mgr.success("done")
        assert capfd.readouterr().err == ""

    def test_quiet_keeps_warnings(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        mgr.warning("still shown")
        assert "still shown" in capfd.readouterr().err

    def test_debug_hidden_by_default(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.debug("hidden")
        assert capfd.readouterr().err == ""

    def test_debug_shown_with_verbose(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True)
        mgr.debug("visible")
        assert "[debug] visible" in capfd.readouterr().err


# ------------------------------------------------------------------ #
# Data formats
# ------------------------------------------------------------------ #


class TestFormatDocument:
    DOC = {"categories": [{"category_name": "Util", "category_functions": [{"name": "Util_A"}]}]}

    def test_json_mode(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.JSON, no_color=True)
        mgr.format_document(self.DOC)
        captured = capfd.readouterr()
        assert json.loads(captured.out) == self.DOC
        assert captured.err == ""

    def test_plain_mode_is_still_json(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.format_document(self.DOC)
        assert json.loads(capfd.readouterr().out) == self.DOC

    def test_rich_mode_produces_output(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.RICH, no_color=True)
        mgr.format_document(self.DOC)
        out = capfd.readouterr().out
        assert "category_name" in out
        assert "Util_A" in out

    def test_unicode_is_not_escaped(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.JSON, no_color=True)
        mgr.format_document({"name": "Café"})
        assert "Café" in capfd.readouterr().out


class TestPrintTable:
    def test_table_json_mode(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.JSON, no_color=True)
        mgr.print_table(["Category", "Functions"], [["Util", "2"], ["Player", "1"]])
        parsed = json.loads(capfd.readouterr().out)
        assert parsed == [
            {"Category": "Util", "Functions": "2"},
            {"Category": "Player", "Functions": "1"},
        ]

    def test_table_plain_mode(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.print_table(["Enum", "Values"], [["RangeType", "3"]])
        lines = capfd.readouterr().out.strip().split("\n")
        assert lines == ["Enum\tValues", "RangeType\t3"]

    def test_table_rich_mode(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.RICH, no_color=True)
        mgr.print_table(["Global", "Value"], [["World_Size", "1024"]], title="Globals")
        out = capfd.readouterr().out
        assert "World_Size" in out
        assert "Globals" in out


# ------------------------------------------------------------------ #
# Log routing
# ------------------------------------------------------------------ #


class TestLogHandler:
    def test_levels_map_to_output_methods(self, capfd, non_tty):
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True))
        install_log_handler(verbose=True)
        log = logging.getLogger("scardoc.merger")

        log.debug("dbg %d", 1)
        log.info("introducing %s", "Util_A")
        log.warning("duplicate")
        log.error("failed")

        err = capfd.readouterr().err
        assert "[debug] dbg 1" in err
        assert "introducing Util_A" in err
        assert "Warning: duplicate" in err
        assert "Error: failed" in err

    def test_info_level_hides_debug(self, capfd, non_tty):
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True))
        install_log_handler(verbose=False)
        logging.getLogger("scardoc.parser").debug("hidden")
        assert "hidden" not in capfd.readouterr().err

    def test_quiet_suppresses_info_records(self, capfd, non_tty):
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True))
        install_log_handler()
        log = logging.getLogger("scardoc.generator")
        log.info("chatty")
        log.warning("important")
        err = capfd.readouterr().err
        assert "chatty" not in err
        assert "important" in err

    def test_reinstall_replaces_handler(self):
        install_log_handler()
        install_log_handler()
        handlers = [
            h for h in logging.getLogger("scardoc").handlers if isinstance(h, OutputLogHandler)
        ]
        assert len(handlers) == 1


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #


class TestGlobalInstance:
    def test_get_output_creates_default(self):
        reset_output()
        assert isinstance(get_output(), OutputManager)

    def test_set_output_overrides(self):
        mgr = OutputManager(format=OutputFormat.JSON)
        set_output(mgr)
        assert get_output() is mgr

    def test_reset_output_clears(self):
        set_output(OutputManager(format=OutputFormat.JSON))
        reset_output()
        assert output_module._output is None

    def test_convenience_functions_use_global(self, capfd, non_tty):
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        output_module.info("via global")
        output_module.format_document({"a": 1})
        captured = capfd.readouterr()
        assert "via global" in captured.err
        assert json.loads(captured.out) == {"a": 1}
