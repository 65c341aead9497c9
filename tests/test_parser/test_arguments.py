"""Tests for scardoc.parser.arguments -- the @args grammar."""

from __future__ import annotations

import pytest

from scardoc.exceptions import ArgumentGrammarError, ParseError
from scardoc.models import Parameter
from scardoc.parser.arguments import parse_arguments


def _triples(params: list[Parameter]) -> list[tuple[str, str, bool]]:
    return [(p.type, p.name, p.required) for p in params]


# ---------------------------------------------------------------------------
# Mandatory section
# ---------------------------------------------------------------------------


class TestMandatoryArguments:
    def test_typed_pairs(self) -> None:
        params = parse_arguments("Real xpos, Real zpos")
        assert _triples(params) == [("Real", "xpos", True), ("Real", "zpos", True)]

    def test_single_argument(self) -> None:
        params = parse_arguments("PlayerID player")
        assert _triples(params) == [("PlayerID", "player", True)]

    def test_whitespace_around_entries_is_trimmed(self) -> None:
        params = parse_arguments("  Real xpos ,   Real zpos  ")
        assert [p.name for p in params] == ["xpos", "zpos"]

    def test_bare_type_gets_generated_name(self) -> None:
        params = parse_arguments("LuaTable")
        assert _triples(params) == [("LuaTable", "arg1", True)]

    def test_trailing_comma_is_ignored(self) -> None:
        params = parse_arguments("Real x, ")
        assert _triples(params) == [("Real", "x", True)]

    def test_empty_entry_still_advances_counter(self) -> None:
        params = parse_arguments("Real x,,Integer")
        assert _triples(params) == [("Real", "x", True), ("Integer", "arg3", True)]

    def test_description_is_unset(self) -> None:
        params = parse_arguments("Real xpos")
        assert params[0].description is None


# ---------------------------------------------------------------------------
# Optional section
# ---------------------------------------------------------------------------


class TestOptionalArguments:
    def test_optional_after_bracket(self) -> None:
        params = parse_arguments("Real xpos, Real zpos[, Real ypos]")
        assert _triples(params) == [
            ("Real", "xpos", True),
            ("Real", "zpos", True),
            ("Real", "ypos", False),
        ]

    def test_bracket_after_comma(self) -> None:
        params = parse_arguments("SyncWeaponID weapon, [PlayerID player]")
        assert _triples(params) == [
            ("SyncWeaponID", "weapon", True),
            ("PlayerID", "player", False),
        ]

    def test_all_optional(self) -> None:
        params = parse_arguments("[Real delay]")
        assert _triples(params) == [("Real", "delay", False)]

    def test_variadic_entry(self) -> None:
        params = parse_arguments("String race[, String race2, ...]")
        assert _triples(params) == [
            ("String", "race", True),
            ("String", "race2", False),
            ("Any", "...", False),
        ]

    def test_several_optional_entries(self) -> None:
        params = parse_arguments("EntityID e[, Real x, Real y]")
        assert [p.required for p in params] == [True, False, False]

    def test_empty_optional_section(self) -> None:
        params = parse_arguments("Real xpos[]")
        assert _triples(params) == [("Real", "xpos", True)]

    def test_order_is_mandatory_then_optional(self) -> None:
        params = parse_arguments("Real a, Real b[, Real c, Real d]")
        assert [p.name for p in params] == ["a", "b", "c", "d"]


# ---------------------------------------------------------------------------
# Generated names
# ---------------------------------------------------------------------------


class TestGeneratedNames:
    def test_counter_runs_across_sections(self) -> None:
        params = parse_arguments("Real, Real[, Real]")
        assert [p.name for p in params] == ["arg1", "arg2", "arg3"]

    def test_counter_counts_named_entries(self) -> None:
        params = parse_arguments("Real x, Integer[, Boolean]")
        assert [p.name for p in params] == ["x", "arg2", "arg3"]

    def test_first_space_splits_type_and_name(self) -> None:
        params = parse_arguments("Real x y")
        assert _triples(params) == [("Real", "x y", True)]


# ---------------------------------------------------------------------------
# Malformed input
# ---------------------------------------------------------------------------


class TestMalformedArguments:
    @pytest.mark.parametrize("text", ["", "   "])
    def test_blank_directive(self, text: str) -> None:
        with pytest.raises(ArgumentGrammarError, match="empty arguments directive"):
            parse_arguments(text)

    def test_empty_entry_in_optional_section_is_skipped(self) -> None:
        params = parse_arguments("Real x[, , Real y]")
        assert _triples(params) == [("Real", "x", True), ("Real", "y", False)]

    def test_closing_bracket_without_opening_is_kept(self) -> None:
        params = parse_arguments("Real x], Real y")
        assert _triples(params) == [("Real", "x]", True), ("Real", "y", True)]

    def test_grammar_error_is_a_parse_error(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_arguments("")
        assert exc_info.value.exit_code == 4
