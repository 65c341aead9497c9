"""Tests for scardoc.generator -- from source units to a canonical document."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from scardoc.exceptions import SourceReadError
from scardoc.generator import generate_document, generate_from_directory
from scardoc.models import DiscoveryConfig, ParserConfig, ScardocConfig


def _names(result) -> list[str]:
    return [f.name for f in result.document.iter_functions()]


class TestGenerateDocument:
    def test_functions_from_several_units(self) -> None:
        units = [
            ("a.scar", ["--? @shortdesc A", "function Util_A()"]),
            ("b.scar", ["--? @shortdesc B", "function Player_B()"]),
        ]
        result = generate_document(units)
        assert _names(result) == ["Player_B", "Util_A"]
        assert [c.name for c in result.document.categories] == ["Player", "Util"]
        assert result.failures == {}

    def test_document_has_no_enums_or_globals(self) -> None:
        result = generate_document([("a.scar", ["--? @shortdesc A", "function Util_A()"])])
        assert result.document.enums == []
        assert result.document.globals == []

    def test_duplicate_name_keeps_first(self, caplog: pytest.LogCaptureFixture) -> None:
        units = [
            ("a.scar", ["--? @shortdesc first", "function Util_A()"]),
            ("b.scar", ["--? @shortdesc second", "function Util_A()"]),
        ]
        with caplog.at_level(logging.WARNING, logger="scardoc"):
            result = generate_document(units)
        fn = next(result.document.iter_functions())
        assert (fn.short_description, fn.source_origin) == ("first", "a.scar")
        assert any("Duplicate function Util_A" in r.getMessage() for r in caplog.records)

    def test_strict_failure_isolated_to_its_unit(self) -> None:
        units = [
            ("bad.scar", ["--? @args", "function Util_Bad()"]),
            ("good.scar", ["--? @shortdesc ok", "function Util_Good()"]),
        ]
        result = generate_document(units, strict=True)
        assert _names(result) == ["Util_Good"]
        assert list(result.failures) == ["bad.scar"]
        assert "Util_Bad" in result.failures["bad.scar"]

    def test_lenient_mode_collects_diagnostics(self) -> None:
        units = [("bad.scar", ["--? @args", "function Util_Bad()"])]
        result = generate_document(units)
        assert result.failures == {}
        assert len(result.diagnostics) == 1

    def test_custom_marker(self) -> None:
        units = [("a.scar", ["---@ @shortdesc A", "function Util_A()"])]
        assert _names(generate_document(units, marker="---@ ")) == ["Util_A"]

    def test_no_units(self) -> None:
        result = generate_document([])
        assert result.document.categories == []
        assert result.units == []


class TestGenerateFromDirectory:
    def test_fixture_tree(self, scar_tree: Path) -> None:
        result = generate_from_directory(scar_tree)
        assert sorted(_names(result)) == [
            "Player_GetDisplayName",
            "Player_GiveWeapon",
            "Util_ScarPos",
        ]
        # Player_Broken (bad @args) and the anonymous callback are discarded.
        assert len(result.diagnostics) == 2
        assert result.failures == {}

    def test_source_origin_is_the_path(self, scar_tree: Path) -> None:
        result = generate_from_directory(scar_tree)
        origins = {f.name: f.source_origin for f in result.document.iter_functions()}
        assert origins["Util_ScarPos"] == str(scar_tree / "util.scar")

    def test_optional_parameter(self, scar_tree: Path) -> None:
        result = generate_from_directory(scar_tree)
        fn = {f.name: f for f in result.document.iter_functions()}["Player_GiveWeapon"]
        assert [(p.name, p.required) for p in fn.parameters] == [
            ("weapon", True),
            ("player", False),
        ]

    def test_strict_config_aborts_broken_file(self, scar_tree: Path) -> None:
        config = ScardocConfig(parser=ParserConfig(strict=True))
        result = generate_from_directory(scar_tree, config)
        assert _names(result) == ["Util_ScarPos"]
        assert list(result.failures) == [str(scar_tree / "gameplay" / "player.scar")]

    def test_discovery_settings_are_applied(self, scar_tree: Path) -> None:
        config = ScardocConfig(discovery=DiscoveryConfig(exclude=["gameplay/"]))
        assert _names(generate_from_directory(scar_tree, config)) == ["Util_ScarPos"]

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(SourceReadError):
            generate_from_directory(tmp_path / "missing")
