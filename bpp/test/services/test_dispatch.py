"""Tests for bpp.services.dispatch module."""

from __future__ import annotations

from bpp.core.inputs import ActionInputs
from bpp.core.result import Err, Ok
from bpp.output.console import MockConsole, Style
from bpp.services.dispatch import (
    GlobalInputs,
    candidate_browsers,
    parse_keys,
    plan_dispatch,
    resolve_bundle,
)
from bpp.stores.model import BrowserName


def _inputs(**values: str) -> ActionInputs:
    return ActionInputs(env={f"INPUT_{k.replace('_', '-').upper()}": v for k, v in values.items()})


class TestParseKeys:
    def test_parses_object(self) -> None:
        result = parse_keys('{"chrome": {"zip": "a.zip"}, "firefox": {}}')
        assert isinstance(result, Ok)
        assert result.value == {"chrome": {"zip": "a.zip"}, "firefox": {}}

    def test_missing_keys(self) -> None:
        result = parse_keys("  ")
        assert isinstance(result, Err)
        assert result.error.kind == "missing_input"

    def test_invalid_json(self) -> None:
        result = parse_keys("{chrome")
        assert isinstance(result, Err)
        assert result.error.kind == "invalid_keys"

    def test_non_object_root(self) -> None:
        result = parse_keys('["chrome"]')
        assert isinstance(result, Err)
        assert result.error.message == "keys must be a JSON object"

    def test_non_object_store_entry_becomes_empty(self) -> None:
        result = parse_keys('{"chrome": "oops"}')
        assert isinstance(result, Ok)
        assert result.value == {"chrome": {}}


class TestCandidates:
    def test_unsupported_keys_are_ignored(self) -> None:
        keys = {"safari": {}, "edge": {}, "opera": {}, "chrome": {}, "brave": {}}
        assert candidate_browsers(keys) == (BrowserName.EDGE, BrowserName.CHROME)

    def test_every_supported_store(self) -> None:
        keys = {"chrome": {}, "firefox": {}, "edge": {}, "itero": {}, "other": {}}
        assert candidate_browsers(keys) == (
            BrowserName.CHROME,
            BrowserName.FIREFOX,
            BrowserName.EDGE,
            BrowserName.ITERO,
        )


class TestResolveBundle:
    def test_override_wins(self) -> None:
        assert resolve_bundle({"zip": "own.zip"}, override="store.zip", artifact="global.zip") == "store.zip"

    def test_own_field_before_global(self) -> None:
        assert resolve_bundle({"zip": "own.zip"}, artifact="global.zip") == "own.zip"
        assert resolve_bundle({"file": "own.zip"}, artifact="global.zip") == "own.zip"

    def test_global_fills_gap(self) -> None:
        assert resolve_bundle({}, artifact="global.zip") == "global.zip"

    def test_nothing_available(self) -> None:
        assert resolve_bundle({}) is None


class TestGlobalInputs:
    def test_artifact_precedence(self) -> None:
        inputs = _inputs(zip="b.zip", artifact="c.zip")
        assert GlobalInputs.from_inputs(inputs).artifact == "b.zip"
        inputs = _inputs(file="a.zip", zip="b.zip", artifact="c.zip")
        assert GlobalInputs.from_inputs(inputs).artifact == "a.zip"

    def test_notes_alias(self) -> None:
        inputs = ActionInputs(env={"INPUT_EDGE-NOTES": "from alias"})
        assert GlobalInputs.from_inputs(inputs).notes == "from alias"


class TestPlanDispatch:
    def test_own_field_and_global_artifact(self) -> None:
        keys = {"chrome": {"zip": "a.zip"}, "firefox": {}}
        result = plan_dispatch(keys, _inputs(artifact="b.zip"), console=MockConsole())

        assert isinstance(result, Ok)
        assert keys["chrome"]["zip"] == "a.zip"
        assert keys["firefox"]["zip"] == "b.zip"
        assert result.value.browsers == (BrowserName.CHROME, BrowserName.FIREFOX)

    def test_store_override_regardless_of_order(self) -> None:
        keys = {"firefox": {"zip": "own.zip"}, "chrome": {"file": "own.zip"}}
        env = {
            "INPUT_ARTIFACT": "global.zip",
            "INPUT_CHROME-FILE": "chrome-only.zip",
        }
        result = plan_dispatch(keys, ActionInputs(env=env), console=MockConsole())

        assert isinstance(result, Ok)
        assert keys["chrome"]["zip"] == "chrome-only.zip"
        assert keys["firefox"]["zip"] == "own.zip"

    def test_no_supported_browser(self) -> None:
        result = plan_dispatch({"safari": {"zip": "a.zip"}}, _inputs(), console=MockConsole())
        assert isinstance(result, Err)
        assert result.error.message == "No supported browser found"
        assert result.error.hint == "keys must name one of chrome, firefox, edge, itero"
        assert result.error.pretty() == (
            "No supported browser found (hint: keys must name one of chrome, firefox, edge, itero)"
        )

    def test_no_artifact_anywhere(self) -> None:
        console = MockConsole()
        result = plan_dispatch({"chrome": {}, "edge": {}}, _inputs(), console=console)

        assert isinstance(result, Err)
        assert result.error.kind == "no_artifact"
        assert result.error.message == "No artifact found for deployment"
        assert result.error.hint == "set the artifact input or a <browser>-file input"
        assert console.count(Style.WARNING) == 2

    def test_store_without_bundle_is_skipped_with_warning(self) -> None:
        console = MockConsole()
        keys = {"chrome": {"zip": "a.zip"}, "edge": {}}
        result = plan_dispatch(keys, _inputs(), console=console)

        assert isinstance(result, Ok)
        assert not result.value.has_bundle(BrowserName.EDGE)
        assert "zip" not in keys["edge"]
        assert console.of_style(Style.WARNING) == [
            "🟡 SKIP    | No artifact available to submit for edge"
        ]

    def test_global_overrides_apply_to_every_store(self) -> None:
        keys = {
            "chrome": {"zip": "a.zip", "verbose": False, "versionFile": "own.json"},
            "firefox": {"zip": "b.zip"},
        }
        inputs = _inputs(verbose="1", version_file="version.json")
        result = plan_dispatch(keys, inputs, console=MockConsole())

        assert isinstance(result, Ok)
        for options in keys.values():
            assert options["verbose"] is True
            assert options["versionFile"] == "version.json"

    def test_store_values_kept_without_global_overrides(self) -> None:
        keys = {"chrome": {"zip": "a.zip", "versionFile": "own.json"}}
        plan_dispatch(keys, _inputs(), console=MockConsole())
        assert keys["chrome"]["versionFile"] == "own.json"
        assert "verbose" not in keys["chrome"]

    def test_notes_only_for_edge(self) -> None:
        keys = {"chrome": {"zip": "a.zip"}, "edge": {"zip": "a.zip"}}
        result = plan_dispatch(keys, _inputs(notes="Release notes"), console=MockConsole())

        assert isinstance(result, Ok)
        assert keys["edge"]["notes"] == "Release notes"
        assert "notes" not in keys["chrome"]

    def test_notes_ignored_without_edge(self) -> None:
        keys = {"chrome": {"zip": "a.zip"}}
        plan_dispatch(keys, _inputs(notes="Release notes"), console=MockConsole())
        assert "edge" not in keys
        assert "notes" not in keys["chrome"]
