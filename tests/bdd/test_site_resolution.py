"""Behaviour tests for resolving ``site.yaml`` into an engine configuration.

These pytest-bdd scenarios drive the full resolution pipeline from a config
file on disk: grammar loading, markdown registration, navigation and sidebar
building, and descriptor assembly. The feature file
``site_resolution.feature`` covers the happy path where sidebar links pick up
their section base, and the fail-fast path where an alias conflict aborts the
build before any engine configuration is written.

Usage
-----
Run ``pytest tests/bdd/test_site_resolution.py -v`` after installing the dev
dependencies (``uv sync --group dev``). Everything is written under pytest's
``tmp_path``, so no external services or checked-in fixtures are required.
"""

from __future__ import annotations

import json
import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from nymph_site.config import load_site_descriptor
from nymph_site.emit import EngineConfigWriter
from nymph_site.errors import ConflictError
from nymph_site.navigation import iter_links

if typ.TYPE_CHECKING:
    from nymph_site.site import SiteDescriptor

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "site_resolution.feature"
)
scenarios(FEATURE_FILE)

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state(tmp_path: Path) -> ScenarioState:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {
        "root": tmp_path,
        "config": {
            "title": "Nymph",
            "description": "A simple language that gets out of your way.",
            "clean_urls": True,
            "sitemap": {"hostname": "nymphlang.dev"},
        },
        "output": tmp_path / ".vitepress" / "config.mts",
    }


def _write_grammar(root: Path, name: str, aliases: list[str]) -> str:
    path = root / f"{name}.tmLanguage.json"
    path.write_text(
        json.dumps({"name": name, "aliases": aliases, "patterns": [{"match": "x"}]}),
        encoding="utf-8",
    )
    return path.name


def _resolve(scenario_state: ScenarioState) -> SiteDescriptor:
    """Write the accumulated config as YAML-compatible JSON and resolve it."""
    root = typ.cast("Path", scenario_state["root"])
    config_path = root / "site.yaml"
    config_path.write_text(json.dumps(scenario_state["config"]), encoding="utf-8")
    site = load_site_descriptor(config_path)
    EngineConfigWriter(site).write(typ.cast("Path", scenario_state["output"]))
    return site


@given("a site config with Home and Guide nav entries")
def given_nav(scenario_state: ScenarioState) -> None:
    """Declare the two top navigation entries."""
    scenario_state["config"]["nav"] = [
        {"text": "Home", "link": "/"},
        {"text": "Guide", "link": "/guide/"},
    ]


@given(
    parsers.parse(
        'an unsectioned sidebar group under base "{base}" linking "{text}" to "{link}"'
    )
)
def given_sidebar(
    scenario_state: ScenarioState, base: str, text: str, link: str
) -> None:
    """Declare one unlabelled sidebar group with a base path."""
    scenario_state["config"]["sidebar"] = [
        {"base": base, "items": [{"text": text, "link": link}]}
    ]


@given(parsers.parse('two grammars that both declare the alias "{alias}"'))
def given_conflicting_grammars(scenario_state: ScenarioState, alias: str) -> None:
    """Write two grammar files claiming the same alias."""
    root = typ.cast("Path", scenario_state["root"])
    scenario_state["config"]["markdown"] = {
        "grammars": [
            _write_grammar(root, "nymph", [alias]),
            _write_grammar(root, "nymble", [alias]),
        ]
    }


@when("I resolve the site config")
def when_resolve(scenario_state: ScenarioState) -> None:
    """Resolve the config and keep the descriptor."""
    scenario_state["site"] = _resolve(scenario_state)


@when("I try to resolve the site config")
def when_try_resolve(scenario_state: ScenarioState) -> None:
    """Resolve the config, capturing the conflict it raises."""
    with pytest.raises(ConflictError) as excinfo:
        _resolve(scenario_state)
    scenario_state["error"] = excinfo.value


@then(parsers.parse('the nav links are "{first}" and "{second}" in order'))
def then_nav_links(scenario_state: ScenarioState, first: str, second: str) -> None:
    """Verify the nav links keep their declared order."""
    site = typ.cast("SiteDescriptor", scenario_state["site"])
    links = [link.link for link in iter_links(site.nav)]
    assert links == [first, second], f"expected nav links in order, got {links!r}"


@then(parsers.parse('the sidebar item "{text}" links to "{link}"'))
def then_sidebar_link(scenario_state: ScenarioState, text: str, link: str) -> None:
    """Verify the sidebar link resolved against its base in the emitted module."""
    site = typ.cast("SiteDescriptor", scenario_state["site"])
    sidebar = site.to_engine_config()["themeConfig"]["sidebar"]
    assert sidebar == [{"items": [{"text": text, "link": link}]}], (
        f"unexpected sidebar payload {sidebar!r}"
    )
    content = typ.cast("Path", scenario_state["output"]).read_text(encoding="utf-8")
    assert f'"link": "{link}"' in content, "expected the link in the emitted module"


@then(parsers.parse('resolution fails with a conflict on "{alias}"'))
def then_conflict(scenario_state: ScenarioState, alias: str) -> None:
    """Verify the conflict names the alias."""
    error = typ.cast("ConflictError", scenario_state["error"])
    assert error.field == alias, f"expected conflict on {alias!r}, got {error.field!r}"


@then("no engine config is written")
def then_nothing_written(scenario_state: ScenarioState) -> None:
    """Verify the failed build produced no artifact."""
    output = typ.cast("Path", scenario_state["output"])
    assert not output.exists(), "expected no engine config after a failed build"
