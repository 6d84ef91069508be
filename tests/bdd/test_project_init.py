"""Behaviour tests for ``zoe init`` using pytest-bdd."""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, parsers, scenarios, then, when

from zoe.config import load_site_config
from zoe.pipeline import build_site
from zoe.scaffold import scaffold_project

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "project_init.feature"
)
scenarios(FEATURE_FILE)

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@given(parsers.parse('a new project initialized as "{name}"'))
def given_new_project(
    name: str, tmp_path: Path, scenario_state: ScenarioState
) -> None:
    project = tmp_path / "notebook"
    scaffold_project(project, site_name=name, base_url="https://notes.test")
    scenario_state["project"] = project


@when("I build the new project")
def when_build_project(scenario_state: ScenarioState) -> None:
    project = typ.cast("Path", scenario_state["project"])
    config = load_site_config(project / "zoe-config.json")
    scenario_state["output_dir"] = build_site(config).output_dir


@when("I initialize the same directory again")
def when_init_again(scenario_state: ScenarioState) -> None:
    project = typ.cast("Path", scenario_state["project"])
    try:
        scaffold_project(project)
    except FileExistsError as exc:
        scenario_state["error"] = exc


@then(parsers.parse('the homepage title is "{title}"'))
def then_homepage_title(title: str, scenario_state: ScenarioState) -> None:
    output_dir = typ.cast("Path", scenario_state["output_dir"])
    soup = BeautifulSoup(
        (output_dir / "index.html").read_text(encoding="utf-8"), "html.parser"
    )
    assert soup.title is not None
    assert soup.title.get_text() == title


@then(parsers.parse('the posts listing links to "{url}"'))
def then_listing_links(url: str, scenario_state: ScenarioState) -> None:
    output_dir = typ.cast("Path", scenario_state["output_dir"])
    soup = BeautifulSoup(
        (output_dir / "posts" / "index.html").read_text(encoding="utf-8"),
        "html.parser",
    )
    assert url in [link["href"] for link in soup.select("ul.page-list a")]


@then("initialization fails because the directory exists")
def then_init_refused(scenario_state: ScenarioState) -> None:
    assert isinstance(scenario_state.get("error"), FileExistsError)
