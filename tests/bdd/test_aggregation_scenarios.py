"""Behaviour tests for aggregation pages using pytest-bdd.

The scenarios in ``aggregation.feature`` build a small site on disk whose
``guide`` page aggregates a two-chapter book. Each scenario tweaks the
directive, builds the site with :class:`~folio_pages.site.SiteBuilder`, and
inspects the written HTML with BeautifulSoup.

Usage
-----
Run ``pytest tests/bdd/test_aggregation_scenarios.py -v``. No network access
or external services are required.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, parsers, scenarios, then, when
from ruamel.yaml import YAML

from folio_pages.config import load_site_config
from folio_pages.site import SiteBuilder

if typ.TYPE_CHECKING:
    import io

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "aggregation.feature"
scenarios(FEATURE_FILE)

ScenarioState = dict[str, typ.Any]

BOOK = {
    "chapter1.md": "# Chapter One\n",
    "chapter1": {"a.md": "## Part A\n", "b.md": "## Part B\n"},
    "chapter2.md": "# Chapter Two\n",
}


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Share mutable scenario data across pytest-bdd steps."""
    return {}


@given("a site whose guide aggregates a book with two chapters")
def given_site(tmp_path: Path, make_files, scenario_state: ScenarioState) -> None:
    """Write the site config and book, leaving the guide page to the build step."""
    make_files(tmp_path, {"site.yaml": "locales: [en]\n", "book": BOOK})
    (tmp_path / "content").mkdir()
    scenario_state["site_dir"] = tmp_path
    scenario_state["directive"] = {"aggregation-path": "book"}


@given(parsers.parse("the guide paginates at depth {depth:d}"))
def given_depth(scenario_state: ScenarioState, depth: int) -> None:
    """Set the depth down to which pages are opened."""
    scenario_state["directive"]["paginate-at-depth"] = depth


@given("the guide skips its own page")
def given_skip_owner(scenario_state: ScenarioState) -> None:
    """Leave the owner page out of the sequence."""
    scenario_state["directive"]["ignore-owner-page"] = True


@when("the site is built")
def when_site_built(scenario_state: ScenarioState) -> None:
    """Write the guide page with the accumulated directive and build the site."""
    site_dir = typ.cast("Path", scenario_state["site_dir"])
    guide = site_dir / "content" / "guide.html"
    with guide.open("w", encoding="utf-8") as handle:
        handle.write("---\n")
        _dump(scenario_state["directive"], handle)
        handle.write("---\n{{ includeAllResult }}\n")
    config = load_site_config(site_dir / "site.yaml")
    scenario_state["public"] = config.output_dir
    scenario_state["written"] = SiteBuilder(config).run()


@then(parsers.parse("the pages {names} are written in sequence"))
def then_pages_in_sequence(scenario_state: ScenarioState, names: str) -> None:
    """Verify the written pages, their order, and their page positions."""
    expected = [name.strip() for name in names.split(",")]
    written = typ.cast("list[Path]", scenario_state["written"])
    assert [path.stem for path in written] == expected
    total = len(expected)
    for number, path in enumerate(written, start=1):
        soup = _soup(path)
        position = soup.select_one(".folio-pagination__position")
        assert position is not None
        assert position.get_text() == f"{number} / {total}"
        previous = soup.select_one("a[rel=prev]")
        following = soup.select_one("a[rel=next]")
        if number == 1:
            assert previous is None
        else:
            assert previous["href"] == f"{expected[number - 2]}.html"
        if number == total:
            assert following is None
        else:
            assert following["href"] == f"{expected[number]}.html"


@then(parsers.parse('the {page} page contains the headings "{headings}"'))
def then_page_headings(scenario_state: ScenarioState, page: str, headings: str) -> None:
    """Verify the aggregated content of ``page`` in document order."""
    public = typ.cast("Path", scenario_state["public"])
    soup = _soup(public / f"{page}.html")
    found = [h.get_text() for h in soup.select("main h1, main h2")]
    assert found == [heading.strip() for heading in headings.split(",")]


def _dump(data: dict[str, typ.Any], stream: io.TextIOBase) -> None:
    yaml = YAML()
    yaml.default_flow_style = False
    yaml.dump(data, stream)


def _soup(path: Path) -> BeautifulSoup:
    return BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")
