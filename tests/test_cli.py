"""Tests for the ``folio`` command-line interface."""

from __future__ import annotations

from pathlib import Path

import pytest

from folio_pages import cli
from folio_pages.site import SiteBuildError


@pytest.fixture
def site_dir(tmp_path: Path, make_files, monkeypatch: pytest.MonkeyPatch) -> Path:
    make_files(
        tmp_path,
        {
            "site.yaml": "locales: [en, de]\ntaxonomies: [tags]\n",
            "content": {
                "index.md": "---\ntags: [intro, news]\n---\n# Home\n",
                "about.md": "---\ntags: news\n---\n# About\n",
                "about.de.md": "---\ntags: neu\n---\n# Über uns\n",
            },
        },
    )
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_build_reports_written_pages(site_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cli.build(config=site_dir / "site.yaml", locale="de")
    out = capsys.readouterr().out.splitlines()
    assert out == ["wrote public/de/about.html", "wrote public/de/index.html"]
    assert not (site_dir / "public" / "en").exists()


def test_build_rejects_unknown_locales(site_dir: Path) -> None:
    with pytest.raises(ValueError, match="Known locales: en, de"):
        cli.build(config=site_dir / "site.yaml", locale="fr")


def test_build_surfaces_document_failures(site_dir: Path) -> None:
    (site_dir / "content" / "book.md").write_text(
        "---\naggregation-path: missing\n---\n", encoding="utf-8"
    )
    with pytest.raises(SiteBuildError, match="book.md"):
        cli.build(config=site_dir / "site.yaml", locale="en")


def test_taxonomy_lists_groups_per_locale(
    site_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.taxonomy(config=site_dir / "site.yaml", locale="en")
    assert capsys.readouterr().out.splitlines() == [
        "intro:",
        "  content/index.md",
        "news:",
        "  content/about.md",
        "  content/index.md",
    ]
    cli.taxonomy(config=site_dir / "site.yaml", locale="de")
    assert "neu:" in capsys.readouterr().out
