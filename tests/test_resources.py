"""Unit tests for loading and localizing the document tree."""

from __future__ import annotations

from pathlib import Path

import pytest

from folio_pages.resources import (
    Document,
    load_directory,
    localize,
    parse_front_matter,
    placeholder_document,
    virtual_document,
)


def test_front_matter_is_split_from_the_body() -> None:
    metadata, body = parse_front_matter("---\ntitle: Guide\ntags: [a, b]\n---\n# Guide\n")
    assert metadata == {"title": "Guide", "tags": ["a", "b"]}
    assert body == "# Guide\n"


def test_text_without_front_matter_is_all_body() -> None:
    assert parse_front_matter("# Plain\n") == ({}, "# Plain\n")


def test_empty_front_matter_is_an_empty_mapping() -> None:
    assert parse_front_matter("---\n---\nBody\n") == ({}, "Body\n")


def test_non_mapping_front_matter_is_rejected() -> None:
    with pytest.raises(TypeError, match="mapping"):
        parse_front_matter("---\n- one\n- two\n---\nBody\n")


def test_load_directory_reads_nested_documents(tmp_path: Path, make_files) -> None:
    root = make_files(
        tmp_path / "content",
        {
            "index.md": "---\ntitle: Home\n---\nWelcome\n",
            ".draft.md": "hidden",
            "guide": {"setup.md": "Setup\n", ".cache": {"x.md": "x"}},
        },
    )
    tree = load_directory(root)
    assert sorted(tree.files) == ["index.md"]
    assert tree.files["index.md"].metadata == {"title": "Home"}
    assert sorted(tree.directories) == ["guide"]
    assert sorted(tree.directories["guide"].directories) == []
    assert [doc.name for doc in tree.iter_documents()] == ["index.md", "setup.md"]


def test_load_directory_requires_an_existing_directory(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_directory(tmp_path / "missing")


def test_invalid_front_matter_names_the_file(tmp_path: Path) -> None:
    bad = tmp_path / "content"
    bad.mkdir()
    (bad / "broken.md").write_text("---\njust text\n---\n", encoding="utf-8")
    with pytest.raises(TypeError, match="broken.md"):
        load_directory(bad)


def test_localize_prefers_locale_specific_files(tmp_path: Path, make_tree) -> None:
    tree = make_tree(
        tmp_path,
        {
            "index.md": "Home",
            "index.de.md": "Startseite",
            "about.en.md": "About",
            "docs": {"faq.md": "FAQ", "faq.de.md": "FAQ (de)"},
        },
    )
    german = localize(tree, "de", ["en", "de"])
    english = localize(tree, "en", ["en", "de"])
    assert sorted(german.files) == ["index.de.md"]
    assert sorted(german.directories["docs"].files) == ["faq.de.md"]
    assert sorted(english.files) == ["about.en.md", "index.md"]
    assert sorted(english.directories["docs"].files) == ["faq.md"]


def test_synthetic_documents_are_virtual() -> None:
    source = Document(Path("books/guide/a.md"), {"title": "A"}, "Body")
    virtual = virtual_document(Path("public/a.md"), source)
    assert virtual.is_virtual
    assert virtual.origin == source.path
    assert virtual.metadata == source.metadata
    assert virtual_document(Path("public/b.md"), virtual).origin == source.path
    assert placeholder_document(Path("public/guide.html")).is_virtual
    assert not source.is_virtual
