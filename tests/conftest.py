"""Shared fixtures for building content trees in memory and on disk.

Layouts are nested mappings: a ``str`` value describes a document (its raw
text, front matter included) and a ``dict`` value describes a directory.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest

from folio_pages.config import SiteConfig
from folio_pages.resources import Directory, Document, parse_front_matter

Layout: typ.TypeAlias = "typ.Mapping[str, str | Layout]"


def build_tree(path: Path, layout: Layout) -> Directory:
    """Return an in-memory Directory mirroring ``layout`` rooted at ``path``."""
    directory = Directory(path=path)
    for name, value in layout.items():
        if isinstance(value, str):
            metadata, body = parse_front_matter(value)
            directory.files[name] = Document(path / name, metadata, body)
        else:
            directory.directories[name] = build_tree(path / name, value)
    return directory


def write_tree(path: Path, layout: Layout) -> Path:
    """Materialize ``layout`` under ``path`` and return ``path``."""
    path.mkdir(parents=True, exist_ok=True)
    for name, value in layout.items():
        if isinstance(value, str):
            (path / name).write_text(value, encoding="utf-8")
        else:
            write_tree(path / name, value)
    return path


@pytest.fixture
def site_config(tmp_path: Path) -> SiteConfig:
    """Return a single-locale site configuration rooted in ``tmp_path``."""
    return SiteConfig(
        base_dir=tmp_path,
        content_dir=tmp_path / "content",
        output_dir=tmp_path / "public",
    )


@pytest.fixture
def book_layout() -> dict[str, typ.Any]:
    """Return the two-chapter subtree used across pagination tests."""
    return {
        "chapter1.md": "---\ntitle: Chapter One\n---\nOne\n",
        "chapter1": {
            "a.md": "---\ntitle: Part A\nlevel: 2\n---\nA\n",
            "b.md": "---\ntitle: Part B\nlevel: 2\n---\nB\n",
        },
        "chapter2.md": "---\ntitle: Chapter Two\n---\nTwo\n",
    }


@pytest.fixture
def make_tree() -> typ.Callable[[Path, Layout], Directory]:
    """Return the in-memory tree builder."""
    return build_tree


@pytest.fixture
def make_files() -> typ.Callable[[Path, Layout], Path]:
    """Return the on-disk tree writer."""
    return write_tree
