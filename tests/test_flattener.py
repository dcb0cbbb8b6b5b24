"""Unit tests for subtree flattening and owner-page merging."""

from __future__ import annotations

import collections
import typing as typ
from pathlib import Path

import pytest

from folio_pages.pagination import (
    DirectoryEntry,
    FileEntry,
    PageGroup,
    PaginationInvariantError,
    PairedEntry,
    build_entries,
    flatten,
    merge_owner,
)
from folio_pages.pagination.flattener import documents_of

ROOT = Path("/site/book")

DEEP_LAYOUT: dict[str, typ.Any] = {
    "intro.md": "Intro",
    "part10.md": "Part 10",
    "part2.md": "Part 2",
    "part2": {
        "section1.md": "S1",
        "section1": {"detail.md": "Detail", "notes": {"n1.md": "N1"}},
        "section2.md": "S2",
    },
    "appendix": {"glossary.md": "Glossary", "index.md": "Index"},
}


def _names(groups: typ.Iterable[PageGroup]) -> list[list[str]]:
    return [[doc.name for doc in group.documents] for group in groups]


def test_entries_pair_documents_with_same_named_directories(make_tree) -> None:
    tree = make_tree(ROOT, DEEP_LAYOUT)
    entries = build_entries(tree)
    assert [type(entry) for entry in entries] == [
        DirectoryEntry,
        FileEntry,
        PairedEntry,
        FileEntry,
    ]
    assert [entry.name for entry in entries] == ["appendix", "intro", "part2", "part10"]


def test_directory_pairs_with_a_single_document(make_tree) -> None:
    tree = make_tree(ROOT, {"a.html": "x", "a.md": "y", "a": {"child.md": "z"}})
    entries = build_entries(tree)
    assert sum(isinstance(entry, PairedEntry) for entry in entries) == 1
    groups = flatten(tree, max_depth=1)
    assert sorted(doc.name for doc in documents_of(groups)) == ["a.html", "a.md", "child.md"]


def test_paired_subtree_folds_into_group_at_max_depth(make_tree, book_layout) -> None:
    tree = make_tree(ROOT, book_layout)
    groups = flatten(tree, max_depth=1)
    assert _names(groups) == [["chapter1.md", "a.md", "b.md"], ["chapter2.md"]]
    assert [group.depth for group in groups] == [1, 1]


def test_groups_spawn_per_entry_above_max_depth(make_tree, book_layout) -> None:
    tree = make_tree(ROOT, book_layout)
    groups = flatten(tree, max_depth=2)
    assert _names(groups) == [["chapter1.md"], ["a.md"], ["b.md"], ["chapter2.md"]]
    assert [group.depth for group in groups] == [1, 2, 2, 1]


def test_max_depth_zero_collapses_everything(make_tree) -> None:
    tree = make_tree(ROOT, DEEP_LAYOUT)
    groups = flatten(tree, max_depth=0)
    assert len(groups) == 1
    assert _names(groups) == [
        [
            "glossary.md",
            "index.md",
            "intro.md",
            "part2.md",
            "section1.md",
            "detail.md",
            "n1.md",
            "section2.md",
            "part10.md",
        ]
    ]


def test_directory_only_entry_opens_empty_group(make_tree) -> None:
    tree = make_tree(ROOT, {"appendix": {"x.md": "X"}, "z.md": "Z"})
    groups = flatten(tree, max_depth=2)
    assert _names(groups) == [[], ["x.md"], ["z.md"]]


@pytest.mark.parametrize("max_depth", [0, 1, 2, 3, 4])
def test_every_document_lands_in_exactly_one_group(make_tree, max_depth: int) -> None:
    tree = make_tree(ROOT, DEEP_LAYOUT)
    expected = collections.Counter(doc.path for doc in tree.iter_documents())
    groups = flatten(tree, max_depth=max_depth)
    assert collections.Counter(doc.path for doc in documents_of(groups)) == expected


def test_merge_owner_prepends_placeholder() -> None:
    groups = (PageGroup(1, ()),)
    merged = merge_owner(groups, 1, Path("/out/book.html"))
    assert merged[0].depth == 0
    assert merged[0].documents[0].placeholder
    assert merged[0].documents[0].path == Path("/out/book.html")
    assert merged[1:] == groups


def test_merge_owner_can_skip_owner_page() -> None:
    groups = (PageGroup(1, ()), PageGroup(1, ()))
    assert merge_owner(groups, 1, Path("/out/book.html"), skip_owner_page=True) == groups


def test_merge_owner_folds_single_group_when_depth_is_zero(make_tree, book_layout) -> None:
    tree = make_tree(ROOT, book_layout)
    merged = merge_owner(
        flatten(tree, max_depth=0), 0, Path("/out/book.html"), skip_owner_page=True
    )
    assert len(merged) == 1
    assert merged[0].depth == 0
    assert _names(merged) == [["book.html", "chapter1.md", "a.md", "b.md", "chapter2.md"]]


def test_merge_owner_rejects_multiple_groups_when_depth_is_zero() -> None:
    with pytest.raises(PaginationInvariantError):
        merge_owner((PageGroup(1, ()), PageGroup(1, ())), 0, Path("/out/book.html"))
