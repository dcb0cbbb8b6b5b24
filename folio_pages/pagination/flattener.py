"""Flatten a document subtree into ordered page groups.

Siblings are listed as entries: a document, a directory, or a document paired
with the directory named after it (``intro.md`` and ``intro/``). Entries are
walked in natural name order. Down to ``max_depth`` every entry opens its own
page group; at ``max_depth`` descendants are folded into the entry's group;
below it a whole directory level collapses into a single running group.

Example
-------
>>> from pathlib import Path
>>> from folio_pages.resources import Directory, Document
>>> tree = Directory(Path("book"), files={
...     "b.md": Document(Path("book/b.md")),
...     "a.md": Document(Path("book/a.md")),
... })
>>> [[d.name for d in g.documents] for g in flatten(tree, max_depth=1)]
[['a.md'], ['b.md']]
"""

from __future__ import annotations

import itertools
import logging
import typing as typ

from folio_pages.resources import placeholder_document
from folio_pages.sorting import alphanumeric_key

from .errors import PaginationInvariantError
from .models import DirectoryEntry, Entry, FileEntry, PageGroup, PairedEntry

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from folio_pages.resources import Directory, Document

logger = logging.getLogger(__name__)


def build_entries(directory: Directory) -> list[Entry]:
    """Return the sorted sibling entries of ``directory``.

    A directory pairs with at most one document; further documents sharing
    the same base name (``intro.md`` and ``intro.html``) stay unpaired so the
    directory's content is flattened only once.
    """
    entries: list[Entry] = []
    paired: set[str] = set()
    for name in sorted(directory.files):
        document = directory.files[name]
        base = document.name_without_extensions
        child = directory.directories.get(base)
        if child is None or base in paired:
            entries.append(FileEntry(document))
        else:
            entries.append(PairedEntry(document, child))
            paired.add(base)
    entries.extend(
        DirectoryEntry(child)
        for name, child in directory.directories.items()
        if name not in paired
    )
    entries.sort(key=lambda entry: alphanumeric_key(entry.name))
    return entries


def _split_entry(entry: Entry) -> tuple[tuple[Document, ...], Directory | None]:
    match entry:
        case PairedEntry(document=document, directory=directory):
            return (document,), directory
        case FileEntry(document=document):
            return (document,), None
        case DirectoryEntry(directory=directory):
            return (), directory
    msg = f"Unknown entry type: {entry!r}"
    raise TypeError(msg)


def documents_of(groups: cabc.Iterable[PageGroup]) -> tuple[Document, ...]:
    """Return the documents of ``groups`` concatenated in order."""
    return tuple(itertools.chain.from_iterable(group.documents for group in groups))


def flatten(
    directory: Directory, max_depth: int, depth: int = 1
) -> tuple[PageGroup, ...]:
    """Convert the subtree under ``directory`` into ordered page groups.

    Parameters
    ----------
    directory : Directory
        Root of the subtree to flatten.
    max_depth : int
        Deepest level that still opens new page groups. ``0`` collapses the
        whole subtree into a single group.
    depth : int, optional
        Level of ``directory``'s entries; callers start at ``1``.

    Returns
    -------
    tuple[PageGroup, ...]
        Page groups in tree order. Every document of the subtree appears in
        exactly one group.
    """
    groups: list[PageGroup] = []
    overflow: list[Document] | None = None
    for entry in build_entries(directory):
        own, child = _split_entry(entry)
        nested = flatten(child, max_depth, depth + 1) if child is not None else ()
        if depth > max_depth:
            if overflow is None:
                overflow = []
            overflow.extend(own)
            overflow.extend(documents_of(nested))
        elif depth == max_depth:
            groups.append(PageGroup(depth, own + documents_of(nested)))
        else:
            groups.append(PageGroup(depth, own))
            groups.extend(nested)
    if overflow is not None:
        groups.append(PageGroup(depth, tuple(overflow)))
    logger.debug(
        "Flattened %s at depth %d into %d groups", directory.path, depth, len(groups)
    )
    return tuple(groups)


def merge_owner(
    groups: cabc.Sequence[PageGroup],
    max_depth: int,
    default_output_path: Path,
    *,
    skip_owner_page: bool = False,
) -> tuple[PageGroup, ...]:
    """Insert or fold in the page that declared the aggregation directive.

    The owner page is represented by a placeholder document located at
    ``default_output_path``. With ``max_depth == 0`` the single flattened
    group is merged behind the placeholder into one depth-0 page and
    ``skip_owner_page`` is ignored.

    Raises
    ------
    PaginationInvariantError
        If ``max_depth`` is ``0`` and more than one group was produced.
    """
    placeholder = placeholder_document(default_output_path)
    if max_depth == 0:
        if len(groups) > 1:
            msg = f"Expected a single collapsed group, got {len(groups)}."
            raise PaginationInvariantError(msg)
        return (PageGroup(0, (placeholder, *documents_of(groups))),)
    if not skip_owner_page:
        return (PageGroup(0, (placeholder,)), *groups)
    return tuple(groups)


__all__ = ["build_entries", "documents_of", "flatten", "merge_owner"]
