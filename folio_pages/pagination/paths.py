"""Output path helpers for aggregated pages."""

from __future__ import annotations

import os
import typing as typ
from pathlib import Path

from folio_pages.resources import virtual_document

from .errors import PaginationInvariantError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from folio_pages.resources import Document

    from .models import PageGroup

OutputPathMapper: typ.TypeAlias = "cabc.Callable[[Document], Path]"


def normalize_path(path: Path) -> Path:
    """Collapse ``.`` and ``..`` segments without touching the filesystem."""
    return Path(os.path.normpath(path))


def relative_path_to(target: Path, base: Path) -> str:
    """Return the relative link from the page written at ``base`` to ``target``.

    Example
    -------
    >>> relative_path_to(Path("out/b/two.html"), Path("out/a/one.html"))
    '../b/two.html'
    """
    return Path(os.path.relpath(target, base.parent)).as_posix()


def resolve_output_path(
    group: PageGroup,
    *,
    default_output_path: Path,
    aggregation_base: Path,
    output_path_for: OutputPathMapper,
) -> tuple[Document, Path]:
    """Return the virtual resource and output path for ``group``.

    The owner page (depth ``0``) keeps its own location. Any other group is
    named after its first document: that document's path relative to
    ``aggregation_base`` is re-rooted next to the owner's default output path
    and passed through ``output_path_for``.

    Raises
    ------
    PaginationInvariantError
        If ``group`` holds no documents.
    """
    if not group.documents:
        msg = f"Cannot resolve an output path for an empty group at depth {group.depth}."
        raise PaginationInvariantError(msg)
    first = group.documents[0]
    if group.depth == 0:
        return first, first.path
    relative = first.path.relative_to(aggregation_base)
    virtual = virtual_document(default_output_path.parent / relative, first)
    return virtual, normalize_path(output_path_for(virtual))


__all__ = [
    "OutputPathMapper",
    "normalize_path",
    "relative_path_to",
    "resolve_output_path",
]
