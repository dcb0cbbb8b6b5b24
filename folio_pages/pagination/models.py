"""Shared dataclasses used by the aggregation pipeline."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from folio_pages.resources import Directory, Document


@dc.dataclass(frozen=True, slots=True)
class FileEntry:
    """A document with no same-named sibling directory."""

    document: Document

    @property
    def name(self) -> str:
        return self.document.name_without_extensions


@dc.dataclass(frozen=True, slots=True)
class DirectoryEntry:
    """A directory with no same-named sibling document."""

    directory: Directory

    @property
    def name(self) -> str:
        return self.directory.name


@dc.dataclass(frozen=True, slots=True)
class PairedEntry:
    """A document and the directory named after it, e.g. ``intro.md``/``intro/``."""

    document: Document
    directory: Directory

    @property
    def name(self) -> str:
        return self.document.name_without_extensions


Entry: typ.TypeAlias = FileEntry | DirectoryEntry | PairedEntry


@dc.dataclass(frozen=True, slots=True)
class PageGroup:
    """Documents destined to be rendered together as one output page.

    Attributes
    ----------
    depth : int
        ``0`` for the page declaring the directive, ``>= 1`` for flattened
        content.
    documents : tuple[Document, ...]
        Constituent documents in render order.
    """

    depth: int
    documents: tuple[Document, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class Heading:
    """A heading recovered from rendered page content."""

    level: int
    text: str
    anchor: str
    output_path: Path


@dc.dataclass(frozen=True, slots=True)
class ResolvedPage:
    """A page group with its output location and rendered content.

    Attributes
    ----------
    group : PageGroup
        The grouped documents.
    virtual_resource : Document
        Synthetic document standing in for the group.
    output_path : Path
        Concrete output location of the page.
    locale : str
        Locale the page is rendered for.
    content : str
        Concatenated rendered output of every constituent document.
    title : str or None
        Text of the first heading in ``content``.
    headings : tuple[Heading, ...]
        Every heading in ``content``, in document order.
    """

    group: PageGroup
    virtual_resource: Document
    output_path: Path
    locale: str
    content: str = ""
    title: str | None = None
    headings: tuple[Heading, ...] = ()

    @property
    def depth(self) -> int:
        return self.group.depth

    @property
    def documents(self) -> tuple[Document, ...]:
        return self.group.documents


@dc.dataclass(frozen=True, slots=True)
class Pagination:
    """Position of a page within its sequence, exposed to templates."""

    page: int
    total: int
    depth: int
    previous_page_url: str | None = None
    previous_page_title: str | None = None
    next_page_url: str | None = None
    next_page_title: str | None = None
    page_title: str | None = None


@dc.dataclass(frozen=True, slots=True)
class PaginatedPage:
    """A resolved page with pagination and the cumulative heading list."""

    page: ResolvedPage
    pagination: Pagination
    global_toc: tuple[Heading, ...]


@dc.dataclass(frozen=True, slots=True)
class PathAndModelSupplier:
    """An output path paired with a lazily evaluated template model."""

    output_path: Path
    model_supplier: cabc.Callable[[], dict[str, typ.Any]]

    def model(self) -> dict[str, typ.Any]:
        """Evaluate and return the template model."""
        return self.model_supplier()


__all__ = [
    "DirectoryEntry",
    "Entry",
    "FileEntry",
    "Heading",
    "PageGroup",
    "PaginatedPage",
    "Pagination",
    "PairedEntry",
    "PathAndModelSupplier",
    "ResolvedPage",
]
