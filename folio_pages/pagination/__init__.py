"""Flatten, locate, link, and summarize aggregated document subtrees."""

from .errors import AggregationError, PaginationInvariantError
from .flattener import build_entries, flatten, merge_owner
from .headings import HeadingExtractor, HtmlHeadingExtractor
from .linker import paginate
from .models import (
    DirectoryEntry,
    FileEntry,
    Heading,
    PageGroup,
    PaginatedPage,
    Pagination,
    PairedEntry,
    PathAndModelSupplier,
    ResolvedPage,
)
from .paginator import AggregationDirective, AggregationPaginator, has_directive
from .paths import relative_path_to, resolve_output_path
from .toc import build_toc

__all__ = [
    "AggregationDirective",
    "AggregationError",
    "AggregationPaginator",
    "DirectoryEntry",
    "FileEntry",
    "Heading",
    "HeadingExtractor",
    "HtmlHeadingExtractor",
    "PageGroup",
    "PaginatedPage",
    "Pagination",
    "PaginationInvariantError",
    "PairedEntry",
    "PathAndModelSupplier",
    "ResolvedPage",
    "build_entries",
    "build_toc",
    "flatten",
    "has_directive",
    "merge_owner",
    "paginate",
    "relative_path_to",
    "resolve_output_path",
]
