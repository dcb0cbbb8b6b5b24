"""Thread page numbers, previous/next links, and the running TOC through pages."""

from __future__ import annotations

import logging
import typing as typ

from .models import Heading, PaginatedPage, Pagination
from .paths import relative_path_to

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .models import ResolvedPage

logger = logging.getLogger(__name__)


def paginate(pages: cabc.Iterable[ResolvedPage]) -> tuple[PaginatedPage, ...]:
    """Return ``pages`` augmented with pagination and cumulative headings.

    Pages without documents are dropped before numbering, so page numbers run
    contiguously from ``1`` to the number of retained pages and links only
    point at retained neighbours.
    """
    retained = [page for page in pages if page.documents]
    total = len(retained)
    global_toc: list[Heading] = []
    paginated: list[PaginatedPage] = []
    for index, current in enumerate(retained):
        global_toc.extend(current.headings)
        previous = retained[index - 1] if index > 0 else None
        following = retained[index + 1] if index < total - 1 else None
        pagination = Pagination(
            page=index + 1,
            total=total,
            depth=current.depth,
            previous_page_url=_link(previous, current),
            previous_page_title=previous.title if previous else None,
            next_page_url=_link(following, current),
            next_page_title=following.title if following else None,
            page_title=current.title,
        )
        paginated.append(PaginatedPage(current, pagination, tuple(global_toc)))
    logger.debug("Paginated %d pages", total)
    return tuple(paginated)


def _link(target: ResolvedPage | None, current: ResolvedPage) -> str | None:
    if target is None:
        return None
    return relative_path_to(target.output_path, current.output_path)


__all__ = ["paginate"]
