"""Recover heading structure from rendered page markup.

Pagination only depends on the :class:`HeadingExtractor` protocol, so the
markup format and the way anchors are embedded can change without touching
the linker or TOC builder. :class:`HtmlHeadingExtractor` handles the HTML
produced by :mod:`folio_pages.renderer`, where each heading carries a named
anchor: ``<h2><a name="install"></a>Install</h2>``.
"""

from __future__ import annotations

import typing as typ

from bs4 import BeautifulSoup

from folio_pages._constants import HEADING_SELECTOR

from .models import Heading

if typ.TYPE_CHECKING:
    from pathlib import Path

    from bs4 import Tag


class HeadingExtractor(typ.Protocol):
    """Anything able to list the headings of a rendered fragment."""

    def extract(self, markup: str, output_path: Path) -> tuple[Heading, ...]:
        """Return the headings of ``markup`` attributed to ``output_path``."""
        ...


class HtmlHeadingExtractor:
    """Extract ``h1``-``h6`` elements from an HTML fragment."""

    def __init__(self, anchor_attribute: str = "name") -> None:
        self.anchor_attribute = anchor_attribute

    def extract(self, markup: str, output_path: Path) -> tuple[Heading, ...]:
        """Return one :class:`Heading` per heading element in document order."""
        if not markup.strip():
            return ()
        soup = BeautifulSoup(markup, "html.parser")
        return tuple(
            Heading(
                level=int(element.name[1]),
                text=" ".join(element.get_text().split()),
                anchor=self._anchor(element),
                output_path=output_path,
            )
            for element in soup.select(HEADING_SELECTOR)
        )

    def _anchor(self, element: Tag) -> str:
        """Return the first embedded anchor name, falling back to the heading id."""
        anchor = element.find("a", attrs={self.anchor_attribute: True})
        if anchor is not None:
            return str(anchor[self.anchor_attribute])
        return str(element.get("id") or "")


def first_title(headings: typ.Sequence[Heading]) -> str | None:
    """Return the text of the first heading, if any."""
    return headings[0].text if headings else None


__all__ = ["HeadingExtractor", "HtmlHeadingExtractor", "first_title"]
