"""Synthesize nested ordered-list tables of contents from headings.

A deeper heading opens exactly one nested ``<ol>`` however many levels it
skips, while a shallower heading closes one list per level it climbs. Every
list still open at the end is closed, so the markup is balanced for any
heading sequence. List items are left unclosed, which HTML permits, so a
nested list lands inside the preceding item.

Example
-------
>>> from pathlib import Path
>>> from folio_pages.pagination.models import Heading
>>> page = Path("out/guide.html")
>>> build_toc([Heading(1, "Guide", "guide", page), Heading(2, "Setup", "setup", page)], page)
'<ol><li><a href="guide.html#guide">Guide</a><ol><li><a href="guide.html#setup">Setup</a></ol></ol>'
"""

from __future__ import annotations

import typing as typ
from html import escape

from .paths import relative_path_to

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from .models import Heading

OPEN_LIST = "<ol>"
CLOSE_LIST = "</ol>"


def build_toc(headings: cabc.Iterable[Heading], relative_to: Path) -> str:
    """Return nested TOC markup linking ``headings`` from the page at ``relative_to``."""
    parts: list[str] = []
    level = 0
    opened = 0
    for heading in headings:
        if heading.level > level:
            parts.append(OPEN_LIST)
            opened += 1
            level = heading.level
        elif heading.level < level:
            # Never close more lists than are open.
            closing = min(level - heading.level, opened)
            parts.extend([CLOSE_LIST] * closing)
            opened -= closing
            level = heading.level
        href = f"{relative_path_to(heading.output_path, relative_to)}#{heading.anchor}"
        parts.append(
            f'<li><a href="{escape(href, quote=True)}">{escape(heading.text)}</a>'
        )
    parts.extend([CLOSE_LIST] * opened)
    return "".join(parts)


__all__ = ["build_toc"]
