"""Render document bodies into HTML fragments.

Bodies are Jinja templates evaluated against the page model. Markdown
documents are then converted with Python-Markdown and Pygments highlighting;
other documents are emitted as rendered. Every heading produced from Markdown
receives an embedded named anchor (``<a name="slug"></a>``) so the heading
extractor can link to it from tables of contents.
"""

from __future__ import annotations

import re
import typing as typ
from xml.etree import ElementTree as etree

from jinja2 import Environment
from markdown import Markdown
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from ._constants import MARKDOWN_SUFFIXES, MODEL_ANCHOR_SLUGS

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from xml.etree.ElementTree import Element

    from .resources import Document

HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})

DocumentProcessor: typ.TypeAlias = (
    "cabc.Callable[[Document, cabc.Mapping[str, typ.Any]], str]"
)


def _slugify(value: str) -> str:
    """Convert a string into a lowercase hyphen-separated slug.

    Letters outside ASCII are kept, so ``Über uns`` becomes ``über-uns``.
    """
    return re.sub(r"[\W_]+", "-", value.lower()).strip("-") or "section"


def _unique_slug(base: str, used: set[str]) -> str:
    """Return a unique slug, appending numeric suffixes and mutating ``used``."""
    candidate = base
    suffix = 2
    while candidate in used:
        candidate = f"{base}-{suffix}"
        suffix += 1
    used.add(candidate)
    return candidate


class HeadingAnchorExtension(Extension):
    """Insert a named anchor at the start of every Markdown heading.

    Parameters
    ----------
    used : set[str], optional
        Anchor names already taken on the page being rendered. The set is
        updated in place, so documents rendered into the same page share it.
    """

    def __init__(self, used: set[str] | None = None, **kwargs: typ.Any) -> None:
        self.used = used
        super().__init__(**kwargs)

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the heading-anchor treeprocessor after inline processing."""
        md.treeprocessors.register(
            HeadingAnchorTreeprocessor(md, self.used), "folio_heading_anchors", 5
        )


class HeadingAnchorTreeprocessor(Treeprocessor):
    """Give each heading a ``<a name=...>`` child with a slug unique per page."""

    def __init__(self, md: Markdown, used: set[str] | None = None) -> None:
        super().__init__(md)
        self.used = used

    def run(self, root: Element) -> Element:
        """Add anchors to headings lacking one."""
        used = self.used if self.used is not None else set()
        headings = [element for element in root.iter() if element.tag in HEADING_TAGS]
        for heading in headings:
            existing = next(
                (child for child in heading if child.tag == "a" and child.get("name")),
                None,
            )
            if existing is not None:
                used.add(existing.get("name", ""))
                continue
            text = "".join(heading.itertext())
            anchor = etree.Element("a", {"name": _unique_slug(_slugify(text), used)})
            anchor.tail = heading.text
            heading.text = None
            heading.insert(0, anchor)
        return root


class DocumentRenderer:
    """Render documents with consistent templating and Markdown styling."""

    def __init__(
        self, pygments_style: str = "monokai", *, environment: Environment | None = None
    ) -> None:
        """Initialize a renderer.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults to
            ``"monokai"``.
        environment : Environment, optional
            Jinja environment used to evaluate document bodies. Defaults to a
            non-escaping environment, since bodies are Markdown rather than
            HTML.
        """
        self.pygments_style = pygments_style
        self.env = environment or Environment(
            autoescape=False,  # noqa: S701 - bodies are Markdown, not HTML
            keep_trailing_newline=True,
        )

    def markdown(self, text: str, *, used_anchors: set[str] | None = None) -> str:
        """Render markdown into HTML using the configured extensions.

        ``used_anchors`` collects the heading anchor names of the page being
        assembled; a fresh set is used when it is omitted.
        """
        if not text.strip():
            return ""
        md = Markdown(
            extensions=[
                "fenced_code",
                "codehilite",
                "tables",
                "sane_lists",
                HeadingAnchorExtension(used_anchors),
            ],
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                }
            },
        )
        return md.convert(text)

    def render(self, document: Document, model: cabc.Mapping[str, typ.Any]) -> str:
        """Return the rendered HTML fragment for ``document``.

        Placeholder documents render to an empty string: the owner page's
        body is rendered by the build driver, not by the aggregation.
        """
        if document.placeholder:
            return ""
        body = self.env.from_string(document.body).render(**model)
        if document.path.suffix.lower() in MARKDOWN_SUFFIXES:
            return self.markdown(body, used_anchors=model.get(MODEL_ANCHOR_SLUGS))
        return body

    def for_locale(self, locale: str) -> DocumentProcessor:  # noqa: ARG002
        """Return the processing function used for ``locale``.

        Locale-specific content is already selected by the content tree and
        the model carries the locale, so every locale shares one function.
        """
        return self.render


__all__ = [
    "DocumentProcessor",
    "DocumentRenderer",
    "HeadingAnchorExtension",
    "HeadingAnchorTreeprocessor",
]
