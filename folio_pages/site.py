"""Build every page of a folio site.

:class:`SiteBuilder` walks the content tree once per configured locale,
builds the taxonomy for that tree, and renders each document through its
layout template. Documents declaring an aggregation directive expand into the
paginated sequence produced by
:class:`~folio_pages.pagination.AggregationPaginator`.

Failures are isolated per document: every page of a failing document is
discarded, the error is logged, the build carries on, and a
:class:`SiteBuildError` listing the failed documents is raised at the end.

Typical usage pairs the loader with the builder:

>>> from pathlib import Path
>>> from folio_pages.config import load_site_config
>>> from folio_pages.site import SiteBuilder
>>> config = load_site_config(Path("site.yaml"))  # doctest: +SKIP
>>> SiteBuilder(config).run()  # doctest: +SKIP
[PosixPath('public/index.html'), ...]
"""

from __future__ import annotations

import functools
import logging
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape
from markupsafe import Markup

from ._constants import LAYOUT_KEY, MODEL_OWNER, OVERRIDE_OUTPUT_KEY
from .model import prepare_model
from .pagination import AggregationPaginator, PathAndModelSupplier, has_directive
from .pagination.paths import normalize_path
from .renderer import DocumentRenderer
from .resources import load_directory, localize
from .taxonomy import Taxonomy

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config import SiteConfig
    from .resources import Directory, Document

logger = logging.getLogger(__name__)

BUILD_ERRORS = (OSError, ValueError, TypeError, RuntimeError, TemplateError)


class SiteBuildError(RuntimeError):
    """Raised after a build in which one or more documents failed."""

    def __init__(self, failures: cabc.Sequence[tuple[Path, str]]) -> None:
        self.failures = list(failures)
        listing = ", ".join(f"{path} ({locale})" for path, locale in self.failures)
        super().__init__(f"Failed to build {len(self.failures)} document(s): {listing}")


class SiteBuilder:
    """Render the content tree of a site into HTML files."""

    def __init__(
        self,
        config: SiteConfig,
        *,
        templates_dir: Path | None = None,
        renderer: DocumentRenderer | None = None,
    ) -> None:
        """Initialize the builder and its Jinja layout environment.

        Parameters
        ----------
        config : SiteConfig
            Parsed site configuration.
        templates_dir : Path, optional
            Directory containing layout templates. Defaults to the configured
            ``templates_dir`` and then to ``folio_pages/templates``.
        renderer : DocumentRenderer, optional
            Renderer for document bodies; defaults to one using the configured
            Pygments style.
        """
        self.config = config
        self.templates_dir = (
            templates_dir or config.templates_dir or Path(__file__).parent / "templates"
        )
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.renderer = renderer or DocumentRenderer(config.pygments_style)

    def run(self, locales: cabc.Sequence[str] | None = None) -> list[Path]:
        """Render every document for each of ``locales`` (default: all).

        Returns
        -------
        list[Path]
            Written files, in build order.

        Raises
        ------
        SiteBuildError
            If any document failed; pages of the other documents are written.
        """
        content = load_directory(self.config.content_dir)
        written: list[Path] = []
        failures: list[tuple[Path, str]] = []
        for locale in locales or self.config.locales:
            tree = self.tree_for(content, locale)
            taxonomy = Taxonomy.build(tree, self.config.taxonomies)
            paginator = AggregationPaginator(
                tree,
                self.config,
                functools.partial(self.output_path_for, locale=locale),
                self.renderer.for_locale,
                taxonomy,
            )
            for document in tree.iter_documents():
                try:
                    written.extend(
                        self._build_document(document, locale, tree, taxonomy, paginator)
                    )
                except BUILD_ERRORS:
                    logger.exception("Failed to build %s (%s)", document.path, locale)
                    failures.append((document.path, locale))
        if failures:
            raise SiteBuildError(failures)
        return written

    def tree_for(self, content: Directory, locale: str) -> Directory:
        """Return the view of ``content`` rendered for ``locale``."""
        if self.config.has_multiple_locales:
            return localize(content, locale, self.config.locales)
        return content

    def output_root(self, locale: str) -> Path:
        """Return the directory receiving pages for ``locale``."""
        if self.config.has_multiple_locales:
            return self.config.output_dir / locale
        return self.config.output_dir

    def output_path_for(self, document: Document, locale: str) -> Path:
        """Map ``document`` to the HTML file it is written to.

        Documents under the content directory are rebased under the output
        root; other paths, such as those of virtual documents, keep their
        location. The file is named after the document with its extensions
        replaced by ``.html``.
        """
        root = self.output_root(locale)
        override = document.metadata.get(OVERRIDE_OUTPUT_KEY)
        if isinstance(override, str) and override.strip() and not document.is_virtual:
            return normalize_path(root / override.strip().lstrip("/"))
        try:
            target = root / document.path.relative_to(self.config.content_dir)
        except ValueError:
            target = document.path
        return normalize_path(
            target.with_name(f"{document.name_without_extensions}.html")
        )

    def _build_document(
        self,
        document: Document,
        locale: str,
        tree: Directory,
        taxonomy: Taxonomy,
        paginator: AggregationPaginator,
    ) -> list[Path]:
        """Render every page produced by ``document`` and write them together."""
        default_output_path = self.output_path_for(document, locale)
        if has_directive(document.metadata):
            suppliers = paginator.generate_output_paths(
                document, locale, default_output_path
            )
        else:
            suppliers = [
                PathAndModelSupplier(
                    default_output_path,
                    functools.partial(
                        prepare_model,
                        tree,
                        self.config,
                        locale,
                        document,
                        default_output_path,
                        taxonomy,
                    ),
                )
            ]
        rendered = [
            (supplier.output_path, self.render_page(document, supplier.model()))
            for supplier in suppliers
        ]
        for output_path, html in rendered:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(html, encoding="utf-8")
            logger.info("Wrote %s", output_path)
        return [output_path for output_path, _html in rendered]

    def render_page(self, document: Document, model: dict[str, typ.Any]) -> str:
        """Render ``document``'s body against ``model`` inside its layout.

        The document is exposed as ``owner`` to both its body and the layout.
        On aggregated pages ``resource`` and ``metadata`` describe the page
        group, so the owner's own front matter is reached through
        ``owner.metadata``.
        """
        model = {**model, MODEL_OWNER: document}
        body = self.renderer.render(document, model)
        layout = document.metadata.get(LAYOUT_KEY) or self.config.default_layout
        template = self.env.get_template(str(layout))
        html = template.render(**model, content=Markup(body))  # noqa: S704
        if not html.endswith("\n"):
            html += "\n"
        return html


__all__ = ["SiteBuildError", "SiteBuilder"]
