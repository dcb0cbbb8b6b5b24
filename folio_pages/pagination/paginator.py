"""Expand an aggregation directive into a paginated sequence of pages.

A page declaring ``aggregation-path`` in its metadata pulls in every document
of that subtree. :class:`AggregationPaginator` flattens the subtree into page
groups, merges in the owner page, assigns output paths, renders each group
once to recover its headings, links the pages together, and finally hands
back one :class:`~folio_pages.pagination.models.PathAndModelSupplier` per
page. Models are computed only when the supplier is called.

Example
-------
>>> from pathlib import Path
>>> from folio_pages.pagination import AggregationPaginator
>>> paginator = AggregationPaginator(  # doctest: +SKIP
...     tree, config, output_path_for, renderer.for_locale, taxonomy
... )
>>> suppliers = paginator.generate_output_paths(  # doctest: +SKIP
...     owner, "en", Path("public/book.html")
... )
>>> [s.output_path for s in suppliers]  # doctest: +SKIP
[PosixPath('public/book.html'), PosixPath('public/chapter1.html'), ...]
"""

from __future__ import annotations

import dataclasses as dc
import logging
import os
import typing as typ
from pathlib import Path

from markupsafe import Markup

from folio_pages._constants import (
    AGGREGATION_PATH_KEY,
    DEFAULT_PAGINATE_AT_DEPTH,
    IGNORE_OWNER_PAGE_KEY,
    LEGACY_DIRECTIVE_ALIASES,
    MODEL_ANCHOR_SLUGS,
    MODEL_GLOBAL_TOC,
    MODEL_INCLUDE_ALL_RESULT,
    MODEL_PAGINATION,
    MODEL_SUMMARY,
    PAGINATE_AT_DEPTH_KEY,
)
from folio_pages.model import prepare_model
from folio_pages.resources import load_directory, localize

from .errors import AggregationError
from .flattener import flatten, merge_owner
from .headings import HtmlHeadingExtractor, first_title
from .linker import paginate
from .models import PathAndModelSupplier, ResolvedPage
from .paths import resolve_output_path
from .toc import build_toc

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from folio_pages.config import SiteConfig
    from folio_pages.model import ModelPreparer
    from folio_pages.renderer import DocumentProcessor
    from folio_pages.resources import Directory, Document
    from folio_pages.taxonomy import Taxonomy

    from .headings import HeadingExtractor
    from .models import PageGroup, PaginatedPage
    from .paths import OutputPathMapper

logger = logging.getLogger(__name__)


def _canonical_metadata(metadata: cabc.Mapping[str, typ.Any]) -> dict[str, typ.Any]:
    """Return ``metadata`` with legacy directive names mapped to current ones."""
    canonical = dict(metadata)
    for alias, key in LEGACY_DIRECTIVE_ALIASES.items():
        if alias in canonical and key not in canonical:
            canonical[key] = canonical[alias]
    return canonical


def has_directive(metadata: cabc.Mapping[str, typ.Any]) -> bool:
    """Return whether ``metadata`` declares an aggregation directive."""
    return AGGREGATION_PATH_KEY in _canonical_metadata(metadata)


@dc.dataclass(frozen=True, slots=True)
class AggregationDirective:
    """Parameters of an aggregation directive read from page metadata.

    Attributes
    ----------
    path : str
        Subtree to aggregate, relative to the site base directory.
    max_depth : int
        Deepest level opening its own page; ``0`` merges everything into the
        owner page.
    skip_owner_page : bool
        Whether the owner page is left out of the sequence.
    """

    path: str
    max_depth: int = DEFAULT_PAGINATE_AT_DEPTH
    skip_owner_page: bool = False

    @classmethod
    def from_metadata(
        cls, metadata: cabc.Mapping[str, typ.Any]
    ) -> AggregationDirective:
        """Parse the directive parameters from a metadata map.

        Raises
        ------
        AggregationError
            If the path is missing or a parameter has the wrong type.
        """
        raw = _canonical_metadata(metadata)
        path = raw.get(AGGREGATION_PATH_KEY)
        if not isinstance(path, str) or not path.strip():
            msg = f"'{AGGREGATION_PATH_KEY}' must name a directory."
            raise AggregationError(msg)
        max_depth = raw.get(PAGINATE_AT_DEPTH_KEY, DEFAULT_PAGINATE_AT_DEPTH)
        if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 0:
            msg = f"'{PAGINATE_AT_DEPTH_KEY}' must be a non-negative integer, got {max_depth!r}."
            raise AggregationError(msg)
        skip = raw.get(IGNORE_OWNER_PAGE_KEY, False)
        if not isinstance(skip, bool):
            msg = f"'{IGNORE_OWNER_PAGE_KEY}' must be a boolean, got {skip!r}."
            raise AggregationError(msg)
        return cls(path=path.strip(), max_depth=max_depth, skip_owner_page=skip)


class AggregationPaginator:
    """Turn a page's aggregation directive into paginated output pages."""

    name = "aggregation"

    def __init__(
        self,
        root: Directory,
        config: SiteConfig,
        output_path_for: OutputPathMapper,
        processor_for: cabc.Callable[[str], DocumentProcessor],
        taxonomy: Taxonomy,
        *,
        heading_extractor: HeadingExtractor | None = None,
        directory_loader: cabc.Callable[[Path], Directory] = load_directory,
        model_preparer: ModelPreparer = prepare_model,
    ) -> None:
        """Initialize the paginator with its collaborators.

        Parameters
        ----------
        root : Directory
            Content tree passed to model preparation.
        config : SiteConfig
            Site configuration; supplies the base directory and locales.
        output_path_for : Callable[[Document], Path]
            Maps a (virtual) document to its output path.
        processor_for : Callable[[str], DocumentProcessor]
            Returns the content-rendering function for a locale.
        taxonomy : Taxonomy
            Taxonomy index passed to model preparation.
        heading_extractor : HeadingExtractor, optional
            Recovers headings from rendered content; defaults to
            :class:`HtmlHeadingExtractor`.
        directory_loader : Callable[[Path], Directory], optional
            Loads the aggregated subtree; defaults to reading it from disk.
        model_preparer : Callable[..., dict], optional
            Builds base template models; defaults to
            :func:`~folio_pages.model.prepare_model`.
        """
        self.root = root
        self.config = config
        self.output_path_for = output_path_for
        self.processor_for = processor_for
        self.taxonomy = taxonomy
        self.heading_extractor = heading_extractor or HtmlHeadingExtractor()
        self.directory_loader = directory_loader
        self.model_preparer = model_preparer

    def generate_output_paths(
        self, document: Document, locale: str, default_output_path: Path
    ) -> list[PathAndModelSupplier]:
        """Return one output path and lazy model per page of the sequence.

        Parameters
        ----------
        document : Document
            Page declaring the directive.
        locale : str
            Locale being rendered.
        default_output_path : Path
            Output path ``document`` would have without the directive.

        Raises
        ------
        AggregationError
            If the directive is missing, malformed, or points outside the
            site base directory.
        """
        directive = AggregationDirective.from_metadata(document.metadata)
        aggregation_base = self._aggregation_base(directive.path)
        tree = self.directory_loader(aggregation_base)
        if self.config.has_multiple_locales:
            tree = localize(tree, locale, self.config.locales)

        groups = flatten(tree, directive.max_depth)
        merged = merge_owner(
            groups,
            directive.max_depth,
            default_output_path,
            skip_owner_page=directive.skip_owner_page,
        )
        resolved = [
            self._resolve(group, locale, default_output_path, aggregation_base)
            for group in merged
            if group.documents
        ]
        pages = paginate(resolved)
        logger.info(
            "Aggregated %s into %d pages for %s (%s)",
            aggregation_base,
            len(pages),
            document.path,
            locale,
        )
        return [self._to_supplier(page, locale) for page in pages]

    def _aggregation_base(self, path: str) -> Path:
        """Resolve ``path`` against the base directory, refusing escapes."""
        base_dir = Path(os.path.abspath(self.config.base_dir))
        candidate = Path(os.path.abspath(base_dir / path))
        if not candidate.is_relative_to(base_dir):
            msg = f"{candidate} must be inside of the base directory: {base_dir}"
            raise AggregationError(msg)
        return candidate

    def _model(
        self,
        locale: str,
        resource: Document,
        output_path: Path,
        additional: cabc.Mapping[str, typ.Any] | None = None,
    ) -> dict[str, typ.Any]:
        return self.model_preparer(
            self.root,
            self.config,
            locale,
            resource,
            output_path,
            self.taxonomy,
            additional,
        )

    def _resolve(
        self,
        group: PageGroup,
        locale: str,
        default_output_path: Path,
        aggregation_base: Path,
    ) -> ResolvedPage:
        """Locate ``group`` and render its documents once."""
        virtual, output_path = resolve_output_path(
            group,
            default_output_path=default_output_path,
            aggregation_base=aggregation_base,
            output_path_for=self.output_path_for,
        )
        # Documents rendered into one page share its anchor names.
        model = self._model(locale, virtual, output_path, {MODEL_ANCHOR_SLUGS: set()})
        process = self.processor_for(locale)
        content = "".join(process(doc, model) for doc in group.documents)
        headings = self.heading_extractor.extract(content, output_path)
        return ResolvedPage(
            group=group,
            virtual_resource=virtual,
            output_path=output_path,
            locale=locale,
            content=content,
            title=first_title(headings),
            headings=headings,
        )

    def _to_supplier(self, page: PaginatedPage, locale: str) -> PathAndModelSupplier:
        resolved = page.page

        def supply() -> dict[str, typ.Any]:
            additional = {
                MODEL_INCLUDE_ALL_RESULT: Markup(resolved.content),  # noqa: S704
                MODEL_PAGINATION: page.pagination,
                MODEL_SUMMARY: Markup(  # noqa: S704
                    build_toc(resolved.headings, resolved.output_path)
                ),
                MODEL_GLOBAL_TOC: Markup(  # noqa: S704
                    build_toc(page.global_toc, resolved.output_path)
                ),
            }
            return self._model(
                locale, resolved.virtual_resource, resolved.output_path, additional
            )

        return PathAndModelSupplier(resolved.output_path, supply)


__all__ = ["AggregationDirective", "AggregationPaginator", "has_directive"]
