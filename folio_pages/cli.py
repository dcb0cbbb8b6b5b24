"""Cyclopts CLI entrypoint for building folio sites.

The ``folio`` console script renders a site's content tree, expanding pages
that aggregate a whole subtree into paginated sequences, and can list the
taxonomy groups of a content tree.

Examples
--------
Build every locale of the default configuration:

>>> from folio_pages.cli import main
>>> main()  # doctest: +SKIP

Build a single locale with debug logging:

>>> from folio_pages.cli import app
>>> app(["build", "--locale", "de", "--verbose"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import load_site_config
from .resources import load_directory
from .site import SiteBuilder
from .taxonomy import Taxonomy

DEFAULT_CONFIG = Path("site.yaml")

app = App(name="folio", config=cyclopts.config.Env("FOLIO_", command=False))  # type: ignore[unknown-argument]


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@app.command(help="Render every page of the site into the output directory.")
def build(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="FOLIO_CONFIG")
    ] = DEFAULT_CONFIG,
    locale: typ.Annotated[
        str | None, Parameter(help="Only build this locale", env_var="FOLIO_LOCALE")
    ] = None,
    verbose: typ.Annotated[bool, Parameter(help="Enable debug logging")] = False,
) -> None:
    """Build the site described by ``config``.

    Parameters
    ----------
    config : Path, optional
        Path to the ``site.yaml`` configuration file (overridable via
        ``FOLIO_CONFIG``).
    locale : str or None, optional
        Locale to build; when ``None`` (default) every configured locale is
        built.
    verbose : bool, optional
        Emit debug logging for flattening and pagination decisions.

    Raises
    ------
    ValueError
        If ``locale`` is not one of the configured locales.
    SiteBuildError
        If any document failed to build.
    """
    _configure_logging(verbose=verbose)
    site_config = load_site_config(config)
    if locale and locale not in site_config.locales:
        known = ", ".join(site_config.locales)
        msg = f"Unknown locale '{locale}'. Known locales: {known}"
        raise ValueError(msg)
    written = SiteBuilder(site_config).run([locale] if locale else None)
    for path in written:
        print(f"wrote {_format_path(path)}")


@app.command(help="List taxonomy groups and the documents filed under them.")
def taxonomy(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="FOLIO_CONFIG")
    ] = DEFAULT_CONFIG,
    locale: typ.Annotated[
        str | None, Parameter(help="Locale to inspect", env_var="FOLIO_LOCALE")
    ] = None,
) -> None:
    """Print every taxonomy key followed by its documents."""
    site_config = load_site_config(config)
    builder = SiteBuilder(site_config)
    content = load_directory(site_config.content_dir)
    tree = builder.tree_for(content, locale or site_config.default_locale)
    index = Taxonomy.build(tree, site_config.taxonomies)
    for key in sorted(index):
        print(f"{key}:")
        for document in index[key]:
            print(f"  {_format_path(document.path)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``folio`` console command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
