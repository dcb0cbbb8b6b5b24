"""Static page generation with subtree aggregation and pagination.

This package builds a site from a content tree. Pages may aggregate a whole
subtree into a paginated sequence with previous/next links and nested tables
of contents, and every document can be grouped by metadata taxonomies.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from folio_pages import main
>>> main()  # doctest: +SKIP
>>> from folio_pages import app
>>> app(["build", "--config", "site.yaml"])  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
