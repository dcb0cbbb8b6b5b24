"""Common literal values used across folio_pages.

Directive metadata keys, template model keys, and the heading selector live
here so the paginator, the build driver, templates, and tests import the same
values without drifting.

Examples
--------
>>> from folio_pages import _constants
>>> _constants.AGGREGATION_PATH_KEY
'aggregation-path'
>>> _constants.DEFAULT_PAGINATE_AT_DEPTH
1
"""

AGGREGATION_PATH_KEY = "aggregation-path"
PAGINATE_AT_DEPTH_KEY = "paginate-at-depth"
IGNORE_OWNER_PAGE_KEY = "ignore-owner-page"

# Directive names understood by earlier site layouts.
LEGACY_DIRECTIVE_ALIASES = {
    "include-all": AGGREGATION_PATH_KEY,
    "ignore-depth-0-page": IGNORE_OWNER_PAGE_KEY,
}

DEFAULT_PAGINATE_AT_DEPTH = 1

LAYOUT_KEY = "layout"
OVERRIDE_OUTPUT_KEY = "override-output-to-path"

MODEL_INCLUDE_ALL_RESULT = "includeAllResult"
MODEL_PAGINATION = "pagination"
MODEL_SUMMARY = "summary"
MODEL_GLOBAL_TOC = "globalToc"
MODEL_ANCHOR_SLUGS = "anchor_slugs"
MODEL_OWNER = "owner"

HEADING_SELECTOR = "h1, h2, h3, h4, h5, h6"
MARKDOWN_SUFFIXES = frozenset({".md", ".markdown"})
