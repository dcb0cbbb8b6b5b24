"""Load and validate site configuration YAML for folio builds.

This subpackage parses the project's ``site.yaml`` file, resolves content,
output, and template directories against the site base directory, and
produces a typed :class:`SiteConfig` that the build driver and the
aggregation paginator consume. The primary entry point is
:func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from folio_pages.config import load_site_config
>>> site = load_site_config(Path("site.yaml"))  # doctest: +SKIP
>>> site.content_dir  # doctest: +SKIP
PosixPath('content')
"""

from .loader import load_site_config
from .models import SiteConfig, SiteConfigError

__all__ = ["SiteConfig", "SiteConfigError", "load_site_config"]
