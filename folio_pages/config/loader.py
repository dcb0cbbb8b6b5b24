"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import _optional_str, _require_mapping, _resolve_dir, _string_list
from .models import SiteConfig, SiteConfigError

DEFAULT_LOCALES = ["en"]
DEFAULT_TAXONOMIES = ["tags"]


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing a folio site.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``site.yaml``).

    Returns
    -------
    SiteConfig
        Parsed configuration with every directory resolved against the site
        base directory.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If a section has the wrong shape or no locale is configured.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from folio_pages.config import load_site_config
    >>> config = load_site_config(Path("site.yaml"))  # doctest: +SKIP
    >>> config.locales  # doctest: +SKIP
    ['en']
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    return _build_site_config(raw, config_dir=path.parent)


def _build_site_config(raw: typ.Mapping[str, typ.Any], *, config_dir: Path) -> SiteConfig:
    """Build a SiteConfig from the raw mapping of a configuration file."""
    paths = _require_mapping(raw.get("paths"), field="paths")
    render = _require_mapping(raw.get("render"), field="render")

    base_value = _optional_str(raw.get("base_dir"))
    base_dir = config_dir / base_value if base_value else config_dir
    templates_value = _optional_str(paths.get("templates_dir"))

    locales = _string_list(raw.get("locales"), field="locales", default=DEFAULT_LOCALES)
    if not locales:
        msg = "At least one locale must be configured."
        raise SiteConfigError(msg)
    taxonomies = _string_list(
        raw.get("taxonomies"), field="taxonomies", default=DEFAULT_TAXONOMIES
    )

    return SiteConfig(
        base_dir=base_dir,
        content_dir=_resolve_dir(base_dir, paths.get("content_dir"), "content"),
        output_dir=_resolve_dir(base_dir, paths.get("output_dir"), "public"),
        templates_dir=base_dir / templates_value if templates_value else None,
        default_layout=_optional_str(render.get("default_layout")) or "page.jinja",
        locales=locales,
        taxonomies=taxonomies,
        pygments_style=_optional_str(render.get("pygments_style")) or "monokai",
    )


__all__ = ["load_site_config"]
