"""Typed dataclasses describing folio site configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class SiteConfig:
    """A fully resolved site definition sourced from YAML config.

    Attributes
    ----------
    base_dir : Path
        Site root; aggregation paths are resolved against it.
    content_dir : Path
        Directory holding the content tree.
    output_dir : Path
        Directory receiving rendered pages.
    templates_dir : Path or None
        Directory holding layout templates; ``None`` selects the packaged ones.
    default_layout : str
        Layout template used when a document names none.
    locales : list[str]
        Configured locales; the first one is the default.
    taxonomies : list[str]
        Metadata properties indexed by the taxonomy.
    pygments_style : str
        Pygments style used for highlighted code blocks.
    """

    base_dir: Path
    content_dir: Path
    output_dir: Path
    templates_dir: Path | None = None
    default_layout: str = "page.jinja"
    locales: list[str] = dc.field(default_factory=lambda: ["en"])
    taxonomies: list[str] = dc.field(default_factory=lambda: ["tags"])
    pygments_style: str = "monokai"

    @property
    def default_locale(self) -> str:
        """Return the first configured locale."""
        return self.locales[0]

    @property
    def has_multiple_locales(self) -> bool:
        """Return whether content is split per locale."""
        return len(self.locales) > 1


__all__ = ["SiteConfig", "SiteConfigError"]
