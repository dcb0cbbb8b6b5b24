"""Prepare the base template model shared by every rendered page."""

from __future__ import annotations

import os
import typing as typ
from pathlib import Path

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config import SiteConfig
    from .resources import Directory, Document
    from .taxonomy import Taxonomy

ModelPreparer: typ.TypeAlias = "cabc.Callable[..., dict[str, typ.Any]]"


def relative_root(output_path: Path, output_dir: Path) -> str:
    """Return the link prefix leading from ``output_path`` back to ``output_dir``."""
    return Path(os.path.relpath(output_dir, output_path.parent)).as_posix()


def prepare_model(
    root: Directory,
    config: SiteConfig,
    locale: str,
    resource: Document,
    output_path: Path,
    taxonomy: Taxonomy,
    additional: cabc.Mapping[str, typ.Any] | None = None,
) -> dict[str, typ.Any]:
    """Return the template model for ``resource`` rendered at ``output_path``.

    Parameters
    ----------
    root : Directory
        Content tree the page belongs to.
    config : SiteConfig
        Site configuration.
    locale : str
        Locale being rendered.
    resource : Document
        Document (possibly virtual) the page is rendered for.
    output_path : Path
        Location the page is written to.
    taxonomy : Taxonomy
        Taxonomy index built for ``root``.
    additional : Mapping[str, Any], optional
        Extra entries merged over the base model.

    Returns
    -------
    dict[str, Any]
        Fresh mapping; callers may mutate it freely.
    """
    model: dict[str, typ.Any] = {
        "site": config,
        "root": root,
        "locale": locale,
        "resource": resource,
        "metadata": dict(resource.metadata),
        "output_path": output_path,
        "relative_root": relative_root(output_path, config.output_dir),
        "taxonomy": taxonomy,
    }
    if additional:
        model.update(additional)
    return model


__all__ = ["ModelPreparer", "prepare_model", "relative_root"]
