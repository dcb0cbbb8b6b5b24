"""Utility helpers shared by the folio configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from .models import SiteConfigError


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _string_list(value: object, *, field: str, default: list[str]) -> list[str]:
    """Normalize a scalar or list entry into a list of non-empty strings."""
    match value:
        case None:
            return list(default)
        case str():
            items = [value]
        case list() | tuple():
            items = list(value)
        case _:
            msg = f"'{field}' must be a string or a list of strings."
            raise SiteConfigError(msg)
    normalized: list[str] = []
    for item in items:
        text = _optional_str(item)
        if text and text not in normalized:
            normalized.append(text)
    return normalized


def _resolve_dir(base_dir: Path, value: object, default: str) -> Path:
    """Resolve a configured directory relative to ``base_dir``."""
    text = _optional_str(value) or default
    return base_dir / Path(text).expanduser()


def _require_mapping(value: object, *, field: str) -> typ.Mapping[str, typ.Any]:
    """Return ``value`` as a mapping, treating ``None`` as empty."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        msg = f"'{field}' must be a mapping."
        raise SiteConfigError(msg)
    return value


__all__ = ["_optional_str", "_require_mapping", "_resolve_dir", "_string_list"]
