"""Utility helpers shared by the site configuration loader."""

from __future__ import annotations

import collections.abc as cabc
import types
import typing as typ
from pathlib import Path

from nymph_site.errors import ConfigError


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _as_bool(value: object, *, field: str, default: bool = False) -> bool:
    """Return ``value`` as a boolean, rejecting non-boolean scalars."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    msg = f"expected true or false, got {value!r}"
    raise ConfigError(msg, field=field)


def _as_mapping(value: object, *, field: str) -> cabc.Mapping[str, typ.Any]:
    """Return ``value`` as a mapping; ``None`` becomes an empty mapping."""
    match value:
        case None:
            return {}
        case cabc.Mapping():
            return value
        case _:
            msg = "expected a mapping"
            raise ConfigError(msg, field=field)


def _as_list(value: object, *, field: str) -> list[typ.Any]:
    """Return ``value`` as a list; ``None`` becomes an empty list."""
    match value:
        case None:
            return []
        case list():
            return value
        case _:
            msg = "expected a list"
            raise ConfigError(msg, field=field)


def _string_mapping(value: object, *, field: str) -> cabc.Mapping[str, str]:
    """Return a read-only ``str -> str`` mapping built from ``value``."""
    result: dict[str, str] = {}
    for key, target in _as_mapping(value, field=field).items():
        alias = _optional_str(key)
        language = _optional_str(target)
        if alias is None or language is None:
            msg = f"alias {key!r} -> {target!r} must name two languages"
            raise ConfigError(msg, field=field)
        result[alias] = language
    return types.MappingProxyType(result)


def _resolve_paths(entries: cabc.Iterable[object], *, root: Path) -> list[Path]:
    """Resolve grammar paths relative to the configuration file directory."""
    paths: list[Path] = []
    for entry in entries:
        text = _optional_str(entry)
        if text is None:
            msg = "grammar paths must be non-empty strings"
            raise ConfigError(msg, field="markdown.grammars")
        path = Path(text).expanduser()
        paths.append(path if path.is_absolute() else root / path)
    return paths


__all__ = [
    "_as_bool",
    "_as_list",
    "_as_mapping",
    "_optional_str",
    "_resolve_paths",
    "_string_mapping",
]
