"""Link validation and base-path joining for navigation entries."""

from __future__ import annotations

import re
from urllib.parse import urlsplit

ABSOLUTE_SCHEMES = ("http", "https", "mailto")
SITE_PATH_PATTERN = re.compile(r"^[^\s?#<>\"\\{}|^`]*(\?[^\s#]*)?(#\S*)?$")


def is_absolute_url(target: str) -> bool:
    """Return ``True`` when ``target`` carries a scheme or is protocol-relative."""
    if target.startswith("//"):
        return True
    return bool(urlsplit(target).scheme)


def is_valid_link(target: str) -> bool:
    """Return ``True`` for a well-formed site path or absolute URL."""
    if not target or any(char.isspace() or not char.isprintable() for char in target):
        return False
    if is_absolute_url(target):
        return _is_valid_absolute_url(target)
    return bool(SITE_PATH_PATTERN.match(target))


def is_valid_base(base: str) -> bool:
    """Return ``True`` when ``base`` is a rooted site path without query or fragment."""
    return (
        base.startswith("/")
        and not base.startswith("//")
        and is_valid_link(base)
        and "?" not in base
        and "#" not in base
    )


def join_base(base: str | None, link: str) -> str:
    """Prefix ``link`` with ``base`` unless the link is an absolute URL.

    Exactly one ``/`` separates the two parts.

    Examples
    --------
    >>> join_base("/guide", "/")
    '/guide/'
    >>> join_base("/guide/", "intro")
    '/guide/intro'
    >>> join_base("/guide", "https://example.com")
    'https://example.com'
    """
    if not base or is_absolute_url(link):
        return link
    return f"{base.rstrip('/')}/{link.lstrip('/')}"


def _is_valid_absolute_url(target: str) -> bool:
    """Validate the scheme and authority of an absolute URL."""
    if target.startswith("//"):
        return bool(urlsplit(f"https:{target}").netloc)
    try:
        parsed = urlsplit(target)
        parsed.port  # noqa: B018 - raises ValueError for malformed ports
    except ValueError:
        return False
    if parsed.scheme.lower() not in ABSOLUTE_SCHEMES:
        return False
    if parsed.scheme.lower() == "mailto":
        return bool(parsed.path)
    return bool(parsed.hostname)


__all__ = ["is_absolute_url", "is_valid_base", "is_valid_link", "join_base"]
