"""Build validated navigation and sidebar trees from declarative entries."""

from __future__ import annotations

import collections.abc as cabc
import logging
import types
import typing as typ

from nymph_site.errors import LinkError

from .links import is_valid_base, is_valid_link, join_base
from .models import (
    MultiSidebar,
    NavGroup,
    NavItem,
    NavLink,
    SidebarSection,
    SidebarTree,
    SingleSidebar,
)

logger = logging.getLogger(__name__)


def build_nav(
    entries: cabc.Sequence[cabc.Mapping[str, typ.Any]],
) -> tuple[NavItem, ...]:
    """Build the top navigation bar from declared entries.

    Parameters
    ----------
    entries : Sequence[Mapping[str, Any]]
        ``{text, link}`` leaves or ``{text, items}`` groups, in display order.

    Returns
    -------
    tuple[NavItem, ...]
        Validated entries in exactly the declared order.

    Raises
    ------
    LinkError
        If an entry is malformed or a link is not a valid path or URL.
    """
    items = _build_items(entries, base=None, parent="nav")
    logger.debug("built navigation bar with %d entries", len(items))
    return items


def build_sidebar(
    sections: cabc.Sequence[cabc.Mapping[str, typ.Any]]
    | cabc.Mapping[str, cabc.Sequence[cabc.Mapping[str, typ.Any]]],
) -> SidebarTree:
    """Build the sidebar, applying each section's ``base`` to its links.

    A sequence yields one sidebar for the whole site; a mapping of route prefix
    to sections yields a sidebar per route, in declared order.
    """
    match sections:
        case cabc.Mapping():
            routes: dict[str, tuple[SidebarSection, ...]] = {}
            for prefix, route_sections in sections.items():
                prefix_text = str(prefix)
                if not is_valid_base(prefix_text):
                    msg = f"sidebar route {prefix_text!r} must be a rooted site path"
                    raise LinkError(msg, field=prefix_text)
                routes[prefix_text] = _build_sections(
                    route_sections, route=prefix_text
                )
            logger.debug("built sidebar for %d route(s)", len(routes))
            return MultiSidebar(routes=types.MappingProxyType(routes))
        case cabc.Sequence() if not isinstance(sections, str):
            built = _build_sections(sections, route="sidebar")
            logger.debug("built sidebar with %d section(s)", len(built))
            return SingleSidebar(sections=built)
        case _:
            msg = "sidebar must be a list of sections or a mapping of routes"
            raise LinkError(msg, field="sidebar")


def _build_sections(entries: object, *, route: str) -> tuple[SidebarSection, ...]:
    """Build the sections of one sidebar."""
    match entries:
        case list() | tuple():
            pass
        case _:
            msg = "sidebar sections must be a list"
            raise LinkError(msg, field=route)
    return tuple(_build_section(entry, route=route) for entry in entries)


def _build_section(entry: object, *, route: str) -> SidebarSection:
    """Build one sidebar section and resolve its links against ``base``."""
    match entry:
        case {"items": list() as raw_items, **rest} if raw_items:
            pass
        case _:
            msg = "sidebar section requires a non-empty 'items' list"
            raise LinkError(msg, field=_label(entry, fallback=route))

    text = _optional_text(rest.get("text"))
    label = text or route
    base = rest.get("base")
    if base is not None:
        base = str(base)
        if not is_valid_base(base):
            msg = f"section base {base!r} must be a rooted site path"
            raise LinkError(msg, field=label)

    return SidebarSection(
        text=text,
        base=base,
        items=_build_items(raw_items, base=base, parent=label),
        collapsed=_optional_bool(rest.get("collapsed"), field=label),
    )


def _build_items(
    entries: object, *, base: str | None, parent: str
) -> tuple[NavItem, ...]:
    """Build sibling entries recursively, preserving declared order."""
    match entries:
        case list() | tuple():
            return tuple(
                _build_item(entry, base=base, parent=parent) for entry in entries
            )
        case _:
            msg = "navigation entries must be a list"
            raise LinkError(msg, field=parent)


def _build_item(entry: object, *, base: str | None, parent: str) -> NavItem:
    """Build a single ``NavLink`` or ``NavGroup`` from its mapping literal."""
    match entry:
        case cabc.Mapping():
            pass
        case _:
            msg = f"navigation entry under {parent!r} must be a mapping"
            raise LinkError(msg, field=parent)

    text = _optional_text(entry.get("text"))
    if text is None:
        msg = f"navigation entry under {parent!r} requires 'text'"
        raise LinkError(msg, field=parent)

    match entry:
        case {"link": _, "items": _}:
            msg = "entry declares both 'link' and 'items'"
            raise LinkError(msg, field=text)
        case {"link": link}:
            return _build_link(text, link, entry, base=base)
        case {"items": list() as children} if children:
            return NavGroup(
                text=text,
                items=_build_items(children, base=base, parent=text),
                collapsed=_optional_bool(entry.get("collapsed"), field=text),
            )
        case {"items": _}:
            msg = "group requires at least one child entry"
            raise LinkError(msg, field=text)
        case _:
            msg = "entry requires a 'link' or child 'items'"
            raise LinkError(msg, field=text)


def _build_link(
    text: str, link: object, entry: cabc.Mapping[str, typ.Any], *, base: str | None
) -> NavLink:
    """Validate ``link`` after applying ``base`` and build the leaf entry."""
    if not isinstance(link, str):
        msg = f"link {link!r} must be a string"
        raise LinkError(msg, field=text)
    resolved = join_base(base, link) if is_valid_link(link) else link
    if not is_valid_link(resolved):
        msg = f"link {link!r} is not a valid path or absolute URL"
        raise LinkError(msg, field=text)
    active_match = entry.get("activeMatch", entry.get("active_match"))
    return NavLink(
        text=text,
        link=resolved,
        active_match=str(active_match) if active_match else None,
    )


def _optional_text(value: object) -> str | None:
    """Return a stripped label or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _optional_bool(value: object, *, field: str) -> bool | None:
    if value is None or isinstance(value, bool):
        return value
    msg = f"'collapsed' must be true or false, got {value!r}"
    raise LinkError(msg, field=field)


def _label(entry: object, *, fallback: str) -> str:
    if isinstance(entry, cabc.Mapping):
        return _optional_text(entry.get("text")) or fallback
    return fallback


__all__ = ["build_nav", "build_sidebar"]
