"""Typed variants describing the navigation bar and sidebar trees."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ


@dc.dataclass(frozen=True, slots=True)
class NavLink:
    """Leaf entry pointing at a site path or an absolute URL."""

    text: str
    link: str
    active_match: str | None = None

    def to_engine(self) -> dict[str, typ.Any]:
        """Return the entry as the engine's ``{text, link}`` record."""
        payload: dict[str, typ.Any] = {"text": self.text, "link": self.link}
        if self.active_match:
            payload["activeMatch"] = self.active_match
        return payload


@dc.dataclass(frozen=True, slots=True)
class NavGroup:
    """Labelled group of child entries, rendered in declared order."""

    text: str
    items: tuple[NavItem, ...]
    collapsed: bool | None = None

    def to_engine(self) -> dict[str, typ.Any]:
        """Return the group as the engine's ``{text, items}`` record."""
        payload: dict[str, typ.Any] = {
            "text": self.text,
            "items": [item.to_engine() for item in self.items],
        }
        if self.collapsed is not None:
            payload["collapsed"] = self.collapsed
        return payload


NavItem = NavLink | NavGroup


@dc.dataclass(frozen=True, slots=True)
class SidebarSection:
    """Top-level sidebar group whose links are already resolved against ``base``.

    Attributes
    ----------
    text : str or None
        Group label; ``None`` for an unsectioned group.
    base : str or None
        Path prefix that was applied to every relative descendant link.
    items : tuple[NavItem, ...]
        Entries in declared order.
    collapsed : bool or None
        Initial collapse state; ``None`` leaves the group non-collapsible.
    """

    text: str | None
    base: str | None
    items: tuple[NavItem, ...]
    collapsed: bool | None = None

    def to_engine(self) -> dict[str, typ.Any]:
        """Return the section with resolved links and no ``base`` key."""
        payload: dict[str, typ.Any] = {}
        if self.text:
            payload["text"] = self.text
        if self.collapsed is not None:
            payload["collapsed"] = self.collapsed
        payload["items"] = [item.to_engine() for item in self.items]
        return payload


@dc.dataclass(frozen=True, slots=True)
class SingleSidebar:
    """One sidebar shown on every page."""

    sections: tuple[SidebarSection, ...]

    def iter_sections(self) -> cabc.Iterator[SidebarSection]:
        """Yield every section in declared order."""
        yield from self.sections

    def to_engine(self) -> list[dict[str, typ.Any]]:
        """Return the sidebar as the engine's list form."""
        return [section.to_engine() for section in self.sections]


@dc.dataclass(frozen=True, slots=True)
class MultiSidebar:
    """Sidebars keyed by the route prefix they apply to."""

    routes: cabc.Mapping[str, tuple[SidebarSection, ...]]

    def iter_sections(self) -> cabc.Iterator[SidebarSection]:
        """Yield every section of every route, in declared order."""
        for sections in self.routes.values():
            yield from sections

    def to_engine(self) -> dict[str, list[dict[str, typ.Any]]]:
        """Return the sidebar as the engine's route-keyed mapping form."""
        return {
            prefix: [section.to_engine() for section in sections]
            for prefix, sections in self.routes.items()
        }


SidebarTree = SingleSidebar | MultiSidebar


def iter_links(items: cabc.Iterable[NavItem]) -> cabc.Iterator[NavLink]:
    """Yield every leaf link beneath ``items`` depth-first, in declared order."""
    for item in items:
        match item:
            case NavLink():
                yield item
            case NavGroup(items=children):
                yield from iter_links(children)


__all__ = [
    "MultiSidebar",
    "NavGroup",
    "NavItem",
    "NavLink",
    "SidebarSection",
    "SidebarTree",
    "SingleSidebar",
    "iter_links",
]
