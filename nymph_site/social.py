"""Social and external links shown in the site header."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ
from urllib.parse import urlsplit

from .errors import ConfigError, LinkError

SOCIAL_ICONS = frozenset(
    {
        "discord",
        "facebook",
        "github",
        "instagram",
        "linkedin",
        "mastodon",
        "npm",
        "slack",
        "twitter",
        "x",
        "youtube",
    }
)


@dc.dataclass(frozen=True, slots=True)
class SocialLink:
    """Icon identifier and target URL rendered verbatim by the engine."""

    icon: str
    link: str

    def to_engine(self) -> dict[str, str]:
        """Return the ``{icon, link}`` record."""
        return {"icon": self.icon, "link": self.link}


def build_social_links(
    entries: cabc.Sequence[cabc.Mapping[str, typ.Any]],
) -> tuple[SocialLink, ...]:
    """Validate ``entries`` and return them as social links in declared order.

    Raises
    ------
    ConfigError
        If an icon is not one the engine ships.
    LinkError
        If a link is not an absolute ``http(s)`` URL.
    """
    links: list[SocialLink] = []
    for index, entry in enumerate(entries):
        match entry:
            case {"icon": str() as icon, "link": str() as link}:
                pass
            case _:
                msg = "social link requires string 'icon' and 'link'"
                raise ConfigError(msg, field=f"social_links[{index}]", stage="social")
        if icon not in SOCIAL_ICONS:
            known = ", ".join(sorted(SOCIAL_ICONS))
            msg = f"unknown icon {icon!r}; expected one of: {known}"
            raise ConfigError(msg, field=f"social_links[{index}]", stage="social")
        parsed = urlsplit(link)
        if parsed.scheme not in {"http", "https"} or not parsed.netloc or " " in link:
            msg = f"social link {link!r} must be an absolute http(s) URL"
            raise LinkError(msg, field=icon, stage="social")
        links.append(SocialLink(icon=icon, link=link))
    return tuple(links)


__all__ = ["SOCIAL_ICONS", "SocialLink", "build_social_links"]
