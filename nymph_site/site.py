"""Assemble the immutable site descriptor handed to the external site engine.

:func:`assemble` is the last stage of configuration resolution. It validates
the site-level options (title, sitemap hostname, search provider) and bundles
the markdown, navigation, sidebar, and social-link results into one frozen
:class:`SiteDescriptor`. :meth:`SiteDescriptor.to_engine_config` produces the
nested mapping whose field names form the wire contract with the engine.

Examples
--------
>>> from nymph_site.markdown import MarkdownOptions, configure
>>> from nymph_site.site import UrlOptions, assemble
>>> site = assemble(
...     title="Nymph",
...     description="A simple language that gets out of your way.",
...     url_options=UrlOptions(sitemap_hostname="nymphlang.dev", clean_urls=True),
...     markdown=configure([], MarkdownOptions()),
...     nav=(),
...     sidebar=None,
...     social=(),
... )
>>> site.canonical_url("/guide/index.md")
'https://nymphlang.dev/guide/'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import re
import types
import typing as typ
from urllib.parse import urlsplit

from .errors import ConfigError
from .navigation import SingleSidebar, iter_links
from .navigation.links import is_valid_base

if typ.TYPE_CHECKING:
    from .markdown import MarkdownPipelineConfig
    from .navigation import NavItem, NavLink, SidebarTree
    from .social import SocialLink

logger = logging.getLogger(__name__)

HOST_PATTERN = re.compile(
    r"^(?=[^:]{1,253}(:|$))"
    r"(?!-)[A-Za-z0-9-]{1,63}(?<!-)"
    r"(\.(?!-)[A-Za-z0-9-]{1,63}(?<!-))*"
    r"(:\d{1,5})?$"
)
ORIGIN_SCHEMES = ("http", "https")
PAGE_SUFFIXES = (".md", ".html")
ALGOLIA_REQUIRED_KEYS = ("appId", "apiKey", "indexName")
MAX_PORT = 65535


def _empty_options() -> cabc.Mapping[str, typ.Any]:
    return types.MappingProxyType({})


@dc.dataclass(frozen=True, slots=True)
class UrlOptions:
    """Canonical URL generation rules."""

    sitemap_hostname: str
    clean_urls: bool = False
    last_updated: bool = False


@dc.dataclass(frozen=True, slots=True)
class SearchConfig:
    """Selected search provider and its engine-specific options."""

    provider: str = "local"
    options: cabc.Mapping[str, typ.Any] = dc.field(default_factory=_empty_options)

    def to_engine(self) -> dict[str, typ.Any]:
        """Return the ``themeConfig.search`` record."""
        payload: dict[str, typ.Any] = {"provider": self.provider}
        if self.options:
            payload["options"] = dict(self.options)
        return payload


SEARCH_PROVIDERS = ("local", "algolia")


@dc.dataclass(frozen=True, slots=True)
class SiteDescriptor:
    """Fully resolved site configuration; never mutated after assembly."""

    title: str
    description: str
    url_options: UrlOptions
    markdown: MarkdownPipelineConfig
    nav: tuple[NavItem, ...]
    sidebar: SidebarTree
    search: SearchConfig
    social_links: tuple[SocialLink, ...]
    lang: str | None = None
    base: str | None = None

    @property
    def clean_urls(self) -> bool:
        """Return ``True`` when generated links omit file extensions."""
        return self.url_options.clean_urls

    @property
    def sitemap_origin(self) -> str:
        """Return the sitemap hostname as an origin, assuming ``https``."""
        hostname = self.url_options.sitemap_hostname
        if "://" in hostname:
            return hostname.rstrip("/")
        return f"https://{hostname}"

    def page_url(self, path: str) -> str:
        """Return the site-relative URL for a page source ``path``.

        With clean URLs, ``.md``/``.html`` suffixes and trailing ``index``
        segments are dropped; otherwise every page ends in ``.html``.
        """
        stem = path if path.startswith("/") else f"/{path}"
        for suffix in PAGE_SUFFIXES:
            if stem.endswith(suffix):
                stem = stem.removesuffix(suffix)
                break
        if stem.endswith("/index"):
            stem = stem.removesuffix("index")
        if self.clean_urls:
            return stem
        if stem.endswith("/"):
            return f"{stem}index.html"
        return f"{stem}.html"

    def canonical_url(self, path: str) -> str:
        """Return the absolute URL recorded in the sitemap for ``path``."""
        prefix = (self.base or "/").rstrip("/")
        return f"{self.sitemap_origin}{prefix}{self.page_url(path)}"

    def iter_links(self) -> cabc.Iterator[NavLink]:
        """Yield every navigation and sidebar link in display order."""
        yield from iter_links(self.nav)
        for section in self.sidebar.iter_sections():
            yield from iter_links(section.items)

    def to_engine_config(self) -> dict[str, typ.Any]:
        """Return the configuration object consumed by the site engine."""
        config: dict[str, typ.Any] = {
            "title": self.title,
            "description": self.description,
        }
        if self.lang:
            config["lang"] = self.lang
        if self.base:
            config["base"] = self.base
        config.update(
            {
                "cleanUrls": self.url_options.clean_urls,
                "lastUpdated": self.url_options.last_updated,
                "markdown": self.markdown.to_engine_markdown(),
                "sitemap": {"hostname": self.url_options.sitemap_hostname},
                "themeConfig": {
                    "nav": [item.to_engine() for item in self.nav],
                    "search": self.search.to_engine(),
                    "sidebar": self.sidebar.to_engine(),
                    "socialLinks": [link.to_engine() for link in self.social_links],
                },
            }
        )
        return config


def assemble(  # noqa: PLR0913 - mirrors the descriptor fields
    *,
    title: str,
    description: str,
    url_options: UrlOptions,
    markdown: MarkdownPipelineConfig,
    nav: cabc.Sequence[NavItem],
    sidebar: SidebarTree | None,
    social: cabc.Sequence[SocialLink],
    search: SearchConfig | None = None,
    lang: str | None = None,
    base: str | None = None,
) -> SiteDescriptor:
    """Aggregate resolved sub-configurations into a :class:`SiteDescriptor`.

    Raises
    ------
    ConfigError
        If the title is blank, the sitemap hostname is not a host or origin,
        the search provider is unknown, or ``base`` is not a rooted path.
    """
    if not title or not title.strip():
        msg = "site requires a non-empty title"
        raise ConfigError(msg, field="title")
    validate_hostname(url_options.sitemap_hostname)
    search = search or SearchConfig()
    _validate_search(search)
    if base is not None and not is_valid_base(base):
        msg = f"site base {base!r} must be a rooted site path"
        raise ConfigError(msg, field="base")

    descriptor = SiteDescriptor(
        title=title.strip(),
        description=description,
        url_options=url_options,
        markdown=markdown,
        nav=tuple(nav),
        sidebar=sidebar if sidebar is not None else SingleSidebar(sections=()),
        search=search,
        social_links=tuple(social),
        lang=lang,
        base=base,
    )
    logger.debug("assembled site descriptor for %s", descriptor.title)
    return descriptor


def validate_hostname(hostname: str) -> str:
    """Return ``hostname`` when it is a bare host or an ``http(s)`` origin.

    Examples
    --------
    >>> validate_hostname("nymphlang.dev")
    'nymphlang.dev'
    >>> validate_hostname("https://nymphlang.dev")
    'https://nymphlang.dev'
    """
    field = "sitemap.hostname"
    if not isinstance(hostname, str) or not hostname:
        msg = "sitemap hostname is required"
        raise ConfigError(msg, field=field)
    if "://" not in hostname:
        if not HOST_PATTERN.match(hostname) or not _port_in_range(hostname):
            msg = f"{hostname!r} is not a valid host name"
            raise ConfigError(msg, field=field)
        return hostname

    try:
        parsed = urlsplit(hostname)
        parsed.port  # noqa: B018 - raises ValueError for malformed ports
    except ValueError as exc:
        msg = f"{hostname!r} is not a valid origin"
        raise ConfigError(msg, field=field) from exc
    if (
        parsed.scheme not in ORIGIN_SCHEMES
        or not HOST_PATTERN.match(parsed.netloc)
        or not _port_in_range(parsed.netloc)
        or parsed.path not in ("", "/")
        or "?" in hostname
        or "#" in hostname
    ):
        msg = f"{hostname!r} is not a valid origin"
        raise ConfigError(msg, field=field)
    return hostname


def _port_in_range(netloc: str) -> bool:
    """Return ``False`` when ``netloc`` carries a port outside 1-65535."""
    _host, separator, port = netloc.rpartition(":")
    if not separator:
        return True
    return 0 < int(port) <= MAX_PORT


def _validate_search(search: SearchConfig) -> None:
    if search.provider not in SEARCH_PROVIDERS:
        known = ", ".join(SEARCH_PROVIDERS)
        msg = f"unknown search provider {search.provider!r}; expected one of: {known}"
        raise ConfigError(msg, field="search.provider")
    if search.provider == "algolia":
        missing = [key for key in ALGOLIA_REQUIRED_KEYS if not search.options.get(key)]
        if missing:
            msg = f"algolia search requires options: {', '.join(missing)}"
            raise ConfigError(msg, field="search.options")


__all__ = [
    "SEARCH_PROVIDERS",
    "SearchConfig",
    "SiteDescriptor",
    "UrlOptions",
    "assemble",
    "validate_hostname",
]
