"""Load ``site.yaml`` and resolve it into a :class:`SiteDescriptor`."""

from __future__ import annotations

import logging
import types
import typing as typ

from ruamel.yaml import YAML, YAMLError

from nymph_site.errors import ConfigError
from nymph_site.grammar import load_grammars
from nymph_site.markdown import MarkdownOptions, MarkdownPipelineConfig, configure
from nymph_site.navigation import build_nav, build_sidebar
from nymph_site.site import SearchConfig, SiteDescriptor, UrlOptions, assemble
from nymph_site.social import build_social_links

from .helpers import (
    _as_bool,
    _as_list,
    _as_mapping,
    _optional_str,
    _resolve_paths,
    _string_mapping,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

logger = logging.getLogger(__name__)


def load_site_descriptor(path: Path) -> SiteDescriptor:
    """Load the YAML site configuration and resolve it in one linear pass.

    Stages run in order (grammars, markdown pipeline, navigation, sidebar,
    social links, assembly) and the first failure aborts the whole resolution.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML site configuration (for example,
        ``site.yaml``). Grammar paths inside it are resolved relative to the
        file's directory.

    Returns
    -------
    SiteDescriptor
        The immutable descriptor handed to the site engine.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    ConfigError
        If the file cannot be read or is not valid UTF-8 YAML.
    SiteConfigError
        If any stage rejects its part of the configuration.

    Examples
    --------
    >>> from pathlib import Path
    >>> from nymph_site.config import load_site_descriptor
    >>> site = load_site_descriptor(Path("docs/site.yaml"))  # doctest: +SKIP
    >>> site.title  # doctest: +SKIP
    'Nymph'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle) or {}
    except (YAMLError, UnicodeDecodeError) as exc:
        msg = f"configuration is not valid UTF-8 YAML: {exc}"
        raise ConfigError(msg, field=str(path)) from exc
    except OSError as exc:
        msg = f"configuration file could not be read: {exc.strerror or exc}"
        raise ConfigError(msg, field=str(path)) from exc
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise ConfigError(msg, field=str(path))
    return resolve_site_descriptor(loaded, root=path.parent)


def resolve_site_descriptor(
    raw: cabc.Mapping[str, typ.Any], *, root: Path
) -> SiteDescriptor:
    """Resolve an already parsed configuration mapping into a descriptor."""
    logger.debug("stage: markdown pipeline")
    markdown = _build_markdown(_as_mapping(raw.get("markdown"), field="markdown"), root)

    logger.debug("stage: navigation")
    nav = build_nav(_as_list(raw.get("nav"), field="nav"))
    sidebar_raw = raw.get("sidebar")
    sidebar = build_sidebar(sidebar_raw) if sidebar_raw is not None else None

    logger.debug("stage: social links")
    social = build_social_links(_as_list(raw.get("social_links"), field="social_links"))

    logger.debug("stage: assembly")
    sitemap = _as_mapping(raw.get("sitemap"), field="sitemap")
    hostname = _optional_str(sitemap.get("hostname"))
    if hostname is None:
        msg = "sitemap hostname is required"
        raise ConfigError(msg, field="sitemap.hostname")

    return assemble(
        title=_optional_str(raw.get("title")) or "",
        description=_optional_str(raw.get("description")) or "",
        url_options=UrlOptions(
            sitemap_hostname=hostname,
            clean_urls=_as_bool(raw.get("clean_urls"), field="clean_urls"),
            last_updated=_as_bool(raw.get("last_updated"), field="last_updated"),
        ),
        markdown=markdown,
        nav=nav,
        sidebar=sidebar,
        social=social,
        search=_build_search(raw.get("search")),
        lang=_optional_str(raw.get("lang")),
        base=_optional_str(raw.get("base")),
    )


def _build_markdown(
    payload: cabc.Mapping[str, typ.Any], root: Path
) -> MarkdownPipelineConfig:
    """Load the declared grammars and register them with the markdown options."""
    logger.debug("stage: grammars")
    grammar_paths = _resolve_paths(
        _as_list(payload.get("grammars"), field="markdown.grammars"), root=root
    )
    grammars = load_grammars(grammar_paths)
    options = MarkdownOptions(
        math=_as_bool(payload.get("math"), field="markdown.math"),
        line_numbers=_as_bool(
            payload.get("line_numbers"), field="markdown.line_numbers"
        ),
        aliases=_string_mapping(payload.get("aliases"), field="markdown.aliases"),
    )
    return configure(grammars, options)


def _build_search(value: object) -> SearchConfig:
    """Build the search selector from ``local`` or ``{provider, options}``."""
    match value:
        case None:
            return SearchConfig()
        case str() as provider:
            return SearchConfig(provider=provider)
        case {"provider": str() as provider, **rest}:
            options = _as_mapping(rest.get("options"), field="search.options")
            return SearchConfig(
                provider=provider, options=types.MappingProxyType(dict(options))
            )
        case _:
            msg = "search must be a provider name or a mapping with 'provider'"
            raise ConfigError(msg, field="search")


__all__ = ["load_site_descriptor", "resolve_site_descriptor"]
