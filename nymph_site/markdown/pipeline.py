"""Register custom languages and renderer toggles for the markdown pipeline."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import types
import typing as typ

from nymph_site.errors import ConflictError, PipelineNotConfiguredError

from .renderer import HtmlContentRenderer

if typ.TYPE_CHECKING:
    from nymph_site.grammar import LanguageGrammar

logger = logging.getLogger(__name__)


def _empty_aliases() -> cabc.Mapping[str, str]:
    return types.MappingProxyType({})


@dc.dataclass(frozen=True, slots=True)
class MarkdownOptions:
    """Renderer feature toggles declared in the site configuration.

    Attributes
    ----------
    math : bool
        Enable mathematical notation rendering in the engine.
    line_numbers : bool
        Annotate fenced code blocks with line numbers.
    aliases : Mapping[str, str]
        Extra fence labels mapped to the language they stand for.
    """

    math: bool = False
    line_numbers: bool = False
    aliases: cabc.Mapping[str, str] = dc.field(default_factory=_empty_aliases)


@dc.dataclass(frozen=True, slots=True)
class MarkdownPipelineConfig:
    """Resolved markdown settings with every language and alias registered."""

    options: MarkdownOptions
    grammars: tuple[LanguageGrammar, ...]
    alias_table: cabc.Mapping[str, str]

    @property
    def languages(self) -> tuple[str, ...]:
        """Canonical names of the registered grammars, in registration order."""
        return tuple(grammar.name for grammar in self.grammars)

    def resolve_language(self, name: str) -> str:
        """Return the canonical language for ``name``; unknown names pass through."""
        return self.alias_table.get(name, name)

    def to_engine_markdown(self) -> dict[str, typ.Any]:
        """Return the ``markdown`` block of the engine configuration."""
        return {
            "math": self.options.math,
            "lineNumbers": self.options.line_numbers,
            "languages": [grammar.to_engine_language() for grammar in self.grammars],
            "languageAlias": {
                alias: self.alias_table[alias] for alias in self.options.aliases
            },
        }


def configure(
    grammars: cabc.Sequence[LanguageGrammar], options: MarkdownOptions
) -> MarkdownPipelineConfig:
    """Register ``grammars`` and the option aliases into one pipeline config.

    Every grammar is registered under its canonical name and every alias,
    whether declared on a grammar or in ``options.aliases``, must resolve to
    exactly one canonical name. Nothing is registered when a conflict is found.

    Raises
    ------
    ConflictError
        If two grammars share a name, an alias is claimed by two languages, or
        an alias shadows a canonical language name.
    """
    registered: dict[str, LanguageGrammar] = {}
    for grammar in grammars:
        if grammar.name in registered:
            msg = f"language '{grammar.name}' is registered twice"
            raise ConflictError(msg, field=grammar.name)
        registered[grammar.name] = grammar

    table: dict[str, str] = {}
    for grammar in grammars:
        for alias in grammar.aliases:
            _claim(table, registered, alias, grammar.name)

    for alias, target in options.aliases.items():
        canonical = _follow_alias(target, table, options.aliases, seen={alias})
        _claim(table, registered, alias, canonical)

    config = MarkdownPipelineConfig(
        options=options,
        grammars=tuple(registered.values()),
        alias_table=types.MappingProxyType(table),
    )
    logger.debug(
        "registered %d language(s) and %d alias(es)", len(registered), len(table)
    )
    return config


def _claim(
    table: dict[str, str],
    registered: cabc.Mapping[str, LanguageGrammar],
    alias: str,
    canonical: str,
) -> None:
    """Record ``alias`` -> ``canonical`` or raise if it is already taken."""
    if alias in registered:
        msg = f"alias '{alias}' shadows the registered language of the same name"
        raise ConflictError(msg, field=alias)
    existing = table.get(alias)
    if existing is not None and existing != canonical:
        msg = f"alias '{alias}' is claimed by both '{existing}' and '{canonical}'"
        raise ConflictError(msg, field=alias)
    table[alias] = canonical


def _follow_alias(
    target: str,
    table: cabc.Mapping[str, str],
    option_aliases: cabc.Mapping[str, str],
    *,
    seen: set[str],
) -> str:
    """Resolve ``target`` through grammar and option aliases to a language name."""
    if target in table:
        return table[target]
    if target in option_aliases:
        if target in seen:
            msg = f"alias '{target}' refers back to itself"
            raise ConflictError(msg, field=target)
        return _follow_alias(
            option_aliases[target], table, option_aliases, seen={*seen, target}
        )
    return target


class MarkdownPipeline:
    """Stateful pipeline wrapper that refuses to render before configuration.

    Examples
    --------
    >>> from nymph_site.markdown import MarkdownOptions, MarkdownPipeline
    >>> pipeline = MarkdownPipeline(MarkdownOptions(line_numbers=True))
    >>> pipeline.configure([]).languages
    ()
    >>> "<p>" in pipeline.render("hello")
    True
    """

    def __init__(
        self, options: MarkdownOptions, *, pygments_style: str = "monokai"
    ) -> None:
        self.options = options
        self.pygments_style = pygments_style
        self._config: MarkdownPipelineConfig | None = None

    @property
    def is_configured(self) -> bool:
        """Return ``True`` once languages have been registered."""
        return self._config is not None

    @property
    def config(self) -> MarkdownPipelineConfig:
        """Return the registered configuration or fail if setup has not run."""
        if self._config is None:
            msg = "markdown pipeline used before configure() registered languages"
            raise PipelineNotConfiguredError(msg)
        return self._config

    def configure(
        self, grammars: cabc.Sequence[LanguageGrammar]
    ) -> MarkdownPipelineConfig:
        """Register ``grammars`` with this pipeline's options."""
        self._config = configure(grammars, self.options)
        return self._config

    def render(self, text: str) -> str:
        """Render ``text`` to an HTML preview using the registered languages."""
        renderer = HtmlContentRenderer(self.config, pygments_style=self.pygments_style)
        return renderer.markdown(text)


__all__ = [
    "MarkdownOptions",
    "MarkdownPipeline",
    "MarkdownPipelineConfig",
    "configure",
]
