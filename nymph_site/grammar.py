"""Load TextMate-style grammar documents used for syntax highlighting.

A grammar document is treated as an opaque rule tree wrapped in a small
validated envelope: a canonical ``name``, optional ``aliases``, and at least
one scope rule (``scopeRules`` or the TextMate ``patterns`` key). The rule
tree itself belongs to the external highlighter and is never interpreted here.

Examples
--------
>>> from pathlib import Path
>>> from nymph_site.grammar import load_grammar
>>> grammar = load_grammar(Path("syntaxes/nymph.tmLanguage.json"))  # doctest: +SKIP
>>> grammar.name  # doctest: +SKIP
'nymph'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import types
import typing as typ

import msgspec
import msgspec.json as msgspec_json
from ruamel.yaml import YAML, YAMLError

from .errors import LoadError, SchemaError

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")
SCOPE_RULE_KEYS = ("scopeRules", "patterns")


@dc.dataclass(frozen=True, slots=True)
class LanguageGrammar:
    """An immutable, named language definition loaded from disk.

    Attributes
    ----------
    name : str
        Canonical language name the highlighter registers.
    aliases : tuple[str, ...]
        Alternative fence labels declared by the grammar, in declaration order.
    scope_name : str or None
        TextMate root scope (for example ``source.nymph``) when declared.
    document : Mapping[str, Any]
        Deeply read-only copy of the raw grammar document; nested mappings are
        mapping proxies and lists become tuples.
    """

    name: str
    aliases: tuple[str, ...]
    scope_name: str | None
    document: cabc.Mapping[str, typ.Any]

    def to_engine_language(self) -> dict[str, typ.Any]:
        """Return the grammar in the shape the engine's highlighter loads."""
        payload = _thaw(self.document)
        payload["name"] = self.name
        if self.aliases:
            payload["aliases"] = list(self.aliases)
        return payload


def load_grammar(path: Path) -> LanguageGrammar:
    """Load and validate a grammar document from ``path``.

    Parameters
    ----------
    path : Path
        Filesystem path to a JSON (``*.tmLanguage.json``) or YAML grammar.

    Returns
    -------
    LanguageGrammar
        The validated grammar.

    Raises
    ------
    LoadError
        If the file is missing, unreadable, or not a parseable mapping.
    SchemaError
        If ``name`` or every scope rule is absent, or ``aliases`` is malformed.
    """
    field = str(path)
    try:
        raw = path.read_bytes()
    except FileNotFoundError as exc:
        msg = "grammar file not found"
        raise LoadError(msg, field=field) from exc
    except OSError as exc:
        msg = f"grammar file could not be read: {exc.strerror or exc}"
        raise LoadError(msg, field=field) from exc

    document = _parse_document(raw, path)
    grammar = _build_grammar(document, field=field)
    logger.debug("loaded grammar %s from %s", grammar.name, path)
    return grammar


def load_grammars(paths: cabc.Iterable[Path]) -> tuple[LanguageGrammar, ...]:
    """Load several grammar documents in declared order."""
    return tuple(load_grammar(path) for path in paths)


def _parse_document(raw: bytes, path: Path) -> dict[str, typ.Any]:
    """Decode ``raw`` as YAML or JSON depending on the file suffix."""
    field = str(path)
    if path.suffix.lower() in YAML_SUFFIXES:
        loader = YAML(typ="safe")
        loader.version = (1, 2)
        try:
            loaded = loader.load(raw.decode("utf-8"))
        except (YAMLError, UnicodeDecodeError) as exc:
            msg = f"grammar file is not valid YAML: {exc}"
            raise LoadError(msg, field=field) from exc
    else:
        try:
            loaded = msgspec_json.decode(raw)
        except (msgspec.DecodeError, UnicodeDecodeError) as exc:
            msg = f"grammar file is not valid JSON: {exc}"
            raise LoadError(msg, field=field) from exc

    match loaded:
        case dict():
            return loaded
        case _:
            msg = "grammar document must be a mapping at the top level"
            raise LoadError(msg, field=field)


def _build_grammar(document: dict[str, typ.Any], *, field: str) -> LanguageGrammar:
    """Validate the envelope of ``document`` and wrap it as a grammar."""
    name = document.get("name")
    if not isinstance(name, str) or not name.strip():
        msg = "grammar is missing a 'name'"
        raise SchemaError(msg, field=field)
    name = name.strip()

    aliases = _normalize_aliases(document.get("aliases"), name=name, field=field)

    rules = next(
        (document[key] for key in SCOPE_RULE_KEYS if document.get(key) is not None),
        None,
    )
    match rules:
        case list() | dict() if rules:
            pass
        case _:
            msg = "grammar must declare at least one scope rule"
            raise SchemaError(msg, field=field)

    scope_name = document.get("scopeName")
    return LanguageGrammar(
        name=name,
        aliases=aliases,
        scope_name=str(scope_name) if scope_name else None,
        document=_freeze(document),
    )


def _normalize_aliases(value: object, *, name: str, field: str) -> tuple[str, ...]:
    """Return de-duplicated aliases, dropping any equal to the grammar name."""
    if value is None:
        return ()
    if not isinstance(value, list):
        msg = "grammar 'aliases' must be a list of strings"
        raise SchemaError(msg, field=field)
    aliases: list[str] = []
    for entry in value:
        if not isinstance(entry, str) or not entry.strip():
            msg = f"grammar alias {entry!r} must be a non-empty string"
            raise SchemaError(msg, field=field)
        alias = entry.strip()
        if alias != name and alias not in aliases:
            aliases.append(alias)
    return tuple(aliases)


def _freeze(value: typ.Any) -> typ.Any:
    """Return a read-only copy of a parsed rule tree."""
    match value:
        case cabc.Mapping():
            return types.MappingProxyType(
                {key: _freeze(item) for key, item in value.items()}
            )
        case list() | tuple():
            return tuple(_freeze(item) for item in value)
        case _:
            return value


def _thaw(value: typ.Any) -> typ.Any:
    """Return a plain ``dict``/``list`` copy of a frozen rule tree."""
    match value:
        case cabc.Mapping():
            return {key: _thaw(item) for key, item in value.items()}
        case tuple():
            return [_thaw(item) for item in value]
        case _:
            return value


__all__ = ["LanguageGrammar", "load_grammar", "load_grammars"]
