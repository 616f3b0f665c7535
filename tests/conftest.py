"""Shared fixtures for nymph_site tests.

Fixtures here write small grammar documents and site configurations into
pytest's ``tmp_path`` so every test resolves real files without touching the
checked-in ``docs/`` tree.
"""

from __future__ import annotations

import collections.abc as cabc
import json
import typing as typ
from textwrap import dedent

import pytest

if typ.TYPE_CHECKING:
    from pathlib import Path

GrammarFactory = cabc.Callable[..., "Path"]


@pytest.fixture
def write_grammar(tmp_path: Path) -> GrammarFactory:
    """Return a factory that writes a JSON grammar document and returns its path."""

    def _write(
        name: str = "nymph",
        *,
        aliases: list[str] | None = None,
        filename: str | None = None,
        extra: dict[str, typ.Any] | None = None,
    ) -> Path:
        document: dict[str, typ.Any] = {
            "name": name,
            "scopeName": f"source.{name}",
            "patterns": [{"include": "#keywords"}],
            "repository": {
                "keywords": {"match": "\\b(let|func)\\b", "name": "keyword.nymph"}
            },
        }
        if aliases is not None:
            document["aliases"] = aliases
        if extra:
            document.update(extra)
        path = tmp_path / (filename or f"{name}.tmLanguage.json")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def site_config_path(tmp_path: Path, write_grammar: GrammarFactory) -> Path:
    """Write a complete site configuration referencing one grammar."""
    write_grammar("nymph", aliases=["nym"], filename="syntaxes/nymph.json")
    path = tmp_path / "site.yaml"
    path.write_text(
        dedent(
            """
            title: Nymph
            description: A simple language that gets out of your way.
            clean_urls: true
            last_updated: true
            markdown:
              math: true
              line_numbers: true
              aliases:
                nymphlang: nymph
              grammars:
                - syntaxes/nymph.json
            sitemap:
              hostname: nymphlang.dev
            nav:
              - text: Home
                link: /
              - text: Guide
                link: /guide/
            search:
              provider: local
            sidebar:
              - base: /guide
                items:
                  - text: Getting Started
                    link: /
            social_links:
              - icon: github
                link: https://github.com/theonlytails/nymph_lang
            """
        ).lstrip(),
        encoding="utf-8",
    )
    return path
