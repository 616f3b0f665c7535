"""Tests for loading ``site.yaml`` into a resolved descriptor."""

from __future__ import annotations

import typing as typ
from pathlib import Path
from textwrap import dedent

import pytest

from nymph_site.config import load_site_descriptor
from nymph_site.errors import (
    ConfigError,
    ConflictError,
    LinkError,
    LoadError,
    SiteConfigError,
)

if typ.TYPE_CHECKING:
    from conftest import GrammarFactory

REPO_ROOT = Path(__file__).resolve().parents[1]


def _write_config(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "site.yaml"
    path.write_text(dedent(body).lstrip(), encoding="utf-8")
    return path


def test_load_site_descriptor_resolves_every_stage(site_config_path: Path) -> None:
    """A complete configuration resolves into a fully populated descriptor."""
    site = load_site_descriptor(site_config_path)

    assert site.title == "Nymph", f"unexpected title {site.title!r}"
    assert site.clean_urls is True, "expected clean URLs from config"
    assert site.url_options.last_updated is True, "expected last updated flag"
    assert site.markdown.languages == ("nymph",), "expected the grammar registered"
    assert site.markdown.resolve_language("nym") == "nymph", "grammar alias"
    assert site.markdown.resolve_language("nymphlang") == "nymph", "option alias"
    assert site.markdown.options.math is True, "expected math toggle"
    sidebar_links = [link.link for link in site.iter_links()][2:]
    assert sidebar_links == ["/guide/"], f"unexpected sidebar links {sidebar_links!r}"
    assert site.search.provider == "local", "expected local search"
    assert [link.icon for link in site.social_links] == ["github"], "social links"


def test_checked_in_site_config_resolves() -> None:
    """The repository's own docs configuration stays valid."""
    site = load_site_descriptor(REPO_ROOT / "docs" / "site.yaml")
    assert site.markdown.resolve_language("nym") == "nymph", (
        "expected the nym alias to resolve to the bundled grammar"
    )
    assert site.to_engine_config()["sitemap"] == {"hostname": "nymphlang.dev"}, (
        "expected the production sitemap hostname"
    )


def test_missing_config_file(tmp_path: Path) -> None:
    """A missing configuration file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        load_site_descriptor(tmp_path / "absent.yaml")


def test_non_mapping_config_is_rejected(tmp_path: Path) -> None:
    """The top level must be a mapping."""
    with pytest.raises(ConfigError):
        load_site_descriptor(_write_config(tmp_path, "- just\n- a list\n"))


@pytest.mark.parametrize(
    "content",
    [b"title: [unclosed\n", b"title: Nymph\xff\n"],
    ids=["yaml-syntax", "not-utf8"],
)
def test_unreadable_config_is_rejected(tmp_path: Path, content: bytes) -> None:
    """Malformed YAML and non-UTF-8 bytes fail with ConfigError naming the file."""
    path = tmp_path / "site.yaml"
    path.write_bytes(content)
    with pytest.raises(ConfigError) as excinfo:
        load_site_descriptor(path)
    assert excinfo.value.field == str(path), "expected the path as the field"


def test_directory_config_path_is_rejected(tmp_path: Path) -> None:
    """A directory in place of the configuration file fails with ConfigError."""
    with pytest.raises(ConfigError) as excinfo:
        load_site_descriptor(tmp_path)
    assert excinfo.value.field == str(tmp_path), "expected the path as the field"


def test_search_shorthand_and_defaults(tmp_path: Path) -> None:
    """``search: local`` works and omitted sections fall back to empty values."""
    path = _write_config(
        tmp_path,
        """
        title: Minimal
        sitemap:
          hostname: https://nymphlang.dev
        search: local
        """,
    )
    site = load_site_descriptor(path)
    config = site.to_engine_config()
    assert config["themeConfig"]["nav"] == [], "expected empty nav"
    assert config["themeConfig"]["sidebar"] == [], "expected empty sidebar"
    assert config["markdown"]["languages"] == [], "expected no custom languages"
    assert config["cleanUrls"] is False, "expected clean URLs off by default"


@pytest.mark.parametrize(
    ("body", "error"),
    [
        ("title: T\nsitemap: {hostname: 'not a url'}\n", ConfigError),
        ("title: T\n", ConfigError),
        ("title: T\nsitemap: {hostname: a.dev}\nclean_urls: 'yes'\n", ConfigError),
        (
            "title: T\nsitemap: {hostname: a.dev}\nnav: [{text: Bad, link: 'a b'}]\n",
            LinkError,
        ),
        (
            "title: T\nsitemap: {hostname: a.dev}\n"
            "markdown: {grammars: [missing.json]}\n",
            LoadError,
        ),
        ("title: T\nsitemap: {hostname: a.dev}\nsearch: [local]\n", ConfigError),
        ("title: T\nsitemap: {hostname: a.dev}\nsidebar: 0\n", LinkError),
        ("title: T\nsitemap: {hostname: a.dev}\nsidebar: ''\n", LinkError),
    ],
    ids=[
        "bad-hostname",
        "missing-hostname",
        "non-bool-toggle",
        "bad-nav-link",
        "missing-grammar",
        "bad-search",
        "zero-sidebar",
        "empty-string-sidebar",
    ],
)
def test_stage_errors_abort_resolution(
    tmp_path: Path, body: str, error: type[SiteConfigError]
) -> None:
    """The first failing stage aborts resolution with its own error type."""
    with pytest.raises(error):
        load_site_descriptor(_write_config(tmp_path, body))


def test_alias_conflict_between_grammars(
    tmp_path: Path, write_grammar: GrammarFactory
) -> None:
    """Two grammars claiming the same alias abort with ConflictError."""
    write_grammar("nymph", aliases=["nym"])
    write_grammar("nymble", aliases=["nym"])
    path = _write_config(
        tmp_path,
        """
        title: T
        sitemap: {hostname: a.dev}
        markdown:
          grammars:
            - nymph.tmLanguage.json
            - nymble.tmLanguage.json
        """,
    )
    with pytest.raises(ConflictError) as excinfo:
        load_site_descriptor(path)
    assert excinfo.value.stage == "markdown", "expected the markdown stage"
