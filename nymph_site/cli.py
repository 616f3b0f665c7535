"""Cyclopts CLI entrypoint for resolving the documentation site configuration.

The ``nymph-site`` console script defined here loads ``site.yaml``, runs every
resolution stage, and either reports a summary (``nymph-site check``) or
writes the engine configuration module (``nymph-site emit``). Defaults can be
overridden through ``NYMPH_SITE_*`` environment variables, which keeps CI
invocations short.

Examples
--------
Validate the default configuration:

>>> from nymph_site.cli import main
>>> main()  # doctest: +SKIP

Write the engine module to a custom location:

>>> from nymph_site.cli import app
>>> app(["emit", "--output", "build/config.mts"])  # doctest: +SKIP
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import DEFAULT_CONFIG, DEFAULT_OUTPUT
from .config import load_site_descriptor
from .emit import EngineConfigWriter
from .errors import SiteConfigError
from .navigation import iter_links

if typ.TYPE_CHECKING:
    from .site import SiteDescriptor

app = App(
    name="nymph-site",
    config=cyclopts.config.Env("NYMPH_SITE_", command=False),  # type: ignore[unknown-argument]
)


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _resolve(config: Path) -> SiteDescriptor:
    """Resolve ``config`` or exit with status 1 on the first stage error."""
    try:
        return load_site_descriptor(config)
    except (SiteConfigError, FileNotFoundError) as exc:
        print(f"error: {exc}")
        raise SystemExit(1) from exc


def _summarize(site: SiteDescriptor) -> str:
    nav_links = sum(1 for _ in iter_links(site.nav))
    sidebar_links = sum(
        1
        for section in site.sidebar.iter_sections()
        for _ in iter_links(section.items)
    )
    languages = len(site.markdown.languages)
    return (
        f"ok: {site.title} ({nav_links} nav, {sidebar_links} sidebar links, "
        f"{languages} languages)"
    )


@app.command(help="Resolve the site configuration and report a summary.")
def check(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="NYMPH_SITE_CONFIG")
    ] = DEFAULT_CONFIG,
) -> None:
    """Resolve ``config`` and print a one-line summary.

    Parameters
    ----------
    config : Path, optional
        Path to the ``site.yaml`` configuration file (overridable via
        ``NYMPH_SITE_CONFIG``).

    Returns
    -------
    None
        Prints ``ok: ...`` on success; prints ``error: ...`` and exits with
        status 1 when any stage fails.
    """
    print(_summarize(_resolve(config)))


@app.command(help="Resolve the site configuration and write the engine config.")
def emit(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="NYMPH_SITE_CONFIG")
    ] = DEFAULT_CONFIG,
    output: typ.Annotated[
        Path,
        Parameter(
            help="Where to write the engine config (.mts or .json)",
            env_var="NYMPH_SITE_OUTPUT",
        ),
    ] = DEFAULT_OUTPUT,
) -> None:
    """Resolve ``config`` and write the engine configuration to ``output``."""
    site = _resolve(config)
    written = EngineConfigWriter(site, source=config).write(output)
    print(f"wrote {_format_path(written)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``nymph-site`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
