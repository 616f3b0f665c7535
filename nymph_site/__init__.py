"""Resolve the Nymph documentation site configuration.

This package turns a declarative ``site.yaml`` (site metadata, navigation,
sidebar, social links, and custom syntax grammars) into one immutable
descriptor and writes it in the shape the external site engine consumes.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from nymph_site import main
>>> main()  # doctest: +SKIP
>>> from nymph_site import app
>>> app.name[0]
'nymph-site'
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
