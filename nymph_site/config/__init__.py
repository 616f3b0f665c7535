"""Load and validate the documentation site configuration YAML.

This subpackage parses the project's ``site.yaml`` file, loads the custom
language grammars it references, and drives every resolution stage in order
to produce the immutable :class:`~nymph_site.site.SiteDescriptor` handed to
the site engine. The primary entry point is :func:`load_site_descriptor`.

Examples
--------
>>> from pathlib import Path
>>> from nymph_site.config import load_site_descriptor
>>> site = load_site_descriptor(Path("docs/site.yaml"))  # doctest: +SKIP
>>> site.to_engine_config()["sitemap"]  # doctest: +SKIP
{'hostname': 'nymphlang.dev'}
"""

from .loader import load_site_descriptor, resolve_site_descriptor

__all__ = ["load_site_descriptor", "resolve_site_descriptor"]
