"""Common literal values used across nymph_site.

These constants keep file names shared by the CLI, the emitter, and the tests
in one place.

Examples
--------
>>> from nymph_site import _constants
>>> _constants.DEFAULT_CONFIG.name
'site.yaml'
"""

from pathlib import Path

DEFAULT_CONFIG = Path("docs/site.yaml")
DEFAULT_OUTPUT = Path("docs/.vitepress/config.mts")
ENGINE_TEMPLATE = "config.mts.jinja"
