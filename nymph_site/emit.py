"""Write the resolved site descriptor where the site engine picks it up.

The engine reads its configuration from a module such as
``docs/.vitepress/config.mts``. :class:`EngineConfigWriter` renders that module
from the ``config.mts.jinja`` template, embedding the descriptor's engine
configuration as a JSON object literal, or writes plain JSON when the output
path ends in ``.json``.

>>> from pathlib import Path
>>> from nymph_site.config import load_site_descriptor
>>> site = load_site_descriptor(Path("docs/site.yaml"))  # doctest: +SKIP
>>> writer = EngineConfigWriter(site)  # doctest: +SKIP
>>> writer.write(Path("docs/.vitepress/config.mts"))  # doctest: +SKIP
PosixPath('docs/.vitepress/config.mts')
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import msgspec.json as msgspec_json
from jinja2 import Environment, FileSystemLoader, select_autoescape

from ._constants import ENGINE_TEMPLATE

if typ.TYPE_CHECKING:
    from .site import SiteDescriptor

logger = logging.getLogger(__name__)


class EngineConfigWriter:
    """Render the engine configuration module for a resolved descriptor."""

    def __init__(
        self,
        descriptor: SiteDescriptor,
        *,
        source: Path | None = None,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the writer and Jinja environment.

        Parameters
        ----------
        descriptor : SiteDescriptor
            Resolved site configuration to serialise.
        source : Path, optional
            Configuration file the descriptor came from; named in the
            generated header comment.
        templates_dir : Path, optional
            Directory containing ``config.mts.jinja``. Defaults to
            ``nymph_site/templates``.
        """
        self.descriptor = descriptor
        self.source = source
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.template = self.env.get_template(ENGINE_TEMPLATE)

    def to_json(self) -> str:
        """Return the engine configuration as indented JSON."""
        encoded = msgspec_json.encode(self.descriptor.to_engine_config())
        return msgspec_json.format(encoded, indent=2).decode("utf-8")

    def render(self) -> str:
        """Render the engine configuration module source."""
        return self.template.render(
            config_json=self.to_json(),
            source=self.source.as_posix() if self.source else None,
        )

    def write(self, output: Path) -> Path:
        """Write the module (or JSON for ``.json`` outputs) to ``output``."""
        content = self.to_json() + "\n" if output.suffix == ".json" else self.render()
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(content, encoding="utf-8")
        logger.debug("wrote engine configuration to %s", output)
        return output


__all__ = ["EngineConfigWriter"]
