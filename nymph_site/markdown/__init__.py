"""Markdown pipeline configuration for the documentation site.

Custom grammars are registered here under their canonical names, together with
every alias a fenced code block may use. The resulting
:class:`MarkdownPipelineConfig` feeds the ``markdown`` block of the engine
configuration, and :class:`MarkdownPipeline` guards local previews so nothing
renders before registration has completed.
"""

from .pipeline import (
    MarkdownOptions,
    MarkdownPipeline,
    MarkdownPipelineConfig,
    configure,
)
from .renderer import HtmlContentRenderer

__all__ = [
    "HtmlContentRenderer",
    "MarkdownOptions",
    "MarkdownPipeline",
    "MarkdownPipelineConfig",
    "configure",
]
