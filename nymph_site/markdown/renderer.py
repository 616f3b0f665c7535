"""Render markdown previews with registered language aliases applied."""

from __future__ import annotations

import re
import typing as typ
from html import escape

from markdown import Markdown

if typ.TYPE_CHECKING:
    from .pipeline import MarkdownPipelineConfig

CODE_BLOCK_PATTERN = re.compile(
    r"^[ ]{0,3}([`~]{3,})([A-Za-z0-9_+#.-]+)?[^\n]*\n(.*?)^[ ]*\1[ \t]*$",
    re.DOTALL | re.MULTILINE,
)
FENCE_OPEN_PATTERN = re.compile(
    r"^[ ]{0,3}([`~]{3,})([A-Za-z0-9_+#.-]+)?([^\r\n]*)$", re.MULTILINE
)
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')


class HtmlContentRenderer:
    """Render markdown with fenced code labelled by canonical language names."""

    def __init__(
        self, config: MarkdownPipelineConfig, *, pygments_style: str = "monokai"
    ) -> None:
        """Initialize a renderer bound to a configured pipeline.

        Parameters
        ----------
        config : MarkdownPipelineConfig
            Registered languages and toggles; ``line_numbers`` switches
            Pygments table line numbers on.
        pygments_style : str, optional
            Name of the Pygments style used for highlighting. Defaults to
            ``"monokai"``.
        """
        self.config = config
        self.pygments_style = pygments_style

    def markdown(self, text: str) -> str:
        """Render markdown into HTML using the configured extensions."""
        normalized = self._normalize_fences(text)
        if not normalized.strip():
            return ""
        md = Markdown(
            extensions=["fenced_code", "codehilite", "tables", "sane_lists"],
            extension_configs={
                "codehilite": {
                    "linenums": self.config.options.line_numbers,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                }
            },
        )
        html = md.convert(normalized)
        return self._annotate_codehilite(html, normalized)

    def _normalize_fences(self, text: str) -> str:
        """Dedent fences, drop fence extras, and map labels to canonical names."""

        def _rewrite(match: re.Match[str]) -> str:
            fence, language, _extras = match.groups()
            if not language:
                return fence
            return f"{fence}{self.config.resolve_language(language)}"

        return FENCE_OPEN_PATTERN.sub(_rewrite, text)

    @staticmethod
    def _annotate_codehilite(html: str, source_markdown: str) -> str:
        """Attach language metadata to each highlighted block in converted markdown."""
        languages = [
            match.group(2) or "text"
            for match in CODE_BLOCK_PATTERN.finditer(source_markdown)
        ]
        if not languages:
            return html
        lang_iter = iter(languages)

        def _repl(match: re.Match[str]) -> str:
            lang = next(lang_iter, "text")
            return (
                f'<div class="codehilite" data-language="{escape(lang, quote=True)}">'
            )

        return CODEHILITE_OPEN_TAG.sub(_repl, html, len(languages))


__all__ = ["CODE_BLOCK_PATTERN", "HtmlContentRenderer"]
