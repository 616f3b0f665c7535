"""Error hierarchy raised while resolving the documentation site configuration.

Every stage of the resolution pipeline raises a subclass of
:class:`SiteConfigError`. Each error records the ``stage`` that failed and,
where one applies, the offending ``field`` so a failed build can be diagnosed
without re-running it.

Examples
--------
>>> from nymph_site.errors import LinkError
>>> err = LinkError("link 'not a path' is invalid", field="Guide")
>>> str(err)
"[navigation] Guide: link 'not a path' is invalid"
"""

from __future__ import annotations


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""

    default_stage = "site"

    def __init__(
        self, message: str, *, field: str | None = None, stage: str | None = None
    ) -> None:
        self.message = message
        self.field = field
        self.stage = stage or self.default_stage
        super().__init__(self._format())

    def _format(self) -> str:
        location = f"{self.field}: " if self.field else ""
        return f"[{self.stage}] {location}{self.message}"


class LoadError(SiteConfigError):
    """Raised when a grammar document is missing, unreadable, or unparseable."""

    default_stage = "grammar"


class SchemaError(SiteConfigError):
    """Raised when a grammar document lacks required envelope fields."""

    default_stage = "grammar"


class ConflictError(SiteConfigError):
    """Raised when two registrations claim the same language name or alias."""

    default_stage = "markdown"


class LinkError(SiteConfigError):
    """Raised when a navigation, sidebar, or social link is malformed."""

    default_stage = "navigation"


class ConfigError(SiteConfigError):
    """Raised when a site-level option such as the sitemap hostname is invalid."""


class PipelineNotConfiguredError(RuntimeError):
    """Raised when markdown rendering is attempted before languages are registered."""


__all__ = [
    "ConfigError",
    "ConflictError",
    "LinkError",
    "LoadError",
    "PipelineNotConfiguredError",
    "SchemaError",
    "SiteConfigError",
]
