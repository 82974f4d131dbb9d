"""Contentmap error hierarchy.

All contentmap-specific errors inherit from ContentmapError for easy catching.
"""


class ContentmapError(Exception):
    """Base error for all contentmap operations."""


class ConfigError(ContentmapError):
    """Invalid or missing configuration."""


class InvalidClientCapability(ConfigError):
    """The content source does not provide every required operation."""


class SourceFetchError(ContentmapError):
    """A listing or fetch against the content source failed."""


class PatternMismatch(ContentmapError):
    """Parameters given to a URL builder do not satisfy its pattern."""


class ExportError(ContentmapError):
    """Error while writing the sitemap."""
