"""Contentmap configuration.

SitemapOptions and RouteTemplate are frozen after creation.  Every pipeline
instance builds its own copies, so defaults are never shared mutable state.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import Any

from contentmap._errors import ConfigError

# camelCase keys accepted from JSON/YAML route and option definitions
_ALIASES = {
    "dynamicLocales": "dynamic_locales",
    "dynamicLastmod": "dynamic_lastmod",
    "lastmodParam": "lastmod_param",
    "localeParam": "locale_param",
    "defaultLocale": "default_locale",
}


def _normalize_keys(data: Mapping[str, Any], allowed: frozenset[str], kind: str) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in data.items():
        name = _ALIASES.get(key, key)
        if name not in allowed:
            msg = f"Unknown {kind} key: {key!r}"
            raise ConfigError(msg)
        result[name] = value
    return result


@dataclass(frozen=True, slots=True)
class SitemapOptions:
    """Options for one ContentSitemap pipeline.

    Attributes:
        locales: Locale codes used for alternate links, in output order.
        dynamic_locales: Load the locale list from the content source at
            resolution time and emit alternate links for every route.
        dynamic_lastmod: Take ``lastmod`` from fetched content items.
        origin: Site origin (e.g., ``"https://example.com"``) for the sitemap.
        lastmod_param: Dotted field path holding an item's modification time.
        locale_param: Pattern parameter that carries the locale code.
        default_locale: Locale seeded into every parameter set.  When unset
            and ``dynamic_locales`` is on, the source's default is adopted.
        strict: Abort the whole batch on a source failure.  When False, the
            failing template contributes nothing and a diagnostic is recorded.

    """

    locales: tuple[str, ...] = ()
    dynamic_locales: bool = False
    dynamic_lastmod: bool = False
    origin: str = ""
    lastmod_param: str = "sys.updatedAt"
    locale_param: str = "locale"
    default_locale: str | None = None
    strict: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.locales, str):
            object.__setattr__(self, "locales", (self.locales,))
        elif not isinstance(self.locales, tuple):
            object.__setattr__(self, "locales", tuple(self.locales))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> SitemapOptions:
        """Build options from a mapping with snake_case or camelCase keys."""
        if not data:
            return cls()
        allowed = frozenset(f.name for f in fields(cls))
        return cls(**_normalize_keys(data, allowed, "option"))


@dataclass(frozen=True, slots=True)
class RouteTemplate:
    """A configured rule describing how content becomes one or more URLs.

    A template is either static (``url`` set, no ``pattern``) or patterned.
    Patterned templates resolve once from the default parameters, or once
    per content item when ``query`` is set.

    Attributes:
        url: Static URL path.
        changefreq: Sitemap change frequency hint.
        lastmod: Static last-modified value.
        priority: Sitemap priority.
        id: Content item id whose modification time becomes ``lastmod``.
        pattern: Parameterized URL pattern (e.g., ``/posts/:slug``).
        params: Mapping of pattern parameter name to dotted field path.
        query: Content source query selecting the items for this route.

    """

    url: str | None = None
    changefreq: str | None = None
    lastmod: str | None = None
    priority: float = 1
    id: str | None = None
    pattern: str | None = None
    params: Mapping[str, str] | None = None
    query: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        if self.params is not None:
            object.__setattr__(self, "params", MappingProxyType(dict(self.params)))
        if self.query is not None:
            object.__setattr__(self, "query", MappingProxyType(dict(self.query)))
        if self.id is not None and self.query is not None:
            msg = "RouteTemplate cannot set both 'id' and 'query'"
            raise ConfigError(msg)
        if self.query is not None and not self.pattern:
            msg = "RouteTemplate with 'query' requires a 'pattern'"
            raise ConfigError(msg)

    @classmethod
    def from_mapping(cls, data: RouteTemplate | Mapping[str, Any]) -> RouteTemplate:
        """Merge a route definition with the template defaults."""
        if isinstance(data, RouteTemplate):
            return data
        if not isinstance(data, Mapping):
            msg = f"Route definition must be a mapping, got {type(data).__name__}"
            raise ConfigError(msg)
        allowed = frozenset(f.name for f in fields(cls))
        return cls(**_normalize_keys(data, allowed, "route"))


@dataclass(frozen=True, slots=True)
class ContentfulSettings:
    """Connection settings for the Contentful content source.

    Attributes:
        space: Contentful space id.
        access_token: Delivery (or preview) API token.
        environment: Space environment.
        host: API host; use ``preview.contentful.com`` for drafts.
        timeout: Request timeout in seconds.

    """

    space: str = ""
    access_token: str = ""
    environment: str = "master"
    host: str = "cdn.contentful.com"
    timeout: float = 10.0


@dataclass(frozen=True, slots=True)
class ContentmapConfig:
    """Everything needed to build a sitemap for one site.

    Attributes:
        options: Pipeline options.
        routes: Route templates in registration order.
        contentful: Content source connection settings.
        output: Sitemap output path, relative to the config root.

    """

    options: SitemapOptions = field(default_factory=SitemapOptions)
    routes: tuple[RouteTemplate, ...] = ()
    contentful: ContentfulSettings = field(default_factory=ContentfulSettings)
    output: str = "sitemap.xml"
