"""Pipeline driver — resolve every route template into one flat list.

Flow of ``build_routes()``:
    1. With dynamic locales, load the locale list (and default) from the
       content source for this pass only.
    2. Resolve every template concurrently.
    3. Flatten in template order, then within-template order.

Options and templates are frozen; a pass never writes back into either,
so a ``ContentSitemap`` can be built from repeatedly.
"""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from contentmap._errors import SourceFetchError
from contentmap.config import RouteTemplate, SitemapOptions
from contentmap.resolve.records import LocaleSet, ResolvedRoute
from contentmap.resolve.resolver import RouteResolver, template_label
from contentmap.source.base import validate_source
from contentmap.templater import PathTemplate

if TYPE_CHECKING:
    from contentmap.observability.collector import ResolutionCollector
    from contentmap.source.base import ContentSource
    from contentmap.templater import PathTemplater


class ContentSitemap:
    """Route templates plus a content source, resolved into sitemap records.

    Args:
        source: Content source offering ``list_items``, ``get_item`` and
            ``list_locales``.  Checked immediately.
        routes: Route templates or mappings merged with template defaults.
        options: Pipeline options, a ``SitemapOptions`` or a mapping.
        templater: Pattern compiler (defaults to ``PathTemplate``).
        collector: Optional event collector for fetches and skips.

    Raises:
        InvalidClientCapability: If the source lacks a required operation.

    """

    def __init__(
        self,
        source: ContentSource,
        routes: Iterable[RouteTemplate | Mapping[str, Any]] = (),
        options: SitemapOptions | Mapping[str, Any] | None = None,
        *,
        templater: PathTemplater | None = None,
        collector: ResolutionCollector | None = None,
    ) -> None:
        self._source = validate_source(source)
        self._routes: tuple[RouteTemplate, ...] = tuple(
            RouteTemplate.from_mapping(route) for route in routes
        )
        if isinstance(options, SitemapOptions):
            self._options = options
        else:
            self._options = SitemapOptions.from_mapping(options)
        self._templater = templater if templater is not None else PathTemplate()
        self._collector = collector

    @property
    def routes(self) -> tuple[RouteTemplate, ...]:
        """Registered route templates, in registration order."""
        return self._routes

    @property
    def options(self) -> SitemapOptions:
        return self._options

    @property
    def collector(self) -> ResolutionCollector | None:
        return self._collector

    def add_route(self, route: RouteTemplate | Mapping[str, Any]) -> ContentSitemap:
        """Append a route template.  Returns self for chaining."""
        self._routes = (*self._routes, RouteTemplate.from_mapping(route))
        return self

    async def load_locales(self) -> LocaleSet:
        """Load locale codes and the default locale from the content source.

        An explicitly configured ``default_locale`` wins over the source's.

        Raises:
            SourceFetchError: If the locale listing fails.

        """
        try:
            payload = await self._source.list_locales()
        except SourceFetchError:
            raise
        except Exception as exc:
            msg = f"Listing locales failed: {exc}"
            raise SourceFetchError(msg) from exc

        locales = LocaleSet.from_source(payload, self._options.default_locale)
        if self._collector is not None:
            self._collector.record_locales(locales.codes, locales.default)
        return locales

    async def resolve_locales(self) -> LocaleSet:
        """The locale set for one pass: loaded or from static options."""
        if self._options.dynamic_locales:
            return await self.load_locales()
        return LocaleSet(self._options.locales, self._options.default_locale)

    async def build_routes(self) -> list[ResolvedRoute]:
        """Resolve all templates into a flat list of routes.

        Raises:
            SourceFetchError: In strict mode, on the first source failure.
                Lenient mode drops only the failing template.

        """
        if self._collector is not None:
            self._collector.begin_pass()
        locales = await self.resolve_locales()
        resolver = RouteResolver(self._source, self._options, self._templater, self._collector)

        results = await asyncio.gather(
            *(self._resolve_one(resolver, template, locales) for template in self._routes)
        )

        routes: list[ResolvedRoute] = []
        for result in results:
            routes.extend(result)
        return routes

    resolve_all = build_routes

    async def to_xml(self) -> str:
        """Build routes and serialize them as a sitemap document."""
        from contentmap.export.sitemap import generate_sitemap

        routes = await self.build_routes()
        return generate_sitemap(routes, self._options.origin)

    async def _resolve_one(
        self,
        resolver: RouteResolver,
        template: RouteTemplate,
        locales: LocaleSet,
    ) -> list[ResolvedRoute]:
        if self._options.strict:
            return await resolver.resolve(template, locales)
        try:
            return await resolver.resolve(template, locales)
        except SourceFetchError as exc:
            label = template_label(template)
            print(f"  Route skipped: {label}: {exc}", file=sys.stderr)
            if self._collector is not None:
                self._collector.record_template_failed(label, str(exc))
            return []
