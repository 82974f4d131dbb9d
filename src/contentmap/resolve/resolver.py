"""Route resolver — turns one route template into resolved routes.

Each template takes exactly one of these paths:

    static   no pattern          -> the template's own URL
    single   pattern, no query   -> one URL from the default parameters
    query    pattern + query     -> one URL per matching content item

Independently, a template with an ``id`` takes its ``lastmod`` from that
item when dynamic lastmod is enabled.

Templates are never modified.  Every pass builds new ``ResolvedRoute``
records, so one template can be resolved concurrently or repeatedly.

Mismatches are skipped, not raised: a pattern that cannot be built from
the default parameters, an item that cannot satisfy its template, and a
locale whose alternate URL cannot be built are each recorded as a
diagnostic on the collector and left out of the output.
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any
from urllib.parse import unquote

from contentmap._errors import PatternMismatch, SourceFetchError
from contentmap.resolve.locales import expand_locales
from contentmap.resolve.pagination import load_all_items
from contentmap.resolve.params import MISSING, extract_params, get_path, unsatisfied_reason
from contentmap.resolve.records import LocaleLink, LocaleSet, ResolvedRoute

if TYPE_CHECKING:
    from contentmap._types import ContentItem, ParameterSet, UrlBuilder
    from contentmap.config import RouteTemplate, SitemapOptions
    from contentmap.observability.collector import ResolutionCollector
    from contentmap.source.base import ContentSource
    from contentmap.templater import PathTemplater


def template_label(template: RouteTemplate) -> str:
    """Short description of a template for diagnostics."""
    return template.pattern or template.url or f"<route id={template.id}>"


def build_query(template: RouteTemplate, options: SitemapOptions) -> dict[str, Any]:
    """The query sent to the content source for a query-bound template.

    When dynamic lastmod is on and the query narrows fields with ``select``,
    the lastmod field is added to the selection so items carry it.
    """
    query = dict(template.query or {})
    select = query.get("select")
    if options.dynamic_lastmod and select:
        fields = select.split(",") if isinstance(select, str) else list(select)
        fields = [f.strip() for f in fields if f and f.strip()]
        if options.lastmod_param not in fields:
            fields.append(options.lastmod_param)
        query["select"] = ",".join(fields)
    return query


class RouteResolver:
    """Resolves route templates against a content source.

    Args:
        source: Validated content source.
        options: Pipeline options.
        templater: Pattern compiler.
        collector: Optional event collector for fetches and skips.

    """

    def __init__(
        self,
        source: ContentSource,
        options: SitemapOptions,
        templater: PathTemplater,
        collector: ResolutionCollector | None = None,
    ) -> None:
        self._source = source
        self._options = options
        self._templater = templater
        self._collector = collector

    async def resolve(
        self,
        template: RouteTemplate,
        locales: LocaleSet | None = None,
    ) -> list[ResolvedRoute]:
        """Resolve one template into zero or more routes.

        Args:
            template: The route template.
            locales: Locale set for this pass.  Defaults to the static
                locales and default locale from the options.

        Raises:
            SourceFetchError: If fetching the template's item or query fails.

        """
        if locales is None:
            locales = LocaleSet(self._options.locales, self._options.default_locale)

        t0 = time.perf_counter()
        lastmod = template.lastmod
        if template.id and self._options.dynamic_lastmod:
            item = await self._fetch_item(template.id)
            lastmod = self._lastmod_of(item, lastmod)

        if not template.pattern:
            routes = self._resolve_static(template, lastmod)
        elif template.query is not None:
            routes = await self._resolve_query(template, lastmod, locales)
        else:
            routes = self._resolve_single(template, lastmod, locales)

        if self._collector is not None:
            self._collector.record_resolved(
                template_label(template),
                count=len(routes),
                duration_ms=(time.perf_counter() - t0) * 1000,
            )
        return routes

    # ----- Resolution paths -----

    def _resolve_static(self, template: RouteTemplate, lastmod: str | None) -> list[ResolvedRoute]:
        if not template.url:
            self._skip_route(template, "template has neither url nor pattern")
            return []
        return [self._route(template, template.url, lastmod, ())]

    def _resolve_single(
        self,
        template: RouteTemplate,
        lastmod: str | None,
        locales: LocaleSet,
    ) -> list[ResolvedRoute]:
        to_url = self._templater.compile(template.pattern)  # type: ignore[arg-type]
        params = self._base_params(locales)
        try:
            url = unquote(to_url(params))
        except PatternMismatch as exc:
            self._skip_route(template, str(exc))
            return []
        links = self._links(template, to_url, params, locales)
        return [self._route(template, url, lastmod, links)]

    async def _resolve_query(
        self,
        template: RouteTemplate,
        lastmod: str | None,
        locales: LocaleSet,
    ) -> list[ResolvedRoute]:
        pattern: str = template.pattern  # type: ignore[assignment]
        to_url = self._templater.compile(pattern)
        required = self._templater.required_param_names(pattern)
        base = self._base_params(locales)

        items = await load_all_items(
            self._source,
            build_query(template, self._options),
            collector=self._collector,
        )

        routes: list[ResolvedRoute] = []
        for position, item in enumerate(items):
            reason = unsatisfied_reason(item, template, required, base)
            if reason is not None:
                self._skip_item(template, position, reason)
                continue

            params = extract_params(item, template.params, base)
            try:
                url = unquote(to_url(params))
            except PatternMismatch as exc:
                self._skip_item(template, position, str(exc))
                continue

            item_lastmod = lastmod
            if self._options.dynamic_lastmod:
                item_lastmod = self._lastmod_of(item, lastmod)

            links = self._links(template, to_url, params, locales)
            routes.append(self._route(template, url, item_lastmod, links))
        return routes

    # ----- Helpers -----

    async def _fetch_item(self, item_id: str) -> ContentItem:
        t0 = time.perf_counter()
        try:
            item = await self._source.get_item(item_id)
        except SourceFetchError:
            raise
        except Exception as exc:
            msg = f"Fetching item {item_id!r} failed: {exc}"
            raise SourceFetchError(msg) from exc
        if self._collector is not None:
            self._collector.record_item(item_id, duration_ms=(time.perf_counter() - t0) * 1000)
        return item

    def _lastmod_of(self, item: ContentItem, fallback: str | None) -> str | None:
        value = get_path(item, self._options.lastmod_param)
        if value is MISSING:
            return fallback
        return str(value)

    def _base_params(self, locales: LocaleSet) -> ParameterSet:
        if locales.default:
            return {self._options.locale_param: locales.default}
        return {}

    def _links(
        self,
        template: RouteTemplate,
        to_url: UrlBuilder,
        params: Mapping[str, Any],
        locales: LocaleSet,
    ) -> tuple[LocaleLink, ...]:
        if not self._options.dynamic_locales or not locales.codes:
            return ()
        label = template_label(template)

        def on_skip(locale: str, reason: str) -> None:
            if self._collector is not None:
                self._collector.record_locale_skipped(label, locale, reason)

        return expand_locales(
            to_url, params, locales.codes, self._options.locale_param, on_skip=on_skip,
        )

    def _route(
        self,
        template: RouteTemplate,
        url: str,
        lastmod: str | None,
        links: tuple[LocaleLink, ...],
    ) -> ResolvedRoute:
        return ResolvedRoute(
            url=url,
            changefreq=template.changefreq,
            lastmod=lastmod,
            priority=template.priority,
            links=links,
        )

    def _skip_route(self, template: RouteTemplate, reason: str) -> None:
        if self._collector is not None:
            self._collector.record_route_skipped(template_label(template), reason)

    def _skip_item(self, template: RouteTemplate, position: int, reason: str) -> None:
        if self._collector is not None:
            self._collector.record_item_skipped(template_label(template), position, reason)
