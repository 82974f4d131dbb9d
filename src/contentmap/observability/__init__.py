"""Resolution observability — events, bounded log, and collector.

Skipped routes, items and locales are never raised; they are recorded as
events so callers can inspect why a sitemap came out smaller than expected.

Quick Start:
    >>> from contentmap.observability import ResolutionCollector
    >>> collector = ResolutionCollector()
    >>> # sitemap = ContentSitemap(source, routes, collector=collector)
    >>> # await sitemap.build_routes()
    >>> # collector.diagnostics()

"""

from contentmap.observability.collector import ResolutionCollector
from contentmap.observability.events import (
    ItemFetched,
    ItemSkipped,
    LocalesLoaded,
    LocaleSkipped,
    PageFetched,
    ResolutionEvent,
    RouteResolved,
    RouteSkipped,
    SkipEvent,
    TemplateFailed,
    now_ns,
)
from contentmap.observability.log import EventLog, LoggedEvent

__all__ = [
    "EventLog",
    "ItemFetched",
    "ItemSkipped",
    "LocaleSkipped",
    "LocalesLoaded",
    "LoggedEvent",
    "PageFetched",
    "ResolutionCollector",
    "ResolutionEvent",
    "RouteResolved",
    "RouteSkipped",
    "SkipEvent",
    "TemplateFailed",
    "now_ns",
]
