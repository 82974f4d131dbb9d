"""Route resolution — from route templates and content to URL records.

    params      dotted-path extraction and entry filtering
    pagination  accumulate every item a query matches
    locales     alternate-language links
    resolver    one template -> resolved routes
    pipeline    all templates -> one flat list (ContentSitemap)
"""

from contentmap.resolve.pipeline import ContentSitemap
from contentmap.resolve.records import LocaleLink, LocaleSet, ResolvedRoute
from contentmap.resolve.resolver import RouteResolver

__all__ = [
    "ContentSitemap",
    "LocaleLink",
    "LocaleSet",
    "ResolvedRoute",
    "RouteResolver",
]
