"""Contentmap — localized sitemaps from route templates and CMS content.

Route templates describe URLs: static paths, patterns filled from default
parameters, or patterns filled once per content item a query matches.
Contentmap fetches the content, resolves every template into concrete
URLs with alternate-language links and last-modified dates, and writes a
sitemap.

Quick start::

    from contentmap import ContentSitemap
    from contentmap.source import ContentfulSource

    sitemap = ContentSitemap(
        ContentfulSource(settings),
        [
            {"url": "/"},
            {
                "pattern": "/:locale/posts/:slug",
                "query": {"content_type": "post"},
                "params": {"slug": "fields.slug"},
            },
        ],
        {"origin": "https://example.com", "dynamicLocales": True},
    )
    xml = await sitemap.to_xml()

Command line::

    contentmap build my-site/     # reads my-site/contentmap.yaml

"""

__version__ = "0.1.0"
__all__ = [
    "ContentSitemap",
    "ContentmapConfig",
    "ResolvedRoute",
    "RouteTemplate",
    "SitemapOptions",
    "__version__",
    "build",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import contentmap`` fast while providing a clean top-level API.
    """
    if name == "ContentSitemap":
        from contentmap.resolve.pipeline import ContentSitemap

        return ContentSitemap

    if name == "ResolvedRoute":
        from contentmap.resolve.records import ResolvedRoute

        return ResolvedRoute

    if name in ("ContentmapConfig", "RouteTemplate", "SitemapOptions"):
        from contentmap import config

        return getattr(config, name)

    if name == "build":
        from contentmap.app import build

        return build

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
