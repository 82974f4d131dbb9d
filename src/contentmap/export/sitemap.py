"""Sitemap generation — produce sitemap.xml from resolved routes.

Each route becomes a ``<url>`` entry with ``<loc>`` and, when set,
``<lastmod>``, ``<changefreq>`` and ``<priority>``.  Alternate-language
links become ``<xhtml:link rel="alternate" hreflang=...>`` children.
Relative URLs are joined to the configured origin.
"""

from __future__ import annotations

import sys
import time
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from xml.etree.ElementTree import Element, SubElement, tostring

from contentmap._errors import ExportError
from contentmap.resolve.records import ResolvedRoute

# XML namespaces for sitemaps and alternate-language links
_SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
_XHTML_NS = "http://www.w3.org/1999/xhtml"


@dataclass(frozen=True, slots=True)
class WrittenSitemap:
    """Record of a sitemap written to disk."""

    path: Path
    url_count: int
    size_bytes: int
    duration_ms: float


def absolute_url(origin: str, url: str) -> str:
    """Join a site-relative URL to ``origin``; absolute URLs pass through."""
    if "://" in url or not origin:
        return url
    base = origin.rstrip("/")
    if not url.startswith("/"):
        url = "/" + url
    return base + url


def _format_priority(priority: float) -> str:
    return f"{float(priority):.1f}"


def generate_sitemap(routes: Iterable[ResolvedRoute], origin: str) -> str:
    """Generate a sitemap.xml string from resolved routes.

    Args:
        routes: Resolved routes, in output order.
        origin: Site origin (e.g., ``"https://example.com"``).

    Returns:
        Complete XML string suitable for writing to ``sitemap.xml``.

    """
    urlset = Element("urlset")
    urlset.set("xmlns", _SITEMAP_NS)
    urlset.set("xmlns:xhtml", _XHTML_NS)

    for route in routes:
        url_el = SubElement(urlset, "url")
        loc = SubElement(url_el, "loc")
        loc.text = absolute_url(origin, route.url)

        if route.lastmod:
            SubElement(url_el, "lastmod").text = route.lastmod
        if route.changefreq:
            SubElement(url_el, "changefreq").text = route.changefreq
        if route.priority is not None:
            SubElement(url_el, "priority").text = _format_priority(route.priority)

        for link in route.links:
            link_el = SubElement(url_el, "xhtml:link")
            link_el.set("rel", "alternate")
            link_el.set("hreflang", link.lang)
            link_el.set("href", absolute_url(origin, link.url))

    xml_text = tostring(urlset, encoding="unicode", xml_declaration=False)
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + xml_text + "\n"


def write_sitemap(
    routes: Iterable[ResolvedRoute],
    origin: str,
    path: Path,
) -> WrittenSitemap | None:
    """Write sitemap.xml to ``path``.

    Returns *None* (with a warning on stderr) if ``origin`` is empty.

    Raises:
        ExportError: If the file cannot be written.

    """
    if not origin:
        print(
            "  Sitemap skipped — set origin in config to enable",
            file=sys.stderr,
        )
        return None

    routes = list(routes)
    t0 = time.perf_counter()
    data = generate_sitemap(routes, origin).encode("utf-8")

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except OSError as exc:
        msg = f"Could not write sitemap to {path}: {exc}"
        raise ExportError(msg) from exc
    elapsed = (time.perf_counter() - t0) * 1000

    return WrittenSitemap(
        path=path,
        url_count=len(routes),
        size_bytes=len(data),
        duration_ms=elapsed,
    )
