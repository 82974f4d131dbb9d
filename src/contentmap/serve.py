"""Live sitemap endpoint for a chirp application.

Registers ``/sitemap.xml`` on a chirp ``App``.  Every request runs a fresh
resolution pass; content is not cached between requests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from chirp import App, Request

    from contentmap.resolve.pipeline import ContentSitemap

SITEMAP_ENDPOINT = "/sitemap.xml"
SITEMAP_CONTENT_TYPE = "application/xml; charset=utf-8"


def register_sitemap_endpoint(
    app: App,
    sitemap: ContentSitemap,
    path: str = SITEMAP_ENDPOINT,
) -> None:
    """Register a GET route serving the generated sitemap.

    Must be called before the chirp app is frozen (before first request).
    A content source failure answers 502 with the error message.

    Args:
        app: Chirp App to register the route on.
        sitemap: Pipeline to run for each request.
        path: URL path for the sitemap.

    """
    from contentmap._errors import SourceFetchError

    async def sitemap_handler(request: Request) -> Any:
        from chirp.http.response import Response

        try:
            xml = await sitemap.to_xml()
        except SourceFetchError as exc:
            return Response(
                body=f"Sitemap unavailable: {exc}",
                status=502,
                content_type="text/plain; charset=utf-8",
            )
        return Response(body=xml, status=200, content_type=SITEMAP_CONTENT_TYPE)

    sitemap_handler.__name__ = "contentmap_sitemap"
    sitemap_handler.__qualname__ = "contentmap.sitemap"

    app.route(path, name="contentmap:sitemap", referenced=True)(sitemap_handler)
