"""Pagination accumulator — collect every item a query matches.

Pages are fetched strictly in sequence: each request's ``skip`` comes from
the previous page's ``limit``.  Termination is decided by the ``total`` the
source reports, not by page fullness, so a short middle page does not end
the listing early.
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from contentmap._errors import SourceFetchError
from contentmap.source.base import ItemPage

if TYPE_CHECKING:
    from contentmap._types import ContentItem
    from contentmap.observability.collector import ResolutionCollector
    from contentmap.source.base import ContentSource


async def fetch_page(source: ContentSource, query: Mapping[str, Any], skip: int) -> ItemPage:
    """Fetch one page of ``query`` starting at ``skip``.

    Raises:
        SourceFetchError: If the source call fails or returns a malformed page.

    """
    try:
        page = await source.list_items({**query, "skip": skip})
    except SourceFetchError:
        raise
    except Exception as exc:
        msg = f"Listing items failed at skip={skip}: {exc}"
        raise SourceFetchError(msg) from exc
    return ItemPage.coerce(page)


async def load_all_items(
    source: ContentSource,
    query: Mapping[str, Any] | None = None,
    *,
    collector: ResolutionCollector | None = None,
) -> list[ContentItem]:
    """Load every item matching ``query``, concatenating pages in fetch order.

    The loop ends once ``page.skip + len(page.items) >= page.total``.  It
    also ends if a page cannot advance the offset (``limit <= 0``) or comes
    back empty before the total is reached.  The result never holds more
    than the reported total.

    Raises:
        SourceFetchError: On the first failed page.  There is no retry.

    """
    base_query = dict(query or {})
    items: list[ContentItem] = []
    skip = 0

    while True:
        t0 = time.perf_counter()
        page = await fetch_page(source, base_query, skip)
        if collector is not None:
            collector.record_page(
                skip=skip,
                items=len(page.items),
                total=page.total,
                duration_ms=(time.perf_counter() - t0) * 1000,
            )

        items.extend(page.items)

        if page.skip + len(page.items) >= page.total:
            break
        if page.limit <= 0 or not page.items:
            break
        skip += page.limit

    if len(items) > page.total:
        del items[page.total:]
    return items
