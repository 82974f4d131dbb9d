"""Content source capability.

A content source is anything offering three async operations:

    list_items(query)  -> page of items with skip/limit/total
    get_item(item_id)  -> one item
    list_locales()     -> {"items": [{"code": ..., "default": ...}, ...]}

Sources are duck-typed against ``ContentSource`` and checked once, when a
pipeline is constructed.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from contentmap._errors import InvalidClientCapability, SourceFetchError

REQUIRED_OPERATIONS = ("list_items", "get_item", "list_locales")


@runtime_checkable
class ContentSource(Protocol):
    """Paginated listing, single fetch and locale listing."""

    async def list_items(self, query: Mapping[str, Any]) -> Any: ...

    async def get_item(self, item_id: str) -> Any: ...

    async def list_locales(self) -> Any: ...


@dataclass(frozen=True, slots=True)
class ItemPage:
    """One page of a paginated listing.

    Attributes:
        items: Items on this page, in listing order.
        skip: Offset of the first item.
        limit: Page size the source applied.
        total: Total number of items matching the query.

    """

    items: tuple[Any, ...]
    skip: int
    limit: int
    total: int

    @classmethod
    def coerce(cls, page: Any) -> ItemPage:
        """Accept an ``ItemPage``, a mapping, or an object with page attributes."""
        if isinstance(page, ItemPage):
            return page
        if isinstance(page, Mapping):
            get = page.get
        else:

            def get(key: str, default: Any = None) -> Any:
                return getattr(page, key, default)

        items = get("items") or ()
        if not isinstance(items, Sequence) or isinstance(items, (str, bytes)):
            msg = f"Content source returned a page without an item list: {page!r}"
            raise SourceFetchError(msg)
        try:
            return cls(
                items=tuple(items),
                skip=int(get("skip", 0) or 0),
                limit=int(get("limit", 0) or 0),
                total=int(get("total", len(items)) or 0),
            )
        except (TypeError, ValueError) as exc:
            msg = f"Content source returned malformed pagination fields: {exc}"
            raise SourceFetchError(msg) from exc


def missing_operations(source: object) -> tuple[str, ...]:
    """Names of required operations the source lacks or cannot call."""
    return tuple(
        name for name in REQUIRED_OPERATIONS if not callable(getattr(source, name, None))
    )


def validate_source(source: object) -> ContentSource:
    """Check that ``source`` offers every content source operation.

    Raises:
        InvalidClientCapability: If the source is missing or incomplete.

    """
    if source is None:
        msg = "Content source not provided"
        raise InvalidClientCapability(msg)
    missing = missing_operations(source)
    if missing:
        msg = (
            f"{type(source).__name__} is not a valid content source: "
            f"missing {', '.join(missing)}"
        )
        raise InvalidClientCapability(msg)
    return source  # type: ignore[return-value]
