"""Shared test fixtures for contentmap."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import pytest


class FakeSource:
    """In-memory content source that pages like Contentful.

    Records every call so tests can assert on fetch counts and offsets.
    Set ``fail_on`` to an operation name to make it raise.
    """

    def __init__(
        self,
        items: list[Any] | None = None,
        *,
        limit: int = 100,
        entries: Mapping[str, Any] | None = None,
        locales: list[dict[str, Any]] | None = None,
        queries: Mapping[str, list[Any]] | None = None,
        fail_on: str | None = None,
    ) -> None:
        self.items = list(items or [])
        self.limit = limit
        self.entries = dict(entries or {})
        self.locales = list(locales or [])
        self.queries = dict(queries or {})
        self.fail_on = fail_on
        self.list_calls: list[dict[str, Any]] = []
        self.get_calls: list[str] = []
        self.locale_calls = 0

    def _items_for(self, query: Mapping[str, Any]) -> list[Any]:
        content_type = query.get("content_type")
        if content_type is not None and content_type in self.queries:
            return self.queries[content_type]
        return self.items

    async def list_items(self, query: Mapping[str, Any]) -> dict[str, Any]:
        self.list_calls.append(dict(query))
        if self.fail_on == "list_items":
            msg = "listing unavailable"
            raise ConnectionError(msg)
        items = self._items_for(query)
        skip = query.get("skip", 0)
        return {
            "items": items[skip:skip + self.limit],
            "skip": skip,
            "limit": self.limit,
            "total": len(items),
        }

    async def get_item(self, item_id: str) -> Any:
        self.get_calls.append(item_id)
        if self.fail_on == "get_item":
            msg = "entry unavailable"
            raise ConnectionError(msg)
        return self.entries[item_id]

    async def list_locales(self) -> dict[str, Any]:
        self.locale_calls += 1
        if self.fail_on == "list_locales":
            msg = "locales unavailable"
            raise ConnectionError(msg)
        return {"items": self.locales}


def make_entry(slug: str | None, updated_at: str = "2024-01-01T00:00:00.000Z") -> dict[str, Any]:
    """Create a Contentful-shaped entry with ``fields.slug`` and ``sys.updatedAt``."""
    fields: dict[str, Any] = {"title": f"Post {slug}"}
    if slug is not None:
        fields["slug"] = slug
    return {"sys": {"id": f"id-{slug}", "updatedAt": updated_at}, "fields": fields}


@pytest.fixture
def fake_source() -> FakeSource:
    """Source with three posts and English/French locales."""
    return FakeSource(
        [make_entry("hello"), make_entry("world"), make_entry("again")],
        entries={"home": {"sys": {"id": "home", "updatedAt": "2024-05-05T10:00:00.000Z"}}},
        locales=[
            {"code": "en", "default": True},
            {"code": "fr", "default": False},
        ],
    )


@pytest.fixture
def config_root(tmp_path: Path) -> Path:
    """A directory holding a minimal contentmap.yaml."""
    (tmp_path / "contentmap.yaml").write_text(
        "options:\n"
        "  origin: https://example.com\n"
        "  dynamicLastmod: true\n"
        "contentful:\n"
        "  space: space-1\n"
        "  access_token: token-1\n"
        "routes:\n"
        "  - url: /\n"
        "    changefreq: daily\n"
        "  - pattern: /posts/:slug\n"
        "    query: {content_type: post}\n"
        "    params: {slug: fields.slug}\n"
    )
    return tmp_path
