"""Contentful content source over the Content Delivery API.

Uses raw HTTP via httpx; no Contentful SDK required.  Every non-200
response and every transport error surfaces as ``SourceFetchError``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from typing import Any

import httpx

from contentmap._errors import ConfigError, SourceFetchError
from contentmap.config import ContentfulSettings
from contentmap.source.base import ItemPage

TOKEN_ENV = "CONTENTFUL_ACCESS_TOKEN"


def _encode_query(query: Mapping[str, Any]) -> dict[str, str]:
    """Flatten a query into Contentful's string parameters.

    Lists become comma-separated values (``select``, ``[in]`` filters).
    """
    params: dict[str, str] = {}
    for key, value in query.items():
        if value is None:
            continue
        if isinstance(value, bool):
            params[key] = "true" if value else "false"
        elif isinstance(value, Sequence) and not isinstance(value, str):
            params[key] = ",".join(str(v) for v in value)
        else:
            params[key] = str(value)
    return params


class ContentfulSource:
    """Content source backed by a Contentful space.

    Args:
        settings: Space, token, environment and host.
        client: Optional shared ``httpx.AsyncClient``.  When omitted, each
            request opens and closes its own client.

    """

    def __init__(
        self,
        settings: ContentfulSettings,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        token = settings.access_token or os.environ.get(TOKEN_ENV, "")
        if not settings.space:
            msg = "Contentful source requires a space id"
            raise ConfigError(msg)
        if not token:
            msg = f"Contentful source requires an access token (or ${TOKEN_ENV})"
            raise ConfigError(msg)
        self._settings = settings
        self._token = token
        self._client = client
        self._base_url = (
            f"https://{settings.host}/spaces/{settings.space}"
            f"/environments/{settings.environment}"
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def list_items(self, query: Mapping[str, Any]) -> ItemPage:
        """List entries matching ``query`` (one page, honoring ``skip``)."""
        data = await self._get("/entries", _encode_query(query))
        return ItemPage.coerce(data)

    async def get_item(self, item_id: str) -> dict[str, Any]:
        """Fetch a single entry by id."""
        return await self._get(f"/entries/{item_id}")

    async def list_locales(self) -> dict[str, Any]:
        """List the space's locales with their ``default`` flag."""
        return await self._get("/locales")

    async def _get(self, path: str, params: Mapping[str, str] | None = None) -> Any:
        url = self._base_url + path
        headers = {"Authorization": f"Bearer {self._token}"}
        try:
            if self._client is not None:
                response = await self._client.get(
                    url, params=params, headers=headers, timeout=self._settings.timeout,
                )
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.get(
                        url, params=params, headers=headers, timeout=self._settings.timeout,
                    )
        except httpx.HTTPError as exc:
            msg = f"Contentful request to {path} failed: {exc}"
            raise SourceFetchError(msg) from exc

        if response.status_code != 200:
            msg = f"Contentful returned {response.status_code} for {path}: {response.text}"
            raise SourceFetchError(msg)

        try:
            return response.json()
        except ValueError as exc:
            msg = f"Contentful returned invalid JSON for {path}"
            raise SourceFetchError(msg) from exc
