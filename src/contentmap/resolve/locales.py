"""Locale expansion — one alternate link per configured locale."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any
from urllib.parse import unquote

from contentmap._errors import PatternMismatch
from contentmap.resolve.records import LocaleLink

if TYPE_CHECKING:
    from contentmap._types import UrlBuilder


def expand_locales(
    to_url: UrlBuilder,
    base_params: Mapping[str, Any],
    locales: Iterable[str],
    locale_param: str = "locale",
    *,
    on_skip: Callable[[str, str], None] | None = None,
) -> tuple[LocaleLink, ...]:
    """Build an alternate link for each locale, in order.

    Each link's parameters are ``base_params`` with ``locale_param`` set to
    the locale code.  URLs are percent-decoded.  Duplicate codes produce
    duplicate links.  A locale whose URL cannot be built is left out and
    reported through ``on_skip(locale, reason)``.
    """
    links: list[LocaleLink] = []
    for locale in locales:
        try:
            url = to_url({**base_params, locale_param: locale})
        except PatternMismatch as exc:
            if on_skip is not None:
                on_skip(locale, str(exc))
            continue
        links.append(LocaleLink(url=unquote(url), lang=locale))
    return tuple(links)
