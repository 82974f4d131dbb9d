"""Resolution records — the artifacts handed to the sitemap serializer."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class LocaleLink:
    """An alternate-language URL for a resolved route."""

    url: str
    lang: str


@dataclass(frozen=True, slots=True)
class ResolvedRoute:
    """A concrete, ready-to-serialize URL record.

    Attributes:
        url: URL path (site-relative) or absolute URL.
        changefreq: Sitemap change frequency hint.
        lastmod: Last-modified value (static, or fetched from content).
        priority: Sitemap priority.
        links: Alternate-language links, in configured locale order.

    """

    url: str
    changefreq: str | None = None
    lastmod: str | None = None
    priority: float = 1
    links: tuple[LocaleLink, ...] = ()

    def as_dict(self) -> dict[str, Any]:
        """Plain record form: ``{url, changefreq, lastmod, priority, links}``."""
        return {
            "url": self.url,
            "changefreq": self.changefreq,
            "lastmod": self.lastmod,
            "priority": self.priority,
            "links": [{"url": link.url, "lang": link.lang} for link in self.links],
        }


@dataclass(frozen=True, slots=True)
class LocaleSet:
    """Ordered locale codes plus the default locale, if any."""

    codes: tuple[str, ...] = ()
    default: str | None = None

    def __iter__(self) -> Iterator[str]:
        return iter(self.codes)

    def __len__(self) -> int:
        return len(self.codes)

    @classmethod
    def from_source(cls, payload: Any, default: str | None = None) -> LocaleSet:
        """Build a locale set from a ``list_locales()`` response.

        ``payload`` is ``{"items": [{"code": ..., "default": ...}, ...]}`` or
        the bare item list.  An explicit ``default`` wins over the locale the
        source flags as default.
        """
        if isinstance(payload, Mapping):
            entries: Sequence[Any] = payload.get("items") or ()
        else:
            entries = payload or ()

        codes: list[str] = []
        for entry in entries:
            if isinstance(entry, Mapping):
                code = entry.get("code")
                flagged = bool(entry.get("default"))
            else:
                code = getattr(entry, "code", None)
                flagged = bool(getattr(entry, "default", False))
            if not code:
                continue
            if default is None and flagged:
                default = code
            codes.append(code)
        return cls(codes=tuple(codes), default=default)
