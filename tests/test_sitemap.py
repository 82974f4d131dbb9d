"""Tests for contentmap.export.sitemap — sitemap.xml generation."""

from __future__ import annotations

from pathlib import Path
from xml.etree.ElementTree import Element, fromstring

import pytest

from contentmap._errors import ExportError
from contentmap.export.sitemap import absolute_url, generate_sitemap, write_sitemap
from contentmap.resolve.records import LocaleLink, ResolvedRoute


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
_XHTML = "http://www.w3.org/1999/xhtml"


def _parse(xml: str) -> Element:
    return fromstring(xml.split("\n", 1)[1])  # skip XML declaration


def _locs(root: Element) -> list[str | None]:
    return [url.find(f"{{{_NS}}}loc").text for url in root.findall(f"{{{_NS}}}url")]  # type: ignore[union-attr]


# ---------------------------------------------------------------------------
# generate_sitemap
# ---------------------------------------------------------------------------


class TestGenerateSitemap:
    """generate_sitemap — XML string generation."""

    def test_valid_xml(self) -> None:
        xml = generate_sitemap([ResolvedRoute(url="/")], "https://example.com")
        assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')
        assert _parse(xml).tag == f"{{{_NS}}}urlset"

    def test_urls_in_order(self) -> None:
        routes = [ResolvedRoute(url="/"), ResolvedRoute(url="/posts/hello")]
        root = _parse(generate_sitemap(routes, "https://example.com/"))
        assert _locs(root) == ["https://example.com/", "https://example.com/posts/hello"]

    def test_metadata_elements(self) -> None:
        route = ResolvedRoute(
            url="/a", changefreq="weekly", lastmod="2024-01-01T00:00:00.000Z", priority=0.8,
        )
        url = _parse(generate_sitemap([route], "https://example.com")).find(f"{{{_NS}}}url")

        assert url.find(f"{{{_NS}}}lastmod").text == "2024-01-01T00:00:00.000Z"  # type: ignore[union-attr]
        assert url.find(f"{{{_NS}}}changefreq").text == "weekly"  # type: ignore[union-attr]
        assert url.find(f"{{{_NS}}}priority").text == "0.8"  # type: ignore[union-attr]

    def test_optional_elements_omitted(self) -> None:
        url = _parse(generate_sitemap([ResolvedRoute(url="/")], "https://x.org")).find(f"{{{_NS}}}url")
        assert url.find(f"{{{_NS}}}lastmod") is None  # type: ignore[union-attr]
        assert url.find(f"{{{_NS}}}changefreq") is None  # type: ignore[union-attr]
        assert url.find(f"{{{_NS}}}priority").text == "1.0"  # type: ignore[union-attr]

    def test_alternate_links(self) -> None:
        route = ResolvedRoute(
            url="/en/a",
            links=(LocaleLink(url="/en/a", lang="en"), LocaleLink(url="/fr/a", lang="fr")),
        )
        url = _parse(generate_sitemap([route], "https://example.com")).find(f"{{{_NS}}}url")

        links = url.findall(f"{{{_XHTML}}}link")  # type: ignore[union-attr]
        assert [(l.get("hreflang"), l.get("href")) for l in links] == [
            ("en", "https://example.com/en/a"),
            ("fr", "https://example.com/fr/a"),
        ]
        assert all(l.get("rel") == "alternate" for l in links)

    def test_special_characters_escaped(self) -> None:
        xml = generate_sitemap([ResolvedRoute(url="/search?a=1&b=2")], "https://example.com")
        assert "&amp;" in xml
        assert _locs(_parse(xml)) == ["https://example.com/search?a=1&b=2"]

    def test_empty(self) -> None:
        assert _locs(_parse(generate_sitemap([], "https://example.com"))) == []


class TestAbsoluteUrl:
    def test_joins_origin(self) -> None:
        assert absolute_url("https://example.com/", "/a") == "https://example.com/a"

    def test_adds_leading_slash(self) -> None:
        assert absolute_url("https://example.com", "a") == "https://example.com/a"

    def test_absolute_passthrough(self) -> None:
        assert absolute_url("https://example.com", "https://cdn.example/a") == "https://cdn.example/a"

    def test_no_origin(self) -> None:
        assert absolute_url("", "/a") == "/a"


# ---------------------------------------------------------------------------
# write_sitemap
# ---------------------------------------------------------------------------


class TestWriteSitemap:
    """write_sitemap — file output."""

    def test_writes_file(self, tmp_path: Path) -> None:
        target = tmp_path / "public" / "sitemap.xml"
        result = write_sitemap([ResolvedRoute(url="/")], "https://example.com", target)

        assert result is not None
        assert result.path == target
        assert result.url_count == 1
        assert result.size_bytes == len(target.read_bytes())
        assert "https://example.com/" in target.read_text()

    def test_skipped_without_origin(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        target = tmp_path / "sitemap.xml"
        assert write_sitemap([ResolvedRoute(url="/")], "", target) is None
        assert not target.exists()
        assert "Sitemap skipped" in capsys.readouterr().err

    def test_unwritable_path(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("")
        with pytest.raises(ExportError, match="Could not write sitemap"):
            write_sitemap([ResolvedRoute(url="/")], "https://example.com", blocker / "sitemap.xml")
