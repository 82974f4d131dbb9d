"""Tests for contentmap.resolve.locales and LocaleSet."""

from contentmap.resolve.locales import expand_locales
from contentmap.resolve.records import LocaleLink, LocaleSet
from contentmap.templater import PathTemplate


class TestExpandLocales:
    def test_one_link_per_locale(self) -> None:
        to_url = PathTemplate().compile("/:locale/posts/:slug")

        links = expand_locales(to_url, {"slug": "hello"}, ["en", "fr"])

        assert links == (
            LocaleLink(url="/en/posts/hello", lang="en"),
            LocaleLink(url="/fr/posts/hello", lang="fr"),
        )

    def test_locale_overrides_base_param(self) -> None:
        to_url = PathTemplate().compile("/:locale/about")
        links = expand_locales(to_url, {"locale": "en"}, ["de"])
        assert links == (LocaleLink(url="/de/about", lang="de"),)

    def test_duplicates_kept(self) -> None:
        to_url = PathTemplate().compile("/:locale")
        links = expand_locales(to_url, {}, ["en", "en"])
        assert [link.lang for link in links] == ["en", "en"]

    def test_custom_locale_param(self) -> None:
        to_url = PathTemplate().compile("/:lang/about")
        links = expand_locales(to_url, {}, ["en"], "lang")
        assert links == (LocaleLink(url="/en/about", lang="en"),)

    def test_urls_decoded(self) -> None:
        to_url = PathTemplate().compile("/:locale/posts/:slug")
        links = expand_locales(to_url, {"slug": "über uns"}, ["de"])
        assert links[0].url == "/de/posts/über uns"

    def test_failed_locale_skipped_and_reported(self) -> None:
        to_url = PathTemplate().compile("/:locale/posts/:slug")
        skipped: list[tuple[str, str]] = []

        links = expand_locales(
            to_url, {}, ["en", "fr"], on_skip=lambda loc, why: skipped.append((loc, why)),
        )

        assert links == ()
        assert [loc for loc, _ in skipped] == ["en", "fr"]
        assert '"slug"' in skipped[0][1]

    def test_no_locales(self) -> None:
        to_url = PathTemplate().compile("/:locale")
        assert expand_locales(to_url, {}, []) == ()


class TestLocaleSet:
    def test_from_source_adopts_flagged_default(self) -> None:
        locales = LocaleSet.from_source({
            "items": [{"code": "en", "default": False}, {"code": "fr", "default": True}],
        })
        assert locales.codes == ("en", "fr")
        assert locales.default == "fr"

    def test_explicit_default_wins(self) -> None:
        locales = LocaleSet.from_source(
            {"items": [{"code": "en", "default": True}, {"code": "fr"}]}, "fr",
        )
        assert locales.default == "fr"

    def test_accepts_bare_list_and_objects(self) -> None:
        class Locale:
            def __init__(self, code: str, default: bool) -> None:
                self.code = code
                self.default = default

        locales = LocaleSet.from_source([Locale("de", True), Locale("it", False)])
        assert list(locales) == ["de", "it"]
        assert locales.default == "de"

    def test_entries_without_code_ignored(self) -> None:
        locales = LocaleSet.from_source({"items": [{"name": "English"}, {"code": "en"}]})
        assert locales.codes == ("en",)
        assert len(locales) == 1
        assert locales.default is None
