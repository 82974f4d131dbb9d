"""Tests for contentmap.resolve.params — extraction and entry filtering."""

from types import SimpleNamespace

from contentmap.config import RouteTemplate
from contentmap.resolve.params import (
    MISSING,
    extract_params,
    get_path,
    is_record,
    is_route_satisfiable,
    unsatisfied_reason,
)
from tests.conftest import make_entry


class TestGetPath:
    def test_nested_lookup(self) -> None:
        assert get_path({"sys": {"updatedAt": "t"}}, "sys.updatedAt") == "t"

    def test_missing_key(self) -> None:
        assert get_path({"sys": {}}, "sys.updatedAt") is MISSING

    def test_none_value_is_missing(self) -> None:
        assert get_path({"a": None}, "a") is MISSING

    def test_list_index(self) -> None:
        assert get_path({"tags": ["x", "y"]}, "tags.1") == "y"
        assert get_path({"tags": ["x"]}, "tags.4") is MISSING
        assert get_path({"tags": ["x"]}, "tags.first") is MISSING

    def test_through_scalar(self) -> None:
        assert get_path({"a": "text"}, "a.b") is MISSING

    def test_default(self) -> None:
        assert get_path({}, "a", None) is None

    def test_missing_is_falsy(self) -> None:
        assert not MISSING

    def test_attribute_objects(self) -> None:
        entry = SimpleNamespace(fields=SimpleNamespace(slug="x", tags=["a", "b"]))
        assert get_path(entry, "fields.slug") == "x"
        assert get_path(entry, "fields.tags.1") == "b"
        assert get_path(entry, "fields.title") is MISSING

    def test_mapping_inside_attribute_object(self) -> None:
        entry = SimpleNamespace(sys={"updatedAt": "t"})
        assert get_path(entry, "sys.updatedAt") == "t"


class TestExtractParams:
    def test_extracts_declared_paths(self) -> None:
        params = extract_params(make_entry("hello"), {"slug": "fields.slug"})
        assert params == {"slug": "hello"}

    def test_absent_values_left_out(self) -> None:
        params = extract_params(make_entry(None), {"slug": "fields.slug"})
        assert params == {}
        assert "slug" not in params

    def test_base_params_seed_and_win(self) -> None:
        item = {"fields": {"slug": "hello", "locale": "de"}}
        params = extract_params(
            item,
            {"slug": "fields.slug", "locale": "fields.locale"},
            {"locale": "en"},
        )
        assert params == {"locale": "en", "slug": "hello"}

    def test_does_not_mutate_base(self) -> None:
        base = {"locale": "en"}
        extract_params(make_entry("hello"), {"slug": "fields.slug"}, base)
        assert base == {"locale": "en"}

    def test_no_declared_params(self) -> None:
        assert extract_params({"a": 1}, None, {"locale": "en"}) == {"locale": "en"}


class TestEntryFilter:
    route = RouteTemplate(pattern="/posts/:slug", params={"slug": "fields.slug"})

    def test_is_record(self) -> None:
        assert is_record({"a": 1})
        assert not is_record({})
        assert not is_record(["a"])
        assert not is_record("entry")
        assert not is_record(None)

    def test_is_record_attribute_objects(self) -> None:
        class Slotted:
            __slots__ = ("fields",)

            def __init__(self) -> None:
                self.fields = {"slug": "x"}

        assert is_record(SimpleNamespace(fields={}))
        assert is_record(Slotted())
        assert not is_record(SimpleNamespace())
        assert not is_record(object())

    def test_attribute_item_satisfies_template(self) -> None:
        entry = SimpleNamespace(fields=SimpleNamespace(slug="hello"))
        assert is_route_satisfiable(entry, self.route, {"slug"})
        assert extract_params(entry, self.route.params) == {"slug": "hello"}

    def test_satisfying_item_included(self) -> None:
        assert is_route_satisfiable(make_entry("hello"), self.route, {"slug"})

    def test_missing_declared_path_excluded(self) -> None:
        assert not is_route_satisfiable(make_entry(None), self.route, {"slug"})

    def test_falsy_declared_value_excluded(self) -> None:
        item = {"fields": {"slug": ""}}
        assert not is_route_satisfiable(item, self.route, {"slug"})

    def test_empty_and_non_record_items_excluded(self) -> None:
        assert unsatisfied_reason({}, self.route, {"slug"}) == "item is empty or not a record"
        assert not is_route_satisfiable("hello", self.route, {"slug"})

    def test_declared_extra_param_must_resolve(self) -> None:
        route = RouteTemplate(
            pattern="/posts/:slug",
            params={"slug": "fields.slug", "updated": "sys.publishedAt"},
        )
        assert not is_route_satisfiable(make_entry("hello"), route, {"slug"})

    def test_required_name_without_mapping_excluded(self) -> None:
        route = RouteTemplate(pattern="/:category/:slug", params={"slug": "fields.slug"})
        reason = unsatisfied_reason(make_entry("hello"), route, {"category", "slug"})
        assert reason == "pattern parameter 'category' is not supplied"

    def test_required_name_from_base_params(self) -> None:
        route = RouteTemplate(pattern="/:locale/:slug", params={"slug": "fields.slug"})
        assert is_route_satisfiable(
            make_entry("hello"), route, {"locale", "slug"}, {"locale": "en"},
        )

    def test_template_without_params(self) -> None:
        route = RouteTemplate(pattern="/posts")
        assert is_route_satisfiable({"sys": {"id": "1"}}, route, set())
