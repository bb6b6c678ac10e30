"""Tests for user filter parsing and filter semantics."""

import pytest

from usergraph.store import QueryMode, StringFilter, UserStore, UserUpdate, UserWhere, ValidationError
from usergraph.store.filters import parse_update, parse_where


class TestParseWhere:
    """Validation of filters given as dicts."""

    def test_none_means_no_filter(self):
        assert parse_where(None) is None

    def test_camel_case_keys(self):
        where = parse_where({"name": {"startsWith": "A", "notIn": ["Al"], "mode": "insensitive"}})

        assert isinstance(where.name, StringFilter)
        assert where.name.starts_with == "A"
        assert where.name.not_in == ["Al"]
        assert where.name.mode is QueryMode.insensitive

    def test_snake_case_keys(self):
        where = parse_where({"name": {"ends_with": "e", "in_": ["Alice"], "not_": {"equals": "x"}}})

        assert where.name.ends_with == "e"
        assert where.name.in_ == ["Alice"]
        assert where.name.not_ == StringFilter(equals="x")

    def test_plain_string_field(self):
        assert parse_where({"id": "1"}).id == "1"

    def test_single_nested_filter_is_wrapped(self):
        where = parse_where({"AND": {"id": "1"}})
        assert where.AND == [UserWhere(id="1")]

    def test_model_passes_through(self):
        where = UserWhere(name=StringFilter(contains="b"))
        assert parse_where(where) is where

    @pytest.mark.parametrize(
        "value",
        [
            {"email": {"equals": "a"}},
            {"name": {"like": "a"}},
            {"name": {"mode": "loose"}},
            {"name": {"in": "Alice"}},
            {"OR": [1]},
            "name",
        ],
    )
    def test_malformed_filters_raise_validation_error(self, value):
        with pytest.raises(ValidationError) as exc_info:
            parse_where(value)
        assert exc_info.value.code == "BAD_USER_INPUT"


class TestParseUpdate:
    def test_set_operation(self):
        assert parse_update({"name": {"set": "Zed"}}).column_values() == {"name": "Zed"}

    def test_plain_value(self):
        assert parse_update({"name": "Zed"}).column_values() == {"name": "Zed"}

    def test_empty_and_none(self):
        assert parse_update({}).column_values() == {}
        assert parse_update(None).column_values() == {}
        assert parse_update({"name": None}).column_values() == {}

    def test_model_passes_through(self):
        update = UserUpdate(name="Zed")
        assert parse_update(update) is update

    @pytest.mark.parametrize(
        "value",
        [
            {"id": {"set": "2"}},
            {"name": {"set": None}},
            {"name": {"increment": 1}},
        ],
    )
    def test_malformed_updates_raise_validation_error(self, value):
        with pytest.raises(ValidationError):
            parse_update(value)


@pytest.mark.asyncio
class TestFilterSemantics:
    """Filters evaluated by the store against Alice, bob, Bob, Carol, dave (ids 1-5)."""

    async def ids(self, store: UserStore, where) -> list[str]:
        return [u.id for u in await store.find_many(where)]

    async def test_contains_insensitive_matches_any_case(self, seeded_store: UserStore):
        where = {"name": {"contains": "B", "mode": "insensitive"}}
        assert await self.ids(seeded_store, where) == ["2", "3"]

    async def test_contains_default_mode_is_case_sensitive(self, seeded_store: UserStore):
        assert await self.ids(seeded_store, {"name": {"contains": "b"}}) == ["2", "3"]
        assert await self.ids(seeded_store, {"name": {"startsWith": "B"}}) == ["3"]
        assert await self.ids(seeded_store, {"name": {"contains": "A"}}) == ["1"]

    async def test_starts_and_ends_with(self, seeded_store: UserStore):
        assert await self.ids(seeded_store, {"name": {"startsWith": "Ca"}}) == ["4"]
        assert await self.ids(seeded_store, {"name": {"endsWith": "e"}}) == ["1", "5"]
        where = {"name": {"startsWith": "a", "mode": "insensitive"}}
        assert await self.ids(seeded_store, where) == ["1"]

    async def test_equals_insensitive(self, seeded_store: UserStore):
        where = {"name": {"equals": "BOB", "mode": "insensitive"}}
        assert await self.ids(seeded_store, where) == ["2", "3"]

    async def test_in_and_not_in(self, seeded_store: UserStore):
        assert await self.ids(seeded_store, {"id": {"in": ["1", "4", "9"]}}) == ["1", "4"]
        assert await self.ids(seeded_store, {"id": {"notIn": ["1", "4"]}}) == ["2", "3", "5"]
        assert await self.ids(seeded_store, {"id": {"in": []}}) == []

    async def test_lexicographic_comparisons(self, seeded_store: UserStore):
        # uppercase letters sort before lowercase ones
        assert await self.ids(seeded_store, {"name": {"lt": "C"}}) == ["1", "3"]
        assert await self.ids(seeded_store, {"name": {"gte": "Carol"}}) == ["2", "4", "5"]
        assert await self.ids(seeded_store, {"id": {"gt": "2", "lte": "4"}}) == ["3", "4"]

    async def test_predicates_on_one_field_are_anded(self, seeded_store: UserStore):
        where = {"name": {"contains": "o", "startsWith": "b"}}
        assert await self.ids(seeded_store, where) == ["2"]

    async def test_fields_are_anded(self, seeded_store: UserStore):
        where = {"id": {"in": ["1", "2", "3"]}, "name": {"contains": "o"}}
        assert await self.ids(seeded_store, where) == ["2", "3"]

    async def test_nested_not_inherits_mode(self, seeded_store: UserStore):
        where = {"name": {"contains": "o", "mode": "insensitive", "not": {"equals": "BOB"}}}
        assert await self.ids(seeded_store, where) == ["4"]

    async def test_not_shorthand_string(self, seeded_store: UserStore):
        where = {"name": {"not": "bob"}}
        assert await self.ids(seeded_store, where) == ["1", "3", "4", "5"]

    async def test_or(self, seeded_store: UserStore):
        where = {"OR": [{"name": "Alice"}, {"name": {"endsWith": "ve"}}]}
        assert await self.ids(seeded_store, where) == ["1", "5"]

    async def test_empty_or_matches_nothing(self, seeded_store: UserStore):
        assert await self.ids(seeded_store, {"OR": []}) == []

    async def test_and_and_empty_and(self, seeded_store: UserStore):
        where = {"AND": [{"name": {"contains": "o"}}, {"id": {"gt": "2"}}]}
        assert await self.ids(seeded_store, where) == ["3", "4"]
        assert len(await self.ids(seeded_store, {"AND": []})) == 5

    async def test_not_negates_each_entry(self, seeded_store: UserStore):
        where = {"NOT": [{"id": "1"}, {"name": {"contains": "o"}}]}
        assert await self.ids(seeded_store, where) == ["5"]
        assert len(await self.ids(seeded_store, {"NOT": []})) == 5

    async def test_like_wildcards_are_literal(self, store: UserStore):
        await store.create(name="100%", id="p")
        await store.create(name="1000", id="z")
        await store.create(name="a_b", id="u")
        await store.create(name="axb", id="x")

        assert await self.ids(store, {"name": {"contains": "%"}}) == ["p"]
        assert await self.ids(store, {"name": {"contains": "_"}}) == ["u"]

    async def test_insensitive_contains_skips_names_without_the_letter(self, store: UserStore):
        await store.create(name="Alice", id="1")
        await store.create(name="bob", id="2")

        where = {"name": {"contains": "b", "mode": "insensitive"}}
        assert await self.ids(store, where) == ["2"]

    async def test_insensitive_mode_folds_non_ascii_letters(self, store: UserStore):
        await store.create(name="Émile", id="1")
        await store.create(name="Zoë", id="2")

        assert await self.ids(store, {"name": {"equals": "Émile", "mode": "insensitive"}}) == ["1"]
        assert await self.ids(store, {"name": {"equals": "émile", "mode": "insensitive"}}) == ["1"]
        assert await self.ids(store, {"name": {"startsWith": "ÉM", "mode": "insensitive"}}) == ["1"]
        assert await self.ids(store, {"name": {"endsWith": "Ë", "mode": "insensitive"}}) == ["2"]
        assert await self.ids(store, {"name": {"equals": "émile"}}) == []
