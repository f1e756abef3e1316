"""
End-to-end listing scenarios

A product listing is sorted by category name, then by product name.
Unavailable products are later pushed to the end of their category by
inserting one tie-breaker, and removing it restores the original order.
"""
from __future__ import annotations

import pytest

from orderpilot import (
    Predicate,
    adapt,
    all_of,
    by_field,
    combine_orderings,
    field_getter,
    is_false,
    is_sorted,
    natural,
)
from tests.conftest import make_product


@pytest.fixture
def unavailable_anvil():
    return make_product("Anvil", "Tools", price=120, unavailable=True)


class TestListingScenarios:
    """Sorting a small catalog with stacked rules."""

    def test_category_then_name(self, catalog, by_category_name, by_product_name):
        listing = combine_orderings([by_category_name, by_product_name])
        result = sorted(catalog, key=listing.key())
        assert [p.name for p in result] == ["Bolt", "Anvil", "Widget"]
        assert [p.category.name for p in result] == ["Hardware", "Tools", "Tools"]

    def test_unavailable_pushed_to_end_of_category(
        self, widget, bolt, unavailable_anvil,
        by_category_name, by_unavailable, by_product_name,
    ):
        listing = combine_orderings([by_category_name, by_unavailable, by_product_name])
        result = sorted([widget, unavailable_anvil, bolt], key=listing.key())
        assert [p.name for p in result] == ["Bolt", "Widget", "Anvil"]
        assert result[-1].unavailable

    def test_removing_rule_restores_order(
        self, widget, bolt, unavailable_anvil,
        by_category_name, by_unavailable, by_product_name,
    ):
        with_flag = combine_orderings([by_category_name, by_unavailable, by_product_name])
        without_flag = with_flag.without(1)
        result = sorted([widget, unavailable_anvil, bolt], key=without_flag.key())
        assert [p.name for p in result] == ["Bolt", "Anvil", "Widget"]
        # The original composite still pushes Anvil to the end
        assert sorted([widget, unavailable_anvil, bolt], key=with_flag.key())[-1].name == "Anvil"

    def test_list_sort_in_place(self, catalog, listing):
        catalog.sort(key=listing.key())
        assert is_sorted(catalog, listing)
        assert [p.name for p in catalog] == ["Bolt", "Anvil", "Widget"]

    def test_sort_is_stable_for_full_ties(self, listing):
        first = make_product("Widget", "Tools", price=1)
        second = make_product("Widget", "Tools", price=2)
        result = sorted([first, second], key=listing.key())
        assert result[0] is first
        assert result[1] is second

    def test_descending_listing(self, catalog, listing):
        result = sorted(catalog, key=listing.reversed().key())
        assert [p.name for p in result] == ["Widget", "Anvil", "Bolt"]

    def test_field_path_rules(self, catalog):
        listing = combine_orderings([
            by_field(natural(), "category.name"),
            by_field(natural(), "name"),
        ])
        result = sorted(catalog, key=listing.key())
        assert [p.name for p in result] == ["Bolt", "Anvil", "Widget"]


class TestFilterThenSort:
    """Predicates and orderings compose in the same pipeline."""

    def test_available_tools(self, widget, bolt, unavailable_anvil, listing):
        available = by_field(is_false(), "unavailable")
        in_tools = adapt(
            Predicate(check=lambda name: name == "Tools", description="is Tools"),
            field_getter("category.name"),
        )
        visible = all_of(available, in_tools)
        result = sorted(filter(visible, [widget, unavailable_anvil, bolt]), key=listing.key())
        assert result == [widget]
