"""
Tests for the Ordering and Predicate primitives

Tests cover:
- Comparison helpers
- natural() over numbers, strings, booleans, dates
- always_equal(), from_cmp(), from_key()
- reversed(), nulls_first(), nulls_last()
- Sort key glue for sorted()
- Leaf predicates and negation
"""
from __future__ import annotations

import functools
from datetime import date

import pytest

from orderpilot import (
    Comparison,
    Ordering,
    Predicate,
    all_of,
    always,
    always_equal,
    is_false,
    is_true,
    natural,
)
from tests.conftest import CountingPredicate


# =============================================================================
# Comparison Tests
# =============================================================================

class TestComparison:
    """Tests for the Comparison enum."""

    def test_of(self):
        assert Comparison.of(1, 2) is Comparison.LT
        assert Comparison.of(2, 2) is Comparison.EQ
        assert Comparison.of(3, 2) is Comparison.GT

    @pytest.mark.parametrize("value,expected", [
        (-42, Comparison.LT),
        (-1, Comparison.LT),
        (0, Comparison.EQ),
        (1, Comparison.GT),
        (99, Comparison.GT),
    ])
    def test_from_int_uses_sign(self, value, expected):
        assert Comparison.from_int(value) is expected

    def test_reverse(self):
        assert Comparison.LT.reverse() is Comparison.GT
        assert Comparison.GT.reverse() is Comparison.LT
        assert Comparison.EQ.reverse() is Comparison.EQ
        assert -Comparison.LT is Comparison.GT

    def test_int_conversion(self):
        assert [int(c) for c in Comparison] == [-1, 0, 1]

    def test_is_tie(self):
        assert Comparison.EQ.is_tie
        assert not Comparison.LT.is_tie


# =============================================================================
# Leaf Ordering Tests
# =============================================================================

class TestNatural:
    """Tests for natural()."""

    def test_numbers(self):
        o = natural()
        assert o.compare(1, 2) is Comparison.LT
        assert o.compare(2.5, 2.5) is Comparison.EQ
        assert o.compare(10, -3) is Comparison.GT

    def test_strings_lexicographic(self):
        o = natural()
        assert o.compare("Anvil", "Bolt") is Comparison.LT
        assert o.compare("Tools", "Hardware") is Comparison.GT
        # Lexicographic, not length-based
        assert o.compare("ab", "b") is Comparison.LT

    def test_booleans_false_before_true(self):
        o = natural()
        assert o.compare(False, True) is Comparison.LT
        assert o.compare(True, False) is Comparison.GT
        assert o.compare(True, True) is Comparison.EQ

    def test_dates(self):
        o = natural()
        assert o.compare(date(2024, 1, 1), date(2024, 6, 1)) is Comparison.LT

    def test_callable(self):
        o = natural()
        assert o(1, 2) is Comparison.LT

    def test_compare_int(self):
        o = natural()
        assert o.compare_int(1, 2) == -1
        assert o.compare_int(2, 2) == 0
        assert o.compare_int(3, 2) == 1


class TestAlwaysEqual:
    """Tests for always_equal()."""

    @pytest.mark.parametrize("a,b", [(1, 2), ("x", "y"), (None, 5), (3, 3)])
    def test_every_pair_ties(self, a, b):
        assert always_equal().compare(a, b) is Comparison.EQ

    def test_sort_is_stable_noop(self):
        items = [3, 1, 2]
        assert sorted(items, key=always_equal().key()) == [3, 1, 2]


class TestOrderingConstructors:
    """Tests for from_cmp() and from_key()."""

    def test_from_cmp(self):
        by_length = Ordering.from_cmp(lambda a, b: len(a) - len(b), description="length")
        assert by_length.compare("aaa", "b") is Comparison.GT
        assert by_length.compare("ab", "cd") is Comparison.EQ
        assert by_length.description == "length"

    def test_from_key(self):
        by_abs = Ordering.from_key(abs)
        assert by_abs.compare(-5, 3) is Comparison.GT
        assert by_abs.compare(-3, 3) is Comparison.EQ
        assert by_abs.description == "abs"


# =============================================================================
# Derived Ordering Tests
# =============================================================================

class TestReversed:
    """Tests for reversed()."""

    def test_swaps_lt_and_gt(self):
        desc = natural().reversed()
        assert desc.compare(1, 2) is Comparison.GT
        assert desc.compare(2, 1) is Comparison.LT
        assert desc.compare(2, 2) is Comparison.EQ

    def test_double_reverse_is_original(self, int_samples):
        o = natural()
        twice = o.reversed().reversed()
        for a in int_samples:
            for b in int_samples:
                assert twice.compare(a, b) is o.compare(a, b)

    def test_description(self):
        assert natural().reversed().description == "natural desc"


class TestNulls:
    """Tests for nulls_first() and nulls_last()."""

    def test_nulls_last(self):
        o = natural().nulls_last()
        assert o.compare(None, 1) is Comparison.GT
        assert o.compare(1, None) is Comparison.LT
        assert o.compare(None, None) is Comparison.EQ
        assert o.compare(1, 2) is Comparison.LT

    def test_nulls_first(self):
        o = natural().nulls_first()
        assert o.compare(None, 1) is Comparison.LT
        assert o.compare(1, None) is Comparison.GT
        assert o.compare(None, None) is Comparison.EQ

    def test_sorting_mixed_values(self):
        values = [3, None, 1, None, 2]
        assert sorted(values, key=natural().nulls_last().key()) == [1, 2, 3, None, None]
        assert sorted(values, key=natural().nulls_first().key()) == [None, None, 1, 2, 3]

    def test_descending_keeps_nulls_last(self):
        o = natural().reversed().nulls_last()
        assert sorted([1, None, 3], key=o.key()) == [3, 1, None]


class TestSortKeyGlue:
    """Orderings are consumed by Python's own sort."""

    def test_key(self):
        assert sorted(["pear", "apple", "fig"], key=natural().key()) == ["apple", "fig", "pear"]

    def test_cmp_to_key(self):
        items = [5, 2, 9]
        items.sort(key=functools.cmp_to_key(natural().compare_int))
        assert items == [2, 5, 9]

    def test_ordering_is_immutable(self):
        o = natural()
        with pytest.raises(AttributeError):
            o.description = "changed"  # type: ignore[misc]


# =============================================================================
# Predicate Tests
# =============================================================================

class TestLeafPredicates:
    """Tests for is_true(), is_false(), always()."""

    def test_is_true(self):
        p = is_true()
        assert p.test(True) is True
        assert p.test(False) is False

    def test_is_false(self):
        p = is_false()
        assert p.test(False) is True
        assert p.test(True) is False

    def test_always(self):
        assert always(True).test(object()) is True
        assert always(False).test(object()) is False
        assert always(True).description == "always true"

    def test_test_returns_bool(self):
        p = Predicate(check=lambda s: s.strip(), description="non-blank")
        assert p.test("  x ") is True
        assert p.test("   ") is False

    def test_callable_in_filter(self):
        evens = Predicate(check=lambda n: n % 2 == 0, description="even")
        assert list(filter(evens, range(6))) == [0, 2, 4]


class TestPredicateOperators:
    """Tests for ~, & and |."""

    def test_negate(self):
        even = Predicate(check=lambda n: n % 2 == 0, description="even")
        odd = ~even
        assert odd.test(3) is True
        assert odd.test(4) is False
        assert odd.description == "NOT (even)"

    def test_and(self):
        positive = Predicate(check=lambda n: n > 0, description="positive")
        even = Predicate(check=lambda n: n % 2 == 0, description="even")
        both = positive & even
        assert [n for n in range(-4, 5) if both(n)] == [2, 4]

    def test_or(self):
        negative = Predicate(check=lambda n: n < 0, description="negative")
        zero = Predicate(check=lambda n: n == 0, description="zero")
        not_positive = negative | zero
        assert [n for n in range(-2, 3) if not_positive(n)] == [-2, -1, 0]

    def test_and_short_circuits(self):
        first = CountingPredicate(False, "first")
        second = CountingPredicate(True, "second")
        combined = first.predicate & second.predicate
        assert combined.test("x") is False
        assert second.calls == 0
        assert combined.description == "(first) AND (second)"

    def test_or_short_circuits(self):
        first = CountingPredicate(True, "first")
        second = CountingPredicate(False, "second")
        combined = first.predicate | second.predicate
        assert combined.test("x") is True
        assert second.calls == 0
        assert combined.description == "(first) OR (second)"

    def test_operators_feed_combinators(self):
        positive = Predicate(check=lambda n: n > 0, description="positive")
        even = Predicate(check=lambda n: n % 2 == 0, description="even")
        combined = all_of(positive & even, ~even | positive)
        assert [n for n in range(-3, 5) if combined(n)] == [2, 4]

    def test_and_with_non_predicate_is_type_error(self):
        with pytest.raises(TypeError):
            is_true() & True  # type: ignore[operator]
