"""
OrderPilot Engine

Combinators over orderings and predicates.

Services:
- adapt: lift a rule over U to T through an explicit mapping
- combine_orderings: lexicographic, priority-ordered fold
- combine_predicates: short-circuit ALL / ANY fold
- laws: sample-based checks of the total-order and adapter laws

Usage:
    from orderpilot.engine import adapt, combine_orderings, field_getter
    from orderpilot.models import natural

    by_category = adapt(natural(), field_getter("category.name"))
    by_name = adapt(natural(), field_getter("name"))
    listing = combine_orderings([by_category, by_name])

    products.sort(key=listing.key())
"""
from __future__ import annotations

from .adapter import (
    FieldGetter,
    adapt,
    by_field,
    compose,
    field_getter,
    identity,
)
from .combinator import (
    CompositeOrdering,
    CompositePredicate,
    Decision,
    Verdict,
    all_of,
    any_of,
    combine_orderings,
    combine_predicates,
)
from .laws import (
    LawReport,
    LawViolation,
    assert_lawful,
    check_antisymmetric,
    check_equivalent,
    check_predicates_equivalent,
    check_reflexive,
    check_total_order,
    check_transitive,
    is_sorted,
)

__all__ = [
    # Adapter
    "FieldGetter",
    "adapt",
    "by_field",
    "compose",
    "field_getter",
    "identity",
    # Combinator
    "CompositeOrdering",
    "CompositePredicate",
    "Decision",
    "Verdict",
    "all_of",
    "any_of",
    "combine_orderings",
    "combine_predicates",
    # Laws
    "LawReport",
    "LawViolation",
    "assert_lawful",
    "check_antisymmetric",
    "check_equivalent",
    "check_predicates_equivalent",
    "check_reflexive",
    "check_total_order",
    "check_transitive",
    "is_sorted",
]
