"""
OrderPilot - Composable Orderings and Predicates

OrderPilot derives comparison and filtering logic for composite types
from logic already defined for one of their fields. It builds values,
not results: the Ordering or Predicate it produces is handed to Python's
own sorted() / filter().

Core Principle: "Define the rule once on the field. Lift it, stack it, sort."

Key Features:
- Ordering and Predicate primitives (immutable, thread-safe values)
- adapt(): lift a rule over U to any T with an explicit mapping T -> U
- combine_orderings(): lexicographic fold, first rule decides
- combine_predicates(): short-circuit ALL / ANY fold
- Law checks for reflexivity, antisymmetry, transitivity, equivalence
- YAML/JSON rule packs compiled into the same values

Quick Start:
    from orderpilot import adapt, combine_orderings, field_getter, natural

    by_category = adapt(natural(), field_getter("category.name"))
    by_unavailable = adapt(natural(), field_getter("unavailable"))
    by_name = adapt(natural(), field_getter("name"))

    listing = combine_orderings([by_category, by_unavailable, by_name])
    products.sort(key=listing.key())

Version: 0.1.0
"""
from __future__ import annotations

__version__ = "0.1.0"
__author__ = "OrderPilot Team"

# =============================================================================
# Core Models (Re-exported for convenience)
# =============================================================================
from .models import (
    # Enums
    CombineMode,
    Comparison,
    FilterOperator,
    NullPlacement,
    SortDirection,
    # Ordering
    Ordering,
    always_equal,
    natural,
    # Predicate
    Predicate,
    always,
    is_false,
    is_true,
)

# =============================================================================
# Engine
# =============================================================================
from .engine import (
    # Adapter
    FieldGetter,
    adapt,
    by_field,
    compose,
    field_getter,
    identity,
    # Combinator
    CompositeOrdering,
    CompositePredicate,
    Decision,
    Verdict,
    all_of,
    any_of,
    combine_orderings,
    combine_predicates,
    # Laws
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

# =============================================================================
# Rule Packs
# =============================================================================
from .packs import (
    RulePack,
    RulePackLoader,
    load_rule_pack,
    load_rule_pack_from_string,
)

# =============================================================================
# Configuration
# =============================================================================
from .config import (
    OrderPilotConfig,
    configure_logging,
    load_config,
)

# =============================================================================
# Exceptions
# =============================================================================
from .exceptions import (
    FieldPathError,
    InvalidRuleError,
    LawViolationError,
    OrderPilotError,
    RuleNotFoundError,
    RulePackLoadError,
    RulePackValidationError,
    RulePackVersionMismatch,
)

__all__ = [
    # Version
    "__version__",
    # Enums
    "CombineMode",
    "Comparison",
    "FilterOperator",
    "NullPlacement",
    "SortDirection",
    # Primitives
    "Ordering",
    "Predicate",
    "always",
    "always_equal",
    "is_false",
    "is_true",
    "natural",
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
    # Rule packs
    "RulePack",
    "RulePackLoader",
    "load_rule_pack",
    "load_rule_pack_from_string",
    # Configuration
    "OrderPilotConfig",
    "configure_logging",
    "load_config",
    # Exceptions
    "OrderPilotError",
    "InvalidRuleError",
    "FieldPathError",
    "LawViolationError",
    "RulePackLoadError",
    "RulePackValidationError",
    "RulePackVersionMismatch",
    "RuleNotFoundError",
]
