"""
OrderPilot Rule Packs

Schema validation and loading for rule packs.

Rule packs are YAML or JSON files that name orderings (prioritized
field-path sort keys) and filters (field-path comparisons combined with
ALL or ANY). Loading compiles them into engine values; nothing is
registered globally.

Usage:
    from orderpilot.packs import load_rule_pack, RulePackLoader

    pack = load_rule_pack("path/to/catalog.yaml")
    listing = pack.ordering("listing")

    # Use a loader for multiple packs (caches by pack id)
    loader = RulePackLoader()
    catalog = loader.load("path/to/catalog.yaml")
    reviews = loader.load("path/to/reviews.yaml")
"""
from __future__ import annotations

from .loader import (
    RulePack,
    RulePackLoader,
    load_rule_pack,
    load_rule_pack_from_string,
    operator_predicate,
    validate_reference_integrity,
)
from .schema import (
    SCHEMA_VERSION,
    FilterRuleSchema,
    FilterSchema,
    OrderingSchema,
    RulePackSchema,
    SortKeySchema,
    check_schema_version,
    validate_rule_pack,
)

__all__ = [
    # Version
    "SCHEMA_VERSION",
    # Loader
    "RulePack",
    "RulePackLoader",
    "load_rule_pack",
    "load_rule_pack_from_string",
    "operator_predicate",
    # Validation
    "validate_rule_pack",
    "validate_reference_integrity",
    "check_schema_version",
    # Schemas (for advanced usage)
    "RulePackSchema",
    "OrderingSchema",
    "SortKeySchema",
    "FilterSchema",
    "FilterRuleSchema",
]
