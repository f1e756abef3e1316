"""
OrderPilot Models

Leaf-level values of the engine:
- Comparison: three-way comparison result (LT, EQ, GT)
- Ordering: total order over a type
- Predicate: boolean test over a type
- Enums for predicate folds and rule pack options
"""
from __future__ import annotations

from .enums import (
    CombineMode,
    Comparison,
    FilterOperator,
    NullPlacement,
    SortDirection,
)
from .ordering import (
    Ordering,
    always_equal,
    natural,
)
from .predicate import (
    Predicate,
    always,
    is_false,
    is_true,
)

__all__ = [
    # Enums
    "CombineMode",
    "Comparison",
    "FilterOperator",
    "NullPlacement",
    "SortDirection",
    # Ordering
    "Ordering",
    "always_equal",
    "natural",
    # Predicate
    "Predicate",
    "always",
    "is_false",
    "is_true",
]
