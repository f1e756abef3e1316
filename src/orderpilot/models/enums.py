"""
OrderPilot Enumerations

Enumeration types used by orderings, predicates and rule packs.

Mode and direction enums inherit from (str, Enum) for YAML/JSON
compatibility. Comparison is an int-valued Enum so it converts directly
to the -1/0/1 convention expected by functools.cmp_to_key.
"""
from __future__ import annotations

from enum import Enum
from typing import Any


# =============================================================================
# Three-Way Comparison Result
# =============================================================================

class Comparison(Enum):
    """
    Result of comparing two values under an Ordering.

    LT: first argument sorts before the second
    EQ: both arguments are tied (same equivalence class)
    GT: first argument sorts after the second
    """
    LT = -1
    EQ = 0
    GT = 1

    @classmethod
    def of(cls, a: Any, b: Any) -> Comparison:
        """Compare two values by Python's natural ordering."""
        if a < b:
            return cls.LT
        if b < a:
            return cls.GT
        return cls.EQ

    @classmethod
    def from_int(cls, value: int) -> Comparison:
        """Normalize a cmp-style integer by its sign."""
        if value < 0:
            return cls.LT
        if value > 0:
            return cls.GT
        return cls.EQ

    def reverse(self) -> Comparison:
        """Swap LT and GT; EQ stays EQ."""
        return Comparison(-self.value)

    def __neg__(self) -> Comparison:
        return self.reverse()

    def __int__(self) -> int:
        return self.value

    @property
    def is_tie(self) -> bool:
        """Check if the comparison is EQ."""
        return self is Comparison.EQ


# =============================================================================
# Predicate Combination Mode
# =============================================================================

class CombineMode(str, Enum):
    """How a list of predicates is folded into one."""
    ALL = "all"  # conjunction, stops at first False
    ANY = "any"  # disjunction, stops at first True


# =============================================================================
# Sort Key Options (Rule Packs)
# =============================================================================

class SortDirection(str, Enum):
    """Direction of a sort key."""
    ASC = "asc"
    DESC = "desc"


class NullPlacement(str, Enum):
    """Where None values land relative to present values."""
    FIRST = "first"
    LAST = "last"


# =============================================================================
# Filter Operators (Rule Packs)
# =============================================================================

class FilterOperator(str, Enum):
    """Comparison operators available to rule pack filters."""
    EQ = "eq"
    NE = "ne"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    IN = "in"
    NOT_IN = "not_in"
    CONTAINS = "contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    MATCHES = "matches"          # regex search
    IS_NULL = "is_null"
    IS_NOT_NULL = "is_not_null"
    IS_TRUE = "is_true"
    IS_FALSE = "is_false"
