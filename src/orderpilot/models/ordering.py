"""
OrderPilot Ordering Primitive

An Ordering is an immutable value wrapping a three-way comparison.

Key components:
- Ordering: compare(a, b) -> Comparison, plus sort-key glue
- natural(): Python's natural order (numbers, str, bool False < True, dates)
- always_equal(): every pair ties (identity of the lexicographic fold)

An Ordering never sorts anything itself. Hand it to the caller's sort:

    sorted(items, key=ordering.key())
    items.sort(key=functools.cmp_to_key(ordering.compare_int))

Invariants expected of every Ordering (not checked at runtime, see
orderpilot.engine.laws):
    reflexive:      compare(x, x) == EQ
    antisymmetric:  compare(a, b) == LT  <=>  compare(b, a) == GT
    transitive:     compare(a, b) == LT and compare(b, c) == LT
                    => compare(a, c) == LT
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any, Callable, Generic, Optional, TypeVar

from .enums import Comparison

T = TypeVar("T")
U = TypeVar("U")


# =============================================================================
# Ordering
# =============================================================================

@dataclass(frozen=True, eq=False)
class Ordering(Generic[T]):
    """
    A total order over values of type T.

    Attributes:
        comparator: Pure function returning a Comparison for two values
        description: Human-readable label, used in explanations and logs
    """
    comparator: Callable[[T, T], Comparison]
    description: str = "ordering"

    def compare(self, a: T, b: T) -> Comparison:
        """Compare two values."""
        return self.comparator(a, b)

    def __call__(self, a: T, b: T) -> Comparison:
        return self.compare(a, b)

    def compare_int(self, a: T, b: T) -> int:
        """Compare two values, returning -1/0/1 (cmp convention)."""
        return int(self.compare(a, b))

    def key(self) -> Callable[[T], Any]:
        """Sort key for sorted()/list.sort()."""
        return cmp_to_key(self.compare_int)

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def from_cmp(
        cls,
        fn: Callable[[T, T], int],
        description: str = "cmp",
    ) -> Ordering[T]:
        """Lift a cmp-style function (negative/zero/positive int)."""
        return cls(
            comparator=lambda a, b: Comparison.from_int(fn(a, b)),
            description=description,
        )

    @classmethod
    def from_key(
        cls,
        key: Callable[[T], Any],
        description: Optional[str] = None,
    ) -> Ordering[T]:
        """Natural order of key(x)."""
        return cls(
            comparator=lambda a, b: Comparison.of(key(a), key(b)),
            description=description or getattr(key, "__name__", "key"),
        )

    # -------------------------------------------------------------------------
    # Derived Orderings
    # -------------------------------------------------------------------------

    def contramap(
        self,
        mapping: Callable[[U], T],
        description: Optional[str] = None,
    ) -> Ordering[U]:
        """
        Pull this ordering back along mapping: U -> T.

        The result compares a, b by compare(mapping(a), mapping(b)).
        Values that map to the same T tie.
        """
        base = self
        return Ordering(
            comparator=lambda a, b: base.compare(mapping(a), mapping(b)),
            description=description or base.description,
        )

    def reversed(self) -> Ordering[T]:
        """Same ordering with LT and GT swapped (descending)."""
        base = self
        return Ordering(
            comparator=lambda a, b: base.compare(a, b).reverse(),
            description=f"{base.description} desc",
        )

    def nulls_first(self) -> Ordering[Optional[T]]:
        """None sorts before every other value; two Nones tie."""
        base = self

        def compare(a: Optional[T], b: Optional[T]) -> Comparison:
            if a is None:
                return Comparison.EQ if b is None else Comparison.LT
            if b is None:
                return Comparison.GT
            return base.compare(a, b)

        return Ordering(comparator=compare, description=f"{base.description} nulls first")

    def nulls_last(self) -> Ordering[Optional[T]]:
        """None sorts after every other value; two Nones tie."""
        base = self

        def compare(a: Optional[T], b: Optional[T]) -> Comparison:
            if a is None:
                return Comparison.EQ if b is None else Comparison.GT
            if b is None:
                return Comparison.LT
            return base.compare(a, b)

        return Ordering(comparator=compare, description=f"{base.description} nulls last")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.description!r})"


# =============================================================================
# Leaf Orderings
# =============================================================================

def natural(description: str = "natural") -> Ordering[Any]:
    """
    Python's natural ordering via < (numbers, str, bool, date, tuples).

    Float NaN is not totally ordered under <; map it away before use.
    """
    return Ordering(comparator=Comparison.of, description=description)


def always_equal() -> Ordering[Any]:
    """Ordering in which every pair ties."""
    return Ordering(comparator=lambda a, b: Comparison.EQ, description="always equal")
