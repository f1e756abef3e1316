"""
OrderPilot Predicate Primitive

A Predicate is an immutable value wrapping a boolean test.

Predicates are callables, so they go straight into filter():

    visible = list(filter(predicate, items))

&, | and ~ build two-rule AND / OR / NOT combinations, short-circuiting
left to right. For explainable, flattened rule lists use all_of() /
any_of() from orderpilot.engine.combinator.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, eq=False)
class Predicate(Generic[T]):
    """
    A boolean test over values of type T.

    Attributes:
        check: Pure function returning a truthy/falsy result
        description: Human-readable label
    """
    check: Callable[[T], Any]
    description: str = "predicate"

    def test(self, value: T) -> bool:
        """Evaluate the predicate."""
        return bool(self.check(value))

    def __call__(self, value: T) -> bool:
        return self.test(value)

    def contramap(
        self,
        mapping: Callable[[U], T],
        description: Optional[str] = None,
    ) -> Predicate[U]:
        """Pull this predicate back along mapping: U -> T."""
        base = self
        return Predicate(
            check=lambda value: base.test(mapping(value)),
            description=description or base.description,
        )

    def negate(self) -> Predicate[T]:
        """Logical NOT."""
        base = self
        return Predicate(
            check=lambda value: not base.test(value),
            description=f"NOT ({base.description})",
        )

    def __invert__(self) -> Predicate[T]:
        return self.negate()

    def __and__(self, other: Predicate[T]) -> Predicate[T]:
        """Logical AND; other is only tested when self holds."""
        if not isinstance(other, Predicate):
            return NotImplemented
        left = self
        return Predicate(
            check=lambda value: left.test(value) and other.test(value),
            description=f"({left.description}) AND ({other.description})",
        )

    def __or__(self, other: Predicate[T]) -> Predicate[T]:
        """Logical OR; other is only tested when self fails."""
        if not isinstance(other, Predicate):
            return NotImplemented
        left = self
        return Predicate(
            check=lambda value: left.test(value) or other.test(value),
            description=f"({left.description}) OR ({other.description})",
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.description!r})"


# =============================================================================
# Leaf Predicates
# =============================================================================

def is_true(description: str = "is true") -> Predicate[Any]:
    """Identity predicate over a boolean field."""
    return Predicate(check=bool, description=description)


def is_false(description: str = "is false") -> Predicate[Any]:
    """Negation of a boolean field."""
    return Predicate(check=lambda value: not value, description=description)


def always(value: bool) -> Predicate[Any]:
    """Constant predicate."""
    result = bool(value)
    return Predicate(check=lambda _: result, description=f"always {str(result).lower()}")
