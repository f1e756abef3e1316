"""
OrderPilot Adapter Combinator

Lifts an Ordering or Predicate defined over U to a composite type T,
given an explicit mapping T -> U (contramap / pull-back).

Laws:
- Identity: adapt(o, identity) behaves exactly like o
- Composition: adapt(adapt(o, g), f) behaves like adapt(o, compose(g, f))
- Order preservation: an injective mapping keeps all total-order
  invariants; a non-injective one makes values with equal images tie

The mapping must be pure and deterministic. That precondition is not
checked; violating it gives non-reproducible orderings.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar, Union, overload

from ..exceptions import FieldPathError, InvalidRuleError
from ..models import Ordering, Predicate

T = TypeVar("T")
U = TypeVar("U")
V = TypeVar("V")


# =============================================================================
# Mapping Helpers
# =============================================================================

def identity(value: T) -> T:
    """Identity mapping."""
    return value


def compose(g: Callable[[U], V], f: Callable[[T], U]) -> Callable[[T], V]:
    """Compose two mappings: compose(g, f)(x) == g(f(x))."""
    def composed(value: T) -> V:
        return g(f(value))

    composed.__name__ = f"{_describe_mapping(g)}.{_describe_mapping(f)}"
    return composed


@dataclass(frozen=True)
class FieldGetter:
    """
    Explicit dot-notation accessor, e.g. FieldGetter("category.name").

    Each segment is looked up as a mapping key first, then as an
    attribute. A segment that resolves to neither raises FieldPathError.
    """
    path: str

    def __post_init__(self) -> None:
        if not self.path or any(not part for part in self.path.split(".")):
            raise FieldPathError(
                message=f"Invalid field path: {self.path!r}",
                details={"path": self.path},
            )

    @property
    def parts(self) -> list[str]:
        """Split path into components."""
        return self.path.split(".")

    def __call__(self, obj: Any) -> Any:
        current = obj
        for depth, part in enumerate(self.parts):
            if current is None:
                # Optional intermediate objects resolve to None
                return None
            # Keys win over attributes, so {"items": 3} resolves to 3
            if isinstance(current, Mapping) and part in current:
                current = current[part]
            elif hasattr(current, part):
                current = getattr(current, part)
            else:
                raise FieldPathError(
                    message=f"Cannot resolve '{part}' in field path '{self.path}'",
                    details={
                        "path": self.path,
                        "segment": part,
                        "depth": depth,
                        "type": type(current).__name__,
                    },
                )
        return current


def field_getter(path: str) -> FieldGetter:
    """Create a dot-notation accessor for path."""
    return FieldGetter(path)


def _describe_mapping(mapping: Callable[..., Any]) -> str:
    """Best-effort label for a mapping function."""
    if isinstance(mapping, FieldGetter):
        return mapping.path
    return getattr(mapping, "__name__", None) or type(mapping).__name__


# =============================================================================
# Adapt
# =============================================================================

@overload
def adapt(base: Ordering[U], mapping: Callable[[T], U], description: Optional[str] = None) -> Ordering[T]: ...


@overload
def adapt(base: Predicate[U], mapping: Callable[[T], U], description: Optional[str] = None) -> Predicate[T]: ...


def adapt(
    base: Union[Ordering[U], Predicate[U]],
    mapping: Callable[[T], U],
    description: Optional[str] = None,
) -> Union[Ordering[T], Predicate[T]]:
    """
    Lift an Ordering or Predicate over U to T via mapping: T -> U.

    Args:
        base: Ordering or Predicate defined on U
        mapping: Pure, deterministic function T -> U
        description: Label for the derived rule (default: "<base> by <mapping>")

    Returns:
        Ordering[T] comparing mapping(a) with mapping(b), or
        Predicate[T] testing mapping(x)

    Raises:
        InvalidRuleError: If base is not an Ordering/Predicate or mapping
            is not callable
    """
    if not callable(mapping):
        raise InvalidRuleError(
            message="Adapter mapping must be callable",
            details={"mapping_type": type(mapping).__name__},
        )

    if not isinstance(base, (Ordering, Predicate)):
        raise InvalidRuleError(
            message="Can only adapt an Ordering or a Predicate",
            details={"base_type": type(base).__name__},
        )

    label = description or f"{base.description} by {_describe_mapping(mapping)}"
    return base.contramap(mapping, description=label)


def by_field(
    base: Union[Ordering[Any], Predicate[Any]],
    path: str,
) -> Union[Ordering[Any], Predicate[Any]]:
    """
    Adapt base through an explicit dot-notation field path.

    Example:
        by_category_name = by_field(natural(), "category.name")
    """
    return adapt(base, field_getter(path), description=path)
