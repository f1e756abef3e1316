"""
OrderPilot Multi-Rule Combinator

Folds an ordered list of rules into a single rule.

Key features:
- Lexicographic fold for orderings: first non-EQ rule decides, later
  rules only break ties; empty list is the always-EQ ordering
- Short-circuit logical fold for predicates: ALL stops at the first
  False, ANY at the first True; evaluation is strictly left to right
- Rule lists are snapshotted into tuples, so editing the caller's list
  afterwards never changes a built composite
- explain() reports which rule decided a comparison or a test

The combinators never validate that rules are lawful orderings; use
orderpilot.engine.laws in tests for that.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, TypeVar, Union

from ..exceptions import InvalidRuleError
from ..models import CombineMode, Comparison, Ordering, Predicate

logger = logging.getLogger(__name__)

T = TypeVar("T")


# =============================================================================
# Explanations
# =============================================================================

@dataclass(frozen=True)
class Decision:
    """
    Outcome of comparing two values under a CompositeOrdering.

    Attributes:
        result: The combined comparison
        rule_index: Index of the rule that decided, None if all rules tied
        rule_description: Description of the deciding rule
    """
    result: Comparison
    rule_index: Optional[int] = None
    rule_description: Optional[str] = None

    @property
    def decided(self) -> bool:
        """Check if some rule broke the tie."""
        return self.rule_index is not None

    @property
    def explanation(self) -> str:
        if not self.decided:
            return "all rules tied"
        return f"rule {self.rule_index} ({self.rule_description}): {self.result.name}"


@dataclass(frozen=True)
class Verdict:
    """
    Outcome of testing a value under a CompositePredicate.

    Attributes:
        result: The combined test result
        mode: ALL or ANY
        rule_index: Index of the rule that short-circuited, None if the
            fold ran to completion
        rule_description: Description of that rule
        evaluated: Number of rules actually evaluated
    """
    result: bool
    mode: CombineMode
    rule_index: Optional[int] = None
    rule_description: Optional[str] = None
    evaluated: int = 0

    @property
    def explanation(self) -> str:
        if self.rule_index is None:
            return f"{self.mode.value.upper()}: {self.evaluated} rules, result {self.result}"
        return (
            f"{self.mode.value.upper()}: rule {self.rule_index} "
            f"({self.rule_description}) decided {self.result}"
        )


# =============================================================================
# Composite Ordering
# =============================================================================

def _lexicographic(rules: tuple[Ordering[T], ...]) -> Callable[[T, T], Comparison]:
    """Build the lexicographic comparator for a rule tuple."""
    def compare(a: T, b: T) -> Comparison:
        for rule in rules:
            result = rule.compare(a, b)
            # First decisive rule wins
            if result is not Comparison.EQ:
                return result
        return Comparison.EQ

    return compare


@dataclass(frozen=True, eq=False, repr=False)
class CompositeOrdering(Ordering[T]):
    """
    Ordering built from a prioritized tuple of orderings.

    Build with combine_orderings(); rules[0] is the primary key and each
    later rule is a tie-breaker for everything before it.
    """
    rules: tuple[Ordering[T], ...] = field(default_factory=tuple)

    def explain(self, a: T, b: T) -> Decision:
        """Compare a and b and report which rule decided."""
        for index, rule in enumerate(self.rules):
            result = rule.compare(a, b)
            if result is not Comparison.EQ:
                return Decision(
                    result=result,
                    rule_index=index,
                    rule_description=rule.description,
                )
        return Decision(result=Comparison.EQ)

    def then(self, rule: Ordering[T]) -> CompositeOrdering[T]:
        """New composite with rule appended as the lowest-priority tie-breaker."""
        return combine_orderings(self.rules + (rule,))

    def without(self, index: int) -> CompositeOrdering[T]:
        """New composite with the rule at index removed."""
        if not -len(self.rules) <= index < len(self.rules):
            raise InvalidRuleError(
                message=f"Rule index {index} out of range",
                details={"index": index, "rule_count": len(self.rules)},
            )
        remaining = list(self.rules)
        del remaining[index]
        return combine_orderings(remaining)


def combine_orderings(
    rules: Iterable[Ordering[T]],
    description: Optional[str] = None,
) -> CompositeOrdering[T]:
    """
    Combine orderings lexicographically.

    compare(a, b) evaluates rules[0]; on EQ it moves to rules[1], and so
    on. If every rule ties, the result is EQ. An empty rule list yields
    the always-EQ ordering, the identity element of the fold.

    Nested composites are flattened, so grouping never matters:
        combine_orderings([combine_orderings([r1, r2]), r3])
        == combine_orderings([r1, combine_orderings([r2, r3])])
        == combine_orderings([r1, r2, r3])

    Args:
        rules: Orderings in priority order
        description: Optional label (default: descriptions joined by "then")

    Returns:
        CompositeOrdering

    Raises:
        InvalidRuleError: If a rule is not an Ordering
    """
    flat: list[Ordering[T]] = []
    for index, rule in enumerate(rules):
        if isinstance(rule, CompositeOrdering):
            flat.extend(rule.rules)
        elif isinstance(rule, Ordering):
            flat.append(rule)
        else:
            raise InvalidRuleError(
                message=f"Rule {index} is not an Ordering",
                details={"index": index, "rule_type": type(rule).__name__},
            )

    snapshot = tuple(flat)
    label = description or (
        " then ".join(r.description for r in snapshot) if snapshot else "always equal"
    )
    logger.debug("Combined %d orderings: %s", len(snapshot), label)

    return CompositeOrdering(
        comparator=_lexicographic(snapshot),
        description=label,
        rules=snapshot,
    )


# =============================================================================
# Composite Predicate
# =============================================================================

def _all(rules: tuple[Predicate[T], ...]) -> Callable[[T], bool]:
    """Conjunction stopping at the first False."""
    def check(value: T) -> bool:
        for rule in rules:
            if not rule.test(value):
                return False
        return True

    return check


def _any(rules: tuple[Predicate[T], ...]) -> Callable[[T], bool]:
    """Disjunction stopping at the first True."""
    def check(value: T) -> bool:
        for rule in rules:
            if rule.test(value):
                return True
        return False

    return check


@dataclass(frozen=True, eq=False, repr=False)
class CompositePredicate(Predicate[T]):
    """
    Predicate built from a tuple of predicates and a CombineMode.

    Build with combine_predicates(), all_of() or any_of().
    """
    rules: tuple[Predicate[T], ...] = field(default_factory=tuple)
    mode: CombineMode = CombineMode.ALL

    def explain(self, value: T) -> Verdict:
        """Test value and report which rule (if any) short-circuited."""
        stop_on = self.mode is CombineMode.ANY
        for index, rule in enumerate(self.rules):
            if rule.test(value) is stop_on:
                return Verdict(
                    result=stop_on,
                    mode=self.mode,
                    rule_index=index,
                    rule_description=rule.description,
                    evaluated=index + 1,
                )
        return Verdict(
            result=not stop_on,
            mode=self.mode,
            evaluated=len(self.rules),
        )


def _coerce_mode(mode: Union[CombineMode, str]) -> CombineMode:
    """Accept a CombineMode or its string value."""
    if isinstance(mode, CombineMode):
        return mode
    try:
        return CombineMode(str(mode).lower())
    except ValueError:
        raise InvalidRuleError(
            message=f"Unknown combine mode: {mode!r}",
            details={"mode": str(mode), "allowed": [m.value for m in CombineMode]},
        ) from None


def combine_predicates(
    rules: Iterable[Predicate[T]],
    mode: Union[CombineMode, str] = CombineMode.ALL,
    description: Optional[str] = None,
) -> CompositePredicate[T]:
    """
    Combine predicates with logical AND (ALL) or OR (ANY).

    Truth rules:
    - ALL: True iff every rule is True; stops at the first False
    - ANY: True iff some rule is True; stops at the first True
    - Empty ALL is always True, empty ANY is always False

    Rules are evaluated left to right, so put cheap, selective rules
    first. Nested composites of the same mode are flattened.

    Args:
        rules: Predicates in evaluation order
        mode: CombineMode or "all"/"any"
        description: Optional label

    Returns:
        CompositePredicate

    Raises:
        InvalidRuleError: If mode is unknown or a rule is not a Predicate
    """
    combine_mode = _coerce_mode(mode)

    flat: list[Predicate[T]] = []
    for index, rule in enumerate(rules):
        if isinstance(rule, CompositePredicate) and rule.mode is combine_mode:
            flat.extend(rule.rules)
        elif isinstance(rule, Predicate):
            flat.append(rule)
        else:
            raise InvalidRuleError(
                message=f"Rule {index} is not a Predicate",
                details={"index": index, "rule_type": type(rule).__name__},
            )

    snapshot = tuple(flat)
    joiner = " AND " if combine_mode is CombineMode.ALL else " OR "
    if description:
        label = description
    elif snapshot:
        label = joiner.join(f"({r.description})" for r in snapshot)
    else:
        label = "always true" if combine_mode is CombineMode.ALL else "always false"
    logger.debug(
        "Combined %d predicates with %s: %s",
        len(snapshot), combine_mode.value.upper(), label,
    )

    check = _all(snapshot) if combine_mode is CombineMode.ALL else _any(snapshot)
    return CompositePredicate(
        check=check,
        description=label,
        rules=snapshot,
        mode=combine_mode,
    )


# =============================================================================
# Convenience Functions
# =============================================================================

def all_of(*rules: Predicate[T]) -> CompositePredicate[T]:
    """
    Conjunction of predicates.

    Example:
        visible = all_of(by_field(is_false(), "unavailable"), in_tools)
    """
    return combine_predicates(rules, CombineMode.ALL)


def any_of(*rules: Predicate[T]) -> CompositePredicate[T]:
    """Disjunction of predicates."""
    return combine_predicates(rules, CombineMode.ANY)
