"""
OrderPilot Law Checks

Sample-based checks of the algebraic laws orderings and predicates must
satisfy. The engine never runs these on its own: a caller-supplied rule
that breaks them only shows up as an inconsistent sort, so these checks
belong in test suites (or in a startup self-check of an application's
own leaf orderings).

Laws checked:
  1. Reflexivity: compare(x, x) == EQ
  2. Antisymmetry: compare(a, b) == LT  <=>  compare(b, a) == GT
  3. Transitivity: compare(a, b) != GT and compare(b, c) != GT
     => compare(a, c) != GT
  4. Behavioral equivalence of two orderings / two predicates

Transitivity inspects every triple, so it only looks at the first
ORDERPILOT_LAW_SAMPLE_LIMIT samples.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from itertools import product
from typing import Any, Iterable, Optional, Sequence

from ..config import load_config
from ..exceptions import LawViolationError
from ..models import Comparison, Ordering, Predicate

logger = logging.getLogger(__name__)

# Violations kept per report; counting continues past this
MAX_RECORDED_VIOLATIONS = 20


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass
class LawViolation:
    """A single counterexample."""
    law: str
    values: tuple[Any, ...]
    message: str


@dataclass
class LawReport:
    """Result of checking one law (or a group of laws) on a sample."""
    law: str
    checked: int = 0
    violation_count: int = 0
    violations: list[LawViolation] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.violation_count == 0

    def record(self, values: tuple[Any, ...], message: str) -> None:
        self.violation_count += 1
        if len(self.violations) < MAX_RECORDED_VIOLATIONS:
            self.violations.append(LawViolation(law=self.law, values=values, message=message))

    def merge(self, other: LawReport) -> None:
        """Fold another report's counts and counterexamples into this one."""
        self.checked += other.checked
        self.violation_count += other.violation_count
        room = MAX_RECORDED_VIOLATIONS - len(self.violations)
        if room > 0:
            self.violations.extend(other.violations[:room])

    def summary(self) -> str:
        status = "passed" if self.passed else f"{self.violation_count} violations"
        return f"{self.law}: {self.checked} checks, {status}"


# ---------------------------------------------------------------------------
# Ordering laws
# ---------------------------------------------------------------------------

def check_reflexive(ordering: Ordering[Any], samples: Iterable[Any]) -> LawReport:
    """compare(x, x) must be EQ for every sample."""
    report = LawReport(law="reflexive")
    for x in samples:
        report.checked += 1
        result = ordering.compare(x, x)
        if result is not Comparison.EQ:
            report.record((x,), f"compare(x, x) returned {result.name}")
    return report


def check_antisymmetric(ordering: Ordering[Any], samples: Iterable[Any]) -> LawReport:
    """compare(a, b) must be the reverse of compare(b, a) for every pair."""
    values = list(samples)
    report = LawReport(law="antisymmetric")
    for a, b in product(values, repeat=2):
        report.checked += 1
        forward = ordering.compare(a, b)
        backward = ordering.compare(b, a)
        if forward is not backward.reverse():
            report.record(
                (a, b),
                f"compare(a, b) = {forward.name} but compare(b, a) = {backward.name}",
            )
    return report


def check_transitive(
    ordering: Ordering[Any],
    samples: Sequence[Any],
    limit: Optional[int] = None,
) -> LawReport:
    """a <= b and b <= c must imply a <= c for every triple."""
    limit = limit if limit is not None else load_config().law_sample_limit
    values = list(samples)
    if len(values) > limit:
        logger.debug(
            "Transitivity check limited to %d of %d samples", limit, len(values)
        )
        values = values[:limit]

    report = LawReport(law="transitive")
    # Cache pairwise results; triples reuse them heavily
    table = {
        (i, j): ordering.compare(a, b)
        for (i, a), (j, b) in product(enumerate(values), repeat=2)
    }
    n = len(values)
    for i, j, k in product(range(n), repeat=3):
        if table[(i, j)] is Comparison.GT or table[(j, k)] is Comparison.GT:
            continue
        report.checked += 1
        if table[(i, k)] is Comparison.GT:
            report.record(
                (values[i], values[j], values[k]),
                "a <= b and b <= c but a > c",
            )
    return report


def check_total_order(
    ordering: Ordering[Any],
    samples: Sequence[Any],
    limit: Optional[int] = None,
) -> LawReport:
    """Run reflexive, antisymmetric and transitive checks together."""
    values = list(samples)
    report = LawReport(law="total_order")
    report.merge(check_reflexive(ordering, values))
    report.merge(check_antisymmetric(ordering, values))
    report.merge(check_transitive(ordering, values, limit=limit))
    return report


def assert_lawful(
    ordering: Ordering[Any],
    samples: Sequence[Any],
    limit: Optional[int] = None,
) -> LawReport:
    """
    Check ordering is a total order on samples.

    Returns:
        The passing LawReport

    Raises:
        LawViolationError: If any law fails, with counterexamples in details
    """
    report = check_total_order(ordering, samples, limit=limit)
    if not report.passed:
        raise LawViolationError(
            message=f"Ordering '{ordering.description}' is not a total order: {report.summary()}",
            details={
                "violation_count": report.violation_count,
                "violations": [
                    {"law": v.law, "values": repr(v.values), "message": v.message}
                    for v in report.violations
                ],
            },
            rule_id=ordering.description,
        )
    return report


# ---------------------------------------------------------------------------
# Equivalence
# ---------------------------------------------------------------------------

def check_equivalent(
    left: Ordering[Any],
    right: Ordering[Any],
    samples: Iterable[Any],
) -> LawReport:
    """Both orderings must return the same Comparison for every pair."""
    values = list(samples)
    report = LawReport(law="equivalent")
    for a, b in product(values, repeat=2):
        report.checked += 1
        lhs = left.compare(a, b)
        rhs = right.compare(a, b)
        if lhs is not rhs:
            report.record((a, b), f"left gives {lhs.name}, right gives {rhs.name}")
    return report


def check_predicates_equivalent(
    left: Predicate[Any],
    right: Predicate[Any],
    samples: Iterable[Any],
) -> LawReport:
    """Both predicates must agree on every sample."""
    report = LawReport(law="predicates_equivalent")
    for x in samples:
        report.checked += 1
        lhs = left.test(x)
        rhs = right.test(x)
        if lhs != rhs:
            report.record((x,), f"left gives {lhs}, right gives {rhs}")
    return report


def is_sorted(items: Sequence[Any], ordering: Ordering[Any]) -> bool:
    """Check no adjacent pair of items is out of order."""
    return all(
        ordering.compare(a, b) is not Comparison.GT
        for a, b in zip(items, items[1:])
    )
