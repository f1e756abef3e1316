"""
OrderPilot Rule Pack Loader

Loads rule packs from YAML or JSON files and compiles them into
CompositeOrdering / CompositePredicate values.

Every sort key and filter rule goes through the ordinary engine:
natural() or an operator predicate, adapted with an explicit
field_getter(path), then folded with combine_orderings /
combine_predicates. The pack layer adds no ordering semantics of its own.
"""
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional, Union

import yaml
from pydantic import ValidationError

from ..config import load_config
from ..engine import (
    CompositeOrdering,
    CompositePredicate,
    adapt,
    combine_orderings,
    combine_predicates,
    field_getter,
)
from ..exceptions import (
    RuleNotFoundError,
    RulePackLoadError,
    RulePackValidationError,
    RulePackVersionMismatch,
)
from ..models import (
    CombineMode,
    FilterOperator,
    NullPlacement,
    Ordering,
    Predicate,
    SortDirection,
    natural,
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

logger = logging.getLogger(__name__)


# =============================================================================
# Compiled Rule Pack
# =============================================================================

@dataclass
class RulePack:
    """
    A loaded rule pack: named orderings and filters ready for use.

    Usage:
        pack = load_rule_pack("catalog.yaml")
        products.sort(key=pack.ordering("listing").key())
        visible = list(filter(pack.filter("in_stock"), products))
    """
    id: str
    name: str
    schema_version: str = SCHEMA_VERSION
    description: Optional[str] = None
    orderings: dict[str, CompositeOrdering[Any]] = field(default_factory=dict)
    filters: dict[str, CompositePredicate[Any]] = field(default_factory=dict)

    def ordering(self, ordering_id: str) -> CompositeOrdering[Any]:
        """Get a named ordering."""
        try:
            return self.orderings[ordering_id]
        except KeyError:
            raise RuleNotFoundError(
                message=f"Ordering '{ordering_id}' not found in rule pack '{self.id}'",
                details={"available": sorted(self.orderings)},
                rule_id=ordering_id,
            ) from None

    def filter(self, filter_id: str) -> CompositePredicate[Any]:
        """Get a named filter."""
        try:
            return self.filters[filter_id]
        except KeyError:
            raise RuleNotFoundError(
                message=f"Filter '{filter_id}' not found in rule pack '{self.id}'",
                details={"available": sorted(self.filters)},
                rule_id=filter_id,
            ) from None


# =============================================================================
# Reference Integrity Validation
# =============================================================================

def validate_reference_integrity(schema: RulePackSchema, path: str = "") -> None:
    """
    Validate ids are unique within the pack.

    Raises:
        ValueError: If duplicate ids are found
    """
    errors = []

    seen_ordering_ids: set[str] = set()
    for ordering in schema.orderings:
        if ordering.id in seen_ordering_ids:
            errors.append(f"Duplicate ordering ID: '{ordering.id}'")
        seen_ordering_ids.add(ordering.id)

    seen_filter_ids: set[str] = set()
    for filter_schema in schema.filters:
        if filter_schema.id in seen_filter_ids:
            errors.append(f"Duplicate filter ID: '{filter_schema.id}'")
        seen_filter_ids.add(filter_schema.id)

    if errors:
        path_str = f" in {path}" if path else ""
        raise ValueError(
            f"Reference integrity errors{path_str}:\n" +
            "\n".join(f"  - {e}" for e in errors)
        )


# =============================================================================
# Filter Operators
# =============================================================================

def _test_eq(actual: Any, expected: Any) -> bool:
    return actual == expected


def _test_ne(actual: Any, expected: Any) -> bool:
    return actual != expected


def _test_gt(actual: Any, expected: Any) -> bool:
    return actual > expected


def _test_gte(actual: Any, expected: Any) -> bool:
    return actual >= expected


def _test_lt(actual: Any, expected: Any) -> bool:
    return actual < expected


def _test_lte(actual: Any, expected: Any) -> bool:
    return actual <= expected


def _test_in(actual: Any, expected: Any) -> bool:
    return actual in expected


def _test_not_in(actual: Any, expected: Any) -> bool:
    return actual not in expected


def _test_contains(actual: Any, expected: Any) -> bool:
    if isinstance(actual, (str, list, tuple, set, frozenset)):
        return expected in actual
    return False


def _test_starts_with(actual: Any, expected: Any) -> bool:
    return isinstance(actual, str) and actual.startswith(str(expected))


def _test_ends_with(actual: Any, expected: Any) -> bool:
    return isinstance(actual, str) and actual.endswith(str(expected))


_BINARY_TESTS: dict[FilterOperator, Callable[[Any, Any], bool]] = {
    FilterOperator.EQ: _test_eq,
    FilterOperator.NE: _test_ne,
    FilterOperator.GT: _test_gt,
    FilterOperator.GTE: _test_gte,
    FilterOperator.LT: _test_lt,
    FilterOperator.LTE: _test_lte,
    FilterOperator.IN: _test_in,
    FilterOperator.NOT_IN: _test_not_in,
    FilterOperator.CONTAINS: _test_contains,
    FilterOperator.STARTS_WITH: _test_starts_with,
    FilterOperator.ENDS_WITH: _test_ends_with,
}


def operator_predicate(
    operator: Union[FilterOperator, str],
    expected: Any = None,
    description: Optional[str] = None,
) -> Predicate[Any]:
    """
    Build a Predicate comparing a value against expected.

    None checks and boolean checks are explicit operators. For every other
    operator a None value or a comparison between incompatible types is
    False, never an error.

    Args:
        operator: FilterOperator or its string value
        expected: Value to compare against (ignored by unary operators)
        description: Optional label

    Returns:
        Predicate over the compared value
    """
    op = FilterOperator(operator)
    label = description or (
        op.value if expected is None else f"{op.value} {expected!r}"
    )

    if op is FilterOperator.IS_NULL:
        return Predicate(check=lambda actual: actual is None, description=label)
    if op is FilterOperator.IS_NOT_NULL:
        return Predicate(check=lambda actual: actual is not None, description=label)
    if op is FilterOperator.IS_TRUE:
        return Predicate(check=lambda actual: actual is True, description=label)
    if op is FilterOperator.IS_FALSE:
        return Predicate(check=lambda actual: actual is False, description=label)

    if op is FilterOperator.MATCHES:
        pattern = re.compile(str(expected))

        def matches(actual: Any) -> bool:
            return isinstance(actual, str) and pattern.search(actual) is not None

        return Predicate(check=matches, description=label)

    test = _BINARY_TESTS[op]
    if op in {FilterOperator.IN, FilterOperator.NOT_IN}:
        # Freeze list values so later edits to the source cannot leak in
        expected = tuple(expected)

    def check(actual: Any) -> bool:
        if actual is None:
            return False
        try:
            return bool(test(actual, expected))
        except TypeError:
            # Incompatible types
            return False

    return Predicate(check=check, description=label)


# =============================================================================
# Schema to Rule Converters
# =============================================================================

def _convert_sort_key(schema: SortKeySchema) -> Ordering[Any]:
    """Convert SortKeySchema to an Ordering over the pack's items."""
    base = natural()
    if SortDirection(schema.direction) is SortDirection.DESC:
        base = base.reversed()
    # Null placement is applied after direction so it is not flipped by desc
    if NullPlacement(schema.nulls) is NullPlacement.FIRST:
        base = base.nulls_first()
    else:
        base = base.nulls_last()

    label = schema.description or (
        schema.field if schema.direction == "asc" else f"{schema.field} desc"
    )
    return adapt(base, field_getter(schema.field), description=label)


def _convert_ordering(schema: OrderingSchema) -> CompositeOrdering[Any]:
    """Convert OrderingSchema to a CompositeOrdering."""
    return combine_orderings(
        [_convert_sort_key(k) for k in schema.keys],
        description=schema.description,
    )


def _convert_filter_rule(schema: FilterRuleSchema) -> Predicate[Any]:
    """Convert FilterRuleSchema to a Predicate over the pack's items."""
    base = operator_predicate(schema.op, schema.value)
    label = schema.description or f"{schema.field} {base.description}"
    return adapt(base, field_getter(schema.field), description=label)


def _convert_filter(schema: FilterSchema) -> CompositePredicate[Any]:
    """Convert FilterSchema to a CompositePredicate."""
    return combine_predicates(
        [_convert_filter_rule(r) for r in schema.rules],
        mode=CombineMode(schema.mode),
        description=schema.description,
    )


def _convert_rule_pack(schema: RulePackSchema) -> RulePack:
    """Convert RulePackSchema to a RulePack."""
    return RulePack(
        id=schema.id,
        name=schema.name,
        schema_version=schema.schema_version,
        description=schema.description,
        orderings={o.id: _convert_ordering(o) for o in schema.orderings},
        filters={f.id: _convert_filter(f) for f in schema.filters},
    )


# =============================================================================
# Rule Pack Loader
# =============================================================================

class RulePackLoader:
    """
    Loads rule packs from YAML or JSON files.

    Usage:
        loader = RulePackLoader()
        pack = loader.load("path/to/catalog.yaml")
    """

    def __init__(self, strict_version: Optional[bool] = None):
        """
        Initialize the loader.

        Args:
            strict_version: If True, reject packs with incompatible schema
                versions (default: ORDERPILOT_STRICT_PACK_VERSION)
        """
        if strict_version is None:
            strict_version = load_config().strict_pack_version
        self.strict_version = strict_version

        self._packs: dict[str, RulePack] = {}

    def load(self, path: Union[str, Path]) -> RulePack:
        """
        Load a rule pack from a file.

        Raises:
            RulePackLoadError: If file cannot be read or parsed
            RulePackValidationError: If validation fails
            RulePackVersionMismatch: If schema version incompatible
        """
        path = Path(path)

        try:
            data = self._load_file(path)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise RulePackLoadError(
                message=f"Failed to load rule pack: {e}",
                details={"path": str(path), "error": str(e)},
            ) from e

        return self.load_data(data, source=str(path))

    def load_data(self, data: Any, source: str = "<data>") -> RulePack:
        """
        Validate and compile an already-parsed rule pack.

        Args:
            data: Mapping parsed from YAML/JSON
            source: Origin used in error details and logs
        """
        if not isinstance(data, dict):
            raise RulePackLoadError(
                message="Rule pack must be a mapping at the top level",
                details={"path": source, "type": type(data).__name__},
            )

        if self.strict_version and not check_schema_version(data):
            pack_version = data.get("schema_version", "unknown")
            raise RulePackVersionMismatch(
                message=f"Schema version mismatch: pack has {pack_version}, expected {SCHEMA_VERSION}",
                details={
                    "pack_version": pack_version,
                    "expected_version": SCHEMA_VERSION,
                },
                rule_id=data.get("id"),
            )

        try:
            schema = validate_rule_pack(data)
        except ValidationError as e:
            raise RulePackValidationError(
                message=f"Rule pack validation failed: {e.error_count()} errors",
                details={"errors": e.errors(include_url=False), "path": source},
                rule_id=data.get("id"),
            ) from e

        try:
            validate_reference_integrity(schema, source)
        except ValueError as e:
            raise RulePackValidationError(
                message="Reference integrity validation failed",
                details={"errors": str(e), "path": source},
                rule_id=schema.id,
            ) from e

        pack = _convert_rule_pack(schema)
        self._packs[pack.id] = pack
        logger.info(
            "Loaded rule pack '%s' (%d orderings, %d filters)",
            pack.id, len(pack.orderings), len(pack.filters),
            extra={"rule_id": pack.id, "pack_path": source},
        )
        return pack

    def _load_file(self, path: Path) -> Any:
        """Load data from YAML or JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() in {".yaml", ".yml"}:
                return yaml.safe_load(f)
            elif path.suffix.lower() == ".json":
                return json.load(f)
            else:
                # Try YAML first, then JSON
                content = f.read()
                try:
                    return yaml.safe_load(content)
                except yaml.YAMLError:
                    return json.loads(content)

    def get_pack(self, pack_id: str) -> Optional[RulePack]:
        """Get a cached rule pack by ID."""
        return self._packs.get(pack_id)

    def list_packs(self) -> list[str]:
        """List IDs of all loaded packs."""
        return list(self._packs.keys())


# =============================================================================
# Convenience Functions
# =============================================================================

def load_rule_pack(path: Union[str, Path]) -> RulePack:
    """
    Load a rule pack from a file.

    Convenience function that creates a temporary loader.
    """
    loader = RulePackLoader()
    return loader.load(path)


def load_rule_pack_from_string(
    content: str,
    format: str = "yaml",
) -> RulePack:
    """
    Load a rule pack from a string.

    Args:
        content: YAML or JSON string
        format: "yaml" or "json"
    """
    try:
        if format.lower() == "json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise RulePackLoadError(
            message=f"Failed to parse rule pack: {e}",
            details={"format": format, "error": str(e)},
        ) from e

    loader = RulePackLoader()
    return loader.load_data(data, source=f"<string:{format}>")
