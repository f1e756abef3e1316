"""
OrderPilot Exception Hierarchy

Exceptions raised around the ordering/predicate engine.

Comparisons and predicate tests never raise OrderPilot errors themselves:
every engine operation is total. These exceptions cover caller misuse
(bad rule objects, unresolvable field paths), failed law checks, and the
rule pack loading layer.

Exception codes follow the pattern: OP_<CATEGORY>_<SPECIFIC>
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class OrderPilotError(Exception):
    """
    Base exception for all OrderPilot errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (OP_*)
        details: Additional context about the error
        rule_id: Associated rule or pack ID if applicable
    """
    message: str
    code: str = "OP_INTERNAL_ERROR"
    details: dict[str, Any] = field(default_factory=dict)
    rule_id: Optional[str] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        parts = [f"[{self.code}] {self.message}"]
        if self.rule_id:
            parts.append(f"(rule: {self.rule_id})")
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Serialize exception for logging."""
        result: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.rule_id:
            result["rule_id"] = self.rule_id
        return result


# =============================================================================
# Rule Construction Errors
# =============================================================================

@dataclass
class InvalidRuleError(OrderPilotError):
    """A rule or combinator argument is not usable (wrong type, bad mode)."""
    code: str = "OP_INVALID_RULE"


@dataclass
class FieldPathError(OrderPilotError):
    """Field path resolution failed."""
    code: str = "OP_FIELD_PATH_ERROR"


# =============================================================================
# Law Checking Errors
# =============================================================================

@dataclass
class LawViolationError(OrderPilotError):
    """An ordering or predicate broke an algebraic law on the given samples."""
    code: str = "OP_LAW_VIOLATION"


# =============================================================================
# Rule Pack Errors
# =============================================================================

@dataclass
class RulePackLoadError(OrderPilotError):
    """Failed to load rule pack from file."""
    code: str = "OP_RULE_PACK_LOAD_ERROR"


@dataclass
class RulePackValidationError(OrderPilotError):
    """Rule pack schema validation failed."""
    code: str = "OP_RULE_PACK_VALIDATION_ERROR"


@dataclass
class RulePackVersionMismatch(OrderPilotError):
    """Rule pack schema version doesn't match expected version."""
    code: str = "OP_RULE_PACK_VERSION_MISMATCH"


@dataclass
class RuleNotFoundError(OrderPilotError):
    """Requested ordering or filter not found in a rule pack."""
    code: str = "OP_RULE_NOT_FOUND"
