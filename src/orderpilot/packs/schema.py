"""
OrderPilot Rule Pack Schemas

Pydantic models for validating rule pack YAML/JSON files.

A rule pack names orderings (prioritized lists of field-path sort keys)
and filters (lists of field-path comparisons folded with ALL or ANY).
The loader compiles them into Ordering and Predicate values.

Schema versioning:
- schema_version field tracks breaking changes
- Loaders compare the major version
"""
from __future__ import annotations

import re
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


# =============================================================================
# Schema Version
# =============================================================================

SCHEMA_VERSION = "1.0.0"


# =============================================================================
# Enums as Literals (for YAML validation)
# =============================================================================

SortDirectionValue = Literal["asc", "desc"]

NullPlacementValue = Literal["first", "last"]

CombineModeValue = Literal["all", "any"]

FilterOperatorValue = Literal[
    "eq", "ne", "gt", "gte", "lt", "lte",
    "in", "not_in", "contains", "starts_with", "ends_with",
    "matches", "is_null", "is_not_null", "is_true", "is_false",
]

# Operators that take no value
UNARY_OPERATORS = {"is_null", "is_not_null", "is_true", "is_false"}

# Operators whose value must be a list
LIST_OPERATORS = {"in", "not_in"}


def _check_field_path(v: str) -> str:
    if not v or any(not part.strip() for part in v.split(".")):
        raise ValueError(f"Invalid field path: {v!r}")
    return v


# =============================================================================
# Ordering Schemas
# =============================================================================

class SortKeySchema(BaseModel):
    """One sort key: a field path compared by natural order."""
    field: str = Field(..., description="Dot-notation field path (e.g., 'category.name')")
    direction: SortDirectionValue = Field("asc", description="Sort direction")
    nulls: NullPlacementValue = Field("last", description="Where missing values sort")
    description: Optional[str] = Field(None, description="Human-readable description")

    @field_validator("field")
    @classmethod
    def validate_field(cls, v: str) -> str:
        """Reject empty path segments."""
        return _check_field_path(v)


class OrderingSchema(BaseModel):
    """A named ordering: sort keys in priority order."""
    id: str = Field(..., description="Unique identifier within the pack")
    description: Optional[str] = None
    keys: list[SortKeySchema] = Field(
        default_factory=list,
        description="Sort keys; the first is primary, later keys break ties",
    )


# =============================================================================
# Filter Schemas
# =============================================================================

class FilterRuleSchema(BaseModel):
    """A leaf comparison against one field."""
    field: str = Field(..., description="Dot-notation field path")
    op: FilterOperatorValue = Field(..., description="Comparison operator")
    value: Optional[Any] = Field(None, description="Value to compare against")
    description: Optional[str] = Field(None, description="Human-readable description")

    @field_validator("field")
    @classmethod
    def validate_field(cls, v: str) -> str:
        """Reject empty path segments."""
        return _check_field_path(v)

    @model_validator(mode="after")
    def validate_value(self) -> "FilterRuleSchema":
        """Validate value presence based on operator."""
        if self.op in LIST_OPERATORS and not isinstance(self.value, list):
            raise ValueError(f"Operator '{self.op}' requires a list value")
        if self.op not in UNARY_OPERATORS and self.op not in LIST_OPERATORS:
            if self.value is None:
                raise ValueError(
                    f"Operator '{self.op}' requires 'value' (use is_null for None checks)"
                )
        if self.op == "matches":
            try:
                re.compile(str(self.value))
            except re.error as e:
                raise ValueError(f"Invalid regular expression {self.value!r}: {e}") from e
        return self


class FilterSchema(BaseModel):
    """A named filter: rules folded with ALL or ANY."""
    id: str = Field(..., description="Unique identifier within the pack")
    description: Optional[str] = None
    mode: CombineModeValue = Field("all", description="all = AND, any = OR")
    rules: list[FilterRuleSchema] = Field(default_factory=list)


# =============================================================================
# Rule Pack
# =============================================================================

class RulePackSchema(BaseModel):
    """
    Top-level schema for a rule pack YAML/JSON file.
    """
    schema_version: str = Field(SCHEMA_VERSION, description="Schema version for compatibility")
    id: str = Field(..., description="Unique identifier (e.g., 'catalog')")
    name: str = Field(..., description="Human-readable name")
    description: Optional[str] = None

    orderings: list[OrderingSchema] = Field(default_factory=list)
    filters: list[FilterSchema] = Field(default_factory=list)

    @field_validator("schema_version", mode="before")
    @classmethod
    def coerce_schema_version(cls, v: Any) -> Any:
        """Accept unquoted YAML versions such as 1.0."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Strip whitespace; reject empty ids."""
        v = v.strip()
        if not v:
            raise ValueError("Rule pack id must not be empty")
        return v

    model_config = {
        "extra": "forbid",  # Reject unknown fields
    }


# =============================================================================
# Validation Helpers
# =============================================================================

def validate_rule_pack(data: dict[str, Any]) -> RulePackSchema:
    """
    Validate a rule pack dictionary against the schema.

    Raises:
        pydantic.ValidationError: If validation fails
    """
    return RulePackSchema.model_validate(data)


def check_schema_version(data: dict[str, Any]) -> bool:
    """
    Check if a rule pack's schema version is compatible.

    Only the major version has to match.
    """
    pack_version = str(data.get("schema_version", SCHEMA_VERSION))
    pack_major = pack_version.split(".")[0]
    current_major = SCHEMA_VERSION.split(".")[0]
    return pack_major == current_major
