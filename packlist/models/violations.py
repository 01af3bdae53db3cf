"""Violation models - configuration problems found while validating rules."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

# JSON-serializable value types for violation details
JsonValue = str | int | float | bool | None | dict[str, Any] | list[Any]


class ViolationSeverity(str, Enum):
    """Severity levels for rule violations."""

    ADVISORY = "advisory"
    BLOCKING = "blocking"


class ViolationKind(str, Enum):
    """Which part of a rule is misconfigured."""

    CONDITION = "condition"
    QUANTITY = "quantity"
    RULE = "rule"


class RuleViolation(BaseModel):
    """A configuration problem detected in a rule.

    Blocking violations prevent the rule from being expanded; advisory ones
    are reported alongside the computed packing list.
    """

    kind: ViolationKind
    code: str  # Machine-usable short code, e.g., "NEGATIVE_QUANTITY"
    message: str  # Human-readable description (1 sentence)
    severity: ViolationSeverity
    rule_id: str | None = None
    condition_index: int | None = None
    details: dict[str, JsonValue] = Field(default_factory=dict)


class RuleValidationResult(BaseModel):
    """Outcome of validating one rule payload."""

    valid: bool
    rule_id: str | None = None
    violations: list[RuleViolation] = Field(default_factory=list)
