"""Rule validation: configuration errors are reported before any expansion."""

import logging
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from packlist.engine.conditions import DAY_FIELD_OPERATORS, PERSON_FIELD_OPERATORS
from packlist.models.common import ConditionOperator, Gender
from packlist.models.rules import DayCondition, DefaultItemRule, PersonCondition, QuantitySpec
from packlist.models.violations import (
    RuleValidationResult,
    RuleViolation,
    ViolationKind,
    ViolationSeverity,
)
from packlist.utils.metrics import PrometheusEngineMetrics

logger = logging.getLogger(__name__)

_metrics = PrometheusEngineMetrics()

GENDER_VALUES = frozenset(g.value for g in Gender)


class RuleValidationError(ValueError):
    """One or more rules carry blocking configuration problems."""

    def __init__(self, violations: list[RuleViolation]):
        self.violations = violations
        codes = ", ".join(sorted({v.code for v in violations}))
        super().__init__(f"{len(violations)} blocking rule violation(s): {codes}")


def _is_number(value: object) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def verify_quantity_spec(rule_id: str, spec: QuantitySpec, label: str) -> list[RuleViolation]:
    """Check one quantity definition of a rule.

    Args:
        rule_id: Rule owning the quantity definition
        spec: Base or extra quantity definition
        label: "base" or "extra", echoed in details

    Returns:
        BLOCKING violation for a negative amount, ADVISORY when a day pattern
        is set on a spec that is not per-day
    """
    violations: list[RuleViolation] = []

    if spec.amount < 0:
        violations.append(
            RuleViolation(
                kind=ViolationKind.QUANTITY,
                code="NEGATIVE_QUANTITY",
                message=f"The {label} quantity must not be negative.",
                severity=ViolationSeverity.BLOCKING,
                rule_id=rule_id,
                details={"spec": label, "amount": spec.amount},
            )
        )

    if spec.day_pattern is not None and not spec.per_day:
        violations.append(
            RuleViolation(
                kind=ViolationKind.QUANTITY,
                code="DAY_PATTERN_IGNORED",
                message=f"The {label} day pattern has no effect because the quantity is not per day.",
                severity=ViolationSeverity.ADVISORY,
                rule_id=rule_id,
                details={"spec": label, "every": spec.day_pattern.every},
            )
        )

    return violations


def _value_problem(condition: PersonCondition | DayCondition) -> str | None:
    """Describe why a condition's value does not fit its field, or None."""
    value = condition.value
    if isinstance(condition, PersonCondition):
        if condition.field == "age":
            return None if _is_number(value) else "age conditions compare against a number"
        if condition.field == "gender":
            if isinstance(value, str) and value in GENDER_VALUES:
                return None
            return f"gender conditions compare against one of {sorted(GENDER_VALUES)}"
        if condition.operator is ConditionOperator.IN:
            if isinstance(value, list) and all(isinstance(v, str) for v in value):
                return None
            return "'in' conditions compare against a list of names"
        return None if isinstance(value, str) else "name conditions compare against a name"

    if isinstance(value, list):
        return "day conditions compare against a single value"
    return None


def verify_condition(rule_id: str, index: int, condition: PersonCondition | DayCondition) -> list[RuleViolation]:
    """Check that a condition's field, operator and value fit together."""
    legal = PERSON_FIELD_OPERATORS if isinstance(condition, PersonCondition) else DAY_FIELD_OPERATORS
    details: dict[str, Any] = {
        "type": condition.type,
        "field": condition.field,
        "operator": condition.operator.value,
    }

    allowed = legal.get(condition.field)
    if allowed is None:
        return [
            RuleViolation(
                kind=ViolationKind.CONDITION,
                code="UNKNOWN_FIELD",
                message=f"Unknown {condition.type} field '{condition.field}'.",
                severity=ViolationSeverity.BLOCKING,
                rule_id=rule_id,
                condition_index=index,
                details=details,
            )
        ]

    if condition.operator not in allowed:
        return [
            RuleViolation(
                kind=ViolationKind.CONDITION,
                code="INVALID_OPERATOR",
                message=f"Operator '{condition.operator.value}' cannot be used with field '{condition.field}'.",
                severity=ViolationSeverity.BLOCKING,
                rule_id=rule_id,
                condition_index=index,
                details={**details, "allowed": sorted(op.value for op in allowed)},
            )
        ]

    problem = _value_problem(condition)
    if problem:
        return [
            RuleViolation(
                kind=ViolationKind.CONDITION,
                code="INVALID_VALUE",
                message=f"Invalid value for field '{condition.field}': {problem}.",
                severity=ViolationSeverity.BLOCKING,
                rule_id=rule_id,
                condition_index=index,
                details={**details, "value": condition.value},
            )
        ]

    return []


def validate_rule(rule: DefaultItemRule) -> list[RuleViolation]:
    """Collect every violation of a parsed rule (advisory and blocking)."""
    violations = verify_quantity_spec(rule.id, rule.calculation.base, "base")
    if rule.calculation.extra is not None:
        violations += verify_quantity_spec(rule.id, rule.calculation.extra, "extra")

    for index, condition in enumerate(rule.conditions):
        violations += verify_condition(rule.id, index, condition)

    return violations


def validate_rules(rules: Sequence[DefaultItemRule]) -> list[RuleViolation]:
    """Collect violations across rules, in rule order."""
    violations: list[RuleViolation] = []
    for rule in rules:
        violations.extend(validate_rule(rule))
    return violations


def blocking(violations: Sequence[RuleViolation]) -> list[RuleViolation]:
    """Keep only the violations that prevent expansion."""
    return [v for v in violations if v.severity == ViolationSeverity.BLOCKING]


def ensure_valid_rules(rules: Sequence[DefaultItemRule]) -> list[RuleViolation]:
    """Validate rules and return advisories.

    Raises:
        RuleValidationError: if any rule has a blocking violation
    """
    violations = validate_rules(rules)
    blocking_violations = blocking(violations)
    if blocking_violations:
        logger.debug(
            f"Rejected {len(blocking_violations)} blocking violation(s)",
            extra={"structured": {"codes": [v.code for v in blocking_violations]}},
        )
        raise RuleValidationError(blocking_violations)

    return violations


def _code_for_error(error: dict[str, Any]) -> tuple[ViolationKind, str]:
    loc = tuple(str(part) for part in error.get("loc", ()))

    if "conditions" in loc:
        if loc[-1] == "field":
            return ViolationKind.CONDITION, "UNKNOWN_FIELD"
        if loc[-1] == "operator":
            return ViolationKind.CONDITION, "INVALID_OPERATOR"
        if "value" in loc:
            return ViolationKind.CONDITION, "INVALID_VALUE"
        return ViolationKind.CONDITION, "INVALID_RULE"

    if "amount" in loc:
        return ViolationKind.QUANTITY, "INVALID_QUANTITY"
    if "day_pattern" in loc:
        return ViolationKind.QUANTITY, "INVALID_DAY_PATTERN"
    if "calculation" in loc:
        return ViolationKind.QUANTITY, "INVALID_RULE"
    return ViolationKind.RULE, "INVALID_RULE"


def _condition_index(loc: tuple[Any, ...]) -> int | None:
    for previous, part in zip(loc, loc[1:], strict=False):
        if previous == "conditions" and isinstance(part, int):
            return part
    return None


def violations_from_validation_error(exc: ValidationError, rule_id: str | None = None) -> list[RuleViolation]:
    """Translate pydantic parse errors into blocking rule violations."""
    violations = []
    for error in exc.errors():
        kind, code = _code_for_error(error)
        loc = tuple(error.get("loc", ()))
        violations.append(
            RuleViolation(
                kind=kind,
                code=code,
                message=error.get("msg", "Invalid rule."),
                severity=ViolationSeverity.BLOCKING,
                rule_id=rule_id,
                condition_index=_condition_index(loc),
                details={"loc": [str(part) for part in loc], "type": error.get("type", "")},
            )
        )
    return violations


def validate_rule_payload(data: dict[str, Any]) -> RuleValidationResult:
    """Parse and validate raw rule data, always returning a structured result."""
    rule_id = data.get("id") if isinstance(data.get("id"), str) else None

    try:
        rule = DefaultItemRule.model_validate(data)
    except ValidationError as e:
        violations = violations_from_validation_error(e, rule_id)
    else:
        violations = validate_rule(rule)

    for violation in violations:
        _metrics.inc_violation(violation.code)

    return RuleValidationResult(
        valid=not blocking(violations),
        rule_id=rule_id,
        violations=violations,
    )
