"""Condition evaluator: decides whether a traveler or trip day satisfies a condition."""

from collections.abc import Iterable

from packlist.models.common import ConditionOperator
from packlist.models.rules import ConditionValue, DayCondition, PersonCondition
from packlist.models.trip import Day, Person

Op = ConditionOperator

SCALAR_OPERATORS = frozenset({Op.EQ, Op.NE, Op.LT, Op.GT, Op.LE, Op.GE})

# Operators each field accepts. "in" is reserved for person names.
PERSON_FIELD_OPERATORS: dict[str, frozenset[ConditionOperator]] = {
    "age": SCALAR_OPERATORS,
    "gender": frozenset({Op.EQ, Op.NE}),
    "name": frozenset({Op.EQ, Op.NE, Op.IN}),
}

DAY_FIELD_OPERATORS: dict[str, frozenset[ConditionOperator]] = {
    "location": frozenset({Op.EQ, Op.GE, Op.LE}),
    "expected_climate": frozenset({Op.EQ, Op.GE, Op.LE}),
}


class ConditionFieldError(ValueError):
    """Condition references a field its subject does not have."""


class ConditionSubjectError(TypeError):
    """Condition evaluated against the wrong kind of subject."""


class InvalidOperatorError(ValueError):
    """Operator is not legal for the condition's field."""


Scalar = int | float | str


def _is_number(value: object) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def compare(left: Scalar, operator: ConditionOperator, right: ConditionValue) -> bool:
    """Compare a subject value with a condition value.

    Ordering operators only compare numbers with numbers; any other pairing,
    strings included, is simply false.
    """
    if operator is Op.EQ:
        return left == right
    if operator is Op.NE:
        return left != right
    if operator is Op.IN:
        return isinstance(right, list) and left in right

    if not (_is_number(left) and _is_number(right)):
        return False

    if operator is Op.LT:
        return left < right  # type: ignore[operator]
    if operator is Op.GT:
        return left > right  # type: ignore[operator]
    if operator is Op.LE:
        return left <= right  # type: ignore[operator]
    if operator is Op.GE:
        return left >= right  # type: ignore[operator]
    raise InvalidOperatorError(f"Unsupported operator: {operator!r}")


def _person_value(person: Person, field: str) -> Scalar | None:
    if field == "age":
        return person.age
    if field == "gender":
        return person.gender.value if person.gender is not None else None
    if field == "name":
        return person.name
    raise ConditionFieldError(f"Unknown person field: {field!r}")


def _day_value(day: Day, field: str) -> Scalar | None:
    if field == "location":
        return day.location
    if field == "expected_climate":
        return day.expected_climate
    raise ConditionFieldError(f"Unknown day field: {field!r}")


def _check_operator(field: str, operator: ConditionOperator, legal: dict[str, frozenset[ConditionOperator]]) -> None:
    allowed = legal.get(field)
    if allowed is None:
        raise ConditionFieldError(f"Unknown field: {field!r}")
    if operator not in allowed:
        raise InvalidOperatorError(f"Operator {operator.value!r} is not allowed for field {field!r}")


def matches(subject: Person | Day, condition: PersonCondition | DayCondition) -> bool:
    """Return True when the subject satisfies the condition.

    A subject with no value for the condition's field never matches.

    Raises:
        ConditionSubjectError: condition type does not match the subject
        ConditionFieldError: field unknown for the subject
        InvalidOperatorError: operator not legal for the field
    """
    if isinstance(condition, PersonCondition):
        if not isinstance(subject, Person):
            raise ConditionSubjectError("person condition evaluated against a non-person subject")
        _check_operator(condition.field, condition.operator, PERSON_FIELD_OPERATORS)
        value = _person_value(subject, condition.field)
    elif isinstance(condition, DayCondition):
        if not isinstance(subject, Day):
            raise ConditionSubjectError("day condition evaluated against a non-day subject")
        _check_operator(condition.field, condition.operator, DAY_FIELD_OPERATORS)
        value = _day_value(subject, condition.field)
    else:
        raise ConditionSubjectError(f"Unsupported condition type: {type(condition).__name__}")

    if value is None:
        return False
    return compare(value, condition.operator, condition.value)


def matches_all(subject: Person | Day, conditions: Iterable[PersonCondition | DayCondition]) -> bool:
    """Return True when every condition for the subject's type holds.

    Conditions about the other subject type are ignored, and an empty
    condition list always matches.
    """
    wanted = PersonCondition if isinstance(subject, Person) else DayCondition
    return all(matches(subject, c) for c in conditions if isinstance(c, wanted))


def matching_people(people: Iterable[Person], conditions: Iterable[PersonCondition | DayCondition]) -> list[Person]:
    """Filter travelers by a rule's person conditions, preserving order."""
    conditions = list(conditions)
    return [p for p in people if matches_all(p, conditions)]


def matching_days(days: Iterable[Day], conditions: Iterable[PersonCondition | DayCondition]) -> list[Day]:
    """Filter trip days by a rule's day conditions, ordered by day index."""
    conditions = list(conditions)
    return sorted((d for d in days if matches_all(d, conditions)), key=lambda d: d.index)
