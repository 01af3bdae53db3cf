"""Tests for the condition evaluator."""

from datetime import date

import pytest

from packlist.engine.conditions import (
    ConditionFieldError,
    ConditionSubjectError,
    InvalidOperatorError,
    compare,
    matches,
    matches_all,
    matching_days,
    matching_people,
)
from packlist.models import ConditionOperator, Day, DayCondition, Person, PersonCondition

Op = ConditionOperator


def test_age_less_than_matches_only_toddler(family: list[Person]) -> None:
    """Test that a numeric age condition filters people."""
    condition = PersonCondition(field="age", operator=Op.LT, value=2)

    matched = matching_people(family, [condition])

    assert [p.name for p in matched] == ["Dev"]


def test_gender_equality(family: list[Person]) -> None:
    """Test that gender conditions compare against the enum value."""
    condition = PersonCondition(field="gender", operator=Op.EQ, value="female")

    assert [p.name for p in matching_people(family, [condition])] == ["Ana", "Cleo"]


def test_name_in_is_case_sensitive(family: list[Person]) -> None:
    """Test that 'in' name conditions require an exact name match."""
    condition = PersonCondition(field="name", operator=Op.IN, value=["Ana", "cleo"])

    assert [p.name for p in matching_people(family, [condition])] == ["Ana"]


def test_missing_attribute_never_matches() -> None:
    """Test that a person with no age fails any age condition, even '!='."""
    person = Person(id="p-x", name="X")

    assert matches(person, PersonCondition(field="age", operator=Op.NE, value=30)) is False
    assert matches(person, PersonCondition(field="age", operator=Op.GE, value=0)) is False


def test_day_location_equality(trip_days: list[Day]) -> None:
    """Test that day conditions filter days by location."""
    condition = DayCondition(field="location", operator=Op.EQ, value="Porto")

    assert [d.index for d in matching_days(trip_days, [condition])] == [3, 4]


def test_day_condition_with_scalar_only_operator_fails_fast(trip_days: list[Day]) -> None:
    """Test that '<' on a day field raises instead of silently evaluating false."""
    condition = DayCondition(field="location", operator=Op.LT, value="Porto")

    with pytest.raises(InvalidOperatorError):
        matches(trip_days[0], condition)


def test_in_operator_rejected_for_age(family: list[Person]) -> None:
    """Test that 'in' is only legal for names."""
    condition = PersonCondition(field="age", operator=Op.IN, value=["1"])

    with pytest.raises(InvalidOperatorError):
        matches(family[0], condition)


def test_condition_against_wrong_subject_raises(trip_days: list[Day]) -> None:
    """Test that evaluating a person condition on a day is a type error."""
    condition = PersonCondition(field="age", operator=Op.LT, value=2)

    with pytest.raises(ConditionSubjectError):
        matches(trip_days[0], condition)


def test_unknown_field_raises(family: list[Person]) -> None:
    """Test that a condition bypassing model validation with a bad field is surfaced."""
    condition = PersonCondition.model_construct(type="person", field="height", operator=Op.EQ, value=180)

    with pytest.raises(ConditionFieldError):
        matches(family[0], condition)


def test_matches_all_ignores_other_subject_type(family: list[Person], trip_days: list[Day]) -> None:
    """Test that day conditions do not affect person matching and vice versa."""
    conditions = [
        PersonCondition(field="age", operator=Op.GE, value=18),
        DayCondition(field="expected_climate", operator=Op.EQ, value="mild"),
    ]

    assert matches_all(family[0], conditions) is True
    assert matches_all(family[3], conditions) is False
    assert matches_all(trip_days[0], conditions) is False
    assert matches_all(trip_days[4], conditions) is True


def test_empty_conditions_always_match(family: list[Person], trip_days: list[Day]) -> None:
    """Test that no conditions means everyone and every day match."""
    assert matching_people(family, []) == family
    assert matching_days(trip_days, []) == trip_days


def test_matching_days_sorted_by_index() -> None:
    """Test that matched days come back in ordinal order."""
    days = [
        Day(index=2, date=date(2025, 7, 3)),
        Day(index=0, date=date(2025, 7, 1)),
        Day(index=1, date=date(2025, 7, 2)),
    ]

    assert [d.index for d in matching_days(days, [])] == [0, 1, 2]


def test_compare_ordering_requires_numbers() -> None:
    """Test that ordering anything but two numbers is false, not an error."""
    assert compare(5, Op.GT, 3) is True
    assert compare("b", Op.GE, "a") is False
    assert compare(5, Op.GT, "3") is False
    assert compare("hot", Op.IN, ["hot", "mild"]) is True
    assert compare("hot", Op.IN, "hot") is False


def test_day_ordering_on_text_never_matches(trip_days: list[Day]) -> None:
    """Test that >= on a text field does not fall back to alphabetical order."""
    condition = DayCondition(field="expected_climate", operator=Op.GE, value="hot")

    assert trip_days[3].expected_climate == "mild"
    assert matches(trip_days[3], condition) is False
    assert matching_days(trip_days, [condition]) == []
