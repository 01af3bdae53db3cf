"""Tests for packing-list models and their parsing rules."""

import pytest
from pydantic import TypeAdapter, ValidationError

from packlist.models import (
    Calculation,
    DayCondition,
    DefaultItemRule,
    PersonCondition,
    QuantitySpec,
    ViewMode,
    all_categories,
    subcategories_of,
)
from packlist.models.mutations import DeleteRule, OverrideQuantity, PackingListMutation, TogglePacked


def test_conditions_parse_by_type() -> None:
    """Test that the condition union dispatches on its type tag."""
    rule = DefaultItemRule.model_validate(
        {
            "id": "hat",
            "name": "Hat",
            "calculation": {"base": {"amount": 1}},
            "conditions": [
                {"type": "person", "field": "age", "operator": "<", "value": 12},
                {"type": "day", "field": "location", "operator": "==", "value": "Lisbon"},
            ],
        }
    )

    assert isinstance(rule.conditions[0], PersonCondition)
    assert isinstance(rule.conditions[1], DayCondition)
    assert rule.person_conditions() == [rule.conditions[0]]
    assert rule.day_conditions() == [rule.conditions[1]]


def test_rule_name_is_stripped() -> None:
    """Test that surrounding whitespace is removed from rule names."""
    rule = DefaultItemRule(id="r", name="  Socks ", calculation=Calculation(base=QuantitySpec(amount=1)))

    assert rule.name == "Socks"


def test_blank_rule_name_rejected() -> None:
    """Test that a whitespace-only name is invalid."""
    with pytest.raises(ValidationError):
        DefaultItemRule(id="r", name="   ", calculation=Calculation(base=QuantitySpec(amount=1)))


def test_day_condition_rejects_person_field() -> None:
    """Test that day conditions only accept day fields."""
    with pytest.raises(ValidationError):
        DayCondition.model_validate({"field": "age", "operator": "==", "value": 3})


def test_mutations_parse_by_action() -> None:
    """Test that mutation payloads dispatch on their action tag."""
    adapter = TypeAdapter(PackingListMutation)

    assert isinstance(adapter.validate_python({"action": "toggle_packed", "instance_id": "a"}), TogglePacked)
    assert isinstance(
        adapter.validate_python({"action": "override_quantity", "instance_id": "a", "quantity": 2}),
        OverrideQuantity,
    )
    assert isinstance(adapter.validate_python({"action": "delete_rule", "rule_id": "r"}), DeleteRule)


def test_override_quantity_must_not_be_negative() -> None:
    """Test that a negative manual quantity is rejected."""
    with pytest.raises(ValidationError):
        OverrideQuantity(instance_id="a", quantity=-1)


def test_view_mode_values() -> None:
    """Test that view modes use their wire names."""
    assert ViewMode("by-day") is ViewMode.BY_DAY
    assert ViewMode("by-person") is ViewMode.BY_PERSON


def test_built_in_categories() -> None:
    """Test the built-in catalogue and its subcategory lookup."""
    categories = all_categories()
    ids = [c.id for c in categories]

    assert len(ids) == len(set(ids))
    assert ids[0] == "clothing"
    assert [c.id for c in subcategories_of("essentials")] == ["sun-protection"]
    assert all(c.parent_id == "clothing" for c in subcategories_of("clothing"))
    assert subcategories_of("misc") == []
