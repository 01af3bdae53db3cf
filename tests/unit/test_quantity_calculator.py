"""Tests for the quantity calculator."""

from decimal import Decimal

from packlist.engine.quantity import (
    calculate_item_quantity,
    ceil_quantity,
    day_groups,
    distribute,
    grouped_day_count,
)
from packlist.models import DayGroupingPattern


def test_day_grouping_round_up_and_truncate() -> None:
    """Test that 7 days every 3 gives 3 groups rounding up and 2 truncating."""
    assert grouped_day_count(7, DayGroupingPattern(every=3, round_up=True)) == 3
    assert grouped_day_count(7, DayGroupingPattern(every=3, round_up=False)) == 2


def test_day_grouping_without_pattern_counts_days() -> None:
    """Test that no pattern means one group per day."""
    assert grouped_day_count(5, None) == 5


def test_per_person_per_day_with_pattern() -> None:
    """Test 1 item per person every 2 days for 3 people over 5 days: 3 * ceil(5/2)."""
    qty = calculate_item_quantity(1, True, True, DayGroupingPattern(every=2, round_up=True), 3, 5)

    assert qty == 9


def test_not_per_person_is_not_multiplied() -> None:
    """Test that a shared item ignores the number of people."""
    assert calculate_item_quantity(2, False, False, None, 4, 5) == 2


def test_zero_people_zeroes_even_shared_items() -> None:
    """Test that zero matching people zeroes a rule regardless of the per-person flag."""
    assert calculate_item_quantity(3, False, False, None, 0, 5) == 0
    assert calculate_item_quantity(3, True, False, None, 0, 5) == 0


def test_zero_days_zeroes_even_non_daily_items() -> None:
    """Test that zero matching days zeroes a rule regardless of the per-day flag."""
    assert calculate_item_quantity(3, False, False, None, 2, 0) == 0


def test_fractional_amounts_keep_full_precision() -> None:
    """Test that fractional math is exact and only rounded at the end."""
    qty = calculate_item_quantity(1.1, False, True, None, 1, 10)

    assert qty == Decimal("11.0")
    assert ceil_quantity(qty) == 11
    assert ceil_quantity(calculate_item_quantity(0.5, True, False, None, 3, 1)) == 2


def test_ceil_quantity_never_negative() -> None:
    """Test that rounding clamps at zero."""
    assert ceil_quantity(Decimal("-0.5")) == 0


def test_day_groups_follow_pattern() -> None:
    """Test consecutive grouping, partial last group and truncation."""
    days = [0, 1, 2, 3, 4, 5, 6]

    assert day_groups(days, DayGroupingPattern(every=3, round_up=True)) == [[0, 1, 2], [3, 4, 5], [6]]
    assert day_groups(days, DayGroupingPattern(every=3, round_up=False)) == [[0, 1, 2], [3, 4, 5]]
    assert day_groups([0, 1], None) == [[0], [1]]


def test_distribute_final_slot_absorbs_remainder() -> None:
    """Test even distribution with the remainder on the last slot."""
    assert distribute(7, 3) == [2, 2, 3]
    assert distribute(3, 3) == [1, 1, 1]
    assert distribute(2, 3) == [0, 0, 2]
    assert distribute(5, 0) == []
