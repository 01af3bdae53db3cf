"""Quantity calculator: pure arithmetic turning a quantity definition into a number.

Amounts are carried as ``Decimal`` so fractional bases survive multiplication
without float drift; rounding happens once, when instances are materialized.
"""

import math
from collections.abc import Sequence
from decimal import ROUND_CEILING, Decimal
from typing import TypeVar

from packlist.models.rules import DayGroupingPattern, QuantitySpec

T = TypeVar("T")


def to_decimal(value: float | int | Decimal) -> Decimal:
    """Convert a model amount to Decimal via its shortest repr."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def grouped_day_count(days_count: int, pattern: DayGroupingPattern | None) -> int:
    """Number of day groups for ``days_count`` days under an optional pattern.

    >>> grouped_day_count(7, DayGroupingPattern(every=3, round_up=True))
    3
    >>> grouped_day_count(7, DayGroupingPattern(every=3, round_up=False))
    2
    """
    if pattern is None:
        return days_count
    if pattern.round_up:
        return math.ceil(days_count / pattern.every)
    return days_count // pattern.every


def calculate_item_quantity(
    base: float | Decimal,
    per_person: bool,
    per_day: bool,
    day_pattern: DayGroupingPattern | None,
    matching_people_count: int,
    matching_days_count: int,
) -> Decimal:
    """Compute the (possibly fractional) quantity for one allotment.

    Zero matching people or zero matching days zero the amount whether or not
    the allotment is per-person or per-day.
    """
    amount = to_decimal(base)

    if per_person or matching_people_count == 0:
        amount *= matching_people_count

    if per_day or matching_days_count == 0:
        amount *= grouped_day_count(matching_days_count, day_pattern)

    return amount


def spec_quantity(spec: QuantitySpec | None, people_count: int, days_count: int) -> Decimal:
    """Convenience wrapper over ``calculate_item_quantity`` for a QuantitySpec."""
    if spec is None:
        return Decimal(0)
    return calculate_item_quantity(
        spec.amount,
        spec.per_person,
        spec.per_day,
        spec.day_pattern,
        people_count,
        days_count,
    )


def ceil_quantity(amount: Decimal) -> int:
    """Round a final amount up to a whole, non-negative count."""
    return max(0, int(amount.to_integral_value(rounding=ROUND_CEILING)))


def day_groups(items: Sequence[T], pattern: DayGroupingPattern | None) -> list[list[T]]:
    """Split ordered matching days into consecutive groups.

    Without a pattern every day is its own group. With a pattern the groups
    hold ``every`` days each; the last group may be partial when rounding up,
    and trailing days are dropped when truncating.
    """
    if pattern is None or pattern.every == 1:
        return [[item] for item in items]

    total = grouped_day_count(len(items), pattern)
    groups: list[list[T]] = []
    for i in range(total):
        start = i * pattern.every
        if start >= len(items):
            break
        groups.append(list(items[start : start + pattern.every]))
    return groups


def distribute(total: int, slots: int) -> list[int]:
    """Spread ``total`` over ``slots`` evenly; the final slot absorbs the remainder.

    >>> distribute(7, 3)
    [2, 2, 3]
    """
    if slots <= 0:
        return []
    share = total // slots
    return [share] * (slots - 1) + [total - share * (slots - 1)]
