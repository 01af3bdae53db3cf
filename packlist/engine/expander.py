"""Rule expander: turns one declarative rule into concrete packing-list instances.

Instance granularity follows the quantity spec being expanded:

- per-person and per-day: one instance per matching person per day group
- per-person only: one instance per matching person
- per-day only: one instance per day group
- neither: a single unscoped instance

The ceiled total of each quantity is spread evenly across those instances
with the last one absorbing any remainder, so the instances of a rule always
add up to ``ceil(base_total) + ceil(extra_total)``.
"""

import logging
from collections.abc import Sequence

from packlist.engine.conditions import matching_days, matching_people
from packlist.engine.ids import HashInstanceIdGenerator, InstanceIdGenerator, calculate_rule_hash
from packlist.engine.quantity import ceil_quantity, day_groups, distribute, spec_quantity
from packlist.engine.validation import ensure_valid_rules
from packlist.models.common import ZeroMatchReason
from packlist.models.packing import PackingListItem
from packlist.models.rules import DefaultItemRule, QuantitySpec
from packlist.models.trip import Day, Person

logger = logging.getLogger(__name__)

Cell = tuple[Person | None, list[Day] | None]


def zero_match_reason(people: Sequence[Person], days: Sequence[Day]) -> ZeroMatchReason | None:
    """Explain why a rule has nothing to count, or None when it has matches."""
    if not people and not days:
        return ZeroMatchReason.NO_MATCHING_PEOPLE_OR_DAYS
    if not people:
        return ZeroMatchReason.NO_MATCHING_PEOPLE
    if not days:
        return ZeroMatchReason.NO_MATCHING_DAYS
    return None


def format_display_name(
    name: str,
    is_extra: bool = False,
    person: Person | None = None,
    group: Sequence[Day] | None = None,
) -> str:
    """Build the human label of an instance, e.g. ``"Socks (Extra) (Ana) (Days 1-3)"``."""
    label = name
    if is_extra:
        label += " (Extra)"
    if person is not None:
        label += f" ({person.name})"
    if group:
        first, last = group[0].index + 1, group[-1].index + 1
        label += f" (Day {first})" if first == last else f" (Days {first}-{last})"
    return label


def _cells(spec: QuantitySpec, people: list[Person], days: list[Day]) -> list[Cell]:
    groups = day_groups(days, spec.day_pattern) if spec.per_day else []

    if spec.per_person and spec.per_day:
        cells: list[Cell] = [(p, g) for p in people for g in groups]
    elif spec.per_person:
        cells = [(p, None) for p in people]
    elif spec.per_day:
        cells = [(None, g) for g in groups]
    else:
        cells = [(None, None)]

    # A truncating pattern can leave no whole group; keep the rule visible.
    return cells or [(None, None)]


def _materialize(
    rule: DefaultItemRule,
    rule_hash: str,
    spec: QuantitySpec,
    total: int,
    is_extra: bool,
    people: list[Person],
    days: list[Day],
    id_generator: InstanceIdGenerator,
) -> list[PackingListItem]:
    cells = _cells(spec, people, days)
    items = []
    for (person, group), quantity in zip(cells, distribute(total, len(cells)), strict=True):
        person_id = person.id if person else None
        day_index = group[0].index if group else None
        items.append(
            PackingListItem(
                id=id_generator(rule.id, person_id, day_index, is_extra),
                rule_id=rule.id,
                rule_hash=rule_hash,
                item_name=rule.name,
                display_name=format_display_name(rule.name, is_extra, person, group),
                quantity=quantity,
                is_extra=is_extra,
                person_id=person_id,
                person_name=person.name if person else None,
                day_index=day_index,
                day_start=group[0].index if group else None,
                day_end=group[-1].index if group else None,
                category_id=rule.category_id,
                subcategory_id=rule.subcategory_id,
                notes=rule.notes,
            )
        )
    return items


def _expand_validated(
    rule: DefaultItemRule,
    people: Sequence[Person],
    days: Sequence[Day],
    id_generator: InstanceIdGenerator,
) -> list[PackingListItem]:
    rule_people = matching_people(people, rule.conditions)
    rule_days = matching_days(days, rule.conditions)
    rule_hash = calculate_rule_hash(rule)

    reason = zero_match_reason(rule_people, rule_days)
    if reason is not None:
        logger.debug(f"Rule {rule.id} has no matches: {reason.value}")
        return [
            PackingListItem(
                id=id_generator(rule.id, None, None, False),
                rule_id=rule.id,
                rule_hash=rule_hash,
                item_name=rule.name,
                display_name=rule.name,
                quantity=0,
                category_id=rule.category_id,
                subcategory_id=rule.subcategory_id,
                notes=rule.notes,
                zero_match=reason,
            )
        ]

    calc = rule.calculation
    base_total = ceil_quantity(spec_quantity(calc.base, len(rule_people), len(rule_days)))
    items = _materialize(rule, rule_hash, calc.base, base_total, False, rule_people, rule_days, id_generator)

    if calc.extra is not None:
        extra_total = ceil_quantity(spec_quantity(calc.extra, len(rule_people), len(rule_days)))
        if extra_total > 0:
            items += _materialize(rule, rule_hash, calc.extra, extra_total, True, rule_people, rule_days, id_generator)

    return items


def expand_rule(
    rule: DefaultItemRule,
    people: Sequence[Person],
    days: Sequence[Day],
    id_generator: InstanceIdGenerator | None = None,
) -> list[PackingListItem]:
    """Expand one rule against the trip's people and days.

    A rule whose conditions leave no people or no days expands to a single
    zero-quantity marker carrying ``zero_match`` instead of disappearing.

    Raises:
        RuleValidationError: if the rule has blocking configuration problems
    """
    return expand_rules([rule], people, days, id_generator)


def expand_rules(
    rules: Sequence[DefaultItemRule],
    people: Sequence[Person],
    days: Sequence[Day],
    id_generator: InstanceIdGenerator | None = None,
) -> list[PackingListItem]:
    """Expand every rule in order. All rules are validated before any expansion."""
    ensure_valid_rules(rules)
    generator = id_generator or HashInstanceIdGenerator()

    instances: list[PackingListItem] = []
    for rule in rules:
        instances.extend(_expand_validated(rule, people, days, generator))
    return instances
