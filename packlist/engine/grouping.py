"""Aggregator: groups instances by day or person, then by category, with totals."""

from collections.abc import Iterable, Sequence

from packlist.config import get_settings
from packlist.models.categories import Category, all_categories
from packlist.models.common import ViewMode
from packlist.models.packing import (
    CategoryBucket,
    GroupedItem,
    GroupedView,
    GroupKind,
    ItemGroup,
    PackingListItem,
    ViewFilters,
)
from packlist.models.trip import Day, Person


def progress(packed_count: int, total_count: int) -> float:
    """Packed fraction; zero when there is nothing to pack."""
    if total_count <= 0:
        return 0.0
    return packed_count / total_count


def filter_instances(instances: Iterable[PackingListItem], filters: ViewFilters | None) -> list[PackingListItem]:
    """Apply packed/unpacked visibility filters."""
    if filters is None:
        return list(instances)
    return [
        item
        for item in instances
        if (item.packed and filters.show_packed) or (not item.packed and filters.show_unpacked)
    ]


class CategoryIndex:
    """Lookup of display categories preserving declaration order."""

    def __init__(self, categories: Sequence[Category] | None = None):
        self.categories = list(categories) if categories is not None else all_categories()
        self._by_id = {c.id: c for c in self.categories}
        self._order = {c.id: position for position, c in enumerate(self.categories)}

    def get(self, category_id: str) -> Category | None:
        return self._by_id.get(category_id)

    def resolve(self, item: PackingListItem) -> str | None:
        """Category bucket for an item: its category, else its subcategory's parent."""
        if item.category_id:
            return item.category_id
        if item.subcategory_id:
            sub = self._by_id.get(item.subcategory_id)
            if sub is not None and sub.parent_id:
                return sub.parent_id
            return item.subcategory_id
        return None

    def sort_key(self, category_id: str | None) -> tuple[int, int, str]:
        # Declared categories first, then unknown ids alphabetically, uncategorized last
        if category_id is None:
            return (2, 0, "")
        if category_id in self._order:
            return (0, self._order[category_id], category_id)
        return (1, 0, category_id)

    def label(self, category_id: str | None) -> str:
        if category_id is None:
            return get_settings().uncategorized_label
        category = self._by_id.get(category_id)
        return category.name if category else category_id


def merge_items(instances: Sequence[PackingListItem]) -> list[GroupedItem]:
    """Merge instances sharing rule and item name, in order of first appearance."""
    buckets: dict[tuple[str, str], list[PackingListItem]] = {}
    for item in instances:
        buckets.setdefault((item.rule_id, item.item_name), []).append(item)

    grouped = []
    for (rule_id, item_name), members in buckets.items():
        total = sum(i.quantity for i in members)
        packed = sum(i.quantity for i in members if i.packed)
        zero_match = next((i.zero_match for i in members if i.zero_match is not None), None)
        grouped.append(
            GroupedItem(
                rule_id=rule_id,
                base_item=members[0],
                instances=members,
                display_name=item_name,
                total_count=total,
                packed_count=packed,
                progress=progress(packed, total),
                has_extras=any(i.is_extra for i in members),
                zero_match=zero_match,
            )
        )
    return grouped


def _category_buckets(instances: Sequence[PackingListItem], index: CategoryIndex) -> list[CategoryBucket]:
    by_category: dict[str | None, list[PackingListItem]] = {}
    for item in instances:
        by_category.setdefault(index.resolve(item), []).append(item)

    buckets = []
    for category_id in sorted(by_category, key=index.sort_key):
        items = merge_items(by_category[category_id])
        buckets.append(
            CategoryBucket(
                category_id=category_id,
                label=index.label(category_id),
                items=items,
                total_count=sum(i.total_count for i in items),
                packed_count=sum(i.packed_count for i in items),
            )
        )
    return buckets


def _build_group(
    kind: GroupKind,
    key: str | None,
    label: str,
    instances: Sequence[PackingListItem],
    index: CategoryIndex,
    day_index: int | None = None,
    person_id: str | None = None,
) -> ItemGroup:
    categories = _category_buckets(instances, index)
    total = sum(c.total_count for c in categories)
    packed = sum(c.packed_count for c in categories)
    return ItemGroup(
        kind=kind,
        key=key,
        label=label,
        day_index=day_index,
        person_id=person_id,
        categories=categories,
        total_count=total,
        packed_count=packed,
        progress=progress(packed, total),
    )


def _day_label(day_index: int, day: Day | None) -> str:
    label = f"Day {day_index + 1}"
    if day is not None and day.location:
        label += f" - {day.location}"
    return label


def _group_by_day(
    instances: Sequence[PackingListItem], days: Sequence[Day], index: CategoryIndex
) -> tuple[list[ItemGroup], list[PackingListItem]]:
    scoped: dict[int, list[PackingListItem]] = {}
    general: list[PackingListItem] = []
    for item in instances:
        if item.day_index is None:
            general.append(item)
        else:
            scoped.setdefault(item.day_index, []).append(item)

    known = {d.index: d for d in days}
    ordered = sorted(set(known) | set(scoped))
    groups = [
        _build_group("day", str(i), _day_label(i, known.get(i)), scoped.get(i, []), index, day_index=i)
        for i in ordered
    ]
    return groups, general


def _group_by_person(
    instances: Sequence[PackingListItem], people: Sequence[Person], index: CategoryIndex
) -> tuple[list[ItemGroup], list[PackingListItem]]:
    scoped: dict[str, list[PackingListItem]] = {}
    general: list[PackingListItem] = []
    for item in instances:
        if item.person_id is None:
            general.append(item)
        else:
            scoped.setdefault(item.person_id, []).append(item)

    labels = {p.id: p.name for p in people}
    # Travelers in trip order, then ids only known from instances
    ordered = [p.id for p in people] + sorted(pid for pid in scoped if pid not in labels)
    groups = []
    for person_id in ordered:
        members = scoped.get(person_id, [])
        label = labels.get(person_id) or next((i.person_name for i in members if i.person_name), person_id)
        groups.append(_build_group("person", person_id, label, members, index, person_id=person_id))
    return groups, general


def group_items(
    instances: Sequence[PackingListItem],
    mode: ViewMode | str = ViewMode.BY_DAY,
    categories: Sequence[Category] | None = None,
    people: Sequence[Person] = (),
    days: Sequence[Day] = (),
    filters: ViewFilters | None = None,
) -> GroupedView:
    """Build the grouped view for the display layer.

    Every provided day (or person) gets a group even when empty, ordered by
    day index (or trip order). Instances without a day (or person) land in
    the ``general`` bucket. Pure and deterministic: the same inputs always
    produce the same groups in the same order.
    """
    mode = ViewMode(mode)
    settings = get_settings()
    index = CategoryIndex(categories)
    visible = filter_instances(instances, filters)

    if mode is ViewMode.BY_DAY:
        groups, general_items = _group_by_day(visible, days, index)
        general_label = settings.any_day_label
    else:
        groups, general_items = _group_by_person(visible, people, index)
        general_label = settings.general_bucket_label

    general = _build_group("general", None, general_label, general_items, index)

    total = sum(g.total_count for g in groups) + general.total_count
    packed = sum(g.packed_count for g in groups) + general.packed_count
    return GroupedView(
        mode=mode,
        groups=groups,
        general=general,
        total_count=total,
        packed_count=packed,
        progress=progress(packed, total),
    )
