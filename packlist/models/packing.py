"""Packing-list models - engine inputs snapshot, item instances and grouped views."""

from typing import Literal

from pydantic import BaseModel, Field, model_validator

from packlist.models.categories import Category
from packlist.models.common import ViewMode, ZeroMatchReason
from packlist.models.rules import DefaultItemRule
from packlist.models.trip import Day, Person


class PackingListItem(BaseModel):
    """One concrete, countable packing-list line produced by expanding a rule."""

    id: str
    rule_id: str
    rule_hash: str
    item_name: str
    display_name: str
    quantity: int = Field(..., ge=0)
    is_extra: bool = False
    person_id: str | None = None
    person_name: str | None = None
    day_index: int | None = None
    day_start: int | None = None
    day_end: int | None = None
    packed: bool = False
    overridden: bool = False
    category_id: str | None = None
    subcategory_id: str | None = None
    notes: str | None = None
    zero_match: ZeroMatchReason | None = None


class Override(BaseModel):
    """User correction layered on a computed instance.

    Every field except ``instance_id`` is optional; unset fields leave the
    computed value untouched.
    """

    instance_id: str
    quantity: int | None = Field(default=None, ge=0)
    excluded: bool | None = None
    packed: bool | None = None


class ViewFilters(BaseModel):
    """Packed/unpacked visibility applied before grouping."""

    show_packed: bool = True
    show_unpacked: bool = True


class TripSnapshot(BaseModel):
    """Consistent, read-only view of everything the engine derives from."""

    people: list[Person] = Field(default_factory=list)
    days: list[Day] = Field(default_factory=list)
    rules: list[DefaultItemRule] = Field(default_factory=list)
    overrides: list[Override] = Field(default_factory=list)
    categories: list[Category] | None = None

    @model_validator(mode="after")
    def validate_unique_identities(self) -> "TripSnapshot":
        """Ensure people, days and rules are uniquely identified."""
        person_ids = [p.id for p in self.people]
        if len(person_ids) != len(set(person_ids)):
            raise ValueError("duplicate person id in snapshot")
        day_indexes = [d.index for d in self.days]
        if len(day_indexes) != len(set(day_indexes)):
            raise ValueError("duplicate day index in snapshot")
        rule_ids = [r.id for r in self.rules]
        if len(rule_ids) != len(set(rule_ids)):
            raise ValueError("duplicate rule id in snapshot")
        return self


class GroupedItem(BaseModel):
    """All instances of one rule/item merged for display."""

    rule_id: str
    base_item: PackingListItem
    instances: list[PackingListItem]
    display_name: str
    total_count: int
    packed_count: int
    progress: float
    has_extras: bool = False
    zero_match: ZeroMatchReason | None = None


class CategoryBucket(BaseModel):
    """Grouped items sharing a display category."""

    category_id: str | None
    label: str
    items: list[GroupedItem] = Field(default_factory=list)
    total_count: int = 0
    packed_count: int = 0


GroupKind = Literal["day", "person", "general"]


class ItemGroup(BaseModel):
    """A day, person or general bucket of category buckets."""

    kind: GroupKind
    key: str | None
    label: str
    day_index: int | None = None
    person_id: str | None = None
    categories: list[CategoryBucket] = Field(default_factory=list)
    total_count: int = 0
    packed_count: int = 0
    progress: float = 0.0


class GroupedView(BaseModel):
    """Final day- or person-organized structure handed to the display layer."""

    mode: ViewMode
    groups: list[ItemGroup] = Field(default_factory=list)
    general: ItemGroup
    total_count: int = 0
    packed_count: int = 0
    progress: float = 0.0
