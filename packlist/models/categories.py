"""Category models and the built-in category catalogue."""

from pydantic import BaseModel


class Category(BaseModel):
    """Display category for packing-list items (never used for quantity math)."""

    id: str
    name: str
    parent_id: str | None = None
    icon: str | None = None


BUILT_IN_CATEGORIES: list[Category] = [
    Category(id="clothing", name="Clothing", icon="shirt"),
    Category(id="toiletries", name="Toiletries", icon="shower-head"),
    Category(id="electronics", name="Electronics", icon="smartphone"),
    Category(id="documents", name="Documents", icon="file-text"),
    Category(id="accessories", name="Accessories", icon="watch"),
    Category(id="gear", name="Gear", icon="backpack"),
    Category(id="medical", name="Medical", icon="first-aid"),
    Category(id="essentials", name="Essentials", icon="star"),
    Category(id="misc", name="Miscellaneous", icon="more-horizontal"),
]

CLOTHING_SUBCATEGORIES: list[Category] = [
    Category(id="tops", name="Tops", parent_id="clothing"),
    Category(id="bottoms", name="Bottoms", parent_id="clothing"),
    Category(id="underwear", name="Underwear", parent_id="clothing"),
    Category(id="outerwear", name="Outerwear", parent_id="clothing"),
    Category(id="footwear", name="Footwear", parent_id="clothing"),
    Category(id="swimwear", name="Swimwear", parent_id="clothing"),
    Category(id="formal", name="Formal Wear", parent_id="clothing"),
]

ESSENTIALS_SUBCATEGORIES: list[Category] = [
    Category(id="sun-protection", name="Sun Protection", parent_id="essentials"),
]


def all_categories() -> list[Category]:
    """Return every built-in category, top-level entries first."""
    return [*BUILT_IN_CATEGORIES, *CLOTHING_SUBCATEGORIES, *ESSENTIALS_SUBCATEGORIES]


def subcategories_of(category_id: str, categories: list[Category] | None = None) -> list[Category]:
    """Return the direct children of a category, in declaration order."""
    source = categories if categories is not None else all_categories()
    return [c for c in source if c.parent_id == category_id]
