"""Models package - re-exports for convenience."""

from packlist.models.categories import (
    BUILT_IN_CATEGORIES,
    Category,
    all_categories,
    subcategories_of,
)
from packlist.models.common import ConditionOperator, Gender, ViewMode, ZeroMatchReason
from packlist.models.mutations import (
    CreateRule,
    DeleteRule,
    ExcludeItem,
    InstanceMutation,
    OverrideQuantity,
    PackingListMutation,
    TogglePacked,
    UpdateRule,
)
from packlist.models.packing import (
    CategoryBucket,
    GroupedItem,
    GroupedView,
    ItemGroup,
    Override,
    PackingListItem,
    TripSnapshot,
    ViewFilters,
)
from packlist.models.rules import (
    Calculation,
    Condition,
    DayCondition,
    DayGroupingPattern,
    DefaultItemRule,
    PersonCondition,
    QuantitySpec,
)
from packlist.models.trip import Day, Person
from packlist.models.violations import (
    RuleValidationResult,
    RuleViolation,
    ViolationKind,
    ViolationSeverity,
)

__all__ = [
    # Common
    "ConditionOperator",
    "Gender",
    "ViewMode",
    "ZeroMatchReason",
    # Trip
    "Person",
    "Day",
    # Rules
    "Condition",
    "PersonCondition",
    "DayCondition",
    "DayGroupingPattern",
    "QuantitySpec",
    "Calculation",
    "DefaultItemRule",
    # Categories
    "Category",
    "BUILT_IN_CATEGORIES",
    "all_categories",
    "subcategories_of",
    # Packing list
    "PackingListItem",
    "Override",
    "ViewFilters",
    "TripSnapshot",
    "GroupedItem",
    "CategoryBucket",
    "ItemGroup",
    "GroupedView",
    # Mutations
    "TogglePacked",
    "OverrideQuantity",
    "ExcludeItem",
    "CreateRule",
    "UpdateRule",
    "DeleteRule",
    "InstanceMutation",
    "PackingListMutation",
    # Violations
    "RuleViolation",
    "RuleValidationResult",
    "ViolationKind",
    "ViolationSeverity",
]
