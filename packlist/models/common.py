"""Common enums shared across all models."""

from enum import Enum


class Gender(str, Enum):
    """Traveler gender, used by clothing rules."""

    male = "male"
    female = "female"
    other = "other"
    prefer_not_to_say = "prefer-not-to-say"


class ConditionOperator(str, Enum):
    """Comparison operators available to rule conditions."""

    EQ = "=="
    NE = "!="
    LT = "<"
    GT = ">"
    LE = "<="
    GE = ">="
    IN = "in"


class ViewMode(str, Enum):
    """How the packing list is bucketed for display."""

    BY_DAY = "by-day"
    BY_PERSON = "by-person"


class ZeroMatchReason(str, Enum):
    """Why a rule produced nothing to pack."""

    NO_MATCHING_PEOPLE = "no_matching_people"
    NO_MATCHING_DAYS = "no_matching_days"
    NO_MATCHING_PEOPLE_OR_DAYS = "no_matching_people_or_days"
