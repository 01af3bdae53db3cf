"""Rule models - conditions, quantity definitions and default item rules."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field, model_validator

from packlist.models.common import ConditionOperator

ConditionValue = int | float | str | list[str]

PersonField = Literal["age", "gender", "name"]
DayField = Literal["location", "expected_climate"]


class PersonCondition(BaseModel):
    """Predicate evaluated against each traveler."""

    type: Literal["person"] = "person"
    field: PersonField
    operator: ConditionOperator
    value: ConditionValue
    notes: str | None = None


class DayCondition(BaseModel):
    """Predicate evaluated against each trip day."""

    type: Literal["day"] = "day"
    field: DayField
    operator: ConditionOperator
    value: ConditionValue
    notes: str | None = None


Condition = Annotated[PersonCondition | DayCondition, Field(discriminator="type")]


class DayGroupingPattern(BaseModel):
    """'Every N days' batching with a round-up or truncate policy."""

    every: int = Field(..., ge=1)
    round_up: bool = True


class QuantitySpec(BaseModel):
    """One quantity definition.

    ``amount`` may be fractional. Negative amounts are accepted here and
    reported by rule validation, so callers get a structured failure instead
    of a parse error.
    """

    amount: float = Field(0, allow_inf_nan=False)
    per_person: bool = False
    per_day: bool = False
    day_pattern: DayGroupingPattern | None = None


class Calculation(BaseModel):
    """Base allotment plus an optional extra allotment."""

    base: QuantitySpec
    extra: QuantitySpec | None = None


class DefaultItemRule(BaseModel):
    """Declarative description of an item to pack and how its quantity scales."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    calculation: Calculation
    conditions: list[Condition] = Field(default_factory=list)
    category_id: str | None = None
    subcategory_id: str | None = None
    notes: str | None = None
    pack_ids: list[str] = Field(default_factory=list, description="Rule packs that contributed this rule")

    @model_validator(mode="after")
    def strip_name(self) -> "DefaultItemRule":
        """Normalize surrounding whitespace in the display name."""
        self.name = self.name.strip()
        if not self.name:
            raise ValueError("name must not be blank")
        return self

    def person_conditions(self) -> list[PersonCondition]:
        """Conditions that filter travelers."""
        return [c for c in self.conditions if isinstance(c, PersonCondition)]

    def day_conditions(self) -> list[DayCondition]:
        """Conditions that filter trip days."""
        return [c for c in self.conditions if isinstance(c, DayCondition)]
