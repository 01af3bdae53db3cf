"""Trip models - travelers and trip days."""

from datetime import date

from pydantic import BaseModel, Field

from packlist.models.common import Gender


class Person(BaseModel):
    """A traveler on the trip."""

    id: str = Field(..., min_length=1)
    name: str
    age: int | None = Field(default=None, ge=0, le=150)
    gender: Gender | None = None


class Day(BaseModel):
    """One day of the trip."""

    index: int = Field(..., ge=0, description="0-indexed from trip start")
    date: date
    location: str | None = None
    expected_climate: str | None = None
