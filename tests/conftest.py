"""Shared pytest fixtures for all test suites."""

from datetime import date, timedelta

import pytest

from packlist.models import Day, Gender, Person


@pytest.fixture
def family() -> list[Person]:
    """Two adults and two children."""
    return [
        Person(id="p-ana", name="Ana", age=38, gender=Gender.female),
        Person(id="p-ben", name="Ben", age=40, gender=Gender.male),
        Person(id="p-cleo", name="Cleo", age=7, gender=Gender.female),
        Person(id="p-dev", name="Dev", age=1, gender=Gender.male),
    ]


@pytest.fixture
def trip_days() -> list[Day]:
    """Five days: three in Lisbon (hot), then two in Porto (mild)."""
    start = date(2025, 7, 1)
    return [
        Day(
            index=i,
            date=start + timedelta(days=i),
            location="Lisbon" if i < 3 else "Porto",
            expected_climate="hot" if i < 3 else "mild",
        )
        for i in range(5)
    ]
