"""
Pytest configuration and shared fixtures.

Points CONFIG at the test configuration before any application module is
imported, since settings are loaded at import time.
"""

import os
from pathlib import Path

import pytest

os.environ["CONFIG"] = str(
    Path(__file__).resolve().parent.parent / "resources" / "config" / "test.yaml"
)

from propunit_backend.modules.unit_numbering.models import UnitRecord  # noqa: E402


def _build_units(*numbers: str, floor: int | None = None) -> list[UnitRecord]:
    return [UnitRecord(unit_number=n, unit_type="residential", floor=floor) for n in numbers]


@pytest.fixture
def make_units():
    """Factory building unit records that share a floor."""
    return _build_units


@pytest.fixture
def sequential_units():
    return [
        UnitRecord(unit_number="1", unit_type="residential", floor=1),
        UnitRecord(unit_number="2", unit_type="residential", floor=1),
    ]


@pytest.fixture
def alpha_units():
    return [
        UnitRecord(unit_number="A-1001", unit_type="residential", floor=1),
        UnitRecord(unit_number="A-1002", unit_type="residential", floor=1),
        UnitRecord(unit_number="B-2001", unit_type="residential", floor=2),
    ]


@pytest.fixture
def wing_units():
    return [
        UnitRecord(unit_number="A101", unit_type="residential", floor=1, id="u1"),
        UnitRecord(unit_number="A102", unit_type="residential", floor=1, id="u2"),
        UnitRecord(unit_number="A201", unit_type="residential", floor=2, id="u3"),
    ]
