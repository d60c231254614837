"""Shared fixtures for Civic Share tests."""

import pytest

from civic_share.extractors.json_file import load_jurisdiction_file
from civic_share.models.schema import (
    BudgetCategory,
    Jurisdiction,
    JurisdictionData,
    ResidentProfile,
)
from tests.factories import DATA_DIR, make_category, make_jurisdiction, make_resident


@pytest.fixture
def jurisdiction() -> Jurisdiction:
    return make_jurisdiction()


@pytest.fixture
def resident() -> ResidentProfile:
    return make_resident()


@pytest.fixture
def categories() -> list[BudgetCategory]:
    return [
        make_category("police", 500000, 80, ["Union contracts"]),
        make_category("roads", 300000, 60),
        make_category("parks", 200000, 40),
    ]


@pytest.fixture
def township_data() -> JurisdictionData:
    """Bundled Liberty Township data."""
    return load_jurisdiction_file(DATA_DIR / "liberty-township.json")


@pytest.fixture
def city_data() -> JurisdictionData:
    """Bundled City of Riverside data."""
    return load_jurisdiction_file(DATA_DIR / "riverside-city.json")
