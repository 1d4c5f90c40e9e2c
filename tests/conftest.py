"""Test configuration for the siting dashboard."""

import sys
from pathlib import Path

import pytest


def pytest_configure() -> None:
    root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(root))


@pytest.fixture
def make_record():
    """Factory: make_record("A", gdp=10000) -> CountryRecord with GDP per capita set."""
    from services.records import CountryRecord
    from utils.attributes import AttributeKey

    aliases = {
        "gdp": AttributeKey.GDP_PER_CAPITA,
        "internet": AttributeKey.INTERNET_USERS,
        "access": AttributeKey.ELECTRICITY_ACCESS,
        "cost": AttributeKey.ELECTRICITY_COST,
        "temp": AttributeKey.MEAN_TEMP,
        "co2": AttributeKey.CO2_PER_CAPITA,
        "unemployment": AttributeKey.UNEMPLOYMENT,
    }

    def _make(record_id, name=None, location=(0.0, 0.0), **values):
        attributes = {aliases[k]: v for k, v in values.items() if v is not None}
        return CountryRecord(id=record_id, name=name or f"Country {record_id}", location=location, attributes=attributes)

    return _make


@pytest.fixture
def abc_records(make_record):
    """A gdp 10000, B gdp 50000, C gdp undefined."""
    return [
        make_record("A", "Alpha", gdp=10000, internet=40),
        make_record("B", "Bravo", gdp=50000, internet=90),
        make_record("C", "Charlie", location=None),
    ]
