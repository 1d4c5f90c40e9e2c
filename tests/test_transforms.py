"""
Tests for the range filter engine and FilterState.
"""

import pytest

from services.transforms import (
    BINDINGS_BY_NAME,
    DEFAULT_METRIC,
    RANGE_BINDINGS,
    FilterState,
    filter_records,
    passes_range,
)
from utils.attributes import AttributeKey

GDP = AttributeKey.GDP_PER_CAPITA


def _ids(records):
    return [r.id for r in records]


class TestDefaults:
    """Initial filter settings."""

    def test_default_ranges(self):
        state = FilterState()
        assert state.ranges["renewable_energy"] == (0, 100)
        assert state.ranges["electricity_cost"] == (0, 100)
        assert state.ranges["temperature"] == (-20, 50)
        assert state.ranges["gdp"] == (0, 100000)
        assert state.ranges["internet_speed"] == (0, 1000)
        assert state.selected_metric is DEFAULT_METRIC
        assert state.selected_countries == frozenset()

    def test_every_binding_has_a_default(self):
        assert set(FilterState().ranges) == {b.name for b in RANGE_BINDINGS}

    def test_bindings_point_at_attributes(self):
        assert BINDINGS_BY_NAME["gdp"].key is GDP
        assert BINDINGS_BY_NAME["renewable_energy"].key is AttributeKey.ELECTRICITY_ACCESS
        assert BINDINGS_BY_NAME["internet_speed"].key is AttributeKey.INTERNET_USERS


class TestPassesRange:
    """Inclusive check, undefined always passes."""

    def test_inclusive_bounds(self, make_record):
        r = make_record("A", gdp=20000)
        assert passes_range(r, GDP, (20000, 30000))
        assert passes_range(r, GDP, (10000, 20000))
        assert not passes_range(r, GDP, (20001, 30000))

    def test_undefined_passes_any_range(self, make_record):
        r = make_record("A")
        assert passes_range(r, GDP, (1, 2))
        assert passes_range(r, GDP, (5, -5))

    def test_inverted_range_rejects_defined(self, make_record):
        assert not passes_range(make_record("A", gdp=10), GDP, (20, 0))


class TestFilterRecords:
    """All ranges combined, order preserved."""

    def test_gdp_range(self, abc_records):
        state = FilterState().with_range("gdp", [20000, 60000])
        assert _ids(filter_records(abc_records, state)) == ["B", "C"]

    def test_defaults_keep_sparse_records(self, abc_records):
        assert _ids(filter_records(abc_records, FilterState())) == ["A", "B", "C"]

    def test_widening_never_removes(self, make_record):
        records = [make_record(str(i), gdp=v) for i, v in enumerate([0, 15000, 30000, None, 90000])]
        narrow = FilterState().with_range("gdp", [10000, 40000])
        wide = FilterState().with_range("gdp", [5000, 95000])
        kept_narrow = set(_ids(filter_records(records, narrow)))
        kept_wide = set(_ids(filter_records(records, wide)))
        assert kept_narrow <= kept_wide

    def test_electricity_cost_is_scaled(self, make_record):
        """Slider works in cents; values are stored in $/kWh."""
        records = [make_record("cheap", cost=0.08), make_record("dear", cost=0.30)]
        state = FilterState().with_range("electricity_cost", [0, 10])
        assert _ids(filter_records(records, state)) == ["cheap"]

    def test_ranges_combine(self, make_record):
        records = [
            make_record("A", gdp=30000, internet=10),
            make_record("B", gdp=30000, internet=95),
            make_record("C", gdp=5000, internet=95),
        ]
        state = FilterState().with_range("gdp", [20000, 40000]).with_range("internet_speed", [50, 100])
        assert _ids(filter_records(records, state)) == ["B"]

    def test_allow_list(self, abc_records):
        state = FilterState().with_countries(["C", "A"])
        assert _ids(filter_records(abc_records, state)) == ["A", "C"]

    def test_empty_input(self):
        assert filter_records([], FilterState()) == []


class TestFilterState:
    """Immutable edits and store round-trip."""

    def test_with_range_returns_new_state(self):
        base = FilterState()
        edited = base.with_range("gdp", [1000, 2000])
        assert base.ranges["gdp"] == (0, 100000)
        assert edited.ranges["gdp"] == (1000.0, 2000.0)

    def test_unknown_range_name(self):
        with pytest.raises(KeyError):
            FilterState().with_range("altitude", [0, 1])

    def test_with_metric_ignores_unknown(self):
        state = FilterState().with_metric("no_such_column")
        assert state.selected_metric is DEFAULT_METRIC
        assert FilterState().with_metric(GDP.value).selected_metric is GDP

    def test_attribute_bounds_apply_scale(self):
        bounds = dict(FilterState().attribute_bounds())
        assert bounds[AttributeKey.ELECTRICITY_COST] == (0.0, 1.0)
        assert bounds[GDP] == (0, 100000)

    def test_store_round_trip(self):
        state = (
            FilterState()
            .with_range("temperature", [-5, 30])
            .with_metric(GDP)
            .with_countries({"NO", "IS"})
        )
        payload = state.to_store()
        assert payload["selected_countries"] == ["IS", "NO"]
        assert FilterState.from_store(payload) == state

    def test_from_empty_store(self):
        assert FilterState.from_store(None) == FilterState()
        assert FilterState.from_store({}) == FilterState()
