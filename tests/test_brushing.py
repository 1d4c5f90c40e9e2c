"""
Tests for Plotly event parsing and parallel-coordinates brushing.
"""

from services.brushing import (
    apply_constraint_event,
    first_id,
    ids_from_points,
    ids_within_constraints,
    prune_constraints,
)
from utils.attributes import AttributeKey

GDP = AttributeKey.GDP_PER_CAPITA
NET = AttributeKey.INTERNET_USERS
KEYS = (GDP, NET)


class TestPointEvents:
    """clickData / selectedData payloads."""

    def test_ids_from_list_and_scalar_customdata(self):
        event = {"points": [{"customdata": ["NO"]}, {"customdata": "IS"}, {"customdata": ["NO"]}]}
        assert ids_from_points(event) == ["NO", "IS"]

    def test_missing_payload(self):
        assert ids_from_points(None) == []
        assert ids_from_points({"points": [{"x": 1}]}) == []
        assert first_id(None) is None

    def test_first_id(self):
        assert first_id({"points": [{"customdata": ["SE", 3]}]}) == "SE"


class TestConstraintEvents:
    """restyleData from axis brushing."""

    def test_single_interval(self):
        out = apply_constraint_event({}, [{"dimensions[1].constraintrange": [[0.2, 0.8]]}], KEYS)
        assert out == {NET.value: [(0.2, 0.8)]}

    def test_flat_interval(self):
        out = apply_constraint_event({}, [{"dimensions[0].constraintrange": [0.1, 0.4]}], KEYS)
        assert out == {GDP.value: [(0.1, 0.4)]}

    def test_multiple_intervals(self):
        event = [{"dimensions[0].constraintrange": [[[0.0, 0.1], [0.9, 1.0]]]}]
        out = apply_constraint_event({}, event, KEYS)
        assert out == {GDP.value: [(0.0, 0.1), (0.9, 1.0)]}

    def test_clearing_removes_axis(self):
        start = {GDP.value: [(0.1, 0.4)], NET.value: [(0.5, 0.6)]}
        out = apply_constraint_event(start, [{"dimensions[0].constraintrange": None}], KEYS)
        assert out == {NET.value: [(0.5, 0.6)]}
        assert GDP.value in start

    def test_unrelated_restyle_is_ignored(self):
        start = {GDP.value: [(0.1, 0.4)]}
        assert apply_constraint_event(start, [{"line.color": [1, 2]}, [0]], KEYS) == start
        assert apply_constraint_event(start, None, KEYS) == start

    def test_out_of_range_axis_index(self):
        assert apply_constraint_event({}, [{"dimensions[7].constraintrange": [0, 1]}], KEYS) == {}


class TestIdsWithinConstraints:
    """Highlight set from all accumulated constraints."""

    def test_single_axis(self, abc_records):
        assert ids_within_constraints(abc_records, {GDP.value: [(0.9, 1.0)]}, KEYS) == ["B"]

    def test_undefined_sits_at_midpoint(self, abc_records):
        assert ids_within_constraints(abc_records, {GDP.value: [(0.4, 0.6)]}, KEYS) == ["C"]

    def test_all_axes_must_match(self, abc_records):
        constraints = {GDP.value: [(0.0, 1.0)], NET.value: [(0.0, 0.1)]}
        assert ids_within_constraints(abc_records, constraints, KEYS) == ["A"]

    def test_any_interval_matches(self, abc_records):
        constraints = {GDP.value: [(0.0, 0.1), (0.9, 1.0)]}
        assert ids_within_constraints(abc_records, constraints, KEYS) == ["A", "B"]

    def test_no_constraints(self, abc_records):
        assert ids_within_constraints(abc_records, {}, KEYS) == []

    def test_unplotted_axes_ignored(self, abc_records):
        constraints = {AttributeKey.MEDIAN_AGE.value: [(0.0, 0.1)]}
        assert ids_within_constraints(abc_records, constraints, KEYS) == []

    def test_prune(self):
        constraints = {GDP.value: [(0, 1)], AttributeKey.MEDIAN_AGE.value: [(0, 1)]}
        assert prune_constraints(constraints, KEYS) == {GDP.value: [(0, 1)]}
