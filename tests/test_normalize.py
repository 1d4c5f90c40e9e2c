"""
Tests for the attribute normalizer.
"""

from services.normalize import MIDPOINT, attribute_range, normalize, normalize_percent, normalize_values
from utils.attributes import AttributeKey

GDP = AttributeKey.GDP_PER_CAPITA


class TestNormalize:
    """Min-max scaling with midpoint fallbacks."""

    def test_endpoints_and_missing(self, abc_records):
        """Min -> 0, max -> 1, undefined -> 0.5."""
        assert normalize(abc_records, GDP) == {"A": 0.0, "B": 1.0, "C": 0.5}

    def test_values_in_unit_interval(self, make_record):
        records = [make_record(str(i), gdp=v) for i, v in enumerate([-5.5, 0, 3, 1e9, 42])]
        values = normalize_values(records, GDP)
        assert all(0.0 <= v <= 1.0 for v in values)
        assert values[0] == 0.0
        assert values[3] == 1.0

    def test_non_finite_values(self, make_record):
        """inf and nan sit at the midpoint and stay out of min/max."""
        records = [
            make_record("A", gdp=1),
            make_record("B", gdp=3),
            make_record("C", gdp=float("inf")),
            make_record("D", gdp=float("nan")),
        ]
        assert normalize(records, GDP) == {"A": 0.0, "B": 1.0, "C": 0.5, "D": 0.5}
        assert attribute_range(records, GDP) == (1.0, 3.0)

    def test_single_defined_value(self, make_record):
        """One defined value means zero span: everything is the midpoint."""
        records = [make_record("A", gdp=123), make_record("B")]
        assert normalize_values(records, GDP) == [MIDPOINT, MIDPOINT]

    def test_zero_span(self, make_record):
        records = [make_record(str(i), gdp=7) for i in range(4)]
        assert normalize_values(records, GDP) == [0.5] * 4

    def test_nothing_defined(self, make_record):
        records = [make_record("A"), make_record("B")]
        assert normalize_values(records, GDP) == [0.5, 0.5]
        assert attribute_range(records, GDP) is None

    def test_empty_input(self):
        assert normalize_values([], GDP) == []
        assert normalize([], GDP) == {}

    def test_output_follows_input_order(self, abc_records):
        reordered = [abc_records[2], abc_records[1], abc_records[0]]
        assert normalize_values(reordered, GDP) == [0.5, 1.0, 0.0]

    def test_text_attribute_is_undefined(self, make_record):
        """Non-numeric keys have no range, so every record sits at the midpoint."""
        records = [make_record("A"), make_record("B")]
        assert normalize_values(records, AttributeKey.CAPITAL) == [0.5, 0.5]


class TestNormalizePercent:
    """Integer 0..100 scale for the radar chart."""

    def test_scale(self, abc_records):
        assert normalize_percent(abc_records, GDP) == {"A": 0, "B": 100, "C": 50}

    def test_invert_keeps_midpoint(self, abc_records):
        assert normalize_percent(abc_records, GDP, invert=True) == {"A": 100, "B": 0, "C": 50}
