"""
End-to-end: normalize, filter and highlight over one small dataset.
"""

from services.normalize import normalize
from services.selection import Emphasis, HighlightState
from services.transforms import FilterState, filter_records
from utils.attributes import AttributeKey


class TestLinkedViewScenario:
    """Three countries, one of them without GDP."""

    def test_normalize_filter_toggle(self, abc_records):
        gdp = AttributeKey.GDP_PER_CAPITA
        assert normalize(abc_records, gdp) == {"A": 0.0, "B": 1.0, "C": 0.5}

        state = FilterState().with_range("gdp", [20000, 60000])
        assert [r.id for r in filter_records(abc_records, state)] == ["B", "C"]

        highlight = HighlightState().toggle_highlight("B")
        assert highlight.highlighted == {"B"}
        assert highlight.toggle_highlight("B").highlighted == frozenset()

    def test_highlight_survives_filtering(self, abc_records):
        """Highlight state is independent of filtering; filtered-out ids simply are not drawn."""
        highlight = HighlightState(highlighted=frozenset({"A", "B"}), active_id="A")
        visible = filter_records(abc_records, FilterState().with_range("gdp", [20000, 60000]))
        assert [highlight.emphasis(r.id) for r in visible] == [Emphasis.HIGHLIGHTED, Emphasis.FADED]
        assert highlight.emphasis("A") is Emphasis.ACTIVE
