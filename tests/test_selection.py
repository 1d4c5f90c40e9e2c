"""
Tests for the shared highlight state and emphasis precedence.
"""

from services.selection import Emphasis, HighlightState, classify_emphasis


class TestHighlightState:
    """Pure transitions; the starting state is never modified."""

    def test_toggle_twice_restores(self):
        state = HighlightState(highlighted=frozenset({"X"}))
        assert state.toggle_highlight("B").toggle_highlight("B") == state

    def test_toggle_does_not_mutate(self):
        state = HighlightState()
        toggled = state.toggle_highlight("A")
        assert state.highlighted == frozenset()
        assert toggled.highlighted == {"A"}

    def test_active_is_independent_of_set(self):
        state = HighlightState().set_active("A")
        assert state.active_id == "A"
        assert state.highlighted == frozenset()
        assert state.toggle_highlight("A").active_id == "A"

    def test_set_highlight_set_replaces(self):
        state = HighlightState(highlighted=frozenset({"A"})).set_highlight_set(["B", "C", "B"])
        assert state.highlighted == {"B", "C"}

    def test_merge_keeps_existing(self):
        state = HighlightState(highlighted=frozenset({"A"})).merge_highlight(["B"])
        assert state.highlighted == {"A", "B"}

    def test_clear_all(self):
        state = HighlightState(highlighted=frozenset({"A"}), active_id="A").clear_all()
        assert state.is_empty
        assert state == HighlightState()

    def test_store_round_trip(self):
        state = HighlightState(highlighted=frozenset({"C", "A"}), active_id="B")
        payload = state.to_store()
        assert payload == {"highlighted": ["A", "C"], "active_id": "B"}
        assert HighlightState.from_store(payload) == state
        assert HighlightState.from_store(None) == HighlightState()


class TestEmphasis:
    """ACTIVE > HIGHLIGHTED > FADED > DEFAULT."""

    def test_precedence(self):
        state = HighlightState(highlighted=frozenset({"A", "B"}), active_id="A")
        assert classify_emphasis("A", state) is Emphasis.ACTIVE
        assert classify_emphasis("B", state) is Emphasis.HIGHLIGHTED
        assert classify_emphasis("C", state) is Emphasis.FADED

    def test_empty_state_is_default(self):
        assert classify_emphasis("A", HighlightState()) is Emphasis.DEFAULT

    def test_active_without_set_leaves_others_default(self):
        state = HighlightState(active_id="A")
        assert state.emphasis("A") is Emphasis.ACTIVE
        assert state.emphasis("B") is Emphasis.DEFAULT

    def test_active_outside_set(self):
        state = HighlightState(highlighted=frozenset({"B"}), active_id="A")
        assert state.emphasis("A") is Emphasis.ACTIVE
        assert state.emphasis("C") is Emphasis.FADED
