"""
Tests for per-chart attribute selections.
"""

from services.attribute_selection import MIN_ATTRIBUTES, PARALLEL_DEFAULT, AttributeSelection
from utils.attributes import AttributeKey as K


def _sel(*keys):
    return AttributeSelection(tuple(keys))


class TestAttributeSelection:
    """Add/remove/reorder with a floor of two attributes."""

    def test_add_appends(self):
        sel = _sel(K.GDP_PER_CAPITA, K.INTERNET_USERS).add(K.CO2_PER_CAPITA)
        assert sel.keys == (K.GDP_PER_CAPITA, K.INTERNET_USERS, K.CO2_PER_CAPITA)

    def test_add_duplicate_or_unknown_is_noop(self):
        sel = _sel(K.GDP_PER_CAPITA, K.INTERNET_USERS)
        assert sel.add(K.GDP_PER_CAPITA) == sel
        assert sel.add("not_a_column") == sel

    def test_add_accepts_column_name(self):
        sel = _sel(K.GDP_PER_CAPITA, K.INTERNET_USERS).add("Median_Age")
        assert sel.keys[-1] is K.MEDIAN_AGE

    def test_remove(self):
        sel = _sel(K.GDP_PER_CAPITA, K.INTERNET_USERS, K.MEDIAN_AGE).remove(K.INTERNET_USERS)
        assert sel.keys == (K.GDP_PER_CAPITA, K.MEDIAN_AGE)

    def test_remove_at_minimum_is_noop(self):
        sel = _sel(K.GDP_PER_CAPITA, K.INTERNET_USERS)
        assert MIN_ATTRIBUTES == 2
        assert sel.remove(K.GDP_PER_CAPITA) == sel

    def test_move_is_permutation(self):
        sel = _sel(K.GDP_PER_CAPITA, K.INTERNET_USERS, K.MEDIAN_AGE)
        moved = sel.move(0, 2)
        assert moved.keys == (K.INTERNET_USERS, K.MEDIAN_AGE, K.GDP_PER_CAPITA)
        assert sorted(moved.keys) == sorted(sel.keys)

    def test_move_clamps_indices(self):
        sel = _sel(K.GDP_PER_CAPITA, K.INTERNET_USERS)
        assert sel.move(1, -10).keys == (K.INTERNET_USERS, K.GDP_PER_CAPITA)
        assert sel.move(0, 0) == sel

    def test_shift(self):
        sel = _sel(K.GDP_PER_CAPITA, K.INTERNET_USERS, K.MEDIAN_AGE)
        assert sel.shift(K.MEDIAN_AGE, -1).keys == (K.GDP_PER_CAPITA, K.MEDIAN_AGE, K.INTERNET_USERS)
        assert sel.shift(K.GDP_PER_CAPITA, -1) == sel
        assert sel.shift(K.CO2_PER_CAPITA, 1) == sel

    def test_sync_replaces_keys(self):
        sel = _sel(K.GDP_PER_CAPITA, K.INTERNET_USERS, K.MEDIAN_AGE)
        synced = sel.sync([K.GDP_PER_CAPITA.value, K.CO2_PER_CAPITA.value])
        assert synced.keys == (K.GDP_PER_CAPITA, K.CO2_PER_CAPITA)

    def test_sync_respects_minimum(self):
        sel = _sel(K.GDP_PER_CAPITA, K.INTERNET_USERS)
        assert len(sel.sync([]).keys) == 2

    def test_sync_short_list_keeps_earlier_keys(self):
        sel = _sel(K.GDP_PER_CAPITA, K.INTERNET_USERS, K.MEDIAN_AGE)
        assert sel.sync([K.MEDIAN_AGE]).keys == (K.INTERNET_USERS, K.MEDIAN_AGE)

    def test_store_round_trip(self):
        sel = _sel(K.MEDIAN_AGE, K.GDP_PER_CAPITA)
        assert AttributeSelection.from_store(sel.to_store(), PARALLEL_DEFAULT) == sel

    def test_from_store_falls_back_to_default(self):
        restored = AttributeSelection.from_store([K.MEDIAN_AGE.value, "junk"], PARALLEL_DEFAULT)
        assert restored.keys == PARALLEL_DEFAULT
        assert AttributeSelection.from_store(None, PARALLEL_DEFAULT).keys == PARALLEL_DEFAULT
