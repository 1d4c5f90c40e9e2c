from __future__ import annotations
from typing import List, Optional, Sequence

import numpy as np

from services.records import CountryRecord
from services.selection import HighlightState
from utils.attributes import AttributeKey

# ---------- Aggregates over the filtered set (pure, no Dash) ----------

def safe_average(records: Sequence[CountryRecord], key: AttributeKey) -> Optional[float]:
    """Mean of defined values; None when no record defines `key`."""
    values = [v for v in (r.numeric(key) for r in records) if v is not None]
    if not values:
        return None
    return float(np.mean(values))


def top_by_metric(records: Sequence[CountryRecord], key: AttributeKey, n: int = 10) -> List[CountryRecord]:
    """Records with a defined value for `key`, highest first, at most n."""
    ranked = [r for r in records if r.numeric(key) is not None]
    # sorted() is stable: ties keep input order
    ranked = sorted(ranked, key=lambda r: r.numeric(key), reverse=True)
    return ranked[:n]


def distribution_bins(records: Sequence[CountryRecord], key: AttributeKey, bins: int = 10) -> List[int]:
    """
    Equal-width histogram counts for the filter panel's distribution bars.
    Empty list if nothing is defined; zero span puts everything in the first bin.
    """
    values = np.array([v for v in (r.numeric(key) for r in records) if v is not None], dtype=float)
    if values.size == 0:
        return []
    lo, hi = values.min(), values.max()
    counts = [0] * bins
    if hi == lo:
        counts[0] = int(values.size)
        return counts
    width = (hi - lo) / bins
    idx = np.minimum(((values - lo) / width).astype(int), bins - 1)
    for i in idx:
        counts[int(i)] += 1
    return counts


def radar_subjects(
    records: Sequence[CountryRecord],
    state: HighlightState,
    max_compare: int = 5,
    fallback_key: AttributeKey = AttributeKey.GDP_PER_CAPITA,
    fallback_n: int = 3,
) -> List[CountryRecord]:
    """
    Records shown on the radar chart:
    active record first, then highlighted records (up to max_compare in total);
    with nothing selected, the top `fallback_n` by `fallback_key`.
    """
    by_id = {r.id: r for r in records}
    chosen: List[CountryRecord] = []
    if state.active_id in by_id:
        chosen.append(by_id[state.active_id])
    for rid in sorted(state.highlighted):
        if len(chosen) >= max_compare:
            break
        if rid in by_id and rid != state.active_id:
            chosen.append(by_id[rid])
    if chosen:
        return chosen
    return top_by_metric(records, fallback_key, fallback_n)


def search_records(records: Sequence[CountryRecord], query: Optional[str]) -> List[CountryRecord]:
    """Case-insensitive name search, sorted by name (country checklist)."""
    q = (query or "").strip().lower()
    hits = [r for r in records if q in r.name.lower()]
    return sorted(hits, key=lambda r: r.name.lower())
