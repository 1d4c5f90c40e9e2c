from __future__ import annotations
from typing import Dict, List, Optional, Sequence, Tuple

from services.records import CountryRecord
from utils.attributes import AttributeKey

# Neutral value for "no discriminating information"
MIDPOINT = 0.5


def attribute_range(records: Sequence[CountryRecord], key: AttributeKey) -> Optional[Tuple[float, float]]:
    """(min, max) over defined finite numeric values of `key`; None if there are none."""
    values = [v for v in (r.numeric(key) for r in records) if v is not None]
    if not values:
        return None
    return min(values), max(values)


def normalize_values(records: Sequence[CountryRecord], key: AttributeKey) -> List[float]:
    """
    Min-max normalize `key` to [0, 1], one value per record in input order.
    - No defined values anywhere -> every record gets MIDPOINT
    - Zero span (max == min)     -> every record gets MIDPOINT
    - Missing/non-finite value   -> MIDPOINT
    """
    rng = attribute_range(records, key)
    if rng is None:
        return [MIDPOINT] * len(records)

    lo, hi = rng
    span = hi - lo
    out: List[float] = []
    for r in records:
        value = r.numeric(key)
        if value is None or span == 0:
            out.append(MIDPOINT)
        else:
            # clamp guards against float rounding just outside [0, 1]
            out.append(min(1.0, max(0.0, (value - lo) / span)))
    return out


def normalize(records: Sequence[CountryRecord], key: AttributeKey) -> Dict[str, float]:
    """Map record id -> normalized value in [0, 1] (see normalize_values)."""
    return {r.id: v for r, v in zip(records, normalize_values(records, key))}


def normalize_percent(records: Sequence[CountryRecord], key: AttributeKey, invert: bool = False) -> Dict[str, int]:
    """
    Integer 0..100 scale used by the radar chart.
    `invert` flips lower-is-better metrics so that larger is always better;
    the midpoint stays at 50 either way.
    """
    out: Dict[str, int] = {}
    for r, v in zip(records, normalize_values(records, key)):
        if invert:
            v = 1.0 - v
        out[r.id] = int(round(v * 100))
    return out
