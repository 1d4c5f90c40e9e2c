from __future__ import annotations
import re
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from services.normalize import normalize_values
from services.records import CountryRecord
from utils.attributes import AttributeKey

# restyleData key emitted by a parcoords axis brush, e.g. "dimensions[2].constraintrange"
_CONSTRAINT_RE = re.compile(r"^dimensions\[(\d+)\]\.constraintrange$")

Constraint = List[Tuple[float, float]]


# ---------- Plotly event payloads ----------

def ids_from_points(event: Optional[Dict[str, Any]]) -> List[str]:
    """
    Extract record ids from clickData/selectedData.
    Builders put the id first in customdata (scalar or list).
    """
    if not event:
        return []
    out: List[str] = []
    for point in event.get("points", []):
        cd = point.get("customdata")
        if isinstance(cd, (list, tuple)):
            cd = cd[0] if cd else None
        if cd is not None and str(cd) not in out:
            out.append(str(cd))
    return out


def first_id(event: Optional[Dict[str, Any]]) -> Optional[str]:
    ids = ids_from_points(event)
    return ids[0] if ids else None


# ---------- Parallel coordinates brushing ----------

def _as_intervals(value: Any) -> Optional[Constraint]:
    """Plotly sends [lo, hi], [[lo, hi], ...] or None (brush cleared)."""
    if not value:
        return None
    # restyle wraps values per trace: [[lo, hi]] for a single trace
    if isinstance(value[0], (list, tuple)) and value[0] and isinstance(value[0][0], (list, tuple)):
        value = value[0]
    if isinstance(value[0], (list, tuple)):
        return [(float(lo), float(hi)) for lo, hi in value if lo is not None and hi is not None]
    if len(value) == 2 and value[0] is not None and value[1] is not None:
        return [(float(value[0]), float(value[1]))]
    return None


def apply_constraint_event(
    constraints: Dict[str, Constraint],
    restyle: Optional[Sequence[Any]],
    keys: Sequence[AttributeKey],
) -> Dict[str, Constraint]:
    """
    Fold one parcoords restyleData event into the accumulated per-axis constraints.
    Axis indices are resolved to attribute keys so reordering axes keeps brushes.
    Returns a new dict.
    """
    out = dict(constraints or {})
    if not restyle or not isinstance(restyle[0], dict):
        return out

    for prop, value in restyle[0].items():
        m = _CONSTRAINT_RE.match(prop)
        if not m:
            continue
        idx = int(m.group(1))
        if idx >= len(keys):
            continue
        axis = keys[idx].value
        intervals = _as_intervals(value)
        if intervals:
            out[axis] = intervals
        else:
            out.pop(axis, None)
    return out


def ids_within_constraints(
    records: Sequence[CountryRecord],
    constraints: Dict[str, Constraint],
    keys: Iterable[AttributeKey],
) -> List[str]:
    """
    Ids whose normalized value lies inside every active axis constraint
    (inclusive, any interval per axis). Axes not plotted are ignored.
    """
    plotted = [k for k in keys if k.value in constraints]
    if not plotted:
        return []
    columns = {k: normalize_values(records, k) for k in plotted}
    out = []
    for i, r in enumerate(records):
        if all(
            any(lo <= columns[k][i] <= hi for lo, hi in constraints[k.value])
            for k in plotted
        ):
            out.append(r.id)
    return out


def prune_constraints(constraints: Dict[str, Constraint], keys: Iterable[AttributeKey]) -> Dict[str, Constraint]:
    """Drop constraints for axes no longer plotted."""
    live = {k.value for k in keys}
    return {axis: c for axis, c in (constraints or {}).items() if axis in live}
