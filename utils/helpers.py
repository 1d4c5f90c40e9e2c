from __future__ import annotations
from typing import Dict, Iterable, List, Optional

from utils.attributes import AttributeKey, CATEGORY_ORDER, keys_by_category, label_for, numeric_keys

# ---------- Columns & options ----------

def make_options(keys: Iterable[AttributeKey]) -> List[Dict[str, str]]:
    """Map attribute keys to Dash dropdown options (label = display name)."""
    return [{"label": label_for(k), "value": k.value} for k in keys]


def metric_options() -> List[Dict[str, str]]:
    """Numeric attributes grouped by category, labelled 'Category · Name'."""
    grouped = keys_by_category()
    numeric = set(numeric_keys())
    options = []
    for category in CATEGORY_ORDER:
        for k in grouped.get(category, []):
            if k in numeric:
                options.append({"label": f"{category} · {label_for(k)}", "value": k.value})
    return options


def triggered_prop(triggered: Optional[list]) -> Optional[str]:
    """'component.prop' of the first triggering input, if any."""
    if not triggered:
        return None
    return triggered[0].get("prop_id")


# ---------- Display helpers ----------

def format_average(value: Optional[float], suffix: str = "") -> str:
    """Stats-card text for a safe average; 'N/A' if undefined."""
    if value is None:
        return "N/A"
    return f"{value:.1f}{suffix}"
