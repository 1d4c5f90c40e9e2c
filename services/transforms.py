from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Tuple

from services.records import CountryRecord
from utils.attributes import AttributeKey, parse_key

Bounds = Tuple[float, float]


# ---------- Named ranges ----------

@dataclass(frozen=True)
class RangeBinding:
    """
    Binds a named UI range to an attribute key.
    `scale` converts UI units to attribute units (bounds are multiplied by it).
    """
    name: str
    key: AttributeKey
    label: str
    default: Bounds
    scale: float = 1.0
    step: float = 1.0


# Order is the order of the sliders in the filter panel
RANGE_BINDINGS: Tuple[RangeBinding, ...] = (
    RangeBinding("renewable_energy", AttributeKey.ELECTRICITY_ACCESS, "Electricity Access (%)", (0, 100)),
    # UI works in cents/kWh, the attribute is stored in $/kWh
    RangeBinding("electricity_cost", AttributeKey.ELECTRICITY_COST, "Electricity Cost (¢/kWh)", (0, 100), scale=0.01),
    RangeBinding("temperature", AttributeKey.MEAN_TEMP, "Mean Temperature (°C)", (-20, 50)),
    RangeBinding("gdp", AttributeKey.GDP_PER_CAPITA, "GDP per Capita (USD)", (0, 100000), step=1000),
    RangeBinding("internet_speed", AttributeKey.INTERNET_USERS, "Internet Users per 100", (0, 1000), step=5),
)

BINDINGS_BY_NAME: Dict[str, RangeBinding] = {b.name: b for b in RANGE_BINDINGS}

DEFAULT_METRIC = AttributeKey.ELECTRICITY_ACCESS


def _default_ranges() -> Dict[str, Bounds]:
    return {b.name: b.default for b in RANGE_BINDINGS}


# ---------- Filter state ----------

@dataclass(frozen=True)
class FilterState:
    """
    Session filter settings; replaced wholesale on every edit.
    `ranges` holds one inclusive (min, max) per named range in UI units.
    """
    ranges: Mapping[str, Bounds] = field(default_factory=_default_ranges)
    selected_metric: AttributeKey = DEFAULT_METRIC
    selected_countries: FrozenSet[str] = frozenset()

    def with_range(self, name: str, bounds: Sequence[float]) -> "FilterState":
        if name not in BINDINGS_BY_NAME:
            raise KeyError(f"Unknown range '{name}'")
        ranges = dict(self.ranges)
        ranges[name] = (float(bounds[0]), float(bounds[1]))
        return replace(self, ranges=ranges)

    def with_metric(self, metric: AttributeKey | str) -> "FilterState":
        parsed = parse_key(metric)
        return replace(self, selected_metric=parsed or self.selected_metric)

    def with_countries(self, ids: Iterable[str]) -> "FilterState":
        return replace(self, selected_countries=frozenset(ids))

    def attribute_bounds(self) -> List[Tuple[AttributeKey, Bounds]]:
        """Ranges converted to attribute units, in binding order."""
        out = []
        for b in RANGE_BINDINGS:
            if b.name not in self.ranges:
                continue
            lo, hi = self.ranges[b.name]
            out.append((b.key, (lo * b.scale, hi * b.scale)))
        return out

    # ---------- Store (JSON) round-trip ----------

    def to_store(self) -> Dict[str, Any]:
        return {
            "ranges": {name: list(bounds) for name, bounds in self.ranges.items()},
            "selected_metric": self.selected_metric.value,
            "selected_countries": sorted(self.selected_countries),
        }

    @classmethod
    def from_store(cls, data: Optional[Mapping[str, Any]]) -> "FilterState":
        if not data:
            return cls()
        ranges = _default_ranges()
        for name, bounds in (data.get("ranges") or {}).items():
            if name in BINDINGS_BY_NAME and bounds is not None and len(bounds) == 2:
                ranges[name] = (float(bounds[0]), float(bounds[1]))
        metric = parse_key(data.get("selected_metric")) or DEFAULT_METRIC
        countries = frozenset(data.get("selected_countries") or [])
        return cls(ranges=ranges, selected_metric=metric, selected_countries=countries)


# ---------- Range filter engine (pure, no Dash) ----------

def passes_range(record: CountryRecord, key: AttributeKey, bounds: Bounds) -> bool:
    """
    Inclusive range check. Undefined values pass every range.
    With min > max no defined value can pass.
    """
    value = record.numeric(key)
    if value is None:
        return True
    lo, hi = bounds
    return lo <= value <= hi


def filter_records(records: Sequence[CountryRecord], state: FilterState) -> List[CountryRecord]:
    """
    Stable filter: keep records passing every configured range and,
    if the allow-list is non-empty, whose id is in it.
    """
    checks = state.attribute_bounds()
    allow = state.selected_countries
    return [
        r for r in records
        if (not allow or r.id in allow)
        and all(passes_range(r, key, bounds) for key, bounds in checks)
    ]
