from __future__ import annotations
import math
import numbers
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

import pandas as pd

from utils.attributes import AttributeKey, AttributeKind, parse_key, spec_for

AttributeValue = Union[float, str]
Location = Tuple[float, float]


@dataclass(frozen=True)
class CountryRecord:
    """
    One country's attribute bundle. Created once at load time, never mutated.
    A key missing from `attributes` means the value is undefined (not zero).
    """
    id: str
    name: str
    location: Optional[Location] = None
    attributes: Mapping[AttributeKey, AttributeValue] = field(default_factory=dict)

    def __post_init__(self):
        # Freeze the mapping so the record behaves as a value object
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    def get(self, key: AttributeKey | str) -> Optional[AttributeValue]:
        parsed = parse_key(key)
        if parsed is None:
            return None
        return self.attributes.get(parsed)

    def numeric(self, key: AttributeKey | str) -> Optional[float]:
        """Defined finite numeric value for `key`, else None."""
        return numeric_value(self.get(key))

    @property
    def latitude(self) -> Optional[float]:
        return self.location[0] if self.location else None

    @property
    def longitude(self) -> Optional[float]:
        return self.location[1] if self.location else None

    # ---------- Store (JSON) round-trip ----------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "attributes": {k.value: v for k, v in self.attributes.items()},
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CountryRecord":
        lat, lon = data.get("latitude"), data.get("longitude")
        location = (float(lat), float(lon)) if lat is not None and lon is not None else None
        attributes: Dict[AttributeKey, AttributeValue] = {}
        for raw_key, value in (data.get("attributes") or {}).items():
            key = parse_key(raw_key)
            if key is None or value is None:
                continue
            attributes[key] = value
        return cls(id=str(data["id"]), name=str(data["name"]), location=location, attributes=attributes)


def numeric_value(value: Any) -> Optional[float]:
    """Return a finite float, or None for absent/text/NaN/inf values."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        v = float(value)
        return v if math.isfinite(v) else None
    return None


def check_value(key: AttributeKey, value: Any) -> Optional[AttributeValue]:
    """
    Validate a value against the key's declared kind:
    numeric keys keep finite numbers only, text keys keep non-empty strings.
    Anything else is treated as undefined.
    """
    kind = spec_for(key).kind
    if kind is AttributeKind.NUMERIC:
        return numeric_value(value)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


# ---------- Record store helpers ----------

def records_to_store(records: Iterable[CountryRecord]) -> List[Dict[str, Any]]:
    """Serialize records for a dcc.Store."""
    return [r.to_dict() for r in records]


def records_from_store(data: Optional[List[Dict[str, Any]]]) -> List[CountryRecord]:
    """Rebuild records from a dcc.Store payload (None -> empty list)."""
    if not data:
        return []
    return [CountryRecord.from_dict(row) for row in data]


def records_to_frame(records: Iterable[CountryRecord], keys: Iterable[AttributeKey] = ()) -> pd.DataFrame:
    """
    Flatten records into a DataFrame for plotting:
    columns id, name, latitude, longitude + one column per requested key.
    Undefined values become NaN (numeric) or <NA>.
    """
    keys = list(keys)
    rows = []
    for r in records:
        row = {"id": r.id, "name": r.name, "latitude": r.latitude, "longitude": r.longitude}
        for k in keys:
            row[k.value] = r.get(k)
        rows.append(row)
    columns = ["id", "name", "latitude", "longitude"] + [k.value for k in keys]
    df = pd.DataFrame(rows, columns=columns)
    for k in keys:
        if spec_for(k).kind is AttributeKind.NUMERIC:
            df[k.value] = pd.to_numeric(df[k.value], errors="coerce")
    return df


def index_by_id(records: Iterable[CountryRecord]) -> Dict[str, CountryRecord]:
    """id -> record; on collisions the first record wins."""
    out: Dict[str, CountryRecord] = {}
    for r in records:
        out.setdefault(r.id, r)
    return out
