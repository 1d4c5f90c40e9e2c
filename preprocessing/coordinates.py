from __future__ import annotations
import logging
import re
from pathlib import Path
from typing import Dict, NamedTuple, Optional, Tuple

import pandas as pd

from preprocessing.value_parsing import parse_number

logger = logging.getLogger(__name__)

# CIA strings look like "33 00 N, 65 00 E" or
# "metropolitan France: 46 00 N, 2 00 E; French Guiana: ..." -> first pair wins
_DMS_RE = re.compile(
    r"(\d{1,2})\s+(\d{1,2})\s*([NS])[^0-9A-Z]+(\d{1,3})\s+(\d{1,2})\s*([EW])",
    re.IGNORECASE,
)


class CountryLocation(NamedTuple):
    latitude: float
    longitude: float
    code: Optional[str] = None


# ------ Public API ------
def parse_dms_pair(text: Optional[str]) -> Optional[Tuple[float, float]]:
    """
    Parse the first 'DD MM N, DDD MM E' pair into decimal (lat, lon).
    Returns None if nothing usable is found.
    """
    if not isinstance(text, str) or not text.strip():
        return None
    m = _DMS_RE.search(text)
    if not m:
        return None
    lat_deg, lat_min, lat_dir, lon_deg, lon_min, lon_dir = m.groups()

    lat = int(lat_deg) + int(lat_min) / 60
    lon = int(lon_deg) + int(lon_min) / 60
    if lat_dir.upper() == "S":
        lat = -lat
    if lon_dir.upper() == "W":
        lon = -lon
    return validate(lat, lon)


def validate(lat, lon) -> Optional[Tuple[float, float]]:
    """Ensure coordinates are within valid WGS84 range."""
    if not isinstance(lat, (int, float)) or not isinstance(lon, (int, float)):
        return None
    if -90 <= lat <= 90 and -180 <= lon <= 180:
        return float(lat), float(lon)
    return None


def name_key(name: str) -> str:
    """Join key for country names across tables."""
    return str(name).strip().upper()


def load_location_table(path: Path) -> Dict[str, CountryLocation]:
    """
    Read the companion lookup (Country, Code, Latitude, Longitude).
    Rows with invalid coordinates are skipped; a missing or unreadable file yields {}.
    """
    path = Path(path)
    if not path.exists():
        logger.warning("Location table %s not found; map positions rely on Geographic_Coordinates", path)
        return {}

    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
    except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        logger.warning("Could not read location table %s (%s); map positions rely on Geographic_Coordinates", path, e)
        return {}

    table: Dict[str, CountryLocation] = {}
    for row in df.to_dict(orient="records"):
        name = row.get("Country", "")
        if not name.strip():
            continue
        coords = validate(parse_number(row.get("Latitude")), parse_number(row.get("Longitude")))
        if coords is None:
            logger.warning("Skipping location row for %s: invalid coordinates", name)
            continue
        code = (row.get("Code") or "").strip() or None
        table[name_key(name)] = CountryLocation(coords[0], coords[1], code)
    return table


def resolve_location(
    name: str,
    lookup: Dict[str, CountryLocation],
    geo_text: Optional[str] = None,
) -> Tuple[Optional[Tuple[float, float]], Optional[str]]:
    """
    Resolve (location, code) for a country:
    1) companion lookup table by name
    2) CIA Geographic_Coordinates string
    Either part may be None.
    """
    hit = lookup.get(name_key(name))
    if hit is not None:
        return (hit.latitude, hit.longitude), hit.code
    return parse_dms_pair(geo_text), None
