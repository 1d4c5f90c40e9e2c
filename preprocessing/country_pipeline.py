from __future__ import annotations
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

import pandas as pd
import pycountry

from preprocessing.coordinates import CountryLocation, resolve_location, validate
from preprocessing.value_parsing import coerce_numeric, normalize_empty_strings, parse_number, parse_percent
from services.records import AttributeValue, CountryRecord, check_value
from utils.attributes import ATTRIBUTES, AttributeKey, AttributeKind

logger = logging.getLogger(__name__)

# ---- SETTINGS ----
NAME_COLUMN = "Country"
GEO_COLUMN = "Geographic_Coordinates"
LAT_COLUMN = "latitude"
LON_COLUMN = "longitude"
CODE_COLUMNS = ["country_code", "Country_Code", "Code", "internet_country_code"]

# Fields stored as display percentages ("98.4%") and parsed up front
PERCENT_STRING_KEYS = {AttributeKey.LITERACY_RATE}


@dataclass
class IngestReport:
    """What ingestion recovered from, for logging and the UI notice."""
    rows: int = 0
    without_location: List[str] = field(default_factory=list)
    id_collisions: List[str] = field(default_factory=list)


# ---- HELPERS ----
def _clean_code(raw) -> Optional[str]:
    """Keep letters only; accept 2-3 letter codes, upper-cased."""
    if not isinstance(raw, str):
        return None
    cleaned = re.sub(r"[^A-Za-z]", "", raw)
    if 2 <= len(cleaned) <= 3:
        return cleaned.upper()
    return None


def _lookup_iso2(name: str) -> Optional[str]:
    """ISO alpha-2 for a country name via pycountry (exact, then fuzzy)."""
    try:
        return pycountry.countries.lookup(name).alpha_2
    except LookupError:
        pass
    try:
        results = pycountry.countries.search_fuzzy(name)
    except LookupError:
        return None
    return results[0].alpha_2 if results else None


def derive_id(name: str, *candidates: Optional[str]) -> str:
    """
    Stable record id: first valid 2-3 letter candidate code,
    else pycountry's alpha-2 for the name, else the first 3 letters of the name.
    """
    for c in candidates:
        code = _clean_code(c)
        if code:
            return code
    iso = _lookup_iso2(name)
    if iso:
        return iso
    return re.sub(r"[^A-Za-z]", "", name)[:3].upper() or name[:3].upper()


def _unique_id(base: str, taken: Set[str]) -> str:
    if base not in taken:
        return base
    suffix = 2
    while f"{base}-{suffix}" in taken:
        suffix += 1
    return f"{base}-{suffix}"


def _name_column(df: pd.DataFrame) -> str:
    # The first column identifies the country when no 'Country' header exists
    return NAME_COLUMN if NAME_COLUMN in df.columns else df.columns[0]


def _typed_columns(df: pd.DataFrame) -> Dict[AttributeKey, pd.Series]:
    """Parse every known attribute column to its declared kind."""
    out: Dict[AttributeKey, pd.Series] = {}
    for key, spec in ATTRIBUTES.items():
        if key.value not in df.columns:
            continue
        s = df[key.value]
        if key in PERCENT_STRING_KEYS:
            out[key] = s.map(parse_percent)
        elif spec.kind is AttributeKind.NUMERIC:
            out[key] = coerce_numeric(s)
        else:
            out[key] = s
    return out


# ---- MAIN FUNCTION ----
def build_records(
    df: pd.DataFrame,
    locations: Optional[Dict[str, CountryLocation]] = None,
    report: Optional[IngestReport] = None,
) -> List[CountryRecord]:
    """
    Turn a raw Factbook table into CountryRecords:
    1) Normalize empty tokens
    2) Parse known attribute columns (bad cells -> undefined, never fatal)
    3) Resolve location from the lookup table or Geographic_Coordinates
    4) Derive a unique-enough id
    Rows without a country name are dropped; unknown columns are ignored.
    """
    report = report if report is not None else IngestReport()
    locations = locations or {}
    if df is None or df.empty:
        return []

    df = normalize_empty_strings(df).reset_index(drop=True)
    name_col = _name_column(df)
    typed = _typed_columns(df)

    records: List[CountryRecord] = []
    taken: Set[str] = set()

    for i, raw_name in enumerate(df[name_col].tolist()):
        if not isinstance(raw_name, str) or not raw_name.strip():
            continue
        name = raw_name.strip()
        report.rows += 1

        geo_text = df.at[i, GEO_COLUMN] if GEO_COLUMN in df.columns else None
        location, lookup_code = resolve_location(name, locations, geo_text if isinstance(geo_text, str) else None)
        # Explicit coordinates (remote table) take precedence
        if LAT_COLUMN in df.columns and LON_COLUMN in df.columns:
            location = validate(parse_number(df.at[i, LAT_COLUMN]), parse_number(df.at[i, LON_COLUMN])) or location
        if location is None:
            logger.warning("No coordinates for %s; excluded from the map only", name)
            report.without_location.append(name)

        source_codes = [df.at[i, c] for c in CODE_COLUMNS if c in df.columns]
        base_id = derive_id(name, lookup_code, *source_codes)
        record_id = _unique_id(base_id, taken)
        if record_id != base_id:
            logger.warning("Id collision for %s: %s already used, using %s", name, base_id, record_id)
            report.id_collisions.append(name)
        taken.add(record_id)

        attributes: Dict[AttributeKey, AttributeValue] = {}
        for key, series in typed.items():
            value = check_value(key, series.iat[i])
            if value is not None:
                attributes[key] = value

        records.append(CountryRecord(id=record_id, name=name, location=location, attributes=attributes))

    logger.info(
        "Built %d records (%d without location, %d id collisions)",
        len(records), len(report.without_location), len(report.id_collisions),
    )
    return records
