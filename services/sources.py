# -------------------------------------------------------------------
# Single responsibility:
# load country records: remote table first, bundled CSV as fallback.
# Failures never propagate past load_records().
# -------------------------------------------------------------------

from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd
import requests

from preprocessing.coordinates import load_location_table
from preprocessing.country_pipeline import build_records
from services.records import CountryRecord
from utils.attributes import AttributeKey
from utils.settings import Settings

logger = logging.getLogger(__name__)

SOURCE_REMOTE = "remote"
SOURCE_CSV = "csv"
SOURCE_NONE = "none"

# Remote table columns -> record columns
REMOTE_COLUMNS: Dict[str, str] = {
    "country": "Country",
    "country_code": "country_code",
    "latitude": "latitude",
    "longitude": "longitude",
    "renewable_energy_percent": AttributeKey.ELECTRICITY_ACCESS.value,
    "electricity_cost": AttributeKey.ELECTRICITY_COST.value,
    "gdp_per_capita": AttributeKey.GDP_PER_CAPITA.value,
    "internet_speed": AttributeKey.INTERNET_USERS.value,
    "average_temperature": AttributeKey.MEAN_TEMP.value,
    "water_availability_score": AttributeKey.WATER_AVAILABILITY.value,
    "natural_disaster_risk": AttributeKey.DISASTER_RISK.value,
    "corporate_tax_rate": AttributeKey.CORPORATE_TAX.value,
}


class DataSourceError(Exception):
    """A data source could not be read or returned nothing usable."""


@dataclass(frozen=True)
class LoadResult:
    records: List[CountryRecord]
    source: str
    notice: Optional[str] = None


# --- Internal helpers ---
def fetch_remote_rows(settings: Settings) -> List[Dict[str, Any]]:
    """GET every row of the remote table (PostgREST-style endpoint)."""
    url = f"{settings.remote_url.rstrip('/')}/rest/v1/{settings.remote_table}"
    headers = {
        "apikey": settings.remote_key,
        "Authorization": f"Bearer {settings.remote_key}",
        "Accept": "application/json",
    }
    try:
        response = requests.get(url, params={"select": "*"}, headers=headers, timeout=settings.request_timeout)
        response.raise_for_status()
        rows = response.json()
    except (requests.RequestException, ValueError) as exc:
        raise DataSourceError(f"Remote table unavailable: {exc}") from exc

    if not isinstance(rows, list):
        raise DataSourceError("Remote table returned an unexpected payload")
    return rows


def remote_rows_to_frame(rows: List[Dict[str, Any]]) -> pd.DataFrame:
    """Rename remote columns onto the flat-file schema; unknown columns pass through."""
    df = pd.DataFrame(rows)
    return df.rename(columns={k: v for k, v in REMOTE_COLUMNS.items() if k in df.columns})


def read_flat_file(path: Path) -> pd.DataFrame:
    """Read the Factbook CSV with every cell as text; parsing happens in the pipeline."""
    try:
        return pd.read_csv(path, dtype=str, keep_default_na=False, skipinitialspace=True)
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        raise DataSourceError(f"Cannot read {path}: {exc}") from exc


def load_remote(settings: Settings) -> List[CountryRecord]:
    rows = fetch_remote_rows(settings)
    if not rows:
        raise DataSourceError("Remote table returned no rows")
    locations = load_location_table(settings.locations_path)
    records = build_records(remote_rows_to_frame(rows), locations)
    if not records:
        raise DataSourceError("Remote table had no usable rows")
    return records


def load_flat_file(settings: Settings) -> List[CountryRecord]:
    df = read_flat_file(settings.data_path)
    locations = load_location_table(settings.locations_path)
    records = build_records(df, locations)
    if not records:
        raise DataSourceError(f"{settings.data_path} contained no country rows")
    return records


# ------ Public API ------
def load_records(settings: Settings) -> LoadResult:
    """
    One-shot load with silent fallback:
    1) remote table, if configured and non-empty
    2) bundled flat file
    3) nothing: empty result with a notice (never raises)
    """
    notice = None

    if settings.remote_enabled:
        try:
            records = load_remote(settings)
            logger.info("Loaded %d records from remote table", len(records))
            return LoadResult(records, SOURCE_REMOTE)
        except DataSourceError as exc:
            logger.warning("%s; falling back to %s", exc, settings.data_path)
            notice = "Remote data unavailable, showing bundled dataset."

    try:
        records = load_flat_file(settings)
        logger.info("Loaded %d records from %s", len(records), settings.data_path)
        return LoadResult(records, SOURCE_CSV, notice)
    except DataSourceError as exc:
        logger.error("No data source available: %s", exc)
        return LoadResult([], SOURCE_NONE, "No country metrics were found from the remote table or local CSV files.")
