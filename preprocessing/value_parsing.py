from __future__ import annotations
from typing import Optional

import numpy as np
import pandas as pd

# ---- SETTINGS ----
EMPTY_TOKENS = ["", " ", "-", "NA", "N/A", "nan", "NaN", "null", "None"]
# Unit suffixes seen in Factbook exports
UNIT_TOKENS = ["%", "$", " USD", " usd", " sq km", " km2", " km"]


# ---- HELPERS ----
def normalize_empty_strings(df: pd.DataFrame) -> pd.DataFrame:
    """
    Replace common "empty" tokens in object/string columns with pd.NA.
    Keeps non-string dtypes intact.
    """
    empty_tokens = {t.strip() for t in EMPTY_TOKENS}

    def normalize_value(val):
        """Return pd.NA if value is a known empty token, else return it unchanged."""
        if isinstance(val, str) and val.strip() in empty_tokens:
            return pd.NA
        return val

    df = df.copy()
    text_columns = df.select_dtypes(include=["object", "string"]).columns
    for column in text_columns:
        df[column] = df[column].map(normalize_value)
    return df


def coerce_numeric(series: pd.Series) -> pd.Series:
    """
    Convert a column to float; unparseable cells become NaN (never raise).
    - strips thousands separators and unit suffixes ('1,234', '98.4%')
    """
    if pd.api.types.is_numeric_dtype(series):
        return series.astype(float)
    s = series.astype(str).str.replace(",", "", regex=False)
    for unit in UNIT_TOKENS:
        s = s.str.replace(unit, "", regex=False)
    s = s.str.strip()
    return pd.to_numeric(s, errors="coerce").astype(float)


def parse_number(value) -> Optional[float]:
    """Scalar version of coerce_numeric: finite float or None."""
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        return None
    num = coerce_numeric(pd.Series([value])).iloc[0]
    return float(num) if np.isfinite(num) else None


def parse_percent(value) -> Optional[float]:
    """
    Parse a percentage given either as a display string ('98.4%') or a number.
    Values outside 0..100 are treated as missing.
    """
    num = parse_number(value)
    if num is None or not (0 <= num <= 100):
        return None
    return num
