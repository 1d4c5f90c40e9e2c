from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional


# Closed set of metric keys. Values are the CIA_finaldata.csv column names,
# so the flat file maps onto keys without a translation table.
class AttributeKey(str, Enum):
    GOVERNMENT_TYPE      = "Government_Type"
    CAPITAL              = "Capital"
    MEAN_TEMP            = "Mean_Temp"
    GDP_PPP              = "Real_GDP_PPP_billion_USD"
    GDP_PER_CAPITA       = "Real_GDP_per_Capita_USD"
    GDP_GROWTH           = "Real_GDP_Growth_Rate_percent"
    UNEMPLOYMENT         = "Unemployment_Rate_percent"
    YOUTH_UNEMPLOYMENT   = "Youth_Unemployment_Rate_percent"
    PUBLIC_DEBT          = "Public_Debt_percent_of_GDP"
    POPULATION_GROWTH    = "Population_Growth_Rate"
    MEDIAN_AGE           = "Median_Age"
    LITERACY_RATE        = "Total_Literacy_Rate"
    POPULATION_DENSITY   = "population_density"
    ELECTRICITY_ACCESS   = "electricity_access_percent"
    ELECTRICITY_CAPACITY = "electricity_capacity_per_capita"
    ELECTRICITY_COST     = "electricity_cost"
    INTERNET_USERS       = "internet_users_per_100"
    BROADBAND            = "broadband_subs_per_100"
    MOBILE               = "mobile_subs_per_100"
    ROAD_DENSITY         = "road_density_per_1000km2"
    RAIL_DENSITY         = "rail_density_per_1000km2"
    AIRPORTS             = "airports_per_million"
    CO2_PER_CAPITA       = "co2_per_capita_tonnes"
    CO2_PER_GDP          = "co2_per_gdp_tonnes_per_billion"
    FOSSIL_INTENSITY     = "fossil_intensity_index"
    WATER_SHARE          = "water_share"
    COASTLINE            = "coastline_per_1000km2"
    CORPORATE_TAX        = "corporate_tax_rate"
    DISASTER_RISK        = "natural_disaster_risk"
    WATER_AVAILABILITY   = "water_availability_score"

    def __str__(self) -> str:
        return self.value


class AttributeKind(str, Enum):
    NUMERIC = "numeric"
    TEXT    = "text"


@dataclass(frozen=True)
class AttributeSpec:
    key: AttributeKey
    label: str
    category: str
    kind: AttributeKind = AttributeKind.NUMERIC
    lower_is_better: bool = False
    unit: str = ""


_N = AttributeKind.NUMERIC
_T = AttributeKind.TEXT

# Category order is the order used by dropdowns and the detail panel.
CATEGORY_ORDER = [
    "Economic", "Demographics", "Energy", "Connectivity",
    "Transportation", "Environmental", "Geography", "General",
]

_SPECS: List[AttributeSpec] = [
    # Economic
    AttributeSpec(AttributeKey.GDP_PER_CAPITA, "GDP per Capita", "Economic", unit="USD"),
    AttributeSpec(AttributeKey.GDP_PPP, "GDP (PPP)", "Economic", unit="bn USD"),
    AttributeSpec(AttributeKey.GDP_GROWTH, "GDP Growth Rate %", "Economic", unit="%"),
    AttributeSpec(AttributeKey.UNEMPLOYMENT, "Unemployment Rate %", "Economic", lower_is_better=True, unit="%"),
    AttributeSpec(AttributeKey.YOUTH_UNEMPLOYMENT, "Youth Unemployment %", "Economic", lower_is_better=True, unit="%"),
    AttributeSpec(AttributeKey.PUBLIC_DEBT, "Public Debt % of GDP", "Economic", lower_is_better=True, unit="%"),
    AttributeSpec(AttributeKey.CORPORATE_TAX, "Corporate Tax Rate %", "Economic", lower_is_better=True, unit="%"),

    # Demographics
    AttributeSpec(AttributeKey.POPULATION_GROWTH, "Population Growth %", "Demographics", unit="%"),
    AttributeSpec(AttributeKey.MEDIAN_AGE, "Median Age", "Demographics", unit="years"),
    AttributeSpec(AttributeKey.POPULATION_DENSITY, "Population Density", "Demographics", unit="per km²"),
    AttributeSpec(AttributeKey.LITERACY_RATE, "Literacy Rate %", "Demographics", unit="%"),

    # Energy
    AttributeSpec(AttributeKey.ELECTRICITY_ACCESS, "Electricity Access %", "Energy", unit="%"),
    AttributeSpec(AttributeKey.ELECTRICITY_CAPACITY, "Electric Capacity per Capita", "Energy", unit="kW"),
    AttributeSpec(AttributeKey.ELECTRICITY_COST, "Electricity Cost", "Energy", lower_is_better=True, unit="$/kWh"),

    # Connectivity
    AttributeSpec(AttributeKey.INTERNET_USERS, "Internet Users per 100", "Connectivity"),
    AttributeSpec(AttributeKey.BROADBAND, "Broadband per 100", "Connectivity"),
    AttributeSpec(AttributeKey.MOBILE, "Mobile Subs per 100", "Connectivity"),

    # Transportation
    AttributeSpec(AttributeKey.ROAD_DENSITY, "Road Density", "Transportation", unit="km per 1000 km²"),
    AttributeSpec(AttributeKey.RAIL_DENSITY, "Rail Density", "Transportation", unit="km per 1000 km²"),
    AttributeSpec(AttributeKey.AIRPORTS, "Airports per Million", "Transportation"),

    # Environmental
    AttributeSpec(AttributeKey.CO2_PER_CAPITA, "CO₂ per Capita", "Environmental", lower_is_better=True, unit="t"),
    AttributeSpec(AttributeKey.CO2_PER_GDP, "CO₂ per GDP", "Environmental", lower_is_better=True, unit="t per bn USD"),
    AttributeSpec(AttributeKey.FOSSIL_INTENSITY, "Fossil Intensity Index", "Environmental", lower_is_better=True),
    AttributeSpec(AttributeKey.DISASTER_RISK, "Natural Disaster Risk", "Environmental", lower_is_better=True),

    # Geography
    AttributeSpec(AttributeKey.MEAN_TEMP, "Mean Temperature", "Geography", unit="°C"),
    AttributeSpec(AttributeKey.WATER_SHARE, "Water Share", "Geography"),
    AttributeSpec(AttributeKey.COASTLINE, "Coastline Density", "Geography"),
    AttributeSpec(AttributeKey.WATER_AVAILABILITY, "Water Availability", "Geography"),

    # General (text)
    AttributeSpec(AttributeKey.GOVERNMENT_TYPE, "Government Type", "General", kind=_T),
    AttributeSpec(AttributeKey.CAPITAL, "Capital", "General", kind=_T),
]

ATTRIBUTES: Dict[AttributeKey, AttributeSpec] = {s.key: s for s in _SPECS}


# ---------- Lookups ----------

def spec_for(key: AttributeKey | str) -> AttributeSpec:
    """Return the spec for a key (accepts the enum or its column name)."""
    return ATTRIBUTES[AttributeKey(key)]


def parse_key(value) -> Optional[AttributeKey]:
    """Map a raw string (e.g. a dropdown value) to a key; None if unknown."""
    if isinstance(value, AttributeKey):
        return value
    try:
        return AttributeKey(value)
    except ValueError:
        return None


def label_for(key: AttributeKey | str) -> str:
    parsed = parse_key(key)
    return ATTRIBUTES[parsed].label if parsed else str(key)


def numeric_keys() -> List[AttributeKey]:
    """All numeric keys, grouped by CATEGORY_ORDER."""
    return [s.key for s in _ordered_specs() if s.kind is AttributeKind.NUMERIC]


def keys_by_category() -> Dict[str, List[AttributeKey]]:
    grouped: Dict[str, List[AttributeKey]] = {}
    for s in _ordered_specs():
        grouped.setdefault(s.category, []).append(s.key)
    return grouped


def _ordered_specs() -> List[AttributeSpec]:
    rank = {c: i for i, c in enumerate(CATEGORY_ORDER)}
    # sorted() is stable, so declaration order is kept within a category
    return sorted(_SPECS, key=lambda s: rank.get(s.category, len(rank)))
