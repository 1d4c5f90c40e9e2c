from __future__ import annotations
from typing import Dict, List, Optional, Sequence

import plotly.express as px
import plotly.graph_objects as go

from services.attribute_selection import AttributeSelection
from services.brushing import Constraint
from services.normalize import attribute_range, normalize_percent, normalize_values
from services.records import CountryRecord, records_to_frame
from services.selection import Emphasis, HighlightState, classify_emphasis
from services.summary import radar_subjects, safe_average, top_by_metric
from utils.attributes import AttributeKey, label_for, spec_for

# ---------- Internal helpers ----------

# --- Common layout defaults ---
_DEFAULT_MARGIN = dict(l=0, r=0, t=60, b=0)

# --- Emphasis styling; every chart draws from this one table ---
EMPHASIS_STYLE: Dict[Emphasis, dict] = {
    Emphasis.ACTIVE:      dict(color="#f59e0b", size=16, opacity=1.0),
    Emphasis.HIGHLIGHTED: dict(color="#3b82f6", size=11, opacity=0.95),
    Emphasis.FADED:       dict(color="#9ca3af", size=7,  opacity=0.2),
    Emphasis.DEFAULT:     dict(color="#10b981", size=9,  opacity=0.8),
}
_EMPHASIS_ORDER = [Emphasis.DEFAULT, Emphasis.FADED, Emphasis.HIGHLIGHTED, Emphasis.ACTIVE]

# Parcoords cannot fade single lines; encode emphasis as a discrete colour index
_PARCOORDS_CODE = {Emphasis.FADED: 0, Emphasis.DEFAULT: 1, Emphasis.HIGHLIGHTED: 2, Emphasis.ACTIVE: 3}
_PARCOORDS_SCALE = [
    [0.00, "rgba(156,163,175,0.15)"], [0.25, "rgba(156,163,175,0.15)"],
    [0.25, EMPHASIS_STYLE[Emphasis.DEFAULT]["color"]], [0.50, EMPHASIS_STYLE[Emphasis.DEFAULT]["color"]],
    [0.50, EMPHASIS_STYLE[Emphasis.HIGHLIGHTED]["color"]], [0.75, EMPHASIS_STYLE[Emphasis.HIGHLIGHTED]["color"]],
    [0.75, EMPHASIS_STYLE[Emphasis.ACTIVE]["color"]], [1.00, EMPHASIS_STYLE[Emphasis.ACTIVE]["color"]],
]

# --- Chart tuning ---
TOP_N = 10
RADAR_MAX_COMPARE = 5
_MAP_ZOOM = 1
_MAP_ACTIVE_ZOOM = 3
_LABEL_DECIMALS = 2

# Radar axes (label, key); lower-is-better keys are inverted so outward is always better
RADAR_ATTRIBUTES = [
    ("Road", AttributeKey.ROAD_DENSITY),
    ("Airports", AttributeKey.AIRPORTS),
    ("Internet", AttributeKey.INTERNET_USERS),
    ("GDP", AttributeKey.GDP_PER_CAPITA),
    ("Unemp.", AttributeKey.UNEMPLOYMENT),
    ("Elec.", AttributeKey.ELECTRICITY_ACCESS),
    ("CO₂/GDP", AttributeKey.CO2_PER_GDP),
]

# Bars of the "metric averages" chart
AVERAGE_METRICS = [
    AttributeKey.ELECTRICITY_ACCESS,
    AttributeKey.ELECTRICITY_COST,
    AttributeKey.GDP_PER_CAPITA,
    AttributeKey.INTERNET_USERS,
]


def empty_figure(message: Optional[str] = None):
    """Blank placeholder; optional centered message."""
    fig = px.scatter()
    if message:
        fig.add_annotation(text=message, xref="paper", yref="paper", x=0.5, y=0.5, showarrow=False)
        fig.update_xaxes(visible=False)
        fig.update_yaxes(visible=False)
    return fig


def format_value(value, decimals: int = _LABEL_DECIMALS) -> str:
    """Human-readable value; 'N/A' for undefined."""
    if value is None:
        return "N/A"
    if isinstance(value, str):
        return value
    if abs(value) >= 1000:
        return f"{value:,.0f}"
    return f"{value:.{decimals}f}".rstrip("0").rstrip(".") or "0"


def _apply_title(fig, title: str, n: int):
    """Apply a centered title and an N subtext; keep minimal visual noise."""
    fig.update_layout(
        title=dict(text=f"{title}<br><sup>N = {n}</sup>", x=0.5, xanchor="center"),
        uniformtext_minsize=10,
    )
    return fig


def _finalize_figure(fig, title: str, n: int, *, margin: Optional[dict] = None, uirevision: Optional[str] = None):
    """
    One-stop finisher for all builders:
      - set margins
      - keep user zoom/pan across re-renders (uirevision)
      - set centered title with N
    """
    fig.update_layout(margin=(margin or _DEFAULT_MARGIN))
    if uirevision:
        fig.update_layout(uirevision=uirevision)
    return _apply_title(fig, title, n)


def _emphases(records: Sequence[CountryRecord], state: HighlightState) -> List[Emphasis]:
    return [classify_emphasis(r.id, state) for r in records]


def _style_arrays(emphases: Sequence[Emphasis]):
    """Per-point (colors, sizes, opacities) from the shared emphasis table."""
    colors = [EMPHASIS_STYLE[e]["color"] for e in emphases]
    sizes = [EMPHASIS_STYLE[e]["size"] for e in emphases]
    opacities = [EMPHASIS_STYLE[e]["opacity"] for e in emphases]
    return colors, sizes, opacities


def _hover_value(record: CountryRecord, key: AttributeKey) -> str:
    return format_value(record.get(key))


# ---------- Figure builders ----------

def build_map(records: Sequence[CountryRecord], metric: AttributeKey, state: HighlightState):
    """
    Scatter map of located records, coloured by the normalized metric.
    - records without a location are skipped (they stay in every other chart)
    - emphasis drives size and opacity (FADED points are nearly transparent)
    - the active record becomes the map centre
    """
    located = [r for r in records if r.location is not None]
    if not located:
        return empty_figure("No countries with coordinates")

    _, sizes, opacities = _style_arrays(_emphases(located, state))
    normalized = normalize_values(located, metric)

    rng = attribute_range(located, metric)
    colorbar = dict(title=label_for(metric), tickvals=[0, 1])
    if rng is not None:
        colorbar["ticktext"] = [format_value(rng[0]), format_value(rng[1])]
    else:
        colorbar["ticktext"] = ["N/A", "N/A"]

    label = label_for(metric)
    fig = go.Figure(go.Scattermap(
        lat=[r.latitude for r in located],
        lon=[r.longitude for r in located],
        customdata=[[r.id] for r in located],
        text=[r.name for r in located],
        hovertemplate=[
            f"<b>{r.name}</b><br>{label}: {_hover_value(r, metric)}<extra></extra>" for r in located
        ],
        mode="markers",
        marker=dict(
            size=sizes,
            opacity=opacities,
            color=normalized,
            colorscale="Viridis",
            cmin=0,
            cmax=1,
            colorbar=colorbar,
        ),
    ))

    center, zoom = dict(lat=20, lon=0), _MAP_ZOOM
    active = next((r for r in located if r.id == state.active_id), None)
    if active is not None:
        center, zoom = dict(lat=active.latitude, lon=active.longitude), _MAP_ACTIVE_ZOOM

    fig.update_layout(
        map=dict(style="open-street-map", center=center, zoom=zoom),
        height=500,
    )
    # Keep the viewport unless the active record changes
    fig.layout.map.uirevision = f"map-{state.active_id or ''}"

    return _finalize_figure(
        fig,
        title=f"Candidate locations by {label}",
        n=len(located),
        uirevision=f"map-{state.active_id or ''}",
    )


def build_parallel(
    records: Sequence[CountryRecord],
    selection: AttributeSelection,
    state: HighlightState,
    constraints: Optional[Dict[str, Constraint]] = None,
):
    """
    Parallel coordinates over the chart's own attribute list.
    Each axis is normalized independently to [0, 1]; tick labels show the raw range.
    Brushed ranges are re-applied so they survive re-renders.
    """
    if not records:
        return empty_figure("No countries match the filters")
    constraints = constraints or {}

    dimensions = []
    for key in selection.keys:
        rng = attribute_range(records, key)
        dim = dict(
            label=label_for(key),
            values=normalize_values(records, key),
            range=[0, 1],
            tickvals=[0, 0.5, 1],
            ticktext=[format_value(rng[0]), "", format_value(rng[1])] if rng else ["", "N/A", ""],
        )
        if key.value in constraints:
            intervals = [list(iv) for iv in constraints[key.value]]
            dim["constraintrange"] = intervals[0] if len(intervals) == 1 else intervals
        dimensions.append(dim)

    codes = [_PARCOORDS_CODE[e] for e in _emphases(records, state)]
    fig = go.Figure(go.Parcoords(
        line=dict(color=codes, colorscale=_PARCOORDS_SCALE, cmin=0, cmax=3, showscale=False),
        dimensions=dimensions,
    ))
    fig.update_layout(height=420)
    return _finalize_figure(
        fig,
        title="Multivariate profile (brush an axis to highlight)",
        n=len(records),
        margin=dict(l=60, r=60, t=80, b=30),
        uirevision="parallel",
    )


def build_scatter_matrix(records: Sequence[CountryRecord], selection: AttributeSelection, state: HighlightState):
    """Scatter matrix of raw values; box-select or click to highlight."""
    if not records:
        return empty_figure("No countries match the filters")

    df = records_to_frame(records, selection.keys)
    colors, sizes, opacities = _style_arrays(_emphases(records, state))
    fig = go.Figure(go.Splom(
        dimensions=[dict(label=label_for(k), values=df[k.value]) for k in selection.keys],
        customdata=[[r.id] for r in records],
        text=[r.name for r in records],
        hovertemplate="<b>%{text}</b><extra></extra>",
        diagonal_visible=False,
        showupperhalf=False,
        marker=dict(color=colors, size=[max(4, s - 3) for s in sizes], opacity=opacities,
                    line=dict(width=0.5, color="white")),
    ))
    n_dims = len(selection.keys)
    fig.update_layout(dragmode="select", height=max(360, 160 * (n_dims - 1)))
    return _finalize_figure(fig, title="Scatter matrix", n=len(records), uirevision="splom")


def build_bubble(
    records: Sequence[CountryRecord],
    x: AttributeKey,
    y: AttributeKey,
    size: Optional[AttributeKey],
    state: HighlightState,
    trendline: bool = False,
):
    """
    X vs Y with bubble size from a third metric and optional OLS trendline.
    Only records defining every plotted metric are shown.
    """
    keys = [k for k in (x, y, size) if k is not None]
    plotted = [r for r in records if all(r.numeric(k) is not None for k in keys)]
    if not plotted:
        return empty_figure("No countries define these metrics")

    df = records_to_frame(plotted, list(dict.fromkeys(keys)))
    df["emphasis"] = [e.value for e in _emphases(plotted, state)]
    size_col = None
    if size is not None:
        size_col = "__size"
        df[size_col] = df[size.value].clip(lower=0)

    fig = px.scatter(
        df,
        x=x.value,
        y=y.value,
        size=size_col,
        size_max=30,
        color="emphasis",
        color_discrete_map={e.value: EMPHASIS_STYLE[e]["color"] for e in Emphasis},
        category_orders={"emphasis": [e.value for e in _EMPHASIS_ORDER]},
        hover_name="name",
        custom_data=["id"],
        labels={x.value: label_for(x), y.value: label_for(y)},
        opacity=0.85,
        trendline="ols" if trendline and len(plotted) >= 2 else None,
        trendline_scope="overall",
        trendline_color_override="#111827",
    )
    fig.update_layout(legend_title_text="", dragmode="select")
    title = f"{label_for(y)} vs {label_for(x)}" + (f" (size: {label_for(size)})" if size else "")
    return _finalize_figure(fig, title=title, n=len(plotted), uirevision="bubble")


def build_top_bar(records: Sequence[CountryRecord], metric: AttributeKey, state: HighlightState, n: int = TOP_N):
    """Top-n ranking by the selected metric; click a bar to focus the country."""
    top = top_by_metric(records, metric, n)
    if not top:
        return empty_figure(f"No values for {label_for(metric)}")

    colors, _, opacities = _style_arrays(_emphases(top, state))
    # Reverse so the highest value is drawn at the top of a horizontal bar chart
    top = list(reversed(top))
    colors, opacities = list(reversed(colors)), list(reversed(opacities))
    fig = go.Figure(go.Bar(
        x=[r.numeric(metric) for r in top],
        y=[r.name for r in top],
        orientation="h",
        customdata=[[r.id] for r in top],
        marker=dict(color=colors, opacity=opacities),
        hovertemplate="%{y}: %{x:,.2f}<extra></extra>",
        cliponaxis=False,
    ))
    fig.update_layout(height=max(320, 32 * len(top) + 100))
    fig.update_xaxes(title_text=label_for(metric), rangemode="tozero")
    return _finalize_figure(
        fig,
        title=f"Top {len(top)} by {label_for(metric)}",
        n=len(records),
        margin=dict(l=10, r=20, t=60, b=40),
    )


def build_averages(records: Sequence[CountryRecord]):
    """Mean of headline metrics across the filtered set (missing values ignored)."""
    if not records:
        return empty_figure("No countries match the filters")
    labels, values, texts = [], [], []
    for key in AVERAGE_METRICS:
        avg = safe_average(records, key)
        unit = spec_for(key).unit
        labels.append(label_for(key) + (f" ({unit})" if unit else ""))
        values.append(avg if avg is not None else 0)
        texts.append(format_value(avg))
    fig = go.Figure(go.Bar(x=labels, y=values, text=texts, textposition="outside", cliponaxis=False))
    fig.update_yaxes(rangemode="tozero", type="log" if _spans_orders(values) else "linear")
    return _finalize_figure(fig, title="Metric averages (filtered)", n=len(records))


def _spans_orders(values: Sequence[float]) -> bool:
    """True if positive values differ by more than three orders of magnitude."""
    pos = [v for v in values if v and v > 0]
    return len(pos) >= 2 and max(pos) / min(pos) > 1000


def build_radar(records: Sequence[CountryRecord], state: HighlightState):
    """
    Radar comparison on a 0..100 scale computed over the filtered set.
    Shows the active and highlighted countries, else the top 3 by GDP per capita.
    """
    subjects = radar_subjects(records, state, max_compare=RADAR_MAX_COMPARE)
    if not subjects:
        return empty_figure("No countries to compare")

    axes = [label for label, _ in RADAR_ATTRIBUTES]
    scores = {
        key: normalize_percent(records, key, invert=spec_for(key).lower_is_better)
        for _, key in RADAR_ATTRIBUTES
    }

    fig = go.Figure()
    for r in subjects:
        values = [scores[key][r.id] for _, key in RADAR_ATTRIBUTES]
        emphasis = classify_emphasis(r.id, state)
        fig.add_trace(go.Scatterpolar(
            r=values + values[:1],
            theta=axes + axes[:1],
            name=r.name,
            customdata=[[r.id]] * (len(values) + 1),
            fill="toself",
            opacity=0.9 if emphasis is Emphasis.ACTIVE else 0.6,
            line=dict(width=3 if emphasis is Emphasis.ACTIVE else 1.5),
            hovertemplate="%{theta}: %{r}<extra>" + r.name + "</extra>",
        ))
    fig.update_layout(polar=dict(radialaxis=dict(range=[0, 100], visible=True)), showlegend=True)
    return _finalize_figure(fig, title="Country comparison (0-100, higher is better)", n=len(subjects))

