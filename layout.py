from dash import dcc, html

from services.attribute_selection import PARALLEL_DEFAULT, SCATTER_MATRIX_DEFAULT
from services.transforms import RANGE_BINDINGS, FilterState
from services.selection import HighlightState
from utils.attributes import AttributeKey
from utils.helpers import metric_options
from utils.ids import IDS


def _stat_card(title: str, value_id: str, subtitle: str):
    return html.Div([
        html.Div(title, className="stat-title"),
        html.Div("–", id=value_id, className="stat-value"),
        html.Div(subtitle, className="stat-subtitle"),
    ], className="stat-card")


def _range_control(binding):
    """Slider + distribution strip for one named range."""
    lo, hi = binding.default
    return html.Div([
        html.Label(binding.label, className="range-label"),
        html.Div(id=IDS.range_scent(binding.name), className="scent"),
        dcc.RangeSlider(
            id=IDS.range_slider(binding.name),
            min=lo, max=hi, step=binding.step,
            value=[lo, hi],
            allowCross=False,
            tooltip={"placement": "bottom", "always_visible": False},
            marks=None,
        ),
    ], className="range-control")


def _filter_panel():
    return html.Div([
        html.H2("Filters"),
        html.P(
            "Filters update all charts simultaneously. "
            "Countries without a value for a metric are never filtered out by its range.",
            className="help-text",
        ),
        html.Label("Metric for map colour and ranking"),
        dcc.Dropdown(
            id=IDS.METRIC,
            options=metric_options(),
            value=FilterState().selected_metric.value,
            clearable=False,
        ),
        *[_range_control(b) for b in RANGE_BINDINGS],
        html.Label("Limit to countries"),
        dcc.Dropdown(id=IDS.ALLOW_LIST, multi=True, placeholder="All countries"),
        html.Button("Reset filters", id=IDS.RESET_FILTERS, className="btn"),

        html.H3("Highlight countries"),
        dcc.Input(id=IDS.COUNTRY_SEARCH, type="text", placeholder="Search countries...", debounce=True),
        html.Div([
            html.Button("Select all visible", id=IDS.SELECT_VISIBLE, className="btn btn--small"),
            html.Button("Clear all", id=IDS.CLEAR_COUNTRIES, className="btn btn--small"),
        ], className="button-row"),
        html.Div(id=IDS.SELECTION_SUMMARY, className="help-text"),
        dcc.Checklist(id=IDS.COUNTRY_LIST, options=[], value=[], className="country-list"),
    ], className="filter-panel")


def _tutorial():
    return html.Div([
        html.Div([
            html.H2("Welcome"),
            html.Ol([
                html.Li("Use the filters on the left to narrow down candidate countries."),
                html.Li("Click a country on the map or a bar in the ranking to focus it."),
                html.Li("Click points or box-select in the scatter charts to highlight countries everywhere."),
                html.Li("Brush an axis in the parallel coordinates chart to highlight a range."),
            ]),
            html.Button("Got it", id=IDS.TUTORIAL_DISMISS, className="btn"),
        ], className="tutorial-card"),
    ], id=IDS.TUTORIAL, className="tutorial hidden")


def build_layout():
    """Return the full Dash layout (no callbacks here)."""
    return html.Div([
        html.Header([
            html.Div([
                html.H1("AI Datacenter Location Analytics"),
                html.P("Strategic site selection for sustainable and profitable AI infrastructure"),
            ]),
            html.Div([
                html.Button("Refresh data", id=IDS.REFRESH, className="btn"),
                html.Button("Show tutorial", id=IDS.TUTORIAL_OPEN, className="btn"),
            ], className="button-row"),
        ], className="app-header"),
        html.Div(id=IDS.NOTICE, className="notice hidden"),
        _tutorial(),

        # Stores: records, canonical filter/highlight state, per-chart attribute lists
        dcc.Store(id=IDS.DATA),
        dcc.Store(id=IDS.FILTER_STATE, data=FilterState().to_store()),
        dcc.Store(id=IDS.FILTERED_DATA),
        dcc.Store(id=IDS.HIGHLIGHT, data=HighlightState().to_store()),
        dcc.Store(id=IDS.PARALLEL_ATTRS, data=[k.value for k in PARALLEL_DEFAULT]),
        dcc.Store(id=IDS.SPLOM_ATTRS, data=[k.value for k in SCATTER_MATRIX_DEFAULT]),
        dcc.Store(id=IDS.PARALLEL_BRUSH, data={}),
        dcc.Store(id=IDS.TUTORIAL_SEEN, storage_type="local"),

        # Stats overview
        html.Div([
            _stat_card("Total countries analysed", IDS.STAT_TOTAL, "Loaded from database / CSV"),
            _stat_card("Filtered results", IDS.STAT_FILTERED, "Matching current filters"),
            _stat_card("Avg electricity access", IDS.STAT_ENERGY, "Across filtered countries"),
            _stat_card("Avg internet users per 100", IDS.STAT_INTERNET, "Higher means better connectivity"),
        ], className="stats-grid"),

        # Filters | Map | Detail
        html.Div([
            _filter_panel(),
            html.Div([dcc.Graph(id=IDS.FIG_MAP, className="chart-plot")], className="chart-card chart-card--wide"),
            html.Div([
                html.Div(id=IDS.DETAIL),
                html.Div([
                    html.Button("Close", id=IDS.CLOSE_DETAIL, className="btn btn--small"),
                    html.Button("Clear selection", id=IDS.CLEAR_SELECTION, className="btn btn--small"),
                ], className="button-row"),
            ], className="detail-panel"),
        ], className="main-grid"),

        html.H2("Visualisations"),
        html.Div([
            html.Div([dcc.Graph(id=IDS.FIG_TOP, className="chart-plot")], className="chart-card"),
            html.Div([dcc.Graph(id=IDS.FIG_AVERAGES, className="chart-plot")], className="chart-card"),

            # --- Parallel coordinates ---
            html.Div([
                html.H3("Parallel Coordinates"),
                html.Div([
                    dcc.Dropdown(id=IDS.PARALLEL_PICK, multi=True, options=metric_options(),
                                 value=[k.value for k in PARALLEL_DEFAULT],
                                 placeholder="Axes (at least 2)"),
                    dcc.Dropdown(id=IDS.PARALLEL_MOVE, placeholder="Axis to move"),
                    html.Button("◀", id=IDS.PARALLEL_LEFT, className="btn btn--small"),
                    html.Button("▶", id=IDS.PARALLEL_RIGHT, className="btn btn--small"),
                ], className="chart-controls"),
                dcc.Graph(id=IDS.FIG_PARALLEL, className="chart-plot"),
            ], className="chart-card chart-card--wide"),

            # --- Scatter matrix ---
            html.Div([
                html.H3("Scatter Matrix"),
                html.Div([
                    dcc.Dropdown(id=IDS.SPLOM_PICK, multi=True, options=metric_options(),
                                 value=[k.value for k in SCATTER_MATRIX_DEFAULT],
                                 placeholder="Attributes (at least 2)"),
                ], className="chart-controls"),
                dcc.Graph(id=IDS.FIG_SPLOM, className="chart-plot"),
            ], className="chart-card"),

            # --- Bubble scatter ---
            html.Div([
                html.H3("Scatter Plot"),
                html.Div([
                    dcc.Dropdown(id=IDS.BUBBLE_X, options=metric_options(),
                                 value=AttributeKey.GDP_PER_CAPITA.value, clearable=False),
                    dcc.Dropdown(id=IDS.BUBBLE_Y, options=metric_options(),
                                 value=AttributeKey.CO2_PER_CAPITA.value, clearable=False),
                    dcc.Dropdown(id=IDS.BUBBLE_SIZE, options=metric_options(),
                                 value=AttributeKey.ELECTRICITY_CAPACITY.value, placeholder="Bubble size (optional)"),
                    # value == ["ols"] means "on"
                    dcc.Checklist(
                        id=IDS.BUBBLE_TREND,
                        options=[{"label": "Trendline (OLS)", "value": "ols"}],
                        value=[],
                        style={"alignSelf": "center"},
                    ),
                ], className="chart-controls"),
                dcc.Graph(id=IDS.FIG_BUBBLE, className="chart-plot"),
            ], className="chart-card"),

            # --- Radar ---
            html.Div([dcc.Graph(id=IDS.FIG_RADAR, className="chart-plot")], className="chart-card"),
        ], className="charts-grid"),
    ])
