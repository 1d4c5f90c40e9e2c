from dash import Dash, Input, Output, html

from utils.ids import IDS
from utils.attributes import CATEGORY_ORDER, AttributeKey, keys_by_category, label_for, parse_key, spec_for
from utils.helpers import format_average
from services.attribute_selection import PARALLEL_DEFAULT, SCATTER_MATRIX_DEFAULT, AttributeSelection
from services.figures import (
    build_averages,
    build_bubble,
    build_map,
    build_parallel,
    build_radar,
    build_scatter_matrix,
    build_top_bar,
    empty_figure,
    format_value,
)
from services.records import CountryRecord, index_by_id, records_from_store
from services.selection import HighlightState
from services.summary import safe_average
from services.transforms import FilterState


# ---------- Helpers ----------

def _detail_children(record: CountryRecord):
    """Attribute listing of one record, grouped by category; undefined values omitted."""
    sections = [html.H2(record.name), html.Div(f"Code: {record.id}", className="detail-code")]
    if record.location is not None:
        sections.append(html.Div(f"Location: {record.latitude:.2f}, {record.longitude:.2f}", className="detail-code"))
    grouped = keys_by_category()
    for category in CATEGORY_ORDER:
        rows = []
        for key in grouped.get(category, []):
            value = record.get(key)
            if value is None:
                continue
            unit = spec_for(key).unit
            rows.append(html.Li([
                html.Span(label_for(key), className="detail-label"),
                html.Span(format_value(value) + (f" {unit}" if unit else ""), className="detail-value"),
            ]))
        if rows:
            sections.append(html.H4(category))
            sections.append(html.Ul(rows, className="detail-list"))
    return sections


# ---------- Public API ----------
def register_charts_callbacks(app: Dash) -> None:
    """
    Register lightweight callbacks;
    all figure building is in services.figures;
    all global filtering is done in the filters callbacks.
    Every chart reads the filtered records and the shared highlight state.
    """

    # STATS: totals and safe averages
    @app.callback(
        Output(IDS.STAT_TOTAL, "children"),
        Output(IDS.STAT_FILTERED, "children"),
        Output(IDS.STAT_ENERGY, "children"),
        Output(IDS.STAT_INTERNET, "children"),
        Input(IDS.DATA, "data"),
        Input(IDS.FILTERED_DATA, "data"),
    )
    def _render_stats(data, filtered_data):
        filtered = records_from_store(filtered_data)
        return (
            str(len(data or [])),
            str(len(filtered)),
            format_average(safe_average(filtered, AttributeKey.ELECTRICITY_ACCESS), "%"),
            format_average(safe_average(filtered, AttributeKey.INTERNET_USERS)),
        )

    # MAP: filtered records coloured by the selected metric
    @app.callback(
        Output(IDS.FIG_MAP, "figure"),
        Input(IDS.FILTERED_DATA, "data"),
        Input(IDS.FILTER_STATE, "data"),
        Input(IDS.HIGHLIGHT, "data"),
    )
    def _render_map(filtered_data, filter_data, highlight_data):
        records = records_from_store(filtered_data)
        if not records:
            return empty_figure("No countries match the filters")
        metric = FilterState.from_store(filter_data).selected_metric
        return build_map(records, metric, HighlightState.from_store(highlight_data))

    # DETAIL: active record; close/clear buttons are handled by the selection owner
    @app.callback(
        Output(IDS.DETAIL, "children"),
        Input(IDS.DATA, "data"),
        Input(IDS.HIGHLIGHT, "data"),
    )
    def _render_detail(data, highlight_data):
        state = HighlightState.from_store(highlight_data)
        record = index_by_id(records_from_store(data)).get(state.active_id)
        if record is None:
            return html.P("Click a country on the map or in a chart to see its details.", className="help-text")
        return _detail_children(record)

    # TOP-N and AVERAGES
    @app.callback(
        Output(IDS.FIG_TOP, "figure"),
        Output(IDS.FIG_AVERAGES, "figure"),
        Input(IDS.FILTERED_DATA, "data"),
        Input(IDS.FILTER_STATE, "data"),
        Input(IDS.HIGHLIGHT, "data"),
    )
    def _render_rankings(filtered_data, filter_data, highlight_data):
        records = records_from_store(filtered_data)
        metric = FilterState.from_store(filter_data).selected_metric
        state = HighlightState.from_store(highlight_data)
        return build_top_bar(records, metric, state), build_averages(records)

    # PARALLEL COORDINATES: own attribute list + accumulated brush
    @app.callback(
        Output(IDS.FIG_PARALLEL, "figure"),
        Input(IDS.FILTERED_DATA, "data"),
        Input(IDS.PARALLEL_ATTRS, "data"),
        Input(IDS.HIGHLIGHT, "data"),
        Input(IDS.PARALLEL_BRUSH, "data"),
    )
    def _render_parallel(filtered_data, attrs, highlight_data, brush):
        selection = AttributeSelection.from_store(attrs, PARALLEL_DEFAULT)
        return build_parallel(
            records_from_store(filtered_data),
            selection,
            HighlightState.from_store(highlight_data),
            brush or {},
        )

    # SCATTER MATRIX: own attribute list
    @app.callback(
        Output(IDS.FIG_SPLOM, "figure"),
        Input(IDS.FILTERED_DATA, "data"),
        Input(IDS.SPLOM_ATTRS, "data"),
        Input(IDS.HIGHLIGHT, "data"),
    )
    def _render_splom(filtered_data, attrs, highlight_data):
        selection = AttributeSelection.from_store(attrs, SCATTER_MATRIX_DEFAULT)
        return build_scatter_matrix(
            records_from_store(filtered_data), selection, HighlightState.from_store(highlight_data)
        )

    # BUBBLE: x/y/size selectors + optional OLS trendline
    @app.callback(
        Output(IDS.FIG_BUBBLE, "figure"),
        Input(IDS.FILTERED_DATA, "data"),
        Input(IDS.BUBBLE_X, "value"),
        Input(IDS.BUBBLE_Y, "value"),
        Input(IDS.BUBBLE_SIZE, "value"),
        Input(IDS.BUBBLE_TREND, "value"),
        Input(IDS.HIGHLIGHT, "data"),
    )
    def _render_bubble(filtered_data, x_col, y_col, size_col, trend, highlight_data):
        x, y = parse_key(x_col), parse_key(y_col)
        if x is None or y is None:
            return empty_figure("Select X and Y")
        return build_bubble(
            records_from_store(filtered_data),
            x,
            y,
            parse_key(size_col),
            HighlightState.from_store(highlight_data),
            trendline="ols" in (trend or []),
        )

    # RADAR: active + highlighted, else top by GDP
    @app.callback(
        Output(IDS.FIG_RADAR, "figure"),
        Input(IDS.FILTERED_DATA, "data"),
        Input(IDS.HIGHLIGHT, "data"),
    )
    def _render_radar(filtered_data, highlight_data):
        return build_radar(records_from_store(filtered_data), HighlightState.from_store(highlight_data))
