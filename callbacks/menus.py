# -------------------------------------------------------------------
# Single responsibility: all "menus & selectors" related callbacks:
#   - Country checklist (search) and allow-list options
#   - Per-chart attribute lists (parallel coordinates, scatter matrix)
#   - Distribution strips above the range sliders
# -------------------------------------------------------------------

from __future__ import annotations
from typing import List

from dash import Input, Output, State, ctx, html

from utils.ids import IDS
from utils.attributes import label_for
from utils.helpers import make_options
from services.attribute_selection import PARALLEL_DEFAULT, SCATTER_MATRIX_DEFAULT, AttributeSelection
from services.records import records_from_store
from services.selection import HighlightState
from services.summary import distribution_bins, search_records
from services.transforms import RANGE_BINDINGS, FilterState

# --- Local config for menu behaviour ---
SCENT_BINS = 10
_SCENT_HEIGHT = 24      # px of the tallest bar


# ---------- Internal helper ----------
def _scent_bars(counts: List[int], in_range: List[bool], label: str):
    """Tiny bar strip; bins outside the current range are dimmed."""
    if not counts:
        return html.Div(f"No {label} data", className="scent-empty")
    peak = max(counts) or 1
    return [
        html.Div(
            className="scent-bar" if inside else "scent-bar scent-bar--out",
            title=str(c),
            style={"height": f"{max(1, round(_SCENT_HEIGHT * c / peak))}px"},
        )
        for c, inside in zip(counts, in_range)
    ]


def _bins_in_range(records, binding, bounds, bins: int) -> List[bool]:
    """Whether each equal-width bin overlaps the slider range (attribute units)."""
    values = [v for v in (r.numeric(binding.key) for r in records) if v is not None]
    if not values:
        return []
    lo, hi = min(values), max(values)
    width = (hi - lo) / bins if hi > lo else 0
    b_lo, b_hi = bounds[0] * binding.scale, bounds[1] * binding.scale
    out = []
    for i in range(bins):
        start = lo + i * width
        end = start + width
        out.append(end >= b_lo and start <= b_hi)
    return out


# ---------- Public API ----------

def register(app):
    """
    Register all "menus" callbacks on the given Dash app instance.
    """

    # --- A) Country checklist: searchable list over the filtered set ---
    @app.callback(
        Output(IDS.COUNTRY_LIST, "options"),
        Output(IDS.SELECTION_SUMMARY, "children"),
        Input(IDS.FILTERED_DATA, "data"),
        Input(IDS.COUNTRY_SEARCH, "value"),
        Input(IDS.HIGHLIGHT, "data"),
    )
    def fill_country_list(filtered, query, highlight_data):
        records = records_from_store(filtered)
        hits = search_records(records, query)
        state = HighlightState.from_store(highlight_data)
        options = [{"label": r.name, "value": r.id} for r in hits]
        summary = f"{len(state.highlighted)} highlighted · {len(hits)} of {len(records)} shown"
        return options, summary

    # --- A) Allow-list options: every loaded country ---
    @app.callback(
        Output(IDS.ALLOW_LIST, "options"),
        Input(IDS.DATA, "data"),
    )
    def fill_allow_list(data):
        records = sorted(records_from_store(data), key=lambda r: r.name.lower())
        return [{"label": r.name, "value": r.id} for r in records]

    # --- B) Parallel coordinates axes: multi-select + move left/right ---
    @app.callback(
        Output(IDS.PARALLEL_ATTRS, "data"),
        Output(IDS.PARALLEL_PICK, "value"),
        Output(IDS.PARALLEL_MOVE, "options"),
        Input(IDS.PARALLEL_PICK, "value"),
        Input(IDS.PARALLEL_LEFT, "n_clicks"),
        Input(IDS.PARALLEL_RIGHT, "n_clicks"),
        State(IDS.PARALLEL_MOVE, "value"),
        State(IDS.PARALLEL_ATTRS, "data"),
    )
    def update_parallel_axes(picked, _left, _right, to_move, current):
        selection = AttributeSelection.from_store(current, PARALLEL_DEFAULT)
        if ctx.triggered_id == IDS.PARALLEL_LEFT and to_move:
            selection = selection.shift(to_move, -1)
        elif ctx.triggered_id == IDS.PARALLEL_RIGHT and to_move:
            selection = selection.shift(to_move, 1)
        elif picked is not None:
            # removals below the minimum are refused; the dropdown is re-synced below
            selection = selection.sync(picked)
        keys = selection.to_store()
        return keys, keys, make_options(selection.keys)

    # --- B) Scatter matrix attributes ---
    @app.callback(
        Output(IDS.SPLOM_ATTRS, "data"),
        Output(IDS.SPLOM_PICK, "value"),
        Input(IDS.SPLOM_PICK, "value"),
        State(IDS.SPLOM_ATTRS, "data"),
        prevent_initial_call=True,
    )
    def update_splom_attributes(picked, current):
        selection = AttributeSelection.from_store(current, SCATTER_MATRIX_DEFAULT).sync(picked or [])
        keys = selection.to_store()
        return keys, keys

    # --- C) Distribution strips: all loaded data, bins inside the range emphasised ---
    @app.callback(
        *[Output(IDS.range_scent(b.name), "children") for b in RANGE_BINDINGS],
        Input(IDS.DATA, "data"),
        Input(IDS.FILTER_STATE, "data"),
    )
    def render_scent(data, filter_data):
        records = records_from_store(data)
        state = FilterState.from_store(filter_data)
        strips = []
        for binding in RANGE_BINDINGS:
            counts = distribution_bins(records, binding.key, SCENT_BINS)
            flags = _bins_in_range(records, binding, state.ranges[binding.name], SCENT_BINS)
            strips.append(_scent_bars(counts, flags, label_for(binding.key)))
        return strips
