# -------------------------------------------------------------------
# Single responsibility:
# the only writer of IDS.HIGHLIGHT and IDS.PARALLEL_BRUSH.
# Charts and panel controls emit events; this callback folds them in.
# -------------------------------------------------------------------

from __future__ import annotations
import logging
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple

from dash import Input, Output, State, ctx, no_update

from services.attribute_selection import PARALLEL_DEFAULT, AttributeSelection
from services.brushing import (
    Constraint,
    apply_constraint_event,
    first_id,
    ids_from_points,
    ids_within_constraints,
    prune_constraints,
)
from services.records import CountryRecord, records_from_store
from services.selection import HighlightState
from utils.helpers import triggered_prop
from utils.ids import IDS

logger = logging.getLogger(__name__)

Brush = Dict[str, Constraint]

# Event sources ("component.prop") handled by the reducer below
FOCUS_CLICKS = {
    f"{IDS.FIG_MAP}.clickData",
    f"{IDS.FIG_TOP}.clickData",
    f"{IDS.FIG_RADAR}.clickData",
}
TOGGLE_CLICKS = {
    f"{IDS.FIG_BUBBLE}.clickData",
    f"{IDS.FIG_SPLOM}.clickData",
}
BOX_SELECTS = {
    f"{IDS.FIG_BUBBLE}.selectedData",
    f"{IDS.FIG_SPLOM}.selectedData",
}
PARALLEL_RESTYLE = f"{IDS.FIG_PARALLEL}.restyleData"
PARALLEL_AXES = f"{IDS.PARALLEL_ATTRS}.data"
FILTERED = f"{IDS.FILTERED_DATA}.data"
CHECKLIST = f"{IDS.COUNTRY_LIST}.value"
SELECT_VISIBLE = f"{IDS.SELECT_VISIBLE}.n_clicks"
CLEAR_HIGHLIGHT = f"{IDS.CLEAR_COUNTRIES}.n_clicks"
CLEAR_SELECTION = f"{IDS.CLEAR_SELECTION}.n_clicks"
CLOSE_DETAIL = f"{IDS.CLOSE_DETAIL}.n_clicks"
RESET = f"{IDS.RESET_FILTERS}.n_clicks"


def _brush_highlight(state: HighlightState, records, brush: Brush, keys) -> HighlightState:
    """Highlight set recomputed from every accumulated axis constraint."""
    if not brush:
        return state.set_highlight_set([])
    return state.set_highlight_set(ids_within_constraints(records, brush, keys))


def apply_interaction(
    state: HighlightState,
    brush: Brush,
    source: Optional[str],
    value: Any,
    *,
    records: Sequence[CountryRecord] = (),
    parallel_keys: Sequence = PARALLEL_DEFAULT,
    visible_ids: Iterable[str] = (),
) -> Tuple[HighlightState, Brush]:
    """
    Fold one UI event into (highlight state, parallel brush).
    `source` is the triggering 'component.prop'; `value` is its new value.
    Unknown sources and empty payloads leave both unchanged.
    """
    if source in FOCUS_CLICKS:
        rid = first_id(value)
        return (state.set_active(rid), brush) if rid else (state, brush)

    if source in TOGGLE_CLICKS:
        rid = first_id(value)
        if not rid:
            return state, brush
        return state.toggle_highlight(rid).set_active(rid), brush

    if source in BOX_SELECTS:
        ids = ids_from_points(value)
        return (state.merge_highlight(ids), brush) if ids else (state, brush)

    if source == PARALLEL_RESTYLE:
        new_brush = apply_constraint_event(brush, value, parallel_keys)
        if new_brush == brush:
            return state, brush
        return _brush_highlight(state, records, new_brush, parallel_keys), new_brush

    if source == PARALLEL_AXES:
        new_brush = prune_constraints(brush, parallel_keys)
        if new_brush == brush:
            return state, brush
        return _brush_highlight(state, records, new_brush, parallel_keys), new_brush

    if source == FILTERED:
        # Axes re-normalize over the new filtered set; keep the brushed lines in step
        if not brush:
            return state, brush
        return _brush_highlight(state, records, brush, parallel_keys), brush

    if source == CHECKLIST:
        # The checklist mirrors the whole highlight set; apply what changed
        out = state
        for rid in sorted(set(value or []) ^ state.highlighted):
            out = out.toggle_highlight(rid)
        return out, brush

    if source == SELECT_VISIBLE:
        return state.merge_highlight(visible_ids), brush

    if source == CLEAR_HIGHLIGHT:
        return state.set_highlight_set([]), {}

    if source == CLOSE_DETAIL:
        return state.set_active(None), brush

    if source in (CLEAR_SELECTION, RESET):
        return state.clear_all(), {}

    return state, brush


# ---------- Public API ----------

def register(app):
    @app.callback(
        Output(IDS.HIGHLIGHT, "data"),
        Output(IDS.PARALLEL_BRUSH, "data"),
        Output(IDS.COUNTRY_LIST, "value"),
        Input(IDS.FIG_MAP, "clickData"),
        Input(IDS.FIG_TOP, "clickData"),
        Input(IDS.FIG_RADAR, "clickData"),
        Input(IDS.FIG_BUBBLE, "clickData"),
        Input(IDS.FIG_BUBBLE, "selectedData"),
        Input(IDS.FIG_SPLOM, "clickData"),
        Input(IDS.FIG_SPLOM, "selectedData"),
        Input(IDS.FIG_PARALLEL, "restyleData"),
        Input(IDS.PARALLEL_ATTRS, "data"),
        Input(IDS.COUNTRY_LIST, "value"),
        Input(IDS.SELECT_VISIBLE, "n_clicks"),
        Input(IDS.CLEAR_COUNTRIES, "n_clicks"),
        Input(IDS.CLEAR_SELECTION, "n_clicks"),
        Input(IDS.CLOSE_DETAIL, "n_clicks"),
        Input(IDS.RESET_FILTERS, "n_clicks"),
        Input(IDS.FILTERED_DATA, "data"),
        State(IDS.HIGHLIGHT, "data"),
        State(IDS.PARALLEL_BRUSH, "data"),
        State(IDS.COUNTRY_LIST, "options"),
        prevent_initial_call=True,
    )
    def update_highlight(*args):
        filtered_data, highlight_data, brush_data, list_options = args[-4:]
        source = triggered_prop(ctx.triggered)
        if source is None:
            return no_update, no_update, no_update

        state = HighlightState.from_store(highlight_data)
        brush = brush_data or {}
        parallel = AttributeSelection.from_store(
            ctx.inputs.get(PARALLEL_AXES), PARALLEL_DEFAULT
        )

        new_state, new_brush = apply_interaction(
            state,
            brush,
            source,
            ctx.triggered[0].get("value"),
            records=records_from_store(filtered_data),
            parallel_keys=parallel.keys,
            visible_ids=[o["value"] for o in (list_options or [])],
        )
        if new_state == state and new_brush == brush:
            return no_update, no_update, no_update

        logger.debug("highlight <- %s: %d ids, active=%s", source, len(new_state.highlighted), new_state.active_id)
        return new_state.to_store(), new_brush, sorted(new_state.highlighted)
