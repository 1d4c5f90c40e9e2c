from dash import Input, Output, State, ctx, no_update

from utils.ids import IDS
from services.records import records_from_store, records_to_store
from services.transforms import RANGE_BINDINGS, FilterState, filter_records


def register(app):
    # Single writer of IDS.FILTER_STATE; reset also pushes defaults back into the controls
    @app.callback(
        Output(IDS.FILTER_STATE, "data"),
        *[Output(IDS.range_slider(b.name), "value") for b in RANGE_BINDINGS],
        Output(IDS.METRIC, "value"),
        Output(IDS.ALLOW_LIST, "value"),
        *[Input(IDS.range_slider(b.name), "value") for b in RANGE_BINDINGS],
        Input(IDS.METRIC, "value"),
        Input(IDS.ALLOW_LIST, "value"),
        Input(IDS.RESET_FILTERS, "n_clicks"),
        State(IDS.FILTER_STATE, "data"),
        prevent_initial_call=True,
    )
    def update_filter_state(*args):
        n = len(RANGE_BINDINGS)
        slider_values = args[:n]
        metric, allow_list, _reset, current = args[n:]
        untouched = [no_update] * (n + 2)

        if ctx.triggered_id == IDS.RESET_FILTERS:
            state = FilterState()
            return (
                state.to_store(),
                *[list(b.default) for b in RANGE_BINDINGS],
                state.selected_metric.value,
                [],
            )

        state = FilterState.from_store(current)
        for binding, value in zip(RANGE_BINDINGS, slider_values):
            if value is not None and len(value) == 2:
                state = state.with_range(binding.name, value)
        if metric:
            state = state.with_metric(metric)
        state = state.with_countries(allow_list or [])
        return (state.to_store(), *untouched)

    @app.callback(
        Output(IDS.FILTERED_DATA, "data"),
        Input(IDS.DATA, "data"),
        Input(IDS.FILTER_STATE, "data"),
    )
    def build_filtered(data, filter_data):
        if not data:
            return []
        state = FilterState.from_store(filter_data)
        return records_to_store(filter_records(records_from_store(data), state))
