from dash import Input, Output, State, ctx

from utils.ids import IDS

_BASE_CLASS = "tutorial"


def register(app):
    # IDS.TUTORIAL_SEEN lives in localStorage, so dismissal survives reloads
    @app.callback(
        Output(IDS.TUTORIAL, "className"),
        Output(IDS.TUTORIAL_SEEN, "data"),
        Input(IDS.TUTORIAL_DISMISS, "n_clicks"),
        Input(IDS.TUTORIAL_OPEN, "n_clicks"),
        State(IDS.TUTORIAL_SEEN, "data"),
    )
    def toggle_tutorial(_dismiss, _open, seen):
        if ctx.triggered_id == IDS.TUTORIAL_DISMISS:
            return f"{_BASE_CLASS} hidden", True
        if ctx.triggered_id == IDS.TUTORIAL_OPEN:
            return _BASE_CLASS, seen
        # page load: show unless previously dismissed
        return (f"{_BASE_CLASS} hidden" if seen else _BASE_CLASS), seen
