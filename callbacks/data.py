# -------------------------------------------------------------------
# Single responsibility:
# load records into IDS.DATA on startup and on "Refresh data".
# -------------------------------------------------------------------

import logging

from dash import Input, Output

from services.records import records_to_store
from services.sources import load_records
from utils.ids import IDS
from utils.settings import Settings

logger = logging.getLogger(__name__)


def register(app):
    # Runs once on page load (no prevent_initial_call), then per refresh click
    @app.callback(
        Output(IDS.DATA, "data"),
        Output(IDS.NOTICE, "children"),
        Output(IDS.NOTICE, "className"),
        Input(IDS.REFRESH, "n_clicks"),
    )
    def load_data(n_clicks):
        result = load_records(Settings.from_env())
        logger.info("Data load (%s): %d records from %s", "refresh" if n_clicks else "startup",
                    len(result.records), result.source)
        notice_class = "notice" if result.notice else "notice hidden"
        return records_to_store(result.records), result.notice or "", notice_class
