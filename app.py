from dash import Dash

from layout import build_layout
from callbacks.charts import register_charts_callbacks
from callbacks.data import register as register_data_callbacks
from callbacks.filters import register as register_filter_callbacks
from callbacks.menus import register as register_menu_callbacks
from callbacks.selection import register as register_selection_callbacks
from callbacks.tutorial import register as register_tutorial_callbacks
from utils.settings import Settings, configure_logging


settings = Settings.from_env()
configure_logging(settings)

# suppress_callback_exceptions: the tutorial and detail panels swap their children at runtime
app = Dash(__name__, suppress_callback_exceptions=True, title="Datacenter Location Analytics")

# WSGI entry point, e.g. `gunicorn app:server`
server = app.server

# Static layout; all behaviour lives in callbacks/*
app.layout = build_layout()

# Remote table / CSV load -> IDS.DATA
register_data_callbacks(app)

# Owns IDS.FILTER_STATE, populates IDS.FILTERED_DATA
register_filter_callbacks(app)

# Owns IDS.HIGHLIGHT and IDS.PARALLEL_BRUSH
register_selection_callbacks(app)

# Country checklist, attribute pickers, distribution strips
register_menu_callbacks(app)

# Visualisations rendering
register_charts_callbacks(app)

# Onboarding overlay
register_tutorial_callbacks(app)

# Local dev server
if __name__ == "__main__":
    app.run(debug=settings.debug)
