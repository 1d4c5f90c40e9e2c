# Single source of truth for all Dash component IDs.

class IDS:
    # Stores
    DATA          = "data"              # all records (list of dicts)
    FILTER_STATE  = "filter_state"      # FilterState payload
    FILTERED_DATA = "filtered_data"     # records passing the filters
    HIGHLIGHT     = "highlight"         # HighlightState payload
    PARALLEL_ATTRS = "parallel_attrs"   # AttributeSelection of the parallel chart
    SPLOM_ATTRS    = "splom_attrs"      # AttributeSelection of the scatter matrix
    PARALLEL_BRUSH = "parallel_brush"   # accumulated axis constraints
    TUTORIAL_SEEN  = "tutorial_seen"    # persisted in browser localStorage

    # Data loading
    REFRESH = "refresh"
    NOTICE  = "notice"

    # Stats cards
    STAT_TOTAL    = "stat_total"
    STAT_FILTERED = "stat_filtered"
    STAT_ENERGY   = "stat_energy"
    STAT_INTERNET = "stat_internet"

    # Filter panel
    METRIC         = "metric"
    RESET_FILTERS  = "reset_filters"
    COUNTRY_SEARCH = "country_search"
    COUNTRY_LIST   = "country_list"
    SELECT_VISIBLE = "select_visible"
    CLEAR_COUNTRIES = "clear_countries"
    ALLOW_LIST     = "allow_list"
    SELECTION_SUMMARY = "selection_summary"

    # Range sliders and their distribution strips are built per range name
    @staticmethod
    def range_slider(name: str) -> str:
        return f"range_{name}"

    @staticmethod
    def range_scent(name: str) -> str:
        return f"scent_{name}"

    # Detail panel
    DETAIL       = "detail"
    CLOSE_DETAIL = "close_detail"
    CLEAR_SELECTION = "clear_selection"

    # Per-chart controls
    PARALLEL_PICK  = "parallel_pick"
    PARALLEL_MOVE  = "parallel_move"
    PARALLEL_LEFT  = "parallel_left"
    PARALLEL_RIGHT = "parallel_right"
    SPLOM_PICK     = "splom_pick"
    BUBBLE_X       = "bubble_x"
    BUBBLE_Y       = "bubble_y"
    BUBBLE_SIZE    = "bubble_size"
    BUBBLE_TREND   = "bubble_trend"

    # Charts
    FIG_MAP      = "fig_map"
    FIG_TOP      = "fig_top"
    FIG_AVERAGES = "fig_averages"
    FIG_PARALLEL = "fig_parallel"
    FIG_SPLOM    = "fig_splom"
    FIG_BUBBLE   = "fig_bubble"
    FIG_RADAR    = "fig_radar"

    # Tutorial overlay
    TUTORIAL         = "tutorial"
    TUTORIAL_DISMISS = "tutorial_dismiss"
    TUTORIAL_OPEN    = "tutorial_open"
