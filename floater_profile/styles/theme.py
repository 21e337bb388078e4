"""Ocean blueprint design system colors and constants."""

PLACEHOLDER = "—"  # em dash, shown for missing values

PANEL_COLOR = "#0A2236"
BORDER_COLOR = "#1E4A6B"
TEXT_COLOR = "#E6F1FA"
MUTED_TEXT_COLOR = "#7FA3BF"
ACCENT_COLOR = "#00C2FF"
ROW_EVEN_COLOR = "rgba(0, 194, 255, 0.04)"
ROW_ODD_COLOR = "transparent"
ROW_HOVER_COLOR = "rgba(0, 194, 255, 0.18)"
ERROR_COLOR = "#FF6B6B"
ACTIVE_COLOR = "#2EE59D"
INACTIVE_COLOR = "#9AA5B1"

# Column order in the level table: (key, header label, unit, decimals)
LEVEL_COLUMNS = (
    ("depth_m", "Depth", "m", 0),
    ("temp_c", "Temp", "°C", 1),
    ("pres", "Pres", "", 2),
    ("psal", "Psal", "", 2),
)

METRIC_TILES = (
    ("temperature_c", "Temperature", "°C", 1),
    ("depth_m", "Depth", "m", 0),
    ("salinity_psu", "Salinity", "PSU", 2),
    ("pressure_dbar", "Pressure", "dbar", 0),
)

CSS_CLASSES = {
    "container": "fpv-level-list",
    "summary": "fpv-summary",
    "header": "fpv-level-header",
    "body": "fpv-level-body",
    "spacer": "fpv-spacer",
    "row": "fpv-row",
    "even": "fpv-even",
    "odd": "fpv-odd",
    "hovered": "fpv-hovered",
    "empty": "fpv-empty",
    "indicator_top": "fpv-more-above",
    "indicator_bottom": "fpv-more-below",
}
