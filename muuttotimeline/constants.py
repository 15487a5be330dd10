STORE_SCHEMA_VERSION = 1

DEFAULT_PX_PER_DAY = 30
ZOOM_MIN = 10
ZOOM_MAX = 100
ZOOM_STEP = 10

RANGE_PADDING_DAYS = 10

ROW_COUNT = 4
ROW_HEIGHT = 80
ROW_MARGIN = 20
ITEM_HEIGHT = 60
ITEM_MIN_WIDTH = 120
ITEM_CHAR_WIDTH = 8

HEADER_HEIGHT = 48
CANVAS_RIGHT_PADDING = 100

CLICK_DRAG_THRESHOLD = 4.0

PRIORITIES = ("kritisch", "hoch", "mittel", "niedrig")
DEFAULT_PRIORITY = "mittel"
PRIORITY_ALIASES = {
    "critical": "kritisch",
    "high": "hoch",
    "medium": "mittel",
    "low": "niedrig",
}

PHASES = ("vor_umzug", "umzugstag", "nach_umzug", "langzeit")
DEFAULT_PHASE = "vor_umzug"

PRIORITY_COLORS = {
    "kritisch": "#ef4444",
    "hoch": "#f97316",
    "mittel": "#3b82f6",
    "niedrig": "#10b981",
}
PHASE_COLORS = {
    "vor_umzug": "#3b82f6",
    "umzugstag": "#10b981",
    "nach_umzug": "#8b5cf6",
    "langzeit": "#f97316",
}
COMPLETED_COLOR = "#6b7280"
OVERDUE_COLOR = "#ef4444"
MOVE_DAY_COLOR = "#ef4444"
TODAY_COLOR = "#3b82f6"

MONTH_NAMES_DE = (
    "Jan",
    "Feb",
    "Mär",
    "Apr",
    "Mai",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Okt",
    "Nov",
    "Dez",
)
