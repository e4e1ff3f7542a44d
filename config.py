# config.py
import datetime
import os


def get_data_dir():
    """Get the directory that holds user files (settings, debug output)."""
    return os.environ.get("DESKCAL_DATA_DIR") or os.path.dirname(os.path.abspath(__file__))

# --- File Paths ---
_DATA_DIR = get_data_dir()
SETTINGS_FILE = os.path.join(_DATA_DIR, "settings.json")

# --- Axis Defaults ---
DEFAULT_AXIS_START_HOUR = 8
DEFAULT_AXIS_END_HOUR = 20

# --- Geometry ---
# 15 minutes on the default 12 hour axis
MIN_VISIBLE_FRACTION = 1 / 48
COLUMN_GUTTER_RATIO = 0.02

# --- Classification ---
# all-day events end at 23:59 or later, matched at minute resolution
ALL_DAY_END_CLOCK = datetime.time(23, 59)

# --- Calendar ---
DEFAULT_START_DAY_OF_WEEK = 6  # datetime.weekday() numbering, 6 = Sunday
DAYS_IN_WEEK = 7
DEFAULT_USER_TIMEZONE = "UTC"

# --- Identifiers ---
EVENT_KIND = "event"
TASK_KIND = "task"
VIEW_MODES = ("day", "week", "month")

# --- Colors ---
DEFAULT_EVENT_COLOR = "#2660ff"
DEFAULT_TASK_COLOR = "#800080"

# --- Caching ---
MAX_LAYOUT_CACHE_SIZE = 13  # number of computed windows kept in memory
