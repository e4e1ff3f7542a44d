import json
import logging
import os
from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from config import (SETTINGS_FILE, DEFAULT_AXIS_START_HOUR, DEFAULT_AXIS_END_HOUR,
                    MIN_VISIBLE_FRACTION, COLUMN_GUTTER_RATIO, DEFAULT_START_DAY_OF_WEEK,
                    DEFAULT_USER_TIMEZONE)
from error_messages import SettingsError

logger = logging.getLogger(__name__)


def load_settings(path=SETTINGS_FILE):
    """Read the settings file and return it as a dictionary."""
    if os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            try:
                return json.load(f)
            except json.JSONDecodeError:
                logger.warning(f"Settings file is corrupted, using defaults: {path}")
                return {}
    return {}


def save_settings(data, path=SETTINGS_FILE):
    """Write the settings dictionary to the settings file."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=4)


@dataclass(frozen=True)
class LayoutSettings:
    axis_start_hour: float = DEFAULT_AXIS_START_HOUR
    axis_end_hour: float = DEFAULT_AXIS_END_HOUR
    min_visible_fraction: float = MIN_VISIBLE_FRACTION
    column_gutter: float = COLUMN_GUTTER_RATIO
    start_day_of_week: int = DEFAULT_START_DAY_OF_WEEK
    user_timezone: str = DEFAULT_USER_TIMEZONE

    def __post_init__(self):
        if not (0 <= self.axis_start_hour < self.axis_end_hour <= 24):
            raise SettingsError.from_message(
                'INVALID_AXIS', f"{self.axis_start_hour}-{self.axis_end_hour}")
        if not (0 < self.min_visible_fraction <= 1):
            raise SettingsError.from_message(
                'INVALID_CONFIGURATION', f"min_visible_fraction={self.min_visible_fraction}")
        if not (0 <= self.column_gutter < 1):
            raise SettingsError.from_message(
                'INVALID_CONFIGURATION', f"column_gutter={self.column_gutter}")
        if self.start_day_of_week not in range(7):
            raise SettingsError.from_message(
                'INVALID_CONFIGURATION', f"start_day_of_week={self.start_day_of_week}")

    @property
    def tzinfo(self):
        try:
            return ZoneInfo(self.user_timezone)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(f"Unknown timezone '{self.user_timezone}', falling back to UTC")
            return ZoneInfo("UTC")


def layout_settings_from(settings=None):
    """
    Build LayoutSettings from a settings dictionary.

    Missing keys fall back to the defaults in config.py. Unknown keys are ignored
    so that the same settings file can hold presentation options.
    """
    settings = settings or {}
    return LayoutSettings(
        axis_start_hour=settings.get("axis_start_hour", DEFAULT_AXIS_START_HOUR),
        axis_end_hour=settings.get("axis_end_hour", DEFAULT_AXIS_END_HOUR),
        min_visible_fraction=settings.get("min_visible_fraction", MIN_VISIBLE_FRACTION),
        column_gutter=settings.get("column_gutter", COLUMN_GUTTER_RATIO),
        start_day_of_week=settings.get("start_day_of_week", DEFAULT_START_DAY_OF_WEEK),
        user_timezone=settings.get("user_timezone", DEFAULT_USER_TIMEZONE),
    )
