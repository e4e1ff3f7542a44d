# views/navigation.py
import datetime

from dateutil.relativedelta import relativedelta

from config import DEFAULT_START_DAY_OF_WEEK, DAYS_IN_WEEK, VIEW_MODES
from error_messages import SettingsError
from event_model import Event
from .layout_calculator import valid_events

NAVIGATION_ACTIONS = ("PREV", "NEXT", "TODAY")

_STEP = {
    "day": relativedelta(days=1),
    "week": relativedelta(weeks=1),
    "month": relativedelta(months=1),
}


def _check_view_mode(view_mode):
    if view_mode not in VIEW_MODES:
        raise SettingsError.from_message('UNKNOWN_VIEW', f"{view_mode!r}")


def start_of_week(day, first_weekday=DEFAULT_START_DAY_OF_WEEK):
    """First day of the week containing ``day``; weekdays use datetime numbering (0 = Monday)."""
    return day - datetime.timedelta(days=(day.weekday() - first_weekday) % DAYS_IN_WEEK)


def visible_window(current_date, view_mode, first_weekday=DEFAULT_START_DAY_OF_WEEK):
    """Inclusive (first, last) dates shown by a view."""
    _check_view_mode(view_mode)
    if view_mode == "day":
        return current_date, current_date
    if view_mode == "week":
        first = start_of_week(current_date, first_weekday)
        return first, first + datetime.timedelta(days=DAYS_IN_WEEK - 1)
    first = current_date.replace(day=1)
    return first, first + relativedelta(months=1, days=-1)


def navigate(current_date, view_mode, action, today=None):
    """
    Move the visible date for a PREV/NEXT/TODAY action.

    Month steps keep the day of month where possible (Jan 31 -> Feb 28).
    """
    _check_view_mode(view_mode)
    if action == "TODAY":
        return today or datetime.date.today()
    if action == "PREV":
        return current_date - _STEP[view_mode]
    if action == "NEXT":
        return current_date + _STEP[view_mode]
    raise SettingsError.from_message('UNKNOWN_VIEW', f"action {action!r} not in {NAVIGATION_ACTIONS}")


def calendar_title(current_date, view_mode, first_weekday=DEFAULT_START_DAY_OF_WEEK):
    _check_view_mode(view_mode)
    if view_mode == "month":
        return f"{current_date:%B %Y}"
    if view_mode == "week":
        first, last = visible_window(current_date, "week", first_weekday)
        return f"{first:%b} {first.day} - {last:%b} {last.day}, {last.year}"
    return f"{current_date:%A, %B} {current_date.day}, {current_date.year}"


def todays_events(events, today=None, tz=None):
    """Valid events starting on ``today``, in layout order."""
    today = today or datetime.date.today()
    return sorted((e for e in valid_events(events, tz) if e.start.date() == today), key=Event.sort_key)
