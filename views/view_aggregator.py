# views/view_aggregator.py
import calendar
import datetime
import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass

from config import DAYS_IN_WEEK, MAX_LAYOUT_CACHE_SIZE, VIEW_MODES
from error_messages import SettingsError
from providers.base_provider import BaseEventProvider
from settings_manager import LayoutSettings
from .layout_calculator import DayLayoutCalculator, valid_events, next_midnight

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DayOccupancy:
    day: datetime.date
    has_events: bool
    count: int

    def to_dict(self):
        return {'day': self.day.isoformat(), 'hasEvents': self.has_events, 'count': self.count}


class ViewAggregator:
    """
    Produces the day, week and month layouts for a visible window.

    ``events`` may be a sequence of Events / store records or a
    BaseEventProvider. When a caller passes ``events_version`` the result is
    memoized per (view mode, window, version); without it nothing is cached.
    """

    def __init__(self, settings=None, max_cache_size=MAX_LAYOUT_CACHE_SIZE):
        self.settings = settings or LayoutSettings()
        self.max_cache_size = max_cache_size
        self._cache = OrderedDict()
        self._cache_lock = threading.Lock()

    def _events_in(self, events, start_date, end_date):
        if isinstance(events, BaseEventProvider):
            return events.get_events(start_date, end_date)
        return list(events or ())

    def _cached(self, key, compute):
        if key[-1] is None or self.max_cache_size <= 0:
            return compute()

        with self._cache_lock:
            if key in self._cache:
                self._cache.move_to_end(key)
                logger.debug(f"Layout cache hit: {key[:3]}")
                return self._cache[key]

        result = compute()

        with self._cache_lock:
            self._cache[key] = result
            self._cache.move_to_end(key)
            while len(self._cache) > self.max_cache_size:
                self._cache.popitem(last=False)
        return result

    def clear_cache(self):
        with self._cache_lock:
            self._cache.clear()

    def day_view(self, events, reference_day, events_version=None):
        def compute():
            day_events = self._events_in(events, reference_day, reference_day)
            return DayLayoutCalculator(reference_day, self.settings).calculate(day_events)

        key = ("day", reference_day, reference_day, events_version)
        return self._cached(key, compute)

    def week_view(self, events, week_start, events_version=None):
        week_end = week_start + datetime.timedelta(days=DAYS_IN_WEEK - 1)

        def compute():
            # validate once for the whole week, not once per day
            week_events = list(valid_events(
                self._events_in(events, week_start, week_end), self.settings.tzinfo))
            days = [week_start + datetime.timedelta(days=i) for i in range(DAYS_IN_WEEK)]
            return [DayLayoutCalculator(day, self.settings).calculate(week_events) for day in days]

        key = ("week", week_start, week_end, events_version)
        return self._cached(key, compute)

    def month_view(self, events, month_start, events_version=None):
        first_day = month_start.replace(day=1)
        days_in_month = calendar.monthrange(first_day.year, first_day.month)[1]
        last_day = first_day.replace(day=days_in_month)

        def compute():
            month_events = list(valid_events(
                self._events_in(events, first_day, last_day), self.settings.tzinfo))
            occupancy = []
            for i in range(days_in_month):
                day = first_day + datetime.timedelta(days=i)
                day_start = datetime.datetime.combine(day, datetime.time.min)
                count = sum(1 for e in month_events if e.overlaps(day_start, next_midnight(day)))
                occupancy.append(DayOccupancy(day=day, has_events=count > 0, count=count))
            logger.debug(f"{first_day:%Y-%m}: {sum(o.has_events for o in occupancy)} busy days")
            return occupancy

        key = ("month", first_day, last_day, events_version)
        return self._cached(key, compute)

    def view(self, events, view_mode, reference_day, events_version=None):
        """Dispatch on ``view_mode``; ``reference_day`` is the day, week start or month start."""
        if view_mode == "day":
            return self.day_view(events, reference_day, events_version)
        if view_mode == "week":
            return self.week_view(events, reference_day, events_version)
        if view_mode == "month":
            return self.month_view(events, reference_day, events_version)
        raise SettingsError.from_message('UNKNOWN_VIEW', f"{view_mode!r} not in {VIEW_MODES}")
