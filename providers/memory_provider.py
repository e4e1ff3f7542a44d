# providers/memory_provider.py
import datetime
import logging

from .base_provider import BaseEventProvider
from error_messages import InvalidEventError
from event_model import Event

logger = logging.getLogger(__name__)

MEMORY_PROVIDER_NAME = "MemoryEventProvider"


class MemoryEventProvider(BaseEventProvider):
    """Serves events from a list already fetched from the event store."""

    def __init__(self, events=None, tz=None):
        self.name = MEMORY_PROVIDER_NAME
        self.events = []
        for item in events or ():
            if isinstance(item, Event):
                self.events.append(item)
                continue
            try:
                self.events.append(Event.from_record(item, tz))
            except InvalidEventError as e:
                logger.warning(f"Skipping unreadable record {item!r}: {e}")

    def get_events(self, start_date, end_date):
        period_start = datetime.datetime.combine(start_date, datetime.time.min)
        period_stop = datetime.datetime.combine(end_date + datetime.timedelta(days=1), datetime.time.min)
        return [e for e in self.events if e.is_valid() and e.overlaps(period_start, period_stop)]

    def search_events(self, query):
        query = (query or "").lower()
        return [e for e in self.events if query in e.title.lower()]
