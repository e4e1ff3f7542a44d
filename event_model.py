# event_model.py
"""
Event record consumed by the layout engine and the adapters that build it
from the shapes the event store hands out.
"""
import datetime
from dataclasses import dataclass, replace
from collections.abc import Mapping
from typing import Any, Optional

from dateutil import parser as dateutil_parser

from config import EVENT_KIND, TASK_KIND, DEFAULT_EVENT_COLOR, DEFAULT_TASK_COLOR
from error_messages import InvalidEventError


@dataclass(frozen=True)
class Event:
    """
    A time-ranged calendar entry.

    ``kind`` tells calendar events and imported tasks apart; ``(kind, id)``
    identifies the entry inside one layout pass. Display attributes are passed
    through untouched.
    """
    id: Any
    start: datetime.datetime
    end: datetime.datetime
    title: str = ""
    color: str = DEFAULT_EVENT_COLOR
    category: Optional[str] = None
    kind: str = EVENT_KIND
    description: Optional[str] = None
    location: Optional[str] = None

    @property
    def key(self):
        return (self.kind, self.id)

    @property
    def duration(self):
        return self.end - self.start

    def is_valid(self):
        """True when both timestamps are naive datetimes and end >= start."""
        for value in (self.start, self.end):
            if not isinstance(value, datetime.datetime) or value.tzinfo is not None:
                return False
        return self.end >= self.start

    def overlaps(self, lo, hi):
        """
        Whether the event intersects the half-open range [lo, hi).

        A zero-duration event intersects the range when its instant lies inside it.
        """
        if self.start == self.end:
            return lo <= self.start < hi
        return self.start < hi and self.end > lo

    def clipped(self, lo, hi):
        """Return a copy whose interval is clipped to [lo, hi]."""
        return replace(self, start=max(self.start, lo), end=min(self.end, hi))

    def sort_key(self):
        """(start asc, duration desc, id asc, kind) ordering used by every layout step."""
        return (self.start, -self.duration, _id_key(self.id), self.kind)

    def to_dict(self):
        return {
            'id': self.id,
            'kind': self.kind,
            'start': self.start.isoformat(),
            'end': self.end.isoformat(),
            'title': self.title,
            'color': self.color,
            'category': self.category,
            'description': self.description,
            'location': self.location,
        }

    @classmethod
    def from_record(cls, record: Mapping, tz=None):
        """
        Build an Event from an event store record.

        ``start``/``end`` are ISO-8601 strings (``date``/``endTime`` are accepted
        as the older key names). Timestamps with an offset are moved into ``tz``
        (UTC when not given) and kept as naive wall-clock time.

        Raises:
            InvalidEventError: if the id is missing or a timestamp cannot be parsed.
        """
        if not isinstance(record, Mapping):
            raise InvalidEventError.from_message('INVALID_EVENT', f"not a record: {record!r}")
        if record.get('id') is None:
            raise InvalidEventError.from_message('INVALID_EVENT', "missing id")

        start = parse_timestamp(record.get('start', record.get('date')), tz)
        end = parse_timestamp(record.get('end', record.get('endTime')), tz)

        return cls(
            id=record['id'],
            start=start,
            end=end,
            title=record.get('title') or "",
            color=record.get('color') or DEFAULT_EVENT_COLOR,
            category=record.get('category', record.get('type')),
            kind=record.get('kind', EVENT_KIND),
            description=record.get('description'),
            location=record.get('location'),
        )


def _id_key(event_id):
    # numbers before strings so that mixed id types still sort
    if isinstance(event_id, (int, float)) and not isinstance(event_id, bool):
        return (0, event_id, "")
    return (1, 0, str(event_id))


def parse_timestamp(value, tz=None):
    """
    Parse an ISO-8601 timestamp into a naive datetime.

    datetime objects are accepted as-is; aware values are converted to ``tz``.
    """
    if isinstance(value, datetime.datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = dateutil_parser.isoparse(value.strip())
        except (ValueError, OverflowError) as e:
            raise InvalidEventError.from_message('INVALID_EVENT', f"{value!r}: {e}") from e
    else:
        raise InvalidEventError.from_message('INVALID_EVENT', f"timestamp {value!r}")

    if parsed.tzinfo is not None:
        target = tz or datetime.timezone.utc
        parsed = parsed.astimezone(target).replace(tzinfo=None)
    return parsed


def _parse_clock(value):
    try:
        hours, minutes = (int(part) for part in str(value).split(":")[:2])
        return datetime.time(hours, minutes)
    except (TypeError, ValueError) as e:
        raise InvalidEventError.from_message('INVALID_EVENT', f"time {value!r}") from e


def _parse_date(value):
    try:
        return datetime.date.fromisoformat(str(value)[:10])
    except (TypeError, ValueError) as e:
        raise InvalidEventError.from_message('INVALID_EVENT', f"date {value!r}") from e


def event_from_store_row(row: Mapping):
    """
    Build an Event from a stored row with a ``date`` and ``startTime``/``endTime`` clock values.

    An end clock before the start clock means the event runs past midnight.
    """
    if row.get('id') is None:
        raise InvalidEventError.from_message('INVALID_EVENT', "missing id")

    day = _parse_date(row.get('date'))
    start = datetime.datetime.combine(day, _parse_clock(row.get('startTime')))
    end = datetime.datetime.combine(day, _parse_clock(row.get('endTime')))
    if end < start:
        end += datetime.timedelta(days=1)

    return Event(
        id=row['id'],
        start=start,
        end=end,
        title=row.get('title') or "",
        color=row.get('color') or DEFAULT_EVENT_COLOR,
        category=row.get('type'),
        description=row.get('description'),
        location=row.get('location'),
    )


def event_from_task(task: Mapping):
    """Build an all-day task entry spanning the whole of its due date."""
    if task.get('id') is None:
        raise InvalidEventError.from_message('INVALID_EVENT', "missing id")

    day = _parse_date(task.get('due_date'))
    return Event(
        id=task['id'],
        start=datetime.datetime.combine(day, datetime.time.min),
        end=datetime.datetime.combine(day, datetime.time.max),
        title=f"Task: {task.get('title') or ''}",
        color=DEFAULT_TASK_COLOR,
        category=TASK_KIND,
        kind=TASK_KIND,
    )
