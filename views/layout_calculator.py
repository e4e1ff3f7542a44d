# views/layout_calculator.py
import datetime
import logging
import math
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Tuple

from config import MIN_VISIBLE_FRACTION, COLUMN_GUTTER_RATIO, ALL_DAY_END_CLOCK
from error_messages import InvalidEventError, SettingsError
from event_model import Event, parse_timestamp
from settings_manager import LayoutSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnAssignment:
    column_index: int
    column_count: int


@dataclass(frozen=True)
class LayoutRecord:
    event_id: object
    kind: str
    top_fraction: float
    height_fraction: float
    left_fraction: float
    width_fraction: float
    column_index: int
    column_count: int

    def to_dict(self):
        return {
            'eventId': self.event_id,
            'kind': self.kind,
            'topFraction': self.top_fraction,
            'heightFraction': self.height_fraction,
            'leftFraction': self.left_fraction,
            'widthFraction': self.width_fraction,
            'columnIndex': self.column_index,
            'columnCount': self.column_count,
        }


@dataclass(frozen=True)
class DayClassification:
    all_day: List[Event] = field(default_factory=list)
    timed: List[Event] = field(default_factory=list)


@dataclass(frozen=True)
class DayLayout:
    day: datetime.date
    all_day_events: List[Event]
    timed_layout: List[LayoutRecord]

    def to_dict(self):
        return {
            'day': self.day.isoformat(),
            'allDayEvents': [e.to_dict() for e in self.all_day_events],
            'timedLayout': [r.to_dict() for r in self.timed_layout],
        }


def day_bounds(day):
    """
    Start-of-day instant and the earliest end that still closes the day.

    The day end is matched at minute resolution: 23:59, 23:59:59.999 and the
    next midnight all close the day.
    """
    return (datetime.datetime.combine(day, datetime.time.min),
            datetime.datetime.combine(day, ALL_DAY_END_CLOCK))


def next_midnight(day):
    return datetime.datetime.combine(day + datetime.timedelta(days=1), datetime.time.min)


def _naive(event, tz):
    if all(isinstance(v, datetime.datetime) and v.tzinfo is None for v in (event.start, event.end)):
        return event
    try:
        return replace(event, start=parse_timestamp(event.start, tz), end=parse_timestamp(event.end, tz))
    except InvalidEventError:
        return event


def valid_events(events, tz=None):
    """
    Yield the usable Event objects from a mix of Events and raw store records.

    Events carrying aware datetimes are moved into ``tz`` first. Records that
    cannot be parsed and events whose end is before their start are skipped
    with a warning so that one bad entry never blocks the rest.
    """
    for item in events or ():
        if isinstance(item, Event):
            event = _naive(item, tz)
        else:
            try:
                event = Event.from_record(item, tz)
            except InvalidEventError as e:
                record_id = item.get('id') if isinstance(item, dict) else None
                logger.warning(f"Skipping event {record_id!r}: {e}")
                continue

        if not event.is_valid():
            logger.warning(f"Skipping event {event.id!r}: invalid time range {event.start!r} - {event.end!r}")
            continue
        yield event


def classify_events(events, reference_day, tz=None):
    """
    Split events into all-day and timed sets for ``reference_day``.

    An event is all-day only when its interval, clipped to the day, starts at
    00:00:00 and ends at 23:59 or later. Everything else is timed, so
    00:00-23:58 is a timed event.
    """
    day_start, day_end = day_bounds(reference_day)
    day_stop = next_midnight(reference_day)
    all_day, timed = [], []

    for event in valid_events(events, tz):
        clipped_start = max(event.start, day_start)
        clipped_end = min(event.end, day_stop)
        if clipped_start == day_start and clipped_end >= day_end:
            all_day.append(event)
        else:
            timed.append(event)

    return DayClassification(all_day=all_day, timed=timed)


def build_clusters(timed_events):
    """
    Group events into maximal overlap clusters.

    Events are swept in ``Event.sort_key`` order; an event joins the open
    cluster while its start is before the latest end seen in that cluster, so
    chains of overlaps end up in one cluster.
    """
    if not timed_events:
        return []

    sorted_events = sorted(timed_events, key=Event.sort_key)

    clusters = []
    current_cluster = [sorted_events[0]]
    cluster_end_time = sorted_events[0].end

    for event in sorted_events[1:]:
        if event.start < cluster_end_time:
            current_cluster.append(event)
            cluster_end_time = max(cluster_end_time, event.end)
        else:
            clusters.append(current_cluster)
            current_cluster = [event]
            cluster_end_time = event.end

    clusters.append(current_cluster)
    return clusters


def allocate_columns(cluster) -> Dict[Tuple[str, object], ColumnAssignment]:
    """
    Assign every event of a cluster to the first column that is free at its start.

    The column count is the number of columns opened for the whole cluster and
    is the same for every member.
    """
    column_ends = []
    column_of = {}

    for event in sorted(cluster, key=Event.sort_key):
        for i, column_end in enumerate(column_ends):
            if column_end <= event.start:
                column_ends[i] = event.end
                column_of[event.key] = i
                break
        else:
            column_of[event.key] = len(column_ends)
            column_ends.append(event.end)

    column_count = len(column_ends)
    return {key: ColumnAssignment(index, column_count) for key, index in column_of.items()}


def _fit_to_axis(top, height):
    top = min(top, 1.0 - height)
    # float rounding
    while top > 0.0 and top + height > 1.0:
        top = math.nextafter(top, 0.0)
    return max(top, 0.0)


def map_to_geometry(event, column_index, column_count, axis_start, axis_end,
                    min_visible_fraction=MIN_VISIBLE_FRACTION,
                    column_gutter=COLUMN_GUTTER_RATIO) -> Optional[LayoutRecord]:
    """
    Convert an event and its column into fractions of the visible axis.

    Returns None when nothing of the event falls inside [axis_start, axis_end).
    """
    if axis_end <= axis_start:
        raise SettingsError.from_message('INVALID_AXIS', f"{axis_start} - {axis_end}")
    if column_count < 1 or not (0 <= column_index < column_count):
        raise ValueError(f"column {column_index} of {column_count}")

    if event.start == event.end:
        if not axis_start <= event.start < axis_end:
            return None
    elif event.end <= axis_start or event.start >= axis_end:
        return None

    clipped_start = max(event.start, axis_start)
    clipped_end = min(event.end, axis_end)
    axis_seconds = (axis_end - axis_start).total_seconds()

    top = (clipped_start - axis_start).total_seconds() / axis_seconds
    height = max(min_visible_fraction, (clipped_end - clipped_start).total_seconds() / axis_seconds)
    height = min(height, 1.0)
    top = _fit_to_axis(top, height)

    column_width = 1.0 / column_count
    return LayoutRecord(
        event_id=event.id,
        kind=event.kind,
        top_fraction=top,
        height_fraction=height,
        left_fraction=column_index * column_width,
        width_fraction=column_width * (1.0 - column_gutter),
        column_index=column_index,
        column_count=column_count,
    )


class DayLayoutCalculator:
    """Runs classification, clustering, column allocation and geometry for one day."""

    def __init__(self, day, settings=None):
        self.day = day
        self.settings = settings or LayoutSettings()
        day_midnight = datetime.datetime.combine(day, datetime.time.min)
        self.axis_start = day_midnight + datetime.timedelta(hours=self.settings.axis_start_hour)
        self.axis_end = day_midnight + datetime.timedelta(hours=self.settings.axis_end_hour)

    def events_for_day(self, events):
        day_start = datetime.datetime.combine(self.day, datetime.time.min)
        day_stop = next_midnight(self.day)
        return [e for e in valid_events(events, self.settings.tzinfo) if e.overlaps(day_start, day_stop)]

    def calculate(self, events) -> DayLayout:
        day_events = self.events_for_day(events)
        classification = classify_events(day_events, self.day)

        # clusters never span day boundaries
        day_start = datetime.datetime.combine(self.day, datetime.time.min)
        day_stop = next_midnight(self.day)
        timed = [e.clipped(day_start, day_stop) for e in classification.timed]

        timed_layout = []
        for cluster in build_clusters(timed):
            columns = allocate_columns(cluster)
            for event in sorted(cluster, key=Event.sort_key):
                assignment = columns[event.key]
                record = map_to_geometry(
                    event, assignment.column_index, assignment.column_count,
                    self.axis_start, self.axis_end,
                    min_visible_fraction=self.settings.min_visible_fraction,
                    column_gutter=self.settings.column_gutter,
                )
                if record is not None:
                    timed_layout.append(record)

        all_day = sorted(classification.all_day, key=Event.sort_key)
        logger.debug(f"{self.day}: {len(all_day)} all-day, {len(timed_layout)} timed blocks")
        return DayLayout(day=self.day, all_day_events=all_day, timed_layout=timed_layout)
