#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Week layout debugging script

Loads event records from a JSON file and prints the computed layout for the
week that contains the given date.

    python debug_week_layout.py events.json 2025-04-07 [settings.json]
"""

import datetime
import json
import sys

from logger_config import setup_logger, get_logger
from providers.memory_provider import MemoryEventProvider
from settings_manager import load_settings, layout_settings_from
from views.navigation import start_of_week, calendar_title
from views.view_aggregator import ViewAggregator

logger = get_logger(__name__)


def load_event_records(path):
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    # accept either a bare list or {"events": [...]}
    if isinstance(data, dict):
        data = data.get("events", [])
    return data


def format_day(day_layout):
    lines = [f"{day_layout.day:%a %Y-%m-%d}"]
    for event in day_layout.all_day_events:
        lines.append(f"  [all-day] {event.id}: {event.title}")
    for record in day_layout.timed_layout:
        lines.append(
            f"  {record.event_id}: top={record.top_fraction:.3f} height={record.height_fraction:.3f} "
            f"col={record.column_index + 1}/{record.column_count}"
        )
    return "\n".join(lines)


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    setup_logger()

    if len(argv) < 2:
        logger.error("usage: debug_week_layout.py EVENTS_JSON DATE [SETTINGS_JSON]")
        return 2

    settings = layout_settings_from(load_settings(argv[2]) if len(argv) > 2 else {})
    provider = MemoryEventProvider(load_event_records(argv[0]), tz=settings.tzinfo)

    day = datetime.date.fromisoformat(argv[1])
    week_start = start_of_week(day, settings.start_day_of_week)
    logger.info(f"=== {calendar_title(day, 'week', settings.start_day_of_week)} ===")

    for day_layout in ViewAggregator(settings).week_view(provider, week_start):
        print(format_day(day_layout))
    return 0


if __name__ == "__main__":
    sys.exit(main())
