# tests/test_memory_provider.py
import unittest
import datetime
import os
import sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from event_model import Event
from providers.base_provider import BaseEventProvider
from providers.memory_provider import MemoryEventProvider, MEMORY_PROVIDER_NAME


class TestMemoryEventProvider(unittest.TestCase):

    def setUp(self):
        with self.assertLogs('providers.memory_provider', level='WARNING'):
            self.provider = MemoryEventProvider([
                {'id': 'a', 'start': '2025-04-07T09:00:00', 'end': '2025-04-07T10:00:00', 'title': 'Standup'},
                {'id': 'b', 'start': '2025-04-08T23:00:00', 'end': '2025-04-09T01:00:00', 'title': 'Deploy'},
                {'id': 'broken', 'start': 'soon', 'end': 'later'},
                Event(id='c', start=datetime.datetime(2025, 4, 10, 9), end=datetime.datetime(2025, 4, 10, 9)),
            ])

    def test_is_a_provider(self):
        self.assertIsInstance(self.provider, BaseEventProvider)
        self.assertEqual(self.provider.name, MEMORY_PROVIDER_NAME)

    def test_unreadable_records_are_dropped(self):
        self.assertEqual([e.id for e in self.provider.events], ['a', 'b', 'c'])

    def test_get_events_for_period(self):
        ids = lambda start, end: [e.id for e in self.provider.get_events(start, end)]
        self.assertEqual(ids(datetime.date(2025, 4, 7), datetime.date(2025, 4, 7)), ['a'])
        self.assertEqual(ids(datetime.date(2025, 4, 9), datetime.date(2025, 4, 10)), ['b', 'c'])
        self.assertEqual(ids(datetime.date(2025, 4, 11), datetime.date(2025, 4, 30)), [])

    def test_search_events(self):
        self.assertEqual([e.id for e in self.provider.search_events('stand')], ['a'])
        self.assertEqual(len(self.provider.search_events('')), 3)


if __name__ == '__main__':
    unittest.main()
