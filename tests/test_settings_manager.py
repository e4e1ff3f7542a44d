# tests/test_settings_manager.py
import unittest
import os
import sys
import tempfile

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from config import DEFAULT_AXIS_START_HOUR, DEFAULT_AXIS_END_HOUR, MIN_VISIBLE_FRACTION
from error_messages import SettingsError
from settings_manager import save_settings, load_settings, layout_settings_from, LayoutSettings


class TestSettingsManager(unittest.TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.settings_file = os.path.join(self.tmp_dir.name, "settings.json")

    def tearDown(self):
        self.tmp_dir.cleanup()

    def test_save_and_load_settings(self):
        test_settings = {
            "axis_start_hour": 7,
            "axis_end_hour": 22,
            "start_day_of_week": 0,
        }
        save_settings(test_settings, self.settings_file)
        self.assertTrue(os.path.exists(self.settings_file))
        self.assertEqual(load_settings(self.settings_file), test_settings)

    def test_load_settings_no_file(self):
        self.assertEqual(load_settings(self.settings_file), {})

    def test_load_settings_corrupted_file(self):
        with open(self.settings_file, 'w') as f:
            f.write("this is not a valid json")
        with self.assertLogs('settings_manager', level='WARNING'):
            self.assertEqual(load_settings(self.settings_file), {})


class TestLayoutSettings(unittest.TestCase):

    def test_defaults(self):
        settings = layout_settings_from({})
        self.assertEqual(settings.axis_start_hour, DEFAULT_AXIS_START_HOUR)
        self.assertEqual(settings.axis_end_hour, DEFAULT_AXIS_END_HOUR)
        self.assertEqual(settings.min_visible_fraction, MIN_VISIBLE_FRACTION)
        self.assertEqual(settings, LayoutSettings())

    def test_unknown_keys_are_ignored(self):
        settings = layout_settings_from({"axis_start_hour": 6, "window_opacity": 0.85})
        self.assertEqual(settings.axis_start_hour, 6)

    def test_invalid_values(self):
        for bad in (
            {"axis_start_hour": 20, "axis_end_hour": 8},
            {"axis_start_hour": 8, "axis_end_hour": 8},
            {"axis_end_hour": 25},
            {"min_visible_fraction": 0},
            {"column_gutter": 1},
            {"start_day_of_week": 7},
        ):
            with self.assertRaises(SettingsError):
                layout_settings_from(bad)

    def test_unknown_timezone_falls_back_to_utc(self):
        settings = layout_settings_from({"user_timezone": "Mars/Olympus_Mons"})
        with self.assertLogs('settings_manager', level='WARNING'):
            self.assertEqual(str(settings.tzinfo), "UTC")


if __name__ == '__main__':
    unittest.main()
