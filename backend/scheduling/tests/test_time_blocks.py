"""
Tests for turning free time into schedulable blocks.
"""

from datetime import date, datetime, timedelta, timezone as dt_timezone

from django.test import TestCase

from scheduling.config import SchedulerConfig
from scheduling.domain import TimeOfDay
from scheduling.time_blocks import (
    blocks_from_budget,
    blocks_from_preferences,
    plan_time_blocks,
    time_of_day_for,
)

from .helpers import NOW, make_preferences


def at(hour, minute=0):
    return datetime(2025, 11, 3, hour, minute, tzinfo=dt_timezone.utc)


class TimeOfDayTests(TestCase):
    """Classifying a moment as morning or evening."""

    def test_morning_window(self):
        for hour in (5, 8, 11):
            self.assertEqual(time_of_day_for(at(hour)), TimeOfDay.MORNING)

    def test_noon_is_evening(self):
        self.assertEqual(time_of_day_for(at(12)), TimeOfDay.EVENING)

    def test_before_dawn_is_evening(self):
        self.assertEqual(time_of_day_for(at(4, 59)), TimeOfDay.EVENING)
        self.assertEqual(time_of_day_for(at(0)), TimeOfDay.EVENING)

    def test_naive_datetime(self):
        self.assertEqual(time_of_day_for(datetime(2025, 11, 3, 9)), TimeOfDay.MORNING)


class BudgetModeTests(TestCase):
    """An explicit free-time budget gives exactly one block."""

    def test_single_block_spans_budget(self):
        [block] = blocks_from_budget(NOW, 90)

        self.assertEqual(block.start_time, NOW)
        self.assertEqual(block.end_time, NOW + timedelta(minutes=90))
        self.assertEqual(block.available_minutes, 90)
        self.assertEqual(block.time_of_day, TimeOfDay.MORNING)

    def test_evening_start(self):
        [block] = blocks_from_budget(at(19), 60)
        self.assertEqual(block.time_of_day, TimeOfDay.EVENING)

    def test_budget_overrides_preferences(self):
        prefs = make_preferences(morning_available_time=200, evening_available_time=200)
        blocks = plan_time_blocks(prefs, NOW, NOW.date(), free_time_minutes=45)

        self.assertEqual(len(blocks), 1)
        self.assertEqual(blocks[0].available_minutes, 45)

    def test_zero_budget_is_still_budget_mode(self):
        """0 minutes is an empty block, not a fallback to preferences."""
        prefs = make_preferences(morning_available_time=120)
        [block] = plan_time_blocks(prefs, NOW, NOW.date(), free_time_minutes=0)

        self.assertEqual(block.available_minutes, 0)
        self.assertEqual(block.start_time, block.end_time)


class PreferenceModeTests(TestCase):
    """Without a budget the user's default availability is used."""

    def setUp(self):
        self.day = date(2025, 11, 3)

    def test_morning_and_evening_blocks(self):
        prefs = make_preferences(morning_available_time=90, evening_available_time=45)

        morning, evening = plan_time_blocks(prefs, NOW, self.day)

        self.assertEqual(morning.time_of_day, TimeOfDay.MORNING)
        self.assertEqual(morning.start_time, at(8))
        self.assertEqual(morning.end_time, at(12))
        self.assertEqual(morning.available_minutes, 90)

        self.assertEqual(evening.time_of_day, TimeOfDay.EVENING)
        self.assertEqual(evening.start_time, at(17))
        self.assertEqual(evening.end_time, at(22))
        self.assertEqual(evening.available_minutes, 45)

    def test_zero_availability_skips_block(self):
        prefs = make_preferences(morning_available_time=0, evening_available_time=60)

        blocks = blocks_from_preferences(self.day, prefs)

        self.assertEqual([b.time_of_day for b in blocks], [TimeOfDay.EVENING])

    def test_no_availability_no_blocks(self):
        prefs = make_preferences(morning_available_time=0, evening_available_time=0)
        self.assertEqual(blocks_from_preferences(self.day, prefs), [])

    def test_block_hours_from_config(self):
        config = SchedulerConfig(morning_block_start_hour=6, morning_block_hours=2)
        prefs = make_preferences(morning_available_time=30, evening_available_time=0)

        [block] = blocks_from_preferences(self.day, prefs, config)

        self.assertEqual(block.start_time, at(6))
        self.assertEqual(block.end_time, at(8))
        self.assertEqual(block.available_minutes, 30)
