"""
Time-Block Planner.

Turns a free-time budget or the user's default availability into the windows
the packer fills.
"""

from datetime import date, datetime, time, timedelta
from typing import List, Optional

from django.conf import settings
from django.utils import timezone

from .config import DEFAULT_CONFIG, SchedulerConfig
from .domain import TimeBlock, TimeOfDay, UserPreferences


MORNING_START_HOUR = 5
MORNING_END_HOUR = 12


def time_of_day_for(moment: datetime) -> TimeOfDay:
    """Morning when the local hour falls in [5, 12), evening otherwise."""
    if timezone.is_aware(moment):
        moment = timezone.localtime(moment)
    if MORNING_START_HOUR <= moment.hour < MORNING_END_HOUR:
        return TimeOfDay.MORNING
    return TimeOfDay.EVENING


def blocks_from_budget(start_time: datetime, free_time_minutes: int) -> List[TimeBlock]:
    """A single block starting at ``start_time`` spanning the whole budget."""
    return [
        TimeBlock(
            time_of_day=time_of_day_for(start_time),
            start_time=start_time,
            end_time=start_time + timedelta(minutes=free_time_minutes),
            available_minutes=free_time_minutes
        )
    ]


def _at_hour(target_date: date, hour: int) -> datetime:
    moment = datetime.combine(target_date, time(hour=hour))
    if settings.USE_TZ:
        return timezone.make_aware(moment)
    return moment


def blocks_from_preferences(
    target_date: date,
    preferences: UserPreferences,
    config: SchedulerConfig = DEFAULT_CONFIG
) -> List[TimeBlock]:
    """
    Morning and evening blocks from the user's default availability.

    A block is only created when the matching available time is positive. The
    nominal span only sets the displayed bounds; the packing budget is always
    the preference value.
    """
    blocks = []

    if preferences.morning_available_time > 0:
        start = _at_hour(target_date, config.morning_block_start_hour)
        blocks.append(TimeBlock(
            time_of_day=TimeOfDay.MORNING,
            start_time=start,
            end_time=start + timedelta(hours=config.morning_block_hours),
            available_minutes=preferences.morning_available_time
        ))

    if preferences.evening_available_time > 0:
        start = _at_hour(target_date, config.evening_block_start_hour)
        blocks.append(TimeBlock(
            time_of_day=TimeOfDay.EVENING,
            start_time=start,
            end_time=start + timedelta(hours=config.evening_block_hours),
            available_minutes=preferences.evening_available_time
        ))

    return blocks


def plan_time_blocks(
    preferences: UserPreferences,
    start_time: datetime,
    target_date: date,
    free_time_minutes: Optional[int] = None,
    config: SchedulerConfig = DEFAULT_CONFIG
) -> List[TimeBlock]:
    """
    Pick the planning mode: an explicit budget wins, otherwise fall back to
    the preference-based morning and evening blocks.

    Only ``None`` means "no budget". An explicit ``0`` is a real, empty
    budget and yields a single zero-minute block; it does not fall back to
    the preference availability the way a falsy budget check would.
    """
    if free_time_minutes is not None:
        return blocks_from_budget(start_time, free_time_minutes)
    return blocks_from_preferences(target_date, preferences, config)
