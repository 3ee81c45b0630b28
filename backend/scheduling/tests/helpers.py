"""
Builders shared by the scheduling tests.
"""

from datetime import datetime, timedelta, timezone as dt_timezone
from typing import List, Optional

from scheduling.domain import ScoredTask, Task, TimeBlock, TimeOfDay, UserPreferences


NOW = datetime(2025, 11, 3, 8, 0, tzinfo=dt_timezone.utc)

_counter = 0


def make_task(
    id: Optional[str] = None,
    urgency: int = 3,
    difficulty: int = 3,
    duration_minutes: int = 30,
    deadline: Optional[datetime] = NOW,
    tags: Optional[List[str]] = None,
    **extra
) -> Task:
    """A task with sane defaults; deadline defaults to the frozen clock."""
    global _counter
    if id is None:
        _counter += 1
        id = f"task-{_counter}"
    return Task(
        id=id,
        urgency=urgency,
        difficulty=difficulty,
        duration_minutes=duration_minutes,
        deadline=deadline,
        tags=list(tags or []),
        **extra
    )


def make_preferences(**overrides) -> UserPreferences:
    values = {
        'user_id': 'test-user',
        'morning_complex_factor': 1.0,
        'evening_complex_factor': 1.0,
        'morning_available_time': 60,
        'evening_available_time': 60,
    }
    values.update(overrides)
    return UserPreferences(**values)


def make_scored(
    id: str,
    score: float,
    tags: Optional[List[str]] = None,
    duration_minutes: int = 30,
    evening_score: Optional[float] = None
) -> ScoredTask:
    """A scored task with an explicit morning score (and evening score)."""
    return ScoredTask(
        task=make_task(id=id, tags=tags, duration_minutes=duration_minutes),
        morning_score=score,
        evening_score=score if evening_score is None else evening_score
    )


def make_block(
    minutes: int,
    start: datetime = NOW,
    time_of_day: TimeOfDay = TimeOfDay.MORNING
) -> TimeBlock:
    return TimeBlock(
        time_of_day=time_of_day,
        start_time=start,
        end_time=start + timedelta(minutes=minutes),
        available_minutes=minutes
    )
