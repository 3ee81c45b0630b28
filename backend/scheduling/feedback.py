"""
Preference adjustments learned from the user.

- Productivity feedback: every completed task nudges the complexity factor of
  the time of day it was completed in towards the task's difficulty.
- Onboarding quiz: the user's morning/evening answers seed both factors.
"""

from dataclasses import replace
from typing import Sequence

from day_planner.logging import get_logger

from .config import DEFAULT_CONFIG
from .domain import Task, TimeOfDay, UserPreferences
from .exceptions import InvalidQuizAnswers
from .time_blocks import time_of_day_for


logger = get_logger(__name__)

MIN_COMPLEX_FACTOR = 0.5
MAX_COMPLEX_FACTOR = 1.5


def clamp_factor(value: float) -> float:
    return min(MAX_COMPLEX_FACTOR, max(MIN_COMPLEX_FACTOR, value))


def difficulty_to_factor(difficulty: int) -> float:
    """Map difficulty 1-5 onto the 0.5-1.5 complexity factor scale."""
    return MIN_COMPLEX_FACTOR + (difficulty - 1) / 4


def record_task_completion(
    preferences: UserPreferences,
    task: Task,
    alpha: float = DEFAULT_CONFIG.feedback_alpha
) -> UserPreferences:
    """
    Blend a completed task into the matching complexity factor.

    updated = (1 - alpha) * current + alpha * difficulty_factor

    Tasks without ``completed_at`` leave the preferences untouched.
    """
    if task.completed_at is None:
        return preferences

    time_of_day = time_of_day_for(task.completed_at)
    current = preferences.complex_factor(time_of_day)
    updated = clamp_factor(
        (1 - alpha) * current + alpha * difficulty_to_factor(task.difficulty)
    )

    logger.debug(
        "complex_factor_updated",
        user_id=preferences.user_id,
        time_of_day=time_of_day.value,
        previous=round(current, 4),
        updated=round(updated, 4),
    )

    if time_of_day == TimeOfDay.MORNING:
        return replace(preferences, morning_complex_factor=updated)
    return replace(preferences, evening_complex_factor=updated)


def preferences_from_quiz(
    preferences: UserPreferences,
    answers: Sequence[str]
) -> UserPreferences:
    """
    Seed complexity factors from the onboarding quiz.

    Each answer names the period the user handles challenging work best in.
    A factor is 0.5 plus that period's share of the answers, so unanimous
    answers give 1.5 and 0.5. The timing preference is evening only when
    evening answers outnumber morning ones.

    Raises:
        InvalidQuizAnswers: If there are no answers or one is not
            "morning" / "evening"
    """
    if not answers:
        raise InvalidQuizAnswers("At least one quiz answer is required", answers)

    valid = {t.value for t in TimeOfDay}
    invalid = [a for a in answers if a not in valid]
    if invalid:
        raise InvalidQuizAnswers(
            f"Quiz answers must be 'morning' or 'evening', got {invalid}", answers
        )

    morning_count = sum(1 for a in answers if a == TimeOfDay.MORNING.value)
    evening_count = len(answers) - morning_count
    timing = TimeOfDay.EVENING if evening_count > morning_count else TimeOfDay.MORNING

    return replace(
        preferences,
        morning_complex_factor=MIN_COMPLEX_FACTOR + morning_count / len(answers),
        evening_complex_factor=MIN_COMPLEX_FACTOR + evening_count / len(answers),
        task_timing_preference=timing
    )


def default_preferences(user_id: str) -> UserPreferences:
    """Preferences for a user who has not configured anything yet."""
    return UserPreferences(
        user_id=user_id,
        morning_complex_factor=1.0,
        evening_complex_factor=0.6,
        morning_available_time=120,
        evening_available_time=120,
        task_timing_preference=TimeOfDay.MORNING
    )
