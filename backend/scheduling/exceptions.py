"""Error codes and exceptions for the scheduling app."""

from enum import Enum
from typing import Optional, Sequence


class ErrorCode(Enum):
    """Error codes returned in API responses."""
    SUCCESS = "SUCCESS"
    ERR_INVALID_REQUEST = "ERR_INVALID_REQUEST"
    ERR_INVALID_TASKS = "ERR_INVALID_TASKS"
    ERR_INVALID_PREFERENCES = "ERR_INVALID_PREFERENCES"
    ERR_EMPTY_TASKS = "ERR_EMPTY_TASKS"
    ERR_SCHEDULE_NOT_FOUND = "ERR_SCHEDULE_NOT_FOUND"
    ERR_TASK_INDEX_OUT_OF_RANGE = "ERR_TASK_INDEX_OUT_OF_RANGE"
    ERR_INVALID_QUIZ = "ERR_INVALID_QUIZ"


class SchedulingError(Exception):
    """Base class for errors surfaced by the scheduling app."""


class ScheduleNotFound(SchedulingError):
    """Raised when a schedule id is not among the supplied options."""

    def __init__(self, schedule_id: str):
        super().__init__(f"Schedule not found: {schedule_id}")
        self.schedule_id = schedule_id


class TaskIndexOutOfRange(SchedulingError):
    """Raised when a scheduled task index does not exist in an option."""

    def __init__(self, task_index: int, task_count: int):
        super().__init__(
            f"Task index {task_index} out of range for a schedule with {task_count} task(s)"
        )
        self.task_index = task_index
        self.task_count = task_count


class InvalidQuizAnswers(SchedulingError):
    """Raised when onboarding quiz answers are empty or not morning/evening."""

    def __init__(self, message: str, answers: Optional[Sequence[str]] = None):
        super().__init__(message)
        self.answers = list(answers or [])
