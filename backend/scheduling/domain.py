"""
Domain types for the daily schedule generator.

These dataclasses are the in-memory snapshot the scheduling core works on.
Tasks and preferences are owned by the surrounding application and are never
mutated here; scored tasks and time blocks only live for the duration of one
generation; scheduled tasks and schedule options are the generator's output.

All points in time are plain ``datetime`` objects. Converting from whatever a
storage backend hands out is the caller's job.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from django.utils import timezone


UNTAGGED_CATEGORY = "untagged"


class TimeOfDay(Enum):
    """Scheduling period a score or block belongs to."""
    MORNING = "morning"
    EVENING = "evening"


class ScheduleStrategy(Enum):
    """Ordering policy behind a generated schedule option."""
    PRIORITY = "priority"
    BALANCED = "balanced"
    GROUPED = "grouped"


@dataclass(frozen=True)
class Task:
    """
    A pending task as supplied by the task-management subsystem.

    Attributes:
        id: Opaque task identifier
        urgency: Subjective importance, 1 (low) to 5 (high)
        difficulty: Cognitive load, 1 (easy) to 5 (hard)
        duration_minutes: Estimated minutes to complete
        deadline: When the task is due, or None
        tags: Ordered category labels; the first one is the task's category
    """
    id: str
    urgency: int
    difficulty: int
    duration_minutes: int
    deadline: Optional[datetime] = None
    tags: List[str] = field(default_factory=list)
    title: str = ""
    user_id: Optional[str] = None
    completed: bool = False
    completed_at: Optional[datetime] = None

    @property
    def category(self) -> str:
        # Tag order matters: ["work", "urgent"] is a "work" task.
        return self.tags[0] if self.tags else UNTAGGED_CATEGORY


@dataclass(frozen=True)
class UserPreferences:
    """
    Per-user productivity profile.

    Complexity factors range from 0.5 to 1.5; 1.0 is neutral and higher values
    mean the user copes with difficult work better during that period.
    Available times are minutes and are only used when no explicit free-time
    budget is given.
    """
    user_id: str = ""
    morning_complex_factor: float = 1.0
    evening_complex_factor: float = 1.0
    morning_available_time: int = 0
    evening_available_time: int = 0
    task_timing_preference: TimeOfDay = TimeOfDay.MORNING

    def complex_factor(self, time_of_day: TimeOfDay) -> float:
        if time_of_day == TimeOfDay.MORNING:
            return self.morning_complex_factor
        return self.evening_complex_factor


@dataclass
class ScoredTask:
    """A task with its score for each time of day."""
    task: Task
    morning_score: float = 0.0
    evening_score: float = 0.0

    def score_for(self, time_of_day: TimeOfDay) -> float:
        if time_of_day == TimeOfDay.MORNING:
            return self.morning_score
        return self.evening_score


@dataclass(frozen=True)
class TimeBlock:
    """A contiguous window tasks can be packed into."""
    time_of_day: TimeOfDay
    start_time: datetime
    end_time: datetime
    available_minutes: int


@dataclass
class ScheduledTask:
    """A task placed at a concrete time."""
    task_id: str
    start_time: datetime
    end_time: datetime
    completed: bool = False


@dataclass
class ScheduleOption:
    """
    One candidate schedule for a user and date.

    Three of these are produced per generation, in the order
    priority, balanced, grouped. Only one option per user and date should be
    selected at a time; see ``scheduling.options.select_schedule``.
    """
    id: str
    user_id: str
    date: date
    strategy: ScheduleStrategy
    tasks: List[ScheduledTask] = field(default_factory=list)
    total_score: float = 0.0
    selected: bool = False
    created_at: datetime = field(default_factory=timezone.now)

    @property
    def task_ids(self) -> List[str]:
        return [scheduled.task_id for scheduled in self.tasks]
