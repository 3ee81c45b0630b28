"""
Task Scoring Engine for the daily schedule generator.

Every pending task is scored once for the morning and once for the evening.
The score tells the generator how worthwhile it is to place the task in a
block of that time of day.

Scoring Formula:
---------------
task_score = (urgency_score * 0.45) +
             (alignment_score * 0.35) +
             (deadline_score * 0.20)

- urgency_score: urgency (1-5) mapped linearly onto 20-100
- alignment_score: 100 - |difficulty / 5 - complex_factor / 1.5| * 100
  A perfect match between the task's difficulty and the user's capacity for
  that time of day scores 100. This component is not clamped and may go
  negative for extreme mismatches.
- deadline_score: 100 / (1 + 0.01 * hours_until_deadline), 0 without a
  deadline. A deadline right now scores 100, one 100 hours away scores 50.

Only the final weighted sum is clamped to 0-100.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from django.utils import timezone

from .domain import ScoredTask, Task, TimeOfDay, UserPreferences


SECONDS_PER_HOUR = 3600
MIN_SCORE = 0.0
MAX_SCORE = 100.0


@dataclass
class ScoringWeights:
    """
    Weights applied to the three score components.

    Weights that do not sum to 1.0 are normalized.
    """
    urgency: float = 0.45
    alignment: float = 0.35
    deadline: float = 0.20

    def __post_init__(self):
        total = self.urgency + self.alignment + self.deadline
        if total > 0 and not math.isclose(total, 1.0):
            self.urgency /= total
            self.alignment /= total
            self.deadline /= total

    def to_dict(self) -> Dict:
        return {
            'urgency': round(self.urgency, 3),
            'alignment': round(self.alignment, 3),
            'deadline': round(self.deadline, 3)
        }


@dataclass
class ScoreBreakdown:
    """Raw component scores and their weighted contributions."""
    urgency_score: float = 0.0
    alignment_score: float = 0.0
    deadline_score: float = 0.0
    urgency_contribution: float = 0.0
    alignment_contribution: float = 0.0
    deadline_contribution: float = 0.0
    total: float = 0.0

    def to_dict(self) -> Dict:
        return {
            'urgency': {
                'raw_score': round(self.urgency_score, 2),
                'contribution': round(self.urgency_contribution, 2)
            },
            'alignment': {
                'raw_score': round(self.alignment_score, 2),
                'contribution': round(self.alignment_contribution, 2)
            },
            'deadline': {
                'raw_score': round(self.deadline_score, 2),
                'contribution': round(self.deadline_contribution, 2)
            },
            'total': round(self.total, 2)
        }


def clamp_score(value: float) -> float:
    return min(MAX_SCORE, max(MIN_SCORE, value))


class TaskScorer:
    """
    Scores tasks for a time of day against a user's preferences.

    The scorer is pure: given the same task, preferences and ``now`` it always
    returns the same value. ``now`` defaults to the current time at scoring.
    """

    URGENCY_SCALE = 20  # urgency 1-5 -> 20-100
    DIFFICULTY_SCALE = 5
    COMPLEX_FACTOR_SCALE = 1.5
    DEADLINE_DECAY_PER_HOUR = 0.01

    def __init__(
        self,
        weights: Optional[ScoringWeights] = None,
        now: Optional[datetime] = None
    ):
        """
        Args:
            weights: Component weights (defaults to 0.45 / 0.35 / 0.20)
            now: Reference time for deadline proximity; frozen for the
                 scorer's lifetime when given
        """
        self.weights = weights or ScoringWeights()
        self.now = now

    def _reference_time(self) -> datetime:
        return self.now if self.now is not None else timezone.now()

    def calculate_urgency_score(self, urgency: int) -> float:
        """Linear map of the 1-5 urgency scale onto 20-100."""
        return float(urgency * self.URGENCY_SCALE)

    def calculate_alignment_score(
        self,
        difficulty: int,
        preferences: UserPreferences,
        time_of_day: TimeOfDay
    ) -> float:
        """
        How well the task's difficulty matches the user's capacity for
        complex work at this time of day.
        """
        normalized_difficulty = difficulty / self.DIFFICULTY_SCALE
        capacity = preferences.complex_factor(time_of_day) / self.COMPLEX_FACTOR_SCALE
        return 100 - abs(normalized_difficulty - capacity) * 100

    def calculate_deadline_score(self, deadline: Optional[datetime]) -> float:
        """
        Hyperbolic decay on the hours left until the deadline.

        Past deadlines count as due now. No deadline contributes nothing.
        A naive deadline is read in the current time zone when the reference
        time is aware, and the other way round.
        """
        if deadline is None:
            return 0.0

        reference = self._reference_time()
        if timezone.is_naive(deadline) and timezone.is_aware(reference):
            deadline = timezone.make_aware(deadline)
        elif timezone.is_aware(deadline) and timezone.is_naive(reference):
            deadline = timezone.make_naive(deadline)

        seconds_left = (deadline - reference).total_seconds()
        hours_until_deadline = max(0.0, seconds_left / SECONDS_PER_HOUR)
        return 100 * (1 / (1 + self.DEADLINE_DECAY_PER_HOUR * hours_until_deadline))

    def breakdown(
        self,
        task: Task,
        preferences: UserPreferences,
        time_of_day: TimeOfDay
    ) -> ScoreBreakdown:
        """Score a task and keep every intermediate value."""
        urgency_score = self.calculate_urgency_score(task.urgency)
        alignment_score = self.calculate_alignment_score(
            task.difficulty, preferences, time_of_day
        )
        deadline_score = self.calculate_deadline_score(task.deadline)

        urgency_contribution = urgency_score * self.weights.urgency
        alignment_contribution = alignment_score * self.weights.alignment
        deadline_contribution = deadline_score * self.weights.deadline

        total = clamp_score(
            urgency_contribution + alignment_contribution + deadline_contribution
        )

        return ScoreBreakdown(
            urgency_score=urgency_score,
            alignment_score=alignment_score,
            deadline_score=deadline_score,
            urgency_contribution=urgency_contribution,
            alignment_contribution=alignment_contribution,
            deadline_contribution=deadline_contribution,
            total=total
        )

    def score(
        self,
        task: Task,
        preferences: UserPreferences,
        time_of_day: TimeOfDay
    ) -> float:
        """Return the task's 0-100 score for the given time of day."""
        return self.breakdown(task, preferences, time_of_day).total

    def score_tasks(
        self,
        tasks: List[Task],
        preferences: UserPreferences
    ) -> List[ScoredTask]:
        """Score every task for both the morning and the evening."""
        return [
            ScoredTask(
                task=task,
                morning_score=self.score(task, preferences, TimeOfDay.MORNING),
                evening_score=self.score(task, preferences, TimeOfDay.EVENING)
            )
            for task in tasks
        ]


def calculate_task_score(
    task: Task,
    preferences: UserPreferences,
    time_of_day: TimeOfDay,
    now: Optional[datetime] = None
) -> float:
    """Score a single task; see the module docstring for the formula."""
    return TaskScorer(now=now).score(task, preferences, time_of_day)


def score_tasks(
    tasks: List[Task],
    preferences: UserPreferences,
    now: Optional[datetime] = None
) -> List[ScoredTask]:
    """Score all tasks for morning and evening against one frozen clock."""
    return TaskScorer(now=now or timezone.now()).score_tasks(tasks, preferences)


@dataclass
class TaskScoreReport:
    """Morning and evening breakdowns for one task, for API responses."""
    task: Task
    morning: ScoreBreakdown = field(default_factory=ScoreBreakdown)
    evening: ScoreBreakdown = field(default_factory=ScoreBreakdown)

    @property
    def best_time_of_day(self) -> TimeOfDay:
        if self.evening.total > self.morning.total:
            return TimeOfDay.EVENING
        return TimeOfDay.MORNING


def build_score_reports(
    tasks: List[Task],
    preferences: UserPreferences,
    now: Optional[datetime] = None
) -> List[TaskScoreReport]:
    """
    Score every task with full breakdowns, highest best score first.
    """
    scorer = TaskScorer(now=now or timezone.now())
    reports = [
        TaskScoreReport(
            task=task,
            morning=scorer.breakdown(task, preferences, TimeOfDay.MORNING),
            evening=scorer.breakdown(task, preferences, TimeOfDay.EVENING)
        )
        for task in tasks
    ]
    reports.sort(
        key=lambda r: max(r.morning.total, r.evening.total),
        reverse=True
    )
    return reports


def score_report_to_dict(report: TaskScoreReport) -> Dict:
    """Convert a TaskScoreReport to a dictionary for JSON serialization."""
    task = report.task
    return {
        'id': task.id,
        'title': task.title,
        'category': task.category,
        'urgency': task.urgency,
        'difficulty': task.difficulty,
        'duration_minutes': task.duration_minutes,
        'deadline': task.deadline.isoformat() if task.deadline else None,
        'morning_score': round(report.morning.total, 2),
        'evening_score': round(report.evening.total, 2),
        'best_time_of_day': report.best_time_of_day.value,
        'score_breakdown': {
            'morning': report.morning.to_dict(),
            'evening': report.evening.to_dict()
        }
    }
