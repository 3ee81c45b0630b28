"""
Task ordering strategies.

Each strategy takes the pool of scored tasks still available and the time of
day of the block being filled, and returns the order the packer should try
them in. None of them changes which tasks are in the pool.

- priority: highest score first (stable)
- balanced: one task per category per round, best first within a category
- grouped: whole categories back to back, strongest category first

The balanced and grouped options are built from a shuffled and slightly
jittered copy of the pool so that regenerating a schedule offers visibly
different alternatives. The priority option never sees that noise.
"""

import random
from typing import Callable, Dict, List

from .domain import ScheduleStrategy, ScoredTask, TimeOfDay
from .scoring import clamp_score


OrderingFunc = Callable[[List[ScoredTask], TimeOfDay], List[ScoredTask]]


def group_by_category(tasks: List[ScoredTask]) -> Dict[str, List[ScoredTask]]:
    """Partition tasks by category, keeping first-appearance order."""
    groups: Dict[str, List[ScoredTask]] = {}
    for scored in tasks:
        groups.setdefault(scored.task.category, []).append(scored)
    return groups


def sort_by_score(tasks: List[ScoredTask], time_of_day: TimeOfDay) -> List[ScoredTask]:
    """Descending by score; equal scores keep their input order."""
    return sorted(tasks, key=lambda t: t.score_for(time_of_day), reverse=True)


def order_by_priority(tasks: List[ScoredTask], time_of_day: TimeOfDay) -> List[ScoredTask]:
    return sort_by_score(tasks, time_of_day)


def order_balanced(tasks: List[ScoredTask], time_of_day: TimeOfDay) -> List[ScoredTask]:
    """
    Round-robin across categories so no single one dominates a run.

    Categories are visited in the order they first appear in ``tasks``.
    """
    queues = [
        sort_by_score(group, time_of_day)
        for group in group_by_category(tasks).values()
    ]

    result = []
    depth = 0
    while queues:
        for queue in queues:
            result.append(queue[depth])
        depth += 1
        queues = [queue for queue in queues if len(queue) > depth]
    return result


def order_grouped(tasks: List[ScoredTask], time_of_day: TimeOfDay) -> List[ScoredTask]:
    """
    Keep every category contiguous, ordered by each category's best task.
    """
    groups = [
        sort_by_score(group, time_of_day)
        for group in group_by_category(tasks).values()
    ]
    groups.sort(key=lambda group: group[0].score_for(time_of_day), reverse=True)

    result = []
    for group in groups:
        result.extend(group)
    return result


STRATEGY_ORDERINGS: Dict[ScheduleStrategy, OrderingFunc] = {
    ScheduleStrategy.PRIORITY: order_by_priority,
    ScheduleStrategy.BALANCED: order_balanced,
    ScheduleStrategy.GROUPED: order_grouped,
}

STRATEGY_DESCRIPTIONS = {
    ScheduleStrategy.PRIORITY: 'Highest scoring tasks first for each time block',
    ScheduleStrategy.BALANCED: 'Alternates between task categories throughout the day',
    ScheduleStrategy.GROUPED: 'Keeps tasks of the same category together for better focus',
}

# Generation order of the three options.
STRATEGY_ORDER = [
    ScheduleStrategy.PRIORITY,
    ScheduleStrategy.BALANCED,
    ScheduleStrategy.GROUPED,
]


def shuffle_tasks(tasks: List[ScoredTask], rng=random) -> List[ScoredTask]:
    """Return a uniformly shuffled copy."""
    shuffled = list(tasks)
    rng.shuffle(shuffled)
    return shuffled


def jitter_scores(
    tasks: List[ScoredTask],
    variance: float = 5.0,
    rng=random
) -> List[ScoredTask]:
    """
    Return copies with independent noise in [-variance, variance] added to
    both scores, clamped back into 0-100.
    """
    return [
        ScoredTask(
            task=scored.task,
            morning_score=clamp_score(
                scored.morning_score + (rng.random() * 2 - 1) * variance
            ),
            evening_score=clamp_score(
                scored.evening_score + (rng.random() * 2 - 1) * variance
            )
        )
        for scored in tasks
    ]


def randomize_pool(
    tasks: List[ScoredTask],
    variance: float = 5.0,
    rng=random
) -> List[ScoredTask]:
    """Shuffle, then jitter: the pool fed to the balanced and grouped options."""
    return jitter_scores(shuffle_tasks(tasks, rng), variance, rng)
