"""
Schedule Option Assembler.

Builds the three schedule options offered to the user for a day:

1. priority - highest scoring tasks first
2. balanced - categories interleaved
3. grouped  - categories kept together

Each option is built from its own copy of the scored pool, so a task placed
in the priority option is still available to the balanced and grouped ones.
Within one option a task placed in the morning block is gone for the evening
block.
"""

import random
import uuid
from datetime import date, datetime
from typing import Dict, List, Optional

from django.utils import timezone

from day_planner.logging import get_logger

from .config import DEFAULT_CONFIG, SchedulerConfig
from .domain import (
    ScheduleOption,
    ScheduleStrategy,
    ScoredTask,
    Task,
    TimeBlock,
    UserPreferences,
)
from .packer import pack_block
from .scoring import score_tasks
from .strategies import STRATEGY_ORDER, STRATEGY_ORDERINGS, randomize_pool
from .time_blocks import plan_time_blocks


logger = get_logger(__name__)


def generate_unique_id() -> str:
    return str(uuid.uuid4())


def build_schedule_option(
    pool: List[ScoredTask],
    blocks: List[TimeBlock],
    strategy: ScheduleStrategy,
    user_id: str,
    target_date: date,
    config: SchedulerConfig = DEFAULT_CONFIG,
    created_at: Optional[datetime] = None
) -> ScheduleOption:
    """
    Order and pack ``pool`` into ``blocks`` with one strategy.

    The pool is re-ordered for every block from the tasks still available,
    so each block sees the ordering for its own time of day.
    """
    ordering = STRATEGY_ORDERINGS[strategy]
    available: Dict[str, ScoredTask] = {scored.task.id: scored for scored in pool}
    option = ScheduleOption(
        id=generate_unique_id(),
        user_id=user_id,
        date=target_date,
        strategy=strategy,
        created_at=created_at or timezone.now()
    )

    for block in blocks:
        ordered = ordering(list(available.values()), block.time_of_day)
        packed = pack_block(ordered, block, available, config.min_slot_minutes)
        option.tasks.extend(packed.scheduled)
        option.total_score += packed.total_score

    return option


def generate_schedule_options(
    tasks: List[Task],
    preferences: UserPreferences,
    start_time: Optional[datetime] = None,
    free_time_minutes: Optional[int] = None,
    target_date: Optional[date] = None,
    *,
    now: Optional[datetime] = None,
    rng=None,
    config: Optional[SchedulerConfig] = None
) -> List[ScheduleOption]:
    """
    Generate the priority, balanced and grouped schedule options for a day.

    Args:
        tasks: Pending tasks to schedule
        preferences: The user's productivity preferences
        start_time: Start of the explicit free-time window (defaults to now)
        free_time_minutes: Explicit budget; None falls back to the
            preference-based morning and evening blocks
        target_date: Day the options are for (defaults to today)
        now: Frozen clock for deadline scoring and timestamps
        rng: Random source for the balanced and grouped pools; the
            process-wide ``random`` module when omitted
        config: Scheduler tunables (defaults to ``SchedulerConfig()``)

    Returns:
        Exactly three ScheduleOption objects: [priority, balanced, grouped]
    """
    config = config or DEFAULT_CONFIG
    rng = rng or random
    now = now or timezone.now()
    start_time = start_time or now
    if target_date is None:
        target_date = timezone.localdate(now) if timezone.is_aware(now) else now.date()
    elif isinstance(target_date, datetime):
        target_date = target_date.date()

    scored = score_tasks(tasks, preferences, now=now)
    blocks = plan_time_blocks(
        preferences, start_time, target_date, free_time_minutes, config
    )

    options = []
    for strategy in STRATEGY_ORDER:
        if strategy == ScheduleStrategy.PRIORITY:
            pool = list(scored)
        else:
            pool = randomize_pool(scored, config.score_variance, rng)
        options.append(build_schedule_option(
            pool, blocks, strategy, preferences.user_id, target_date,
            config=config, created_at=now
        ))

    logger.info(
        "schedule_options_generated",
        user_id=preferences.user_id,
        date=target_date.isoformat(),
        task_count=len(tasks),
        block_count=len(blocks),
        placed=[len(option.tasks) for option in options],
    )
    return options


def scheduled_task_to_dict(scheduled) -> Dict:
    return {
        'task_id': scheduled.task_id,
        'start_time': scheduled.start_time.isoformat(),
        'end_time': scheduled.end_time.isoformat(),
        'completed': scheduled.completed
    }


def schedule_option_to_dict(option: ScheduleOption) -> Dict:
    """Convert a ScheduleOption to a dictionary for JSON serialization."""
    return {
        'id': option.id,
        'user_id': option.user_id,
        'date': option.date.isoformat(),
        'strategy': option.strategy.value,
        'tasks': [scheduled_task_to_dict(t) for t in option.tasks],
        'total_score': round(option.total_score, 2),
        'selected': option.selected,
        'created_at': option.created_at.isoformat()
    }
