"""
Schedule Packer.

Greedily places an ordered list of scored tasks into one time block.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Dict, List

from .domain import ScheduledTask, ScoredTask, TimeBlock


DEFAULT_MIN_SLOT_MINUTES = 15


@dataclass
class PackResult:
    """Tasks placed in one block and the sum of their scores."""
    scheduled: List[ScheduledTask] = field(default_factory=list)
    total_score: float = 0.0
    remaining_minutes: int = 0


def pack_block(
    ordered: List[ScoredTask],
    block: TimeBlock,
    available: Dict[str, ScoredTask],
    min_slot_minutes: int = DEFAULT_MIN_SLOT_MINUTES
) -> PackResult:
    """
    Place tasks from ``ordered`` back to back from the block's start.

    Tasks that do not fit the remaining minutes are skipped, not fatal.
    Placed tasks are removed from ``available``, the pool shared by the later
    blocks of the same schedule option; tasks already gone from it are
    skipped. Once fewer than ``min_slot_minutes`` remain after a placement the
    block is considered full, even if a shorter task comes later.
    """
    result = PackResult(remaining_minutes=block.available_minutes)
    current_time = block.start_time

    for scored in ordered:
        task = scored.task
        if task.id not in available:
            continue
        if task.duration_minutes > result.remaining_minutes:
            continue

        end_time = current_time + timedelta(minutes=task.duration_minutes)
        result.scheduled.append(ScheduledTask(
            task_id=task.id,
            start_time=current_time,
            end_time=end_time
        ))
        current_time = end_time
        result.remaining_minutes -= task.duration_minutes
        result.total_score += scored.score_for(block.time_of_day)
        del available[task.id]

        if result.remaining_minutes < min_slot_minutes:
            break

    return result
