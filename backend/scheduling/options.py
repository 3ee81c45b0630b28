"""
Operations on generated schedule options.

Persistence belongs to the caller; these functions take the options it holds
and return updated copies.
"""

from dataclasses import replace
from typing import List

from day_planner.logging import get_logger

from .domain import ScheduleOption
from .exceptions import ScheduleNotFound, TaskIndexOutOfRange


logger = get_logger(__name__)


def select_schedule(options: List[ScheduleOption], schedule_id: str) -> List[ScheduleOption]:
    """
    Select one option and deselect its siblings.

    Siblings are the options for the same user and date as the selected one;
    options for other users or days are returned unchanged.

    Raises:
        ScheduleNotFound: If no option has ``schedule_id``
    """
    target = next((o for o in options if o.id == schedule_id), None)
    if target is None:
        raise ScheduleNotFound(schedule_id)

    updated = []
    for option in options:
        if option.user_id == target.user_id and option.date == target.date:
            option = replace(option, selected=option.id == schedule_id)
        updated.append(option)

    logger.info(
        "schedule_selected",
        schedule_id=schedule_id,
        user_id=target.user_id,
        strategy=target.strategy.value,
    )
    return updated


def complete_scheduled_task(option: ScheduleOption, task_index: int) -> ScheduleOption:
    """
    Mark the scheduled task at ``task_index`` as completed.

    The source task's own completion state is owned by the task subsystem;
    the caller is expected to update it with the returned task id.

    Raises:
        TaskIndexOutOfRange: If the index does not exist in the option
    """
    if task_index < 0 or task_index >= len(option.tasks):
        raise TaskIndexOutOfRange(task_index, len(option.tasks))

    tasks = list(option.tasks)
    tasks[task_index] = replace(tasks[task_index], completed=True)
    return replace(option, tasks=tasks)
