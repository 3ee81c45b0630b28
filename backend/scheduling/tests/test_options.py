"""
Tests for selecting a schedule option and completing its tasks.
"""

from datetime import date, timedelta

from django.test import TestCase

from scheduling.domain import ScheduledTask, ScheduleOption, ScheduleStrategy
from scheduling.exceptions import ScheduleNotFound, TaskIndexOutOfRange
from scheduling.options import complete_scheduled_task, select_schedule

from .helpers import NOW


DAY = date(2025, 11, 3)


def make_option(option_id, strategy=ScheduleStrategy.PRIORITY, user_id='test-user', day=DAY,
                selected=False, task_ids=()):
    tasks = [
        ScheduledTask(
            task_id=task_id,
            start_time=NOW + timedelta(minutes=30 * i),
            end_time=NOW + timedelta(minutes=30 * (i + 1))
        )
        for i, task_id in enumerate(task_ids)
    ]
    return ScheduleOption(
        id=option_id,
        user_id=user_id,
        date=day,
        strategy=strategy,
        tasks=tasks,
        selected=selected,
        created_at=NOW
    )


class SelectScheduleTests(TestCase):

    def setUp(self):
        self.options = [
            make_option('p', ScheduleStrategy.PRIORITY, selected=True),
            make_option('b', ScheduleStrategy.BALANCED),
            make_option('g', ScheduleStrategy.GROUPED),
        ]

    def test_exactly_one_selected(self):
        updated = select_schedule(self.options, 'b')

        self.assertEqual([o.selected for o in updated], [False, True, False])

    def test_reselect_is_idempotent(self):
        once = select_schedule(self.options, 'g')
        twice = select_schedule(once, 'g')

        self.assertEqual([o.selected for o in twice], [False, False, True])

    def test_inputs_not_mutated(self):
        select_schedule(self.options, 'g')

        self.assertEqual([o.selected for o in self.options], [True, False, False])

    def test_unknown_id_raises(self):
        with self.assertRaises(ScheduleNotFound) as ctx:
            select_schedule(self.options, 'missing')

        self.assertEqual(ctx.exception.schedule_id, 'missing')
        self.assertIn('missing', str(ctx.exception))

    def test_other_users_and_days_untouched(self):
        other_user = make_option('other-user', user_id='someone-else', selected=True)
        other_day = make_option('other-day', day=DAY + timedelta(days=1), selected=True)

        updated = select_schedule(self.options + [other_user, other_day], 'b')

        self.assertEqual(
            {o.id: o.selected for o in updated},
            {'p': False, 'b': True, 'g': False, 'other-user': True, 'other-day': True}
        )


class CompleteScheduledTaskTests(TestCase):

    def setUp(self):
        self.option = make_option('p', task_ids=['t1', 't2', 't3'])

    def test_marks_task_completed(self):
        updated = complete_scheduled_task(self.option, 1)

        self.assertEqual([t.completed for t in updated.tasks], [False, True, False])
        self.assertEqual(updated.tasks[1].task_id, 't2')

    def test_original_option_unchanged(self):
        complete_scheduled_task(self.option, 0)

        self.assertFalse(self.option.tasks[0].completed)

    def test_index_out_of_range(self):
        for index in (3, 10, -1):
            with self.assertRaises(TaskIndexOutOfRange) as ctx:
                complete_scheduled_task(self.option, index)
            self.assertEqual(ctx.exception.task_count, 3)

    def test_empty_option(self):
        with self.assertRaises(TaskIndexOutOfRange):
            complete_scheduled_task(make_option('empty'), 0)

    def test_completing_twice_keeps_it_completed(self):
        updated = complete_scheduled_task(complete_scheduled_task(self.option, 2), 2)

        self.assertTrue(updated.tasks[2].completed)
