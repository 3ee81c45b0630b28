"""
End-to-end tests for generating the three schedule options.
"""

import random
from datetime import date, datetime, timedelta, timezone as dt_timezone

from django.test import TestCase

from scheduling.config import SchedulerConfig
from scheduling.domain import ScheduleStrategy
from scheduling.generator import generate_schedule_options, schedule_option_to_dict

from .helpers import NOW, make_preferences, make_task


class GenerateScheduleOptionsTests(TestCase):
    """Tests for the schedule option assembler."""

    def setUp(self):
        self.prefs = make_preferences()
        self.rng = random.Random(1234)

    def generate(self, tasks, **kwargs):
        kwargs.setdefault('now', NOW)
        kwargs.setdefault('rng', self.rng)
        return generate_schedule_options(tasks, self.prefs, **kwargs)

    def test_always_three_options_in_order(self):
        options = self.generate([make_task()], free_time_minutes=60)

        self.assertEqual(
            [o.strategy for o in options],
            [ScheduleStrategy.PRIORITY, ScheduleStrategy.BALANCED, ScheduleStrategy.GROUPED]
        )
        self.assertEqual(len({o.id for o in options}), 3)

    def test_empty_task_list(self):
        options = self.generate([], free_time_minutes=120)

        self.assertEqual(len(options), 3)
        for option in options:
            self.assertEqual(option.tasks, [])
            self.assertEqual(option.total_score, 0)

    def test_option_metadata(self):
        options = self.generate([make_task()], free_time_minutes=60)

        for option in options:
            self.assertEqual(option.user_id, 'test-user')
            self.assertEqual(option.date, date(2025, 11, 3))
            self.assertEqual(option.created_at, NOW)
            self.assertFalse(option.selected)

    def test_priority_is_deterministic(self):
        """Three tasks with clearly separated scores in a 90 minute window."""
        tasks = [
            make_task(id='low', urgency=1, difficulty=1),
            make_task(id='high', urgency=5, difficulty=3),
            make_task(id='mid', urgency=3, difficulty=2),
        ]

        first = self.generate(tasks, free_time_minutes=90, rng=random.Random(1))[0]
        second = self.generate(tasks, free_time_minutes=90, rng=random.Random(99))[0]

        self.assertEqual(first.task_ids, ['high', 'mid', 'low'])
        self.assertEqual(second.task_ids, first.task_ids)
        self.assertEqual(first.tasks[0].start_time, NOW)

    def test_priority_total_score(self):
        """urgency 5/difficulty 3 scores 45 + 32.67 + 20 in the morning."""
        task = make_task(id='only', urgency=5, difficulty=3)

        priority = self.generate([task], free_time_minutes=60)[0]

        self.assertAlmostEqual(priority.total_score, 45 + 35 * (1 - abs(0.6 - 1 / 1.5)) + 20, places=4)

    def test_grouped_keeps_categories_together(self):
        """Score gaps between tasks exceed the jitter, so the result is fixed."""
        tasks = [
            make_task(id='b2', urgency=2, difficulty=1, tags=['B']),
            make_task(id='a1', urgency=5, difficulty=3, tags=['A']),
            make_task(id='b1', urgency=3, difficulty=2, tags=['B']),
            make_task(id='a2', urgency=4, difficulty=2, tags=['A']),
        ]

        for seed in range(10):
            grouped = self.generate(tasks, free_time_minutes=120, rng=random.Random(seed))[2]
            self.assertEqual(grouped.task_ids, ['a1', 'a2', 'b1', 'b2'])

    def test_balanced_alternates_categories(self):
        tasks = [
            make_task(id='a1', urgency=5, difficulty=3, tags=['A']),
            make_task(id='a2', urgency=4, difficulty=2, tags=['A']),
            make_task(id='b1', urgency=5, difficulty=3, tags=['B']),
            make_task(id='b2', urgency=4, difficulty=2, tags=['B']),
        ]
        categories = {task.id: task.category for task in tasks}

        for seed in range(10):
            balanced = self.generate(tasks, free_time_minutes=120, rng=random.Random(seed))[1]
            sequence = [categories[task_id] for task_id in balanced.task_ids]

            self.assertEqual(len(sequence), 4)
            for current, following in zip(sequence, sequence[1:]):
                self.assertNotEqual(current, following)

    def test_urgency_order_in_two_hours(self):
        """Urgencies 5, 3, 1 with equal difficulty, duration and deadline."""
        tasks = [
            make_task(id='mid', urgency=3),
            make_task(id='lo', urgency=1),
            make_task(id='hi', urgency=5),
        ]

        priority = self.generate(tasks, free_time_minutes=120)[0]

        self.assertEqual(priority.task_ids, ['hi', 'mid', 'lo'])

    def test_capacity_respected_in_every_option(self):
        """Two 45 minute tasks in 60 minutes: only the better one is placed."""
        tasks = [
            make_task(id='a', duration_minutes=45, urgency=5),
            make_task(id='b', duration_minutes=45, urgency=4),
        ]

        options = self.generate(tasks, free_time_minutes=60)

        self.assertEqual(options[0].task_ids, ['a'])
        for option in options:
            self.assertEqual(len(option.tasks), 1)

    def test_naive_deadline_with_default_clock(self):
        """Generation against the real clock accepts naive deadlines."""
        tasks = [make_task(id='naive', deadline=datetime(2025, 11, 4, 8, 0))]

        options = generate_schedule_options(tasks, self.prefs, free_time_minutes=60)

        self.assertEqual(len(options), 3)
        self.assertEqual(options[0].task_ids, ['naive'])

    def test_options_share_tasks(self):
        """A task placed in one option is still available to the others."""
        tasks = [make_task(id='solo', duration_minutes=30)]

        options = self.generate(tasks, free_time_minutes=60)

        for option in options:
            self.assertEqual(option.task_ids, ['solo'])

    def test_task_scheduled_once_per_option(self):
        """Morning and evening blocks never repeat a task."""
        tasks = [make_task(id=f't{i}', duration_minutes=20, tags=[f'c{i % 2}']) for i in range(4)]
        self.prefs = make_preferences(morning_available_time=40, evening_available_time=120)

        for option in self.generate(tasks):
            self.assertEqual(len(option.task_ids), len(set(option.task_ids)))
            self.assertCountEqual(option.task_ids, [t.id for t in tasks])

    def test_preference_mode_uses_both_blocks(self):
        self.prefs = make_preferences(morning_available_time=30, evening_available_time=30)
        tasks = [
            make_task(id='first', duration_minutes=30, urgency=5),
            make_task(id='second', duration_minutes=30, urgency=1),
        ]

        priority = self.generate(tasks, target_date=date(2025, 11, 4))[0]

        self.assertEqual(priority.task_ids, ['first', 'second'])
        self.assertEqual(
            priority.tasks[0].start_time,
            datetime(2025, 11, 4, 8, tzinfo=dt_timezone.utc)
        )
        self.assertEqual(
            priority.tasks[1].start_time,
            datetime(2025, 11, 4, 17, tzinfo=dt_timezone.utc)
        )

    def test_zero_free_time_places_nothing(self):
        options = self.generate([make_task()], free_time_minutes=0)

        for option in options:
            self.assertEqual(option.tasks, [])

    def test_explicit_start_time(self):
        start = NOW + timedelta(hours=11)

        priority = self.generate([make_task(id='late')], start_time=start, free_time_minutes=60)[0]

        self.assertEqual(priority.tasks[0].start_time, start)

    def test_total_score_matches_placed_tasks(self):
        tasks = [make_task(urgency=u, duration_minutes=20) for u in (1, 3, 5)]
        priority = self.generate(tasks, free_time_minutes=40)[0]

        self.assertEqual(len(priority.tasks), 2)
        self.assertGreater(priority.total_score, 0)

    def test_config_min_slot(self):
        tasks = [
            make_task(id='long', duration_minutes=50, urgency=5),
            make_task(id='tiny', duration_minutes=5, urgency=1),
        ]

        default = self.generate(tasks, free_time_minutes=60)[0]
        relaxed = self.generate(
            tasks, free_time_minutes=60, config=SchedulerConfig(min_slot_minutes=0)
        )[0]

        self.assertEqual(default.task_ids, ['long'])
        self.assertEqual(relaxed.task_ids, ['long', 'tiny'])

    def test_to_dict(self):
        option = self.generate([make_task(id='x')], free_time_minutes=30)[0]

        data = schedule_option_to_dict(option)

        self.assertEqual(data['strategy'], 'priority')
        self.assertEqual(data['date'], '2025-11-03')
        self.assertEqual(data['tasks'][0]['task_id'], 'x')
        self.assertFalse(data['tasks'][0]['completed'])
        self.assertIsInstance(data['total_score'], float)
