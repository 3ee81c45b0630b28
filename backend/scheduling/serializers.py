"""
Serializers for the scheduling API.

Requests carry a snapshot of the user's tasks and preferences; these
serializers validate that snapshot and turn it into the domain dataclasses
the scheduling core works on.
"""

from typing import Dict, List

from rest_framework import serializers

from .domain import (
    ScheduleOption,
    ScheduledTask,
    ScheduleStrategy,
    Task,
    TimeOfDay,
    UserPreferences,
)


TIME_OF_DAY_CHOICES = [t.value for t in TimeOfDay]
STRATEGY_CHOICES = [s.value for s in ScheduleStrategy]


class TaskInputSerializer(serializers.Serializer):
    """
    A pending task as exported by the task-management subsystem.
    """

    id = serializers.CharField(max_length=255)
    title = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    user_id = serializers.CharField(max_length=255, required=False, allow_null=True, default=None)
    urgency = serializers.IntegerField(min_value=1, max_value=5)
    difficulty = serializers.IntegerField(min_value=1, max_value=5)
    duration_minutes = serializers.IntegerField(min_value=1)
    deadline = serializers.DateTimeField(required=False, allow_null=True, default=None)
    tags = serializers.ListField(
        child=serializers.CharField(max_length=100),
        required=False,
        default=list
    )
    completed = serializers.BooleanField(required=False, default=False)
    completed_at = serializers.DateTimeField(required=False, allow_null=True, default=None)

    def validate_tags(self, value):
        """Drop blank tags; the first remaining tag is the category."""
        return [tag.strip() for tag in value if tag and tag.strip()]


class PreferencesSerializer(serializers.Serializer):
    """
    User productivity preferences.
    """

    user_id = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    morning_complex_factor = serializers.FloatField(
        min_value=0.5, max_value=1.5, required=False, default=1.0
    )
    evening_complex_factor = serializers.FloatField(
        min_value=0.5, max_value=1.5, required=False, default=1.0
    )
    morning_available_time = serializers.IntegerField(min_value=0, required=False, default=0)
    evening_available_time = serializers.IntegerField(min_value=0, required=False, default=0)
    task_timing_preference = serializers.ChoiceField(
        choices=TIME_OF_DAY_CHOICES,
        required=False,
        default=TimeOfDay.MORNING.value
    )


class GenerateScheduleSerializer(serializers.Serializer):
    """
    Request for the three daily schedule options.

    Without ``free_time_minutes`` the schedule falls back to the morning and
    evening availability in the preferences.
    """

    tasks = TaskInputSerializer(many=True)
    preferences = PreferencesSerializer()
    start_time = serializers.DateTimeField(required=False, allow_null=True, default=None)
    free_time_minutes = serializers.IntegerField(
        min_value=0, required=False, allow_null=True, default=None
    )
    date = serializers.DateField(required=False, allow_null=True, default=None)

    def validate_tasks(self, value):
        seen = set()
        for task in value:
            if task['id'] in seen:
                raise serializers.ValidationError(f"Duplicate task id: {task['id']}")
            seen.add(task['id'])
        return value


class ScoreTasksSerializer(serializers.Serializer):
    """Request for per-task morning and evening scores."""

    tasks = TaskInputSerializer(
        many=True,
        allow_empty=False
    )
    preferences = PreferencesSerializer()


class ScheduledTaskSerializer(serializers.Serializer):
    task_id = serializers.CharField(max_length=255)
    start_time = serializers.DateTimeField()
    end_time = serializers.DateTimeField()
    completed = serializers.BooleanField(required=False, default=False)


class ScheduleOptionSerializer(serializers.Serializer):
    """A previously generated schedule option echoed back by the client."""

    id = serializers.CharField(max_length=255)
    user_id = serializers.CharField(max_length=255, allow_blank=True)
    date = serializers.DateField()
    strategy = serializers.ChoiceField(choices=STRATEGY_CHOICES)
    tasks = ScheduledTaskSerializer(many=True)
    total_score = serializers.FloatField()
    selected = serializers.BooleanField(required=False, default=False)
    created_at = serializers.DateTimeField()


class SelectScheduleSerializer(serializers.Serializer):
    options = ScheduleOptionSerializer(many=True, allow_empty=False)
    schedule_id = serializers.CharField(max_length=255)


class CompleteScheduledTaskSerializer(serializers.Serializer):
    option = ScheduleOptionSerializer()
    task_index = serializers.IntegerField()


class FeedbackSerializer(serializers.Serializer):
    """A completed task to learn the user's productivity from."""

    preferences = PreferencesSerializer()
    task = TaskInputSerializer()


class QuizSerializer(serializers.Serializer):
    """
    Onboarding quiz answers; each is "morning" or "evening".

    Answers are checked by the quiz logic itself so that the error carries
    the quiz error code.
    """

    answers = serializers.ListField(child=serializers.CharField(max_length=20))
    preferences = PreferencesSerializer(required=False)
    user_id = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')


# ==================== Conversions ====================

def task_from_data(data: Dict) -> Task:
    return Task(
        id=data['id'],
        title=data.get('title', ''),
        user_id=data.get('user_id'),
        urgency=data['urgency'],
        difficulty=data['difficulty'],
        duration_minutes=data['duration_minutes'],
        deadline=data.get('deadline'),
        tags=list(data.get('tags', [])),
        completed=data.get('completed', False),
        completed_at=data.get('completed_at')
    )


def tasks_from_data(items: List[Dict]) -> List[Task]:
    return [task_from_data(item) for item in items]


def preferences_from_data(data: Dict) -> UserPreferences:
    return UserPreferences(
        user_id=data.get('user_id', ''),
        morning_complex_factor=data.get('morning_complex_factor', 1.0),
        evening_complex_factor=data.get('evening_complex_factor', 1.0),
        morning_available_time=data.get('morning_available_time', 0),
        evening_available_time=data.get('evening_available_time', 0),
        task_timing_preference=TimeOfDay(
            data.get('task_timing_preference', TimeOfDay.MORNING.value)
        )
    )


def preferences_to_dict(preferences: UserPreferences) -> Dict:
    return {
        'user_id': preferences.user_id,
        'morning_complex_factor': round(preferences.morning_complex_factor, 4),
        'evening_complex_factor': round(preferences.evening_complex_factor, 4),
        'morning_available_time': preferences.morning_available_time,
        'evening_available_time': preferences.evening_available_time,
        'task_timing_preference': preferences.task_timing_preference.value
    }


def schedule_option_from_data(data: Dict) -> ScheduleOption:
    return ScheduleOption(
        id=data['id'],
        user_id=data['user_id'],
        date=data['date'],
        strategy=ScheduleStrategy(data['strategy']),
        tasks=[
            ScheduledTask(
                task_id=item['task_id'],
                start_time=item['start_time'],
                end_time=item['end_time'],
                completed=item.get('completed', False)
            )
            for item in data['tasks']
        ],
        total_score=data['total_score'],
        selected=data.get('selected', False),
        created_at=data['created_at']
    )
