"""
API Views for the Day Planner.

This module exposes the schedule generator and its companion operations over
a stateless JSON API: the client sends its current tasks, preferences or
schedule options with every request and stores whatever comes back.
"""

from rest_framework import status
from rest_framework.decorators import api_view, throttle_classes
from rest_framework.response import Response
from rest_framework.request import Request
from rest_framework.throttling import AnonRateThrottle
from drf_spectacular.utils import extend_schema
from drf_spectacular.types import OpenApiTypes

from day_planner.logging import get_logger

from .config import SchedulerConfig
from .exceptions import ErrorCode, InvalidQuizAnswers, ScheduleNotFound, TaskIndexOutOfRange
from .feedback import default_preferences, preferences_from_quiz, record_task_completion
from .generator import generate_schedule_options, schedule_option_to_dict
from .options import complete_scheduled_task, select_schedule
from .scoring import ScoringWeights, build_score_reports, score_report_to_dict
from .serializers import (
    CompleteScheduledTaskSerializer,
    FeedbackSerializer,
    GenerateScheduleSerializer,
    QuizSerializer,
    ScoreTasksSerializer,
    SelectScheduleSerializer,
    preferences_from_data,
    preferences_to_dict,
    schedule_option_from_data,
    task_from_data,
    tasks_from_data,
)
from .strategies import STRATEGY_DESCRIPTIONS, STRATEGY_ORDER


logger = get_logger(__name__)


# ============================================
# RATE LIMITING CLASSES
# ============================================

class GenerateRateThrottle(AnonRateThrottle):
    """Rate limit for schedule generation - 30 requests per minute."""
    rate = '30/min'


class ScoreRateThrottle(AnonRateThrottle):
    """Rate limit for task scoring - 30 requests per minute."""
    rate = '30/min'


# ============================================
# HELPERS
# ============================================

def _error_code_for(errors) -> ErrorCode:
    if 'tasks' in errors or 'task' in errors:
        return ErrorCode.ERR_INVALID_TASKS
    if 'preferences' in errors:
        return ErrorCode.ERR_INVALID_PREFERENCES
    return ErrorCode.ERR_INVALID_REQUEST


def _invalid_response(serializer, endpoint: str) -> Response:
    error_code = _error_code_for(serializer.errors)
    logger.warning(
        "request_rejected",
        endpoint=endpoint,
        error_code=error_code.value,
        fields=sorted(serializer.errors.keys()),
    )
    return Response(
        {
            'success': False,
            'error_code': error_code.value,
            'errors': serializer.errors,
            'message': 'Invalid input data. Please check your request format.'
        },
        status=status.HTTP_400_BAD_REQUEST
    )


# ============================================
# API ENDPOINTS
# ============================================

@extend_schema(
    summary="Generate daily schedule options",
    description="""
    Generate three schedule options for a day from the user's pending tasks:
    priority (highest scores first), balanced (categories interleaved) and
    grouped (categories kept together), always in that order.

    With `free_time_minutes` a single block starting at `start_time` is
    filled; without it the morning and evening availability from the
    preferences is used.
    """,
    request=GenerateScheduleSerializer,
    responses={200: OpenApiTypes.OBJECT},
    tags=['Schedules']
)
@api_view(['POST'])
@throttle_classes([GenerateRateThrottle])
def generate_schedules(request: Request) -> Response:
    """
    POST /api/schedules/generate/

    Request Body:
    {
        "tasks": [...],
        "preferences": {...},
        "start_time": "2025-11-03T08:00:00Z",   // Optional, defaults to now
        "free_time_minutes": 120,                // Optional
        "date": "2025-11-03"                     // Optional, defaults to today
    }
    """
    serializer = GenerateScheduleSerializer(data=request.data)
    if not serializer.is_valid():
        return _invalid_response(serializer, 'generate')

    data = serializer.validated_data
    tasks = tasks_from_data(data['tasks'])
    preferences = preferences_from_data(data['preferences'])

    options = generate_schedule_options(
        tasks,
        preferences,
        start_time=data.get('start_time'),
        free_time_minutes=data.get('free_time_minutes'),
        target_date=data.get('date'),
        config=SchedulerConfig.from_settings()
    )

    placed_ids = {t.task_id for option in options for t in option.tasks}
    unscheduled = [task.id for task in tasks if task.id not in placed_ids]

    return Response({
        'success': True,
        'error_code': ErrorCode.SUCCESS.value,
        'count': len(options),
        'options': [schedule_option_to_dict(option) for option in options],
        'unscheduled_task_ids': unscheduled
    })


@extend_schema(
    summary="Select a schedule option",
    description="Mark one option as selected and deselect the other options for the same user and date.",
    request=SelectScheduleSerializer,
    responses={200: OpenApiTypes.OBJECT, 404: OpenApiTypes.OBJECT},
    tags=['Schedules']
)
@api_view(['POST'])
def select_schedule_option(request: Request) -> Response:
    """
    POST /api/schedules/select/
    """
    serializer = SelectScheduleSerializer(data=request.data)
    if not serializer.is_valid():
        return _invalid_response(serializer, 'select')

    data = serializer.validated_data
    options = [schedule_option_from_data(item) for item in data['options']]

    try:
        updated = select_schedule(options, data['schedule_id'])
    except ScheduleNotFound as exc:
        return Response(
            {
                'success': False,
                'error_code': ErrorCode.ERR_SCHEDULE_NOT_FOUND.value,
                'message': str(exc)
            },
            status=status.HTTP_404_NOT_FOUND
        )

    return Response({
        'success': True,
        'error_code': ErrorCode.SUCCESS.value,
        'selected_id': data['schedule_id'],
        'options': [schedule_option_to_dict(option) for option in updated]
    })


@extend_schema(
    summary="Complete a scheduled task",
    description="Mark the scheduled task at `task_index` of an option as completed.",
    request=CompleteScheduledTaskSerializer,
    responses={200: OpenApiTypes.OBJECT},
    tags=['Schedules']
)
@api_view(['POST'])
def complete_task(request: Request) -> Response:
    """
    POST /api/schedules/complete-task/
    """
    serializer = CompleteScheduledTaskSerializer(data=request.data)
    if not serializer.is_valid():
        return _invalid_response(serializer, 'complete-task')

    data = serializer.validated_data
    option = schedule_option_from_data(data['option'])

    try:
        updated = complete_scheduled_task(option, data['task_index'])
    except TaskIndexOutOfRange as exc:
        return Response(
            {
                'success': False,
                'error_code': ErrorCode.ERR_TASK_INDEX_OUT_OF_RANGE.value,
                'message': str(exc)
            },
            status=status.HTTP_400_BAD_REQUEST
        )

    return Response({
        'success': True,
        'error_code': ErrorCode.SUCCESS.value,
        'completed_task_id': updated.tasks[data['task_index']].task_id,
        'option': schedule_option_to_dict(updated)
    })


@extend_schema(
    summary="Score tasks",
    description="""
    Return every task's morning and evening score with a breakdown of the
    urgency, cognitive alignment and deadline components.
    """,
    request=ScoreTasksSerializer,
    responses={200: OpenApiTypes.OBJECT},
    tags=['Analysis']
)
@api_view(['POST'])
@throttle_classes([ScoreRateThrottle])
def score_tasks(request: Request) -> Response:
    """
    POST /api/tasks/score/
    """
    serializer = ScoreTasksSerializer(data=request.data)
    if not serializer.is_valid():
        if 'tasks' in serializer.errors and not request.data.get('tasks'):
            return Response(
                {
                    'success': False,
                    'error_code': ErrorCode.ERR_EMPTY_TASKS.value,
                    'message': 'No tasks provided. Please submit at least one task.'
                },
                status=status.HTTP_400_BAD_REQUEST
            )
        return _invalid_response(serializer, 'score')

    data = serializer.validated_data
    reports = build_score_reports(
        tasks_from_data(data['tasks']),
        preferences_from_data(data['preferences'])
    )

    return Response({
        'success': True,
        'error_code': ErrorCode.SUCCESS.value,
        'count': len(reports),
        'weights_used': ScoringWeights().to_dict(),
        'tasks': [score_report_to_dict(report) for report in reports]
    })


@extend_schema(
    summary="Record productivity feedback",
    description="Nudge the complexity factor of the completion's time of day towards the task's difficulty.",
    request=FeedbackSerializer,
    responses={200: OpenApiTypes.OBJECT},
    tags=['Preferences']
)
@api_view(['POST'])
def productivity_feedback(request: Request) -> Response:
    """
    POST /api/preferences/feedback/
    """
    serializer = FeedbackSerializer(data=request.data)
    if not serializer.is_valid():
        return _invalid_response(serializer, 'feedback')

    data = serializer.validated_data
    preferences = preferences_from_data(data['preferences'])
    task = task_from_data(data['task'])

    updated = record_task_completion(
        preferences, task, alpha=SchedulerConfig.from_settings().feedback_alpha
    )

    return Response({
        'success': True,
        'error_code': ErrorCode.SUCCESS.value,
        'updated': updated != preferences,
        'preferences': preferences_to_dict(updated)
    })


@extend_schema(
    summary="Apply onboarding quiz",
    description="Derive complexity factors and the timing preference from morning/evening quiz answers.",
    request=QuizSerializer,
    responses={200: OpenApiTypes.OBJECT},
    tags=['Preferences']
)
@api_view(['POST'])
def onboarding_quiz(request: Request) -> Response:
    """
    POST /api/preferences/quiz/
    """
    serializer = QuizSerializer(data=request.data)
    if not serializer.is_valid():
        return _invalid_response(serializer, 'quiz')

    data = serializer.validated_data
    if data.get('preferences') is not None:
        preferences = preferences_from_data(data['preferences'])
    else:
        preferences = default_preferences(data.get('user_id', ''))

    try:
        updated = preferences_from_quiz(preferences, data['answers'])
    except InvalidQuizAnswers as exc:
        return Response(
            {
                'success': False,
                'error_code': ErrorCode.ERR_INVALID_QUIZ.value,
                'message': str(exc)
            },
            status=status.HTTP_400_BAD_REQUEST
        )

    return Response({
        'success': True,
        'error_code': ErrorCode.SUCCESS.value,
        'preferences': preferences_to_dict(updated)
    })


@extend_schema(
    summary="Default preferences",
    description="Preferences used for a user who has not configured anything yet.",
    responses={200: OpenApiTypes.OBJECT},
    tags=['Preferences']
)
@api_view(['GET'])
def get_default_preferences(request: Request) -> Response:
    """
    GET /api/preferences/defaults/?user_id=...
    """
    user_id = request.query_params.get('user_id', '')
    return Response({
        'success': True,
        'preferences': preferences_to_dict(default_preferences(user_id))
    })


@extend_schema(
    summary="Get schedule strategies",
    description="Return the strategies behind the three generated options, in generation order.",
    responses={200: OpenApiTypes.OBJECT},
    tags=['Info']
)
@api_view(['GET'])
def get_strategies(request: Request) -> Response:
    """
    GET /api/schedules/strategies/
    """
    config = SchedulerConfig.from_settings()
    strategies = [
        {
            'index': index,
            'strategy': strategy.value,
            'name': strategy.value.title(),
            'description': STRATEGY_DESCRIPTIONS[strategy],
            'randomized': index > 0
        }
        for index, strategy in enumerate(STRATEGY_ORDER)
    ]

    return Response({
        'success': True,
        'strategies': strategies,
        'min_slot_minutes': config.min_slot_minutes,
        'score_variance': config.score_variance
    })


@extend_schema(
    summary="API information",
    description="Get API information and available endpoints.",
    responses={200: OpenApiTypes.OBJECT},
    tags=['Info']
)
@api_view(['GET'])
def api_info(request: Request) -> Response:
    """
    GET /api/
    """
    return Response({
        'name': 'Day Planner API',
        'version': '1.0.0',
        'documentation': '/api/docs/',
        'features': [
            'Time-of-day aware task scoring',
            'Priority, balanced and grouped schedule options',
            'Preference-based morning and evening blocks',
            'Productivity feedback on completed tasks',
            'Onboarding quiz',
            'Rate limiting (30 req/min)',
            'OpenAPI/Swagger documentation'
        ],
        'endpoints': {
            'POST /api/schedules/generate/': 'Generate three schedule options',
            'POST /api/schedules/select/': 'Select one schedule option',
            'POST /api/schedules/complete-task/': 'Mark a scheduled task completed',
            'GET /api/schedules/strategies/': 'Describe the schedule strategies',
            'POST /api/tasks/score/': 'Score tasks for morning and evening',
            'POST /api/preferences/feedback/': 'Update preferences from a completed task',
            'POST /api/preferences/quiz/': 'Derive preferences from the onboarding quiz',
            'GET /api/preferences/defaults/': 'Default preferences',
            'GET /api/docs/': 'Interactive API documentation',
            'GET /api/schema/': 'OpenAPI schema',
            'GET /api/': 'This info endpoint'
        },
        'strategies': {
            strategy.value: STRATEGY_DESCRIPTIONS[strategy] for strategy in STRATEGY_ORDER
        },
        'error_codes': {
            code.value: code.name for code in ErrorCode
        }
    })
