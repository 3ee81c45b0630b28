"""
URL configuration for the scheduling app.
"""

from django.urls import path
from . import views

urlpatterns = [
    path('', views.api_info, name='api-info'),
    path('schedules/generate/', views.generate_schedules, name='generate-schedules'),
    path('schedules/select/', views.select_schedule_option, name='select-schedule'),
    path('schedules/complete-task/', views.complete_task, name='complete-scheduled-task'),
    path('schedules/strategies/', views.get_strategies, name='get-strategies'),
    path('tasks/score/', views.score_tasks, name='score-tasks'),
    # Preference endpoints
    path('preferences/feedback/', views.productivity_feedback, name='productivity-feedback'),
    path('preferences/quiz/', views.onboarding_quiz, name='onboarding-quiz'),
    path('preferences/defaults/', views.get_default_preferences, name='default-preferences'),
]
