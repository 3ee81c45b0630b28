"""
Django settings for the day_planner project.

Values come from the environment, with a ``.env`` file next to ``manage.py``
loaded first when present.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

from day_planner.logging import build_logging_config


BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / ".env")


def env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def env_list(name: str, default: str = "") -> list:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "django-insecure-day-planner-dev-key")

DEBUG = env_bool("DJANGO_DEBUG", True)

ALLOWED_HOSTS = env_list("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver")


INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "drf_spectacular",
    "scheduling",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "day_planner.urls"

WSGI_APPLICATION = "day_planner.wsgi.application"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.getenv("DJANGO_DB_PATH", str(BASE_DIR / "db.sqlite3")),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"


LANGUAGE_CODE = "en-us"

TIME_ZONE = os.getenv("DJANGO_TIME_ZONE", "UTC")

USE_I18N = False

USE_TZ = True


REST_FRAMEWORK = {
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "DEFAULT_PARSER_CLASSES": ["rest_framework.parsers.JSONParser"],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "UNAUTHENTICATED_USER": None,
}

SPECTACULAR_SETTINGS = {
    "TITLE": "Day Planner API",
    "DESCRIPTION": "Generates priority, balanced and grouped daily schedules from pending tasks.",
    "VERSION": "1.0.0",
}


# Schedule generator tunables; each can be overridden with SCHEDULER_<NAME>.
SCHEDULER = {
    "MIN_SLOT_MINUTES": int(os.getenv("SCHEDULER_MIN_SLOT_MINUTES", "15")),
    "SCORE_VARIANCE": float(os.getenv("SCHEDULER_SCORE_VARIANCE", "5")),
    "MORNING_BLOCK_START_HOUR": int(os.getenv("SCHEDULER_MORNING_BLOCK_START_HOUR", "8")),
    "MORNING_BLOCK_HOURS": int(os.getenv("SCHEDULER_MORNING_BLOCK_HOURS", "4")),
    "EVENING_BLOCK_START_HOUR": int(os.getenv("SCHEDULER_EVENING_BLOCK_START_HOUR", "17")),
    "EVENING_BLOCK_HOURS": int(os.getenv("SCHEDULER_EVENING_BLOCK_HOURS", "5")),
    "FEEDBACK_ALPHA": float(os.getenv("SCHEDULER_FEEDBACK_ALPHA", "0.1")),
}


LOGGING = build_logging_config(
    level=os.getenv("LOG_LEVEL", "INFO"),
    log_format=os.getenv("LOG_FORMAT", "console"),
)
