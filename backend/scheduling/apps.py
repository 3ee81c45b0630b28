from django.apps import AppConfig


class SchedulingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "scheduling"
    verbose_name = "Daily schedule generator"

    def ready(self):
        from day_planner.logging import configure_structlog

        configure_structlog()
