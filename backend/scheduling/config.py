"""
Tunable constants for the schedule generator.

The pure scheduling functions take a ``SchedulerConfig``; the HTTP layer builds
one from the ``SCHEDULER`` dict in Django settings.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from django.conf import settings


@dataclass(frozen=True)
class SchedulerConfig:
    """
    Configuration for block planning, packing and randomization.

    Attributes:
        min_slot_minutes: A block stops accepting tasks once fewer minutes
            than this remain after a placement
        score_variance: Maximum absolute noise added to scores feeding the
            balanced and grouped strategies
        morning_block_start_hour: Nominal start of the preference-based
            morning block
        morning_block_hours: Nominal span of the morning block
        evening_block_start_hour: Nominal start of the evening block
        evening_block_hours: Nominal span of the evening block
        feedback_alpha: Weight of a new completion in productivity feedback
    """
    min_slot_minutes: int = 15
    score_variance: float = 5.0
    morning_block_start_hour: int = 8
    morning_block_hours: int = 4
    evening_block_start_hour: int = 17
    evening_block_hours: int = 5
    feedback_alpha: float = 0.1

    @classmethod
    def from_dict(cls, values: Optional[Dict[str, Any]]) -> "SchedulerConfig":
        """Build a config from a settings-style dict (``MIN_SLOT_MINUTES`` etc.)."""
        if not values:
            return cls()
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in values.items():
            name = key.lower()
            if name in known and value is not None:
                kwargs[name] = value
        return cls(**kwargs)

    @classmethod
    def from_settings(cls) -> "SchedulerConfig":
        return cls.from_dict(getattr(settings, "SCHEDULER", None))


DEFAULT_CONFIG = SchedulerConfig()
