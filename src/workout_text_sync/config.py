"""Configuration settings for the workout text codec."""
import os
from typing import Literal

from workout_text_sync.utils import to_float, to_int


EnvironmentType = Literal["development", "staging", "production"]
DistanceUnit = Literal["km", "mi", "m"]


class Settings:
    """Library settings."""

    # Environment
    ENVIRONMENT: EnvironmentType = "development"

    # Defaults for parsed and UI-created sets
    DEFAULT_REST_SEC: int = 90
    DEFAULT_ROW_SETS: int = 3
    DEFAULT_ROW_REPS: int = 10
    DEFAULT_DISTANCE: float = 10.0
    DEFAULT_DISTANCE_UNIT: DistanceUnit = "km"
    DEFAULT_DURATION_MIN: float = 15.0

    # Editor sync
    TEXT_SYNC_DEBOUNCE_MS: int = 300

    def __init__(self):
        # Environment
        env = os.getenv("ENVIRONMENT", "development").lower()
        if env in ("development", "staging", "production"):
            self.ENVIRONMENT = env  # type: ignore
        else:
            self.ENVIRONMENT = "development"

        # Set defaults
        self.DEFAULT_REST_SEC = to_int(os.getenv("WORKOUT_DEFAULT_REST_SEC"), 90)
        self.DEFAULT_ROW_SETS = max(1, to_int(os.getenv("WORKOUT_DEFAULT_ROW_SETS"), 3))
        self.DEFAULT_ROW_REPS = to_int(os.getenv("WORKOUT_DEFAULT_ROW_REPS"), 10)
        self.DEFAULT_DISTANCE = to_float(os.getenv("WORKOUT_DEFAULT_DISTANCE"), 10.0)
        self.DEFAULT_DURATION_MIN = to_float(os.getenv("WORKOUT_DEFAULT_DURATION_MIN"), 15.0)

        unit = os.getenv("WORKOUT_DEFAULT_DISTANCE_UNIT", "km").lower()
        if unit in ("km", "mi", "m"):
            self.DEFAULT_DISTANCE_UNIT = unit  # type: ignore
        else:
            self.DEFAULT_DISTANCE_UNIT = "km"

        # Editor sync
        self.TEXT_SYNC_DEBOUNCE_MS = to_int(os.getenv("TEXT_SYNC_DEBOUNCE_MS"), 300)

    @property
    def debounce_seconds(self) -> float:
        return max(0, self.TEXT_SYNC_DEBOUNCE_MS) / 1000.0


settings = Settings()
