"""Model building, progress, volume rows and text generation."""
from .codec import generate_workout_text, parse_workout_text
from .completion_stats import WorkoutCompletionStats, analyze_workout_completion, is_workout_complete
from .model_builder import build_exercise, build_exercises
from .progress_reconciler import apply_progress, progress_from_sets, reconcile_progress
from .sync_session import TextSyncSession
from .volume_rows import (
    VolumeRow,
    add_volume_row,
    get_volume_rows,
    remove_volume_row,
    update_volume_row,
)

__all__ = [
    "TextSyncSession",
    "VolumeRow",
    "WorkoutCompletionStats",
    "add_volume_row",
    "analyze_workout_completion",
    "apply_progress",
    "build_exercise",
    "build_exercises",
    "generate_workout_text",
    "get_volume_rows",
    "is_workout_complete",
    "parse_workout_text",
    "progress_from_sets",
    "reconcile_progress",
    "remove_volume_row",
    "update_volume_row",
]
