"""Bidirectional codec between workout text and a structured exercise/set model."""
from .models import Exercise, ExerciseSet, ProgressMap, VolumeType, WorkoutTextResult, build_set
from .services import (
    TextSyncSession,
    VolumeRow,
    add_volume_row,
    analyze_workout_completion,
    generate_workout_text,
    get_volume_rows,
    parse_workout_text,
    remove_volume_row,
    update_volume_row,
)
from .parsers import parse_bulk_workouts

__all__ = [
    "Exercise",
    "ExerciseSet",
    "ProgressMap",
    "TextSyncSession",
    "VolumeRow",
    "VolumeType",
    "WorkoutTextResult",
    "add_volume_row",
    "analyze_workout_completion",
    "build_set",
    "generate_workout_text",
    "get_volume_rows",
    "parse_bulk_workouts",
    "parse_workout_text",
    "remove_volume_row",
    "update_volume_row",
]
