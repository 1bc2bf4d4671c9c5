"""Parsers for workout text."""
from .models import ParsedExercise, ParsedSet, ParsedWorkout, VolumeEntry
from .base import BaseParser
from .text_parser import WorkoutTextParser, normalize_lines, parse_workout
from .bulk_parser import (
    BulkWorkoutParser,
    ImportedWorkout,
    format_date_for_display,
    parse_bulk_workouts,
    parse_date_to_iso,
)

__all__ = [
    "BaseParser",
    "BulkWorkoutParser",
    "ImportedWorkout",
    "ParsedExercise",
    "ParsedSet",
    "ParsedWorkout",
    "VolumeEntry",
    "WorkoutTextParser",
    "format_date_for_display",
    "normalize_lines",
    "parse_bulk_workouts",
    "parse_date_to_iso",
    "parse_workout",
]
