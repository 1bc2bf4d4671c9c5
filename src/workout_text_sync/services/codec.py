"""Text <-> model codec entry points.

    result = parse_workout_text(text, existing=previous_exercises)
    text = generate_workout_text(result.exercises, result.progress)

Both directions are pure and synchronous.
"""
import logging
from typing import Optional, Sequence

from workout_text_sync.models import Exercise, WorkoutTextResult
from workout_text_sync.parsers.text_parser import WorkoutTextParser
from workout_text_sync.services.model_builder import build_exercises
from workout_text_sync.services.progress_reconciler import reconcile_progress
from workout_text_sync.services.text_generator import generate_workout_text


logger = logging.getLogger(__name__)

__all__ = ["parse_workout_text", "generate_workout_text"]


def parse_workout_text(
    text: str,
    existing: Optional[Sequence[Exercise]] = None,
    mark_all_complete: bool = False,
) -> WorkoutTextResult:
    """
    Parse workout text into exercises and their progress map.

    Args:
        text: Workout text
        existing: Previous exercises; id, category, muscle groups and
            equipment are preserved by position
        mark_all_complete: Mark every set done regardless of markers

    Returns:
        WorkoutTextResult with exercises and progress
    """
    parsed = WorkoutTextParser().parse(text)
    exercises = build_exercises(parsed, existing)
    progress = reconcile_progress(parsed, exercises, mark_all_complete=mark_all_complete)
    return WorkoutTextResult(exercises=exercises, progress=progress)
