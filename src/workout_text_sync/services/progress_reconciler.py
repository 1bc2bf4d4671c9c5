"""Derive per-set completion from parsed completion markers.

The text is authoritative: the progress computed here replaces whatever was
known before for an exercise, it is never merged with UI-only state.
"""
import logging
from typing import List, Sequence

from workout_text_sync.models import Exercise, ProgressMap, VolumeType
from workout_text_sync.parsers.models import ParsedExercise, ParsedWorkout


logger = logging.getLogger(__name__)


def reconcile_exercise(parsed: ParsedExercise, exercise: Exercise) -> List[bool]:
    """
    Build the boolean array for one exercise.

    Order of precedence:
    1. '+' on the header of an exercise with volume: everything done
    2. Per-line '+' counts on set lines, slot by slot in set order
    3. Per-entry done flags for distance/duration sets (legacy single flag
       when no per-entry list exists)
    4. '+' on the header of a volume-less exercise: its completion slot
    """
    size = len(exercise.sets)
    progress = [False] * size

    if parsed.exercise_level_done:
        return [True] * size

    slot = 0
    for parsed_set in parsed.sets:
        # Extra markers beyond the planned sets are absorbed here
        for i in range(parsed_set.sets_planned):
            if slot < size:
                progress[slot] = i < parsed_set.sets_done
            slot += 1

    distance_index = 0
    time_index = 0
    for index, exercise_set in enumerate(exercise.sets):
        if exercise_set.volume_type == VolumeType.DISTANCE:
            if distance_index < len(parsed.distances):
                progress[index] = parsed.distances[distance_index].done
                distance_index += 1
            elif parsed.distance_done:
                progress[index] = True
        elif exercise_set.volume_type == VolumeType.DURATION:
            if time_index < len(parsed.times):
                progress[index] = parsed.times[time_index].done
                time_index += 1
            elif parsed.time_done:
                progress[index] = True

    if parsed.done and not parsed.has_volume and size:
        completion_index = next(
            (i for i, s in enumerate(exercise.sets) if s.volume_type == VolumeType.COMPLETION),
            0,
        )
        progress[completion_index] = True

    return progress


def reconcile_progress(
    parsed: ParsedWorkout,
    exercises: Sequence[Exercise],
    mark_all_complete: bool = False,
) -> ProgressMap:
    """
    Compute the progress map for exercises built from `parsed`.

    Args:
        parsed: Parse result the exercises were built from (same order)
        exercises: Exercises built from the parse
        mark_all_complete: Mark every set done regardless of markers, used
            when logging workouts after the fact

    Returns:
        Exercise id -> one bool per flat set
    """
    progress: ProgressMap = {}
    for index, exercise in enumerate(exercises):
        if mark_all_complete:
            progress[exercise.id] = [True] * len(exercise.sets)
            continue
        if index >= len(parsed.exercises):
            logger.warning(f"No parsed block for exercise '{exercise.name}' at {index}")
            progress[exercise.id] = [False] * len(exercise.sets)
            continue
        progress[exercise.id] = reconcile_exercise(parsed.exercises[index], exercise)
    return progress


def apply_progress(exercises: Sequence[Exercise], progress: ProgressMap) -> List[Exercise]:
    """Copy exercises with each set's `completed` flag taken from the progress map."""
    updated = []
    for exercise in exercises:
        flags = progress.get(exercise.id, [])
        sets = [
            s.model_copy(update={"completed": bool(flags[i]) if i < len(flags) else False})
            for i, s in enumerate(exercise.sets)
        ]
        updated.append(exercise.model_copy(update={"sets": sets}))
    return updated


def progress_from_sets(exercises: Sequence[Exercise]) -> ProgressMap:
    """Read the progress map back from the sets' `completed` flags."""
    return {
        exercise.id: [bool(s.completed) for s in exercise.sets]
        for exercise in exercises
    }
