"""Workout completion analysis over a progress map."""
from typing import List, Literal, Sequence

from pydantic import BaseModel

from workout_text_sync.models import Exercise, ProgressMap

CompletionStatus = Literal["not-started", "partially-done", "completed"]


class CompletionCount(BaseModel):
    completed: int = 0
    total: int = 0
    completion_rate: float = 0.0


class WorkoutCompletionStats(BaseModel):
    """Completion summary for a whole workout"""
    status: CompletionStatus
    exercises: CompletionCount
    sets: CompletionCount
    has_any_progress: bool


def _rate(completed: int, total: int) -> float:
    return (completed / total) * 100 if total > 0 else 0.0


def exercise_flags(exercise: Exercise, progress: ProgressMap) -> List[bool]:
    """Completion flags for every set of an exercise (missing entries are False)."""
    flags = progress.get(exercise.id, [])
    return [bool(flags[i]) if i < len(flags) else False for i in range(len(exercise.sets))]


def analyze_workout_completion(
    exercises: Sequence[Exercise],
    progress: ProgressMap,
) -> WorkoutCompletionStats:
    """Count completed sets and exercises and derive the workout status."""
    exercises_completed = 0
    exercises_with_progress = 0
    sets_total = 0
    sets_completed = 0

    for exercise in exercises:
        flags = exercise_flags(exercise, progress)
        sets_total += len(flags)
        sets_completed += sum(flags)
        if flags and all(flags):
            exercises_completed += 1
        if any(flags):
            exercises_with_progress += 1

    total_exercises = len(exercises)
    if total_exercises and exercises_completed == total_exercises:
        status = "completed"
    elif exercises_with_progress:
        status = "partially-done"
    else:
        status = "not-started"

    return WorkoutCompletionStats(
        status=status,
        exercises=CompletionCount(
            completed=exercises_completed,
            total=total_exercises,
            completion_rate=_rate(exercises_completed, total_exercises),
        ),
        sets=CompletionCount(
            completed=sets_completed,
            total=sets_total,
            completion_rate=_rate(sets_completed, sets_total),
        ),
        has_any_progress=exercises_with_progress > 0,
    )


def is_workout_complete(exercises: Sequence[Exercise], progress: ProgressMap) -> bool:
    """True when every set of every exercise is done."""
    return analyze_workout_completion(exercises, progress).status == "completed"
