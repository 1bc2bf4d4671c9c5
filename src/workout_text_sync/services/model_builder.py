"""Expand parsed exercises into the flat exercise/set model.

Every '<N>x<reps>' line becomes N sets sharing one fresh group id; every
distance and duration line becomes a single set with its own group id. An
exercise that ends up with no sets gets one synthetic 'completion' set so the
progress map always has a slot for it.
"""
import logging
import uuid
from typing import List, Optional, Sequence

from workout_text_sync.config import settings
from workout_text_sync.models import Exercise, ExerciseSet, VolumeType, build_set
from workout_text_sync.parsers.base import BaseParser
from workout_text_sync.parsers.models import ParsedExercise, ParsedWorkout, VolumeEntry


logger = logging.getLogger(__name__)


def new_group_id(prefix: str = "volume") -> str:
    """Opaque id shared by all sets expanded from one text line."""
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


def new_exercise_id() -> str:
    return f"exercise_{uuid.uuid4().hex}"


def _expand_set_lines(parsed: ParsedExercise, rest_time: int) -> List[ExerciseSet]:
    sets: List[ExerciseSet] = []
    for parsed_set in parsed.sets:
        group_id = new_group_id()
        weight, weight_unit = BaseParser.parse_weight(parsed_set.weight)
        volume_type = VolumeType.SETS_REPS_WEIGHT if weight is not None else VolumeType.SETS_REPS
        for _ in range(parsed_set.sets_planned):
            sets.append(ExerciseSet(
                reps=parsed_set.reps,
                weight=weight,
                weight_unit=weight_unit,
                rest_time=rest_time,
                volume_type=volume_type,
                group_id=group_id,
                completed=False,
            ))
    return sets


def _distance_entries(parsed: ParsedExercise) -> List[VolumeEntry]:
    if parsed.distances:
        return parsed.distances
    if parsed.distance:
        return [VolumeEntry(value=parsed.distance, done=parsed.distance_done)]
    return []


def _time_entries(parsed: ParsedExercise) -> List[VolumeEntry]:
    if parsed.times:
        return parsed.times
    if parsed.time:
        return [VolumeEntry(value=parsed.time, done=parsed.time_done)]
    return []


def _expand_distances(parsed: ParsedExercise, rest_time: int) -> List[ExerciseSet]:
    sets: List[ExerciseSet] = []
    for entry in _distance_entries(parsed):
        match = BaseParser.DISTANCE_VALUE_PATTERN.search(entry.value)
        if not match:
            logger.debug(f"Skipping unreadable distance '{entry.value}'")
            continue
        sets.append(ExerciseSet(
            reps=1,
            notes=entry.value,
            distance_unit=match.group(2),
            rest_time=rest_time,
            volume_type=VolumeType.DISTANCE,
            group_id=new_group_id(),
            completed=False,
        ))
    return sets


def _expand_times(parsed: ParsedExercise, rest_time: int) -> List[ExerciseSet]:
    return [
        ExerciseSet(
            reps=1,
            duration=BaseParser.parse_time_to_seconds(entry.value),
            rest_time=rest_time,
            volume_type=VolumeType.DURATION,
            group_id=new_group_id(),
            completed=False,
        )
        for entry in _time_entries(parsed)
    ]


def build_exercise(
    parsed: ParsedExercise,
    existing: Optional[Exercise] = None,
    rest_time: Optional[int] = None,
) -> Exercise:
    """
    Build one Exercise from a parsed exercise.

    Args:
        parsed: Parsed exercise block
        existing: Exercise at the same position in the previous model, if any;
            its id, category, muscle groups and equipment are kept
        rest_time: Rest seconds for expanded sets (defaults to settings)

    Returns:
        Exercise with at least one set
    """
    if rest_time is None:
        rest_time = settings.DEFAULT_REST_SEC

    sets = _expand_set_lines(parsed, rest_time)
    sets.extend(_expand_distances(parsed, rest_time))
    sets.extend(_expand_times(parsed, rest_time))

    if not sets:
        sets.append(build_set(
            VolumeType.COMPLETION,
            group_id=new_group_id("completion"),
            completed=False,
        ))

    return Exercise(
        id=existing.id if existing else new_exercise_id(),
        name=parsed.name,
        category=existing.category if existing else "General",
        muscle_groups=list(existing.muscle_groups) if existing else [],
        equipment=list(existing.equipment) if existing else [],
        instructions=parsed.cues or "",
        sets=sets,
    )


def build_exercises(
    parsed: ParsedWorkout,
    existing: Optional[Sequence[Exercise]] = None,
) -> List[Exercise]:
    """Convert a parsed workout to exercises, preserving identity by position."""
    existing = existing or []
    exercises = []
    for index, parsed_exercise in enumerate(parsed.exercises):
        previous = existing[index] if index < len(existing) else None
        exercises.append(build_exercise(parsed_exercise, previous))
    logger.debug(
        f"Built {len(exercises)} exercises "
        f"({sum(len(e.sets) for e in exercises)} sets)"
    )
    return exercises
