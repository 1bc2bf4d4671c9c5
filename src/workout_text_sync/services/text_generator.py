"""Generate canonical workout text from exercises plus progress.

The emitted forms are exactly the ones the text parser reads back, so
generate(parse(generate(...))) is stable after one pass:

    - Pull-ups
    5x7 +++++
    4x5x40kg +++

    - Running
    10km +
"""
import logging
from typing import Dict, List, Optional, Sequence, Tuple

from workout_text_sync.models import Exercise, ExerciseSet, ProgressMap, VolumeType
from workout_text_sync.utils import format_number, number_from_text, round_half_up


logger = logging.getLogger(__name__)


def volume_key(exercise_set: ExerciseSet) -> str:
    """Canonical text of one set's volume, without the set count."""
    volume_type = exercise_set.volume_type
    if volume_type == VolumeType.SETS_REPS_WEIGHT:
        weight = format_number(exercise_set.weight or 0)
        return f"{exercise_set.reps}x{weight}{exercise_set.weight_unit or 'kg'}"
    if volume_type == VolumeType.DURATION:
        return f"{round_half_up((exercise_set.duration or 0) / 60)}min"
    if volume_type == VolumeType.DISTANCE:
        distance = format_number(number_from_text(exercise_set.notes))
        return f"{distance}{exercise_set.distance_unit or 'km'}"
    return f"{exercise_set.reps}"


def _group_sets(sets: Sequence[ExerciseSet]) -> List[Tuple[ExerciseSet, List[int]]]:
    """
    Group non-completion sets by canonical key, in first-seen order.

    Sets from different text lines (different group ids) stay apart so that
    their completion markers survive a round trip; sets without a group id
    merge on the canonical key alone.
    """
    groups: Dict[Tuple[Optional[str], str], List[int]] = {}
    for index, exercise_set in enumerate(sets):
        if exercise_set.volume_type == VolumeType.COMPLETION:
            continue
        key = (exercise_set.group_id, volume_key(exercise_set))
        groups.setdefault(key, []).append(index)
    return [(sets[indices[0]], indices) for indices in groups.values()]


def _volume_lines(exercise: Exercise, progress: Sequence[bool]) -> List[str]:
    lines = []
    for first, indices in _group_sets(exercise.sets):
        done = [bool(progress[i]) if i < len(progress) else False for i in indices]
        key = volume_key(first)
        if first.volume_type.is_single_instance:
            # One line per set keeps each entry's own marker
            lines.extend(f"{key} {'+' if flag else ''}".rstrip() for flag in done)
        else:
            lines.append(f"{len(indices)}x{key} {'+' * sum(done)}".rstrip())
    return lines


def generate_exercise_text(exercise: Exercise, progress: Optional[Sequence[bool]] = None) -> str:
    """Text block for one exercise."""
    progress = progress or []
    only_completion = exercise.has_only_completion_sets

    header = f"- {exercise.name}"
    if only_completion and any(progress):
        header += " +"
    lines = [header]

    if exercise.instructions:
        lines.append(exercise.instructions)

    if not only_completion:
        lines.extend(_volume_lines(exercise, progress))

    return "\n".join(lines)


def generate_workout_text(exercises: Sequence[Exercise], progress: ProgressMap) -> str:
    """
    Generate workout text for exercises in model order.

    Args:
        exercises: Structured exercises
        progress: Exercise id -> completion flag per set

    Returns:
        Text with one blank line between exercises and no trailing whitespace
    """
    blocks = [
        generate_exercise_text(exercise, progress.get(exercise.id, []))
        for exercise in exercises
    ]
    text = "\n\n".join(blocks).rstrip()
    logger.debug(f"Generated text for {len(blocks)} exercises")
    return text
