"""Volume rows: an editable, derived view over an exercise's flat set list.

Sets sharing a group id form one row. Rows are recomputed on every call and
never stored; every mutation returns a new Exercise whose set list has been
rewritten. Sets touched by a mutation are rebuilt from scratch with
`build_set`, so no field from a previous volume type survives.
"""
import logging
from typing import Any, Dict, List, Optional, get_args

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from workout_text_sync.config import settings
from workout_text_sync.models import (
    DistanceUnit,
    Exercise,
    ExerciseSet,
    VolumeType,
    WeightUnit,
    build_set,
)
from workout_text_sync.services.model_builder import new_group_id
from workout_text_sync.utils import number_from_text, to_float, to_int


logger = logging.getLogger(__name__)


class VolumeRow(BaseModel):
    """One row of sets sharing origin and parameters"""
    type: VolumeType
    total_sets: int = Field(..., ge=1)
    reps: int
    weight: Optional[float] = None
    weight_unit: Optional[WeightUnit] = None
    duration: Optional[float] = Field(default=None, description="Duration in minutes")
    distance: Optional[float] = None
    distance_unit: Optional[DistanceUnit] = None
    member_indices: List[int] = Field(default_factory=list)
    group_id: Optional[str] = None


def get_volume_rows(exercise: Exercise) -> List[VolumeRow]:
    """Group non-completion sets by group id, ordered by first member position."""
    groups: Dict[str, List[int]] = {}

    for index, exercise_set in enumerate(exercise.sets):
        if exercise_set.volume_type == VolumeType.COMPLETION:
            continue
        key = exercise_set.group_id or f"legacy-{index}"
        groups.setdefault(key, []).append(index)

    rows = []
    for key, indices in sorted(groups.items(), key=lambda item: min(item[1])):
        first = exercise.sets[indices[0]]
        row = VolumeRow(
            type=first.volume_type,
            total_sets=len(indices),
            reps=first.reps,
            member_indices=indices,
            group_id=first.group_id,
        )
        if first.volume_type == VolumeType.SETS_REPS_WEIGHT:
            row.weight = first.weight
            row.weight_unit = first.weight_unit
        elif first.volume_type == VolumeType.DURATION:
            row.duration = (first.duration or 0) / 60
        elif first.volume_type == VolumeType.DISTANCE:
            row.distance = number_from_text(first.notes)
            row.distance_unit = first.distance_unit
        rows.append(row)

    return rows


_ROW_KEYS = {to_camel(name): name for name in VolumeRow.model_fields}
_WEIGHT_UNITS = get_args(WeightUnit)
_DISTANCE_UNITS = get_args(DistanceUnit)


def _normalize_keys(changes: Dict[str, Any]) -> Dict[str, Any]:
    """Accept both snake_case and the store's camelCase keys."""
    return {_ROW_KEYS.get(key, key): value for key, value in (changes or {}).items()}


def _non_negative_int(value: Any, default: Optional[int]) -> Optional[int]:
    result = to_int(value)
    return result if result is not None and result >= 0 else default


def _non_negative_float(value: Any, default: Optional[float]) -> Optional[float]:
    result = to_float(value)
    return result if result is not None and result >= 0 else default


def _row_type(value: Any, default: VolumeType) -> VolumeType:
    """Volume type of an edit; unknown values and 'completion' keep the current type."""
    try:
        volume_type = VolumeType(value)
    except ValueError:
        logger.warning(f"Ignoring unknown volume type '{value}'")
        return default
    if volume_type == VolumeType.COMPLETION:
        logger.warning("Rows cannot be turned into completion slots")
        return default
    return volume_type


def _unit(value: Any, allowed: tuple, default: Optional[str]) -> Optional[str]:
    if value in allowed:
        return value
    if value:
        logger.warning(f"Ignoring unknown unit '{value}'")
    return default


def _merge_changes(row: VolumeRow, changes: Dict[str, Any]) -> VolumeRow:
    """Apply UI edits to a row; invalid or negative values fall back to the current value."""
    merged = row.model_copy()
    if changes.get("type") is not None:
        merged.type = _row_type(changes["type"], row.type)
    if "total_sets" in changes:
        merged.total_sets = max(1, to_int(changes["total_sets"], row.total_sets))
    if "reps" in changes:
        merged.reps = _non_negative_int(changes["reps"], row.reps)
    if "weight" in changes:
        merged.weight = _non_negative_float(changes["weight"], row.weight)
    if "weight_unit" in changes:
        merged.weight_unit = _unit(changes["weight_unit"], _WEIGHT_UNITS, row.weight_unit)
    if "duration" in changes:
        merged.duration = _non_negative_float(changes["duration"], row.duration)
    if "distance" in changes:
        merged.distance = _non_negative_float(changes["distance"], row.distance)
    if "distance_unit" in changes:
        merged.distance_unit = _unit(changes["distance_unit"], _DISTANCE_UNITS, row.distance_unit)
    return merged


def _build_row_set(
    row: VolumeRow,
    rest_time: int,
    group_id: Optional[str],
    completed: Optional[bool] = False,
) -> ExerciseSet:
    return build_set(
        row.type,
        reps=row.reps,
        weight=row.weight,
        weight_unit=row.weight_unit,
        duration_minutes=row.duration,
        distance=row.distance,
        distance_unit=row.distance_unit,
        rest_time=rest_time,
        group_id=group_id,
        completed=completed,
    )


def _ensure_slot(sets: List[ExerciseSet]) -> List[ExerciseSet]:
    """An exercise never ends up without sets: fall back to a completion slot."""
    if sets:
        return sets
    return [build_set(VolumeType.COMPLETION, group_id=new_group_id("completion"), completed=False)]


def update_volume_row(exercise: Exercise, row_index: int, changes: Dict[str, Any]) -> Exercise:
    """
    Apply edits to one volume row.

    Four cases:
    1. Retype to distance/duration: the row collapses to one fresh set at
       the row's first position
    2. Retype from distance/duration to a sets-based type: the row expands
       to the default number of fresh sets
    3. Count change on a sets-based row: members are rebuilt with the new
       parameters, then sets are appended after the last member or removed
       from the tail of the row
    4. Anything else: every member is rebuilt in place

    Args:
        exercise: Exercise owning the row
        row_index: Index into get_volume_rows(exercise)
        changes: Any of type, total_sets, reps, weight, weight_unit,
            duration (minutes), distance, distance_unit, in snake_case or
            camelCase. Unknown types and units and negative numbers are
            ignored

    Returns:
        New Exercise; the input is returned unchanged for an unknown row
    """
    rows = get_volume_rows(exercise)
    if row_index < 0 or row_index >= len(rows):
        logger.warning(f"Volume row {row_index} does not exist on '{exercise.name}'")
        return exercise

    row = rows[row_index]
    changes = _normalize_keys(changes)
    merged = _merge_changes(row, changes)
    members = row.member_indices
    template = exercise.sets[members[0]]
    rest_time = template.rest_time
    group_id = template.group_id or new_group_id()
    new_type = merged.type
    type_changed = new_type != row.type
    sets = list(exercise.sets)
    insert_at = min(members)

    if type_changed and new_type.is_single_instance:
        merged.total_sets = 1
        if new_type == VolumeType.DURATION:
            merged.duration = _non_negative_float(changes.get("duration"), None)
        else:
            merged.distance = _non_negative_float(changes.get("distance"), None)
            merged.distance_unit = _unit(changes.get("distance_unit"), _DISTANCE_UNITS, None)
        sets = [s for i, s in enumerate(sets) if i not in members]
        sets.insert(insert_at, _build_row_set(merged, rest_time, group_id))

    elif type_changed and new_type.is_multi_instance and row.type.is_single_instance:
        merged.reps = _non_negative_int(changes.get("reps"), settings.DEFAULT_ROW_REPS)
        if new_type == VolumeType.SETS_REPS_WEIGHT:
            merged.weight = _non_negative_float(changes.get("weight"), 0.0)
            merged.weight_unit = _unit(changes.get("weight_unit"), _WEIGHT_UNITS, "kg")
        count = settings.DEFAULT_ROW_SETS
        sets = [s for i, s in enumerate(sets) if i not in members]
        sets[insert_at:insert_at] = [
            _build_row_set(merged, rest_time, group_id) for _ in range(count)
        ]

    elif merged.total_sets != row.total_sets and new_type.is_multi_instance:
        for i in members:
            sets[i] = _build_row_set(merged, rest_time, group_id, sets[i].completed)
        difference = merged.total_sets - row.total_sets
        if difference > 0:
            position = max(members) + 1
            sets[position:position] = [
                _build_row_set(merged, rest_time, group_id) for _ in range(difference)
            ]
        else:
            doomed = set(members[difference:])
            sets = [s for i, s in enumerate(sets) if i not in doomed]

    else:
        for i in members:
            sets[i] = _build_row_set(merged, rest_time, group_id, sets[i].completed)

    return exercise.model_copy(update={"sets": _ensure_slot(sets)})


def add_volume_row(exercise: Exercise) -> Exercise:
    """Append a default sets-reps row (3 x 10, 90 s rest) with a new group id."""
    group_id = new_group_id()
    new_sets = [
        build_set(
            VolumeType.SETS_REPS,
            reps=settings.DEFAULT_ROW_REPS,
            rest_time=settings.DEFAULT_REST_SEC,
            group_id=group_id,
            completed=False,
        )
        for _ in range(settings.DEFAULT_ROW_SETS)
    ]
    # Real volume replaces the completion placeholder
    existing = [] if exercise.has_only_completion_sets else list(exercise.sets)
    return exercise.model_copy(update={"sets": existing + new_sets})


def remove_volume_row(exercise: Exercise, row_index: int) -> Exercise:
    """Delete every set belonging to the row."""
    rows = get_volume_rows(exercise)
    if row_index < 0 or row_index >= len(rows):
        logger.warning(f"Volume row {row_index} does not exist on '{exercise.name}'")
        return exercise

    members = set(rows[row_index].member_indices)
    sets = [s for i, s in enumerate(exercise.sets) if i not in members]
    return exercise.model_copy(update={"sets": _ensure_slot(sets)})
