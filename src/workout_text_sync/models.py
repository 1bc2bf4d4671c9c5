"""Data models for the structured workout the text codec keeps in sync."""
from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from workout_text_sync.config import settings
from workout_text_sync.utils import format_number

WeightUnit = Literal["kg", "lb"]
DistanceUnit = Literal["km", "mi", "m"]

# Exercise id -> one completion flag per flat set
ProgressMap = Dict[str, List[bool]]

_STORE_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "extra": "ignore",  # Ignore extra fields like 'volumeRowId' from older stores
}


class VolumeType(str, Enum):
    """How the volume of a single set is measured"""
    SETS_REPS = "sets-reps"
    SETS_REPS_WEIGHT = "sets-reps-weight"
    DURATION = "duration"
    DISTANCE = "distance"
    COMPLETION = "completion"  # Placeholder slot for exercises without volume

    @property
    def is_single_instance(self) -> bool:
        """Distance and duration rows always hold exactly one set."""
        return self in (VolumeType.DURATION, VolumeType.DISTANCE)

    @property
    def is_multi_instance(self) -> bool:
        return self in (VolumeType.SETS_REPS, VolumeType.SETS_REPS_WEIGHT)


class ExerciseSet(BaseModel):
    """One flat set. Sets expanded from the same text line share a group_id."""
    reps: int = 1
    weight: Optional[float] = None
    weight_unit: Optional[WeightUnit] = None
    duration: Optional[int] = Field(default=None, description="Duration in seconds")
    distance_unit: Optional[DistanceUnit] = None
    notes: str = Field(default="", description="Raw distance string for distance sets")
    rest_time: int = 90
    volume_type: VolumeType = VolumeType.SETS_REPS
    group_id: Optional[str] = None
    completed: Optional[bool] = None

    model_config = _STORE_CONFIG


class Exercise(BaseModel):
    """Represents a single exercise with its flat set list."""
    id: str
    name: str
    category: str = "General"
    muscle_groups: List[str] = Field(default_factory=list)
    equipment: List[str] = Field(default_factory=list)
    instructions: str = ""
    sets: List[ExerciseSet] = Field(default_factory=list)

    model_config = _STORE_CONFIG

    @property
    def has_only_completion_sets(self) -> bool:
        return all(s.volume_type == VolumeType.COMPLETION for s in self.sets)


class WorkoutTextResult(BaseModel):
    """Structured model and progress produced from one parse."""
    exercises: List[Exercise] = Field(default_factory=list)
    progress: ProgressMap = Field(default_factory=dict)


def build_set(
    volume_type: VolumeType,
    reps: int = 1,
    weight: Optional[float] = None,
    weight_unit: Optional[str] = None,
    duration_minutes: Optional[float] = None,
    distance: Optional[float] = None,
    distance_unit: Optional[str] = None,
    rest_time: int = 90,
    group_id: Optional[str] = None,
    completed: Optional[bool] = None,
) -> ExerciseSet:
    """
    Build a set from scratch carrying only the fields meaningful for its type.

    Missing duration/distance values fall back to 15 min / 10 km, missing
    weight to 0 kg. Sets are never patched across types; callers rebuild.
    """
    volume_type = VolumeType(volume_type)
    fields = {
        "reps": reps,
        "rest_time": rest_time,
        "notes": "",
        "volume_type": volume_type,
        "group_id": group_id,
        "completed": completed,
    }

    if volume_type == VolumeType.SETS_REPS_WEIGHT:
        fields["weight"] = weight if weight is not None else 0
        fields["weight_unit"] = weight_unit or "kg"
    elif volume_type == VolumeType.DURATION:
        minutes = duration_minutes if duration_minutes else settings.DEFAULT_DURATION_MIN
        fields["duration"] = int(round(minutes * 60))
        fields["reps"] = 1
    elif volume_type == VolumeType.DISTANCE:
        value = distance if distance else settings.DEFAULT_DISTANCE
        unit = distance_unit or settings.DEFAULT_DISTANCE_UNIT
        fields["notes"] = f"{format_number(value)}{unit}"
        fields["distance_unit"] = unit
        fields["reps"] = 1
    elif volume_type == VolumeType.COMPLETION:
        fields["reps"] = 1
        fields["rest_time"] = 0

    return ExerciseSet(**fields)
