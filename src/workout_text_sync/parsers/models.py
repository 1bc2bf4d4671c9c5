"""
Parser Models

Pydantic models for the intermediate parse of workout text. They are built
per parse call and discarded once converted into the structured model.
"""

from typing import List, Optional
from pydantic import BaseModel, Field


class ParsedSet(BaseModel):
    """One '<sets> x <reps> [x <weight><unit>]' line"""
    sets_planned: int = Field(..., ge=1)
    reps: int = Field(..., ge=0)
    weight: Optional[str] = Field(default=None, description="Weight with unit, e.g. '40kg'")
    sets_done: int = Field(default=0, ge=0, description="Number of '+' markers on the line")


class VolumeEntry(BaseModel):
    """A single distance or duration line with its own done flag"""
    value: str = Field(..., description="Compact value, e.g. '10km' or '1h30m'")
    done: bool = False


class ParsedExercise(BaseModel):
    """Everything collected under one '- Name' header"""
    name: str = Field(..., description="Header text with trailing '+' stripped")
    done: bool = False
    exercise_level_done: bool = Field(
        default=False,
        description="Header carried '+' and the exercise has volume: all volume is done",
    )
    sets: List[ParsedSet] = Field(default_factory=list)
    cues: Optional[str] = None

    # Per-line entries, one per distance/duration line in order
    distances: List[VolumeEntry] = Field(default_factory=list)
    times: List[VolumeEntry] = Field(default_factory=list)

    # Legacy single-value fields (last entry wins)
    distance: Optional[str] = None
    distance_done: bool = False
    time: Optional[str] = None
    time_done: bool = False

    @property
    def has_volume(self) -> bool:
        return bool(self.sets) or bool(self.distance) or bool(self.time)

    def add_cue(self, line: str) -> None:
        if self.cues:
            self.cues += "\n" + line
        else:
            self.cues = line


class ParsedWorkout(BaseModel):
    """Ordered list of parsed exercises"""
    exercises: List[ParsedExercise] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
