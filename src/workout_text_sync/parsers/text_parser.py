"""
Text Parser

Parses the line-oriented workout grammar:

    - Pull-ups
    5x7 +++++
    4x5x40kg +++
    Keep the core tight

    - Running +
    10km

A '- ' header opens an exercise. Inside an exercise each line is a set line,
a distance line, a duration line or a free-form cue. Trailing '+' characters
are completion markers. The grammar is permissive: nothing is an error.
"""

import logging
from typing import List, Optional

from .base import BaseParser
from .models import ParsedExercise, ParsedSet, ParsedWorkout, VolumeEntry

logger = logging.getLogger(__name__)


def normalize_lines(text: str) -> List[str]:
    """Split on newlines, trim each line and collapse runs of blank lines to one."""
    lines: List[str] = []
    last_was_blank = False

    for raw in (text or "").split("\n"):
        line = raw.strip()
        if not line:
            if not last_was_blank:
                lines.append(line)
            last_was_blank = True
            continue
        lines.append(line)
        last_was_blank = False

    return lines


class WorkoutTextParser(BaseParser):
    """Block parser with an embedded completion marker interpreter"""

    def parse(self, text: str) -> ParsedWorkout:
        """Parse workout text into a ParsedWorkout"""
        self.warnings = []
        exercises: List[ParsedExercise] = []
        current: Optional[ParsedExercise] = None

        for line in normalize_lines(text):
            header_match = self.HEADER_PATTERN.match(line)
            if header_match:
                if current is not None:
                    exercises.append(self._finalize(current))
                current = ParsedExercise(name=header_match.group(1))
                continue

            # Lines before the first header have no exercise to attach to
            if current is None:
                continue

            self._parse_exercise_line(current, line)

        if current is not None:
            exercises.append(self._finalize(current))

        return ParsedWorkout(exercises=exercises, warnings=list(self.warnings))

    def _parse_exercise_line(self, exercise: ParsedExercise, line: str) -> None:
        """Classify one line inside an exercise block, first matching rule wins"""
        set_match = self.SET_PATTERN.match(line)
        if set_match:
            sets_planned = int(set_match.group(1))
            if sets_planned < 1:
                # "0x10" plans nothing, keep the text as a cue
                exercise.add_cue(line)
                return
            weight = None
            if set_match.group(3):
                weight = f"{set_match.group(3)}{set_match.group(4)}"
            sets_done = self.count_markers(set_match.group(5))
            if sets_done > sets_planned:
                self.add_warning(
                    f"'{line}' marks {sets_done} sets done but plans {sets_planned}"
                )
            exercise.sets.append(ParsedSet(
                sets_planned=sets_planned,
                reps=int(set_match.group(2)),
                weight=weight,
                sets_done=sets_done,
            ))
            return

        distance_match = self.DISTANCE_PATTERN.match(line)
        if distance_match:
            value = f"{distance_match.group(1)}{distance_match.group(2)}"
            done = self.count_markers(distance_match.group(3)) > 0
            exercise.distances.append(VolumeEntry(value=value, done=done))
            exercise.distance = value
            if done:
                exercise.distance_done = True
                exercise.done = True
            return

        duration_match = self.DURATION_PATTERN.match(line)
        if duration_match:
            hours, minutes, markers = duration_match.groups()
            value = ""
            if hours:
                value += f"{hours}h"
            if minutes:
                value += f"{minutes}m"
            if not value:
                # Blank or marker-only line: consumed without effect
                if markers and markers.strip():
                    logger.debug(f"Ignoring marker-only line under '{exercise.name}'")
                return
            done = self.count_markers(markers) > 0
            exercise.times.append(VolumeEntry(value=value, done=done))
            exercise.time = value
            if done:
                exercise.time_done = True
                exercise.done = True
            return

        exercise.add_cue(line)

    def _finalize(self, exercise: ParsedExercise) -> ParsedExercise:
        """Resolve a trailing '+' on the header into exercise-level completion"""
        raw_name = exercise.name
        if raw_name.endswith("+"):
            exercise.name = raw_name.rstrip("+ \t")
            if exercise.has_volume:
                exercise.exercise_level_done = True
            else:
                exercise.done = True
        return exercise


def parse_workout(text: str) -> ParsedWorkout:
    """Parse workout text with a fresh parser instance"""
    return WorkoutTextParser().parse(text)
