"""
Bulk Parser

Parses several past workouts pasted at once. Each block starts with a
'# <Name> <date>' header followed by the regular per-exercise grammar:

    # Upper body 12-03-2025
    -- Bench press
    3 x 10 x 50kg

    # Easy run 14.03.2025
    - Running
    5km

Dates may be written dd-mm-yyyy, dd.mm.yyyy or dd/mm/yyyy. Everything in an
imported workout is recorded as completed.
"""

import re
import logging
import datetime
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

from workout_text_sync.models import Exercise, ProgressMap
from workout_text_sync.services.model_builder import build_exercises
from workout_text_sync.services.progress_reconciler import reconcile_progress

from .base import BaseParser
from .text_parser import WorkoutTextParser

logger = logging.getLogger(__name__)


class ImportedWorkout(BaseModel):
    """A past workout recovered from bulk text"""
    name: str
    date: datetime.date
    exercises: List[Exercise] = Field(default_factory=list)
    progress: ProgressMap = Field(default_factory=dict)
    completed: bool = True
    notes: str = "Imported from bulk text"


class BulkWorkoutParser(BaseParser):
    """Parser for '# Name date' blocks of workout text"""

    BLOCK_HEADER_PATTERN = re.compile(r'^#\s+(.*)$')
    DATE_PATTERN = re.compile(r'(\d{1,2})[-./](\d{1,2})[-./](\d{4})')
    TRAILING_DATE_PATTERN = re.compile(r'(\d{1,2})[-./](\d{1,2})[-./](\d{4})$')
    CHECK_MARK_PATTERN = re.compile(r'^[✓✗]\s*')

    def __init__(self, today: Optional[datetime.date] = None):
        super().__init__()
        self.today = today

    def parse(self, text: str) -> List[ImportedWorkout]:
        """Parse bulk text into imported workouts sorted oldest first"""
        self.warnings = []
        workouts = []

        for header, body in self._split_blocks(text):
            name, workout_date = self.parse_header(header)
            if not name:
                self.add_warning(f"Invalid header: '{header}'")
                continue
            workouts.append(self._build_workout(name, workout_date, body))

        workouts.sort(key=lambda w: w.date)
        return workouts

    def _split_blocks(self, text: str) -> List[Tuple[str, str]]:
        blocks: List[Tuple[str, List[str]]] = []
        preamble = False

        for line in (text or "").split("\n"):
            match = self.BLOCK_HEADER_PATTERN.match(line.strip())
            if match:
                blocks.append((match.group(1).strip(), []))
            elif blocks:
                blocks[-1][1].append(line)
            elif line.strip():
                preamble = True

        if preamble:
            logger.debug("Ignoring text before the first '#' header")

        return [(header, "\n".join(lines)) for header, lines in blocks]

    def parse_header(self, header: str) -> Tuple[str, datetime.date]:
        """Split '<Name> <dd-mm-yyyy>' into name and date (today if no date)"""
        header = header.strip()
        match = self.TRAILING_DATE_PATTERN.search(header)
        if not match:
            return header, self._today()

        parsed = self._to_date(*match.groups())
        if parsed is None:
            self.add_warning(f"Invalid date in header: '{header}'")
            parsed = self._today()
        return header[:match.start()].strip(), parsed

    def _build_workout(self, name: str, workout_date: datetime.date, body: str) -> ImportedWorkout:
        parsed = WorkoutTextParser().parse(body)
        for parsed_exercise in parsed.exercises:
            parsed_exercise.name = self.CHECK_MARK_PATTERN.sub("", parsed_exercise.name).strip()
        exercises = build_exercises(parsed)
        progress = reconcile_progress(parsed, exercises, mark_all_complete=True)
        return ImportedWorkout(
            name=name,
            date=workout_date,
            exercises=exercises,
            progress=progress,
        )

    def _today(self) -> datetime.date:
        return self.today or datetime.date.today()

    @staticmethod
    def _to_date(day: str, month: str, year: str) -> Optional[datetime.date]:
        try:
            return datetime.date(int(year), int(month), int(day))
        except ValueError:
            return None


def parse_bulk_workouts(text: str, today: Optional[datetime.date] = None) -> List[ImportedWorkout]:
    """Parse bulk workout text with a fresh parser instance"""
    return BulkWorkoutParser(today=today).parse(text)


def parse_date_to_iso(text: str, today: Optional[datetime.date] = None) -> str:
    """Find a dd-mm-yyyy style date in text and return it as YYYY-MM-DD"""
    match = BulkWorkoutParser.DATE_PATTERN.search(text or "")
    fallback = (today or datetime.date.today()).isoformat()
    if not match:
        return fallback
    parsed = BulkWorkoutParser._to_date(*match.groups())
    return parsed.isoformat() if parsed else fallback


def format_date_for_display(value: datetime.date) -> str:
    """Format a date as dd-mm-yyyy"""
    return value.strftime("%d-%m-%Y")
