"""
Test fixtures for workout-text-sync.

Provides sample workout texts and structured exercises shared by the
parser, generator and volume row tests.
"""

import sys
from pathlib import Path

import pytest

# Repo root: .../workout-text-sync
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Make src/ importable so tests can do `import workout_text_sync...`
for p in {ROOT, SRC}:
    p_str = str(p)
    if p_str not in sys.path:
        sys.path.insert(0, p_str)

from workout_text_sync.models import Exercise, ExerciseSet, VolumeType

from factories import make_sets


# ---------------------------------------------------------------------------
# Sample Text Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def pull_ups_text() -> str:
    """Two set lines with partial completion."""
    return "- Pull-ups\n5x7 +++++\n4x5x40kg +++"


@pytest.fixture
def mixed_workout_text() -> str:
    """Workout touching every line type of the grammar."""
    return """- Warm up +

- Bench press
3x10x60kg ++
2x8x70kg
Pause at the bottom

- Running
10km +
45min

- Plank +
3x1
"""


# ---------------------------------------------------------------------------
# Structured Model Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def squat_exercise() -> Exercise:
    """Squat with a 3x10 row followed by a 2x5x100kg row."""
    sets = make_sets(3, reps=10, group_id="row-a") + make_sets(
        2,
        VolumeType.SETS_REPS_WEIGHT,
        group_id="row-b",
        reps=5,
        weight=100,
        weight_unit="kg",
    )
    return Exercise(id="ex-squat", name="Squat", sets=sets)


@pytest.fixture
def run_exercise() -> Exercise:
    """Run with a single distance set."""
    return Exercise(
        id="ex-run",
        name="Run",
        sets=[ExerciseSet(
            reps=1,
            notes="5km",
            distance_unit="km",
            volume_type=VolumeType.DISTANCE,
            group_id="dist-1",
        )],
    )
