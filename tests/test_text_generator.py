"""Unit tests for canonical text generation."""
import pytest

from workout_text_sync.models import Exercise, ExerciseSet, VolumeType, build_set
from workout_text_sync.services.text_generator import (
    generate_exercise_text,
    generate_workout_text,
    volume_key,
)

from factories import make_sets


class TestVolumeKey:
    """Test cases for the canonical per-set key."""

    def test_sets_reps(self):
        assert volume_key(ExerciseSet(reps=7)) == "7"

    def test_weighted_integral_weight(self):
        exercise_set = build_set(VolumeType.SETS_REPS_WEIGHT, reps=5, weight=40.0, weight_unit="kg")
        assert volume_key(exercise_set) == "5x40kg"

    def test_weighted_decimal_weight(self):
        exercise_set = build_set(VolumeType.SETS_REPS_WEIGHT, reps=5, weight=22.5, weight_unit="lb")
        assert volume_key(exercise_set) == "5x22.5lb"

    def test_duration_rounds_to_minutes(self):
        exercise_set = ExerciseSet(volume_type=VolumeType.DURATION, duration=5430)
        assert volume_key(exercise_set) == "91min"

    def test_duration_rounds_half_up(self):
        exercise_set = ExerciseSet(volume_type=VolumeType.DURATION, duration=90)
        assert volume_key(exercise_set) == "2min"

    def test_distance_from_notes(self):
        exercise_set = ExerciseSet(volume_type=VolumeType.DISTANCE, notes="10.0km", distance_unit="km")
        assert volume_key(exercise_set) == "10km"

    def test_distance_unit_defaults_to_km(self):
        exercise_set = ExerciseSet(volume_type=VolumeType.DISTANCE, notes="3")
        assert volume_key(exercise_set) == "3km"


class TestExerciseText:
    """Test cases for one exercise block."""

    def test_groups_and_markers(self):
        sets = make_sets(5, reps=7, group_id="a") + make_sets(
            4, VolumeType.SETS_REPS_WEIGHT, group_id="b", reps=5, weight=40, weight_unit="kg"
        )
        exercise = Exercise(id="p", name="Pull-ups", sets=sets)
        progress = [True] * 5 + [True, True, True, False]

        assert generate_exercise_text(exercise, progress) == (
            "- Pull-ups\n5x7 +++++\n4x5x40kg +++"
        )

    def test_no_progress_leaves_bare_lines(self):
        exercise = Exercise(id="p", name="Squat", sets=make_sets(3, reps=10))
        assert generate_exercise_text(exercise).split("\n")[1].rstrip() == "3x10"

    def test_sets_without_group_id_merge_on_key(self):
        exercise = Exercise(id="p", name="Dips", sets=[ExerciseSet(reps=8), ExerciseSet(reps=8)])
        assert generate_exercise_text(exercise, [True, False]) == "- Dips\n2x8 +"

    def test_same_key_on_different_lines_stays_apart(self):
        sets = make_sets(2, reps=8, group_id="a") + make_sets(1, reps=8, group_id="b")
        exercise = Exercise(id="p", name="Dips", sets=sets)
        assert generate_exercise_text(exercise, [True, True, False]) == "- Dips\n2x8 ++\n1x8"

    def test_single_instance_lines(self):
        sets = [
            build_set(VolumeType.DISTANCE, distance=10, distance_unit="km", group_id="d"),
            build_set(VolumeType.DURATION, duration_minutes=45, group_id="t"),
        ]
        exercise = Exercise(id="r", name="Running", sets=sets)

        assert generate_exercise_text(exercise, [True, False]) == "- Running\n10km +\n45min"

    def test_completion_only_exercise(self):
        exercise = Exercise(id="w", name="Warm up", sets=[build_set(VolumeType.COMPLETION)])

        assert generate_exercise_text(exercise, [True]) == "- Warm up +"
        assert generate_exercise_text(exercise, [False]) == "- Warm up"

    def test_instructions_follow_header(self):
        exercise = Exercise(id="b", name="Bench", instructions="Pause at the bottom", sets=make_sets(2, reps=5))
        assert generate_exercise_text(exercise, [False, False]).split("\n")[:2] == [
            "- Bench",
            "Pause at the bottom",
        ]

    def test_short_progress_counts_as_not_done(self):
        exercise = Exercise(id="p", name="Squat", sets=make_sets(3, reps=10))
        assert generate_exercise_text(exercise, [True]) == "- Squat\n3x10 +"


class TestWorkoutText:
    """Test cases for whole-workout output."""

    def test_blank_line_between_exercises(self):
        exercises = [
            Exercise(id="a", name="Warm up", sets=[build_set(VolumeType.COMPLETION)]),
            Exercise(id="b", name="Squat", sets=make_sets(2, reps=5)),
        ]
        text = generate_workout_text(exercises, {"a": [True], "b": [False, False]})

        assert text == "- Warm up +\n\n- Squat\n2x5"

    def test_empty_workout(self):
        assert generate_workout_text([], {}) == ""

    def test_missing_progress_entry(self):
        exercises = [Exercise(id="a", name="Squat", sets=make_sets(2, reps=5))]
        assert generate_workout_text(exercises, {}) == "- Squat\n2x5"
