"""End-to-end tests for text -> model -> text."""
import pytest

from workout_text_sync.models import VolumeType
from workout_text_sync.services.codec import generate_workout_text, parse_workout_text
from workout_text_sync.services.volume_rows import update_volume_row


def _shape(result):
    """Everything about a parse result except generated ids."""
    shape = []
    for exercise in result.exercises:
        sets = [
            (s.volume_type, s.reps, s.weight, s.weight_unit, s.duration, s.notes, s.distance_unit)
            for s in exercise.sets
        ]
        shape.append((exercise.name, exercise.instructions, sets, result.progress[exercise.id]))
    return shape


class TestRoundTrip:
    """Test cases for stable round trips"""

    def test_generate_canonical_text(self, mixed_workout_text):
        result = parse_workout_text(mixed_workout_text)

        assert generate_workout_text(result.exercises, result.progress) == (
            "- Warm up +\n"
            "\n"
            "- Bench press\n"
            "Pause at the bottom\n"
            "3x10x60kg ++\n"
            "2x8x70kg\n"
            "\n"
            "- Running\n"
            "10km +\n"
            "45min\n"
            "\n"
            "- Plank\n"
            "3x1 +++"
        )

    def test_reparse_preserves_structure(self, mixed_workout_text):
        first = parse_workout_text(mixed_workout_text)
        text = generate_workout_text(first.exercises, first.progress)
        second = parse_workout_text(text)

        assert _shape(second) == _shape(first)

    def test_generation_is_idempotent(self, pull_ups_text):
        result = parse_workout_text(pull_ups_text)
        once = generate_workout_text(result.exercises, result.progress)

        again = parse_workout_text(once)
        assert generate_workout_text(again.exercises, again.progress) == once

    def test_pull_ups_text_is_already_canonical(self, pull_ups_text):
        result = parse_workout_text(pull_ups_text)
        assert generate_workout_text(result.exercises, result.progress) == pull_ups_text

    def test_warm_up_reproduces_header_marker(self):
        result = parse_workout_text("- Warm up +")

        assert result.exercises[0].sets[0].volume_type == VolumeType.COMPLETION
        assert generate_workout_text(result.exercises, result.progress) == "- Warm up +"

    def test_ids_survive_reparse_with_existing(self, pull_ups_text):
        first = parse_workout_text(pull_ups_text)
        text = generate_workout_text(first.exercises, first.progress)
        second = parse_workout_text(text, existing=first.exercises)

        assert second.exercises[0].id == first.exercises[0].id
        assert second.progress == first.progress

    def test_messy_text_normalizes(self):
        messy = "  - Squat  \n\n\n 3 x 10 x 60.0 kg + + \n"
        result = parse_workout_text(messy)

        assert generate_workout_text(result.exercises, result.progress) == "- Squat\n3x10x60kg ++"


class TestRowEditsThenText:
    """Test cases for row edits followed by text generation"""

    def test_retype_to_distance_emits_default_distance(self):
        result = parse_workout_text("- Squat\n3x10")
        exercise = update_volume_row(result.exercises[0], 0, {"type": "distance"})

        assert len(exercise.sets) == 1
        assert exercise.sets[0].notes == "10km"
        assert generate_workout_text([exercise], {exercise.id: [False]}) == "- Squat\n10km"

    def test_count_change_emits_new_count(self):
        result = parse_workout_text("- Squat\n3x10 ++")
        exercise = update_volume_row(result.exercises[0], 0, {"total_sets": 4})
        progress = {exercise.id: result.progress[exercise.id] + [False]}

        assert generate_workout_text([exercise], progress) == "- Squat\n4x10 ++"
