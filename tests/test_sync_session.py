"""Unit tests for the editor sync session."""
import asyncio
from unittest.mock import patch

import pytest

from workout_text_sync.services.sync_session import TextSyncSession


class TestApplyText:
    """Test cases for direct text application"""

    def test_apply_text_replaces_state(self, pull_ups_text):
        session = TextSyncSession()

        assert session.apply_text(pull_ups_text) is True
        assert [e.name for e in session.exercises] == ["Pull-ups"]
        exercise_id = session.exercises[0].id
        assert session.progress[exercise_id] == [True] * 5 + [True, True, True, False]

    def test_failed_parse_keeps_previous_state(self, pull_ups_text):
        session = TextSyncSession()
        session.apply_text(pull_ups_text)
        before = list(session.exercises)

        with patch(
            "workout_text_sync.services.sync_session.parse_workout_text",
            side_effect=ValueError("boom"),
        ):
            assert session.apply_text("- Something else") is False

        assert session.exercises == before

    def test_ids_preserved_across_edits(self, pull_ups_text):
        session = TextSyncSession()
        session.apply_text(pull_ups_text)
        exercise_id = session.exercises[0].id

        session.apply_text(pull_ups_text + "\n\n- Dips\n3x8")
        assert session.exercises[0].id == exercise_id
        assert len(session.exercises) == 2

    def test_mark_all_complete(self):
        session = TextSyncSession(mark_all_complete=True)
        session.apply_text("- Squat\n3x5")
        assert session.progress[session.exercises[0].id] == [True, True, True]


class TestRealtimeSync:
    """Test cases for debounced text -> model sync"""

    def test_realtime_off_only_records_text(self, pull_ups_text):
        session = TextSyncSession(realtime=False)
        session.on_text_changed(pull_ups_text)

        assert session.text == pull_ups_text
        assert session.exercises == []

    def test_without_event_loop_parses_immediately(self, pull_ups_text):
        session = TextSyncSession(realtime=True)
        session.on_text_changed(pull_ups_text)

        assert len(session.exercises) == 1
        assert not session.has_pending_parse

    @pytest.mark.asyncio
    async def test_debounce_coalesces_edits(self):
        session = TextSyncSession(realtime=True, debounce_seconds=0.01)

        session.on_text_changed("- Squat\n3x5")
        session.on_text_changed("- Squat\n3x5 +")
        assert session.has_pending_parse
        assert session.exercises == []

        await asyncio.sleep(0.05)

        assert not session.has_pending_parse
        assert session.progress[session.exercises[0].id] == [True, False, False]

    @pytest.mark.asyncio
    async def test_flush_applies_pending_parse(self):
        session = TextSyncSession(realtime=True, debounce_seconds=10)
        session.on_text_changed("- Squat\n3x5")

        assert session.flush() is True
        assert len(session.exercises) == 1
        assert session.flush() is False

    @pytest.mark.asyncio
    async def test_close_cancels_pending_parse(self):
        session = TextSyncSession(realtime=True, debounce_seconds=0.01)
        session.on_text_changed("- Squat\n3x5")
        session.close()

        await asyncio.sleep(0.05)
        assert session.exercises == []

    def test_sync_to_text_does_not_reparse(self, pull_ups_text):
        session = TextSyncSession(realtime=True)
        session.apply_text(pull_ups_text)
        exercises = session.exercises

        with patch.object(session, "apply_text") as apply_text:
            text = session.sync_to_text()

        apply_text.assert_not_called()
        assert text == pull_ups_text
        assert session.text == pull_ups_text
        assert session.exercises is exercises


class TestRowEdits:
    """Test cases for row edits through the session"""

    def test_add_row_keeps_progress_in_sync(self, pull_ups_text):
        session = TextSyncSession()
        session.apply_text(pull_ups_text)

        assert session.add_row(0) is True
        exercise = session.exercises[0]
        assert len(exercise.sets) == 12
        assert session.progress[exercise.id] == [True] * 8 + [False] * 4

    def test_update_row_then_sync_to_text(self, pull_ups_text):
        session = TextSyncSession()
        session.apply_text(pull_ups_text)

        session.update_row(0, 1, {"weight": 45})
        assert session.sync_to_text() == "- Pull-ups\n5x7 +++++\n4x5x45kg +++"

    def test_remove_row(self, pull_ups_text):
        session = TextSyncSession()
        session.apply_text(pull_ups_text)

        session.remove_row(0, 0)
        assert session.sync_to_text() == "- Pull-ups\n4x5x40kg +++"

    def test_unknown_exercise(self):
        session = TextSyncSession()
        assert session.add_row(3) is False
