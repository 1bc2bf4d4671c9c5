"""Editor sync session: the thin orchestration layer around the codec.

Text -> model runs automatically (debounced) on every edit when realtime sync
is enabled. Model -> text only runs on an explicit `sync_to_text()`, so free
text is never overwritten behind the user's back. A parse is all-or-nothing:
if anything raises, the previous exercises and progress stay in place.
"""
import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional

from workout_text_sync.config import settings
from workout_text_sync.models import Exercise, ProgressMap
from workout_text_sync.services.codec import parse_workout_text
from workout_text_sync.services.progress_reconciler import apply_progress, progress_from_sets
from workout_text_sync.services.text_generator import generate_workout_text
from workout_text_sync.services.volume_rows import (
    add_volume_row,
    remove_volume_row,
    update_volume_row,
)


logger = logging.getLogger(__name__)


class TextSyncSession:
    """Keeps one editor's text and its structured workout in step."""

    def __init__(
        self,
        exercises: Optional[List[Exercise]] = None,
        progress: Optional[ProgressMap] = None,
        realtime: bool = False,
        debounce_seconds: Optional[float] = None,
        mark_all_complete: bool = False,
    ):
        self.exercises: List[Exercise] = list(exercises or [])
        self.progress: ProgressMap = dict(progress or {})
        self.realtime = realtime
        self.debounce_seconds = (
            settings.debounce_seconds if debounce_seconds is None else debounce_seconds
        )
        self.mark_all_complete = mark_all_complete
        self.text = ""
        self.last_parsed_text = ""
        self._updating_from_model = False
        self._pending: Optional[asyncio.TimerHandle] = None
        self._pending_text: Optional[str] = None

    @property
    def has_pending_parse(self) -> bool:
        return self._pending is not None

    def apply_text(self, text: str) -> bool:
        """
        Parse text and replace exercises and progress wholesale.

        Returns:
            True if the state was updated, False if parsing failed
        """
        try:
            result = parse_workout_text(
                text,
                existing=self.exercises,
                mark_all_complete=self.mark_all_complete,
            )
        except Exception as e:
            logger.exception(f"Failed to parse workout text: {e}")
            return False

        self.exercises = result.exercises
        self.progress = result.progress
        self.last_parsed_text = text
        logger.debug(f"Applied text: {len(self.exercises)} exercises")
        return True

    def sync_to_text(self) -> str:
        """Regenerate the editor text from the current model."""
        self._updating_from_model = True
        try:
            generated = generate_workout_text(self.exercises, self.progress)
            self.cancel_pending()
            self.on_text_changed(generated)
            self.last_parsed_text = generated
        finally:
            self._updating_from_model = False
        return generated

    def on_text_changed(self, text: str) -> None:
        """Record an edit and schedule a debounced parse if realtime sync is on."""
        self.text = text

        if not self.realtime or self._updating_from_model:
            return
        if text == self.last_parsed_text:
            return

        self.cancel_pending()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No event loop to debounce on: parse right away
            self.apply_text(text)
            return

        self._pending_text = text
        self._pending = loop.call_later(self.debounce_seconds, self._fire_pending)

    def _fire_pending(self) -> None:
        text = self._pending_text
        self._pending = None
        self._pending_text = None
        if text is not None:
            self.apply_text(text)

    def flush(self) -> bool:
        """Apply a pending debounced parse immediately."""
        if self._pending is None:
            return False
        self._pending.cancel()
        text = self._pending_text
        self._pending = None
        self._pending_text = None
        return self.apply_text(text)

    def cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
        self._pending = None
        self._pending_text = None

    def close(self) -> None:
        self.cancel_pending()

    # Volume row edits ---------------------------------------------------

    def _mutate_exercise(self, exercise_index: int, mutate: Callable[[Exercise], Exercise]) -> bool:
        if exercise_index < 0 or exercise_index >= len(self.exercises):
            logger.warning(f"Exercise {exercise_index} does not exist")
            return False

        exercise = apply_progress([self.exercises[exercise_index]], self.progress)[0]
        try:
            updated = mutate(exercise)
        except Exception as e:
            logger.exception(f"Failed to update exercise '{exercise.name}': {e}")
            return False

        self.exercises[exercise_index] = updated
        self.progress.update(progress_from_sets([updated]))
        return True

    def add_row(self, exercise_index: int) -> bool:
        return self._mutate_exercise(exercise_index, add_volume_row)

    def remove_row(self, exercise_index: int, row_index: int) -> bool:
        return self._mutate_exercise(
            exercise_index, lambda exercise: remove_volume_row(exercise, row_index)
        )

    def update_row(self, exercise_index: int, row_index: int, changes: Dict[str, Any]) -> bool:
        return self._mutate_exercise(
            exercise_index, lambda exercise: update_volume_row(exercise, row_index, changes)
        )
