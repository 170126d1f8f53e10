"""
Lesson progress: lesson id → watched flag.

Same discipline as the stats aggregate: one namespace key, loaded once,
rewritten in full on each change. Modules with at least one watched lesson
count as studied and unlock the lesson challenge.
"""

import json
import logging
from typing import Iterable, Optional

from mathbase.services import curriculum
from mathbase.services.kv_store import KeyValueStore

logger = logging.getLogger("mathbase.progress")

PROGRESS_KEY = "@MathBase:progress"


def percent(done: int, total: int) -> int:
    if total == 0:
        return 0
    # half-up rounding in integers; round() would send 12.5 to 12
    return (200 * done + total) // (2 * total)


class ProgressService:
    def __init__(self, store: KeyValueStore):
        self.store = store
        self._progress: Optional[dict[str, bool]] = None

    def _load(self) -> dict[str, bool]:
        try:
            raw = self.store.get(PROGRESS_KEY)
        except Exception as exc:
            logger.warning("Failed to load progress: %s", exc)
            return {}
        if not raw:
            return {}
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Failed to parse progress, starting empty: %s", exc)
            return {}
        if not isinstance(parsed, dict):
            logger.warning("Ignoring progress blob: expected an object, got %s", type(parsed).__name__)
            return {}

        progress = {k: v for k, v in parsed.items() if isinstance(v, bool)}
        if len(progress) != len(parsed):
            logger.warning("Dropped %d non-boolean progress entries", len(parsed) - len(progress))
        return progress

    def _ensure_loaded(self) -> dict[str, bool]:
        if self._progress is None:
            self._progress = self._load()
        return self._progress

    def _set(self, lesson_id: str, watched: bool) -> bool:
        self._ensure_loaded()[lesson_id] = watched
        try:
            self.store.set(PROGRESS_KEY, json.dumps(self._progress, separators=(",", ":")))
        except Exception as exc:
            logger.error("Failed to persist progress: %s", exc, exc_info=True)
        return watched

    def get_all(self) -> dict[str, bool]:
        return dict(self._ensure_loaded())

    def mark_watched(self, lesson_id: str) -> bool:
        return self._set(lesson_id, True)

    def mark_unwatched(self, lesson_id: str) -> bool:
        return self._set(lesson_id, False)

    def toggle_watched(self, lesson_id: str) -> bool:
        return self._set(lesson_id, not self.is_watched(lesson_id))

    def is_watched(self, lesson_id: str) -> bool:
        return self._ensure_loaded().get(lesson_id, False)

    def watched_count(self, lesson_ids: Iterable[str]) -> int:
        return sum(1 for lesson_id in lesson_ids if self.is_watched(lesson_id))

    def module_progress(self, lesson_ids: Iterable[str]) -> int:
        """Rounded percentage of watched lessons, 0 for an empty list."""
        ids = list(lesson_ids)
        return percent(self.watched_count(ids), len(ids))

    def overall_progress(self) -> int:
        return self.module_progress(curriculum.all_lesson_ids())

    def studied_modules(self) -> list[str]:
        return [m.id for m in curriculum.list_modules() if self.watched_count(m.lesson_ids) > 0]

    def reset(self) -> None:
        self._progress = {}
        try:
            self.store.delete(PROGRESS_KEY)
        except Exception as exc:
            logger.error("Failed to clear progress: %s", exc, exc_info=True)
