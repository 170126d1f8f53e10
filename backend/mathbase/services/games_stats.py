"""
Per-game statistics aggregate.

The whole aggregate lives under one namespace key as a camelCase JSON object,
one entry per game id. It is loaded once, updated in memory, and rewritten in
full after every change. Persistence is best effort: a failed write is logged
and the in-memory aggregate stays authoritative for the process.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from pydantic import ValidationError

from mathbase.models.stats import GAME_IDS, GameStats, StatsSummary, UnknownGameError, default_all_stats
from mathbase.services.kv_store import KeyValueStore

logger = logging.getLogger("mathbase.stats")

STATS_KEY = "@mathbase:games_stats"


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class GamesStatsService:
    def __init__(self, store: KeyValueStore, clock: Callable[[], str] = _utc_now_iso):
        self.store = store
        self.clock = clock
        self._stats: Optional[dict[str, GameStats]] = None

    # ------------------------------------------------------------------
    # load / persist
    # ------------------------------------------------------------------

    def _load(self) -> dict[str, GameStats]:
        stats = default_all_stats()
        try:
            raw = self.store.get(STATS_KEY)
        except Exception as exc:
            logger.warning("Failed to load stats: %s", exc)
            return stats
        if not raw:
            return stats

        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Failed to parse stats, using defaults: %s", exc)
            return stats
        if not isinstance(parsed, dict):
            logger.warning("Ignoring stats blob: expected an object, got %s", type(parsed).__name__)
            return stats

        for game_id in GAME_IDS:
            entry = parsed.get(game_id)
            if entry is None:
                continue
            try:
                stats[game_id] = GameStats.model_validate(entry)
            except ValidationError as exc:
                logger.warning("Invalid stats for %s, resetting that game: %s", game_id, exc.errors())
        return stats

    def _ensure_loaded(self) -> dict[str, GameStats]:
        if self._stats is None:
            self._stats = self._load()
        return self._stats

    def _persist(self) -> None:
        payload = {
            game_id: s.model_dump(by_alias=True, exclude_none=True)
            for game_id, s in self._ensure_loaded().items()
        }
        try:
            self.store.set(STATS_KEY, json.dumps(payload, separators=(",", ":")))
        except Exception as exc:
            logger.error("Failed to persist stats: %s", exc, exc_info=True)

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------

    def get(self, game_id: str) -> GameStats:
        if game_id not in GAME_IDS:
            raise UnknownGameError(game_id)
        return self._ensure_loaded()[game_id]

    def get_all(self) -> dict[str, GameStats]:
        return dict(self._ensure_loaded())

    def summary(self) -> StatsSummary:
        stats = self._ensure_loaded().values()
        return StatsSummary(
            total_score=sum(s.total_score for s in stats),
            best_streak=max((s.best_streak for s in stats), default=0),
            total_games=sum(s.total_games for s in stats),
        )

    # ------------------------------------------------------------------
    # updates
    # ------------------------------------------------------------------

    def record_round(
        self,
        game_id: str,
        score: int,
        correct: int,
        wrong: int,
        streak: int,
        time: Optional[int] = None,
    ) -> GameStats:
        """Fold one finished round into the game's aggregate and persist it."""
        prev = self.get(game_id)
        score, correct, wrong, streak = (max(0, int(v)) for v in (score, correct, wrong, streak))

        best_time = prev.best_time
        if time is not None:
            time = max(0, int(time))
            if best_time is None or time < best_time:
                best_time = time

        updated = GameStats(
            high_score=max(prev.high_score, score),
            best_streak=max(prev.best_streak, streak),
            total_games=prev.total_games + 1,
            total_correct=prev.total_correct + correct,
            total_wrong=prev.total_wrong + wrong,
            total_score=prev.total_score + score,
            best_time=best_time,
            last_played=self.clock(),
        )
        self._ensure_loaded()[game_id] = updated
        self._persist()

        logger.info(
            "Recorded %s round: score=%d correct=%d wrong=%d streak=%d time=%s",
            game_id, score, correct, wrong, streak, time,
        )
        return updated

    def reset_all(self) -> None:
        self._stats = default_all_stats()
        try:
            self.store.delete(STATS_KEY)
        except Exception as exc:
            logger.error("Failed to clear stats: %s", exc, exc_info=True)
