from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional


GAME_IDS: tuple[str, ...] = (
    "quiz",
    "multipleChoice",
    "complete",
    "sequence",
    "memory",
    "timeAttack",
    "lessonChallenge",
)


class GameStats(BaseModel):
    """Aggregate for one game mode. Serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    high_score: int = 0
    best_streak: int = 0
    total_games: int = 0
    total_correct: int = 0
    total_wrong: int = 0
    total_score: int = 0
    best_time: Optional[int] = None
    last_played: Optional[str] = None


class StatsSummary(BaseModel):
    total_score: int = 0
    best_streak: int = 0
    total_games: int = 0


def default_all_stats() -> dict[str, GameStats]:
    return {game_id: GameStats() for game_id in GAME_IDS}


class UnknownGameError(LookupError):
    pass
