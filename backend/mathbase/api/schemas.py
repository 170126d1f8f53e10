from pydantic import BaseModel
from typing import Optional

from mathbase.models.curriculum import Lesson, Module
from mathbase.models.game import Card
from mathbase.models.stats import GameStats, StatsSummary
from mathbase.services.game_session import SessionAction, SessionState


class GameInfo(BaseModel):
    id: str
    title: str
    description: str
    icon: str
    color: str
    level: str
    difficulty_divisor: Optional[int] = None


class GameCatalogResponse(BaseModel):
    games: list[GameInfo]


class MemoryDeckResponse(BaseModel):
    pairs: int
    difficulty: int
    cards: list[Card]


class SessionReduceRequest(BaseModel):
    state: SessionState
    action: SessionAction


class SessionReduceResponse(BaseModel):
    state: SessionState
    difficulty: int
    saved_now: bool = False


class RecordRoundRequest(BaseModel):
    score: int
    correct: int
    wrong: int
    streak: int
    time: Optional[int] = None


class AllStatsResponse(BaseModel):
    stats: dict[str, GameStats]
    summary: StatsSummary


class ResetResponse(BaseModel):
    ok: bool = True


# ──────────────────────────────────────────────
# Progress
# ──────────────────────────────────────────────

class LessonProgress(BaseModel):
    lesson_id: str
    watched: bool


class ModuleProgress(BaseModel):
    module_id: str
    watched: int
    total: int
    percent: int


class ProgressSummary(BaseModel):
    overall_percent: int
    watched: int
    total: int
    studied_modules: list[str]
    modules: list[ModuleProgress]


class ProgressResponse(BaseModel):
    progress: dict[str, bool]


# ──────────────────────────────────────────────
# Curriculum
# ──────────────────────────────────────────────

class ModuleListResponse(BaseModel):
    modules: list[Module]


class LessonResponse(BaseModel):
    module_id: str
    lesson: Lesson
