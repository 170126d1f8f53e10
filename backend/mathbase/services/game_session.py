"""
Game-session state machine.

A session is an immutable snapshot; ``reduce(state, action)`` returns the next
one. Phases run idle → playing → feedback → playing | game_over. The
presentation layer owns timing: it sends ``advance`` when the feedback window
has elapsed and ``tick`` once per second.

Three rule sets:
    lives games   quiz, multipleChoice, complete, sequence, lessonChallenge
    timeAttack    60 s clock, combo scoring, +2 s per correct answer
    memory        pair attempts, board cleared after ``pairs`` matches
"""

import logging
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from mathbase.models.stats import GAME_IDS, UnknownGameError
from mathbase.services.games_stats import GamesStatsService
from mathbase.skills.memory import DEFAULT_PAIRS, memory_score
from mathbase.skills.registry import get_contract
from mathbase.skills.time_attack import GAME_DURATION, TIME_BONUS, points_for

logger = logging.getLogger("mathbase.session")

STARTING_LIVES = 3
LIVES_GAMES = ("quiz", "multipleChoice", "complete", "sequence", "lessonChallenge")


class Phase(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    FEEDBACK = "feedback"
    GAME_OVER = "game_over"


class SessionState(BaseModel):
    model_config = ConfigDict(frozen=True)

    game_id: str
    phase: Phase = Phase.IDLE
    score: int = 0
    # current streak; the combo in timeAttack
    streak: int = 0
    best_streak: int = 0
    correct: int = 0
    wrong: int = 0
    lives: Optional[int] = None
    time_left: Optional[int] = None
    elapsed: int = 0
    moves: int = 0
    matches: int = 0
    pairs: Optional[int] = None
    level: int = 0
    saved: bool = False
    exited: bool = False
    last_correct: Optional[bool] = None

    @model_validator(mode="after")
    def _memory_needs_pairs(self):
        if self.game_id == "memory" and (self.pairs is None or self.pairs < 1):
            raise ValueError("memory sessions need pairs >= 1")
        return self


class StartAction(BaseModel):
    type: Literal["start"] = "start"
    # memory only: move to the next level before dealing a new board
    increase_level: bool = False


class AnswerAction(BaseModel):
    type: Literal["answer"] = "answer"
    correct: bool


class AdvanceAction(BaseModel):
    type: Literal["advance"] = "advance"


class TickAction(BaseModel):
    type: Literal["tick"] = "tick"


class ExitAction(BaseModel):
    type: Literal["exit"] = "exit"


class MarkSavedAction(BaseModel):
    type: Literal["mark_saved"] = "mark_saved"


SessionAction = Annotated[
    Union[StartAction, AnswerAction, AdvanceAction, TickAction, ExitAction, MarkSavedAction],
    Field(discriminator="type"),
]

RoundResult = tuple[int, int, int, int, Optional[int]]


def new_session(game_id: str, pairs: Optional[int] = None) -> SessionState:
    if game_id not in GAME_IDS:
        raise UnknownGameError(game_id)
    if game_id == "memory":
        pairs = pairs or DEFAULT_PAIRS
        if pairs < 1:
            raise ValueError("pairs must be at least 1")
        return SessionState(game_id=game_id, pairs=pairs)
    return SessionState(game_id=game_id)


def difficulty_for(state: SessionState) -> int:
    """Difficulty the next round should be generated at."""
    if state.game_id == "memory":
        return state.level
    if state.game_id == "lessonChallenge":
        return 0
    return get_contract(state.game_id).difficulty_for(state.score)


# ---------------------------------------------------------------------------
# reducer
# ---------------------------------------------------------------------------

def _start(state: SessionState, action: StartAction) -> SessionState:
    level = state.level
    if action.increase_level and state.game_id == "memory":
        level += 1
    return SessionState(
        game_id=state.game_id,
        phase=Phase.PLAYING,
        lives=STARTING_LIVES if state.game_id in LIVES_GAMES else None,
        time_left=GAME_DURATION if state.game_id == "timeAttack" else None,
        pairs=(state.pairs or DEFAULT_PAIRS) if state.game_id == "memory" else None,
        level=level,
    )


def _answer_lives(state: SessionState, correct: bool) -> SessionState:
    if correct:
        streak = state.streak + 1
        return state.model_copy(update={
            "phase": Phase.FEEDBACK,
            "score": state.score + 1,
            "streak": streak,
            "best_streak": max(state.best_streak, streak),
            "correct": state.correct + 1,
            "last_correct": True,
        })
    return state.model_copy(update={
        "phase": Phase.FEEDBACK,
        "streak": 0,
        "wrong": state.wrong + 1,
        "lives": max(0, (state.lives or 0) - 1),
        "last_correct": False,
    })


def _answer_time_attack(state: SessionState, correct: bool) -> SessionState:
    if correct:
        combo = state.streak + 1
        return state.model_copy(update={
            "phase": Phase.FEEDBACK,
            "score": state.score + points_for(state.streak),
            "streak": combo,
            "best_streak": max(state.best_streak, combo),
            "correct": state.correct + 1,
            "time_left": min(GAME_DURATION, (state.time_left or 0) + TIME_BONUS),
            "last_correct": True,
        })
    return state.model_copy(update={
        "phase": Phase.FEEDBACK,
        "streak": 0,
        "wrong": state.wrong + 1,
        "last_correct": False,
    })


def _answer_memory(state: SessionState, correct: bool) -> SessionState:
    moves = state.moves + 1
    if not correct:
        return state.model_copy(update={
            "moves": moves,
            "wrong": state.wrong + 1,
            "last_correct": False,
        })

    matches = state.matches + 1
    update = {
        "moves": moves,
        "matches": matches,
        "correct": state.correct + 1,
        "last_correct": True,
    }
    if matches >= state.pairs:
        update["phase"] = Phase.GAME_OVER
        update["score"] = memory_score(moves, state.elapsed, state.pairs)
    return state.model_copy(update=update)


def _advance(state: SessionState) -> SessionState:
    if state.phase != Phase.FEEDBACK:
        return state
    if state.lives is not None and state.lives <= 0:
        return state.model_copy(update={"phase": Phase.GAME_OVER})
    return state.model_copy(update={"phase": Phase.PLAYING})


def _tick(state: SessionState) -> SessionState:
    if state.phase not in (Phase.PLAYING, Phase.FEEDBACK):
        return state
    if state.game_id == "timeAttack":
        time_left = state.time_left or 0
        if time_left <= 1:
            return state.model_copy(update={"time_left": 0, "phase": Phase.GAME_OVER})
        return state.model_copy(update={"time_left": time_left - 1})
    if state.game_id == "memory":
        return state.model_copy(update={"elapsed": state.elapsed + 1})
    return state


def reduce(state: SessionState, action: SessionAction) -> SessionState:
    if isinstance(action, StartAction):
        return _start(state, action)

    if isinstance(action, AnswerAction):
        if state.phase != Phase.PLAYING:
            return state
        if state.game_id == "timeAttack":
            return _answer_time_attack(state, action.correct)
        if state.game_id == "memory":
            return _answer_memory(state, action.correct)
        return _answer_lives(state, action.correct)

    if isinstance(action, AdvanceAction):
        return _advance(state)

    if isinstance(action, TickAction):
        return _tick(state)

    if isinstance(action, ExitAction):
        if state.phase in (Phase.IDLE, Phase.GAME_OVER):
            return state
        return state.model_copy(update={"phase": Phase.GAME_OVER, "exited": True})

    if isinstance(action, MarkSavedAction):
        return state.model_copy(update={"saved": True})

    raise ValueError(f"unknown action {action!r}")


# ---------------------------------------------------------------------------
# stats flush
# ---------------------------------------------------------------------------

def round_result(state: SessionState, exiting: bool = False) -> Optional[RoundResult]:
    """
    (score, correct, wrong, streak, time) to record for this session, or None
    when it was already saved, is still running, or nothing was played.
    """
    if state.saved:
        return None
    exiting = exiting or state.exited
    if state.phase != Phase.GAME_OVER and not exiting:
        return None

    if state.game_id == "memory":
        if state.phase == Phase.GAME_OVER and not state.exited:
            return state.score, state.pairs, state.moves - state.pairs, 0, state.elapsed
        if state.moves == 0 or state.matches == 0:
            return None
        score = memory_score(state.moves, state.elapsed, state.pairs)
        return score, state.matches, state.moves - state.matches, 0, None

    if state.game_id == "lessonChallenge":
        # streak is not tracked for this game; an exit needs a correct answer
        finished = state.phase == Phase.GAME_OVER and not state.exited
        if not finished and state.score == 0 and state.correct == 0:
            return None
        return state.score, state.correct, state.wrong, 0, None

    if state.score == 0 and state.correct == 0 and state.wrong == 0:
        return None
    return state.score, state.correct, state.wrong, state.best_streak, None


def flush_stats(state: SessionState, stats: GamesStatsService, exiting: bool = False) -> SessionState:
    """Record the session once; later calls on the returned state are no-ops."""
    result = round_result(state, exiting=exiting)
    if result is None:
        return state
    score, correct, wrong, streak, time = result
    stats.record_round(state.game_id, score, correct, wrong, streak, time=time)
    logger.info("Flushed %s session (exiting=%s)", state.game_id, exiting or state.exited)
    return reduce(state, MarkSavedAction())
