"""
Game round endpoints: catalog, question generation, memory decks and
session reduction.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from mathbase.api.schemas import (
    GameCatalogResponse,
    GameInfo,
    MemoryDeckResponse,
    SessionReduceRequest,
    SessionReduceResponse,
)
from mathbase.core.config import get_settings
from mathbase.core.deps import get_progress_service, get_rng, get_stats_service
from mathbase.models.stats import UnknownGameError
from mathbase.services.game_session import Phase, SessionState, difficulty_for, flush_stats, new_session, reduce
from mathbase.services.telemetry import instrument
from mathbase.skills.game_metadata import GAME_CATALOG
from mathbase.skills.lesson_challenge import UnknownModuleError
from mathbase.skills.registry import GAME_REGISTRY, QUESTION_GAMES, generate_round

logger = logging.getLogger("mathbase.api.games")

router = APIRouter(prefix="/api/games", tags=["games"])


@router.get("", response_model=GameCatalogResponse)
async def list_games():
    """All games with their display metadata and difficulty divisors."""
    games = []
    for game_id, meta in GAME_CATALOG.items():
        contract = GAME_REGISTRY[game_id]
        divisor = contract.difficulty_divisor if game_id in QUESTION_GAMES else None
        games.append(GameInfo(id=game_id, difficulty_divisor=divisor, **meta))
    return GameCatalogResponse(games=games)


@router.get("/memory/deck", response_model=MemoryDeckResponse)
@instrument(route="/api/games/memory/deck", version="v1", game_id="memory")
async def memory_deck(
    pairs: Optional[int] = Query(None, ge=1, le=20),
    difficulty: int = Query(0, ge=0),
):
    pairs = pairs or get_settings().memory_pairs
    cards = generate_round("memory", get_rng(), difficulty, pair_count=pairs)
    return MemoryDeckResponse(pairs=pairs, difficulty=difficulty, cards=cards)


@router.get("/lessonChallenge/question")
@instrument(route="/api/games/lessonChallenge/question", version="v1", game_id="lessonChallenge")
async def lesson_challenge_question():
    """Question from a random studied module. 409 until a lesson is watched."""
    rng = get_rng()
    studied = get_progress_service().studied_modules()
    module_id = GAME_REGISTRY["lessonChallenge"].pick_module(rng, studied)
    if module_id is None:
        raise HTTPException(status_code=409, detail="Watch at least one lesson to unlock the challenge")
    return generate_round("lessonChallenge", rng, module_id)


@router.get("/lessonChallenge/modules/{module_id}/question")
@instrument(route="/api/games/lessonChallenge/modules/question", version="v1", game_id="lessonChallenge")
async def lesson_challenge_module_question(module_id: str):
    try:
        return generate_round("lessonChallenge", get_rng(), module_id)
    except UnknownModuleError:
        raise HTTPException(status_code=404, detail=f"Module {module_id} not found")


@router.get("/{game_id}/question")
@instrument(route="/api/games/question", version="v1")
async def game_question(game_id: str, difficulty: int = Query(0, ge=0)):
    if game_id not in QUESTION_GAMES:
        raise HTTPException(status_code=404, detail=f"Game {game_id} not found")
    return generate_round(game_id, get_rng(), difficulty)


@router.post("/{game_id}/session", response_model=SessionState)
async def create_session(game_id: str, pairs: Optional[int] = Query(None, ge=1, le=20)):
    try:
        return new_session(game_id, pairs=pairs)
    except UnknownGameError:
        raise HTTPException(status_code=404, detail=f"Game {game_id} not found")


@router.post("/session/reduce", response_model=SessionReduceResponse)
@instrument(route="/api/games/session/reduce", version="v1")
async def reduce_session(req: SessionReduceRequest):
    """Apply one action. A session that just ended is recorded in the stats once."""
    if req.state.game_id not in GAME_REGISTRY:
        raise HTTPException(status_code=404, detail=f"Game {req.state.game_id} not found")

    state = reduce(req.state, req.action)
    saved_now = False
    if state.phase == Phase.GAME_OVER and not state.saved:
        flushed = flush_stats(state, get_stats_service())
        saved_now = flushed.saved
        state = flushed

    return SessionReduceResponse(state=state, difficulty=difficulty_for(state), saved_now=saved_now)
