from fastapi import APIRouter, HTTPException

from mathbase.api.schemas import AllStatsResponse, RecordRoundRequest, ResetResponse
from mathbase.core.deps import get_stats_service
from mathbase.models.stats import GameStats, StatsSummary, UnknownGameError
from mathbase.services.telemetry import instrument

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("", response_model=AllStatsResponse)
async def all_stats():
    service = get_stats_service()
    return AllStatsResponse(stats=service.get_all(), summary=service.summary())


@router.get("/summary", response_model=StatsSummary)
async def stats_summary():
    return get_stats_service().summary()


@router.get("/{game_id}", response_model=GameStats)
async def game_stats(game_id: str):
    try:
        return get_stats_service().get(game_id)
    except UnknownGameError:
        raise HTTPException(status_code=404, detail=f"Game {game_id} not found")


@router.post("/{game_id}/rounds", response_model=GameStats)
@instrument(route="/api/stats/rounds", version="v1")
async def record_round(game_id: str, req: RecordRoundRequest):
    """Fold one finished round into the game's aggregate."""
    try:
        return get_stats_service().record_round(
            game_id, req.score, req.correct, req.wrong, req.streak, time=req.time,
        )
    except UnknownGameError:
        raise HTTPException(status_code=404, detail=f"Game {game_id} not found")


@router.delete("", response_model=ResetResponse)
async def reset_stats():
    get_stats_service().reset_all()
    return ResetResponse()
