import random
from functools import lru_cache

from mathbase.core.config import get_settings
from mathbase.services.games_stats import GamesStatsService
from mathbase.services.kv_store import get_kv_store
from mathbase.services.progress import ProgressService


def get_rng() -> random.Random:
    """Fresh generator per request; seeded when MATHBASE_RANDOM_SEED is set."""
    return random.Random(get_settings().random_seed)


@lru_cache
def get_stats_service() -> GamesStatsService:
    return GamesStatsService(get_kv_store())


@lru_cache
def get_progress_service() -> ProgressService:
    return ProgressService(get_kv_store())
