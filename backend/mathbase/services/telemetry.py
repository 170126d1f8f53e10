"""
Per-request telemetry for the game endpoints.

Every instrumented call emits one ``api_call`` event tagged with the game and,
for lesson-challenge rounds, the module it was drawn from. Events go to the
``mathbase.telemetry`` logger as single-line JSON and, when
``MATHBASE_ENABLE_TELEMETRY_DB`` is set, to the Supabase ``telemetry_events``
table.
"""

import json
import logging
import time
from functools import wraps
from typing import Optional

from mathbase.core.config import get_settings

logger = logging.getLogger("mathbase.telemetry")


def emit_event(event: str, *, route: str, version: str, game_id: Optional[str] = None,
               module_id: Optional[str] = None, status_code: int = 200,
               error_type: Optional[str] = None, latency_ms: Optional[int] = None):
    payload = {
        "event": event,
        "route": route,
        "version": version,
        "game_id": game_id,
        "module_id": module_id,
        "status_code": status_code,
        "ok": status_code < 400,
        "error_type": error_type,
        "latency_ms": latency_ms,
        "ts": time.time(),
    }
    logger.info("telemetry=%s", json.dumps(payload, separators=(",", ":")))

    if not get_settings().enable_telemetry_db:
        return

    try:
        from mathbase.services.supabase_client import get_supabase_client
        sb = get_supabase_client()
        sb.table("telemetry_events").insert({k: v for k, v in payload.items() if k != "ts"}).execute()
    except Exception as e:
        logger.error("[telemetry.emit_event] %s", e, exc_info=True)


def round_context(kwargs: dict, game_id: Optional[str] = None) -> tuple[Optional[str], Optional[str]]:
    """(game_id, module_id) of the round an endpoint call is about."""
    game_id = kwargs.get("game_id", game_id)
    req = kwargs.get("req")
    state = getattr(req, "state", None)
    if game_id is None and state is not None:
        game_id = state.game_id
    return game_id, kwargs.get("module_id")


def instrument(route: str, version: str, game_id: Optional[str] = None):
    """
    Time an async endpoint and emit its outcome.

    ``game_id`` tags routes that serve a single game; otherwise it is read from
    the ``game_id`` path parameter or the session in the request body.
    HTTPExceptions are reported with their status code, anything else as 500.
    """
    def deco(fn):
        @wraps(fn)
        async def wrapped(*args, **kwargs):
            t0 = time.perf_counter()
            status_code = 200
            err = None
            try:
                return await fn(*args, **kwargs)
            except Exception as e:
                status_code = getattr(e, "status_code", 500)
                err = e.__class__.__name__
                raise
            finally:
                game, module_id = round_context(kwargs, game_id)
                emit_event(
                    "api_call", route=route, version=version, game_id=game, module_id=module_id,
                    status_code=status_code, error_type=err,
                    latency_ms=int((time.perf_counter() - t0) * 1000),
                )
        return wrapped
    return deco
