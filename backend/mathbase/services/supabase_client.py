from supabase import create_client

from mathbase.core.config import get_settings

_client = None


def get_supabase_client():
    global _client
    if _client:
        return _client
    settings = get_settings()
    if not settings.supabase_url or not settings.supabase_service_key:
        raise RuntimeError("Supabase settings missing (MATHBASE_SUPABASE_URL / MATHBASE_SUPABASE_SERVICE_KEY)")
    _client = create_client(settings.supabase_url, settings.supabase_service_key)
    return _client
