from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Literal, Optional


class Settings(BaseSettings):
    # Application
    app_name: str = "MathBase"
    debug: bool = False

    # Persistence: memory | file | supabase
    store_backend: Literal["memory", "file", "supabase"] = "memory"
    store_path: str = ".mathbase_store.json"

    # Supabase (only read when store_backend == "supabase" or telemetry is persisted)
    supabase_url: str = ""
    supabase_service_key: str = ""
    supabase_table: str = "kv_store"
    enable_telemetry_db: bool = False

    # Generators
    random_seed: Optional[int] = None
    max_distractor_attempts: int = 100
    memory_pairs: int = 6

    # CORS
    frontend_url: str = "http://localhost:8081"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "MATHBASE_"


@lru_cache
def get_settings() -> Settings:
    return Settings()
