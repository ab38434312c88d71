from functools import lru_cache
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    app_env: str = "dev"
    log_level: str = "INFO"
    oneaccount_log_level: Optional[str] = None

    # Staged auth
    callback_path: str = "oneaccountauth"
    verify_url: str = "https://api.oneaccount.app/widget/verify"
    verify_timeout_seconds: float = 10.0

    # Store
    store_backend: Literal["memory", "redis"] = "memory"
    staged_ttl_seconds: int = 60
    sweep_interval_seconds: float = 5.0
    redis_url: str = "redis://redis:6379/0"
    redis_key_prefix: str = "oa:"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
