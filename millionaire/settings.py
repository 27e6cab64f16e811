"""Settings for the quizquest game engine."""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _env_field(default, *env_names: str):
    if env_names:
        alias = AliasChoices(*env_names) if len(env_names) > 1 else env_names[0]
        return Field(default=default, validation_alias=alias)
    return Field(default=default)


class Settings(BaseSettings):
    environment: str = _env_field("production", "ENV", "APP_ENV", "ENVIRONMENT")
    service_name: str = _env_field("quizquest", "SERVICE_NAME")
    log_level: str = _env_field("INFO", "LOG_LEVEL")
    log_sampling_rate_info: float = _env_field(1.0, "LOG_SAMPLING_RATE_INFO")

    # Key-value store holding the question cache and throttle counters
    store_backend: Literal["memory", "redis"] = _env_field("memory", "STORE_BACKEND")
    redis_url: str = _env_field("redis://localhost:6379/0", "REDIS_URL")
    store_key_prefix: str = _env_field("quizquest:", "STORE_KEY_PREFIX")

    # Remote trivia source
    opentdb_url: str = _env_field("https://opentdb.com/api.php", "OPENTDB_URL")
    batch_size: int = _env_field(5, "OPENTDB_BATCH_SIZE")
    request_timeout_seconds: float = _env_field(10.0, "OPENTDB_TIMEOUT_SECONDS")
    fetch_jitter_ms_min: int = _env_field(100, "FETCH_JITTER_MS_MIN")
    fetch_jitter_ms_max: int = _env_field(700, "FETCH_JITTER_MS_MAX")

    cache_ttl_seconds: int = 86_400  # 24 hours
    cooldown_seconds: int = 1_800  # 30 minutes after a rate limit
    throttle_window_seconds: int = 300  # idle gap that resets the request counter
    throttle_max_requests: int = 5

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("log_level", mode="before")
    def _normalise_level(cls, value):  # type: ignore[override]
        return str(value or "INFO").upper()


settings = Settings()
