"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    supabase_anon_key: str
    storage_bucket: str = "analyzed_images"
    openai_api_key: str
    openai_vision_model: str = "gpt-4o"
    openai_max_output_tokens: int = 1000
    openai_tts_model: str = "tts-1"
    openai_tts_voice: str = "alloy"
    tts_response_formats: str = "mp3,wav"
    dictionary_api_base_url: str = "https://api.dictionaryapi.dev/api/v2"
    dictionary_cache_ttl_seconds: int = 3600
    session_cookie_name: str = "vd-access-token"
    session_cookie_secure: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_csv(raw: str | None) -> tuple[str, ...]:
    """Split a comma-separated env value into trimmed, lower-cased items."""
    if raw is None:
        return ()
    return tuple(
        value for chunk in raw.split(",") if (value := chunk.strip().lower())
    )
