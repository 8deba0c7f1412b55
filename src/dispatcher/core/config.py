"""Configuration settings for the dispatch service."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """A required provider setting is missing."""

    def __init__(self, message: str, setting: str | None = None):
        super().__init__(message)
        self.setting = setting


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Service identification
    service_name: str = "model-dispatch"
    debug: bool = False

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 8002

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    # Primary provider (OpenAI-compatible chat completions)
    primary_api_key: str | None = None
    primary_base_url: str = "https://api.openai.com/v1"
    primary_model: str = "gpt-4o-mini"

    # Secondary provider (multi-model text generation)
    secondary_api_key: str | None = None
    secondary_base_url: str = "https://api-inference.huggingface.co"

    # Timeouts (seconds)
    request_timeout: float = 60.0

    # Query defaults
    default_max_models: int = 4
    default_max_tokens: int = 350

    # CORS configuration
    cors_origins: list[str] = ["*"]

    model_config = SettingsConfigDict(
        env_prefix="DISPATCHER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
