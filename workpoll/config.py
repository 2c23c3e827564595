"""
Application configuration using Pydantic Settings.
Loads configuration from environment variables with sensible defaults.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Work registry
    work_min_duration_seconds: int = 1
    work_max_duration_seconds: int = 20
    work_pending_retry_after_seconds: int = 1

    # Polling client
    client_base_url: str = "http://localhost:8080"
    client_max_attempts: int = 64
    client_max_elapsed_seconds: float = 60.0
    client_max_wait_seconds: float | None = None
    client_max_redirects: int = 5
    client_timeout_seconds: float = 10.0

    # Observability
    otel_enabled: bool = False
    otel_exporter_otlp_endpoint: str = "http://localhost:4317"
    otel_service_name: str = "workpoll"
    log_level: str = "INFO"
    log_format: str = "json"  # json or console


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
