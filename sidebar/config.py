"""
Application configuration using pydantic-settings.
Loads from environment variables with .env file support.
"""

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Security (no default: the process refuses to start without a secret)
    jwt_secret: str = Field(..., min_length=16)
    jwt_algorithm: str = "HS256"
    token_expire_days: int = 7
    bcrypt_rounds: int = Field(10, ge=4, le=31)  # ~100ms at 10

    # Anthropic
    anthropic_model: str = "claude-sonnet-4-20250514"
    anthropic_max_tokens: int = 4096

    # JobTread
    jobtread_graphql_url: str = "https://app.jobtread.com/graphql"
    jobtread_timeout_seconds: float = 20.0

    # Application
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR
    slow_request_ms: int = 5000  # LLM calls routinely take a few seconds

    # API Settings
    api_prefix: str = "/api"
    project_name: str = "Mr. Better Boss Sidebar"
    version: str = "1.0.0"
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
