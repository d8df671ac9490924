"""Application settings via environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings via environment variables."""

    # Remote summarization / chat backend
    service_base_url: str = "http://localhost:3000"
    summarize_path: str = "/api/summarize"
    chat_path: str = "/api/chat"
    request_timeout_seconds: float = 60.0

    # Conversation
    chat_history_limit: int | None = None  # None replays the full history

    # Logging
    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "DOCUCHAT_",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
