"""
Application Configuration

Pydantic Settings for environment variable management.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import List, Optional
import json


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # App
    app_name: str = "DuelLog API"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./duellog.db"
    # Seconds a SQLite writer waits for another writer before giving up
    sqlite_busy_timeout: float = 30.0

    # Single-user mode: falls back to the first users row when unset
    default_user_id: Optional[str] = None
    default_game_key: str = "master_duel"

    # API
    cors_origins: str = '["http://localhost:5173"]'

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from JSON string"""
        try:
            return json.loads(self.cors_origins)
        except (json.JSONDecodeError, TypeError):
            return ["http://localhost:5173"]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Global settings instance for easy import
settings = get_settings()
