"""Application configuration via pydantic-settings."""

from functools import lru_cache

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API Settings
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS - comma-separated origins (env var: CORS_ORIGINS)
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    @computed_field
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # Data sources - file path (relative to repo root) or http(s) URL
    counters_source: str = "data/counters.csv"
    lanes_source: str = "data/lanes.csv"
    http_timeout: float = 10.0

    # Best-effort live counter page
    live_counters_url: str = "https://www.mobilelegends.com/rank"

    # Suggestions
    default_max_picks: int = 5

    # Win probability curve: p = 1 / (1 + e^(-slope * (total - midpoint)))
    win_slope: float = 0.35
    win_midpoint: float = 6.0
    win_display_min: int = 5
    win_display_max: int = 95

    # Rooms
    default_room: str = "public"
    max_rooms: int = 256
    sync_enabled: bool = True


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
