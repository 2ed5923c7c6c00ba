"""
Configuration management using pydantic-settings.

Loads configuration from environment variables and .env file.
"""
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import LEAGUE_CATALOG_LIMIT


class ESPNSettings(BaseSettings):
    """Settings for the ESPN public APIs."""

    model_config = SettingsConfigDict(env_prefix="ESPN_")

    core_api_url: str = Field(
        default="https://sports.core.api.espn.com/v2",
        description="Base URL for the ESPN core API (leagues, odds)",
    )
    site_api_url: str = Field(
        default="https://site.api.espn.com/apis/site/v2",
        description="Base URL for the ESPN site API (scoreboards)",
    )
    sport: str = Field(default="soccer")
    lang: str = Field(default="en")
    region: str = Field(default="us")
    league_limit: int = Field(
        default=LEAGUE_CATALOG_LIMIT,
        description="Maximum number of leagues taken from the catalog",
    )
    request_timeout_seconds: float = Field(default=15.0)

    @field_validator("league_limit")
    @classmethod
    def validate_league_limit(cls, v: int) -> int:
        if v < 0:
            raise ValueError("league_limit must be non-negative")
        return v


class TimeWindowSettings(BaseSettings):
    """Settings for the render-time event window."""

    model_config = SettingsConfigDict(env_prefix="WINDOW_")

    lookback_days: int = Field(
        default=4,
        description="Days before now an event may start and still be shown",
    )
    lookahead_days: int = Field(
        default=8,
        description="Days after now an event may start and still be shown",
    )

    @field_validator("lookback_days", "lookahead_days")
    @classmethod
    def validate_days(cls, v: int) -> int:
        if v < 0:
            raise ValueError("window days must be non-negative")
        return v


class SchedulerSettings(BaseSettings):
    """Settings for the refresh scheduler."""

    model_config = SettingsConfigDict(env_prefix="")

    refresh_interval_minutes: int = Field(
        default=5,
        description="Minutes between scheduled refresh cycles",
    )


class DashboardSettings(BaseSettings):
    """Settings for dashboard interfaces."""

    model_config = SettingsConfigDict(env_prefix="")

    dashboard_mode: str = Field(
        default="terminal",
        description="Dashboard mode: terminal or headless",
    )

    @field_validator("dashboard_mode")
    @classmethod
    def validate_dashboard_mode(cls, v: str) -> str:
        allowed = ["terminal", "headless"]
        if v not in allowed:
            raise ValueError(f"dashboard_mode must be one of {allowed}")
        return v


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="INFO")
    debug: bool = Field(default=False)

    # Sub-settings
    espn: ESPNSettings = Field(default_factory=ESPNSettings)
    time_window: TimeWindowSettings = Field(default_factory=TimeWindowSettings)
    scheduler: SchedulerSettings = Field(default_factory=SchedulerSettings)
    dashboard: DashboardSettings = Field(default_factory=DashboardSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
