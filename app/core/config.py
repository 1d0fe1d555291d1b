"""Application-wide settings."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven settings model."""

    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"
    SERVICE_SECRET: str | None = None
    DOCS_MODE: str = "disabled"
    EXPOSE_INTERNAL_ERRORS: bool = False
    SECURITY_HEADERS_ENABLED: bool = True
    PLANNER_TRAVEL_BUFFER_MINUTES: int = 10
    PLANNER_DEFAULT_TRAVEL_MINUTES: int = 10
    PLANNER_CLUSTER_RADIUS_METERS: float = 1500.0
    PLANNER_MAX_LEG_MINUTES: int = 20
    PLANNER_WALKABLE_LEG_MINUTES: int = 15
    PLANNER_BUDGET_PLAN_RATIO: float = 0.7
    PLANNER_DEFAULT_PARTY_SIZE: int = 2
    PLANNER_CITY_CACHE_MAX_ENTRIES: int = 64

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator(
        "PLANNER_TRAVEL_BUFFER_MINUTES",
        "PLANNER_DEFAULT_TRAVEL_MINUTES",
        "PLANNER_MAX_LEG_MINUTES",
        "PLANNER_WALKABLE_LEG_MINUTES",
        mode="before",
    )
    @classmethod
    def _clamp_minutes(cls, value: object) -> int:
        try:
            numeric = int(value) if value is not None else 10
        except (TypeError, ValueError):
            numeric = 10
        return min(240, max(0, numeric))

    @field_validator("PLANNER_CLUSTER_RADIUS_METERS", mode="before")
    @classmethod
    def _clamp_cluster_radius(cls, value: object) -> float:
        try:
            numeric = float(value) if value is not None else 1500.0
        except (TypeError, ValueError):
            numeric = 1500.0
        return min(50000.0, max(1.0, numeric))

    @field_validator("PLANNER_BUDGET_PLAN_RATIO", mode="before")
    @classmethod
    def _clamp_budget_plan_ratio(cls, value: object) -> float:
        try:
            numeric = float(value) if value is not None else 0.7
        except (TypeError, ValueError):
            numeric = 0.7
        return min(1.0, max(0.1, numeric))

    @field_validator("PLANNER_DEFAULT_PARTY_SIZE", "PLANNER_CITY_CACHE_MAX_ENTRIES", mode="before")
    @classmethod
    def _clamp_positive_int(cls, value: object) -> int:
        try:
            numeric = int(value) if value is not None else 1
        except (TypeError, ValueError):
            numeric = 1
        return max(1, numeric)


@lru_cache
def get_settings() -> Settings:
    """Return the cached Settings instance, created on first call."""
    return Settings()
