"""Configuration management for the chambers routing service."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ==========================================================================
    # Application
    # ==========================================================================
    APP_NAME: str = "Chambers Routing"
    APP_VERSION: str = "0.1.0"
    ALGORITHM_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ==========================================================================
    # Database
    # ==========================================================================
    DATABASE_URL: str = "sqlite:///data/chambers.db"

    # ==========================================================================
    # Routing Policy Defaults
    # ==========================================================================
    # Workload points
    MAX_WORKLOAD: int = Field(default=100, gt=0, description="Workload points at full capacity")

    # Capacity ceilings (utilisation percent)
    MAX_CAPACITY_PERCENT: float = 90.0
    URGENT_CAPACITY_PERCENT: float = 80.0  # Immediate enquiries only

    # Matter value thresholds (GBP)
    HIGH_VALUE_THRESHOLD: float = 100_000
    VERY_HIGH_VALUE_THRESHOLD: float = 500_000
    SIMPLE_VALUE_CEILING: float = 10_000

    # High-value matters need an engaged barrister
    MIN_ENGAGEMENT_FOR_HIGH_VALUE: float = 70.0

    # Number of alternatives returned after the recommendation
    ALTERNATIVE_CANDIDATES: int = 4

    # ==========================================================================
    # API
    # ==========================================================================
    MAX_EVALUATION_CANDIDATES: int = 20
    AVAILABILITY_RESULT_LIMIT: int = 50


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience alias
settings = get_settings()


# ==========================================================================
# Complexity Keywords
# ==========================================================================
# Any of these in an enquiry description marks the matter as complex
COMPLEX_KEYWORDS: tuple[str, ...] = (
    "judicial review", "human rights", "appeal", "tribunal",
    "international", "regulatory", "constitutional", "fraud",
    "multi-party", "class action", "urgent injunction",
)

# Low-value matters described with these are simple
SIMPLE_KEYWORDS: tuple[str, ...] = (
    "advice", "opinion", "consultation", "review",
    "straightforward", "standard", "routine",
)
