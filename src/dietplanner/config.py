"""Engine configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from dietplanner.schemas import DietType, UnitSystem


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DIETPLANNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Shopping list rendering
    unit_system: UnitSystem = UnitSystem.METRIC

    # Planning
    default_diet: DietType = DietType.CALORIE_DEFICIT
    recipes_per_day: int = Field(default=3, ge=1)

    # Ingredient matching: None disables the typo-tolerant stage
    fuzzy_match_threshold: float | None = Field(default=None, ge=0, le=100)

    # Persistence
    preferences_url: str = "sqlite:///dietplanner.db"

    # Application
    environment: str = "development"
    log_level: str = "INFO"

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
