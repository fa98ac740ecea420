"""
Settings Management with Pydantic

Provides type-safe configuration management with:
- Environment variable support
- Default goal thresholds
- Storage collaborator paths
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.entities import DEFAULT_HIGH_GOAL, DEFAULT_MEDIUM_GOAL, Goals


class GoalsConfig(BaseSettings):
    """Default NSLI goals, used until a user saves an override."""
    model_config = SettingsConfigDict(
        env_prefix="GOALS_",
        extra="ignore"
    )

    high: float = DEFAULT_HIGH_GOAL
    medium: float = DEFAULT_MEDIUM_GOAL

    def to_goals(self) -> Goals:
        return Goals(high=self.high, medium=self.medium)


class StorageConfig(BaseSettings):
    """Where the storage collaborator keeps per-user records."""
    model_config = SettingsConfigDict(
        env_prefix="STORAGE_",
        extra="ignore"
    )

    app_id: str = "nsli-tracker-production"
    root_collection: str = "nsli_tracker"
    settings_document: str = "config"

    def entries_path(self, user_id: str) -> str:
        return f"{self.root_collection}/{self.app_id}/users/{user_id}/entries"

    def settings_path(self, user_id: str) -> str:
        return (
            f"{self.root_collection}/{self.app_id}/users/{user_id}"
            f"/settings/{self.settings_document}"
        )


class Settings(BaseSettings):
    """Main application settings."""
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Application
    app_name: str = "NSLI Tracker"
    debug: bool = False
    log_level: str = "INFO"

    # Sub-configurations
    goals: GoalsConfig = Field(default_factory=GoalsConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)

    # Calculator defaults
    default_appointment_count: int = 2

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables."""
        return cls(
            goals=GoalsConfig(),
            storage=StorageConfig()
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_env()
