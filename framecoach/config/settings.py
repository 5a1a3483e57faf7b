"""
Configuration settings using Pydantic Settings.

Everything the matchup engine reads from the environment lives here:
upstream frame-data source, cache lifetime, fetch timeout and the
presentation caps applied to the classified move sets.
"""

from pydantic import AliasChoices, Field
from pydantic_settings import (
    BaseSettings,
    SettingsConfigDict,
    PydanticBaseSettingsSource,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Order: init kwargs > .env (dotenv) > env vars > file secrets
    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ):
        return (
            init_settings,
            dotenv_settings,
            env_settings,
            file_secret_settings,
        )

    # Upstream frame-data source (TekkenDocs)
    tekkendocs_base_url: str = Field(
        "https://tekkendocs.com",
        validation_alias=AliasChoices("TEKKENDOCS_API_URL", "NEXT_PUBLIC_TEKKENDOCS_API_URL"),
    )
    tekkendocs_game: str = Field("t8", alias="TEKKENDOCS_GAME")
    tekkendocs_user_agent: str = Field("FrameCoach/0.1", alias="TEKKENDOCS_USER_AGENT")

    # Character data cache
    frame_data_cache_ttl_seconds: float = Field(
        24 * 60 * 60,
        alias="FRAME_DATA_CACHE_TTL_SECONDS",
        description="Lifetime of a cached move list, measured from fetch completion",
    )
    frame_data_fetch_timeout_seconds: float = Field(
        15.0,
        alias="FRAME_DATA_FETCH_TIMEOUT_SECONDS",
        description="Upper bound for a single upstream frame-data fetch",
    )

    # Output caps for downstream prompt/report size
    key_move_limit: int = Field(20, ge=1, alias="KEY_MOVE_LIMIT")
    punishable_move_limit: int = Field(15, ge=1, alias="PUNISHABLE_MOVE_LIMIT")
    punish_window_candidate_limit: int = Field(3, ge=1, alias="PUNISH_WINDOW_CANDIDATE_LIMIT")

    # Application Configuration
    app_env: str = Field("development", alias="APP_ENV")
    app_debug: bool = Field(False, alias="APP_DEBUG")
    app_log_level: str = Field("INFO", alias="APP_LOG_LEVEL")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"


# Global settings instance; every field has a default so import never fails.
settings = Settings()


def get_settings() -> Settings:
    """Get the global settings instance.

    This function provides dependency injection support for settings.
    """
    return settings
