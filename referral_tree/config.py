"""
Referral tree engine settings.

Loads configuration from environment variables using pydantic-settings.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from referral_tree.constants import DEFAULT_MAX_DEPTH, MAX_ALLOWED_DEPTH


LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class TreeEngineSettings(BaseSettings):
    """Engine settings loaded from REFERRAL_TREE_* environment variables."""

    max_depth: int = Field(
        default=DEFAULT_MAX_DEPTH,
        ge=1,
        le=MAX_ALLOWED_DEPTH,
        description="Deepest level attached by the tree builder",
    )
    strict_levels: bool = Field(
        default=False,
        description="Only attach children whose reported level is parent depth + 1",
    )
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="REFERRAL_TREE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level against loguru level names."""
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(
                f'Invalid log level: {v}. '
                f'Expected one of: {", ".join(LOG_LEVELS)}'
            )
        return level


# Global settings instance
settings = TreeEngineSettings()
