"""
gkelog Configuration Module.

Each sub-module represents an independent concern with its own environment
variable prefix:

    GKELOG_LOG_*     host logging (level, output format)
    GCE_METADATA_*   metadata server discovery
    POD_*            downward-API pod identity

Usage:
    from gkelog.config import settings

    settings.logging.level

MetadataSettings and PodSettings are read fresh by the bootstrap, so they are
not cached here.
"""

from functools import cached_property

from pydantic_settings import BaseSettings, SettingsConfigDict

from .logging import LogFormat, LoggingSettings, LogLevel
from .platform import MetadataSettings, PodSettings


class Settings(BaseSettings):
    """Composite settings aggregating the configuration domains."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @cached_property
    def logging(self) -> LoggingSettings:
        return LoggingSettings()


# Singleton instance
settings = Settings()

__all__ = [
    "Settings",
    "settings",
    "LogFormat",
    "LogLevel",
    "LoggingSettings",
    "MetadataSettings",
    "PodSettings",
]
