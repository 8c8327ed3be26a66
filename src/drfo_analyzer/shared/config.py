"""Configuration for DRFO Analyzer.

Settings are read from environment variables with the ``DRFO_`` prefix and
from an optional ``.env`` file.

Usage:
    from drfo_analyzer.shared.config import get_settings

    settings = get_settings()
    print(settings.default_variant)
"""

import codecs
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Environment Variables:
        DRFO_DEFAULT_VARIANT: Form variant used when none is given (e.g. 2022)
        DRFO_SOURCE_ENCODING: Text encoding of statement files (cp1251)
        DRFO_LOG_LEVEL: Minimum log level (DEBUG, INFO, WARNING, ERROR)
        DRFO_LOG_JSON: Render log lines as JSON instead of console text
    """

    model_config = SettingsConfigDict(
        env_prefix="DRFO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_variant: str = Field(
        default="2022",
        description="Form variant code used when the caller does not choose one",
    )
    source_encoding: str = Field(
        default="cp1251",
        description="Legacy single-byte encoding the tax office exports in",
    )
    log_level: str = Field(
        default="WARNING",
        description="Minimum level for log output",
    )
    log_json: bool = Field(
        default=False,
        description="Emit JSON log lines",
    )

    @field_validator("default_variant")
    @classmethod
    def normalize_variant(cls, v: str) -> str:
        """Variant codes are upper-case."""
        return v.strip().upper()

    @field_validator("source_encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Reject encodings Python does not know."""
        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {v}") from e
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Accept standard level names only."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
