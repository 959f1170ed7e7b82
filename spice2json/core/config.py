"""Exporter configuration using Pydantic Settings.

Configuration is loaded from environment variables.

Optionally, point `ENV_FILE` at a local env file (for development). When
`ENV_FILE` is unset or empty, only the process environment is consulted.
"""

import logging
import os
from enum import Enum

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppEnvironment(str, Enum):
    """Application environment values."""

    LOCAL = "local"
    TEST = "test"
    PROD = "prod"


class Settings(BaseSettings):
    """
    Exporter settings with type validation.

    Configuration is loaded from environment variables, with support
    for an env file in development.
    """

    model_config = SettingsConfigDict(
        env_file=os.getenv("ENV_FILE") or None, env_prefix="", extra="ignore"
    )

    # Application
    app_env: AppEnvironment = AppEnvironment.LOCAL
    app_name: str = "spice2json"
    app_log_level: str = "WARNING"

    # Observability
    # Structured logs emit one JSON object per line; plain logs are for terminals
    observability_structured_logs: bool = False
    observability_metrics_enabled: bool = True

    # Output formatting
    # Indent of 0 produces compact single-line JSON
    output_indent: int = 2
    output_sort_keys: bool = False

    @field_validator("app_env", mode="before")
    @classmethod
    def validate_app_env(cls, v: str | AppEnvironment) -> AppEnvironment:
        """Validate and parse app_env to AppEnvironment enum."""
        if isinstance(v, AppEnvironment):
            return v
        try:
            return AppEnvironment(v.lower())
        except ValueError:
            raise ValueError(
                f"app_env must be one of {[e.value for e in AppEnvironment]}, got '{v}'"
            )

    @field_validator("app_log_level")
    @classmethod
    def validate_app_log_level(cls, v: str) -> str:
        """Normalize the log level and reject names logging does not know."""
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"app_log_level must be a logging level name, got '{v}'")
        return level

    @field_validator("output_indent")
    @classmethod
    def validate_output_indent(cls, v: int) -> int:
        """Indent must be zero (compact) or positive."""
        if v < 0:
            raise ValueError(f"output_indent must be >= 0, got {v}")
        return v


settings = Settings()
