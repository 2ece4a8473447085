"""API diff configuration loaded from environment variables."""

from __future__ import annotations

import logging

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_LOG_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"


class Settings(BaseSettings):
    """Settings loaded from environment variables with the APIDIFF_ prefix."""

    model_config = SettingsConfigDict(
        env_prefix="APIDIFF_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Diff behaviour
    detect_changes: bool = True
    fail_on_diff: bool = False

    # Logging
    debug: bool = False
    log_format: str = DEFAULT_LOG_FORMAT

    @property
    def log_level(self) -> int:
        return logging.DEBUG if self.debug else logging.WARNING


def load_settings(**overrides: object) -> Settings:
    """Load settings from environment, with optional overrides for testing."""
    settings = Settings(**overrides)  # type: ignore[arg-type]

    if settings.debug:
        logger.debug(
            "Loaded settings: detect_changes=%s fail_on_diff=%s",
            settings.detect_changes,
            settings.fail_on_diff,
        )

    return settings
