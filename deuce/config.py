"""
Library configuration — environment-driven settings and logging setup.
"""

import logging
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings

LOG_FORMAT: str = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


class Settings(BaseSettings):
    """Central configuration for the Deuce scoring library."""

    # ── Logging ──────────────────────────────────────────
    LOG_LEVEL: str = "INFO"

    # ── Scoring Defaults ─────────────────────────────────
    DEFAULT_FORMAT: str = Field(default="standard", description="Name of a format in the catalogue")
    HISTORY_LIMIT: Optional[int] = Field(
        default=None,
        ge=1,
        description="Maximum undo snapshots kept per match; None keeps the full history",
    )

    class Config:
        env_prefix = "DEUCE_"
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach a stream handler to the package logger.

    Args:
        level: Log level name; defaults to ``settings.LOG_LEVEL``.

    Returns:
        logging.Logger: The ``deuce`` package logger.
    """
    logger = logging.getLogger("deuce")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel((level or settings.LOG_LEVEL).upper())
    return logger
