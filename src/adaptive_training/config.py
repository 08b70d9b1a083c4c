"""Configuration settings for the adaptive training engine."""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


PACKAGE_ROOT = Path(__file__).parent  # src/adaptive_training/
PROJECT_ROOT = PACKAGE_ROOT.parent.parent


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ADAPTIVE_TRAINING_",
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"

    # Synthetic requests built from wearable insights
    combined_intensity_reduction_pct: int = -15  # intensity + volume both flagged
    intensity_reduction_pct: int = -10
    volume_reduction_pct: int = -20

    # Action bundle
    high_stress_intensity_reduction_pct: int = -15
    target_rpe_standard: int = 7
    target_rpe_reduced: int = 6


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(level: str | None = None) -> None:
    """Install a root handler for command line use."""
    level_name = (level or get_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
