"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from dealscore_gateway.domain.thresholds import (
    EXCESSIVE_FEE_BANDS,
    ILLEGITIMATE_FEE_BANDS,
    GradingConfig,
)


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "dealscore-gateway"
    log_level: str = "INFO"

    # Grading
    strict_mode: bool = False  # Reject missing/negative fee amounts instead of treating them as 0
    excessive_fee_ceiling: float = 1000.0
    illegitimate_fee_ceiling: float = 2000.0
    excessive_weight: float = 0.4
    illegitimate_weight: float = 0.6

    # Rankings
    ranking_tolerance: float = 0.01  # Fee differences below this (in dollars) are ties


def build_grading_config(settings: Settings) -> GradingConfig:
    """Freeze the tunable grading numbers into a GradingConfig"""
    return GradingConfig(
        excessive_bands=EXCESSIVE_FEE_BANDS,
        illegitimate_bands=ILLEGITIMATE_FEE_BANDS,
        excessive_ceiling=settings.excessive_fee_ceiling,
        illegitimate_ceiling=settings.illegitimate_fee_ceiling,
        excessive_weight=settings.excessive_weight,
        illegitimate_weight=settings.illegitimate_weight,
    )


settings = Settings()
