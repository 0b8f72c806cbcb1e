"""Configuration management for Style Consistency Analyzer."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, loaded from environment and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SCA_",
    )

    # Baseline size requirements
    min_baseline_samples: int = Field(default=3, ge=1, description="Samples needed before z-scores mean anything")
    recommended_baseline_samples: int = Field(default=5, ge=1)
    strong_baseline_samples: int = Field(default=7, ge=1)

    # Text processing
    min_words: int = Field(default=100, description="Samples shorter than this are flagged as unreliable")
    msttr_segment_size: int = Field(default=50, ge=1, description="Window size for MSTTR")

    # Processing settings
    parallel_workers: int = Field(default=1, ge=1, description="Threads used to analyze baseline samples")
    sample_pattern: str = Field(default="*.txt", description="Glob used to pick up baseline files")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
