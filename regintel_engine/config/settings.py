"""Application settings using Pydantic BaseSettings for environment variable management."""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """
    Global application settings loaded from environment variables.

    Attributes:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log output format (json for production, console for dev)
        mapping_threshold: Minimum mean similarity for a device entity mapping
        relationship_min_strength: Strength a case relationship must exceed
        trend_window_days: Default sliding window for trend reports
        corpus_path: JSON corpus file used by the CLI
    """

    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    log_format: str = Field(
        default="json",
        description="Log output format: json or console"
    )
    mapping_threshold: float = Field(
        default=0.75,
        ge=0.0,
        le=1.0,
        description="Minimum mean pairwise similarity for cross-jurisdiction mappings"
    )
    relationship_min_strength: float = Field(
        default=0.3,
        ge=0.0,
        le=1.0,
        description="Case relationships are kept only above this strength"
    )
    trend_window_days: int = Field(
        default=90,
        gt=0,
        description="Default trend window in days"
    )
    corpus_path: str | None = Field(
        default=None,
        description="Path to a JSON corpus snapshot for CLI commands"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Singleton instance - import this throughout the application
settings = Settings()
