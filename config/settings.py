"""
Configuration settings for the Intersect memory engine.
Uses Pydantic Settings for type-safe configuration with validation.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Pydantic validates types and provides clear error messages for misconfigurations.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra env vars
    )

    # Database
    DATABASE_URL: str = Field(
        default="sqlite:///intersect.db",
        description="SQLAlchemy URL of the memory store (SQLite or PostgreSQL)",
    )

    # Application
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    LOG_FORMAT: Literal["console", "json"] = Field(
        default="console",
        description="structlog renderer: human-readable console output or JSON lines",
    )

    # ==================== Consolidation Configuration ====================

    DECAY_THRESHOLD: float = Field(
        default=0.5,
        description="Patterns below this confidence lose DECAY_AMOUNT on each decay pass. "
                    "Used in: MemoryManager.run_decay()",
        ge=0.0,
        le=1.0,
    )
    DECAY_AMOUNT: float = Field(
        default=0.05,
        description="Confidence removed from each weak pattern per decay pass",
        ge=0.0,
        le=1.0,
    )

    PATTERN_MATCHING: Literal["exact", "normalized", "similar"] = Field(
        default="exact",
        description="How a new pattern observation is matched against stored patterns",
    )
    THEME_MATCHING: Literal["exact", "normalized", "similar"] = Field(
        default="exact",
        description="How a recorded theme label is matched against stored themes",
    )
    SIMILARITY_CUTOFF: float = Field(
        default=0.9,
        description="Minimum difflib ratio for the 'similar' matching strategy",
        gt=0.0,
        le=1.0,
    )

    WEIGHT_POLICY: Literal["passthrough", "normalize", "strict"] = Field(
        default="passthrough",
        description="passthrough stores weights verbatim, normalize rescales them to sum 1.0, "
                    "strict rejects vectors that are negative or do not sum to 1.0",
    )

    # ==================== Query Limits ====================

    COMPACT_SUMMARY_LIMIT: int = Field(
        default=3,
        description="Number of recent conversation summaries returned by default",
        ge=1,
        le=50,
    )
    TOP_THEMES_LIMIT: int = Field(
        default=5,
        description="Number of themes returned by top-N queries and memory stats",
        ge=1,
    )
    HIGH_CONFIDENCE_THRESHOLD: float = Field(
        default=0.7,
        description="Minimum confidence for facts considered high-confidence",
        ge=0.0,
        le=1.0,
    )

    # ==================== Completion Provider ====================

    MODEL_CONVERSATION: str = Field(
        default="claude-sonnet-4-20250514",
        description="Model used by the completion provider for agent responses",
    )
    COMPLETION_MAX_TOKENS: int = Field(
        default=2048,
        description="Default max_tokens when the caller does not pass one",
        ge=1,
    )
    COMPLETION_TEMPERATURE: float = Field(
        default=0.7,
        description="Default sampling temperature",
        ge=0.0,
        le=2.0,
    )

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Ensure database URL points at a supported backend."""
        if not v.startswith(("sqlite://", "sqlite+pysqlite://", "postgresql://", "postgresql+psycopg2://")):
            raise ValueError("DATABASE_URL must be a sqlite:// or postgresql:// URL")
        return v


# Create singleton instance with validation
# This will automatically load from .env and validate all fields
settings = Settings()
