"""
Configuration Module
Version: 1.0.0

Centralized configuration with validation.
Ranking constants (fuzzy tolerance, ambiguity threshold, result limits) live
here so they can be tuned from the environment without code changes.
"""
import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("configuration")

class Settings(BaseSettings):

    # =========================================================================
    # APPLICATION
    # =========================================================================

    APP_ENV: str = Field(default="development")
    APP_NAME: str = Field(default="Civic Service Directory")
    APP_VERSION: str = Field(default="1.0.0")

    # =========================================================================
    # CATALOG
    # =========================================================================
    CATALOG_SOURCE: str = Field(
        default="data/catalog.json",
        description="Path or http(s) URL of the catalog snapshot ({\"entries\": [...]})"
    )
    CATALOG_TIMEOUT_SECONDS: float = Field(default=10.0, description="HTTP timeout for remote catalogs")

    # =========================================================================
    # RANKING
    # =========================================================================
    MAX_RESULTS: int = Field(default=12, description="Top-N results returned for a query")
    BROWSE_LIMIT: int = Field(default=8, description="Entries shown when the query is empty")
    DEFAULT_PRIORITY: float = Field(default=50.0)
    PRIORITY_WEIGHT: float = Field(
        default=0.01,
        description="Multiplier applied to entry priority before adding it to the index score"
    )
    FUZZY_TOLERANCE: float = Field(
        default=0.2,
        description="Relative edit distance allowed by the index (fraction of term length)"
    )
    PREFIX_SEARCH: bool = Field(default=True)

    # =========================================================================
    # CLARIFIER
    # =========================================================================
    AMBIGUITY_RATIO_THRESHOLD: float = Field(
        default=0.88,
        description="second/first score ratio above which the top two results are ambiguous"
    )

    # =========================================================================
    # DID YOU MEAN
    # =========================================================================
    SUGGESTION_LIMIT: int = Field(default=5)
    SUGGESTION_MAX_RESULT_COUNT: int = Field(
        default=2,
        description="Suggestions are produced only when the result count is at most this"
    )
    SUGGESTION_MAX_DISTANCE: int = Field(default=2)
    SUGGESTION_MAX_LENGTH_DIFF: int = Field(default=3)
    MATCHED_ON_LIMIT: int = Field(default=4)

    # =========================================================================
    # MONITORING & LOGGING
    # =========================================================================

    # Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL
    LOG_LEVEL: str = Field(default="INFO", description="Logging level (DEBUG/INFO/WARNING/ERROR)")

    # =========================================================================
    # CONFIGURATION (Pydantic V2 Style)
    # =========================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    # =========================================================================
    # VALIDATORS
    # =========================================================================
    @field_validator('MAX_RESULTS', 'BROWSE_LIMIT', 'SUGGESTION_LIMIT', 'MATCHED_ON_LIMIT')
    @classmethod
    def validate_positive_limit(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Limit must be at least 1: {v}")
        return v

    @field_validator('SUGGESTION_MAX_RESULT_COUNT', 'SUGGESTION_MAX_DISTANCE', 'SUGGESTION_MAX_LENGTH_DIFF')
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"Value must not be negative: {v}")
        return v

    @field_validator('FUZZY_TOLERANCE')
    @classmethod
    def validate_fuzzy(cls, v: float) -> float:
        if not 0.0 <= v < 1.0:
            raise ValueError(f"FUZZY_TOLERANCE must be in [0, 1): {v}")
        return v

    @field_validator('AMBIGUITY_RATIO_THRESHOLD')
    @classmethod
    def validate_ratio(cls, v: float) -> float:
        if not 0.0 < v <= 1.0:
            raise ValueError(f"AMBIGUITY_RATIO_THRESHOLD must be in (0, 1]: {v}")
        return v

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Invalid environment values fail here, before the catalog is loaded.
    """
    try:
        return Settings()
    except Exception as e:
        logger.critical(f"FATAL CONFIG ERROR: Could not load settings. Error: {e}")
        raise e
