"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class MatchingConfig(BaseModel):
    """Fuzzy matching settings."""

    fuzzy_threshold: float = Field(
        0.85, gt=0.0, le=1.0, description="Minimum similarity for two tokens to count as a match"
    )
    fuzzy_weight: float = Field(
        0.8, ge=0.0, le=1.0, description="Credit given to a fuzzy match relative to an exact one"
    )
    cache_size: int = Field(
        4096, ge=0, description="Entries kept in the similarity LRU cache (0 disables caching)"
    )


class ScoreWeights(BaseModel):
    """Weights of the four relevance components."""

    match: float = Field(0.5, ge=0.0, le=1.0)
    completeness: float = Field(0.2, ge=0.0, le=1.0)
    variety: float = Field(0.15, ge=0.0, le=1.0)
    level: float = Field(0.15, ge=0.0, le=1.0)

    @property
    def total(self) -> float:
        return self.match + self.completeness + self.variety + self.level


class ScoringSettings(BaseModel):
    """Relevance scorer settings."""

    weights: ScoreWeights = Field(default_factory=ScoreWeights)
    variety_target: int = Field(
        5, ge=1, description="Number of distinct matched categories that earns full variety credit"
    )
    neutral_level_score: float = Field(
        50.0, ge=0.0, le=100.0, description="Level score used when no seniority data is available"
    )


class RankingConfig(BaseModel):
    """Boost rules applied by the job ranker."""

    match_count_threshold: float = Field(5, ge=0)
    match_count_boost: float = Field(5, ge=0)
    few_missing_threshold: int = Field(2, ge=0)
    few_missing_boost: float = Field(3, ge=0)
    recency_boost: float = Field(2, ge=0)
    recent_days: int = Field(7, ge=0, description="Postings newer than this count as recent")


class GapConfig(BaseModel):
    """Skill gap aggregation settings."""

    default_top_n: int = Field(5, ge=1)
    position_window: int = Field(
        10, ge=0, description="Jobs ranked above this index get the position factor"
    )
    position_factor: float = Field(1.5, ge=1.0)
    default_relevance: float = Field(
        50.0, ge=0.0, description="Relevance assumed for jobs that carry no score"
    )
    high_rank_cutoff: int = Field(2, ge=0)
    medium_rank_cutoff: int = Field(5, ge=0)
    high_frequency_ratio: float = Field(0.6, ge=0.0, le=1.0)
    medium_frequency_ratio: float = Field(0.3, ge=0.0, le=1.0)
    max_context_titles: int = Field(3, ge=1)
    reason_titles: int = Field(2, ge=1)

    @model_validator(mode="after")
    def validate_cutoffs(self):
        """Priority bands must be ordered."""
        if self.medium_rank_cutoff < self.high_rank_cutoff:
            raise ValueError("medium_rank_cutoff must be >= high_rank_cutoff")
        if self.medium_frequency_ratio > self.high_frequency_ratio:
            raise ValueError("medium_frequency_ratio must be <= high_frequency_ratio")
        if self.reason_titles > self.max_context_titles:
            raise ValueError("reason_titles cannot exceed max_context_titles")
        return self


class ExtractionConfig(BaseModel):
    """Skill extraction settings."""

    section_aware: bool = Field(
        False, description="Also run the section/bullet pass when deriving job skills"
    )
    section_max_length: int = Field(1000, ge=1)
    bullet_max_length: int = Field(200, ge=1)


class ConcurrencyConfig(BaseModel):
    """Per-job scoring parallelism."""

    parallel_threshold: int = Field(
        50, ge=0, description="Batches larger than this are scored on a thread pool"
    )
    max_workers: int = Field(4, ge=1, le=64)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class ScoringConfig(BaseModel):
    """Root configuration object for the skill gap engine."""

    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    scoring: ScoringSettings = Field(default_factory=ScoringSettings)
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    gaps: GapConfig = Field(default_factory=GapConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    concurrency: ConcurrencyConfig = Field(default_factory=ConcurrencyConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    catalog_path: Optional[str] = Field(
        None, description="Path to a custom skill catalog YAML (defaults to the packaged one)"
    )

    @model_validator(mode="after")
    def validate_weights(self):
        """At least one relevance component must carry weight."""
        if self.scoring.weights.total <= 0:
            raise ValueError("At least one scoring weight must be greater than zero")
        return self
