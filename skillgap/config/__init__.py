"""Configuration management module for the skill gap engine."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config
from .models import (
    ConcurrencyConfig,
    ExtractionConfig,
    GapConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    MatchingConfig,
    RankingConfig,
    ScoreWeights,
    ScoringConfig,
    ScoringSettings,
)

__all__ = [
    # Loader functions
    "load_config",
    "load_environment_config",
    # Configuration models
    "ScoringConfig",
    "MatchingConfig",
    "ScoringSettings",
    "ScoreWeights",
    "RankingConfig",
    "GapConfig",
    "ExtractionConfig",
    "ConcurrencyConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
