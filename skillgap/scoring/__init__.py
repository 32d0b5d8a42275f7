"""Relevance scoring module."""

from .engine import RelevanceScorer
from .level import (
    ExperienceLevel,
    ExperienceLevelDetector,
    ExperienceLevelInfo,
    LevelSignal,
    NeutralLevelSignal,
    SeniorityLevelSignal,
)

__all__ = [
    "RelevanceScorer",
    "LevelSignal",
    "NeutralLevelSignal",
    "SeniorityLevelSignal",
    "ExperienceLevel",
    "ExperienceLevelInfo",
    "ExperienceLevelDetector",
]
