"""Skill gap engine: job relevance scoring, ranking and skill gap analysis."""

from .api import (
    AnalysisResult,
    SkillGapEngine,
    compute_skill_gaps,
    score_and_rank_jobs,
    to_payload,
)
from .config import ConfigurationError, ScoringConfig, load_config
from .domain import (
    InvalidArgumentError,
    JobPosting,
    JobPostingInput,
    Priority,
    ScoreBreakdown,
    ScoredJob,
    SkillGapError,
    SkillGapItem,
)

__version__ = "0.1.0"

__all__ = [
    "score_and_rank_jobs",
    "compute_skill_gaps",
    "to_payload",
    "SkillGapEngine",
    "AnalysisResult",
    "ScoringConfig",
    "load_config",
    "JobPosting",
    "JobPostingInput",
    "ScoredJob",
    "ScoreBreakdown",
    "SkillGapItem",
    "Priority",
    "SkillGapError",
    "InvalidArgumentError",
    "ConfigurationError",
]
