"""Domain models for the skill gap engine."""

from .exceptions import InvalidArgumentError, SkillGapError
from .models import (
    JobPosting,
    JobPostingInput,
    Priority,
    ScoreBreakdown,
    ScoredJob,
    SkillGapItem,
)

__all__ = [
    "JobPosting",
    "JobPostingInput",
    "ScoredJob",
    "ScoreBreakdown",
    "SkillGapItem",
    "Priority",
    "SkillGapError",
    "InvalidArgumentError",
]
