"""Skill extraction module."""

from .models import JobSections, SkillWithConfidence
from .service import SECTION_WEIGHTS, SkillExtractor

__all__ = [
    "SkillExtractor",
    "JobSections",
    "SkillWithConfidence",
    "SECTION_WEIGHTS",
]
