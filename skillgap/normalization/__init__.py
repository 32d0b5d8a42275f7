"""Skill normalization module."""

from .service import SkillNormalizer

__all__ = ["SkillNormalizer"]
