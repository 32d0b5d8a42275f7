"""Skill gap aggregation module."""

from .service import SkillGapAggregator

__all__ = ["SkillGapAggregator"]
