"""Fuzzy skill matching module."""

from .cache import SimilarityCache
from .fuzzy import (
    DEFAULT_THRESHOLD,
    FuzzyMatcher,
    is_fuzzy_match,
    levenshtein_distance,
    similarity,
    token_similarity,
)
from .models import SkillMatch

__all__ = [
    "FuzzyMatcher",
    "SimilarityCache",
    "SkillMatch",
    "DEFAULT_THRESHOLD",
    "levenshtein_distance",
    "token_similarity",
    "similarity",
    "is_fuzzy_match",
]
