"""Fuzzy skill matching.

Catches near-miss spellings that the synonym table does not cover
("kuberntes", "javascrpt") using unit-cost Levenshtein edit distance:

    similarity(a, b) = 1 - distance(a, b) / max(len(a), len(b))

Both inputs are normalized first, so known synonyms ("reactjs" / "react")
are identical. Two empty inputs are treated as identical (similarity 1).
"""

import logging
from functools import lru_cache
from typing import Iterable, List, Optional, Sequence, Tuple

from rapidfuzz import process
from rapidfuzz.distance import Levenshtein

from skillgap.logging import get_logger
from skillgap.normalization import SkillNormalizer

from .cache import SimilarityCache
from .models import SkillMatch

logger = get_logger(__name__, component="matching")

DEFAULT_THRESHOLD = 0.85

# Confidence reported for spellings that resolve to nothing in the vocabulary
UNKNOWN_SKILL_CONFIDENCE = 0.5


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance with unit insertion, deletion and substitution costs."""
    return Levenshtein.distance(a, b)


def token_similarity(a: str, b: str) -> float:
    """Length-normalized similarity of two tokens, without normalization."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - levenshtein_distance(a, b) / longest


class FuzzyMatcher:
    """Similarity queries over normalized skill tokens.

    Args:
        normalizer: Normalizer applied to both sides of every comparison
        threshold: Default minimum similarity for ``is_fuzzy_match``
        cache: Optional bounded cache for pair similarities
    """

    def __init__(
        self,
        normalizer: Optional[SkillNormalizer] = None,
        threshold: float = DEFAULT_THRESHOLD,
        cache: Optional[SimilarityCache] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        if not 0.0 < threshold <= 1.0:
            raise ValueError(f"threshold must be in (0, 1], got {threshold}")
        self.normalizer = normalizer or SkillNormalizer()
        self.threshold = threshold
        self.cache = cache
        self.logger = logger_instance or logger
        self._vocabulary: Tuple[str, ...] = self.normalizer.catalog.known_skills

    def similarity(self, a: Optional[str], b: Optional[str]) -> float:
        """Similarity in [0, 1] of two skills after normalization."""
        token_a = self.normalizer.normalize(a)
        token_b = self.normalizer.normalize(b)
        if token_a == token_b:
            return 1.0

        if self.cache is not None:
            cached = self.cache.get(token_a, token_b)
            if cached is not None:
                return cached

        score = token_similarity(token_a, token_b)

        if self.cache is not None:
            self.cache.put(token_a, token_b, score)
        return score

    def is_fuzzy_match(
        self, a: Optional[str], b: Optional[str], threshold: Optional[float] = None
    ) -> bool:
        """Whether two skills are similar enough to be treated as the same skill."""
        limit = self.threshold if threshold is None else threshold
        return self.similarity(a, b) >= limit

    def first_match(self, token: str, candidates: Sequence[str]) -> Optional[str]:
        """First candidate (in the given order) that fuzzy-matches ``token``."""
        for candidate in candidates:
            if self.is_fuzzy_match(token, candidate):
                return candidate
        return None

    def find_best_match(
        self, skill: Optional[str], threshold: Optional[float] = None
    ) -> Optional[Tuple[str, float]]:
        """Resolve a possibly misspelled skill to a known skill.

        Returns ``(skill, confidence)``, with confidence 1.0 for spellings the
        synonym table already knows, or None when nothing is close enough.

        Example:
            >>> matcher.find_best_match("kuberntes")
            ('kubernetes', 0.9)
        """
        if not skill or len(skill.strip()) < 2:
            return None

        token = self.normalizer.normalize(skill)
        if self.normalizer.is_known(token):
            return token, 1.0

        limit = self.threshold if threshold is None else threshold
        result = process.extractOne(
            token,
            self._vocabulary,
            scorer=Levenshtein.normalized_similarity,
            score_cutoff=limit,
        )
        if result is None:
            return None

        matched, score, _ = result
        self.logger.debug(
            "Resolved skill by fuzzy match",
            extra={
                "event": "matching.skill.resolved",
                "skill": token,
                "matched": matched,
                "confidence": round(score, 3),
            },
        )
        return matched, float(score)

    def match_skills(self, skills: Iterable[str]) -> List[SkillMatch]:
        """Resolve each spelling, keeping unknown ones with low confidence."""
        results: List[SkillMatch] = []
        for skill in skills:
            best = self.find_best_match(skill)
            if best is not None:
                results.append(SkillMatch(original=skill, matched=best[0], confidence=best[1]))
            else:
                results.append(
                    SkillMatch(
                        original=skill,
                        matched=self.normalizer.normalize(skill),
                        confidence=UNKNOWN_SKILL_CONFIDENCE,
                    )
                )
        return results

    def jaccard_similarity(
        self, skills_a: Optional[Iterable[str]], skills_b: Optional[Iterable[str]]
    ) -> float:
        """Jaccard overlap of two skill lists after normalization (0 if either is empty)."""
        set_a = self.normalizer.normalize_all(skills_a)
        set_b = self.normalizer.normalize_all(skills_b)
        if not set_a or not set_b:
            return 0.0
        return len(set_a & set_b) / len(set_a | set_b)


@lru_cache(maxsize=1)
def _default_matcher() -> FuzzyMatcher:
    return FuzzyMatcher()


def similarity(a: Optional[str], b: Optional[str]) -> float:
    """Similarity of two skills using the packaged catalog (no caching)."""
    return _default_matcher().similarity(a, b)


def is_fuzzy_match(
    a: Optional[str], b: Optional[str], threshold: float = DEFAULT_THRESHOLD
) -> bool:
    """Whether two skills match at ``threshold`` using the packaged catalog."""
    return _default_matcher().is_fuzzy_match(a, b, threshold=threshold)
