"""Relevance scoring engine for (candidate skills, job) pairs.

This module implements the scoring logic that:
1. Resolves the job's required skills (structured list, else extracted from text)
2. Finds exact matches, then fuzzy matches for the remaining job skills
3. Combines match, completeness, variety and level components into one score
4. Reports matched and missing skills plus a per-component breakdown

    M = weighted matches / max(1, job skills) x 100
    C = weighted matches / max(1, candidate skills) x 100
    V = min(categories matched / variety target, 1) x 100
    L = level signal (neutral when unavailable)
    R = round(0.5M + 0.2C + 0.15V + 0.15L)

where weighted matches = exact + fuzzy weight x fuzzy. Scores are never
clamped and empty inputs score 0 instead of raising.
"""

import logging
from typing import Iterable, List, Optional

from skillgap.config.models import ExtractionConfig, MatchingConfig, ScoringSettings
from skillgap.domain.models import JobPosting, ScoreBreakdown, ScoredJob
from skillgap.extraction import SkillExtractor
from skillgap.logging import get_logger
from skillgap.matching import FuzzyMatcher
from skillgap.normalization import SkillNormalizer
from skillgap.utils.numbers import round_half_up

from .level import LevelSignal, NeutralLevelSignal

logger = get_logger(__name__, component="scoring")


class RelevanceScorer:
    """Scores one job against a candidate's skills.

    Responsibilities:
    - Resolve job skills, deriving them from free text when absent
    - Exact then fuzzy matching (each job skill counted at most once)
    - Weighted multi-criteria relevance score
    - Matched/missing skill lists and score breakdown
    """

    def __init__(
        self,
        normalizer: Optional[SkillNormalizer] = None,
        extractor: Optional[SkillExtractor] = None,
        matcher: Optional[FuzzyMatcher] = None,
        settings: Optional[ScoringSettings] = None,
        matching: Optional[MatchingConfig] = None,
        extraction: Optional[ExtractionConfig] = None,
        level_signal: Optional[LevelSignal] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize RelevanceScorer.

        Args:
            normalizer: Skill normalizer (defaults to the packaged catalog)
            extractor: Extractor used when a job has no structured skills
            matcher: Fuzzy matcher (threshold and cache already configured)
            settings: Component weights, variety target and neutral level score
            matching: Fuzzy weight
            extraction: Whether to use the section-aware extraction pass
            level_signal: Seniority signal (defaults to neutral)
            logger_instance: Logger instance (defaults to module logger)
        """
        self.normalizer = normalizer or SkillNormalizer()
        self.matching = matching or MatchingConfig()
        self.extraction = extraction or ExtractionConfig()
        self.extractor = extractor or SkillExtractor(self.normalizer, self.extraction)
        self.matcher = matcher or FuzzyMatcher(
            self.normalizer, threshold=self.matching.fuzzy_threshold
        )
        self.settings = settings or ScoringSettings()
        self.level_signal = level_signal or NeutralLevelSignal()
        self.logger = logger_instance or logger

    def resolve_job_skills(self, job: JobPosting) -> List[str]:
        """Normalized required skills of ``job``.

        Uses ``skills_required`` when present (first-seen order); otherwise
        extracts skills from the description, or the title when there is no
        description, and returns them sorted.
        """
        if job.skills_required:
            return self.normalizer.normalize_ordered(job.skills_required)

        text = job.description if job.description is not None else (job.title or "")
        if self.extraction.section_aware:
            extracted = self.extractor.extract_skills_from_sections(text)
        else:
            extracted = self.extractor.extract_skills(text)
        return sorted(extracted)

    def score(self, candidate_skills: Iterable[str], job: JobPosting) -> ScoredJob:
        """Score ``job`` for a candidate.

        Args:
            candidate_skills: Candidate skill spellings (normalized here)
            job: Job posting (not modified; a ScoredJob copy is returned)

        Returns:
            ScoredJob with relevance score, matched/missing skills and breakdown
        """
        candidate = self.normalizer.normalize_all(candidate_skills)
        job_skills = self.resolve_job_skills(job)

        exact = [skill for skill in job_skills if skill in candidate]
        fuzzy: List[str] = []
        if candidate:
            ordered_candidates = sorted(candidate)
            for skill in job_skills:
                if skill in candidate:
                    continue
                if self.matcher.first_match(skill, ordered_candidates) is not None:
                    fuzzy.append(skill)

        matched_set = set(exact) | set(fuzzy)
        matched = [skill for skill in job_skills if skill in matched_set]
        missing = [skill for skill in job_skills if skill not in matched_set]
        weighted = len(exact) + self.matching.fuzzy_weight * len(fuzzy)

        categories = sorted(
            {category for category in map(self.normalizer.category_of, matched) if category}
        )
        level_score = self._level_score(job)

        if not job_skills or not candidate:
            breakdown = ScoreBreakdown(level_score=level_score)
            relevance = 0.0
        else:
            match_score = weighted / max(1, len(job_skills)) * 100
            completeness_score = weighted / max(1, len(candidate)) * 100
            variety_score = min(len(categories) / self.settings.variety_target, 1.0) * 100
            weights = self.settings.weights
            relevance = round_half_up(
                weights.match * match_score
                + weights.completeness * completeness_score
                + weights.variety * variety_score
                + weights.level * level_score
            )
            breakdown = ScoreBreakdown(
                match_score=round_half_up(match_score, 2),
                completeness_score=round_half_up(completeness_score, 2),
                variety_score=round_half_up(variety_score, 2),
                level_score=round_half_up(level_score, 2),
                exact_count=len(exact),
                fuzzy_count=len(fuzzy),
                categories=categories,
            )

        data = job.model_dump()
        data.update(
            skills_required=job_skills,
            relevance_score=relevance,
            matched_skills=matched,
            match_count=weighted,
            missing_skills=missing,
            score_breakdown=breakdown,
        )
        scored = ScoredJob.model_validate(data)

        self.logger.debug(
            f"Scored job {job.id}",
            extra={
                "event": "scoring.job.scored",
                "job_id": job.id,
                "relevance_score": relevance,
                "exact": len(exact),
                "fuzzy": len(fuzzy),
                "missing": len(missing),
            },
        )
        return scored

    def _level_score(self, job: JobPosting) -> float:
        value = self.level_signal.score(job)
        if value is None:
            return self.settings.neutral_level_score
        return float(value)
