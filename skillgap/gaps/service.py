"""Skill gap aggregation across a ranked job batch.

For the job at ranked index ``i``:

    job_weight      = (relevance_score or 50) / 100
    position_factor = 1.5 if i < 10 else 1.0

Every missing skill the candidate does not have accumulates
``frequency += job_weight`` and ``importance += job_weight * position_factor``.
Skills are ordered by importance and the first ``top_n`` become gap items
with a priority band and a human-readable reason.

Aggregation runs single-threaded over the collected results.
"""

import logging
from typing import Dict, Iterable, List, Optional

from skillgap.config.models import GapConfig
from skillgap.domain.exceptions import InvalidArgumentError
from skillgap.domain.models import Priority, ScoredJob, SkillGapItem
from skillgap.logging import get_logger
from skillgap.normalization import SkillNormalizer
from skillgap.utils.numbers import format_number, round_half_up

logger = get_logger(__name__, component="gaps")


class SkillGapAggregator:
    """Builds the prioritized skill gap list from ranked jobs."""

    def __init__(
        self,
        normalizer: Optional[SkillNormalizer] = None,
        config: Optional[GapConfig] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize SkillGapAggregator.

        Args:
            normalizer: Normalizer applied to candidate and missing skills
            config: Weighting, priority and reason settings
            logger_instance: Logger instance (defaults to module logger)
        """
        self.normalizer = normalizer or SkillNormalizer()
        self.config = config or GapConfig()
        self.logger = logger_instance or logger

    def aggregate(
        self,
        candidate_skills: Iterable[str],
        jobs: Iterable[ScoredJob],
        top_n: Optional[int] = None,
    ) -> List[SkillGapItem]:
        """Compute the candidate's most important missing skills.

        Args:
            candidate_skills: Skills the candidate already has
            jobs: Scored jobs in ranked order (best first)
            top_n: Maximum number of items (defaults to ``config.default_top_n``)

        Returns:
            At most ``top_n`` gap items, ordered by descending importance.
            Empty when the candidate has no skills or there are no jobs.

        Raises:
            InvalidArgumentError: If top_n is not a positive integer
        """
        limit = self.validate_top_n(self.config.default_top_n if top_n is None else top_n)
        candidate = self.normalizer.normalize_all(candidate_skills)
        job_list = list(jobs)
        if not candidate or not job_list:
            return []

        frequency: Dict[str, float] = {}
        importance: Dict[str, float] = {}
        titles: Dict[str, List[str]] = {}

        for index, job in enumerate(job_list):
            position_factor = (
                self.config.position_factor if index < self.config.position_window else 1.0
            )
            relevance = (
                job.relevance_score
                if job.relevance_score is not None
                else self.config.default_relevance
            )
            job_weight = relevance / 100

            for skill in self.normalizer.normalize_ordered(job.missing_skills):
                if skill in candidate:
                    continue
                frequency[skill] = frequency.get(skill, 0.0) + job_weight
                importance[skill] = importance.get(skill, 0.0) + job_weight * position_factor
                context = titles.setdefault(skill, [])
                if (
                    job.title
                    and job.title not in context
                    and len(context) < self.config.max_context_titles
                ):
                    context.append(job.title)

        # Stable: equal importance keeps first-seen order
        ordered = sorted(importance, key=lambda skill: -importance[skill])[:limit]

        total_jobs = len(job_list)
        items = [
            SkillGapItem(
                skill=skill,
                priority=self._priority(rank, frequency[skill], total_jobs),
                reason=self._reason(frequency[skill], total_jobs, titles[skill]),
                frequency=round_half_up(frequency[skill], 4),
                importance=round_half_up(importance[skill], 4),
                example_titles=titles[skill],
            )
            for rank, skill in enumerate(ordered)
        ]

        self.logger.info(
            f"Computed {len(items)} skill gap(s) from {total_jobs} job(s)",
            extra={
                "event": "gaps.computed",
                "jobs": total_jobs,
                "candidate_skills": len(candidate),
                "distinct_missing": len(importance),
                "returned": len(items),
            },
        )
        return items

    @staticmethod
    def validate_top_n(top_n) -> int:
        """Return ``top_n`` if it is a positive integer, else raise InvalidArgumentError."""
        if isinstance(top_n, bool) or not isinstance(top_n, int):
            raise InvalidArgumentError("top_n", f"must be an integer, got {top_n!r}")
        if top_n <= 0:
            raise InvalidArgumentError("top_n", f"must be greater than 0, got {top_n}")
        return top_n

    def _priority(self, rank: int, frequency: float, total_jobs: int) -> Priority:
        share = frequency / total_jobs
        if rank < self.config.high_rank_cutoff or share >= self.config.high_frequency_ratio:
            return Priority.HIGH
        if rank < self.config.medium_rank_cutoff or share >= self.config.medium_frequency_ratio:
            return Priority.MEDIUM
        return Priority.LOW

    def _reason(self, frequency: float, total_jobs: int, titles: List[str]) -> str:
        count = int(round_half_up(frequency))
        percentage = format_number(round_half_up(frequency / total_jobs * 100, 1))
        examples = ", ".join(titles[: self.config.reason_titles])
        return (
            f"Missing in {count} relevant job(s) ({percentage}% of positions). "
            f"Required for roles like: {examples}."
        )
