"""Job ranking with boost rules.

Boosts are applied once per job, in a fixed order, before sorting:
1. +5 when the weighted match count is at least 5
2. +3 when at most 2 required skills are missing
3. +2 when the recency predicate reports the posting as recent

Jobs are then sorted by boosted score, highest first. The sort is stable,
so jobs with equal scores keep their input order.
"""

import logging
from datetime import datetime
from typing import Callable, Iterable, List, Optional

from skillgap.config.models import RankingConfig
from skillgap.domain.models import JobPosting, ScoredJob
from skillgap.logging import get_logger
from skillgap.utils.timestamps import age_in_days, ensure_utc

logger = get_logger(__name__, component="ranking")

# Returns True/False, or None when the job carries no date
RecencyPredicate = Callable[[JobPosting], Optional[bool]]


class RecentPostingPredicate:
    """Treats a posting as recent when ``posted_at`` is within ``days`` of ``now``.

    Postings dated in the future count as recent. Jobs without ``posted_at``
    yield None (no opinion), so the ranker skips the recency boost for them.
    """

    def __init__(self, days: int = 7, now: Optional[datetime] = None):
        self.days = days
        self.now = ensure_utc(now)

    def __call__(self, job: JobPosting) -> Optional[bool]:
        if job.posted_at is None:
            return None
        age = age_in_days(job.posted_at, now=self.now)
        return age <= self.days


class JobRanker:
    """Boosts and orders scored jobs."""

    def __init__(
        self,
        config: Optional[RankingConfig] = None,
        recency_predicate: Optional[RecencyPredicate] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize JobRanker.

        Args:
            config: Boost thresholds and amounts
            recency_predicate: Decides whether a job is recent (defaults to
                RecentPostingPredicate over ``config.recent_days``)
            logger_instance: Logger instance (defaults to module logger)
        """
        self.config = config or RankingConfig()
        self.recency_predicate = recency_predicate or RecentPostingPredicate(self.config.recent_days)
        self.logger = logger_instance or logger

    def boost_for(self, job: ScoredJob) -> float:
        """Total boost earned by ``job``.

        The few-missing boost is withheld from jobs with no skill data at all,
        which would otherwise qualify with zero missing skills.
        """
        boost = 0.0
        if job.match_count >= self.config.match_count_threshold:
            boost += self.config.match_count_boost
        has_skills = bool(job.skills_required or job.matched_skills or job.missing_skills)
        if has_skills and len(job.missing_skills) <= self.config.few_missing_threshold:
            boost += self.config.few_missing_boost
        if self.recency_predicate(job):
            boost += self.config.recency_boost
        return boost

    def apply_boost(self, job: ScoredJob) -> ScoredJob:
        """Copy of ``job`` with its relevance score increased by its boost."""
        boost = self.boost_for(job)
        if not boost:
            return job
        base = job.relevance_score if job.relevance_score is not None else 0.0
        return job.model_copy(update={"relevance_score": base + boost})

    def rank(self, jobs: Iterable[ScoredJob]) -> List[ScoredJob]:
        """Boost every job once, then sort by score descending (stable)."""
        boosted = [self.apply_boost(job) for job in jobs]
        ranked = sorted(boosted, key=lambda job: -(job.relevance_score or 0.0))

        self.logger.info(
            f"Ranked {len(ranked)} job(s)",
            extra={
                "event": "ranking.completed",
                "jobs": len(ranked),
                "top_score": ranked[0].relevance_score if ranked else None,
            },
        )
        return ranked
