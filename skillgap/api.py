"""Request/response entry points of the skill gap engine.

Two contracts are exposed, both taking and returning plain, serializable
structures so a thin HTTP handler can call them directly:

- ``score_and_rank_jobs(candidate_skills, jobs)`` -> ranked ScoredJob list
- ``compute_skill_gaps(candidate_skills, jobs, top_n=5)`` -> SkillGapItem list

``SkillGapEngine`` wires the components together from a ScoringConfig; the
module functions build an engine per call unless one is passed in.
"""

import contextvars
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Type, TypeVar, Union
from uuid import uuid4

from pydantic import BaseModel, ValidationError

from skillgap.catalog import SkillCatalog, get_default_catalog, load_catalog
from skillgap.config import ScoringConfig, load_config
from skillgap.config.exceptions import format_validation_errors
from skillgap.domain.exceptions import InvalidArgumentError
from skillgap.domain.models import JobPosting, ScoredJob, SkillGapItem
from skillgap.extraction import SkillExtractor
from skillgap.gaps import SkillGapAggregator
from skillgap.logging import get_logger
from skillgap.logging.context import log_context
from skillgap.matching import FuzzyMatcher, SimilarityCache
from skillgap.normalization import SkillNormalizer
from skillgap.ranking import JobRanker, RecencyPredicate
from skillgap.scoring import LevelSignal, RelevanceScorer

logger = get_logger(__name__, component="engine")

ModelT = TypeVar("ModelT", bound=JobPosting)
SkillsInput = Union[str, Iterable[str], None]
JobsInput = Optional[Iterable[Union[JobPosting, Mapping[str, Any]]]]


@dataclass
class AnalysisResult:
    """Ranked jobs and the skill gaps derived from them."""

    jobs: List[ScoredJob] = field(default_factory=list)
    gaps: List[SkillGapItem] = field(default_factory=list)


class SkillGapEngine:
    """Scores, ranks and aggregates skill gaps for one configuration.

    Holds no per-request state apart from the optional similarity cache, so
    one engine can serve many requests.
    """

    def __init__(
        self,
        config: Optional[ScoringConfig] = None,
        catalog: Optional[SkillCatalog] = None,
        level_signal: Optional[LevelSignal] = None,
        recency_predicate: Optional[RecencyPredicate] = None,
        cache: Optional[SimilarityCache] = None,
    ):
        """
        Initialize the engine.

        Args:
            config: Engine configuration (defaults to built-in defaults)
            catalog: Skill catalog (defaults to config.catalog_path or the packaged catalog)
            level_signal: Seniority signal for the level component (defaults to neutral)
            recency_predicate: Decides whether a job gets the recency boost
            cache: Similarity cache (defaults to one sized by config.matching.cache_size)
        """
        self.config = config or ScoringConfig()
        if catalog is None:
            catalog = (
                load_catalog(self.config.catalog_path)
                if self.config.catalog_path
                else get_default_catalog()
            )
        self.catalog = catalog

        if cache is None and self.config.matching.cache_size > 0:
            cache = SimilarityCache(self.config.matching.cache_size)

        self.normalizer = SkillNormalizer(self.catalog)
        self.extractor = SkillExtractor(self.normalizer, self.config.extraction)
        self.matcher = FuzzyMatcher(
            self.normalizer,
            threshold=self.config.matching.fuzzy_threshold,
            cache=cache,
        )
        self.scorer = RelevanceScorer(
            normalizer=self.normalizer,
            extractor=self.extractor,
            matcher=self.matcher,
            settings=self.config.scoring,
            matching=self.config.matching,
            extraction=self.config.extraction,
            level_signal=level_signal,
        )
        self.ranker = JobRanker(self.config.ranking, recency_predicate)
        self.aggregator = SkillGapAggregator(self.normalizer, self.config.gaps)

    @classmethod
    def from_config_file(
        cls, config_path: Optional[Union[str, Path]] = None, **kwargs
    ) -> "SkillGapEngine":
        """Build an engine from a YAML config file (see load_config for lookup order)."""
        path = Path(config_path) if config_path is not None else None
        return cls(load_config(path), **kwargs)

    def score_and_rank_jobs(
        self, candidate_skills: SkillsInput, jobs: JobsInput
    ) -> List[ScoredJob]:
        """Score every job for the candidate, then boost and rank them.

        Raises:
            InvalidArgumentError: If a job payload is not a valid job posting
        """
        with log_context(run_id=uuid4().hex):
            started = time.monotonic()
            skills = self._coerce_skills(candidate_skills)
            postings = self._coerce_jobs(jobs, JobPosting)

            logger.info(
                f"Scoring {len(postings)} job(s)",
                extra={
                    "event": "engine.score.started",
                    "jobs": len(postings),
                    "candidate_skills": len(skills),
                },
            )

            ranked = self.ranker.rank(self._score_all(skills, postings))

            logger.info(
                "Scoring completed",
                extra={
                    "event": "engine.score.completed",
                    "jobs": len(ranked),
                    "duration_ms": int((time.monotonic() - started) * 1000),
                },
            )
            return ranked

    def compute_skill_gaps(
        self,
        candidate_skills: SkillsInput,
        jobs: JobsInput,
        top_n: Optional[int] = None,
    ) -> List[SkillGapItem]:
        """Prioritized skills missing across ranked jobs.

        Raises:
            InvalidArgumentError: If top_n is not a positive integer or a job
                payload is invalid
        """
        limit = self.aggregator.validate_top_n(
            self.config.gaps.default_top_n if top_n is None else top_n
        )
        with log_context(run_id=uuid4().hex):
            skills = self._coerce_skills(candidate_skills)
            scored = self._coerce_jobs(jobs, ScoredJob)
            return self.aggregator.aggregate(skills, scored, limit)

    def analyze(
        self,
        candidate_skills: SkillsInput,
        jobs: JobsInput,
        top_n: Optional[int] = None,
    ) -> AnalysisResult:
        """Score and rank jobs, then compute gaps from the ranked result."""
        if top_n is not None:
            self.aggregator.validate_top_n(top_n)
        ranked = self.score_and_rank_jobs(candidate_skills, jobs)
        gaps = self.compute_skill_gaps(candidate_skills, ranked, top_n)
        return AnalysisResult(jobs=ranked, gaps=gaps)

    def _score_all(self, skills: List[str], postings: List[JobPosting]) -> List[ScoredJob]:
        """Score jobs sequentially, or on a thread pool for large batches.

        Results are returned in input order either way.
        """
        concurrency = self.config.concurrency
        if len(postings) <= concurrency.parallel_threshold or concurrency.max_workers <= 1:
            return [self.scorer.score(skills, job) for job in postings]

        logger.debug(
            "Scoring on thread pool",
            extra={
                "event": "engine.score.parallel",
                "jobs": len(postings),
                "max_workers": concurrency.max_workers,
            },
        )
        with ThreadPoolExecutor(max_workers=concurrency.max_workers) as executor:
            # Each task runs in a copy of the caller's context so run_id reaches worker logs
            futures = [
                executor.submit(contextvars.copy_context().run, self.scorer.score, skills, job)
                for job in postings
            ]
            return [future.result() for future in futures]

    def _coerce_skills(self, candidate_skills: SkillsInput) -> List[str]:
        if candidate_skills is None:
            return []
        if isinstance(candidate_skills, str):
            return self.normalizer.parse_and_normalize(candidate_skills)
        return [skill for skill in candidate_skills if isinstance(skill, str)]

    @staticmethod
    def _coerce_jobs(jobs: JobsInput, model: Type[ModelT]) -> List[ModelT]:
        if jobs is None:
            return []
        coerced: List[ModelT] = []
        for index, job in enumerate(jobs):
            if isinstance(job, model):
                coerced.append(job)
                continue
            if isinstance(job, BaseModel):
                job = job.model_dump()
            if not isinstance(job, Mapping):
                raise InvalidArgumentError(
                    "jobs", f"item {index} must be a job object, got {type(job).__name__}"
                )
            try:
                coerced.append(model.model_validate(dict(job)))
            except ValidationError as e:
                details = "; ".join(format_validation_errors(e))
                raise InvalidArgumentError(
                    "jobs", f"item {index} is not a valid job posting: {details}"
                ) from e
        return coerced


def score_and_rank_jobs(
    candidate_skills: SkillsInput,
    jobs: JobsInput,
    *,
    config: Optional[ScoringConfig] = None,
    engine: Optional[SkillGapEngine] = None,
) -> List[ScoredJob]:
    """Score and rank jobs for a candidate (see SkillGapEngine.score_and_rank_jobs)."""
    engine = engine or SkillGapEngine(config)
    return engine.score_and_rank_jobs(candidate_skills, jobs)


def compute_skill_gaps(
    candidate_skills: SkillsInput,
    jobs: JobsInput,
    top_n: Optional[int] = None,
    *,
    config: Optional[ScoringConfig] = None,
    engine: Optional[SkillGapEngine] = None,
) -> List[SkillGapItem]:
    """Prioritized skill gaps across ranked jobs (see SkillGapEngine.compute_skill_gaps).

    ``top_n`` defaults to ``gaps.default_top_n`` (5).
    """
    engine = engine or SkillGapEngine(config)
    return engine.compute_skill_gaps(candidate_skills, jobs, top_n)


def to_payload(
    result: Union[BaseModel, Sequence[BaseModel]]
) -> Union[dict, List[dict]]:
    """JSON-ready dict(s) with camelCase keys."""
    if isinstance(result, BaseModel):
        return result.model_dump(by_alias=True, mode="json")
    return [item.model_dump(by_alias=True, mode="json") for item in result]
