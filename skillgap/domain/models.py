"""Core domain models for job postings, scored jobs, and skill gaps.

This module defines the data structures exchanged with collaborators:
- JobPosting: one job opening as supplied by the fetch collaborator
- ScoredJob: a JobPosting plus relevance scoring output
- ScoreBreakdown: the per-component numbers behind a relevance score
- SkillGapItem: one prioritized missing skill

All models are immutable. They serialize with camelCase keys
(``model_dump(by_alias=True)``) and accept either camelCase or snake_case on
input, so plain JSON payloads from an HTTP handler validate directly.
"""

from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from skillgap.utils.timestamps import ensure_utc


class Priority(str, Enum):
    """Priority bands for skill gaps."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class _FrozenModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        use_enum_values=True,
    )


class JobPosting(_FrozenModel):
    """One job opening.

    Created by the job fetch collaborator and read-only inside the engine.
    ``skills_required`` may be empty; the engine derives it from the free
    text in that case and attaches the result to a copy of the posting.
    """

    id: str = Field(..., description="Identifier assigned by the fetch collaborator")
    title: str = Field(..., description="Job title")
    company: Optional[str] = Field(None, description="Company name")
    location: Optional[str] = Field(None, description="Job location")
    url: Optional[str] = Field(None, description="Direct link to the job posting")
    description: Optional[str] = Field(None, description="Free-text job description")
    source: str = Field(..., description="Origin identifier (job board, API, ...)")
    skills_required: List[str] = Field(
        default_factory=list, description="Structured skill list, if pre-extracted"
    )
    posted_at: Optional[datetime] = Field(None, description="When the job was posted (UTC)")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        """Accept numeric ids from loosely typed payloads."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("title", "source")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip whitespace from required string fields."""
        return v.strip()

    @field_validator("company", "location", "url")
    @classmethod
    def strip_optional(cls, v: Optional[str]) -> Optional[str]:
        """Strip optional fields, treating whitespace-only as missing."""
        if v is None:
            return None
        stripped = v.strip()
        return stripped if stripped else None

    @field_validator("skills_required", mode="before")
    @classmethod
    def clean_skills(cls, v: Any) -> Any:
        """Drop blank entries; None means no structured skills."""
        if v is None:
            return []
        if isinstance(v, (list, tuple, set, frozenset)):
            return [s.strip() for s in v if isinstance(s, str) and s.strip()]
        return v

    @field_validator("posted_at")
    @classmethod
    def posted_at_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Ensure datetime is timezone-aware and in UTC."""
        return ensure_utc(v)

    model_config = ConfigDict(
        json_schema_extra={"example": {
            "id": "jsearch-8812",
            "title": "Frontend Engineer",
            "company": "Example Corp",
            "location": "Remote",
            "url": "https://jobs.example.com/8812",
            "description": "We use React, TypeScript and Docker...",
            "source": "jsearch",
            "skillsRequired": ["react", "typescript", "docker"],
        }}
    )


JobPostingInput = JobPosting


class ScoreBreakdown(_FrozenModel):
    """Per-component numbers behind a relevance score (all on a 0-100 scale)."""

    match_score: float = 0.0
    completeness_score: float = 0.0
    variety_score: float = 0.0
    level_score: float = 0.0
    exact_count: int = 0
    fuzzy_count: int = 0
    categories: List[str] = Field(default_factory=list)


class ScoredJob(JobPosting):
    """A JobPosting plus relevance scoring output.

    Produced once by the relevance scorer. The ranker's boost pass is the only
    later change and it only ever increases ``relevance_score`` (on a copy).
    ``relevance_score`` is optional so gap aggregation can accept payloads
    scored elsewhere; a missing score is treated as neutral.
    """

    relevance_score: Optional[float] = Field(
        None, description="0-100, may exceed 100 after boosts (never clamped)"
    )
    matched_skills: List[str] = Field(default_factory=list)
    match_count: float = Field(0.0, description="exact count + fuzzy weight x fuzzy count")
    missing_skills: List[str] = Field(default_factory=list)
    score_breakdown: Optional[ScoreBreakdown] = None

    @field_validator("matched_skills", "missing_skills", mode="before")
    @classmethod
    def clean_skill_lists(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, (list, tuple, set, frozenset)):
            return [s.strip() for s in v if isinstance(s, str) and s.strip()]
        return v


class SkillGapItem(_FrozenModel):
    """One prioritized missing skill.

    Produced exactly once by the gap aggregator per output skill.
    """

    skill: str
    priority: Priority
    reason: str
    frequency: float = Field(..., description="Relevance-weighted count of jobs missing the skill")
    importance: float = Field(..., description="Frequency weighted by ranking position")
    example_titles: List[str] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={"example": {
            "skill": "typescript",
            "priority": "high",
            "reason": (
                "Missing in 8 relevant job(s) (80% of positions). "
                "Required for roles like: Frontend Engineer, Full Stack Developer."
            ),
            "frequency": 8.0,
            "importance": 12.0,
            "exampleTitles": ["Frontend Engineer", "Full Stack Developer"],
        }}
    )
