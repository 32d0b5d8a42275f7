"""Seniority alignment between a candidate and a job.

The relevance scorer treats seniority as a pluggable signal on a 0-100
scale. ``NeutralLevelSignal`` (the default) always abstains, which makes the
scorer use its neutral value. ``SeniorityLevelSignal`` detects the job's
level from its title and description and compares it with the candidate's
years of experience.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from skillgap.domain.models import JobPosting


class ExperienceLevel(str, Enum):
    """Seniority bands."""

    ENTRY = "entry"
    JUNIOR = "junior"
    MID = "mid"
    SENIOR = "senior"
    LEAD = "lead"
    PRINCIPAL = "principal"
    UNKNOWN = "unknown"


@dataclass
class ExperienceLevelInfo:
    """Detected seniority of a job.

    Attributes:
        level: Detected level (UNKNOWN only for empty input)
        confidence: 0.9 from the title, 0.7 from years required, 0.3-0.6 from prose
        years_required: Years of experience the posting asks for, if stated
        indicators: Human-readable notes on what drove the detection
    """

    level: ExperienceLevel = ExperienceLevel.UNKNOWN
    confidence: float = 0.0
    years_required: Optional[int] = None
    indicators: List[str] = field(default_factory=list)


_YEARS_RE = re.compile(r"(\d+)\+?\s*(?:years?|yrs?)\s*(?:of)?\s*(?:experience|exp)\b", re.IGNORECASE)

# Checked in order; the first title pattern that matches decides the level.
_TITLE_LEVELS = [
    (ExperienceLevel.ENTRY, re.compile(r"(?<![a-z])(?:entry|entry-level|graduate|intern|trainee)(?![a-z])", re.I), "Entry level in title"),
    (ExperienceLevel.JUNIOR, re.compile(r"(?<![a-z])(?:junior|jr\.?)(?![a-z])", re.I), "Junior in title"),
    (ExperienceLevel.SENIOR, re.compile(r"(?<![a-z])(?:senior|sr\.?)(?![a-z])", re.I), "Senior in title"),
    (ExperienceLevel.LEAD, re.compile(r"(?<![a-z])(?:lead|team lead|tech lead|technical lead)(?![a-z])", re.I), "Lead in title"),
    (ExperienceLevel.PRINCIPAL, re.compile(r"(?<![a-z])(?:principal|staff|architect|distinguished)(?![a-z])", re.I), "Principal/Staff in title"),
]

_ENTRY_PROSE_RE = re.compile(r"\b(?:no experience required|fresh graduate|recent graduate)\b", re.I)
_LEADERSHIP_PROSE_RE = re.compile(r"\b(?:mentor|mentoring|leadership|team management|manage team)\b", re.I)

# Typical years of experience per level, used when a posting states no years
LEVEL_YEARS: Dict[ExperienceLevel, int] = {
    ExperienceLevel.ENTRY: 0,
    ExperienceLevel.JUNIOR: 1,
    ExperienceLevel.MID: 3,
    ExperienceLevel.SENIOR: 6,
    ExperienceLevel.LEAD: 9,
    ExperienceLevel.PRINCIPAL: 12,
    ExperienceLevel.UNKNOWN: 3,
}


def _level_for_required_years(years: int) -> ExperienceLevel:
    if years <= 1:
        return ExperienceLevel.ENTRY
    if years <= 2:
        return ExperienceLevel.JUNIOR
    if years <= 5:
        return ExperienceLevel.MID
    if years <= 8:
        return ExperienceLevel.SENIOR
    return ExperienceLevel.LEAD


class ExperienceLevelDetector:
    """Detects job seniority and rates candidate fit against it."""

    def detect(self, title: Optional[str], description: Optional[str] = None) -> ExperienceLevelInfo:
        """Detect the seniority of a job from its title and description.

        Title keywords win (confidence 0.9); otherwise the stated years of
        experience decide (0.7); otherwise prose hints (0.6 / 0.5), falling
        back to mid-level with low confidence (0.3).
        """
        title = title or ""
        description = description or ""
        if not title.strip() and not description.strip():
            return ExperienceLevelInfo()

        text = f"{title} {description}"
        info = ExperienceLevelInfo()

        years_match = _YEARS_RE.search(text)
        if years_match:
            info.years_required = int(years_match.group(1))
            info.indicators.append(f"{info.years_required}+ years required")

        for level, pattern, indicator in _TITLE_LEVELS:
            if pattern.search(title):
                info.level = level
                info.confidence = 0.9
                info.indicators.append(indicator)
                return info

        if info.years_required is not None:
            info.level = _level_for_required_years(info.years_required)
            info.confidence = 0.7
            return info

        if _ENTRY_PROSE_RE.search(text):
            info.level = ExperienceLevel.ENTRY
            info.confidence = 0.6
            info.indicators.append("Entry level indicators in description")
        elif _LEADERSHIP_PROSE_RE.search(text):
            info.level = ExperienceLevel.SENIOR
            info.confidence = 0.5
            info.indicators.append("Leadership indicators")
        else:
            info.level = ExperienceLevel.MID
            info.confidence = 0.3
            info.indicators.append("Default to mid-level")
        return info

    def calculate_compatibility(
        self,
        candidate_years: float,
        job_level: ExperienceLevel,
        job_years_required: Optional[int] = None,
    ) -> float:
        """Fit between the candidate's experience and the job, from 0 to 1."""
        if job_years_required is not None:
            diff = abs(candidate_years - job_years_required)
            if diff == 0:
                return 1.0
            if diff <= 1:
                return 0.9
            if diff <= 2:
                return 0.7
            if diff <= 3:
                return 0.5
            return 0.3

        diff = abs(candidate_years - LEVEL_YEARS[ExperienceLevel(job_level)])
        if diff == 0:
            return 1.0
        if diff <= 2:
            return 0.8
        if diff <= 4:
            return 0.6
        if diff <= 6:
            return 0.4
        return 0.2

    def get_recommended_level(self, years_experience: float) -> ExperienceLevel:
        """Level a candidate with ``years_experience`` should target."""
        if years_experience == 0:
            return ExperienceLevel.ENTRY
        if years_experience <= 2:
            return ExperienceLevel.JUNIOR
        if years_experience <= 5:
            return ExperienceLevel.MID
        if years_experience <= 8:
            return ExperienceLevel.SENIOR
        if years_experience <= 12:
            return ExperienceLevel.LEAD
        return ExperienceLevel.PRINCIPAL


class LevelSignal(ABC):
    """Seniority alignment signal for the relevance scorer."""

    @abstractmethod
    def score(self, job: JobPosting) -> Optional[float]:
        """Return a 0-100 alignment score, or None when there is no seniority data."""


class NeutralLevelSignal(LevelSignal):
    """Always abstains, so the scorer falls back to its neutral level score."""

    def score(self, job: JobPosting) -> Optional[float]:
        return None


class SeniorityLevelSignal(LevelSignal):
    """Compares the candidate's years of experience with the job's detected level.

    Abstains when the job's level is detected with confidence below
    ``min_confidence`` (e.g. the mid-level fallback).
    """

    def __init__(
        self,
        candidate_years: float,
        detector: Optional[ExperienceLevelDetector] = None,
        min_confidence: float = 0.5,
    ):
        if candidate_years < 0:
            raise ValueError("candidate_years must be >= 0")
        self.candidate_years = candidate_years
        self.detector = detector or ExperienceLevelDetector()
        self.min_confidence = min_confidence

    def score(self, job: JobPosting) -> Optional[float]:
        info = self.detector.detect(job.title, job.description)
        if info.level is ExperienceLevel.UNKNOWN or info.confidence < self.min_confidence:
            return None
        compatibility = self.detector.calculate_compatibility(
            self.candidate_years, info.level, info.years_required
        )
        return compatibility * 100.0
