"""Data models for the extraction layer."""

from dataclasses import dataclass, field
from typing import Dict, List

# Sections whose bullet lines are scanned against the technical-keyword allowlist
BULLET_SECTIONS = ("skills", "requirements", "qualifications", "experience")


@dataclass(frozen=True)
class JobSections:
    """Named sections of a job description.

    Each section holds the text from its header to the next recognized
    header, truncated to the configured maximum length. ``description`` is
    always the full text.

    Attributes:
        skills: "Skills", "Technical Skills", "Tech Stack", ...
        requirements: "Requirements", "What we're looking for", "Must have", ...
        qualifications: "Qualifications", "Education", "Certifications", ...
        experience: "Experience", "Professional Experience", ...
        responsibilities: "Responsibilities", "Duties", "What you'll do", ...
        description: Full original text
    """

    skills: str = ""
    requirements: str = ""
    qualifications: str = ""
    experience: str = ""
    responsibilities: str = ""
    description: str = ""

    @property
    def has_sections(self) -> bool:
        """True when at least one header was recognized."""
        return any(self.named().values())

    def named(self) -> Dict[str, str]:
        """Header sections only (excludes the full-text description)."""
        return {
            "skills": self.skills,
            "requirements": self.requirements,
            "qualifications": self.qualifications,
            "experience": self.experience,
            "responsibilities": self.responsibilities,
        }

    def as_dict(self) -> Dict[str, str]:
        return {**self.named(), "description": self.description}


@dataclass
class SkillWithConfidence:
    """A skill found in free text, with how strongly the text supports it.

    Attributes:
        skill: Canonical skill token
        confidence: 0.0 to 1.0, from the weights of the sections it appears in
        frequency: Number of pattern hits across all sections
        contexts: Section names the skill was found in, first-seen order
    """

    skill: str
    confidence: float = 0.0
    frequency: int = 0
    contexts: List[str] = field(default_factory=list)
