"""Data models for fuzzy matching results."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SkillMatch:
    """Result of resolving one raw spelling against the known-skill vocabulary.

    Attributes:
        original: Spelling as supplied by the caller
        matched: Canonical skill it resolved to (or its normalized form if unknown)
        confidence: 1.0 for synonym-table hits, the similarity for fuzzy hits,
            and a low fixed value for unknown spellings
    """

    original: str
    matched: str
    confidence: float
