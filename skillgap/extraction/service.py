"""Skill extraction from free text.

This module finds canonical skills in job titles and descriptions:
1. Runs every catalog pattern over the lowercased text
2. Normalizes each hit and drops stop words and excluded minor tools
3. Optionally isolates requirement/skill sections and scans their bullet
   lines against the smaller technical-keyword allowlist
4. Scores skills by the sections they appear in (extract_with_confidence)

Extraction never raises; text without matches yields an empty result.
"""

import logging
import re
from typing import Dict, FrozenSet, Iterator, List, Optional, Pattern, Set

from skillgap.config.models import ExtractionConfig
from skillgap.logging import get_logger
from skillgap.normalization import SkillNormalizer

from .models import BULLET_SECTIONS, JobSections, SkillWithConfidence

logger = get_logger(__name__, component="extraction")

SECTION_WEIGHTS: Dict[str, float] = {
    "skills": 1.0,
    "requirements": 0.9,
    "qualifications": 0.9,
    "experience": 0.7,
    "responsibilities": 0.6,
    "description": 0.5,
}

# Multipliers for skills mentioned more than once
REPEAT_BOOST = 1.1
FREQUENT_BOOST = 1.2

HIGH_CONFIDENCE = 0.6

_SECTION_PHRASES: Dict[str, List[str]] = {
    "skills": [
        r"(?:technical |key |required |preferred |core )?skills?(?: (?:&|and) (?:qualifications|experience|abilities))?",
        r"tech(?:nology|nical)? stack",
        r"core competenc(?:y|ies)",
    ],
    "requirements": [
        r"(?:job |minimum |basic |key )?requirements?",
        r"what we(?:'|’)?re looking for",
        r"what you(?:'|’)?ll need",
        r"must(?:-| )haves?",
    ],
    "qualifications": [
        r"(?:minimum |basic |preferred |required |desired )?qualifications?",
        r"education",
        r"certifications?",
    ],
    "experience": [
        r"(?:work |professional |relevant |required )?experience",
    ],
    "responsibilities": [
        r"(?:key |job |main )?responsibilities",
        r"duties",
        r"what you(?:'|’)?ll do",
    ],
}


def _build_header_regex() -> Pattern:
    """One line-anchored pattern with a named group per section."""
    groups = []
    for name, phrases in _SECTION_PHRASES.items():
        alternation = "|".join(phrase.replace(" ", r"[ \t]+") for phrase in phrases)
        groups.append(f"(?P<{name}>{alternation})")
    return re.compile(
        r"^[ \t]*(?:#+[ \t]*)?\**[ \t]*(?:" + "|".join(groups) + r")[ \t]*\**[ \t]*(?::|$)",
        re.IGNORECASE | re.MULTILINE,
    )


_HEADER_RE = _build_header_regex()
_BULLET_RE = re.compile(r"^[ \t]*(?:[-*•·▪◦‣]|\d+[.)])[ \t]+(?P<item>.+?)[ \t\r]*$", re.MULTILINE)


class SkillExtractor:
    """Extracts canonical skill tokens from free text.

    Responsibilities:
    - Whole-text pattern scan against the catalog
    - Section detection and bullet-line keyword scan
    - Confidence scoring by section weight and repetition
    """

    def __init__(
        self,
        normalizer: Optional[SkillNormalizer] = None,
        config: Optional[ExtractionConfig] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize SkillExtractor.

        Args:
            normalizer: Normalizer sharing the catalog (defaults to packaged catalog)
            config: Section and bullet length limits
            logger_instance: Logger instance (defaults to module logger)
        """
        self.normalizer = normalizer or SkillNormalizer()
        self.catalog = self.normalizer.catalog
        self.config = config or ExtractionConfig()
        self.logger = logger_instance or logger

    def extract_skills(self, text: Optional[str]) -> FrozenSet[str]:
        """Canonical skills mentioned anywhere in ``text``."""
        if not text or not text.strip():
            return frozenset()

        lowered = text.lower()
        found: Set[str] = set()
        for token in self._pattern_hits(lowered):
            found.add(token)
        return frozenset(found)

    def extract_sections(self, text: Optional[str]) -> JobSections:
        """Split ``text`` into its recognized sections.

        A section runs from its header to the next recognized header and is
        truncated to ``section_max_length`` characters. When a header appears
        twice the first occurrence wins. CRLF and CR line endings are read as
        LF, so ``description`` holds the text with unified newlines.
        """
        if not text:
            return JobSections()
        text = text.replace("\r\n", "\n").replace("\r", "\n")

        headers = list(_HEADER_RE.finditer(text))
        found: Dict[str, str] = {}
        for idx, match in enumerate(headers):
            name = match.lastgroup
            if name is None or name in found:
                continue
            end = headers[idx + 1].start() if idx + 1 < len(headers) else len(text)
            found[name] = text[match.end():end].strip()[: self.config.section_max_length]

        return JobSections(description=text, **found)

    def extract_skills_from_sections(self, text: Optional[str]) -> FrozenSet[str]:
        """Whole-text scan plus a keyword scan of bullet lines in requirement sections."""
        if not text:
            return frozenset()

        skills = set(self.extract_skills(text))

        sections = self.extract_sections(text)
        keyword_regex = self.catalog.keyword_regex
        bullet_hits: Set[str] = set()
        if keyword_regex is not None and sections.has_sections:
            for name in BULLET_SECTIONS:
                for bullet in self._bullets(getattr(sections, name)):
                    for match in keyword_regex.finditer(bullet):
                        token = self._accept(match.group(0))
                        if token:
                            bullet_hits.add(token)

        added = bullet_hits - skills
        if added:
            self.logger.debug(
                "Bullet pass found additional skills",
                extra={
                    "event": "extraction.sections.bullet_skills",
                    "skills": sorted(added),
                },
            )
        return frozenset(skills | bullet_hits)

    def extract_with_confidence(self, text: Optional[str]) -> List[SkillWithConfidence]:
        """Skills with a 0-1 confidence derived from where and how often they appear.

        Every hit adds its section's weight (capped at 1.0); skills mentioned
        twice get a x1.1 boost and three or more times a x1.2 boost. The full
        text always counts as the "description" section.

        Returns:
            Skills sorted by confidence (highest first), then name
        """
        if not text or not text.strip():
            return []

        results: Dict[str, SkillWithConfidence] = {}
        for name, section_text in self.extract_sections(text).as_dict().items():
            if not section_text:
                continue
            weight = SECTION_WEIGHTS[name]
            for token in self._pattern_hits(section_text.lower()):
                entry = results.setdefault(token, SkillWithConfidence(skill=token))
                entry.frequency += 1
                entry.confidence = min(1.0, entry.confidence + weight)
                if name not in entry.contexts:
                    entry.contexts.append(name)

        for entry in results.values():
            if entry.frequency >= 3:
                entry.confidence = min(1.0, entry.confidence * FREQUENT_BOOST)
            elif entry.frequency >= 2:
                entry.confidence = min(1.0, entry.confidence * REPEAT_BOOST)

        return sorted(results.values(), key=lambda e: (-e.confidence, e.skill))

    def extract_high_confidence(
        self, text: Optional[str], min_confidence: float = HIGH_CONFIDENCE
    ) -> List[str]:
        """Skill names whose confidence is at least ``min_confidence``."""
        return [
            entry.skill
            for entry in self.extract_with_confidence(text)
            if entry.confidence >= min_confidence
        ]

    def _pattern_hits(self, lowered: str) -> Iterator[str]:
        """Yield the token for every accepted catalog pattern hit."""
        for pattern in self.catalog.patterns:
            for match in pattern.regex.finditer(lowered):
                token = self._accept(match.group(0), fallback=pattern.canonical)
                if token:
                    yield token

    def _accept(self, raw: str, fallback: Optional[str] = None) -> Optional[str]:
        """Normalize a hit and apply the stop-word and excluded-tool filters."""
        token = self.normalizer.normalize(raw)
        if fallback is not None and self.catalog.canonical_for(token) is None:
            token = fallback
        if not token:
            return None
        if token in self.catalog.stop_words or self.normalizer.is_excluded(token):
            return None
        return token

    def _bullets(self, section_text: str) -> Iterator[str]:
        for match in _BULLET_RE.finditer(section_text or ""):
            item = match.group("item")
            if len(item) <= self.config.bullet_max_length:
                yield item
