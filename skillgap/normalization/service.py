"""Skill normalization service.

This module canonicalizes free-text skill spellings:
1. Lowercases, trims and collapses whitespace
2. Looks the result up in the catalog's synonym table
3. Retries with punctuation and spaces removed ("Node_JS", "type script")
4. Falls back to the cleaned input when no synonym exists

Normalization never raises and is idempotent.
"""

import logging
import re
from typing import Dict, FrozenSet, Iterable, List, Optional, Union

from skillgap.catalog import SkillCatalog, clean_skill_text, get_default_catalog
from skillgap.logging import get_logger

logger = get_logger(__name__, component="normalization")

_SEPARATORS_RE = re.compile(r"[,;\n|•]+")
_BULLET_PREFIX_RE = re.compile(r"^[\s\-\*•·>]+")
_PUNCTUATION_RE = re.compile(r"[._]")

# Shortest spelling used when splitting concatenated skills ("javascriptpython")
MIN_SEGMENT_LENGTH = 2
MAX_SEGMENT_INPUT = 64


class SkillNormalizer:
    """Maps raw skill spellings to canonical skill tokens.

    Responsibilities:
    - Canonicalize single spellings and collections
    - Split loosely formatted skill strings (comma lists, résumé bullets)
    - Answer category, equivalence and synonym queries against the catalog
    """

    def __init__(
        self,
        catalog: Optional[SkillCatalog] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize SkillNormalizer.

        Args:
            catalog: Skill catalog (defaults to the packaged catalog)
            logger_instance: Logger instance (defaults to module logger)
        """
        self.catalog = catalog or get_default_catalog()
        self.logger = logger_instance or logger
        self._compact_spellings = self._build_compact_index(self.catalog)

    def normalize(self, raw: Optional[str]) -> str:
        """Return the canonical token for ``raw``, or the cleaned input on a miss.

        Blank input yields ``""``.
        """
        key = clean_skill_text(raw)
        if not key:
            return ""

        canonical = self.catalog.canonical_for(key)
        if canonical is not None:
            return canonical

        for variant in (_PUNCTUATION_RE.sub("", key), key.replace(" ", "")):
            if variant != key:
                canonical = self.catalog.canonical_for(variant)
                if canonical is not None:
                    return canonical

        return key

    def normalize_all(self, raws: Optional[Iterable[str]]) -> FrozenSet[str]:
        """Normalize every spelling and deduplicate, dropping blanks."""
        if not raws:
            return frozenset()
        return frozenset(token for token in (self.normalize(raw) for raw in raws) if token)

    def normalize_ordered(self, raws: Optional[Iterable[str]]) -> List[str]:
        """Like normalize_all, but keeps first-seen order."""
        if not raws:
            return []
        tokens = (self.normalize(raw) for raw in raws)
        return list(dict.fromkeys(token for token in tokens if token))

    def parse_and_normalize(self, value: Union[str, Iterable[str], None]) -> List[str]:
        """Parse a loosely formatted skill list into canonical tokens.

        Accepts a comma/semicolon/newline separated string or an iterable of
        such strings. Entries that are not known skills but can be split
        entirely into known spellings ("javascriptpythonreact") are split.

        Example:
            >>> normalizer.parse_and_normalize("React.js, node; Python")
            ['react', 'nodejs', 'python']
        """
        if value is None:
            return []
        chunks = [value] if isinstance(value, str) else list(value)

        tokens: List[str] = []
        for chunk in chunks:
            if not isinstance(chunk, str):
                continue
            for part in _SEPARATORS_RE.split(chunk):
                part = _BULLET_PREFIX_RE.sub("", part).strip()
                token = self.normalize(part)
                if not token:
                    continue
                if self.is_known(token):
                    tokens.append(token)
                    continue
                segments = self._segment(token)
                if segments:
                    self.logger.debug(
                        "Split concatenated skill string",
                        extra={
                            "event": "normalization.skill.segmented",
                            "raw": part,
                            "segments": segments,
                        },
                    )
                    tokens.extend(segments)
                else:
                    tokens.append(token)

        return list(dict.fromkeys(tokens))

    def is_known(self, skill: Optional[str]) -> bool:
        """Whether the skill resolves to a catalog entry."""
        token = self.normalize(skill)
        return bool(token) and self.catalog.canonical_for(token) is not None

    def category_of(self, skill: Optional[str]) -> Optional[str]:
        """Category of the skill in the catalog taxonomy, if any."""
        return self.catalog.category_of(self.normalize(skill))

    def are_equivalent(self, a: Optional[str], b: Optional[str]) -> bool:
        """Whether two spellings normalize to the same non-empty token."""
        token_a = self.normalize(a)
        return bool(token_a) and token_a == self.normalize(b)

    def synonyms_of(self, skill: Optional[str]) -> List[str]:
        """Canonical token first, followed by every known variant spelling."""
        token = self.normalize(skill)
        if not token:
            return []
        return [token] + self.catalog.variants_of(token)

    def is_excluded(self, skill: Optional[str]) -> bool:
        """Whether the skill is a minor tool/library that is not reported as a core skill."""
        key = clean_skill_text(skill)
        if not key:
            return False
        return key in self.catalog.excluded_tools or self.normalize(key) in self.catalog.excluded_tools

    def _segment(self, token: str) -> Optional[List[str]]:
        """Split a run-together string into known skills, fewest pieces first.

        Returns None unless the whole string splits into at least two pieces.
        """
        text = token.replace(" ", "")
        if not 2 * MIN_SEGMENT_LENGTH <= len(text) <= MAX_SEGMENT_INPUT:
            return None

        # best[i] holds the shortest segmentation of text[:i]
        best: List[Optional[List[str]]] = [None] * (len(text) + 1)
        best[0] = []
        for end in range(1, len(text) + 1):
            for start in range(end - MIN_SEGMENT_LENGTH, -1, -1):
                prefix = best[start]
                if prefix is None:
                    continue
                canonical = self._compact_spellings.get(text[start:end])
                if canonical is None:
                    continue
                candidate = prefix + [canonical]
                if best[end] is None or len(candidate) < len(best[end]):
                    best[end] = candidate

        result = best[len(text)]
        if result is None or len(result) < 2:
            return None
        return list(dict.fromkeys(result))

    @staticmethod
    def _build_compact_index(catalog: SkillCatalog) -> Dict[str, str]:
        """Spelling with spaces removed -> canonical token."""
        index: Dict[str, str] = {}
        for spelling, canonical in catalog.synonyms.items():
            compact = spelling.replace(" ", "")
            if len(compact) >= MIN_SEGMENT_LENGTH:
                index.setdefault(compact, canonical)
        return index
