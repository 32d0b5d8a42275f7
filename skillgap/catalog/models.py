"""Data models for the skill catalog.

The catalog is static data (synonyms, extraction patterns, taxonomy, filter
lists). ``CatalogData`` validates the raw YAML; ``SkillCatalog`` is the
compiled, read-only lookup structure shared by every component for the
lifetime of the process.
"""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Pattern, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

# Skill-aware boundaries: plain \b breaks on "c++", "c#" and ".net".
SKILL_PREFIX = r"(?<![a-z0-9])"
SKILL_SUFFIX = r"(?![a-z0-9+#])"

_WHITESPACE_RE = re.compile(r"\s+")


def clean_skill_text(raw: Optional[str]) -> str:
    """Lowercase, trim and collapse internal whitespace."""
    if not raw:
        return ""
    return _WHITESPACE_RE.sub(" ", raw.strip().lower())


def compile_skill_pattern(pattern: str) -> Pattern:
    """Compile a catalog pattern with skill-aware boundaries."""
    return re.compile(f"{SKILL_PREFIX}(?:{pattern}){SKILL_SUFFIX}", re.IGNORECASE)


class SkillPattern(BaseModel):
    """One extraction rule: a regex alternation that yields a canonical skill."""

    category: str = Field(..., min_length=1)
    canonical: str = Field(..., min_length=1)
    pattern: str = Field(..., min_length=1)

    @field_validator("category", "canonical")
    @classmethod
    def clean(cls, v: str) -> str:
        cleaned = clean_skill_text(v)
        if not cleaned:
            raise ValueError("Field cannot be empty or whitespace-only")
        return cleaned

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        try:
            compile_skill_pattern(v)
        except re.error as e:
            raise ValueError(f"Invalid regular expression '{v}': {e}") from e
        return v


class CatalogData(BaseModel):
    """Raw catalog file contents."""

    version: int = Field(1, ge=1)
    categories: List[str] = Field(..., min_length=1)
    synonyms: Dict[str, List[str]] = Field(default_factory=dict)
    patterns: List[SkillPattern] = Field(default_factory=list)
    stop_words: List[str] = Field(default_factory=list)
    excluded_tools: List[str] = Field(default_factory=list)
    technical_keywords: List[str] = Field(default_factory=list)

    @field_validator("categories", "stop_words", "excluded_tools", "technical_keywords")
    @classmethod
    def clean_terms(cls, v: List[str]) -> List[str]:
        """Normalize terms and drop blanks, keeping first-seen order."""
        cleaned = [clean_skill_text(str(term)) for term in v]
        return list(dict.fromkeys(term for term in cleaned if term))

    @field_validator("synonyms")
    @classmethod
    def clean_synonyms(cls, v: Dict[str, List[str]]) -> Dict[str, List[str]]:
        cleaned: Dict[str, List[str]] = {}
        for canonical, variants in v.items():
            key = clean_skill_text(str(canonical))
            if not key:
                raise ValueError("Synonym canonical names cannot be empty")
            cleaned[key] = [clean_skill_text(str(s)) for s in (variants or []) if clean_skill_text(str(s))]
        return cleaned

    @model_validator(mode="after")
    def validate_consistency(self):
        """Check taxonomy membership and that every spelling has one canonical form."""
        known_categories = set(self.categories)
        for idx, entry in enumerate(self.patterns):
            if entry.category not in known_categories:
                raise ValueError(
                    f"patterns[{idx}] ({entry.canonical}) uses unknown category '{entry.category}'"
                )

        canonicals = set(self.synonyms) | {entry.canonical for entry in self.patterns}
        owner: Dict[str, str] = {}
        for canonical, variants in self.synonyms.items():
            for variant in variants:
                if variant in canonicals and variant != canonical:
                    raise ValueError(
                        f"'{variant}' is canonical and cannot also be a synonym of '{canonical}'"
                    )
                previous = owner.setdefault(variant, canonical)
                if previous != canonical:
                    raise ValueError(
                        f"'{variant}' is listed as a synonym of both '{previous}' and '{canonical}'"
                    )

        categories_by_skill: Dict[str, str] = {}
        for entry in self.patterns:
            previous = categories_by_skill.setdefault(entry.canonical, entry.category)
            if previous != entry.category:
                raise ValueError(
                    f"'{entry.canonical}' is assigned to both '{previous}' and '{entry.category}'"
                )
        return self


@dataclass(frozen=True)
class CompiledPattern:
    """A catalog pattern compiled for matching."""

    category: str
    canonical: str
    regex: Pattern


class SkillCatalog:
    """Immutable lookup structure built from CatalogData.

    Attributes:
        synonyms: raw spelling -> canonical token (every canonical maps to itself)
        patterns: compiled extraction patterns, in catalog order
        categories: the skill category taxonomy
        category_by_skill: canonical token -> category
        stop_words: prose words never reported as skills
        excluded_tools: minor tools/libraries never reported as core skills
        technical_keywords: spellings trusted by the section bullet pass
        known_skills: every canonical token, sorted
    """

    def __init__(self, data: CatalogData):
        table: Dict[str, str] = {}
        for canonical, variants in data.synonyms.items():
            for variant in variants:
                table[variant] = canonical
        for entry in data.patterns:
            table[entry.canonical] = entry.canonical
        for canonical in data.synonyms:
            table[canonical] = canonical

        self.version = data.version
        self.synonyms: Mapping[str, str] = MappingProxyType(table)
        self.patterns: Tuple[CompiledPattern, ...] = tuple(
            CompiledPattern(
                category=entry.category,
                canonical=entry.canonical,
                regex=compile_skill_pattern(entry.pattern),
            )
            for entry in data.patterns
        )
        self.categories: Tuple[str, ...] = tuple(data.categories)
        self.category_by_skill: Mapping[str, str] = MappingProxyType(
            {entry.canonical: entry.category for entry in data.patterns}
        )
        self.stop_words = frozenset(data.stop_words)
        self.excluded_tools = frozenset(data.excluded_tools)
        self.technical_keywords: Tuple[str, ...] = tuple(data.technical_keywords)
        self.known_skills: Tuple[str, ...] = tuple(sorted(set(table.values())))

        # Longest first so "spring boot" wins over "spring"
        keywords = sorted(self.technical_keywords, key=len, reverse=True)
        self.keyword_regex: Optional[Pattern] = (
            compile_skill_pattern("|".join(re.escape(k).replace(r"\ ", r"\s+") for k in keywords))
            if keywords
            else None
        )

    def canonical_for(self, key: str) -> Optional[str]:
        """Exact synonym-table lookup on an already cleaned key."""
        return self.synonyms.get(key)

    def category_of(self, token: str) -> Optional[str]:
        return self.category_by_skill.get(token)

    def variants_of(self, canonical: str) -> List[str]:
        """All raw spellings (other than itself) that map to ``canonical``."""
        return sorted(
            spelling
            for spelling, target in self.synonyms.items()
            if target == canonical and spelling != canonical
        )

    def __repr__(self) -> str:
        return (
            f"SkillCatalog(version={self.version}, skills={len(self.known_skills)}, "
            f"patterns={len(self.patterns)}, categories={len(self.categories)})"
        )
