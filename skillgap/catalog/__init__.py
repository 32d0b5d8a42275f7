"""Static skill data: synonyms, extraction patterns and taxonomy."""

from .loader import get_default_catalog, load_catalog
from .models import (
    CatalogData,
    CompiledPattern,
    SkillCatalog,
    SkillPattern,
    clean_skill_text,
    compile_skill_pattern,
)

__all__ = [
    "load_catalog",
    "get_default_catalog",
    "CatalogData",
    "SkillPattern",
    "CompiledPattern",
    "SkillCatalog",
    "clean_skill_text",
    "compile_skill_pattern",
]
