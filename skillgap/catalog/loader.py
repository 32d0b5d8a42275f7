"""Skill catalog loader.

The packaged ``skill_catalog.yaml`` is read once per process. A custom
catalog file can be supplied through ``catalog_path`` in the configuration
or the ``SKILLGAP_CATALOG`` environment variable.
"""

from functools import lru_cache
from importlib.resources import files
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from skillgap.config.exceptions import ConfigurationError, format_validation_errors
from skillgap.logging import get_logger

from .models import CatalogData, SkillCatalog

logger = get_logger(__name__, component="catalog")

PACKAGED_CATALOG = "skill_catalog.yaml"


def load_catalog(path: Optional[Union[str, Path]] = None) -> SkillCatalog:
    """
    Load and compile a skill catalog.

    Args:
        path: Catalog YAML file; the packaged catalog is used when omitted

    Returns:
        Compiled, immutable SkillCatalog

    Raises:
        ConfigurationError: If the file is missing, unparsable or invalid
    """
    if path is None:
        source = f"skillgap.catalog/{PACKAGED_CATALOG}"
        text = files("skillgap.catalog").joinpath(PACKAGED_CATALOG).read_text(encoding="utf-8")
    else:
        catalog_file = Path(path)
        source = str(catalog_file)
        if not catalog_file.exists():
            raise ConfigurationError(
                f"Skill catalog not found: {catalog_file}",
                suggestions=[
                    f"Ensure {catalog_file} exists",
                    "Remove catalog_path to use the packaged catalog",
                ],
            )
        try:
            text = catalog_file.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(
                f"Failed to read skill catalog: {e}",
                suggestions=["Check file permissions"],
            )

    raw = _parse_yaml(text, source)

    try:
        data = CatalogData.model_validate(raw)
    except ValidationError as e:
        raise ConfigurationError(
            f"Skill catalog validation failed ({source})",
            errors=format_validation_errors(e),
            suggestions=[
                "Every pattern category must be listed under 'categories'",
                "Each spelling may map to a single canonical skill",
            ],
        )

    catalog = SkillCatalog(data)
    logger.debug(
        "Skill catalog loaded",
        extra={
            "event": "catalog.loaded",
            "source": source,
            "skills": len(catalog.known_skills),
            "patterns": len(catalog.patterns),
        },
    )
    return catalog


@lru_cache(maxsize=1)
def get_default_catalog() -> SkillCatalog:
    """Return the packaged catalog, compiled once per process."""
    return load_catalog()


def _parse_yaml(text: str, source: str) -> Dict[str, Any]:
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse skill catalog {source}: {e}",
            suggestions=["Check YAML syntax and indentation"],
        )

    if not isinstance(raw, dict):
        raise ConfigurationError(
            f"Skill catalog {source} must contain a YAML mapping",
            errors=[f"Got {type(raw).__name__} at the top level"],
        )
    return raw
