"""SKILLGAP_* environment variable overrides.

Every variable is optional:

- SKILLGAP_CONFIG: YAML configuration file to load
- SKILLGAP_CATALOG: custom skill catalog YAML (sets ``catalog_path``)
- SKILLGAP_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL (any case)
- SKILLGAP_LOG_FORMAT: json or key-value (any case)
- SKILLGAP_FUZZY_THRESHOLD: number in (0, 1]
"""

import os
from dataclasses import dataclass
from typing import List, Optional

from .exceptions import ConfigurationError
from .models import LogFormat, LogLevel

ENV_PREFIX = "SKILLGAP_"


@dataclass(frozen=True)
class EnvironmentConfig:
    """Validated override values; None means the variable is not set."""

    config_path: Optional[str] = None
    catalog_path: Optional[str] = None
    log_level: Optional[str] = None
    log_format: Optional[str] = None
    fuzzy_threshold: Optional[float] = None


def _read(name: str) -> Optional[str]:
    value = os.getenv(ENV_PREFIX + name, "").strip()
    return value or None


def _choice(name: str, raw: Optional[str], enum_cls, errors: List[str]) -> Optional[str]:
    if raw is None:
        return None
    allowed = [member.value for member in enum_cls]
    for value in allowed:
        if value.lower() == raw.lower():
            return value
    errors.append(f"Invalid {ENV_PREFIX}{name}: '{raw}'. Must be one of: {', '.join(allowed)}")
    return None


def _threshold(raw: Optional[str], errors: List[str]) -> Optional[float]:
    if raw is None:
        return None
    try:
        value = float(raw)
    except ValueError:
        errors.append(f"Invalid {ENV_PREFIX}FUZZY_THRESHOLD: '{raw}'. Must be a number.")
        return None
    if not 0.0 < value <= 1.0:
        errors.append(f"Invalid {ENV_PREFIX}FUZZY_THRESHOLD: {value}. Must be in (0, 1].")
        return None
    return value


def load_environment_config() -> EnvironmentConfig:
    """Read and validate the SKILLGAP_* variables.

    Raises:
        ConfigurationError: If any variable holds an invalid value (all
            problems are reported together)
    """
    errors: List[str] = []
    config = EnvironmentConfig(
        config_path=_read("CONFIG"),
        catalog_path=_read("CATALOG"),
        log_level=_choice("LOG_LEVEL", _read("LOG_LEVEL"), LogLevel, errors),
        log_format=_choice("LOG_FORMAT", _read("LOG_FORMAT"), LogFormat, errors),
        fuzzy_threshold=_threshold(_read("FUZZY_THRESHOLD"), errors),
    )
    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Unset the variable to fall back to the configuration file",
                "Check the value against the documented range",
            ],
        )
    return config
