"""Build a ScoringConfig from YAML plus SKILLGAP_* overrides.

File resolution, first match wins:

1. ``config_path`` argument (must exist)
2. SKILLGAP_CONFIG (must exist)
3. ``skillgap.yaml`` then ``config/skillgap.yaml`` in the working directory
4. Built-in defaults
"""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError, format_validation_errors
from .models import ScoringConfig
from .validators import check_for_warnings, emit_warnings

DEFAULT_CONFIG_CANDIDATES = [
    Path("skillgap.yaml"),
    Path("config") / "skillgap.yaml",
]


def load_config(
    config_path: Optional[Path] = None, use_environment: bool = True
) -> ScoringConfig:
    """Load, override and validate engine configuration.

    Environment values replace file values before validation, so an invalid
    override is reported the same way as an invalid file entry. Suspicious
    but valid values are emitted as UserWarnings.

    Raises:
        ConfigurationError: On a missing explicit file, unreadable YAML or
            schema violations
    """
    env = load_environment_config() if use_environment else None
    if config_path is None and env is not None and env.config_path:
        config_path = Path(env.config_path)

    source = _resolve_config_file(config_path)
    raw = _read_yaml(source) if source is not None else {}
    if env is not None:
        _apply_environment_overrides(raw, env)

    emit_warnings(check_for_warnings(raw))

    try:
        return ScoringConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(
            "Configuration validation failed",
            errors=format_validation_errors(exc),
            suggestions=["Compare your file with skillgap.example.yaml"],
            source=source,
        ) from exc


def _resolve_config_file(config_path: Optional[Path]) -> Optional[Path]:
    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise ConfigurationError(
                f"Specified configuration file not found: {path}",
                suggestions=["Fix the path, or unset SKILLGAP_CONFIG to use defaults"],
            )
        return path
    return next((c for c in DEFAULT_CONFIG_CANDIDATES if c.exists()), None)


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigurationError(
            f"Failed to parse YAML configuration: {exc}",
            suggestions=["Indent with spaces, not tabs"],
            source=path,
        ) from exc
    except OSError as exc:
        raise ConfigurationError(f"Failed to read configuration file: {exc}", source=path) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            "Configuration file must contain a YAML mapping",
            errors=[f"Top level is a {type(data).__name__}"],
            source=path,
        )
    return data


def _override(raw: Dict[str, Any], section: str, key: str, value: Any) -> None:
    current = raw.get(section)
    if current is None:
        current = {}
    elif not isinstance(current, dict):
        # Malformed section; validation reports it
        return
    raw[section] = {**current, key: value}


def _apply_environment_overrides(raw: Dict[str, Any], env: EnvironmentConfig) -> None:
    if env.log_level:
        _override(raw, "logging", "level", env.log_level)
    if env.log_format:
        _override(raw, "logging", "format", env.log_format)
    if env.fuzzy_threshold is not None:
        _override(raw, "matching", "fuzzy_threshold", env.fuzzy_threshold)
    if env.catalog_path:
        raw["catalog_path"] = env.catalog_path
