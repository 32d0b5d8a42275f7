"""Soft checks on raw configuration values.

These flag settings that validate but probably produce poor results. They
never fail loading; ``load_config`` emits each finding as a UserWarning.
"""

import warnings
from typing import Any, Dict, List

DEFAULT_WEIGHTS = {"match": 0.5, "completeness": 0.2, "variety": 0.15, "level": 0.15}

LOW_THRESHOLD = 0.7
MAX_USEFUL_WORKERS = 16
MAX_USEFUL_TOP_N = 50


def _section(config_dict: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = config_dict.get(name)
    return section if isinstance(section, dict) else {}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """Return a message for every suspicious value in ``config_dict``."""
    findings: List[str] = []

    weights = _section(_section(config_dict, "scoring"), "weights")
    if weights:
        merged = {**DEFAULT_WEIGHTS, **weights}
        if all(_is_number(v) for v in merged.values()):
            total = sum(merged.values())
            if abs(total - 1.0) > 1e-6:
                findings.append(
                    f"Scoring weights sum to {total:.2f}; relevance scores will not be on a 0-100 scale"
                )

    threshold = _section(config_dict, "matching").get("fuzzy_threshold")
    if _is_number(threshold) and threshold < LOW_THRESHOLD:
        findings.append(
            f"Low fuzzy_threshold ({threshold}) may treat unrelated skills as matches"
        )

    max_workers = _section(config_dict, "concurrency").get("max_workers")
    if _is_number(max_workers) and max_workers > MAX_USEFUL_WORKERS:
        findings.append(f"Large max_workers ({max_workers}) rarely helps CPU-bound scoring")

    top_n = _section(config_dict, "gaps").get("default_top_n")
    if _is_number(top_n) and top_n > MAX_USEFUL_TOP_N:
        findings.append(f"Large default_top_n ({top_n}) produces long, low-signal gap lists")

    return findings


def emit_warnings(findings: List[str]) -> None:
    """Issue each finding as a UserWarning attributed to the caller of load_config."""
    for message in findings:
        warnings.warn(message, UserWarning, stacklevel=3)
