"""Errors raised while loading engine configuration and skill catalogs."""

from pathlib import Path
from typing import List, Optional, Union


class ConfigurationError(Exception):
    """A configuration or catalog file (or environment variable) is unusable.

    ``str(error)`` lists every problem found, numbered, followed by hints on
    how to fix them, so callers can print it as-is.

    Attributes:
        message: One-line summary
        errors: Individual problems, typically one per invalid field
        suggestions: Fix-it hints
        source: File the problems were found in, when known
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        suggestions: Optional[List[str]] = None,
        source: Optional[Union[str, Path]] = None,
    ):
        self.message = message
        self.errors = list(errors or [])
        self.suggestions = list(suggestions or [])
        self.source = Path(source) if source is not None else None
        super().__init__(self._render())

    def _render(self) -> str:
        lines = [self.message]
        if self.source is not None:
            lines.append(f"File: {self.source}")
        if self.errors:
            lines.append("\nValidation Errors:")
            lines.extend(f"  {number}. {error}" for number, error in enumerate(self.errors, 1))
        if self.suggestions:
            lines.append("\nSuggestions:")
            lines.extend(f"  - {hint}" for hint in self.suggestions)
        return "\n".join(lines)


_TYPE_ERRORS = {"string_type", "int_type", "int_parsing", "float_type", "float_parsing",
                "bool_type", "bool_parsing", "list_type", "dict_type"}


def format_validation_errors(validation_error) -> List[str]:
    """One readable line per pydantic error, located by a ``a -> b -> c`` field path.

    Used for configuration files, catalog files and job payloads alike.
    """
    lines = []
    for error in validation_error.errors():
        path = " -> ".join(str(part) for part in error["loc"]) or "<root>"
        kind = error["type"]
        if kind == "missing":
            lines.append(f"Missing required field: {path}")
        elif kind in _TYPE_ERRORS:
            expected = kind.rsplit("_", 1)[0]
            lines.append(f"Invalid type for '{path}': expected {expected}, got {error.get('input')!r}")
        elif kind == "enum":
            lines.append(f"Invalid value for '{path}': {error['msg']}")
        else:
            lines.append(f"{path}: {error['msg']}")
    return lines
