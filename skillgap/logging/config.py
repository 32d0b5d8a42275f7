"""Log handler setup for hosts and developer tooling.

The engine only emits records (see ``skillgap.logging.get_logger``); turning
them into output is left to whoever embeds it. ``configure_logging`` installs
one stdout handler on the root logger with either formatter below and a
``ContextualFilter`` that stamps every record with the service name, the
environment label and the active ``log_context`` fields (run_id, job_id, ...).

Records carry skill collections (frozensets of tokens, lists of segments) and
occasionally pydantic models in ``extra``; both formatters render those in a
stable, sorted form so identical runs produce identical lines.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from enum import Enum
from typing import IO, Any, Dict, Iterator, Optional, Tuple, Union

from pydantic import BaseModel

from skillgap.config.models import LogFormat, LogLevel

from .context import get_log_context

SERVICE_NAME = "skillgap"

KEY_VALUE_LAYOUT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
KEY_VALUE_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Attributes every LogRecord carries, plus those added by Formatter.format
RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName"}


def _extra_fields(record: logging.LogRecord, skip=RECORD_ATTRS) -> Iterator[Tuple[str, Any]]:
    """Fields that came from ``extra``, the filter or the log context."""
    for key, value in record.__dict__.items():
        if key in skip or key.startswith("_"):
            continue
        yield key, value


def _plain(value: Any) -> Any:
    """Convert a logged value into JSON-compatible data."""
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, mode="json")
    if isinstance(value, (set, frozenset)):
        return sorted(_plain(item) for item in value)
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    if isinstance(value, dict):
        return {str(k): _plain(v) for k, v in value.items()}
    return str(value)


class ContextualFilter(logging.Filter):
    """Stamps records with service, environment and the active log context.

    Context fields never overwrite a field the log call passed in ``extra``.
    """

    def __init__(self, service: str = SERVICE_NAME, environment: str = "local"):
        super().__init__()
        self.service = service
        self.environment = environment

    def filter(self, record: logging.LogRecord) -> bool:
        record.service = self.service
        record.environment = self.environment
        for key, value in get_log_context().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, message, then every extra field."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": self.format_timestamp(record.created),
            "level": record.levelname,
            "message": record.getMessage(),
        }
        payload.update((key, _plain(value)) for key, value in _extra_fields(record))

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False)

    @staticmethod
    def format_timestamp(created: float) -> str:
        """ISO-8601 UTC with millisecond precision, e.g. 2025-11-10T09:15:02.481Z."""
        moment = datetime.fromtimestamp(created, tz=timezone.utc)
        return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


class KeyValueFormatter(logging.Formatter):
    """Human-readable line followed by sorted ``key=value`` pairs.

    ``service`` and ``environment`` are left out; they are constant per process.
    Collections render compactly (``skills=[docker,react]``) and strings with
    spaces, commas or ``=`` are quoted.
    """

    SKIP = RECORD_ATTRS | {"service", "environment"}

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        pairs = [
            f"{key}={self.render(value)}"
            for key, value in sorted(_extra_fields(record, self.SKIP))
        ]
        return f"{line} {' '.join(pairs)}" if pairs else line

    @classmethod
    def render(cls, value: Any) -> str:
        value = _plain(value)
        if value is None:
            return "null"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, list):
            return "[" + ",".join(cls.render(item) for item in value) + "]"
        if isinstance(value, dict):
            return json.dumps(value, sort_keys=True, ensure_ascii=False)
        text = str(value)
        if any(ch in text for ch in ' =,'):
            return f'"{text}"'
        return text


def configure_logging(
    level: Union[str, LogLevel] = "INFO",
    format_type: Union[str, LogFormat] = "key-value",
    environment: str = "local",
    stream: Optional[IO[str]] = None,
) -> None:
    """Route all records to ``stream`` (stdout by default) in the chosen format.

    Replaces any handlers already on the root logger.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL (case-insensitive)
        format_type: 'json' or 'key-value'
        environment: Label stamped on every record (production, staging, local)
        stream: Output stream for the handler

    Raises:
        ValueError: If level or format_type is invalid
    """
    level_name = str(getattr(level, "value", level)).upper()
    try:
        numeric_level = logging.getLevelName(LogLevel(level_name).value)
    except ValueError:
        raise ValueError(f"Invalid log level: {level}") from None

    try:
        output_format = LogFormat(str(getattr(format_type, "value", format_type)).lower())
    except ValueError:
        raise ValueError(
            f"Invalid log format: {format_type}. Must be 'json' or 'key-value'"
        ) from None

    handler = logging.StreamHandler(stream or sys.stdout)
    if output_format is LogFormat.JSON:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(KeyValueFormatter(KEY_VALUE_LAYOUT, datefmt=KEY_VALUE_DATEFMT))
    handler.addFilter(ContextualFilter(environment=environment))

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)

    logging.getLogger(__name__).info(
        "Logging configured",
        extra={
            "event": "logging.configured",
            "component": "logging",
            "log_level": level_name,
            "log_format": output_format.value,
        },
    )

