"""Per-request log fields carried in a context variable.

``SkillGapEngine`` opens ``log_context(run_id=...)`` around every call so that
all records emitted while scoring, ranking and aggregating one request share
a ``run_id``. ``ContextualFilter`` copies these fields onto records.

Worker threads do not inherit the caller's context on their own; the engine
submits each scoring task through ``contextvars.copy_context().run``.
"""

from contextvars import ContextVar, Token
from typing import Any, Dict, Optional

LogContextVar: ContextVar[Dict[str, Any]] = ContextVar("skillgap_log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Snapshot of the active fields (safe to mutate)."""
    return dict(LogContextVar.get())


def push_log_context(**fields: Any) -> Token:
    """Layer ``fields`` over the active ones; undo with ``pop_log_context(token)``."""
    return LogContextVar.set({**LogContextVar.get(), **fields})


def pop_log_context(token: Token) -> None:
    """Return to the fields active before the matching push."""
    LogContextVar.reset(token)


def clear_log_context() -> None:
    """Drop every field in the current context."""
    LogContextVar.set({})


class log_context:
    """Scope log fields to a ``with`` block.

    Example:
        >>> with log_context(run_id="9f1c2e", jobs=40):
        ...     logger.info("Scoring batch")  # record has run_id and jobs
    """

    def __init__(self, **fields: Any):
        self.fields = fields
        self._token: Optional[Token] = None

    def __enter__(self) -> "log_context":
        self._token = push_log_context(**self.fields)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if self._token is not None:
            pop_log_context(self._token)
            self._token = None
        return False
