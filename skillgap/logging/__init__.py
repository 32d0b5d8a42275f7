"""Structured logging helpers shared by every engine component.

Components log through ``get_logger(__name__, component=...)`` and describe
each record with an ``event`` name in ``extra`` (``scoring.job.scored``,
``gaps.computed``, ...). Handler setup lives in ``skillgap.logging.config``;
per-request fields such as ``run_id`` come from ``skillgap.logging.context``.
"""

import logging
from typing import Optional, Union


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """Adds a fixed ``component`` field to every record.

    Fields passed in a call's ``extra`` take precedence over the adapter's.
    """

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **(kwargs.get("extra") or {})}
        return msg, kwargs


def get_logger(
    name: str, component: Optional[str] = None
) -> Union[logging.Logger, ComponentLoggerAdapter]:
    """Module logger, wrapped so records carry ``component`` when one is given.

    Example:
        >>> logger = get_logger(__name__, component="ranking")
        >>> logger.info("Ranked 12 job(s)", extra={"event": "ranking.completed"})
    """
    base = logging.getLogger(name)
    if not component:
        return base
    return ComponentLoggerAdapter(base, {"component": component})
