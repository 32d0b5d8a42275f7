"""Job ranking module."""

from .service import JobRanker, RecencyPredicate, RecentPostingPredicate

__all__ = ["JobRanker", "RecentPostingPredicate", "RecencyPredicate"]
