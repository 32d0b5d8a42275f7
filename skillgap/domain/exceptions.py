"""Exceptions surfaced to callers of the engine."""


class SkillGapError(Exception):
    """Base class for errors raised by the skill gap engine."""


class InvalidArgumentError(SkillGapError, ValueError):
    """Raised when a caller violates an operation's contract (e.g. top_n <= 0)."""

    def __init__(self, argument: str, message: str):
        self.argument = argument
        super().__init__(f"Invalid argument '{argument}': {message}")
