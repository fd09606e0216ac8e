"""
Typed domain errors for Life Weeks.

Callers can tell a bad birthdate apart from an out-of-range grid query
and map each to an appropriate user-facing message or status code.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain-specific errors."""


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------


class InvalidInput(DomainError, ValueError):
    """Birthdate is missing, unparseable, or after the reference moment."""

    def __init__(self, message: str, value: Any = None) -> None:
        self.value = value
        super().__init__(message)


# ---------------------------------------------------------------------------
# Week grid
# ---------------------------------------------------------------------------


class IndexOutOfRange(DomainError, IndexError):
    """Week index queried outside [0, total_weeks)."""

    def __init__(self, week_index: int, total_weeks: int) -> None:
        self.week_index = week_index
        self.total_weeks = total_weeks
        super().__init__(
            f"Week index {week_index} outside grid of {total_weeks} weeks"
        )


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------


class ImageExportFailure(DomainError):
    """Share image could not be rendered or written."""
