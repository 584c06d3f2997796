"""Exceptions raised by the allocation engine.

Every error here means the caller's input was rejected.  Nothing is retried
and no partial plan is produced; the HTTP layer maps any ``PlannerError`` to a
400 response carrying ``str(exc)`` as the detail.
"""

from __future__ import annotations

from typing import Any


class PlannerError(Exception):
    """Base exception for all planner input errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details: dict[str, Any] = details or {}


class UnknownPresetError(PlannerError):
    """Raised when a preset name is not in the catalogue (including ``custom``)."""


class MissingCustomMixError(PlannerError):
    """Raised when strategy is ``custom`` but no mix was supplied."""


class IncompleteCustomMixError(PlannerError):
    """Raised when a custom mix omits a channel or gives a non-numeric share."""


class InvalidShareSumError(PlannerError):
    """Raised when custom shares fall outside [0, 1] or do not sum to 1.0."""
