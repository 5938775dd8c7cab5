"""Custom exception hierarchy for pytally."""

from __future__ import annotations


class TallyError(Exception):
    """Base exception for all pytally errors."""


class TallyConfigError(TallyError):
    """Invalid or missing configuration.

    Raised when counter bounds or the step amount cannot produce a valid
    tally, or when a ``TALLY_*`` environment variable is not an integer.
    """

    def __init__(self, message: str, *, field: str = "") -> None:
        self.field = field
        super().__init__(message)
