"""CineSift exceptions — Errors raised by the query compiler and result pipeline.

Search-engine failures live in :mod:`cinesift.adapters.base.exceptions`.
"""

from __future__ import annotations


class CineSiftError(Exception):
    """Base exception for all CineSift errors."""


class UnknownFieldError(CineSiftError, KeyError):
    """Raised when a criterion references a field that is not registered."""

    def __init__(self, field: str) -> None:
        super().__init__(field)
        self.field = field

    def __str__(self) -> str:
        return f"Unknown field '{self.field}'"


class UnsupportedCriterionError(CineSiftError, ValueError):
    """Raised when a criterion does not fit the kind of field it targets."""


class InvalidPaginationError(CineSiftError, ValueError):
    """Raised when a page index is negative."""


class DeserializationError(CineSiftError):
    """Raised when a hit payload does not conform to the target record shape."""

    def __init__(self, hit_id: str, cause: Exception) -> None:
        super().__init__(f"Failed to materialize hit '{hit_id}': {cause}")
        self.hit_id = hit_id
        self.cause = cause
