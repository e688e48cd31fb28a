from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a requested shift or employee does not exist."""


class ParseError(DomainError):
    """Raised when stored text cannot be parsed into a domain value."""

    INVALID_TIME_FORMAT = "invalid_time_format"
    INVALID_WEEKDAY = "invalid_weekday"

    def __init__(self, kind: str, value: Optional[str] = None, message: Optional[str] = None):
        self.kind = kind
        self.value = value
        super().__init__(message or f"{kind}: {value!r}")


class AmbiguousShiftError(DomainError):
    """Raised when more than one assigned shift is in effect for the same day."""

    def __init__(self, shift_ids: list[int]):
        self.shift_ids = list(shift_ids)
        super().__init__(f"Nhiều ca cùng hiệu lực trong ngày: {self.shift_ids}")
