"""Exceptions raised by the ranking pipeline."""
from typing import Optional


class InputError(ValueError):
    """Request is missing a required field (mood or city)."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"missing required field: {field}")


class UpstreamFetchError(Exception):
    """Candidate fetch from the places provider failed or timed out."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)
