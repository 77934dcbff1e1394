"""
Errors
======
Exception taxonomy for the expected-issue baseline.

    ExpectedIssueDecodeError — one persisted record is corrupt: the issueDetail
                               kind is missing or unknown, or a field has the
                               wrong type. Wraps the pydantic ValidationError.
    BaselineLoadError        — a baseline file could not be read, parsed, or
                               one of its records failed to decode.

A failed match is never an error; matching only returns booleans.
"""
from typing import Any, Optional


class ExpectedIssueDecodeError(ValueError):
    """Raised when a persisted expected-issue record cannot be decoded."""

    def __init__(self, message: str, errors: Optional[list[dict[str, Any]]] = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class BaselineLoadError(Exception):
    """Raised when a baseline file cannot be loaded as a whole."""

    def __init__(self, path: str, reason: str, index: Optional[int] = None) -> None:
        self.path = path
        self.reason = reason
        self.index = index
        location = path if index is None else f"{path} (record #{index})"
        super().__init__(f"Failed to load expected issues from {location}: {reason}")
