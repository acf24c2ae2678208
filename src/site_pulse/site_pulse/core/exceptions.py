from __future__ import annotations

from typing import Optional, Sequence, Union


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules.

    Carries every individual complaint so the user sees all of them at once.
    """

    def __init__(self, errors: Union[str, Sequence[str]]):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__("\n".join(self.errors))


class AuthenticationError(DomainError):
    """Raised when no valid bearer credential is available for the actor."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NoActiveSessionError(DomainError):
    """Raised when a report is submitted outside its open reporting window."""


class DuplicateSubmissionError(DomainError):
    """Raised when a period already has a report for the date."""


class NetworkError(DomainError):
    """Raised when the backend times out, is unreachable, or answers with an error."""

    def __init__(self, message: str, *, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class AggregateReconciliationError(DomainError):
    """Raised when merging a period into the daily aggregate fails (non-fatal)."""
