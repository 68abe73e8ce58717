from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when an update/delete references an id that does not exist."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AccountDisabledError(AuthenticationError):
    """Raised when the credentials match but the account is disabled."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class RecordStoreError(DomainError):
    """Raised by the client when the record store cannot be reached or fails."""

    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
