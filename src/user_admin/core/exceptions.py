from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class DirectoryError(DomainError):
    """Base class for user directory errors."""


class CapacityExceededError(DirectoryError):
    """Raised when the directory cannot hold more users."""

    def __init__(self, capacity: int):
        super().__init__(f"Maximum number of users reached ({capacity})")
        self.capacity = capacity


class DuplicateUserError(DirectoryError):
    """Raised when a username or user id is already taken."""


class UserNotFoundError(DirectoryError):
    """Raised when the requested user cannot be found."""
