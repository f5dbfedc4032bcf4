"""Domain-specific exceptions for accounts services."""

from apps.common.exceptions import (
    TrackerServiceError,
    ValidationError,
    NotFoundError,
    AuthorizationError,
)


class AccountsServiceError(TrackerServiceError):
    """Base exception for accounts services."""
    pass


class UserRegistrationError(AccountsServiceError, ValidationError):
    """Raised when user registration fails."""
    pass


class InvalidCredentialsError(AccountsServiceError, AuthorizationError):
    """Raised when authentication credentials are invalid."""
    pass


class InactiveAccountError(AccountsServiceError, AuthorizationError):
    """Raised when account is deactivated."""
    pass


class ProfileNotFoundError(AccountsServiceError, NotFoundError):
    """Raised when a user has no profile."""
    pass


class PasswordConfirmationError(AccountsServiceError, AuthorizationError):
    """Raised when password confirmation fails."""
    pass
