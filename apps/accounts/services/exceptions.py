"""Domain-specific exceptions for accounts services."""

from apps.core.exceptions import (
    ConflictError,
    ForbiddenError,
    LockedError,
    NotFoundError,
)


class InvalidCredentialsError(ForbiddenError):
    """Raised when authentication credentials are invalid."""
    status_code = 401
    default_detail = 'Invalid email or password.'


class InactiveAccountError(ForbiddenError):
    """Raised when account is deactivated or deleted."""
    default_detail = 'Account is deactivated.'


class AccountLockedError(LockedError):
    """Raised while an account is locked after repeated failed logins."""
    default_detail = 'Account is temporarily locked. Try again later.'


class UserNotFoundError(NotFoundError):
    """Raised when user does not exist or has been deleted."""
    default_detail = 'User not found.'


class EmailAlreadyRegisteredError(ConflictError):
    """Raised when registering an email that is already taken."""
    default_detail = 'An account with this email already exists.'


class PasswordConfirmationError(ForbiddenError):
    """Raised when password confirmation fails."""
    status_code = 401
    default_detail = 'Invalid password.'
