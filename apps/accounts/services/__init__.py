"""Services for accounts business logic."""

from .exceptions import (
    InvalidCredentialsError,
    InactiveAccountError,
    AccountLockedError,
    UserNotFoundError,
    EmailAlreadyRegisteredError,
    PasswordConfirmationError,
)
from .user_registration import register_user
from .user_authentication import authenticate_user
from .account_management import update_notification_preferences, soft_delete_account

__all__ = [
    # Exceptions
    'InvalidCredentialsError',
    'InactiveAccountError',
    'AccountLockedError',
    'UserNotFoundError',
    'EmailAlreadyRegisteredError',
    'PasswordConfirmationError',
    # Services
    'register_user',
    'authenticate_user',
    'update_notification_preferences',
    'soft_delete_account',
]
