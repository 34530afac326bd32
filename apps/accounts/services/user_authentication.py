"""User authentication service with failed-login lockout."""

import logging
from datetime import timedelta

from django.conf import settings
from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone

from .exceptions import AccountLockedError, InactiveAccountError, InvalidCredentialsError

User = get_user_model()

logger = logging.getLogger(__name__)


def _register_failed_attempt(user) -> None:
    user.failed_login_attempts += 1
    update_fields = ['failed_login_attempts']

    if user.failed_login_attempts >= settings.ACCOUNT_LOCKOUT_MAX_ATTEMPTS:
        user.locked_until = timezone.now() + timedelta(minutes=settings.ACCOUNT_LOCKOUT_MINUTES)
        user.failed_login_attempts = 0
        update_fields.append('locked_until')
        logger.warning('Account %s locked after repeated failed logins', user.id)

    user.save(update_fields=update_fields)


def authenticate_user(*, email: str, password: str) -> User:
    """
    Authenticate user with email and password.

    Uses select_for_update() so concurrent attempts count failures correctly.
    The failed-attempt counter is committed even though the call raises.

    Args:
        email: User's email
        password: User's password

    Returns:
        Authenticated User instance

    Raises:
        InvalidCredentialsError: If credentials are invalid
        AccountLockedError: If the account is locked after too many failures
        InactiveAccountError: If account is deactivated
    """
    error = None

    with transaction.atomic():
        try:
            user = (
                User.objects
                .active()
                .select_for_update()
                .get(email__iexact=email.strip())
            )
        except User.DoesNotExist:
            raise InvalidCredentialsError("Invalid email or password")

        if user.is_locked():
            raise AccountLockedError("Account is temporarily locked. Try again later.")

        if not user.check_password(password):
            _register_failed_attempt(user)
            error = InvalidCredentialsError("Invalid email or password")
        elif not user.is_active:
            error = InactiveAccountError("Account is deactivated")
        else:
            user.failed_login_attempts = 0
            user.locked_until = None
            user.last_login = timezone.now()
            user.save(update_fields=['failed_login_attempts', 'locked_until', 'last_login'])

    if error is not None:
        raise error
    return user
