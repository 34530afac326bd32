"""Account management service."""

from typing import Optional
from uuid import UUID

from django.db import transaction
from django.contrib.auth import get_user_model

from apps.core.schema import require_capability

from .exceptions import PasswordConfirmationError, UserNotFoundError

User = get_user_model()


def update_notification_preferences(
    *,
    user_id: UUID,
    email_notifications: Optional[bool] = None,
    group_notifications: Optional[bool] = None,
    vote_notifications: Optional[bool] = None,
) -> User:
    """Update whichever notification flags are given and return the user."""
    require_capability('notification_preferences', 'Notification preferences')

    try:
        user = User.objects.active().get(id=user_id)
    except User.DoesNotExist:
        raise UserNotFoundError("User not found")

    changes = {
        'email_notifications': email_notifications,
        'group_notifications': group_notifications,
        'vote_notifications': vote_notifications,
    }
    update_fields = [field for field, value in changes.items() if value is not None]
    for field in update_fields:
        setattr(user, field, changes[field])

    if update_fields:
        user.save(update_fields=update_fields)
    return user


@transaction.atomic
def soft_delete_account(*, user_id: UUID, password: str) -> None:
    """
    Soft-delete the account after confirming the password.

    The row stays so memberships, votes and activity keep their references;
    every lookup excludes users with ``deleted_at`` set.

    Raises:
        UserNotFoundError: If the user does not exist or is already deleted
        PasswordConfirmationError: If password is incorrect
    """
    try:
        user = (
            User.objects
            .active()
            .select_for_update()
            .get(id=user_id)
        )
    except User.DoesNotExist:
        raise UserNotFoundError("User not found")

    if not user.check_password(password):
        raise PasswordConfirmationError("Invalid password")

    user.soft_delete()
