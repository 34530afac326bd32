"""User notification inbox."""

from uuid import UUID

from django.db.models import QuerySet

from apps.accounts.models import User
from apps.notifications.models import Notification

from .exceptions import NotificationNotFoundError


def get_user_notifications(user: User) -> QuerySet[Notification]:
    """Get a user's notifications, newest first."""
    return Notification.objects.filter(user=user).order_by('-created_at')


def get_unread_count(user: User) -> int:
    return Notification.objects.filter(user=user, is_read=False).count()


def mark_notification_read(*, user: User, notification_id: UUID) -> None:
    """
    Mark one of the user's notifications as read.

    Raises:
        NotificationNotFoundError: If it doesn't exist or belongs to someone else
    """
    updated = (
        Notification.objects
        .filter(id=notification_id, user=user)
        .update(is_read=True)
    )
    if updated == 0:
        raise NotificationNotFoundError('Notification not found')


def mark_all_read(user: User) -> int:
    """Mark every unread notification as read. Returns how many changed."""
    return Notification.objects.filter(user=user, is_read=False).update(is_read=True)
