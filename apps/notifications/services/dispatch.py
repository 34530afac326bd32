"""
Notification dispatcher.

Builds and inserts notification rows in one multi-row insert, with
preference-aware recipient selection. Dispatch is fire-and-forget:
``queue_notifications`` runs after the business transaction commits and a
failure there is logged, never raised to the caller.
"""

import logging
from dataclasses import asdict, dataclass
from functools import partial
from typing import Iterable, List, Mapping, Optional, Union
from uuid import UUID

from django.db import transaction

from apps.accounts.models import User
from apps.core.schema import get_schema_capabilities
from apps.groups.models import GroupMembership
from apps.notifications.models import Notification, NotificationPreference

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotificationDraft:
    user_id: UUID
    type: str
    title: str
    message: str
    reference_id: Optional[UUID] = None


Candidate = Union[NotificationDraft, Mapping]


def _clean_text(value) -> str:
    return str(value).strip() if value else ''


def _to_notification(candidate: Candidate) -> Optional[Notification]:
    if isinstance(candidate, NotificationDraft):
        candidate = asdict(candidate)

    user_id = candidate.get('user_id')
    type_ = _clean_text(candidate.get('type'))
    title = _clean_text(candidate.get('title'))
    message = _clean_text(candidate.get('message'))

    if not user_id or not type_ or not title or not message:
        return None

    return Notification(
        user_id=user_id,
        type=type_,
        title=title[:200],
        message=message,
        reference_id=candidate.get('reference_id'),
    )


def insert_notifications(batch: Iterable[Candidate]) -> int:
    """
    Insert a batch of notifications with a single multi-row insert.

    Candidates missing a user, type, title or message are dropped.

    Returns:
        Number of notifications inserted
    """
    rows = [row for row in map(_to_notification, batch or ()) if row is not None]
    if not rows:
        return 0
    Notification.objects.bulk_create(rows)
    return len(rows)


def queue_notifications(batch: Iterable[Candidate]) -> None:
    """Insert ``batch`` once the current transaction commits."""
    batch = list(batch)
    if not batch:
        return
    transaction.on_commit(partial(insert_notifications, batch), robust=True)


def _check_preference(preference: str) -> str:
    if preference not in NotificationPreference.values:
        raise ValueError(f"Unsupported notification preference: {preference}")
    return preference


def user_allows_preference(user_id: UUID, preference: str) -> bool:
    """
    Whether an active user accepts notifications of ``preference``.

    Soft-deleted or unknown users never do. Databases without preference
    columns allow every active user.
    """
    if not user_id:
        return False

    users = User.objects.active().filter(id=user_id)
    if preference not in NotificationPreference.values:
        return users.exists()
    if not get_schema_capabilities().notification_preferences:
        return users.exists()

    enabled = users.values_list(preference, flat=True).first()
    return bool(enabled)


def get_group_recipient_user_ids(
    group_id: UUID,
    exclude_user_ids: Iterable[UUID] = (),
    preference: str = NotificationPreference.GROUP,
) -> List[UUID]:
    """
    Active members of a group who accept ``preference`` notifications.

    Raises:
        ValueError: If preference is not a known preference column
    """
    _check_preference(preference)

    queryset = GroupMembership.objects.filter(
        group_id=group_id,
        user__deleted_at__isnull=True,
    )
    excluded = [user_id for user_id in exclude_user_ids if user_id]
    if excluded:
        queryset = queryset.exclude(user_id__in=excluded)
    if get_schema_capabilities().notification_preferences:
        queryset = queryset.filter(**{f'user__{preference}': True})

    return list(queryset.values_list('user_id', flat=True))


def insert_notification_for_user_if_preferred(
    *,
    user_id: UUID,
    type: str,
    title: str,
    message: str,
    reference_id: Optional[UUID] = None,
    preference: str = NotificationPreference.GROUP,
) -> bool:
    """Insert one notification if the user allows it. Returns whether it was inserted."""
    if not user_allows_preference(user_id, preference):
        return False
    inserted = insert_notifications([NotificationDraft(
        user_id=user_id,
        type=type,
        title=title,
        message=message,
        reference_id=reference_id,
    )])
    return inserted > 0


def notify_group(
    *,
    group_id: UUID,
    type: str,
    title: str,
    message: str,
    reference_id: Optional[UUID] = None,
    exclude_user_ids: Iterable[UUID] = (),
    preference: str = NotificationPreference.GROUP,
) -> int:
    """Notify every member of a group who accepts ``preference`` notifications."""
    recipients = get_group_recipient_user_ids(
        group_id,
        exclude_user_ids=exclude_user_ids,
        preference=preference,
    )
    count = insert_notifications(
        NotificationDraft(
            user_id=user_id,
            type=type,
            title=title,
            message=message,
            reference_id=reference_id,
        )
        for user_id in recipients
    )
    logger.debug('Sent %s %s notifications for group %s', count, type, group_id)
    return count


def queue_group_notification(**kwargs) -> None:
    """Run notify_group after the current transaction commits."""
    transaction.on_commit(partial(notify_group, **kwargs), robust=True)
