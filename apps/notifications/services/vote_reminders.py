"""
Vote reminders.

When someone votes on a watchlist movie, members who have not voted on it
yet get a nudge. A member gets at most one reminder per movie within the
cooldown window, and never if vote notifications are turned off.
"""

import logging
from datetime import timedelta
from typing import List, Optional
from uuid import UUID

from django.conf import settings
from django.utils import timezone

from apps.core.schema import get_schema_capabilities
from apps.groups.models import GroupMembership
from apps.movies.models import MovieVote
from apps.notifications.models import Notification, NotificationPreference, NotificationType

from .dispatch import NotificationDraft, insert_notifications

logger = logging.getLogger(__name__)


def get_pending_voter_ids(
    *,
    group_id: UUID,
    movie_id: UUID,
    reference_id: UUID,
    exclude_user_id: Optional[UUID] = None,
    now=None
) -> List[UUID]:
    """
    Members who should receive a vote reminder for ``movie_id``.

    Excludes members who already voted on the movie, members with vote
    notifications disabled, and members reminded about ``reference_id``
    within the cooldown window.
    """
    now = now or timezone.now()
    cooldown = timedelta(hours=settings.VOTE_REMINDER_COOLDOWN_HOURS)

    voted = MovieVote.objects.filter(group_id=group_id, movie_id=movie_id).values('user_id')
    recently_reminded = Notification.objects.filter(
        type=NotificationType.VOTE_REMINDER,
        reference_id=reference_id,
        created_at__gte=now - cooldown,
    ).values('user_id')

    queryset = (
        GroupMembership.objects
        .filter(group_id=group_id, user__deleted_at__isnull=True)
        .exclude(user_id__in=voted)
        .exclude(user_id__in=recently_reminded)
    )
    if exclude_user_id:
        queryset = queryset.exclude(user_id=exclude_user_id)
    if get_schema_capabilities().notification_preferences:
        queryset = queryset.filter(**{f'user__{NotificationPreference.VOTE}': True})

    return list(queryset.values_list('user_id', flat=True))


def send_vote_reminders(
    *,
    group_id: UUID,
    voter_id: UUID,
    movie_id: UUID,
    reference_id: UUID,
    movie_title: str,
    group_name: str = '',
    now=None
) -> int:
    """
    Remind pending members to vote on a movie.

    Returns:
        Number of reminders inserted (0 when nobody is pending)
    """
    pending = get_pending_voter_ids(
        group_id=group_id,
        movie_id=movie_id,
        reference_id=reference_id,
        exclude_user_id=voter_id,
        now=now,
    )
    if not pending:
        return 0

    where = f' in {group_name}' if group_name else ''
    count = insert_notifications(
        NotificationDraft(
            user_id=user_id,
            type=NotificationType.VOTE_REMINDER,
            title='Time to vote',
            message=f'Someone voted on "{movie_title}"{where}. Cast your vote too!',
            reference_id=reference_id,
        )
        for user_id in pending
    )
    logger.info('Sent %s vote reminders for movie %s in group %s', count, movie_id, group_id)
    return count
