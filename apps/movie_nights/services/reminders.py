"""
RSVP reminder dispatch.

A movie night with an RSVP deadline and a lead time gets one reminder,
``reminder_minutes_before`` the deadline, for every member who has not
answered yet. Delivery is best-effort: it runs when a group's nights are
listed, when a moderator asks for it, and from the ``send_rsvp_reminders``
management command. There is no in-process timer.

The night row is locked while pending members are computed and the
reminder is marked sent, so concurrent triggers send at most once.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional
from uuid import UUID

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from apps.activity.models import ActivityEvent
from apps.activity.services import queue_activity
from apps.core.schema import get_schema_capabilities
from apps.groups.models import GroupMembership
from apps.movie_nights.models import MovieNight, MovieNightAvailability, MovieNightStatus
from apps.notifications.models import NotificationType
from apps.notifications.services import NotificationDraft, insert_notifications

from .scheduling import normalize_schedule_value

logger = logging.getLogger(__name__)


SENT = 'sent'
NOT_FOUND = 'not_found'
NOT_PLANNED = 'not_planned'
NOT_CONFIGURED = 'not_configured'
INVALID_DEADLINE = 'invalid_deadline'
ALREADY_SENT = 'already_sent'
NOT_DUE = 'not_due'


@dataclass(frozen=True)
class ReminderResult:
    night_id: UUID
    sent: bool
    reason: str
    notified: int = 0


def get_reminder_trigger_time(night: MovieNight) -> Optional[datetime]:
    """When the reminder for ``night`` becomes due, or None if not configured."""
    if night.rsvp_deadline is None or night.reminder_minutes_before is None:
        return None
    return night.rsvp_deadline - timedelta(minutes=night.reminder_minutes_before)


def get_pending_member_ids(night: MovieNight) -> List[UUID]:
    """Active group members without an availability answer for ``night``."""
    answered = MovieNightAvailability.objects.filter(movie_night=night).values('user_id')
    return list(
        GroupMembership.objects
        .filter(group_id=night.group_id, user__deleted_at__isnull=True)
        .exclude(user_id__in=answered)
        .values_list('user_id', flat=True)
    )


def _skip(night_id, reason) -> ReminderResult:
    logger.debug('RSVP reminder for movie night %s skipped: %s', night_id, reason)
    return ReminderResult(night_id=night_id, sent=False, reason=reason)


def send_reminder_for_night(
    night_id: UUID,
    *,
    force: bool = False,
    now: Optional[datetime] = None,
    actor_id: Optional[UUID] = None
) -> ReminderResult:
    """
    Send the RSVP reminder of one movie night if it is due.

    Skips are reported through ``ReminderResult.reason``, never raised.

    Args:
        night_id: UUID of the movie night
        force: Send even if already sent or not yet due
        now: Current time override
        actor_id: Moderator who triggered the send, if any

    Returns:
        ReminderResult with reason ``sent`` or one of the skip reasons
    """
    now = now or timezone.now()

    if not get_schema_capabilities().rsvp_reminders:
        return _skip(night_id, NOT_CONFIGURED)

    with transaction.atomic():
        night = (
            MovieNight.objects
            .select_for_update(of=('self',))
            .select_related('group')
            .filter(id=night_id, group__deleted_at__isnull=True)
            .first()
        )
        if night is None:
            return _skip(night_id, NOT_FOUND)

        if night.status != MovieNightStatus.PLANNED:
            return _skip(night_id, NOT_PLANNED)

        trigger_at = get_reminder_trigger_time(night)
        if trigger_at is None:
            return _skip(night_id, NOT_CONFIGURED)

        if night.rsvp_deadline >= night.scheduled_date:
            logger.warning('Movie night %s has an RSVP deadline after its start', night_id)
            return _skip(night_id, INVALID_DEADLINE)

        if night.reminder_sent_at is not None and not force:
            return _skip(night_id, ALREADY_SENT)

        if now < trigger_at and not force:
            return _skip(night_id, NOT_DUE)

        pending = get_pending_member_ids(night)
        notified = 0
        if pending:
            message = (
                f'Please RSVP for the movie night in {night.group.name} on '
                f'{normalize_schedule_value(night.scheduled_date)} before '
                f'{normalize_schedule_value(night.rsvp_deadline)}.'
            )
            notified = insert_notifications(
                NotificationDraft(
                    user_id=user_id,
                    type=NotificationType.RSVP_REMINDER,
                    title='RSVP reminder',
                    message=message,
                    reference_id=night.id,
                )
                for user_id in pending
            )

        night.reminder_sent_at = now
        night.save(update_fields=['reminder_sent_at'])

        queue_activity(
            group_id=night.group_id,
            actor_id=actor_id,
            event_type=ActivityEvent.RSVP_REMINDER_SENT,
            reference_id=night.id,
            metadata={'notified': notified, 'forced': force},
        )

    logger.info('RSVP reminder for movie night %s sent to %s members', night_id, notified)
    return ReminderResult(night_id=night_id, sent=True, reason=SENT, notified=notified)


def get_due_reminder_night_ids(*, group_id: Optional[UUID] = None, now: Optional[datetime] = None) -> List[UUID]:
    """Planned nights whose reminder is configured, unsent and due at ``now``."""
    now = now or timezone.now()
    if not get_schema_capabilities().rsvp_reminders:
        return []

    horizon = now + timedelta(minutes=settings.RSVP_REMINDER_MAX_MINUTES)
    queryset = MovieNight.objects.filter(
        status=MovieNightStatus.PLANNED,
        group__deleted_at__isnull=True,
        rsvp_deadline__isnull=False,
        rsvp_deadline__lte=horizon,
        reminder_minutes_before__isnull=False,
        reminder_sent_at__isnull=True,
    )
    if group_id is not None:
        queryset = queryset.filter(group_id=group_id)

    rows = queryset.values_list('id', 'rsvp_deadline', 'reminder_minutes_before')
    return [
        night_id
        for night_id, deadline, minutes in rows
        if deadline - timedelta(minutes=minutes) <= now
    ]


def dispatch_due_reminders(*, group_id: Optional[UUID] = None, now: Optional[datetime] = None) -> List[ReminderResult]:
    """
    Send every due RSVP reminder, optionally within one group.

    Returns:
        One ReminderResult per candidate night
    """
    now = now or timezone.now()
    return [
        send_reminder_for_night(night_id, now=now)
        for night_id in get_due_reminder_night_ids(group_id=group_id, now=now)
    ]
