"""
Movie night scheduling service.

Creates and edits movie nights. Dates arrive as free-form strings from
clients and are normalized to second precision. RSVP reminder settings are
validated together with the schedule so a night never stores a deadline
after its start.
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone
from django.utils.dateparse import parse_datetime

from apps.accounts.models import User
from apps.activity.models import ActivityEvent
from apps.activity.services import queue_activity
from apps.core.schema import get_schema_capabilities, require_capability
from apps.groups.models import GroupRole
from apps.groups.services import InsufficientPermissionsError, MembershipContext
from apps.movie_nights.models import MovieNight, MovieNightStatus, RSVP_FIELDS
from apps.movies.services import is_in_watchlist
from apps.notifications.models import NotificationType
from apps.notifications.services import queue_group_notification

from .exceptions import (
    ChosenMovieNotInWatchlistError,
    InvalidScheduleError,
    InvalidStatusTransitionError,
    MovieNightClosedError,
    MovieNightLockedError,
    MovieNightNotFoundError,
)

logger = logging.getLogger(__name__)


NORMALIZED_FORMAT = '%Y-%m-%d %H:%M:%S'

# Looser formats accepted after ISO 8601 / "YYYY-MM-DD HH:MM[:SS]".
FALLBACK_FORMATS = (
    '%Y-%m-%d',
    '%Y/%m/%d %H:%M',
    '%Y/%m/%d',
    '%m/%d/%Y %H:%M:%S',
    '%m/%d/%Y %H:%M',
    '%m/%d/%Y',
    '%B %d, %Y %H:%M',
    '%B %d, %Y',
    '%b %d, %Y %H:%M',
    '%b %d, %Y',
    '%d %B %Y %H:%M',
    '%d %B %Y',
)

STATUS_TRANSITIONS = {
    MovieNightStatus.PLANNED: {MovieNightStatus.COMPLETED, MovieNightStatus.CANCELLED},
    MovieNightStatus.COMPLETED: set(),
    MovieNightStatus.CANCELLED: set(),
}

EDITABLE_FIELDS = (
    'scheduled_date',
    'chosen_movie_id',
    'status',
    'rsvp_deadline',
    'reminder_minutes_before',
)


# ============================================
# Parsing and validation
# ============================================

def parse_schedule_datetime(value, label: str = 'Date') -> Optional[datetime]:
    """
    Parse client input into an aware datetime with second precision.

    Accepts datetime/date objects, ISO 8601 strings, ``YYYY-MM-DD HH:MM[:SS]``
    and the looser FALLBACK_FORMATS. Naive values are taken in the current
    time zone. Empty input returns None.

    Raises:
        InvalidScheduleError: If the value cannot be parsed
    """
    if value is None or value == '':
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    else:
        text = ' '.join(str(value).split())
        try:
            parsed = parse_datetime(text)
        except ValueError:
            parsed = None
        if parsed is None:
            for fmt in FALLBACK_FORMATS:
                try:
                    parsed = datetime.strptime(text, fmt)
                    break
                except ValueError:
                    continue
        if parsed is None:
            raise InvalidScheduleError(f'{label} is not a valid date')

    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed.replace(microsecond=0)


def normalize_schedule_value(value: datetime) -> str:
    """Format a datetime as ``YYYY-MM-DD HH:MM:SS`` in the current time zone."""
    return timezone.localtime(value).strftime(NORMALIZED_FORMAT)


def _grace() -> timedelta:
    return timedelta(seconds=settings.MOVIE_NIGHT_SCHEDULE_GRACE_SECONDS)


def validate_scheduled_date(scheduled: datetime, now: datetime) -> None:
    """
    Raises:
        InvalidScheduleError: If scheduled is before now minus the grace window
    """
    if scheduled < now - _grace():
        raise InvalidScheduleError('Scheduled date cannot be in the past')


def validate_reminder_minutes(value) -> Optional[int]:
    """
    Raises:
        InvalidScheduleError: If value is not an integer in the allowed range
    """
    if value is None or value == '':
        return None

    low = settings.RSVP_REMINDER_MIN_MINUTES
    high = settings.RSVP_REMINDER_MAX_MINUTES
    message = f'Reminder minutes must be between {low} and {high}'

    if isinstance(value, bool):
        raise InvalidScheduleError(message)
    try:
        minutes = int(value)
    except (TypeError, ValueError):
        raise InvalidScheduleError(message)
    if minutes != value and str(minutes) != str(value).strip():
        raise InvalidScheduleError(message)
    if not low <= minutes <= high:
        raise InvalidScheduleError(message)
    return minutes


def validate_rsvp_settings(
    *,
    scheduled: datetime,
    deadline: Optional[datetime],
    reminder_minutes: Optional[int],
    now: datetime,
    check_deadline_past: bool = True
) -> None:
    """
    Check the deadline/reminder pair against the schedule.

    Raises:
        InvalidScheduleError: If a reminder has no deadline, or the deadline
            is not before the scheduled date, or the deadline is past
    """
    if reminder_minutes is not None and deadline is None:
        raise InvalidScheduleError('Reminder minutes require an RSVP deadline')

    if deadline is None:
        return

    if deadline >= scheduled:
        raise InvalidScheduleError('RSVP deadline must be before the scheduled date')

    if check_deadline_past and deadline < now:
        raise InvalidScheduleError('RSVP deadline cannot be in the past')


def validate_chosen_movie(group_id: UUID, movie_id: Optional[UUID]) -> None:
    """
    Raises:
        ChosenMovieNotInWatchlistError: If movie_id is not on the watchlist
    """
    if movie_id and not is_in_watchlist(group_id=group_id, movie_id=movie_id):
        raise ChosenMovieNotInWatchlistError('Chosen movie must already exist in watchlist')


# ============================================
# Queries
# ============================================

def _movie_nights() -> QuerySet[MovieNight]:
    queryset = MovieNight.objects.select_related('chosen_movie', 'created_by', 'group')
    if not get_schema_capabilities().rsvp_reminders:
        queryset = queryset.defer(*RSVP_FIELDS)
    return queryset


def get_group_movie_nights(*, group_id: UUID) -> QuerySet[MovieNight]:
    """Movie nights of a group, latest first."""
    return _movie_nights().filter(group_id=group_id).order_by('-scheduled_date')


def get_movie_night(*, group_id: UUID, night_id: UUID) -> MovieNight:
    """
    Raises:
        MovieNightNotFoundError: If the night doesn't exist in this group
    """
    try:
        return _movie_nights().get(id=night_id, group_id=group_id)
    except MovieNight.DoesNotExist:
        raise MovieNightNotFoundError(f"Movie night with ID {night_id} not found")


def _lock_movie_night(group_id: UUID, night_id: UUID) -> MovieNight:
    queryset = MovieNight.objects.select_for_update()
    if not get_schema_capabilities().rsvp_reminders:
        queryset = queryset.defer(*RSVP_FIELDS)
    try:
        return queryset.get(id=night_id, group_id=group_id)
    except MovieNight.DoesNotExist:
        raise MovieNightNotFoundError(f"Movie night with ID {night_id} not found")


# ============================================
# Mutations
# ============================================

@transaction.atomic
def create_movie_night(
    *,
    group_id: UUID,
    user: User,
    scheduled_date,
    chosen_movie_id: Optional[UUID] = None,
    rsvp_deadline=None,
    reminder_minutes_before=None,
    now: Optional[datetime] = None
) -> MovieNight:
    """
    Schedule a movie night for a group.

    Args:
        group_id: UUID of the group (caller membership checked by the guard)
        user: Member creating the night
        scheduled_date: Start, any accepted date format
        chosen_movie_id: Optional watchlist movie
        rsvp_deadline: Optional RSVP cutoff, before scheduled_date
        reminder_minutes_before: Optional reminder lead time; needs rsvp_deadline
        now: Current time override

    Returns:
        Created MovieNight

    Raises:
        InvalidScheduleError: For invalid dates or reminder settings
        ChosenMovieNotInWatchlistError: If the movie is not on the watchlist
        SchemaUnavailableError: If RSVP fields are given on an old database
    """
    now = now or timezone.now()

    scheduled = parse_schedule_datetime(scheduled_date, 'Scheduled date')
    if scheduled is None:
        raise InvalidScheduleError('Scheduled date is required')
    validate_scheduled_date(scheduled, now)

    deadline = parse_schedule_datetime(rsvp_deadline, 'RSVP deadline')
    reminder_minutes = validate_reminder_minutes(reminder_minutes_before)
    if deadline is not None or reminder_minutes is not None:
        require_capability('rsvp_reminders', 'RSVP reminders')
    validate_rsvp_settings(
        scheduled=scheduled,
        deadline=deadline,
        reminder_minutes=reminder_minutes,
        now=now,
    )

    validate_chosen_movie(group_id, chosen_movie_id)

    night = MovieNight.objects.create(
        group_id=group_id,
        scheduled_date=scheduled,
        chosen_movie_id=chosen_movie_id,
        rsvp_deadline=deadline,
        reminder_minutes_before=reminder_minutes,
        created_by=user,
    )

    queue_activity(
        group_id=group_id,
        actor_id=user.id,
        event_type=ActivityEvent.MOVIE_NIGHT_CREATED,
        reference_id=night.id,
        metadata={'scheduledDate': normalize_schedule_value(scheduled)},
    )
    queue_group_notification(
        group_id=group_id,
        type=NotificationType.MOVIE_NIGHT,
        title='New movie night',
        message=(
            f'{user.get_display_name()} scheduled a movie night for '
            f'{normalize_schedule_value(scheduled)}'
        ),
        reference_id=night.id,
        exclude_user_ids=[user.id],
    )

    logger.info('Movie night %s created in group %s', night.id, group_id)
    return night


@transaction.atomic
def update_movie_night(
    *,
    group_id: UUID,
    night_id: UUID,
    membership: MembershipContext,
    changes: dict,
    now: Optional[datetime] = None
) -> MovieNight:
    """
    Apply a partial update to a movie night.

    Only keys present in ``changes`` are touched; an explicit None clears
    the optional fields. Changing the RSVP deadline or reminder lead time
    re-arms the reminder.

    Args:
        group_id: UUID of the group
        night_id: UUID of the movie night
        membership: Caller's membership in the group
        changes: Subset of scheduled_date, chosen_movie_id, status,
            rsvp_deadline, reminder_minutes_before
        now: Current time override

    Returns:
        Updated MovieNight

    Raises:
        MovieNightNotFoundError: If the night doesn't exist in the group
        MovieNightLockedError: If the night is locked and caller is below moderator
        MovieNightClosedError: If the night is completed or cancelled
        InvalidStatusTransitionError: For transitions other than planned -> completed/cancelled
        InvalidScheduleError: For invalid dates or reminder settings
        ChosenMovieNotInWatchlistError: If the movie is not on the watchlist
    """
    now = now or timezone.now()
    changes = {key: value for key, value in changes.items() if key in EDITABLE_FIELDS}

    night = _lock_movie_night(group_id, night_id)

    if night.is_locked and not membership.has_role(GroupRole.MODERATOR):
        raise MovieNightLockedError('Movie night is locked')

    if not changes:
        return night

    new_status = changes.pop('status', night.status)
    if new_status != night.status:
        if new_status not in STATUS_TRANSITIONS[MovieNightStatus(night.status)]:
            raise InvalidStatusTransitionError(
                f'Cannot change status from {night.status} to {new_status}'
            )
    elif not night.is_planned and changes:
        raise MovieNightClosedError(f'Movie night is {night.status}')

    rsvp_changed = bool({'rsvp_deadline', 'reminder_minutes_before'} & changes.keys())
    if rsvp_changed:
        require_capability('rsvp_reminders', 'RSVP reminders')

    scheduled = night.scheduled_date
    if 'scheduled_date' in changes:
        scheduled = parse_schedule_datetime(changes['scheduled_date'], 'Scheduled date')
        if scheduled is None:
            raise InvalidScheduleError('Scheduled date is required')
        if scheduled != night.scheduled_date:
            validate_scheduled_date(scheduled, now)

    rsvp_enabled = get_schema_capabilities().rsvp_reminders
    deadline = night.rsvp_deadline if rsvp_enabled else None
    reminder_minutes = night.reminder_minutes_before if rsvp_enabled else None
    if 'rsvp_deadline' in changes:
        deadline = parse_schedule_datetime(changes['rsvp_deadline'], 'RSVP deadline')
    if 'reminder_minutes_before' in changes:
        reminder_minutes = validate_reminder_minutes(changes['reminder_minutes_before'])

    if rsvp_enabled:
        deadline_changed = deadline != night.rsvp_deadline
        if deadline_changed or scheduled != night.scheduled_date or 'reminder_minutes_before' in changes:
            validate_rsvp_settings(
                scheduled=scheduled,
                deadline=deadline,
                reminder_minutes=reminder_minutes,
                now=now,
                check_deadline_past=deadline_changed,
            )

    if 'chosen_movie_id' in changes:
        validate_chosen_movie(group_id, changes['chosen_movie_id'])

    updated_fields = []

    def apply(field, value):
        if getattr(night, field) != value:
            setattr(night, field, value)
            updated_fields.append(field)

    apply('scheduled_date', scheduled)
    if 'chosen_movie_id' in changes:
        apply('chosen_movie_id', changes['chosen_movie_id'])
    apply('status', new_status)
    if rsvp_enabled:
        apply('rsvp_deadline', deadline)
        apply('reminder_minutes_before', reminder_minutes)
        if {'rsvp_deadline', 'reminder_minutes_before'} & set(updated_fields) and night.reminder_sent_at:
            night.reminder_sent_at = None
            updated_fields.append('reminder_sent_at')

    if not updated_fields:
        return night

    night.save(update_fields=updated_fields + ['updated_at'])

    queue_activity(
        group_id=group_id,
        actor_id=membership.user_id,
        event_type=ActivityEvent.MOVIE_NIGHT_UPDATED,
        reference_id=night.id,
        metadata={'fields': [field for field in updated_fields if field != 'reminder_sent_at']},
    )

    return night


@transaction.atomic
def set_movie_night_lock(
    *,
    group_id: UUID,
    night_id: UUID,
    membership: MembershipContext,
    locked: bool
) -> MovieNight:
    """
    Lock or unlock a movie night against edits by plain members.

    Raises:
        InsufficientPermissionsError: If caller is below moderator
        MovieNightNotFoundError: If the night doesn't exist in the group
    """
    if not membership.has_role(GroupRole.MODERATOR):
        raise InsufficientPermissionsError('Requires moderator role or higher')

    night = _lock_movie_night(group_id, night_id)
    locked = bool(locked)
    if night.is_locked == locked:
        return night

    night.is_locked = locked
    night.save(update_fields=['is_locked', 'updated_at'])

    queue_activity(
        group_id=group_id,
        actor_id=membership.user_id,
        event_type=ActivityEvent.MOVIE_NIGHT_LOCKED if locked else ActivityEvent.MOVIE_NIGHT_UNLOCKED,
        reference_id=night.id,
    )

    return night
