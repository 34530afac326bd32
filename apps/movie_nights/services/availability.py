"""
Availability (RSVP) service.

One answer per member and movie night; answering again replaces it.
"""

from dataclasses import dataclass, field
from typing import List
from uuid import UUID

from django.db import transaction

from apps.accounts.models import User
from apps.activity.models import ActivityEvent
from apps.activity.services import queue_activity
from apps.groups.models import GroupMembership
from apps.movie_nights.models import MovieNight, MovieNightAvailability, MovieNightStatus

from .exceptions import MovieNightClosedError, MovieNightNotFoundError
from .scheduling import get_movie_night


@dataclass
class AvailabilitySummary:
    movie_night: MovieNight
    responses: List[MovieNightAvailability] = field(default_factory=list)
    pending_members: List[GroupMembership] = field(default_factory=list)

    @property
    def available_count(self) -> int:
        return sum(1 for response in self.responses if response.is_available)

    @property
    def unavailable_count(self) -> int:
        return sum(1 for response in self.responses if not response.is_available)


@transaction.atomic
def set_availability(
    *,
    group_id: UUID,
    night_id: UUID,
    user: User,
    is_available: bool
) -> MovieNightAvailability:
    """
    Record a member's RSVP for a planned movie night.

    Args:
        group_id: UUID of the group (caller membership checked by the guard)
        night_id: UUID of the movie night
        user: Answering member
        is_available: Whether the member will attend

    Returns:
        The created or updated MovieNightAvailability

    Raises:
        MovieNightNotFoundError: If the night doesn't exist in the group
        MovieNightClosedError: If the night is completed or cancelled
    """
    status = (
        MovieNight.objects
        .filter(id=night_id, group_id=group_id)
        .values_list('status', flat=True)
        .first()
    )
    if status is None:
        raise MovieNightNotFoundError(f"Movie night with ID {night_id} not found")
    if status != MovieNightStatus.PLANNED:
        raise MovieNightClosedError('Availability can only be set for planned movie nights')

    lookup = {'movie_night_id': night_id, 'user': user}
    availability, _ = MovieNightAvailability.objects.update_or_create(
        defaults={'is_available': bool(is_available)},
        **lookup,
    )

    queue_activity(
        group_id=group_id,
        actor_id=user.id,
        event_type=ActivityEvent.AVAILABILITY_UPDATED,
        reference_id=night_id,
        metadata={'isAvailable': bool(is_available)},
    )

    return availability


def get_availability(*, group_id: UUID, night_id: UUID) -> AvailabilitySummary:
    """
    Responses for a movie night plus the members who have not answered.

    Raises:
        MovieNightNotFoundError: If the night doesn't exist in the group
    """
    night = get_movie_night(group_id=group_id, night_id=night_id)

    responses = list(
        MovieNightAvailability.objects
        .filter(movie_night=night, user__deleted_at__isnull=True)
        .select_related('user')
        .order_by('-responded_at')
    )
    answered = [response.user_id for response in responses]
    pending = list(
        GroupMembership.objects
        .filter(group_id=group_id, user__deleted_at__isnull=True)
        .exclude(user_id__in=answered)
        .select_related('user')
        .order_by('joined_at')
    )

    return AvailabilitySummary(movie_night=night, responses=responses, pending_members=pending)
