"""
Watchlist service.

Group members curate a shared list of movies to watch together.
"""

from uuid import UUID

from django.db import transaction
from django.db.models import Avg, Count, Q, QuerySet

from apps.accounts.models import User
from apps.activity.models import ActivityEvent
from apps.activity.services import queue_activity
from apps.groups.models import GroupRole
from apps.groups.services import MembershipContext
from apps.movie_nights.models import MovieNight, MovieNightStatus
from apps.movies.models import GroupWatchlistEntry, Movie

from .exceptions import (
    AlreadyInWatchlistError,
    MovieNotFoundError,
    MovieScheduledError,
    NotInWatchlistError,
    WatchlistPermissionError,
)


def get_movie(movie_id: UUID) -> Movie:
    """
    Raises:
        MovieNotFoundError: If the movie doesn't exist
    """
    try:
        return Movie.objects.get(id=movie_id)
    except Movie.DoesNotExist:
        raise MovieNotFoundError(f"Movie with ID {movie_id} not found")


@transaction.atomic
def add_to_watchlist(*, group_id: UUID, user: User, movie_id: UUID) -> GroupWatchlistEntry:
    """
    Add a movie to a group's watchlist.

    Args:
        group_id: UUID of the group (caller membership checked by the guard)
        user: Member adding the movie
        movie_id: UUID of the catalog movie

    Returns:
        Created GroupWatchlistEntry

    Raises:
        MovieNotFoundError: If the movie doesn't exist
        AlreadyInWatchlistError: If the movie is already listed
    """
    movie = get_movie(movie_id)

    candidate = GroupWatchlistEntry(group_id=group_id, movie=movie, added_by=user)
    GroupWatchlistEntry.objects.bulk_create([candidate], ignore_conflicts=True)

    entry = GroupWatchlistEntry.objects.get(group_id=group_id, movie=movie)
    if entry.id != candidate.id:
        raise AlreadyInWatchlistError('Movie already in watchlist')

    queue_activity(
        group_id=group_id,
        actor_id=user.id,
        event_type=ActivityEvent.WATCHLIST_ADDED,
        reference_id=entry.id,
        metadata={'movieId': str(movie.id), 'title': movie.title},
    )

    return entry


@transaction.atomic
def remove_from_watchlist(
    *,
    group_id: UUID,
    membership: MembershipContext,
    movie_id: UUID
) -> None:
    """
    Remove a movie from a group's watchlist.

    Moderators may remove any entry, members only their own. A movie chosen
    for a planned movie night stays until the night changes.

    Raises:
        NotInWatchlistError: If the movie is not listed
        WatchlistPermissionError: If a member removes someone else's entry
        MovieScheduledError: If a planned night uses the movie
    """
    try:
        entry = (
            GroupWatchlistEntry.objects
            .select_for_update()
            .select_related('movie')
            .get(group_id=group_id, movie_id=movie_id)
        )
    except GroupWatchlistEntry.DoesNotExist:
        raise NotInWatchlistError('Movie is not in the group watchlist')

    is_adder = entry.added_by_id is not None and str(entry.added_by_id) == str(membership.user_id)
    if not is_adder and not membership.has_role(GroupRole.MODERATOR):
        raise WatchlistPermissionError(
            'Only the member who added this movie or a moderator can remove it'
        )

    scheduled = MovieNight.objects.filter(
        group_id=group_id,
        chosen_movie_id=movie_id,
        status=MovieNightStatus.PLANNED,
    ).exists()
    if scheduled:
        raise MovieScheduledError('Movie is chosen for a planned movie night')

    entry.delete()

    queue_activity(
        group_id=group_id,
        actor_id=membership.user_id,
        event_type=ActivityEvent.WATCHLIST_REMOVED,
        metadata={'movieId': str(movie_id), 'title': entry.movie.title},
    )


def get_group_watchlist(*, group_id: UUID) -> QuerySet[GroupWatchlistEntry]:
    """Watchlist entries with ``vote_count`` and ``average_vote``, newest first."""
    group_votes = Q(movie__votes__group_id=group_id)
    return (
        GroupWatchlistEntry.objects
        .filter(group_id=group_id)
        .select_related('movie', 'added_by')
        .annotate(
            vote_count=Count('movie__votes', filter=group_votes),
            average_vote=Avg('movie__votes__vote_value', filter=group_votes),
        )
        .order_by('-added_at')
    )


def is_in_watchlist(*, group_id: UUID, movie_id: UUID) -> bool:
    return GroupWatchlistEntry.objects.filter(group_id=group_id, movie_id=movie_id).exists()


def get_featured_movies(limit: int = 8) -> QuerySet[Movie]:
    """Top rated catalog movies."""
    return Movie.objects.filter(rating__isnull=False).order_by('-rating', 'title')[:limit]
