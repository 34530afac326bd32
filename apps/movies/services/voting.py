"""
Voting service.

Members rate watchlist movies from 1 to 5. Voting again replaces the
previous vote. After the vote commits, members who have not voted on the
movie get a reminder.
"""

import logging
from functools import partial
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.activity.models import ActivityEvent
from apps.activity.services import queue_activity
from apps.movies.models import GroupWatchlistEntry, MovieVote, VOTE_MAX, VOTE_MIN
from apps.notifications.services import send_vote_reminders

from .exceptions import InvalidVoteError, NotInWatchlistError

logger = logging.getLogger(__name__)


def validate_vote_value(value) -> int:
    """
    Raises:
        InvalidVoteError: If value is not an integer within 1..5
    """
    if isinstance(value, bool):
        raise InvalidVoteError(f'Vote value must be between {VOTE_MIN} and {VOTE_MAX}')
    try:
        value = int(value)
    except (TypeError, ValueError):
        raise InvalidVoteError(f'Vote value must be between {VOTE_MIN} and {VOTE_MAX}')
    if not VOTE_MIN <= value <= VOTE_MAX:
        raise InvalidVoteError(f'Vote value must be between {VOTE_MIN} and {VOTE_MAX}')
    return value


@transaction.atomic
def cast_vote(*, group_id: UUID, user: User, movie_id: UUID, vote_value) -> MovieVote:
    """
    Record a user's vote on a watchlist movie.

    Args:
        group_id: UUID of the group (caller membership checked by the guard)
        user: Voting member
        movie_id: UUID of the movie
        vote_value: 1..5

    Returns:
        The created or updated MovieVote

    Raises:
        InvalidVoteError: If vote_value is out of range
        NotInWatchlistError: If the movie is not on the group's watchlist
    """
    vote_value = validate_vote_value(vote_value)

    entry = (
        GroupWatchlistEntry.objects
        .select_related('movie', 'group')
        .filter(group_id=group_id, movie_id=movie_id)
        .first()
    )
    if entry is None:
        raise NotInWatchlistError('Movie is not in the group watchlist')

    lookup = {'user': user, 'group_id': group_id, 'movie_id': movie_id}
    vote, _ = MovieVote.objects.update_or_create(defaults={'vote_value': vote_value}, **lookup)

    queue_activity(
        group_id=group_id,
        actor_id=user.id,
        event_type=ActivityEvent.VOTE_CAST,
        reference_id=entry.id,
        metadata={'movieId': str(movie_id), 'voteValue': vote_value},
    )

    transaction.on_commit(
        partial(
            send_vote_reminders,
            group_id=group_id,
            voter_id=user.id,
            movie_id=movie_id,
            reference_id=entry.id,
            movie_title=entry.movie.title,
            group_name=entry.group.name,
        ),
        robust=True,
    )

    return vote


def get_movie_votes(*, group_id: UUID, movie_id: UUID) -> QuerySet[MovieVote]:
    """Votes on one movie in a group, newest first."""
    return (
        MovieVote.objects
        .filter(group_id=group_id, movie_id=movie_id, user__deleted_at__isnull=True)
        .select_related('user')
        .order_by('-voted_at')
    )
