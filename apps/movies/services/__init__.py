"""
Movies app services layer.

Watchlist curation and voting for group members.
"""

from .exceptions import (
    MovieNotFoundError,
    NotInWatchlistError,
    AlreadyInWatchlistError,
    MovieScheduledError,
    WatchlistPermissionError,
    InvalidVoteError,
)

from .watchlist import (
    get_movie,
    add_to_watchlist,
    remove_from_watchlist,
    get_group_watchlist,
    is_in_watchlist,
    get_featured_movies,
)

from .voting import (
    validate_vote_value,
    cast_vote,
    get_movie_votes,
)


__all__ = [
    # Exceptions
    'MovieNotFoundError',
    'NotInWatchlistError',
    'AlreadyInWatchlistError',
    'MovieScheduledError',
    'WatchlistPermissionError',
    'InvalidVoteError',

    # Watchlist
    'get_movie',
    'add_to_watchlist',
    'remove_from_watchlist',
    'get_group_watchlist',
    'is_in_watchlist',
    'get_featured_movies',

    # Voting
    'validate_vote_value',
    'cast_vote',
    'get_movie_votes',
]
