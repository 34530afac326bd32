"""Domain-specific exceptions for movies app."""

from apps.core.exceptions import ConflictError, ForbiddenError, InvalidInputError, NotFoundError


class MovieNotFoundError(NotFoundError):
    """Raised when a movie doesn't exist in the catalog."""
    default_detail = 'Movie not found.'


class NotInWatchlistError(NotFoundError):
    """Raised when a movie is not on the group's watchlist."""
    default_detail = 'Movie is not in the group watchlist.'


class AlreadyInWatchlistError(ConflictError):
    """Raised when adding a movie the watchlist already holds."""
    default_detail = 'Movie already in watchlist.'


class MovieScheduledError(ConflictError):
    """Raised when removing a movie chosen for a planned movie night."""
    default_detail = 'Movie is chosen for a planned movie night.'


class WatchlistPermissionError(ForbiddenError):
    """Raised when a member removes an entry someone else added."""
    default_detail = 'Only the member who added this movie or a moderator can remove it.'


class InvalidVoteError(InvalidInputError):
    """Raised when a vote value is outside 1..5."""
    default_detail = 'Vote value must be between 1 and 5.'
