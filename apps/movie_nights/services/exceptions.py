"""
Domain-specific exceptions for movie nights app.
"""

from apps.core.exceptions import ConflictError, InvalidInputError, LockedError, NotFoundError


class MovieNightNotFoundError(NotFoundError):
    """Raised when a movie night doesn't exist in the group."""
    default_detail = 'Movie night not found.'


class InvalidScheduleError(InvalidInputError):
    """Raised for unparseable or out-of-order dates and bad reminder settings."""
    default_detail = 'Invalid movie night schedule.'


class ChosenMovieNotInWatchlistError(InvalidInputError):
    """Raised when the chosen movie is not on the group's watchlist."""
    default_detail = 'Chosen movie must already exist in watchlist.'


class InvalidStatusTransitionError(InvalidInputError):
    """Raised for any status change other than planned -> completed/cancelled."""
    default_detail = 'Invalid status transition.'


class MovieNightClosedError(ConflictError):
    """Raised when changing a completed or cancelled movie night."""
    default_detail = 'Movie night is no longer planned.'


class MovieNightLockedError(LockedError):
    """Raised when a plain member edits a locked movie night."""
    default_detail = 'Movie night is locked.'
