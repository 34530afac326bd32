"""Domain-specific exceptions for friends app."""

from apps.core.exceptions import ConflictError, InvalidInputError, NotFoundError


class FriendUserNotFoundError(NotFoundError):
    default_detail = 'User not found.'


class FriendRequestNotFoundError(NotFoundError):
    """Raised when a pending request addressed to the caller doesn't exist."""
    default_detail = 'Friend request not found.'


class SelfFriendRequestError(InvalidInputError):
    default_detail = 'You cannot send a friend request to yourself.'


class AlreadyFriendsError(ConflictError):
    default_detail = 'You are already friends.'


class FriendRequestPendingError(ConflictError):
    default_detail = 'Friend request already pending.'
