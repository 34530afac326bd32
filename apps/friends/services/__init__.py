"""
Friends app services layer.
"""

from .exceptions import (
    FriendUserNotFoundError,
    FriendRequestNotFoundError,
    SelfFriendRequestError,
    AlreadyFriendsError,
    FriendRequestPendingError,
)

from .friendship import (
    are_friends,
    send_friend_request,
    accept_friend_request,
    decline_friend_request,
    remove_friend,
    get_friends,
    get_pending_requests,
)


__all__ = [
    # Exceptions
    'FriendUserNotFoundError',
    'FriendRequestNotFoundError',
    'SelfFriendRequestError',
    'AlreadyFriendsError',
    'FriendRequestPendingError',

    # Friendships
    'are_friends',
    'send_friend_request',
    'accept_friend_request',
    'decline_friend_request',
    'remove_friend',
    'get_friends',
    'get_pending_requests',
]
