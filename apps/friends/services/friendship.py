"""
Friendship service.

Friend requests go from pending to accepted or declined. Accepting one
writes both directions of the friendship in one statement; rows that
already exist are left alone.
"""

import logging
from uuid import UUID

from django.db import transaction
from django.db.models import Q, QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.friends.models import FriendRequest, FriendRequestStatus, Friendship
from apps.notifications.models import NotificationType
from apps.notifications.services import NotificationDraft, queue_notifications

from .exceptions import (
    AlreadyFriendsError,
    FriendRequestNotFoundError,
    FriendRequestPendingError,
    FriendUserNotFoundError,
    SelfFriendRequestError,
)

logger = logging.getLogger(__name__)


def are_friends(user_id: UUID, other_id: UUID) -> bool:
    return Friendship.objects.filter(user_id=user_id, friend_id=other_id).exists()


@transaction.atomic
def send_friend_request(*, sender: User, email: str) -> FriendRequest:
    """
    Send a friend request to the user with ``email``.

    Args:
        sender: Requesting user
        email: Email of the user to befriend (case-insensitive)

    Returns:
        Created pending FriendRequest

    Raises:
        FriendUserNotFoundError: If no active user has that email
        SelfFriendRequestError: If sender targets themself
        AlreadyFriendsError: If both are already friends
        FriendRequestPendingError: If a pending request exists in either direction
    """
    email = (email or '').strip()
    try:
        receiver = User.objects.active().get(email__iexact=email)
    except User.DoesNotExist:
        raise FriendUserNotFoundError('User not found')

    if receiver.id == sender.id:
        raise SelfFriendRequestError('You cannot send a friend request to yourself')

    if are_friends(sender.id, receiver.id):
        raise AlreadyFriendsError('You are already friends')

    pending = (
        FriendRequest.objects
        .select_for_update()
        .filter(status=FriendRequestStatus.PENDING)
        .filter(
            Q(sender=sender, receiver=receiver) | Q(sender=receiver, receiver=sender)
        )
    )
    if pending.exists():
        raise FriendRequestPendingError('Friend request already pending')

    friend_request = FriendRequest.objects.create(sender=sender, receiver=receiver)

    queue_notifications([NotificationDraft(
        user_id=receiver.id,
        type=NotificationType.FRIEND_REQUEST,
        title='New friend request',
        message=f'{sender.get_display_name()} sent you a friend request',
        reference_id=friend_request.id,
    )])

    return friend_request


def _get_pending_for_receiver(receiver: User, request_id: UUID) -> FriendRequest:
    try:
        return (
            FriendRequest.objects
            .select_for_update()
            .select_related('sender')
            .get(id=request_id, receiver=receiver, status=FriendRequestStatus.PENDING)
        )
    except FriendRequest.DoesNotExist:
        raise FriendRequestNotFoundError('Friend request not found')


@transaction.atomic
def accept_friend_request(*, receiver: User, request_id: UUID) -> FriendRequest:
    """
    Accept a pending friend request addressed to ``receiver``.

    Raises:
        FriendRequestNotFoundError: If there is no such pending request
    """
    friend_request = _get_pending_for_receiver(receiver, request_id)

    friend_request.status = FriendRequestStatus.ACCEPTED
    friend_request.responded_at = timezone.now()
    friend_request.save(update_fields=['status', 'responded_at'])

    Friendship.objects.bulk_create(
        [
            Friendship(user_id=friend_request.sender_id, friend_id=receiver.id),
            Friendship(user_id=receiver.id, friend_id=friend_request.sender_id),
        ],
        ignore_conflicts=True,
    )

    queue_notifications([NotificationDraft(
        user_id=friend_request.sender_id,
        type=NotificationType.FRIEND_ACCEPTED,
        title='Friend request accepted',
        message=f'{receiver.get_display_name()} accepted your friend request',
        reference_id=friend_request.id,
    )])

    logger.info('Friend request %s accepted', friend_request.id)
    return friend_request


@transaction.atomic
def decline_friend_request(*, receiver: User, request_id: UUID) -> FriendRequest:
    """
    Raises:
        FriendRequestNotFoundError: If there is no such pending request
    """
    friend_request = _get_pending_for_receiver(receiver, request_id)

    friend_request.status = FriendRequestStatus.DECLINED
    friend_request.responded_at = timezone.now()
    friend_request.save(update_fields=['status', 'responded_at'])
    return friend_request


def remove_friend(*, user: User, friend_id: UUID) -> int:
    """Delete both directions of a friendship. Returns the number of rows removed."""
    deleted, _ = Friendship.objects.filter(
        Q(user=user, friend_id=friend_id) | Q(user_id=friend_id, friend=user)
    ).delete()
    return deleted


def get_friends(user: User) -> QuerySet[User]:
    """Active users befriended by ``user``, by name."""
    friend_ids = Friendship.objects.filter(user=user).values('friend_id')
    return User.objects.active().filter(id__in=friend_ids).order_by('name', 'email')


def get_pending_requests(user: User) -> QuerySet[FriendRequest]:
    """Pending requests addressed to ``user``, newest first."""
    return (
        FriendRequest.objects
        .filter(receiver=user, status=FriendRequestStatus.PENDING, sender__deleted_at__isnull=True)
        .select_related('sender')
        .order_by('-requested_at')
    )
