from uuid import uuid4

import pytest

from apps.friends.models import FriendRequestStatus, Friendship
from apps.friends.services import (
    AlreadyFriendsError,
    FriendRequestNotFoundError,
    FriendRequestPendingError,
    FriendUserNotFoundError,
    SelfFriendRequestError,
    accept_friend_request,
    are_friends,
    decline_friend_request,
    get_friends,
    get_pending_requests,
    remove_friend,
    send_friend_request,
)
from apps.notifications.models import Notification, NotificationType


@pytest.mark.django_db
class TestSendFriendRequest:

    def test_send(self, alice, bob, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            friend_request = send_friend_request(sender=alice, email='BOB@example.com')

        assert friend_request.receiver == bob
        assert friend_request.status == FriendRequestStatus.PENDING
        assert Notification.objects.get(user=bob).type == NotificationType.FRIEND_REQUEST

    def test_unknown_email(self, alice):
        with pytest.raises(FriendUserNotFoundError):
            send_friend_request(sender=alice, email='nobody@example.com')

    def test_deleted_user_not_found(self, alice, bob):
        bob.soft_delete()
        with pytest.raises(FriendUserNotFoundError):
            send_friend_request(sender=alice, email='bob@example.com')

    def test_self(self, alice):
        with pytest.raises(SelfFriendRequestError):
            send_friend_request(sender=alice, email='alice@example.com')

    def test_pending_in_either_direction(self, alice, bob):
        send_friend_request(sender=alice, email='bob@example.com')

        with pytest.raises(FriendRequestPendingError):
            send_friend_request(sender=alice, email='bob@example.com')
        with pytest.raises(FriendRequestPendingError):
            send_friend_request(sender=bob, email='alice@example.com')

    def test_already_friends(self, alice, bob):
        friend_request = send_friend_request(sender=alice, email='bob@example.com')
        accept_friend_request(receiver=bob, request_id=friend_request.id)

        with pytest.raises(AlreadyFriendsError):
            send_friend_request(sender=bob, email='alice@example.com')


@pytest.mark.django_db
class TestRespond:

    def test_accept_creates_both_directions(self, alice, bob, django_capture_on_commit_callbacks):
        friend_request = send_friend_request(sender=alice, email='bob@example.com')

        with django_capture_on_commit_callbacks(execute=True):
            accepted = accept_friend_request(receiver=bob, request_id=friend_request.id)

        assert accepted.status == FriendRequestStatus.ACCEPTED
        assert accepted.responded_at is not None
        assert are_friends(alice.id, bob.id)
        assert are_friends(bob.id, alice.id)
        assert Notification.objects.filter(user=alice, type=NotificationType.FRIEND_ACCEPTED).exists()

    def test_accept_keeps_existing_rows(self, alice, bob):
        Friendship.objects.create(user=alice, friend=bob)
        friend_request = send_friend_request(sender=bob, email='alice@example.com')

        accept_friend_request(receiver=alice, request_id=friend_request.id)

        assert Friendship.objects.count() == 2

    def test_sender_cannot_accept(self, alice, bob):
        friend_request = send_friend_request(sender=alice, email='bob@example.com')

        with pytest.raises(FriendRequestNotFoundError):
            accept_friend_request(receiver=alice, request_id=friend_request.id)

    def test_decline(self, alice, bob):
        friend_request = send_friend_request(sender=alice, email='bob@example.com')

        declined = decline_friend_request(receiver=bob, request_id=friend_request.id)

        assert declined.status == FriendRequestStatus.DECLINED
        assert not are_friends(alice.id, bob.id)
        with pytest.raises(FriendRequestNotFoundError):
            accept_friend_request(receiver=bob, request_id=friend_request.id)

    def test_unknown_request(self, bob):
        with pytest.raises(FriendRequestNotFoundError):
            decline_friend_request(receiver=bob, request_id=uuid4())


@pytest.mark.django_db
class TestFriendLists:

    def test_friends_and_pending(self, alice, bob):
        friend_request = send_friend_request(sender=alice, email='bob@example.com')
        assert list(get_pending_requests(bob)) == [friend_request]

        accept_friend_request(receiver=bob, request_id=friend_request.id)

        assert list(get_pending_requests(bob)) == []
        assert list(get_friends(alice)) == [bob]
        assert list(get_friends(bob)) == [alice]

    def test_remove_both_directions(self, alice, bob):
        Friendship.objects.create(user=alice, friend=bob)
        Friendship.objects.create(user=bob, friend=alice)

        assert remove_friend(user=bob, friend_id=alice.id) == 2
        assert not Friendship.objects.exists()
