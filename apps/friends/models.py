from django.db import models
import uuid


class FriendRequestStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    ACCEPTED = 'accepted', 'Accepted'
    DECLINED = 'declined', 'Declined'


class FriendRequest(models.Model):
    """Friend request between two users; only pending requests can be answered."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    sender = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='sent_friend_requests')
    receiver = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='received_friend_requests')
    status = models.CharField(
        max_length=10,
        choices=FriendRequestStatus.choices,
        default=FriendRequestStatus.PENDING,
    )
    requested_at = models.DateTimeField(auto_now_add=True)
    responded_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'friend_requests'
        indexes = [
            models.Index(fields=['receiver', 'status']),
        ]
        ordering = ['-requested_at']

    def __str__(self):
        return f"{self.sender_id} -> {self.receiver_id} ({self.status})"


class Friendship(models.Model):
    """
    One direction of a friendship.

    Every friendship is stored as two rows, (a, b) and (b, a), so listing a
    user's friends is a single lookup on ``user``.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='friendships')
    friend = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='+')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'friendships'
        unique_together = [['user', 'friend']]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.user_id} <-> {self.friend_id}"
