from django.db import models
import uuid


class NotificationType(models.TextChoices):
    GROUP_INVITE = 'group_invite', 'Added to group'
    MOVIE_NIGHT = 'movie_night', 'Movie night'
    RSVP_REMINDER = 'rsvp_reminder', 'RSVP reminder'
    VOTE_REMINDER = 'vote_reminder', 'Vote reminder'
    FRIEND_REQUEST = 'friend_request', 'Friend request'
    FRIEND_ACCEPTED = 'friend_accepted', 'Friend request accepted'
    WATCHLIST_ADD = 'watchlist_add', 'Watchlist addition'


class NotificationPreference(models.TextChoices):
    """User columns that opt in or out of a notification category."""
    EMAIL = 'email_notifications', 'Email'
    GROUP = 'group_notifications', 'Group'
    VOTE = 'vote_notifications', 'Vote'


class Notification(models.Model):
    """In-app notification for one user. Only the read flag ever changes."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='notifications')
    type = models.CharField(max_length=30, choices=NotificationType.choices)
    title = models.CharField(max_length=200)
    message = models.TextField()
    reference_id = models.UUIDField(null=True, blank=True)
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'notifications'
        indexes = [
            models.Index(fields=['user', 'is_read', 'created_at']),
            models.Index(fields=['user', 'type', 'reference_id', 'created_at']),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.type} for {self.user_id}: {self.title}"
