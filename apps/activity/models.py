from django.db import models
import uuid


class ActivityEvent(models.TextChoices):
    GROUP_CREATED = 'group_created', 'Group created'
    MEMBER_ADDED = 'member_added', 'Member added'
    MEMBER_REMOVED = 'member_removed', 'Member removed'
    ROLE_CHANGED = 'role_changed', 'Role changed'
    MOVIE_NIGHT_CREATED = 'movie_night_created', 'Movie night created'
    MOVIE_NIGHT_UPDATED = 'movie_night_updated', 'Movie night updated'
    MOVIE_NIGHT_LOCKED = 'movie_night_locked', 'Movie night locked'
    MOVIE_NIGHT_UNLOCKED = 'movie_night_unlocked', 'Movie night unlocked'
    RSVP_REMINDER_SENT = 'rsvp_reminder_sent', 'RSVP reminder sent'
    AVAILABILITY_UPDATED = 'availability_updated', 'Availability updated'
    WATCHLIST_ADDED = 'watchlist_added', 'Watchlist movie added'
    WATCHLIST_REMOVED = 'watchlist_removed', 'Watchlist movie removed'
    VOTE_CAST = 'vote_cast', 'Vote cast'


class GroupActivity(models.Model):
    """Append-only audit record of a state-changing action in a group."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    group = models.ForeignKey('groups.Group', on_delete=models.CASCADE, related_name='activity_events')
    actor = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='group_activity',
    )
    target_user = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='targeted_group_activity',
    )
    event_type = models.CharField(max_length=40, choices=ActivityEvent.choices)
    reference_id = models.UUIDField(null=True, blank=True)
    metadata_json = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'group_activity'
        indexes = [
            models.Index(fields=['group', 'created_at']),
            models.Index(fields=['group', 'event_type', 'created_at']),
            models.Index(fields=['group', 'actor', 'created_at']),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.event_type} in {self.group_id}"
