from django.db import models
import uuid


class MovieNightStatus(models.TextChoices):
    PLANNED = 'planned', 'Planned'
    COMPLETED = 'completed', 'Completed'
    CANCELLED = 'cancelled', 'Cancelled'


# Fields added together with RSVP reminders; older databases lack them.
RSVP_FIELDS = ('rsvp_deadline', 'reminder_minutes_before', 'reminder_sent_at')


class MovieNight(models.Model):
    """
    A scheduled get-together of a group.

    Status only moves forward: planned -> completed or planned -> cancelled.
    If ``rsvp_deadline`` is set it lies before ``scheduled_date``; the
    optional reminder fires ``reminder_minutes_before`` the deadline.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    group = models.ForeignKey('groups.Group', on_delete=models.CASCADE, related_name='movie_nights')
    scheduled_date = models.DateTimeField()
    chosen_movie = models.ForeignKey(
        'movies.Movie',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='movie_nights',
    )
    status = models.CharField(
        max_length=20,
        choices=MovieNightStatus.choices,
        default=MovieNightStatus.PLANNED,
    )
    is_locked = models.BooleanField(default=False)

    # RSVP reminders
    rsvp_deadline = models.DateTimeField(null=True, blank=True)
    reminder_minutes_before = models.PositiveIntegerField(null=True, blank=True)
    reminder_sent_at = models.DateTimeField(null=True, blank=True)

    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        related_name='created_movie_nights',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'movie_nights'
        indexes = [
            models.Index(fields=['group', 'scheduled_date']),
            models.Index(fields=['status', 'reminder_sent_at']),
        ]
        ordering = ['-scheduled_date']

    def __str__(self):
        return f"Movie night {self.scheduled_date:%Y-%m-%d %H:%M} ({self.status})"

    @property
    def is_planned(self):
        return self.status == MovieNightStatus.PLANNED


class MovieNightAvailability(models.Model):
    """A member's RSVP for a movie night. Latest answer wins."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    movie_night = models.ForeignKey(MovieNight, on_delete=models.CASCADE, related_name='availability')
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='movie_night_availability')
    is_available = models.BooleanField()
    responded_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'movie_night_availability'
        unique_together = [['movie_night', 'user']]
        ordering = ['-responded_at']

    def __str__(self):
        answer = 'yes' if self.is_available else 'no'
        return f"{self.user_id} -> {self.movie_night_id}: {answer}"
