from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
import uuid


VOTE_MIN = 1
VOTE_MAX = 5


class Movie(models.Model):
    """Catalog movie, filled from TMDB or by staff."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    tmdb_id = models.PositiveIntegerField(null=True, blank=True, unique=True)
    title = models.CharField(max_length=255, db_index=True)
    overview = models.TextField(blank=True)
    poster_url = models.URLField(max_length=500, blank=True)
    release_year = models.PositiveSmallIntegerField(null=True, blank=True)
    rating = models.DecimalField(
        max_digits=3,
        decimal_places=1,
        null=True,
        blank=True,
        validators=[MinValueValidator(0), MaxValueValidator(10)],
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'movies'
        indexes = [
            models.Index(fields=['rating']),
        ]
        ordering = ['title']

    def __str__(self):
        if self.release_year:
            return f"{self.title} ({self.release_year})"
        return self.title


class GroupWatchlistEntry(models.Model):
    """A movie on a group's shared watchlist."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    group = models.ForeignKey('groups.Group', on_delete=models.CASCADE, related_name='watchlist')
    movie = models.ForeignKey(Movie, on_delete=models.CASCADE, related_name='watchlist_entries')
    added_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        related_name='watchlist_additions',
    )
    added_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'group_watchlist'
        unique_together = [['group', 'movie']]
        ordering = ['-added_at']

    def __str__(self):
        return f"{self.movie.title} in {self.group.name}"


class MovieVote(models.Model):
    """One user's 1-5 vote on a watchlist movie; re-voting replaces it."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='movie_votes')
    group = models.ForeignKey('groups.Group', on_delete=models.CASCADE, related_name='movie_votes')
    movie = models.ForeignKey(Movie, on_delete=models.CASCADE, related_name='votes')
    vote_value = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(VOTE_MIN), MaxValueValidator(VOTE_MAX)]
    )
    voted_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'movie_votes'
        unique_together = [['user', 'group', 'movie']]
        indexes = [
            models.Index(fields=['group', 'movie']),
        ]
        ordering = ['-voted_at']

    def __str__(self):
        return f"{self.user_id} voted {self.vote_value} on {self.movie_id}"
