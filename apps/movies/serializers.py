from rest_framework import serializers

from apps.accounts.serializers import UserMinimalSerializer

from .models import GroupWatchlistEntry, Movie, MovieVote, VOTE_MAX, VOTE_MIN


class MovieSerializer(serializers.ModelSerializer):

    class Meta:
        model = Movie
        fields = [
            'id',
            'tmdb_id',
            'title',
            'overview',
            'poster_url',
            'release_year',
            'rating',
        ]
        read_only_fields = fields


class WatchlistEntrySerializer(serializers.ModelSerializer):
    """Watchlist entry with the group's vote summary."""

    movie = MovieSerializer(read_only=True)
    added_by = UserMinimalSerializer(read_only=True)
    vote_count = serializers.IntegerField(read_only=True, default=0)
    average_vote = serializers.FloatField(read_only=True, allow_null=True, default=None)

    class Meta:
        model = GroupWatchlistEntry
        fields = ['id', 'movie', 'added_by', 'added_at', 'vote_count', 'average_vote']
        read_only_fields = fields


class AddToWatchlistSerializer(serializers.Serializer):
    movie_id = serializers.UUIDField()


class MovieVoteSerializer(serializers.ModelSerializer):
    user = UserMinimalSerializer(read_only=True)

    class Meta:
        model = MovieVote
        fields = ['id', 'user', 'movie', 'vote_value', 'voted_at']
        read_only_fields = fields


class CastVoteSerializer(serializers.Serializer):
    movie_id = serializers.UUIDField()
    vote_value = serializers.IntegerField(min_value=VOTE_MIN, max_value=VOTE_MAX)
