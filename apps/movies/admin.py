from django.contrib import admin
from .models import Movie, GroupWatchlistEntry, MovieVote


@admin.register(Movie)
class MovieAdmin(admin.ModelAdmin):
    list_display = ['title', 'release_year', 'rating', 'tmdb_id', 'created_at']
    list_filter = ['release_year']
    search_fields = ['title', 'tmdb_id']
    ordering = ['title']


@admin.register(GroupWatchlistEntry)
class GroupWatchlistEntryAdmin(admin.ModelAdmin):
    list_display = ['movie', 'group', 'added_by', 'added_at']
    search_fields = ['movie__title', 'group__name']
    date_hierarchy = 'added_at'

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('movie', 'group', 'added_by')


@admin.register(MovieVote)
class MovieVoteAdmin(admin.ModelAdmin):
    list_display = ['movie', 'group', 'user', 'vote_value', 'voted_at']
    list_filter = ['vote_value']
    search_fields = ['movie__title', 'group__name', 'user__email']
