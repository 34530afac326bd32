from django.urls import path
from . import views

app_name = 'movies'

# Mounted at /api/movies/
urlpatterns = [
    path('featured/', views.featured_movies, name='featured'),
    path('hero/', views.hero_movie, name='hero'),
    path('<uuid:movie_id>/', views.movie_detail, name='movie-detail'),
]

# Mounted at /api/groups/
group_urlpatterns = [
    path('<uuid:group_pk>/watchlist/', views.group_watchlist, name='group-watchlist'),
    path('<uuid:group_pk>/watchlist/<uuid:movie_id>/', views.watchlist_entry, name='watchlist-entry'),
    path('<uuid:group_pk>/votes/', views.vote, name='group-vote'),
    path('<uuid:group_pk>/movies/<uuid:movie_id>/votes/', views.movie_votes, name='movie-votes'),
]
