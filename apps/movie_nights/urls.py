from django.urls import path
from . import views

app_name = 'movie_nights'

movie_night_list = views.MovieNightViewSet.as_view({'get': 'list', 'post': 'create'})
movie_night_detail = views.MovieNightViewSet.as_view({'get': 'retrieve', 'patch': 'partial_update'})
movie_night_lock = views.MovieNightViewSet.as_view({'post': 'lock'})
movie_night_reminder = views.MovieNightViewSet.as_view({'post': 'send_reminder'})
movie_night_availability = views.MovieNightViewSet.as_view({'get': 'availability', 'put': 'availability'})
movie_night_calendar = views.MovieNightViewSet.as_view({'get': 'calendar'})

# Mounted at /api/groups/
urlpatterns = [
    path('<uuid:group_pk>/movie-nights/', movie_night_list, name='movie-night-list'),
    path('<uuid:group_pk>/movie-nights/<uuid:pk>/', movie_night_detail, name='movie-night-detail'),
    path('<uuid:group_pk>/movie-nights/<uuid:pk>/lock/', movie_night_lock, name='movie-night-lock'),
    path(
        '<uuid:group_pk>/movie-nights/<uuid:pk>/send-reminder/',
        movie_night_reminder,
        name='movie-night-send-reminder',
    ),
    path(
        '<uuid:group_pk>/movie-nights/<uuid:pk>/availability/',
        movie_night_availability,
        name='movie-night-availability',
    ),
    path(
        '<uuid:group_pk>/movie-nights/<uuid:pk>/calendar.ics',
        movie_night_calendar,
        name='movie-night-calendar',
    ),
]
