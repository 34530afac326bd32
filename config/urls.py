"""
URL configuration for the Movie Night Planner API.

Group-scoped routes from several apps share the ``api/groups/`` prefix;
each app owns the paths below ``<group_pk>/`` that it serves.
"""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from apps.movies.urls import group_urlpatterns as movie_group_urlpatterns
from config.views import health_check

urlpatterns = [
    # Health check (for Render)
    path('api/health/', health_check, name='health-check'),

    # Admin
    path('admin/', admin.site.urls),

    # API Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='api-schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='api-schema'), name='api-docs'),

    # Authentication
    path('api/auth/', include('apps.accounts.urls')),

    # Group-scoped endpoints
    path('api/groups/', include('apps.activity.urls')),
    path('api/groups/', include('apps.movie_nights.urls')),
    path('api/groups/', include((movie_group_urlpatterns, 'watchlist'))),
    path('api/groups/', include('apps.groups.urls')),

    # API endpoints
    path('api/movies/', include('apps.movies.urls')),
    path('api/notifications/', include('apps.notifications.urls')),
    path('api/friends/', include('apps.friends.urls')),
]


# Custom error handlers
handler404 = 'config.views.error_404'
handler500 = 'config.views.error_500'
