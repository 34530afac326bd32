from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView
from . import views

app_name = 'users'

urlpatterns = [
    # Authentication
    path('register/', views.register, name='register'),
    path('login/', views.login, name='login'),
    path('token/refresh/', TokenRefreshView.as_view(), name='token-refresh'),

    # User profile
    path('user/', views.get_current_user, name='current-user'),
    path('user/preferences/', views.update_preferences, name='update-preferences'),
    path('user/delete/', views.delete_account, name='delete-account'),
]
