from django.urls import path
from . import views

app_name = 'friends'

urlpatterns = [
    path('', views.friend_list, name='friend-list'),
    path('requests/', views.pending_requests, name='pending-requests'),
    path('request/', views.send_request, name='send-request'),
    path('accept/', views.accept_request, name='accept-request'),
    path('decline/', views.decline_request, name='decline-request'),
    path('<uuid:friend_id>/', views.unfriend, name='unfriend'),
]
