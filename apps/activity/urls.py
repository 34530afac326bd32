from django.urls import path
from . import views

app_name = 'activity'

urlpatterns = [
    # GET /api/groups/{group_id}/activity/?event_type=&actor_id=&page=&limit=
    path('<uuid:group_pk>/activity/', views.group_activity, name='group-activity'),
]
