from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'groups'

# Router for ViewSets
router = DefaultRouter(trailing_slash=True)
router.include_root_view = False
router.register(r'', views.GroupViewSet, basename='group')

urlpatterns = [
    # Group ViewSet routes
    # GET    /api/groups/                                 - List user's groups
    # POST   /api/groups/                                 - Create group
    # GET    /api/groups/{id}/                            - Get group details
    # DELETE /api/groups/{id}/                            - Delete group (owner)

    # Membership actions
    # GET    /api/groups/{id}/members/                    - List members
    # POST   /api/groups/{id}/members/                    - Add member by email (moderator+)
    # DELETE /api/groups/{id}/members/{user_id}/          - Remove member (moderator+)
    # PATCH  /api/groups/{id}/members/{user_id}/role/     - Change role (owner)
    # POST   /api/groups/{id}/leave/                      - Leave group

    # Include router URLs
    path('', include(router.urls)),
]
