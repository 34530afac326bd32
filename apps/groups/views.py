from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema

from apps.core.pagination import StandardPagination
from apps.core.responses import api_response

from .models import GroupRole
from .permissions import require_membership, require_role
from .serializers import (
    GroupSerializer,
    GroupCreateSerializer,
    GroupMemberSerializer,
    AddMemberSerializer,
    ChangeRoleSerializer,
    RoleChangeResultSerializer,
)
from .services import (
    create_group,
    get_user_groups,
    get_group_for_member,
    delete_group,
    add_member,
    remove_member,
    leave_group,
    get_group_members,
    change_member_role,
)


UUID_REGEX = r'[0-9a-fA-F-]{32,36}'


class GroupViewSet(viewsets.ViewSet):
    """
    ViewSet for groups and their memberships.

    All business logic is handled by services.
    Views are thin HTTP handlers only; guards resolve the caller's
    membership before any detail action runs.

    list: Get the caller's groups
    create: Create a new group
    retrieve: Get a specific group
    destroy: Soft delete a group (owner only)
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = UUID_REGEX

    def get_permissions(self):
        """Set permissions based on action."""
        if self.action in ('list', 'create'):
            return [IsAuthenticated()]
        if self.action == 'members' and self.request.method == 'POST':
            return [IsAuthenticated(), require_role(GroupRole.MODERATOR)()]
        if self.action == 'remove_member':
            return [IsAuthenticated(), require_role(GroupRole.MODERATOR)()]
        if self.action in ('destroy', 'change_role'):
            return [IsAuthenticated(), require_role(GroupRole.OWNER)()]
        return [IsAuthenticated(), require_membership()()]

    @extend_schema(responses={200: GroupSerializer(many=True)}, tags=['groups'])
    def list(self, request):
        """Get all groups where the user is a member."""
        groups = get_user_groups(request.user)

        paginator = StandardPagination()
        page = paginator.paginate_queryset(groups, request)
        serializer = GroupSerializer(page, many=True, context={'request': request})
        return paginator.get_paginated_response(serializer.data)

    @extend_schema(request=GroupCreateSerializer, responses={201: GroupSerializer}, tags=['groups'])
    def create(self, request):
        """Create a new group owned by the caller."""
        serializer = GroupCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        group = create_group(name=serializer.validated_data['name'], creator=request.user)

        return api_response(
            GroupSerializer(group, context={'request': request}).data,
            message='Group created',
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(responses={200: GroupSerializer}, tags=['groups'])
    def retrieve(self, request, pk=None):
        group = get_group_for_member(group_id=pk, membership=request.membership)
        serializer = GroupSerializer(group, context={'request': request})
        return api_response(serializer.data)

    @extend_schema(tags=['groups'])
    def destroy(self, request, pk=None):
        """Soft delete a group."""
        delete_group(group_id=pk, requester=request.user)
        return api_response(message='Group deleted')

    @extend_schema(
        methods=['GET'],
        responses={200: GroupMemberSerializer(many=True)},
        tags=['groups'],
    )
    @extend_schema(
        methods=['POST'],
        request=AddMemberSerializer,
        responses={201: GroupMemberSerializer},
        tags=['groups'],
    )
    @action(detail=True, methods=['get', 'post'])
    def members(self, request, pk=None):
        """List members, or add a member by email (moderator+)."""
        if request.method == 'GET':
            memberships = get_group_members(group_id=pk)
            serializer = GroupMemberSerializer(memberships, many=True)
            return api_response(serializer.data)

        serializer = AddMemberSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        membership = add_member(
            group_id=pk,
            requester=request.user,
            email=serializer.validated_data['email'],
        )

        return api_response(
            GroupMemberSerializer(membership).data,
            message='Member added',
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(tags=['groups'])
    @action(
        detail=True,
        methods=['delete'],
        url_path=rf'members/(?P<user_id>{UUID_REGEX})',
        url_name='remove-member',
    )
    def remove_member(self, request, pk=None, user_id=None):
        """Remove a member (moderator+)."""
        remove_member(group_id=pk, requester=request.user, target_user_id=user_id)
        return api_response(message='Member removed')

    @extend_schema(
        request=ChangeRoleSerializer,
        responses={200: RoleChangeResultSerializer},
        tags=['groups'],
    )
    @action(
        detail=True,
        methods=['put', 'patch'],
        url_path=rf'members/(?P<user_id>{UUID_REGEX})/role',
        url_name='change-role',
    )
    def change_role(self, request, pk=None, user_id=None):
        """Change a member's role or transfer ownership (owner only)."""
        serializer = ChangeRoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = change_member_role(
            group_id=pk,
            requester=request.user,
            target_user_id=user_id,
            new_role=serializer.validated_data['role'],
        )

        return api_response(
            RoleChangeResultSerializer(result).data,
            message=result.message,
        )

    @extend_schema(request=None, tags=['groups'])
    @action(detail=True, methods=['post'])
    def leave(self, request, pk=None):
        """Leave a group."""
        leave_group(group_id=pk, user=request.user)
        return api_response(message='Successfully left the group')
