"""
Group management service.

Handles group creation, listing and soft deletion.
"""

from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Count, OuterRef, Q, QuerySet, Subquery
from django.utils import timezone

from apps.accounts.models import User
from apps.activity.models import ActivityEvent
from apps.activity.services import queue_activity
from apps.core.schema import get_schema_capabilities, require_capability
from apps.groups.models import Group, GroupMembership, GroupRole

from .exceptions import (
    GroupNotFoundError,
    InsufficientPermissionsError,
    InvalidGroupNameError,
    NotMemberError,
)
from .membership_context import MembershipContext, resolve_membership
from .roles import normalize_role


MAX_GROUP_NAME_LENGTH = 200


def _annotate_groups(queryset: QuerySet[Group]) -> QuerySet[Group]:
    return queryset.annotate(
        member_count=Count(
            'memberships',
            filter=Q(memberships__user__deleted_at__isnull=True),
            distinct=True,
        )
    )


@transaction.atomic
def create_group(*, name: str, creator: User) -> Group:
    """
    Create a new group with the creator as owner.

    Args:
        name: Group name
        creator: User creating the group

    Returns:
        Created Group instance with ``user_role`` set to owner

    Raises:
        InvalidGroupNameError: If the name is blank or too long
        SchemaUnavailableError: If the database has no membership roles
    """
    name = (name or '').strip()
    if not name:
        raise InvalidGroupNameError('Group name is required.')
    if len(name) > MAX_GROUP_NAME_LENGTH:
        raise InvalidGroupNameError(
            f'Group name must be at most {MAX_GROUP_NAME_LENGTH} characters.'
        )

    require_capability('membership_roles', 'Group creation')

    group = Group.objects.create(name=name, created_by=creator)
    GroupMembership.objects.create(user=creator, group=group, role=GroupRole.OWNER)

    queue_activity(
        group_id=group.id,
        actor_id=creator.id,
        event_type=ActivityEvent.GROUP_CREATED,
        metadata={'name': group.name},
    )

    group.user_role = GroupRole.OWNER
    group.member_count = 1
    return group


def get_user_groups(user: User) -> QuerySet[Group]:
    """
    Get the non-deleted groups a user belongs to, newest first.

    Each group carries ``member_count`` and, when the database stores
    roles, the user's ``membership_role``.
    """
    memberships = GroupMembership.objects.filter(user=user)
    queryset = _annotate_groups(
        Group.objects.filter(
            id__in=memberships.values('group_id'),
            deleted_at__isnull=True,
        )
    )
    if get_schema_capabilities().membership_roles:
        queryset = queryset.annotate(
            membership_role=Subquery(
                memberships.filter(group_id=OuterRef('pk')).values('role')[:1]
            )
        )
    return queryset.select_related('created_by').order_by('-created_at')


def effective_role_for(group: Group, user: User) -> GroupRole:
    """Role of ``user`` in a group loaded by get_user_groups."""
    return normalize_role(
        getattr(group, 'membership_role', None),
        is_creator=group.created_by_id == user.id,
    )


def get_group_for_member(*, group_id: UUID, membership: Optional[MembershipContext]) -> Group:
    """
    Get a group for one of its members, with ``user_role`` and ``member_count``.

    Raises:
        NotMemberError: If membership is None
        GroupNotFoundError: If the group was deleted in the meantime
    """
    if membership is None:
        raise NotMemberError('Not a member of this group')

    try:
        group = _annotate_groups(
            Group.objects.filter(id=group_id, deleted_at__isnull=True)
        ).select_related('created_by').get()
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    group.user_role = membership.role
    return group


@transaction.atomic
def delete_group(*, group_id: UUID, requester: User) -> None:
    """
    Soft delete a group (owner only).

    Only a not-yet-deleted row is touched, so deleting twice reports
    not found the second time.

    Args:
        group_id: UUID of the group
        requester: User requesting deletion

    Raises:
        GroupNotFoundError: If the group doesn't exist or is already deleted
        InsufficientPermissionsError: If requester is not the owner
    """
    membership = resolve_membership(group_id=group_id, user_id=requester.id, lock=True)
    if membership is None:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    if not membership.is_owner:
        raise InsufficientPermissionsError('Only the group owner can delete the group')

    updated = (
        Group.objects
        .filter(id=group_id, deleted_at__isnull=True)
        .update(deleted_at=timezone.now())
    )
    if updated == 0:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")
