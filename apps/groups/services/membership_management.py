"""
Membership management service.

Adds and removes members with row locks so permission checks and the
mutation see the same state.
"""

from functools import partial
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.activity.models import ActivityEvent
from apps.activity.services import queue_activity
from apps.core.schema import get_schema_capabilities, require_capability
from apps.groups.models import Group, GroupMembership, GroupRole
from apps.notifications.models import NotificationPreference, NotificationType
from apps.notifications.services import insert_notification_for_user_if_preferred

from .exceptions import (
    AlreadyMemberError,
    CannotRemoveOwnerError,
    CannotTargetSelfError,
    GroupNotFoundError,
    InsufficientPermissionsError,
    MemberNotFoundError,
    NotMemberError,
    OwnerCannotLeaveError,
    UserNotFoundError,
)
from .membership_context import MembershipContext, resolve_membership
from .roles import normalize_role


def _require_requester(group_id: UUID, user_id: UUID, lock: bool = True) -> MembershipContext:
    membership = resolve_membership(group_id=group_id, user_id=user_id, lock=lock)
    if membership is None:
        raise NotMemberError('Not a member of this group')
    return membership


@transaction.atomic
def add_member(*, group_id: UUID, requester: User, email: str) -> GroupMembership:
    """
    Add a user to a group by email.

    Concurrent identical requests produce one membership; the loser gets
    AlreadyMemberError.

    Args:
        group_id: UUID of the group
        requester: User adding the member (moderator or owner)
        email: Email of the user to add

    Returns:
        Created GroupMembership instance

    Raises:
        NotMemberError: If requester is not a member
        InsufficientPermissionsError: If requester is below moderator
        UserNotFoundError: If no active user has that email
        AlreadyMemberError: If the user is already a member
        SchemaUnavailableError: If the database has no membership roles
    """
    requester_membership = _require_requester(group_id, requester.id, lock=False)
    if not requester_membership.has_role(GroupRole.MODERATOR):
        raise InsufficientPermissionsError('Requires moderator role or higher')

    require_capability('membership_roles', 'Adding members')

    email = User.objects.normalize_email((email or '').strip())
    try:
        target = User.objects.active().get(email__iexact=email)
    except User.DoesNotExist:
        raise UserNotFoundError('User not found')

    candidate = GroupMembership(group_id=group_id, user=target, role=GroupRole.MEMBER)
    GroupMembership.objects.bulk_create([candidate], ignore_conflicts=True)

    # The unique (user, group) pair keeps the first writer's row
    membership = GroupMembership.objects.select_related('user', 'group').get(group_id=group_id, user=target)
    if membership.id != candidate.id:
        raise AlreadyMemberError('User is already a member')

    queue_activity(
        group_id=group_id,
        actor_id=requester.id,
        target_user_id=target.id,
        event_type=ActivityEvent.MEMBER_ADDED,
        metadata={'role': GroupRole.MEMBER.value},
    )
    transaction.on_commit(
        partial(
            insert_notification_for_user_if_preferred,
            user_id=target.id,
            type=NotificationType.GROUP_INVITE,
            title='Added to a group',
            message=f'{requester.get_display_name()} added you to {requester_membership.group_name}',
            reference_id=group_id,
            preference=NotificationPreference.GROUP,
        ),
        robust=True,
    )

    return membership


@transaction.atomic
def remove_member(*, group_id: UUID, requester: User, target_user_id: UUID) -> None:
    """
    Remove a member from a group.

    Owners may remove anyone but themselves; moderators may only remove
    plain members. The owner can never be removed.

    Args:
        group_id: UUID of the group
        requester: User performing the removal
        target_user_id: UUID of the member to remove

    Raises:
        NotMemberError: If requester is not a member
        InsufficientPermissionsError: If requester's role does not allow it
        CannotTargetSelfError: If requester targets themself
        MemberNotFoundError: If target is not a member
        CannotRemoveOwnerError: If target is the owner
    """
    requester_membership = _require_requester(group_id, requester.id)
    if not requester_membership.has_role(GroupRole.MODERATOR):
        raise InsufficientPermissionsError('Requires moderator role or higher')

    if str(target_user_id) == str(requester.id):
        raise CannotTargetSelfError('Use leave to remove yourself from a group')

    target_membership = resolve_membership(group_id=group_id, user_id=target_user_id, lock=True)
    if target_membership is None:
        raise MemberNotFoundError('Member not found')

    if target_membership.is_owner:
        raise CannotRemoveOwnerError('Cannot remove the group owner')

    if not requester_membership.is_owner and target_membership.role != GroupRole.MEMBER:
        raise InsufficientPermissionsError('Moderators can only remove members')

    GroupMembership.objects.filter(id=target_membership.membership_id).delete()

    queue_activity(
        group_id=group_id,
        actor_id=requester.id,
        target_user_id=target_membership.user_id,
        event_type=ActivityEvent.MEMBER_REMOVED,
        metadata={
            'actorRole': requester_membership.role.value,
            'targetRole': target_membership.role.value,
        },
    )


@transaction.atomic
def leave_group(*, group_id: UUID, user: User) -> None:
    """
    Leave a group.

    The owner cannot leave; ownership must be transferred first.

    Raises:
        NotMemberError: If user is not a member
        OwnerCannotLeaveError: If user is the owner
    """
    membership = _require_requester(group_id, user.id)

    if membership.is_owner:
        raise OwnerCannotLeaveError(
            'Group owner cannot leave. Transfer ownership or delete the group.'
        )

    GroupMembership.objects.filter(id=membership.membership_id).delete()

    queue_activity(
        group_id=group_id,
        actor_id=user.id,
        target_user_id=user.id,
        event_type=ActivityEvent.MEMBER_REMOVED,
        metadata={'left': True, 'targetRole': membership.role.value},
    )


def get_group_members(*, group_id: UUID) -> QuerySet[GroupMembership]:
    """
    Get the active members of a group, oldest membership first.

    On a database without the role column the role field is deferred;
    use get_member_role to read the effective role.

    Raises:
        GroupNotFoundError: If the group doesn't exist or is deleted
    """
    if not Group.objects.filter(id=group_id, deleted_at__isnull=True).exists():
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    queryset = (
        GroupMembership.objects
        .filter(group_id=group_id, user__deleted_at__isnull=True)
        .select_related('user', 'group')
        .order_by('joined_at')
    )
    if not get_schema_capabilities().membership_roles:
        queryset = queryset.defer('role')
    return queryset


def get_member_role(membership: GroupMembership) -> GroupRole:
    """Effective role of a loaded membership row, applying the creator fallback."""
    stored = membership.role if get_schema_capabilities().membership_roles else None
    is_creator = membership.group.created_by_id == membership.user_id
    return normalize_role(stored, is_creator=is_creator)
