"""
Role management service.

Changes member roles and transfers ownership. Both memberships are locked
so a group never has zero or two owners.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from django.db import transaction

from apps.accounts.models import User
from apps.activity.models import ActivityEvent
from apps.activity.services import queue_activity
from apps.core.schema import require_capability
from apps.groups.models import GroupMembership, GroupRole

from .exceptions import (
    CannotChangeOwnerRoleError,
    CannotTargetSelfError,
    InsufficientPermissionsError,
    MemberNotFoundError,
    NotMemberError,
)
from .membership_context import resolve_membership
from .roles import parse_role


@dataclass(frozen=True)
class RoleChangeResult:
    user_id: UUID
    role: GroupRole
    previous_role: Optional[GroupRole]
    changed: bool
    ownership_transferred: bool = False
    message: str = 'Role updated'


@transaction.atomic
def change_member_role(
    *,
    group_id: UUID,
    requester: User,
    target_user_id: UUID,
    new_role
) -> RoleChangeResult:
    """
    Change a member's role (owner only).

    Promoting someone to owner transfers ownership: the requester becomes
    moderator in the same transaction. Setting a role the member already
    has is a no-op and records no activity.

    Args:
        group_id: UUID of the group
        requester: User performing the change (must be the owner)
        target_user_id: UUID of the member whose role changes
        new_role: Requested role, a GroupRole or its string value

    Returns:
        RoleChangeResult describing what happened

    Raises:
        InvalidRoleError: If new_role is not a known role
        NotMemberError: If requester is not a member
        InsufficientPermissionsError: If requester is not the owner
        CannotTargetSelfError: If the owner tries to demote themself
        MemberNotFoundError: If target is not a member
        CannotChangeOwnerRoleError: If target is the owner
        SchemaUnavailableError: If the database has no membership roles
    """
    new_role = parse_role(new_role)

    requester_membership = resolve_membership(group_id=group_id, user_id=requester.id, lock=True)
    if requester_membership is None:
        raise NotMemberError('Not a member of this group')
    if not requester_membership.is_owner:
        raise InsufficientPermissionsError('Requires owner role')

    require_capability('membership_roles', 'Role management')

    is_self = str(target_user_id) == str(requester.id)
    if is_self and new_role != GroupRole.OWNER:
        raise CannotTargetSelfError('Transfer ownership instead of demoting yourself')

    target_membership = resolve_membership(group_id=group_id, user_id=target_user_id, lock=True)
    if target_membership is None:
        raise MemberNotFoundError('Member not found')

    if new_role == GroupRole.OWNER:
        if target_membership.is_owner:
            return RoleChangeResult(
                user_id=target_membership.user_id,
                role=GroupRole.OWNER,
                previous_role=GroupRole.OWNER,
                changed=False,
                message='Ownership already held',
            )

        GroupMembership.objects.filter(
            id=requester_membership.membership_id
        ).update(role=GroupRole.MODERATOR)
        GroupMembership.objects.filter(
            id=target_membership.membership_id
        ).update(role=GroupRole.OWNER)

        queue_activity(
            group_id=group_id,
            actor_id=requester.id,
            target_user_id=target_membership.user_id,
            event_type=ActivityEvent.ROLE_CHANGED,
            metadata={
                'previousRole': target_membership.role.value,
                'newRole': GroupRole.OWNER.value,
                'ownershipTransferred': True,
            },
        )

        return RoleChangeResult(
            user_id=target_membership.user_id,
            role=GroupRole.OWNER,
            previous_role=target_membership.role,
            changed=True,
            ownership_transferred=True,
            message='Ownership transferred',
        )

    if target_membership.is_owner:
        raise CannotChangeOwnerRoleError("Cannot change the owner's role. Transfer ownership first.")

    if target_membership.role == new_role:
        return RoleChangeResult(
            user_id=target_membership.user_id,
            role=new_role,
            previous_role=new_role,
            changed=False,
            message='Role unchanged',
        )

    GroupMembership.objects.filter(id=target_membership.membership_id).update(role=new_role)

    queue_activity(
        group_id=group_id,
        actor_id=requester.id,
        target_user_id=target_membership.user_id,
        event_type=ActivityEvent.ROLE_CHANGED,
        metadata={
            'previousRole': target_membership.role.value,
            'newRole': new_role.value,
            'ownershipTransferred': False,
        },
    )

    return RoleChangeResult(
        user_id=target_membership.user_id,
        role=new_role,
        previous_role=target_membership.role,
        changed=True,
    )
