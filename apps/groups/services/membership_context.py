"""
Membership context resolver.

Looks up a user's membership in a non-deleted group together with the
effective role. Works on databases without the membership role column by
falling back to the creator-is-owner rule.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from apps.core.schema import get_schema_capabilities
from apps.groups.models import GroupMembership, GroupRole

from .roles import has_minimum_role, normalize_role


REQUEST_CACHE_ATTR = '_membership_cache'


@dataclass(frozen=True)
class MembershipContext:
    membership_id: UUID
    group_id: UUID
    user_id: UUID
    role: GroupRole
    group_name: str
    group_created_by_id: Optional[UUID]
    joined_at: datetime

    @property
    def is_owner(self) -> bool:
        return self.role == GroupRole.OWNER

    def has_role(self, minimum_role: GroupRole) -> bool:
        return has_minimum_role(self.role, minimum_role)


def resolve_membership(
    *,
    group_id: UUID,
    user_id: UUID,
    lock: bool = False
) -> Optional[MembershipContext]:
    """
    Resolve a user's membership in a group.

    Args:
        group_id: UUID of the group
        user_id: UUID of the user
        lock: Take a row lock on the membership (use inside transaction.atomic)

    Returns:
        MembershipContext, or None when the user is not a member or the
        group is deleted
    """
    fields = ['id', 'group_id', 'user_id', 'joined_at', 'group__name', 'group__created_by_id']
    has_role_column = get_schema_capabilities().membership_roles
    if has_role_column:
        fields.append('role')

    queryset = GroupMembership.objects.filter(
        group_id=group_id,
        user_id=user_id,
        group__deleted_at__isnull=True,
    )
    if lock:
        queryset = queryset.select_for_update()

    row = queryset.values(*fields).first()
    if row is None:
        return None

    is_creator = row['group__created_by_id'] is not None and str(row['group__created_by_id']) == str(user_id)
    return MembershipContext(
        membership_id=row['id'],
        group_id=row['group_id'],
        user_id=row['user_id'],
        role=normalize_role(row.get('role'), is_creator=is_creator),
        group_name=row['group__name'],
        group_created_by_id=row['group__created_by_id'],
        joined_at=row['joined_at'],
    )


def get_request_membership(request, group_id) -> Optional[MembershipContext]:
    """
    Resolve the authenticated user's membership once per request.

    Guards and handlers of the same request share the result.
    """
    cache = getattr(request, REQUEST_CACHE_ATTR, None)
    if cache is None:
        cache = {}
        setattr(request, REQUEST_CACHE_ATTR, cache)

    key = (str(group_id), str(request.user.pk))
    if key not in cache:
        cache[key] = resolve_membership(group_id=group_id, user_id=request.user.pk)
    return cache[key]
