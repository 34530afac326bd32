"""
Role model.

Roles form a total order member < moderator < owner. Business logic only
handles ``GroupRole`` values; raw strings are parsed at the boundary.
"""

from typing import Optional

from apps.groups.models import GroupRole

from .exceptions import InvalidRoleError


ROLE_RANKS = {
    GroupRole.MEMBER: 1,
    GroupRole.MODERATOR: 2,
    GroupRole.OWNER: 3,
}


def rank(role: GroupRole) -> int:
    """Comparable rank of a role (member=1, moderator=2, owner=3)."""
    return ROLE_RANKS[GroupRole(role)]


def has_minimum_role(actual: GroupRole, required: GroupRole) -> bool:
    return rank(actual) >= rank(required)


def parse_role(value) -> GroupRole:
    """
    Convert client input into a GroupRole.

    Raises:
        InvalidRoleError: If value is not one of member, moderator, owner
    """
    try:
        return GroupRole(str(value).strip().lower())
    except ValueError:
        valid = ', '.join(GroupRole.values)
        raise InvalidRoleError(f"Invalid role '{value}'. Must be one of: {valid}")


def normalize_role(stored_value: Optional[str], is_creator: bool) -> GroupRole:
    """
    Map a stored role to a GroupRole.

    Databases created before roles existed have no role column, so the value
    is missing. The group's creator is then treated as owner and everyone
    else as member.
    """
    if stored_value in GroupRole.values:
        return GroupRole(stored_value)
    return GroupRole.OWNER if is_creator else GroupRole.MEMBER
