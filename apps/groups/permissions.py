"""
Group access guards.

``require_membership`` and ``require_role`` build DRF permission classes
that resolve the caller's membership from a URL kwarg. The resolved
MembershipContext is stored on ``request.membership`` for the view.
"""

from rest_framework import permissions

from apps.groups.models import GroupRole

from .services.membership_context import get_request_membership
from .services.roles import has_minimum_role


NOT_A_MEMBER_MESSAGE = 'Not a member of this group'


class IsGroupMember(permissions.BasePermission):
    """
    Permission: User must be a member of the group named by ``group_param``.
    """

    group_param = 'pk'
    minimum_role = None
    message = NOT_A_MEMBER_MESSAGE

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False

        group_id = view.kwargs.get(self.group_param)
        if group_id is None:
            return False

        membership = get_request_membership(request, group_id)
        if membership is None:
            self.message = NOT_A_MEMBER_MESSAGE
            return False

        if self.minimum_role is not None and not has_minimum_role(membership.role, self.minimum_role):
            self.message = f'Requires {self.minimum_role.value} role or higher'
            return False

        request.membership = membership
        return True


def require_membership(group_param='pk'):
    """Permission class requiring membership in the group from ``group_param``."""
    return type(
        'RequireMembership',
        (IsGroupMember,),
        {'group_param': group_param},
    )


def require_role(minimum_role, group_param='pk'):
    """Permission class requiring at least ``minimum_role`` in the group."""
    minimum_role = GroupRole(minimum_role)
    return type(
        f'Require{minimum_role.label}Role',
        (IsGroupMember,),
        {'group_param': group_param, 'minimum_role': minimum_role},
    )
