"""
Groups app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and row locks.
"""

from .exceptions import (
    GroupNotFoundError,
    UserNotFoundError,
    InvalidGroupNameError,
    InvalidRoleError,
    AlreadyMemberError,
    NotMemberError,
    MemberNotFoundError,
    InsufficientPermissionsError,
    CannotTargetSelfError,
    CannotRemoveOwnerError,
    CannotChangeOwnerRoleError,
    OwnerCannotLeaveError,
)

from .roles import (
    rank,
    has_minimum_role,
    parse_role,
    normalize_role,
)

from .membership_context import (
    MembershipContext,
    resolve_membership,
    get_request_membership,
)

from .group_management import (
    create_group,
    get_user_groups,
    effective_role_for,
    get_group_for_member,
    delete_group,
)

from .membership_management import (
    add_member,
    remove_member,
    leave_group,
    get_group_members,
    get_member_role,
)

from .role_management import (
    RoleChangeResult,
    change_member_role,
)


__all__ = [
    # Exceptions
    'GroupNotFoundError',
    'UserNotFoundError',
    'InvalidGroupNameError',
    'InvalidRoleError',
    'AlreadyMemberError',
    'NotMemberError',
    'MemberNotFoundError',
    'InsufficientPermissionsError',
    'CannotTargetSelfError',
    'CannotRemoveOwnerError',
    'CannotChangeOwnerRoleError',
    'OwnerCannotLeaveError',

    # Roles
    'rank',
    'has_minimum_role',
    'parse_role',
    'normalize_role',

    # Membership resolution
    'MembershipContext',
    'resolve_membership',
    'get_request_membership',

    # Group management
    'create_group',
    'get_user_groups',
    'effective_role_for',
    'get_group_for_member',
    'delete_group',

    # Membership management
    'add_member',
    'remove_member',
    'leave_group',
    'get_group_members',
    'get_member_role',

    # Role management
    'RoleChangeResult',
    'change_member_role',
]
