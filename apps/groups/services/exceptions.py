"""
Domain-specific exceptions for groups app.

Each exception is one of the shared error kinds, so views can let them
propagate to the API exception handler.
"""

from apps.core.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
)


class GroupNotFoundError(NotFoundError):
    """Raised when a group does not exist, is deleted or is inaccessible."""
    default_detail = 'Group not found.'


class UserNotFoundError(NotFoundError):
    """Raised when the user to add does not exist or is deleted."""
    default_detail = 'User not found.'


class InvalidGroupNameError(InvalidInputError):
    """Raised when a group name is blank or too long."""
    default_detail = 'Group name is required.'


class InvalidRoleError(InvalidInputError):
    """Raised when a role name is not member, moderator or owner."""
    default_detail = 'Invalid role.'


class AlreadyMemberError(ConflictError):
    """Raised when adding a user who is already in the group."""
    default_detail = 'User is already a member.'


class NotMemberError(ForbiddenError):
    """Raised when the requester is not a member of the group."""
    default_detail = 'Not a member of this group.'


class MemberNotFoundError(NotFoundError):
    """Raised when the target user is not a member of the group."""
    default_detail = 'Member not found.'


class InsufficientPermissionsError(ForbiddenError):
    """Raised when a user lacks the role required for an action."""
    default_detail = 'You do not have permission to perform this action.'


class CannotTargetSelfError(ForbiddenError):
    """Raised when a requester tries to remove or demote themself."""
    default_detail = 'You cannot perform this action on yourself.'


class CannotRemoveOwnerError(ForbiddenError):
    """Raised when attempting to remove the group owner."""
    default_detail = 'Cannot remove the group owner. Transfer ownership first.'


class CannotChangeOwnerRoleError(ForbiddenError):
    """Raised when attempting to change the owner's role directly."""
    default_detail = "Cannot change the owner's role. Transfer ownership first."


class OwnerCannotLeaveError(ForbiddenError):
    """Raised when a group owner tries to leave their group."""
    default_detail = 'Group owner cannot leave. Transfer ownership first.'
