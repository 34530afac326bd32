"""
Error kinds shared by every app.

Service functions raise these (or app-specific subclasses of them) and the
API exception handler turns them into the JSON error envelope.

Exception Hierarchy:
    ServiceError (base, 400)
    ├── InvalidInputError (400)
    ├── ForbiddenError (403)
    ├── NotFoundError (404)
    ├── ConflictError (400)
    │   └── LockedError (423)
    └── SchemaUnavailableError (500)

Usage:
    from apps.core.exceptions import ForbiddenError

    if not membership:
        raise ForbiddenError("Not a member of this group")
"""
from rest_framework.exceptions import APIException


class ServiceError(APIException):
    """Base exception for business rule violations."""
    status_code = 400
    default_detail = 'The request could not be processed.'
    default_code = 'service_error'


class InvalidInputError(ServiceError):
    """Malformed or missing input, bad role name, bad date ordering."""
    status_code = 400
    default_detail = 'Invalid input.'
    default_code = 'invalid_input'


class ForbiddenError(ServiceError):
    """Caller is not allowed to perform the action."""
    status_code = 403
    default_detail = 'You do not have permission to perform this action.'
    default_code = 'forbidden'


class NotFoundError(ServiceError):
    """Referenced resource does not exist or is not visible to the caller."""
    status_code = 404
    default_detail = 'Not found.'
    default_code = 'not_found'


class ConflictError(ServiceError):
    """Request conflicts with the current state (already a member, already friends)."""
    status_code = 400
    default_detail = 'The request conflicts with the current state.'
    default_code = 'conflict'


class LockedError(ConflictError):
    """Resource is locked against the requested change."""
    status_code = 423
    default_detail = 'Resource is locked.'
    default_code = 'locked'


class SchemaUnavailableError(ServiceError):
    """
    The database lacks a table or column the requested feature needs.

    The message always says the feature "requires the latest database
    migration" so operators can tell it apart from a crash.
    """
    status_code = 500
    default_detail = 'This feature requires the latest database migration.'
    default_code = 'schema_unavailable'
