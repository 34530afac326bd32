"""
Database schema capability detection.

Older installations were created before some columns and tables existed
(membership roles, the activity log, RSVP reminder fields, notification
preferences). Instead of catching "unknown column" errors on every query, the
schema is inspected once per process and the result is cached. Code paths that
can degrade read the capabilities; code paths that cannot call
``require_capability`` and fail with a clear SchemaUnavailableError.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Optional

from django.db import DEFAULT_DB_ALIAS, DatabaseError, connections

from .exceptions import SchemaUnavailableError

logger = logging.getLogger(__name__)


# Error codes that mean "the table/column referenced does not exist".
MYSQL_MISSING_SCHEMA_CODES = {1054, 1146}
POSTGRES_MISSING_SCHEMA_CODES = {'42703', '42P01'}
SQLITE_MISSING_SCHEMA_MARKERS = ('no such table', 'no such column', 'has no column named')


class SchemaVersion(enum.Enum):
    LEGACY = 'legacy'
    CURRENT = 'current'


@dataclass(frozen=True)
class SchemaCapabilities:
    membership_roles: bool = True
    activity_log: bool = True
    rsvp_reminders: bool = True
    notification_preferences: bool = True

    @property
    def version(self) -> SchemaVersion:
        if all((
            self.membership_roles,
            self.activity_log,
            self.rsvp_reminders,
            self.notification_preferences,
        )):
            return SchemaVersion.CURRENT
        return SchemaVersion.LEGACY

    def has(self, name: str) -> bool:
        return bool(getattr(self, name))


_capabilities: Optional[SchemaCapabilities] = None


def _table_columns(cursor, introspection, table: str) -> set:
    return {column.name for column in introspection.get_table_description(cursor, table)}


def detect_schema(using: str = DEFAULT_DB_ALIAS) -> SchemaCapabilities:
    """Inspect the live database and report which optional features it supports."""
    from apps.accounts.models import User
    from apps.activity.models import GroupActivity
    from apps.groups.models import GroupMembership
    from apps.movie_nights.models import MovieNight

    connection = connections[using]
    introspection = connection.introspection

    with connection.cursor() as cursor:
        tables = set(introspection.table_names(cursor))

        def columns(model) -> set:
            table = model._meta.db_table
            if table not in tables:
                return set()
            return _table_columns(cursor, introspection, table)

        membership_columns = columns(GroupMembership)
        night_columns = columns(MovieNight)
        user_columns = columns(User)

    capabilities = SchemaCapabilities(
        membership_roles='role' in membership_columns,
        activity_log=GroupActivity._meta.db_table in tables,
        rsvp_reminders={'rsvp_deadline', 'reminder_minutes_before', 'reminder_sent_at'} <= night_columns,
        notification_preferences={
            'email_notifications', 'group_notifications', 'vote_notifications'
        } <= user_columns,
    )
    if capabilities.version is SchemaVersion.LEGACY:
        logger.warning('Database schema is behind the current migrations: %s', capabilities)
    return capabilities


def get_schema_capabilities() -> SchemaCapabilities:
    """Return the cached capabilities, inspecting the database on first use."""
    global _capabilities
    if _capabilities is None:
        _capabilities = detect_schema()
    return _capabilities


def set_schema_capabilities(capabilities: Optional[SchemaCapabilities]) -> None:
    """Override (or with None, forget) the cached capabilities."""
    global _capabilities
    _capabilities = capabilities


def reset_schema_capabilities() -> None:
    set_schema_capabilities(None)


def require_capability(name: str, feature: str) -> None:
    """Raise SchemaUnavailableError when the database lacks ``name``."""
    if not get_schema_capabilities().has(name):
        raise SchemaUnavailableError(f"{feature} requires the latest database migration")


def is_missing_schema_error(exc: BaseException) -> bool:
    """
    Tell an "unknown table/column" database error apart from other failures.

    Django wraps driver errors, so the driver exception is looked up on
    ``__cause__`` before reading its error code.
    """
    if not isinstance(exc, DatabaseError):
        return False

    original = exc.__cause__ or exc

    pgcode = getattr(original, 'pgcode', None) or getattr(getattr(original, 'diag', None), 'sqlstate', None)
    if pgcode in POSTGRES_MISSING_SCHEMA_CODES:
        return True

    args = getattr(original, 'args', ())
    if args and isinstance(args[0], int) and args[0] in MYSQL_MISSING_SCHEMA_CODES:
        return True

    message = str(original).lower()
    return any(marker in message for marker in SQLITE_MISSING_SCHEMA_MARKERS)
