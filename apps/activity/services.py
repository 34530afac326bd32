"""
Activity recorder.

Every mutating group action appends one GroupActivity row. Recording is
best-effort: callers queue it with ``queue_activity`` so it runs after the
business transaction commits, and a database without the activity table
only produces a warning.
"""

import json
import logging
from functools import partial
from typing import Any, Optional
from uuid import UUID

from django.core.serializers.json import DjangoJSONEncoder
from django.db import DatabaseError, transaction
from django.db.models import QuerySet

from apps.core.exceptions import InvalidInputError
from apps.core.schema import get_schema_capabilities, is_missing_schema_error, require_capability

from .models import ActivityEvent, GroupActivity

logger = logging.getLogger(__name__)


def parse_activity_metadata(raw_value: Any) -> Optional[dict]:
    """Decode stored metadata; corrupt values read as None instead of raising."""
    if raw_value is None or raw_value == '':
        return None
    if isinstance(raw_value, dict):
        return raw_value
    try:
        value = json.loads(raw_value)
    except (TypeError, ValueError):
        return None
    return value if isinstance(value, dict) else None


def record_activity(
    *,
    group_id: UUID,
    event_type: str,
    actor_id: Optional[UUID] = None,
    target_user_id: Optional[UUID] = None,
    reference_id: Optional[UUID] = None,
    metadata: Optional[dict] = None
) -> Optional[GroupActivity]:
    """
    Append one activity event.

    Returns:
        The created GroupActivity, or None when nothing was recorded
        (missing group/event type, or no activity table in the database)

    Raises:
        DatabaseError: For any failure other than a missing activity schema
    """
    if not group_id or not event_type:
        return None

    if not get_schema_capabilities().activity_log:
        logger.warning(
            'Group activity schema unavailable; skipping %s for group %s', event_type, group_id
        )
        return None

    metadata_json = json.dumps(metadata, cls=DjangoJSONEncoder) if metadata else None

    try:
        with transaction.atomic():
            return GroupActivity.objects.create(
                group_id=group_id,
                actor_id=actor_id,
                target_user_id=target_user_id,
                event_type=event_type,
                reference_id=reference_id,
                metadata_json=metadata_json,
            )
    except DatabaseError as exc:
        if is_missing_schema_error(exc):
            logger.warning(
                'Group activity schema unavailable; skipping %s for group %s', event_type, group_id
            )
            return None
        raise


def queue_activity(**activity) -> None:
    """
    Record an activity event once the current transaction commits.

    Runs immediately when called outside a transaction. Failures are logged
    by Django and never reach the caller.
    """
    transaction.on_commit(partial(record_activity, **activity), robust=True)


def get_group_timeline(
    *,
    group_id: UUID,
    event_type: Optional[str] = None,
    actor_id: Optional[UUID] = None
) -> QuerySet[GroupActivity]:
    """
    Get a group's activity, newest first.

    Raises:
        InvalidInputError: If event_type is not a known event
        SchemaUnavailableError: If the database has no activity table
    """
    require_capability('activity_log', 'Group activity timeline')

    queryset = (
        GroupActivity.objects
        .filter(group_id=group_id)
        .select_related('actor', 'target_user')
    )

    if event_type:
        if event_type not in ActivityEvent.values:
            raise InvalidInputError(f"Unknown event type '{event_type}'")
        queryset = queryset.filter(event_type=event_type)

    if actor_id:
        queryset = queryset.filter(actor_id=actor_id)

    return queryset.order_by('-created_at')
