"""
Notifications app services layer.

Dispatch helpers insert notifications (directly or after commit); inbox
helpers serve the current user's notifications.
"""

from .exceptions import NotificationNotFoundError

from .dispatch import (
    NotificationDraft,
    insert_notifications,
    queue_notifications,
    user_allows_preference,
    get_group_recipient_user_ids,
    insert_notification_for_user_if_preferred,
    notify_group,
    queue_group_notification,
)

from .vote_reminders import (
    get_pending_voter_ids,
    send_vote_reminders,
)

from .inbox import (
    get_user_notifications,
    get_unread_count,
    mark_notification_read,
    mark_all_read,
)


__all__ = [
    'NotificationNotFoundError',

    # Dispatch
    'NotificationDraft',
    'insert_notifications',
    'queue_notifications',
    'user_allows_preference',
    'get_group_recipient_user_ids',
    'insert_notification_for_user_if_preferred',
    'notify_group',
    'queue_group_notification',

    # Vote reminders
    'get_pending_voter_ids',
    'send_vote_reminders',

    # Inbox
    'get_user_notifications',
    'get_unread_count',
    'mark_notification_read',
    'mark_all_read',
]
