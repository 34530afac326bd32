from apps.core.exceptions import NotFoundError


class NotificationNotFoundError(NotFoundError):
    """Raised when a notification does not exist or belongs to another user."""
    default_detail = 'Notification not found.'
