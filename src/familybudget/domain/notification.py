"""Notification domain service."""

import logging

from familybudget.database.base import Database
from familybudget.domain import errors
from familybudget.domain.entities import Notification, NotificationUpdate, User
from familybudget.domain.errors import NotFoundError, PermissionDeniedError
from familybudget.domain.rules import require_text

logger = logging.getLogger(__name__)


class NotificationService:
    """Service for creating and reading user notifications."""

    def __init__(self, db: Database):
        """Initialize notification service.

        Args:
            db: Database instance
        """
        self.db = db

    def notify(self, user_id: int, title: str, message: str) -> Notification:
        """Send a notification to a user (system events).

        Raises:
            ValidationError: If title or message is empty
        """
        notification = self.db.create_notification(
            title=require_text(title, "Title"),
            message=require_text(message, "Message"),
            user_id=user_id,
            is_read=False,
        )
        logger.debug("notified user %d: %s", user_id, notification.title)
        return notification

    def list_notifications(self, actor: User) -> list[Notification]:
        """List the actor's notifications, most recent first."""
        return self.db.get_notifications(actor.id)

    def list_unread(self, actor: User) -> list[Notification]:
        """List the actor's unread notifications, most recent first."""
        return self.db.get_unread_notifications(actor.id)

    def mark_read(self, actor: User, notification_id: int) -> Notification:
        """Mark one of the actor's notifications as read."""
        self._get_own(actor, notification_id)
        return self.db.mark_notification_as_read(notification_id)

    def mark_unread(self, actor: User, notification_id: int) -> Notification:
        """Mark one of the actor's notifications as unread again."""
        self._get_own(actor, notification_id)
        return self.db.update_notification(notification_id, NotificationUpdate(is_read=False))

    def _get_own(self, actor: User, notification_id: int) -> Notification:
        notification = self.db.get_notification(notification_id)
        if notification is None:
            raise NotFoundError(errors.not_found("Notification", notification_id))
        if notification.user_id != actor.id:
            raise PermissionDeniedError(
                f"Access denied: notification {notification_id} belongs to another user"
            )
        return notification
