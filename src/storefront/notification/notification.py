"""Notification aggregate (CQRS): one message in a user's inbox.

Created by the admin side when an order changes status; read by the
customer's inbox screen, which flips the read flag.
"""

from datetime import UTC, datetime

from protean.fields import Boolean, DateTime, Identifier, String, Text

from storefront.domain import storefront
from storefront.notification.events import NotificationCreated, NotificationRead


@storefront.aggregate
class Notification:
    user_id = Identifier(required=True)
    title = String(required=True, max_length=200)
    message = Text(required=True)
    read = Boolean(default=False)
    created_at = DateTime()
    read_at = DateTime()

    @classmethod
    def create(cls, user_id, title, message):
        now = datetime.now(UTC)
        notification = cls(user_id=user_id, title=title, message=message, read=False, created_at=now)
        notification.raise_(
            NotificationCreated(
                notification_id=str(notification.id),
                user_id=str(user_id),
                title=title,
                created_at=now,
            )
        )
        return notification

    def mark_read(self):
        """Mark as read. Already-read notifications are left alone."""
        if self.read:
            return
        now = datetime.now(UTC)
        self.read = True
        self.read_at = now
        self.raise_(
            NotificationRead(
                notification_id=str(self.id),
                user_id=str(self.user_id),
                read_at=now,
            )
        )
