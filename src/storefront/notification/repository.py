from datetime import UTC, datetime

from storefront.domain import storefront
from storefront.notification.notification import Notification

_EPOCH = datetime.min.replace(tzinfo=UTC)


@storefront.repository(part_of=Notification)
class NotificationRepository:
    def for_user(self, user_id) -> list[Notification]:
        """The user's notifications, newest first."""
        notifications = self._dao.query.filter(user_id=str(user_id)).all().items
        return sorted(notifications, key=lambda n: n.created_at or _EPOCH, reverse=True)

    def unread_for_user(self, user_id) -> list[Notification]:
        return [n for n in self.for_user(user_id) if not n.read]
