"""Notification inbox: read-side helpers and the mark-as-read commands."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.errors import NotFoundError
from storefront.notification.notification import Notification


@storefront.command(part_of="Notification")
class MarkNotificationRead:
    user_id = Identifier(required=True)
    notification_id = Identifier(required=True)


@storefront.command(part_of="Notification")
class MarkAllNotificationsRead:
    user_id = Identifier(required=True)


@storefront.command_handler(part_of=Notification)
class InboxHandler:
    @handle(MarkNotificationRead)
    def mark_read(self, command):
        repo = current_domain.repository_for(Notification)
        notification = repo.get(command.notification_id)
        if str(notification.user_id) != str(command.user_id):
            raise NotFoundError({"notification_id": [f"Notification {command.notification_id} does not exist"]})
        notification.mark_read()
        repo.add(notification)

    @handle(MarkAllNotificationsRead)
    def mark_all_read(self, command):
        repo = current_domain.repository_for(Notification)
        unread = repo.unread_for_user(command.user_id)
        for notification in unread:
            notification.mark_read()
            repo.add(notification)
        return len(unread)


def list_notifications(user_id) -> list[dict]:
    return [n.to_dict() for n in current_domain.repository_for(Notification).for_user(user_id)]


def unread_count(user_id) -> int:
    return len(current_domain.repository_for(Notification).unread_for_user(user_id))
