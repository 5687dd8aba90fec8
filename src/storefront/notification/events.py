"""Domain events for the Notification aggregate."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Notification")
class NotificationCreated:
    notification_id = Identifier(required=True)
    user_id = Identifier(required=True)
    title = String(required=True)
    created_at = DateTime(required=True)


@storefront.event(part_of="Notification")
class NotificationRead:
    notification_id = Identifier(required=True)
    user_id = Identifier(required=True)
    read_at = DateTime(required=True)
